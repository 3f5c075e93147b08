"""
Configuration store service.

## Contract

ConfigStore OWNS:
- The single reference to the current LayeredSnapshot
- Registered update hooks (whole-snapshot and per-field)

ConfigStore GUARANTEES:
- `current` is a plain attribute read; readers never take a lock
- publish() is a reference swap; snapshots are never mutated in place
- Field hooks fire only when that field's effective value changed
- Hook exceptions are logged and never reach the publisher
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from centralconf.components.config.snapshot_comp import LayeredSnapshot
from centralconf.helpers.dto.config_dto import STATIC_CONFIG_FIELDS

logger = logging.getLogger(__name__)

SnapshotHook = Callable[[LayeredSnapshot, LayeredSnapshot], None]  # (old, new)
FieldHook = Callable[[object, object], None]  # (old value, new value)


class ConfigStore:
    """Single-writer, many-reader cell holding the current configuration snapshot."""

    def __init__(self, initial: LayeredSnapshot) -> None:
        self._current = initial
        self._write_lock = threading.Lock()
        self._hooks_lock = threading.Lock()
        self._update_hooks: list[SnapshotHook] = []
        self._field_hooks: dict[str, list[FieldHook]] = {}
        self._closed = False

    @property
    def current(self) -> LayeredSnapshot:
        """Latest published snapshot."""
        return self._current

    def publish(self, snapshot: LayeredSnapshot) -> None:
        """
        Replace the current snapshot and run update hooks.

        Args:
            snapshot: New snapshot (built from the same static configuration)
        """
        with self._write_lock:
            previous = self._current
            self._current = snapshot
            logger.info(f"[ConfigStore] Published configuration: {snapshot.description}")

            with self._hooks_lock:
                update_hooks = list(self._update_hooks)
                field_hooks = {name: list(hooks) for name, hooks in self._field_hooks.items()}

            for hook in update_hooks:
                self._run_hook(hook, previous, snapshot)

            for name, hooks in field_hooks.items():
                old_value = previous.resolve(name)
                new_value = snapshot.resolve(name)
                if old_value == new_value:
                    continue
                logger.debug(f"[ConfigStore] {name} changed: {old_value} -> {new_value}")
                for hook in hooks:
                    self._run_hook(hook, old_value, new_value)

    def add_update_hook(self, hook: SnapshotHook) -> None:
        """Register a callback receiving (old, new) snapshots on every publish."""
        with self._hooks_lock:
            self._update_hooks.append(hook)

    def add_field_hook(self, field_name: str, hook: FieldHook) -> None:
        """
        Register a callback receiving (old, new) values when `field_name` changes.

        Raises:
            KeyError: If `field_name` is not a configuration field
        """
        if field_name not in STATIC_CONFIG_FIELDS:
            raise KeyError(field_name)
        with self._hooks_lock:
            self._field_hooks.setdefault(field_name, []).append(hook)

    def close(self) -> None:
        """Drop all hooks. The last snapshot stays readable."""
        with self._hooks_lock:
            self._update_hooks.clear()
            self._field_hooks.clear()
            self._closed = True
        logger.debug("[ConfigStore] Closed")

    @property
    def closed(self) -> bool:
        return self._closed

    def _run_hook(self, hook: Callable[[object, object], None], old: object, new: object) -> None:
        try:
            hook(old, new)
        except Exception as e:
            logger.exception(f"[ConfigStore] Update hook {getattr(hook, '__name__', hook)!r} failed: {e}")
