#!/usr/bin/env python3
# ======================================================================
#  Config Service - Static configuration loading and caching
#  - Loads config from defaults, YAML files and env vars
#  - Parses every value with the same parsers central config uses
#  - Caches the composed StaticConfig; reload() recomposes
# ======================================================================

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from typing import Any

import yaml

from centralconf.components.config.dynamic_options_comp import spec_for_field
from centralconf.components.config.option_parsers_comp import parse_bool, parse_string
from centralconf.helpers.dto.config_dto import STATIC_CONFIG_FIELDS, StaticConfig
from centralconf.helpers.exceptions import OptionParseError

logger = logging.getLogger(__name__)

# ======================================================================
# Internal Constants (Not User-Configurable)
# ======================================================================

ENV_PREFIX = "CENTRALCONF_"
ENV_CONFIG_PATH = "CENTRALCONF_CONFIG_PATH"
SYSTEM_CONFIG_PATH = "/etc/centralconf/config.yaml"

# Status API
INTERNAL_HOST = "127.0.0.1"
INTERNAL_PORT = 8357


def _parse_optional_string(key: str, raw: str) -> str | None:
    value = raw.strip()
    return value or None


# Parsers for fields central configuration never changes
_STATIC_PARSERS: dict[str, Callable[[str, str], Any]] = {
    "server_url": parse_string,
    "service_name": _parse_optional_string,
    "service_version": _parse_optional_string,
    "environment": _parse_optional_string,
    "secret_token": _parse_optional_string,
    "api_key": _parse_optional_string,
    "verify_server_cert": parse_bool,
    "central_config": parse_bool,
}


class ConfigService:
    """
    Service for loading and caching the static configuration.

    Composes configuration from multiple sources (defaults → YAML → env) into
    an immutable StaticConfig. The result is the bottom layer of every
    LayeredSnapshot and is never mutated afterwards.
    """

    def __init__(
        self,
        overrides: Mapping[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """
        Args:
            overrides: Explicit values applied after YAML files, before env vars
            environ: Environment mapping (defaults to os.environ)
        """
        self._overrides = dict(overrides or {})
        self._environ = environ if environ is not None else os.environ
        self._config: StaticConfig | None = None

    def get_config(self, force_reload: bool = False) -> StaticConfig:
        """
        Get the composed static configuration.

        Args:
            force_reload: If True, bypass cache and reload from sources
        """
        if self._config is None or force_reload:
            self._config = self._compose()
        return self._config

    def reload(self) -> StaticConfig:
        """Force reload configuration from all sources."""
        logger.info("[ConfigService] Reloading configuration from all sources")
        return self.get_config(force_reload=True)

    # ----------------------------------------------------------------------
    # Private composition logic
    # ----------------------------------------------------------------------

    def _compose(self) -> StaticConfig:
        """
        Load final configuration from:
          1) Built-in defaults (StaticConfig field defaults)
          2) /etc/centralconf/config.yaml (if present)
          3) ./config/config.yaml (if present)
          4) $CENTRALCONF_CONFIG_PATH (if set)
          5) overrides passed to the constructor
          6) Environment variables (CENTRALCONF_<FIELD>)
        """
        raw: dict[str, Any] = {}
        sources = ["defaults"]

        for path in (SYSTEM_CONFIG_PATH, os.path.join(os.getcwd(), "config", "config.yaml")):
            data = self._load_yaml(path)
            if data:
                raw.update(data)
                sources.append(path)

        env_path = self._environ.get(ENV_CONFIG_PATH)
        if env_path:
            raw.update(self._load_yaml(env_path))
            sources.append(env_path)

        if self._overrides:
            raw.update(self._overrides)
            sources.append("overrides")

        env_values = self._env_overrides()
        if env_values:
            raw.update(env_values)
            sources.append("environment")

        values = self._parse_values(raw)
        config = StaticConfig(**values)
        logger.debug(f"[ConfigService] Composed configuration from {', '.join(sources)}")
        return config

    def _load_yaml(self, path: str) -> dict[str, Any]:
        """
        Load a YAML file; returns {} if not found or invalid.
        """
        if not path or not os.path.exists(path):
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"[ConfigService] Failed to read {path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"[ConfigService] Ignoring {path}: top level must be a mapping")
            return {}
        return data

    def _env_overrides(self) -> dict[str, str]:
        """
        Collect CENTRALCONF_<FIELD> environment variables.

        Examples:
          CENTRALCONF_SERVER_URL=http://apm:8200
          CENTRALCONF_SERVICE_NAME=checkout
          CENTRALCONF_TRANSACTION_SAMPLE_RATE=0.5
          CENTRALCONF_SANITIZE_FIELD_NAMES=password,*token*
        """
        found: dict[str, str] = {}
        for name in STATIC_CONFIG_FIELDS:
            value = self._environ.get(f"{ENV_PREFIX}{name.upper()}")
            if value is not None:
                found[name] = value
        return found

    def _parse_values(self, raw: Mapping[str, Any]) -> dict[str, Any]:
        """Parse raw values into typed StaticConfig keyword arguments."""
        parsed: dict[str, Any] = {}
        for key, value in raw.items():
            if key not in STATIC_CONFIG_FIELDS:
                logger.debug(f"[ConfigService] Ignoring unknown configuration key: {key}")
                continue

            text = _to_raw_string(value)
            if text is None:
                # Explicit null keeps the default
                continue

            try:
                parsed[key] = self._parser_for(key)(key, text)
            except OptionParseError as e:
                logger.warning(f"[ConfigService] {e} - keeping default")
        return parsed

    def _parser_for(self, name: str) -> Callable[[str, str], Any]:
        spec = spec_for_field(name)
        if spec is not None:
            return spec.parser
        return _STATIC_PARSERS[name]


def _to_raw_string(value: Any) -> str | None:
    """YAML scalars and lists to the raw string grammar the parsers accept."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)

