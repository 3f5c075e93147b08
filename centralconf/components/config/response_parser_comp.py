"""
Central configuration response parser.

Turns one HTTP response into:
- (ConfigurationDelta, WaitInfo) for a 2xx with a valid payload
- (None, WaitInfo) for 304 Not Modified
- FailedToFetchConfigError(message, wait_info, severity) otherwise

The wait interval is computed from Cache-Control before the status is looked
at, so every outcome (including failures) carries one.

Cache lifetime rules (max-age in seconds):
- absent / unparsable  -> DEFAULT_WAIT_S
- <= 0                 -> DEFAULT_WAIT_S (invalid value)
- 0 < max-age < 5      -> MIN_WAIT_S
- >= 5                 -> max-age
"""

from __future__ import annotations

import json
import logging
from typing import Any

from centralconf.components.config.dynamic_options_comp import spec_for_key
from centralconf.helpers.dto.central_config_dto import ConfigurationDelta, DynamicOption, HttpResponseData, WaitInfo
from centralconf.helpers.exceptions import FailedToFetchConfigError, OptionParseError
from centralconf.helpers.time_helper import format_interval

logger = logging.getLogger(__name__)

DEFAULT_WAIT_S = 5 * 60
MIN_WAIT_S = 5

_MAX_BODY_IN_MESSAGE = 200


class ResponseParser:
    """Stateless parser for central configuration responses."""

    def parse(self, response: HttpResponseData) -> tuple[ConfigurationDelta | None, WaitInfo]:
        """
        Parse a central configuration response.

        Args:
            response: Status, headers and body of the HTTP response

        Returns:
            (delta, wait_info); delta is None when the server answered 304

        Raises:
            FailedToFetchConfigError: On any non-2xx/304 status or protocol violation
        """
        wait_info = self.extract_wait_info(response)

        if response.status_code == 304:
            logger.debug(f"[ResponseParser] Configuration not modified ({response.describe()})")
            return None, wait_info

        if not response.is_success:
            self._raise_for_status(response, wait_info)

        etag = response.header("ETag")
        if not etag:
            raise FailedToFetchConfigError(
                f"Response is successful but doesn't have the ETag header ({response.describe()})",
                wait_info,
            )

        payload = self._load_payload(response, wait_info)
        return self._build_delta(payload, etag), wait_info

    def extract_wait_info(self, response: HttpResponseData) -> WaitInfo:
        """Compute how long to wait before the next request from Cache-Control."""
        max_age = _parse_max_age(response.header("Cache-Control"))

        if max_age is None:
            return WaitInfo(
                DEFAULT_WAIT_S,
                f"no usable cache lifetime (Cache-Control max-age) in response - "
                f"using default ({format_interval(DEFAULT_WAIT_S)})",
            )
        if max_age <= 0:
            return WaitInfo(
                DEFAULT_WAIT_S,
                f"Cache-Control max-age={max_age} is zero or negative which is invalid - "
                f"falling back to default ({format_interval(DEFAULT_WAIT_S)})",
            )
        if max_age < MIN_WAIT_S:
            return WaitInfo(
                MIN_WAIT_S,
                f"Cache-Control max-age={max_age} is below the minimum - "
                f"using minimum ({format_interval(MIN_WAIT_S)})",
            )
        return WaitInfo(float(max_age), f"server-directed cache lifetime (Cache-Control max-age={max_age})")

    # ---------------------------- Internals ----------------------------------

    def _raise_for_status(self, response: HttpResponseData, wait_info: WaitInfo) -> None:
        status = response.status_code
        if status == 400:
            message = "Server rejected the central configuration request as unexpected"
            severity = logging.ERROR
        elif status == 403:
            message = "Server supports the central configuration endpoint but it is not enabled on the server side"
            severity = logging.DEBUG
        elif status == 404:
            message = "Server does not support the central configuration endpoint"
            severity = logging.DEBUG
        elif status == 503:
            message = "Central configuration source is unavailable on the server side"
            severity = logging.ERROR
        else:
            message = "Central configuration request failed"
            severity = logging.ERROR

        details = response.describe()
        body = (response.body or "").strip()
        if body and severity >= logging.ERROR:
            details += f", body: {body[:_MAX_BODY_IN_MESSAGE]}"
        raise FailedToFetchConfigError(f"{message} ({details})", wait_info, severity)

    def _load_payload(self, response: HttpResponseData, wait_info: WaitInfo) -> dict[str, str]:
        body = response.body
        if body is None or not body.strip():
            raise FailedToFetchConfigError(f"Response body is empty ({response.describe()})", wait_info)

        try:
            document = json.loads(body)
        except ValueError as e:
            raise FailedToFetchConfigError(f"Response body is not valid JSON: {e}", wait_info) from e

        if not isinstance(document, dict):
            raise FailedToFetchConfigError(
                f"Response body must be a JSON object, got {type(document).__name__}", wait_info
            )

        payload: dict[str, str] = {}
        for key, value in document.items():
            if value is None:
                logger.warning(f"[ResponseParser] Ignoring central configuration value: `{key}' is null")
                continue
            text = _to_raw_string(value)
            if text is None:
                raise FailedToFetchConfigError(
                    f"Value of `{key}' must be a string, number, boolean or null, got {type(value).__name__}",
                    wait_info,
                )
            payload[key] = text
        return payload

    def _build_delta(self, payload: dict[str, str], etag: str) -> ConfigurationDelta:
        values: dict[DynamicOption, Any] = {}
        unknown: list[str] = []

        for key, raw in payload.items():
            spec = spec_for_key(key)
            if spec is None:
                unknown.append(key)
                continue
            if key != spec.key and spec.key in payload:
                logger.debug(f"[ResponseParser] Ignoring legacy key `{key}', `{spec.key}' is also present")
                continue
            try:
                values[spec.option] = spec.parse(raw)
            except OptionParseError as e:
                logger.warning(f"[ResponseParser] Ignoring central configuration value: {e}")

        if unknown:
            logger.info(
                f"[ResponseParser] Central configuration contains unsupported keys, ignoring: {', '.join(sorted(unknown))}"
            )

        delta = ConfigurationDelta(values, etag)
        logger.debug(f"[ResponseParser] Parsed central configuration {delta}")
        return delta


def _parse_max_age(cache_control: str | None) -> int | None:
    """Return max-age from a Cache-Control header value, or None if absent or unparsable."""
    if not cache_control:
        return None
    for directive in cache_control.split(","):
        name, sep, value = directive.strip().partition("=")
        if name.strip().lower() != "max-age" or not sep:
            continue
        try:
            return int(value.strip().strip('"'))
        except ValueError:
            return None
    return None


def _to_raw_string(value: Any) -> str | None:
    """Raw wire string for a flat JSON value; None for nested values."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    return None
