"""Unit tests for LayeredSnapshot resolution."""

from __future__ import annotations

from dataclasses import fields

import pytest

from centralconf.components.config.dynamic_options_comp import spec_for_field
from centralconf.components.config.snapshot_comp import LayeredSnapshot
from centralconf.helpers.dto.central_config_dto import ConfigurationDelta, DynamicOption
from centralconf.helpers.dto.config_dto import STATIC_CONFIG_FIELDS, StaticConfig
from centralconf.helpers.wildcard_helper import parse_matchers


@pytest.fixture
def delta() -> ConfigurationDelta:
    return ConfigurationDelta(
        {
            DynamicOption.TRANSACTION_SAMPLE_RATE: 0.25,
            DynamicOption.RECORDING: False,
            DynamicOption.TRANSACTION_IGNORE_URLS: parse_matchers(["/health*"]),
        },
        '"abc"',
    )


class TestResolution:
    @pytest.mark.unit
    def test_static_only(self, static_config: StaticConfig) -> None:
        snapshot = LayeredSnapshot(static_config)

        assert snapshot.transaction_sample_rate == 1.0
        assert snapshot.service_name == "checkout"
        assert snapshot.etag is None
        assert snapshot.description == "static configuration"

    @pytest.mark.unit
    def test_delta_wins_over_static(self, static_config: StaticConfig, delta: ConfigurationDelta) -> None:
        snapshot = LayeredSnapshot(static_config, delta)

        assert snapshot.transaction_sample_rate == 0.25
        assert snapshot.recording is False
        assert [str(m) for m in snapshot.transaction_ignore_urls] == ["/health*"]
        # Not in delta -> static value
        assert snapshot.capture_body == static_config.capture_body
        assert snapshot.server_url == static_config.server_url

    @pytest.mark.unit
    def test_every_field_resolves(self, static_config: StaticConfig, delta: ConfigurationDelta) -> None:
        snapshot = LayeredSnapshot(static_config, delta)

        for name in STATIC_CONFIG_FIELDS:
            spec = spec_for_field(name)
            if spec is not None and spec.option in delta:
                expected = delta.get(spec.option)
            else:
                expected = getattr(static_config, name)
            assert snapshot.resolve(name) == expected
            assert getattr(snapshot, name) == expected

    @pytest.mark.unit
    def test_description_and_etag(self, static_config: StaticConfig, delta: ConfigurationDelta) -> None:
        snapshot = LayeredSnapshot(static_config, delta)

        assert snapshot.description == 'static configuration + central (ETag: "abc")'
        assert snapshot.etag == '"abc"'

    @pytest.mark.unit
    def test_is_overridden(self, static_config: StaticConfig, delta: ConfigurationDelta) -> None:
        snapshot = LayeredSnapshot(static_config, delta)

        assert snapshot.is_overridden("recording")
        assert not snapshot.is_overridden("capture_body")
        assert not snapshot.is_overridden("server_url")
        assert not LayeredSnapshot(static_config).is_overridden("recording")

    @pytest.mark.unit
    def test_as_dict_in_field_order(self, static_config: StaticConfig, delta: ConfigurationDelta) -> None:
        values = LayeredSnapshot(static_config, delta).as_dict()

        assert list(values) == [f.name for f in fields(StaticConfig) if f.name != "description"]
        assert values["transaction_sample_rate"] == 0.25


class TestUnknownNames:
    @pytest.mark.unit
    def test_resolve_unknown_raises_key_error(self, static_config: StaticConfig) -> None:
        with pytest.raises(KeyError):
            LayeredSnapshot(static_config).resolve("no_such_field")

    @pytest.mark.unit
    def test_attribute_unknown_raises_attribute_error(self, static_config: StaticConfig) -> None:
        snapshot = LayeredSnapshot(static_config)

        with pytest.raises(AttributeError):
            _ = snapshot.no_such_field
        assert not hasattr(snapshot, "_private")

    @pytest.mark.unit
    def test_immutable(self, static_config: StaticConfig) -> None:
        snapshot = LayeredSnapshot(static_config)

        with pytest.raises(AttributeError):
            snapshot.delta = None  # type: ignore[misc]
