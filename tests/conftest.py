"""
Pytest fixtures and configuration for the test suite.

Strategy:
- Real components and services wherever possible (they are cheap and pure)
- Mock only the HTTP transport boundary in unit tests
- Integration tests talk to an in-process http.server
"""

import sys
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

# Add project root to path so tests can import centralconf package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from centralconf.components.config.snapshot_comp import LayeredSnapshot  # noqa: E402
from centralconf.helpers.dto.central_config_dto import HttpResponseData  # noqa: E402
from centralconf.helpers.dto.config_dto import StaticConfig  # noqa: E402
from centralconf.helpers.logging_helper import clear_log_context  # noqa: E402
from centralconf.services.infrastructure.config_store_svc import ConfigStore  # noqa: E402

# === CONFIG FIXTURES ===


@pytest.fixture
def static_config() -> StaticConfig:
    """Static configuration pointing at a test server."""
    return StaticConfig(
        server_url="http://apm.test:8200",
        service_name="checkout",
        service_version="1.2.0",
        environment="prod",
    )


@pytest.fixture
def config_store(static_config: StaticConfig) -> Generator[ConfigStore, None, None]:
    """Real ConfigStore seeded with the static configuration."""
    store = ConfigStore(LayeredSnapshot(static_config))
    yield store
    store.close()


@pytest.fixture
def make_response() -> Callable[..., HttpResponseData]:
    """Factory for HttpResponseData with sensible defaults."""

    def _make(
        status_code: int = 200,
        body: str | None = "{}",
        etag: str | None = '"abc"',
        max_age: int | str | None = 60,
        headers: dict[str, str] | None = None,
    ) -> HttpResponseData:
        all_headers: dict[str, str] = {}
        if etag is not None:
            all_headers["ETag"] = etag
        if max_age is not None:
            all_headers["Cache-Control"] = f"max-age={max_age}"
        all_headers.update(headers or {})
        return HttpResponseData(status_code=status_code, headers=all_headers, body=body)

    return _make


@pytest.fixture(autouse=True)
def _clear_log_context() -> Generator[None, None, None]:
    """Log context is per-thread state; never leak it between tests."""
    yield
    clear_log_context()


# === PYTEST MARKERS ===


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as fast unit test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test (real HTTP server)")
