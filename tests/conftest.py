"""Global test fixtures."""

import os
from unittest.mock import AsyncMock

import httpx
import pytest

from fbauth.config import FacebookConfig

# Developer settings must not leak into tests.
# This must happen at module load time, before any test module builds a Config.
for _name in [n for n in os.environ if n.startswith("FBAUTH_")]:
    del os.environ[_name]


@pytest.fixture
def facebook_config() -> FacebookConfig:
    """Complete Facebook configuration without optional fields."""
    return FacebookConfig(
        client_id="app-id",
        client_secret="app-secret",
        redirect_uri="https://app.test/api/v1/auth/facebook",
        state="st4te",
    )


@pytest.fixture
def http_client() -> AsyncMock:
    """Mock of the shared httpx client; set ``get.side_effect`` per test."""
    return AsyncMock(spec=httpx.AsyncClient)
