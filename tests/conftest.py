"""Shared pytest fixtures, mock factories, and test markers.

Test tiers
----------
  unit        Fast, fully offline, zero external dependencies.

  integration Drive the CLI end to end against a mocked FHIR server
              (requests_mock). No real network calls.

  quality     Observation shape validation and property-based
              (Hypothesis) tests. Always run offline.

  live        Real POST to the public HAPI FHIR R4 server. Skipped unless
              FHIR_LIVE_TESTS is set. See tests/live/conftest.py.

Run specific tiers:
  pytest tests/unit tests/integration tests/quality   # offline only
  pytest tests/live -m live                           # live only
  pytest tests/ -v                                    # everything
"""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from fhir_temperature.models import ObservationRequest, UploaderConfig


OBSERVATION_URL = "https://hapi.fhir.org/baseR4/Observation"


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast offline unit tests")
    config.addinivalue_line("markers", "integration: mock-based integration tests")
    config.addinivalue_line("markers", "quality: schema and property-based tests")
    config.addinivalue_line("markers", "live: posts to the public HAPI FHIR server (skipped by default)")


# ---------------------------------------------------------------------------
# Observation fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 9, 14, 5, 7, tzinfo=timezone.utc)


@pytest.fixture
def sample_request(fixed_now: datetime) -> ObservationRequest:
    return ObservationRequest(temperature_celsius=36.5, effective_time=fixed_now)


@pytest.fixture
def default_config() -> UploaderConfig:
    return UploaderConfig()


# ---------------------------------------------------------------------------
# requests.Session mocks
# ---------------------------------------------------------------------------

def make_session_mock(status_code: int = 201) -> MagicMock:
    """Build a MagicMock session whose post() returns ``status_code``."""
    session = MagicMock()
    response = MagicMock()
    response.status_code = status_code
    session.post.return_value = response
    return session


@pytest.fixture
def mock_created_session() -> MagicMock:
    return make_session_mock(201)


@pytest.fixture
def mock_not_found_session() -> MagicMock:
    return make_session_mock(404)
