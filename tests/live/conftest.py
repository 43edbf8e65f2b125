"""Skip guard for live tests.

Live tests POST a real Observation to the public HAPI FHIR R4 server. Each run
creates a new resource there, so they are opt-in:

  export FHIR_LIVE_TESTS=1
  pytest tests/live -v -m live
"""

from __future__ import annotations

import os
import pytest


skip_no_live = pytest.mark.skipif(
    not os.environ.get("FHIR_LIVE_TESTS"),
    reason="Set FHIR_LIVE_TESTS=1 to POST to the public HAPI FHIR server",
)
