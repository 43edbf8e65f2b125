"""Example: build a body-temperature Observation and (mock-)POST it to HAPI.

Usage:
    python examples/submit_observation.py
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fhir_temperature.fhir.fhir_client import FHIRClient
from fhir_temperature.fhir.observation import ObservationBuilder
from fhir_temperature.models import ObservationRequest, UploaderConfig
from fhir_temperature.uploader import ObservationUploader


def main() -> None:
    print("=== FHIR Observation Upload Demo ===\n")

    # 1. Build the FHIR resource
    config = UploaderConfig()
    request = ObservationRequest.for_reading(37.2, patient_id=config.patient_id)
    payload = ObservationBuilder.render(request)

    print("Rendered FHIR Observation:")
    print(payload)

    # 2. POST through a mocked session so the demo never touches the network
    print(f"Mocking POST to {config.observation_url}...")

    mock_response = MagicMock()
    mock_response.status_code = 201
    mock_session = MagicMock()
    mock_session.post.return_value = mock_response

    client = FHIRClient(config.base_url, session=mock_session, user_agent=config.user_agent)
    uploader = ObservationUploader(config, client=client)
    status_code = uploader.upload(payload)

    sent_headers = mock_session.post.call_args[1]["headers"]
    print(f"Request headers: {json.dumps(sent_headers, indent=2)}")
    print(f"FHIR POST status: {status_code}")
    print("\nSubmission demo complete.")


if __name__ == "__main__":
    main()
