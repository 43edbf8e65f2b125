"""Send one rendered Observation to the FHIR server and classify the reply.

Exactly one POST is made per call. There is no retry and no timeout beyond
what ``requests`` does by default. The response body is never read.
"""

from __future__ import annotations

import logging

import requests

from .errors import ServerRejection, TransportError
from .fhir.fhir_client import FHIRClient
from .models import UploaderConfig


logger = logging.getLogger(__name__)


class ObservationUploader:
    """POST a body-temperature Observation to ``config.observation_url``."""

    def __init__(self, config: UploaderConfig, client: FHIRClient | None = None) -> None:
        self.config = config
        self._client = client or FHIRClient(
            config.base_url,
            user_agent=config.user_agent,
            verify=config.ca_bundle or True,
        )

    def upload(self, payload: str) -> int:
        """POST ``payload`` and return the HTTP status code on success.

        Args:
            payload: Rendered Observation JSON text.

        Returns:
            The status code, always in [200, 300).

        Raises:
            TransportError: the request could not be completed.
            ServerRejection: the server answered with any other status.
        """
        logger.info("Posting Observation to %s", self.config.observation_url)
        try:
            response = self._client.post_resource("Observation", payload)
        except requests.exceptions.RequestException as exc:
            logger.warning("Observation POST failed: %s", exc)
            raise TransportError(str(exc) or type(exc).__name__) from exc

        status_code = response.status_code
        logger.info("Server responded with HTTP %d", status_code)
        if not 200 <= status_code < 300:
            raise ServerRejection(status_code)
        return status_code

    def close(self) -> None:
        self._client.close()
