"""Generic FHIR R4 HTTP client."""

from __future__ import annotations

import logging

import requests


logger = logging.getLogger(__name__)

FHIR_JSON = "application/fhir+json"


class FHIRClient:
    """Minimal FHIR R4 REST client for posting resources."""

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        user_agent: str | None = None,
        verify: bool | str = True,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._user_agent = user_agent
        self._verify = verify

    def post_resource(
        self,
        resource_type: str,
        resource: dict | str,
        headers: dict | None = None,
    ) -> requests.Response:
        """POST a FHIR resource and return the response.

        ``resource`` may be a dict, sent as JSON, or already-rendered JSON
        text, sent verbatim as UTF-8.
        """
        url = f"{self.base_url}/{resource_type}"
        default_headers = {
            "Content-Type": f"{FHIR_JSON};charset=utf-8",
            "Accept": FHIR_JSON,
        }
        if self._user_agent:
            default_headers["User-Agent"] = self._user_agent
        if headers:
            default_headers.update(headers)

        logger.debug("POST %s (%s)", url, resource_type)
        if isinstance(resource, str):
            return self._session.post(
                url,
                data=resource.encode("utf-8"),
                headers=default_headers,
                verify=self._verify,
            )
        return self._session.post(
            url, json=resource, headers=default_headers, verify=self._verify
        )

    def close(self) -> None:
        self._session.close()
