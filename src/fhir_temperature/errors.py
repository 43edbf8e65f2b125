"""Error kinds raised while reading, building and uploading an Observation.

Every error is terminal for the run; the CLI maps each one to a message and
exit code 1.
"""

from __future__ import annotations


class UploaderError(Exception):
    """Base class for all uploader failures."""

    exit_code = 1


class InputError(UploaderError):
    """No temperature could be read (e.g. stdin closed)."""


class InvalidValueError(UploaderError, ValueError):
    """The parsed temperature is not a finite number."""


class PayloadTooLargeError(UploaderError):
    """The rendered Observation JSON reached the payload size bound."""


class FHIRValidationError(UploaderError, ValueError):
    """Raised when an Observation dict fails the offline FHIR R4 shape check."""


class TransportError(UploaderError):
    """The HTTP request could not be completed (DNS, TLS, connection, ...)."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class ServerRejection(UploaderError):
    """The server answered with a status outside [200, 300)."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"server responded with HTTP {status_code}")
        self.status_code = status_code
