"""Pydantic models for the uploader configuration and the Observation request."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import InvalidValueError


DEFAULT_BASE_URL   = "https://hapi.fhir.org/baseR4"
DEFAULT_PATIENT_ID = "49410276"
DEFAULT_USER_AGENT = "fhir-c-uploader/1.0"


class UploaderConfig(BaseModel):
    """Where and as whom the Observation is sent.

    Defaults reproduce the fixed endpoint and patient of the uploader; the
    CLI is the only place that overrides them.
    """

    base_url: str = Field(default=DEFAULT_BASE_URL, description="FHIR R4 base URL")
    patient_id: str = Field(default=DEFAULT_PATIENT_ID, description="FHIR Patient logical ID")
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    ca_bundle: str | None = Field(default=None, description="CA bundle path for TLS verification")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def observation_url(self) -> str:
        return f"{self.base_url}/Observation"


class ObservationRequest(BaseModel):
    """A single body temperature measurement, built once per run."""

    temperature_celsius: float = Field(..., allow_inf_nan=False)
    patient_id: str = Field(default=DEFAULT_PATIENT_ID, min_length=1)
    effective_time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    status: Literal["final"] = "final"

    @field_validator("patient_id")
    @classmethod
    def patient_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("patient_id must not be empty")
        return value

    @classmethod
    def for_reading(
        cls,
        temperature_celsius: float,
        patient_id: str = DEFAULT_PATIENT_ID,
    ) -> "ObservationRequest":
        """Build a request stamped with the current UTC time.

        Raises:
            InvalidValueError: the temperature is not finite or the patient ID is blank.
        """
        try:
            return cls(temperature_celsius=temperature_celsius, patient_id=patient_id)
        except ValidationError as exc:
            raise InvalidValueError(str(exc)) from exc
