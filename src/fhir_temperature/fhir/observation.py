"""FHIR R4 body-temperature Observation builder with offline shape validation.

Builds the vital-signs Observation for a single temperature reading
(LOINC 8310-5, UCUM ``Cel``) and renders it to JSON text with the value
fixed to two decimal places, e.g. ``"value": 36.50``.
"""

from __future__ import annotations

import json
import math
import re
from datetime import datetime, timezone
from typing import Any

from ..errors import FHIRValidationError, PayloadTooLargeError
from ..models import ObservationRequest


_LOINC_SYSTEM          = "http://loinc.org"
_LOINC_BODY_TEMP       = "8310-5"
_LOINC_BODY_TEMP_TEXT  = "Body temperature"
_CATEGORY_SYSTEM       = "http://terminology.hl7.org/CodeSystem/observation-category"
_CATEGORY_VITAL_SIGNS  = "vital-signs"
_UCUM_SYSTEM           = "http://unitsofmeasure.org"
_UCUM_CELSIUS          = "Cel"
_UNIT_DISPLAY          = "degrees C"

# Size of the fixed buffer the payload was always formatted into.
MAX_PAYLOAD_BYTES = 2048

_VALID_STATUSES = {
    "registered", "preliminary", "final", "amended",
    "corrected", "cancelled", "entered-in-error", "unknown",
}
_FHIR_DATETIME_RE  = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")
_FHIR_REFERENCE_RE = re.compile(r"^[A-Z][A-Za-z]+/.+$")
_VALUE_PLACEHOLDER = "__valueQuantity.value__"


def current_time_iso8601(now: datetime | None = None) -> str:
    """Format ``now`` (default: current time) as UTC ``YYYY-MM-DDTHH:MM:SSZ``.

    Naive datetimes are taken to be UTC already.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class ObservationBuilder:
    """Build, validate and render body-temperature Observations."""

    @staticmethod
    def body_temperature(request: ObservationRequest) -> dict:
        """Build a validated FHIR R4 Observation dict for ``request``.

        Args:
            request: The temperature reading, patient and effective time.

        Returns:
            A dict conforming to the vital-signs Observation shape. The value
            is rounded to two decimals, matching what render() puts on the wire.

        Raises:
            FHIRValidationError: if the constructed resource fails validation.
        """
        obs: dict[str, Any] = {
            "resourceType": "Observation",
            "status":       request.status,
            "category": [{
                "coding": [{
                    "system":  _CATEGORY_SYSTEM,
                    "code":    _CATEGORY_VITAL_SIGNS,
                    "display": "Vital Signs",
                }]
            }],
            "code": {
                "coding": [{
                    "system":  _LOINC_SYSTEM,
                    "code":    _LOINC_BODY_TEMP,
                    "display": _LOINC_BODY_TEMP_TEXT,
                }],
                "text": _LOINC_BODY_TEMP_TEXT,
            },
            "subject":           {"reference": f"Patient/{request.patient_id}"},
            "effectiveDateTime": current_time_iso8601(request.effective_time),
            "valueQuantity": {
                "value":  round(request.temperature_celsius, 2),
                "unit":   _UNIT_DISPLAY,
                "system": _UCUM_SYSTEM,
                "code":   _UCUM_CELSIUS,
            },
        }

        ObservationBuilder.validate_r4_schema(obs)
        return obs

    @staticmethod
    def render(request: ObservationRequest, max_bytes: int = MAX_PAYLOAD_BYTES) -> str:
        """Render the Observation for ``request`` as JSON text.

        ``valueQuantity.value`` is written with exactly two digits after the
        decimal point. The payload is never truncated.

        Raises:
            PayloadTooLargeError: if the UTF-8 payload would not fit in
                ``max_bytes`` (one byte is kept back, as for a C string).
            FHIRValidationError: if the resource fails validation.
        """
        obs = ObservationBuilder.body_temperature(request)
        obs["valueQuantity"]["value"] = _VALUE_PLACEHOLDER

        text = json.dumps(obs, indent=2) + "\n"
        text = text.replace(
            json.dumps(_VALUE_PLACEHOLDER),
            f"{request.temperature_celsius:.2f}",
            1,
        )

        size = len(text.encode("utf-8"))
        if size >= max_bytes:
            raise PayloadTooLargeError(
                f"Observation payload is {size} bytes, limit is {max_bytes - 1}"
            )
        return text

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def validate_r4_schema(obs: dict) -> None:
        """Validate a body-temperature Observation dict against FHIR R4 rules.

        Checks enforced (all offline):
          - resourceType is 'Observation'
          - status is present and a valid R4 code
          - category contains the vital-signs coding
          - code.coding[0] is LOINC 8310-5
          - subject.reference matches 'ResourceType/id'
          - effectiveDateTime is a UTC instant (YYYY-MM-DDTHH:MM:SSZ)
          - valueQuantity.value is a finite number in UCUM 'Cel'

        Raises:
            FHIRValidationError: with a message listing every error.
        """
        errors: list[str] = []

        if obs.get("resourceType") != "Observation":
            errors.append(
                f"resourceType must be 'Observation', got {obs.get('resourceType')!r}"
            )

        status = obs.get("status")
        if not status:
            errors.append("status is required")
        elif status not in _VALID_STATUSES:
            errors.append(f"status {status!r} is not a valid R4 code")

        category_codes = {
            coding.get("code")
            for category in obs.get("category", [])
            for coding in category.get("coding", [])
            if coding.get("system") == _CATEGORY_SYSTEM
        }
        if _CATEGORY_VITAL_SIGNS not in category_codes:
            errors.append("category must include the vital-signs coding")

        codings = obs.get("code", {}).get("coding") or []
        if not codings:
            errors.append("code.coding must have at least one entry")
        else:
            if codings[0].get("system") != _LOINC_SYSTEM:
                errors.append(
                    f"code.coding[0].system must be {_LOINC_SYSTEM!r}, got {codings[0].get('system')!r}"
                )
            if codings[0].get("code") != _LOINC_BODY_TEMP:
                errors.append(
                    f"code.coding[0].code must be {_LOINC_BODY_TEMP!r}, got {codings[0].get('code')!r}"
                )

        subject_ref = obs.get("subject", {}).get("reference", "")
        if not subject_ref:
            errors.append("subject.reference is required")
        elif not _FHIR_REFERENCE_RE.match(subject_ref):
            errors.append(f"subject.reference {subject_ref!r} must match 'ResourceType/id'")

        effective = obs.get("effectiveDateTime", "")
        if not _FHIR_DATETIME_RE.match(effective):
            errors.append(
                f"effectiveDateTime {effective!r} must be a UTC instant (YYYY-MM-DDTHH:MM:SSZ)"
            )

        quantity = obs.get("valueQuantity", {})
        value = quantity.get("value")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            errors.append(f"valueQuantity.value must be a number, got {value!r}")
        elif not math.isfinite(value):
            errors.append(f"valueQuantity.value must be finite, got {value!r}")
        if quantity.get("system") != _UCUM_SYSTEM or quantity.get("code") != _UCUM_CELSIUS:
            errors.append("valueQuantity must be UCUM 'Cel'")

        if errors:
            bullet_list = "\n  - ".join(errors)
            raise FHIRValidationError(
                f"FHIR R4 Observation validation failed ({len(errors)} error(s)):\n  - {bullet_list}"
            )
