from .fhir_client import FHIRClient
from .observation import ObservationBuilder, current_time_iso8601

__all__ = ["FHIRClient", "ObservationBuilder", "current_time_iso8601"]
