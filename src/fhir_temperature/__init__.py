"""Upload a body temperature reading to a FHIR R4 server as an Observation."""

import logging

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
