"""Command-line entry point: read a temperature, upload it, report the status.

Usage:
    fhir-upload-temperature 37.2
    fhir-upload-temperature            (then enter the temperature when prompted)
"""

from __future__ import annotations

import logging
import sys

import click

from .errors import (
    FHIRValidationError,
    InputError,
    InvalidValueError,
    PayloadTooLargeError,
    ServerRejection,
    TransportError,
)
from .fhir.observation import ObservationBuilder
from .input.reader import read_temperature
from .models import DEFAULT_BASE_URL, DEFAULT_PATIENT_ID, ObservationRequest, UploaderConfig
from .uploader import ObservationUploader


logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Observation uploaded successfully."
FAILURE_MESSAGE = "Upload may have failed. Check server logs or response."


def run(
    raw_temperature: str | None,
    config: UploaderConfig,
    strict: bool = False,
    uploader: ObservationUploader | None = None,
) -> int:
    """Run the read -> build -> upload sequence once and return the exit code."""
    try:
        stdin = click.get_text_stream("stdin", errors="replace")
        temperature = read_temperature(raw_temperature, stdin, sys.stdout, strict=strict)
        request = ObservationRequest.for_reading(temperature, config.patient_id)
        payload = ObservationBuilder.render(request)

        click.echo(f"Posting Observation to {config.observation_url}")
        uploader = uploader or ObservationUploader(config)
        try:
            status_code = uploader.upload(payload)
        finally:
            uploader.close()
    except InputError as exc:
        click.echo("No input", err=True)
        return exc.exit_code
    except InvalidValueError as exc:
        logger.debug("Rejected temperature: %s", exc)
        click.echo("Invalid temperature value.", err=True)
        return exc.exit_code
    except (PayloadTooLargeError, FHIRValidationError) as exc:
        logger.debug("Payload not built: %s", exc)
        click.echo("JSON payload too long or formatting error.", err=True)
        return exc.exit_code
    except TransportError as exc:
        click.echo(f"Upload failed: {exc.reason}", err=True)
        return exc.exit_code
    except ServerRejection as exc:
        click.echo(f"Server HTTP response code: {exc.status_code}")
        click.echo(FAILURE_MESSAGE)
        return exc.exit_code

    click.echo(f"Server HTTP response code: {status_code}")
    click.echo(SUCCESS_MESSAGE)
    return 0


def _not_blank(ctx: click.Context, param: click.Parameter, value: str) -> str:
    if not value.strip():
        raise click.BadParameter("must not be empty")
    return value


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("temperature", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "--base-url",
    default=DEFAULT_BASE_URL,
    show_default=True,
    help="FHIR R4 base URL; the Observation is POSTed to <base-url>/Observation",
)
@click.option(
    "--patient-id",
    default=DEFAULT_PATIENT_ID,
    show_default=True,
    callback=_not_blank,
    help="FHIR Patient logical ID used as the Observation subject",
)
@click.option(
    "--ca-bundle",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="CA bundle file for TLS verification (default: system trust store)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Reject malformed input instead of reading it as 0",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Emit debug logs to stderr",
)
def main(
    temperature: tuple[str, ...],
    base_url: str,
    patient_id: str,
    ca_bundle: str | None,
    strict: bool,
    verbose: bool,
) -> None:
    """Upload a body temperature in degrees Celsius as a FHIR R4 Observation.

    TEMPERATURE is read from the prompt when omitted. Only the first value
    is used.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=[logging.StreamHandler(sys.stderr)],
        )

    config = UploaderConfig(base_url=base_url, patient_id=patient_id, ca_bundle=ca_bundle)
    sys.exit(run(temperature[0] if temperature else None, config, strict=strict))
