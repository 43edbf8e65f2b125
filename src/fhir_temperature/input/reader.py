"""Read a body temperature from the command line or an interactive prompt.

Parsing is permissive in the way C's ``atof`` is: leading whitespace is
skipped, the longest numeric prefix is used and trailing garbage is ignored.
Text with no numeric prefix at all parses to ``0.0``. Pass ``strict=True``
to reject both cases instead.
"""

from __future__ import annotations

import logging
import math
import re
from typing import TextIO

from ..errors import InputError, InvalidValueError


logger = logging.getLogger(__name__)

PROMPT = "Enter body temperature (e.g. 36.5): "

_NUMERIC_PREFIX_RE = re.compile(
    r"""
    [+-]?
    (?:
        inf(?:inity)?
      | nan(?:\([0-9a-z_]*\))?
      | 0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?\d+)?
      | (?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?
    )
    """,
    re.IGNORECASE | re.VERBOSE | re.ASCII,
)


def parse_temperature(text: str, strict: bool = False) -> float:
    """Parse the leading number of ``text``.

    Args:
        text: Raw argument or input line.
        strict: Raise instead of accepting a missing prefix or trailing text.

    Returns:
        The parsed value. May be NaN or infinite; see ensure_finite().

    Raises:
        InvalidValueError: only when ``strict`` is set and the text is not
            entirely one number.
    """
    stripped = text.lstrip()
    match = _NUMERIC_PREFIX_RE.match(stripped)
    if match is None:
        if strict:
            raise InvalidValueError(f"{text.strip()!r} is not a number")
        logger.debug("No numeric prefix in %r, using 0.0", text)
        return 0.0

    if strict and stripped[match.end():].strip():
        raise InvalidValueError(f"{text.strip()!r} is not a number")

    return _to_float(match.group(0))


def ensure_finite(value: float) -> float:
    """Return ``value`` unchanged, or raise InvalidValueError for NaN/±Inf."""
    if not math.isfinite(value):
        raise InvalidValueError(f"temperature must be finite, got {value!r}")
    return value


def read_temperature(
    argv_value: str | None,
    stdin: TextIO,
    stdout: TextIO,
    strict: bool = False,
) -> float:
    """Return a finite temperature from the argument, or prompt for one.

    Raises:
        InputError: no argument was given and stdin is at end of input.
        InvalidValueError: the parsed value is not finite.
    """
    if argv_value is not None:
        raw = argv_value
    else:
        stdout.write(PROMPT)
        stdout.flush()
        raw = stdin.readline()
        if not raw:
            raise InputError("No input")

    return ensure_finite(parse_temperature(raw, strict=strict))


def _to_float(token: str) -> float:
    sign = -1.0 if token.startswith("-") else 1.0
    body = token.lstrip("+-").lower()

    if body.startswith("nan"):
        return math.nan
    if body.startswith("inf"):
        return sign * math.inf
    if body.startswith("0x"):
        # "0x1." and "0x1.p3" are complete hex floats for strtod
        try:
            return sign * float.fromhex(re.sub(r"\.(?=p|$)", "", body))
        except OverflowError:
            return sign * math.inf
    # float() turns overflowing literals such as 1e999 into inf, like strtod
    return sign * float(body)
