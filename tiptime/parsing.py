from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation

from .formats import ZERO

logger = logging.getLogger(__name__)

# Signed decimal with optional exponent: "12", "12.5", ".5", "5.", "-3", "1e3".
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
# Magnitudes beyond a double's range read as zero.
MAX_EXPONENT = 308


def parse_amount(text: str) -> Decimal:
    """Parse user-typed numeric text, returning 0 when it is not a number.

    Unparseable input is never an error here: empty fields, stray letters
    and malformed decimals all read as zero.
    """
    raw = (text or "").strip()
    if not _NUMBER_RE.match(raw):
        if raw:
            logger.debug("Treating unparseable input %r as 0", raw)
        return ZERO
    try:
        value = Decimal(raw)
    except InvalidOperation:  # pragma: no cover - regex admits only valid literals
        logger.debug("Treating unparseable input %r as 0", raw)
        return ZERO
    if not value.is_zero() and abs(value.adjusted()) > MAX_EXPONENT:
        logger.debug("Treating out-of-range input %r as 0", raw)
        return ZERO
    return value


def parse_flag(text: str, *, default: bool = False) -> bool:
    """Read a yes/no answer or config value; anything else keeps ``default``."""
    value = (text or "").strip().lower()
    if value in {"y", "yes", "true", "1", "on"}:
        return True
    if value in {"n", "no", "false", "0", "off"}:
        return False
    return default
