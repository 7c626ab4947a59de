from __future__ import annotations

import logging
import os
from decimal import Decimal, localcontext
from typing import List, Optional

import pyperclip
from babel import Locale, UnknownLocaleError
from babel.core import get_global, get_locale_identifier, parse_locale
from babel.numbers import format_currency, get_territory_currencies

logger = logging.getLogger(__name__)


# --- Money constants ---
ZERO = Decimal("0")
HUNDRED = Decimal("100")
FALLBACK_LOCALE = "en_US"
FALLBACK_CURRENCY = "USD"

# POSIX precedence for the monetary category.
MONETARY_ENV_VARS = ("LC_ALL", "LC_MONETARY", "LANG")


def host_locale() -> str:
    """Return the locale identifier of the host environment.

    Checks ``LC_ALL``, ``LC_MONETARY`` and ``LANG`` in that order. The
    ``C``/``POSIX`` locales and unset variables give ``en_US``.
    """
    for name in MONETARY_ENV_VARS:
        value = os.environ.get(name)
        if not value:
            continue
        if value.split(".")[0].split("@")[0] in {"C", "POSIX"}:
            return FALLBACK_LOCALE
        try:
            return get_locale_identifier(parse_locale(value.split(":")[0]))
        except ValueError:
            logger.debug("Ignoring malformed %s=%r", name, value)
    return FALLBACK_LOCALE


def resolve_locale(locale: Optional[str] = None) -> Locale:
    """Parse ``locale`` (or the host locale) into a Babel ``Locale``.

    Raises ``ValueError`` for an explicit identifier Babel does not know. An
    unknown host locale falls back to ``en_US`` instead.
    """
    if locale is None:
        identifier = host_locale()
        try:
            return Locale.parse(identifier)
        except (UnknownLocaleError, ValueError):
            logger.debug("Unknown host locale %r, using %s", identifier, FALLBACK_LOCALE)
            return Locale.parse(FALLBACK_LOCALE)
    try:
        return Locale.parse(locale)
    except (UnknownLocaleError, ValueError) as exc:
        raise ValueError(f"Unknown locale: {locale}") from exc


def _territory(loc: Locale) -> Optional[str]:
    if loc.territory:
        return loc.territory
    likely = get_global("likely_subtags").get(loc.language)
    if not likely:
        return None
    return parse_locale(likely)[1]


def locale_currency(loc: Locale) -> str:
    territory = _territory(loc)
    if not territory:
        return FALLBACK_CURRENCY
    currencies = get_territory_currencies(territory, tender=True)
    return currencies[0] if currencies else FALLBACK_CURRENCY


# --- Formatting ---
def fmt_money(value: Decimal, *, locale: Optional[str] = None) -> str:
    """Format ``value`` as currency using the locale's own conventions.

    Symbol, grouping, decimal separator and precision all come from the
    locale; the currency is the default tender of the locale's territory.
    """
    loc = resolve_locale(locale)
    currency = locale_currency(loc)
    # Large values need more digits than the default context to quantize
    # to the currency precision.
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 10)
        return format_currency(value, currency, locale=loc)


def fmt_decimal(value: Decimal) -> str:
    """Plain representation of a Decimal with trailing zeros trimmed."""
    s = format(value, "f")
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s in {"", "-0"}:
        return "0"
    return s


# --- Data export helpers ---
def result_to_dict(
    *,
    bill_amount: Decimal,
    tip_percent: Decimal,
    round_up: bool,
    tip: Decimal,
    formatted: str,
    locale: str,
) -> dict:
    return {
        "bill_amount": fmt_decimal(bill_amount),
        "tip_percent": fmt_decimal(tip_percent),
        "round_up": round_up,
        "tip": fmt_decimal(tip),
        "formatted": formatted,
        "locale": locale,
    }


CSV_COLUMNS: List[str] = ["bill_amount", "tip_percent", "round_up", "tip", "formatted", "locale"]


def dict_to_csv_line(d: dict) -> str:
    def _cell(value: object) -> str:
        text = str(value).lower() if isinstance(value, bool) else str(value)
        if "," in text or '"' in text:
            text = '"' + text.replace('"', '""') + '"'
        return text

    return ",".join(_cell(d.get(k, "")) for k in CSV_COLUMNS)


def copy_to_clipboard(text: str) -> bool:
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        logger.debug("Clipboard copy failed: %s", exc)
        return False
    return True
