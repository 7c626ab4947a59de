from .formats import (
    HUNDRED,
    ZERO,
    fmt_money,
    host_locale,
    locale_currency,
    resolve_locale,
)
from .parsing import parse_amount
from .resources import BILL_AMOUNT_FIELD, ROUND_UP_LABEL, TIP_PERCENT_FIELD, TITLE, tip_amount_text
from .state import FormState, TipForm, derive_result
from .tip_core import DEFAULT_TIP_PERCENT, calculate_tip, compute_tip

__all__ = [
    "FormState",
    "TipForm",
    "derive_result",
    "calculate_tip",
    "compute_tip",
    "DEFAULT_TIP_PERCENT",
    "parse_amount",
    "HUNDRED",
    "ZERO",
    "fmt_money",
    "host_locale",
    "locale_currency",
    "resolve_locale",
    "TITLE",
    "BILL_AMOUNT_FIELD",
    "TIP_PERCENT_FIELD",
    "ROUND_UP_LABEL",
    "tip_amount_text",
]
