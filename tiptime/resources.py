"""Static labels and icon identifiers consumed by presentation shells."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

TITLE = "Calculate Tip"
ROUND_UP_LABEL = "Round up tip?"
TIP_AMOUNT_TEMPLATE = "Tip Amount: %s"


@dataclass(frozen=True)
class FieldSpec:
    key: str
    label: str
    icon: Optional[str]


BILL_AMOUNT_FIELD = FieldSpec(key="bill_amount", label="Bill Amount", icon="money")
TIP_PERCENT_FIELD = FieldSpec(key="tip_percent", label="Tip Percentage", icon="percent")


def tip_amount_text(formatted: str) -> str:
    return TIP_AMOUNT_TEMPLATE % formatted
