from __future__ import annotations

# ruff: noqa: E402  # allow docstring before imports

"""Public API and CLI entrypoint for the tip calculator.

Re-exports the main API from `tiptime` so that

    import tip as tipmod

gives access to the calculator, the form state holder and the parser.
Also provides the `python tip.py` entry.
"""

import importlib.metadata as importlib_metadata
import sys

from tiptime import (
    DEFAULT_TIP_PERCENT,
    FormState,
    TipForm,
    calculate_tip,
    compute_tip,
    derive_result,
    fmt_money,
    host_locale,
    parse_amount,
)
from tiptime.cli import run_cli

try:
    _distribution_version = importlib_metadata.version("tip-time")
except importlib_metadata.PackageNotFoundError:
    __version__ = "0+unknown"
else:
    __version__ = _distribution_version or "0+unknown"

__all__ = [
    "__version__",
    "FormState",
    "TipForm",
    "derive_result",
    "calculate_tip",
    "compute_tip",
    "DEFAULT_TIP_PERCENT",
    "parse_amount",
    "fmt_money",
    "host_locale",
    "run_cli",
]

if __name__ == "__main__":
    sys.exit(run_cli())
