from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, TypeVar

from .formats import (
    CSV_COLUMNS,
    copy_to_clipboard,
    dict_to_csv_line,
    resolve_locale,
    result_to_dict,
)
from .parsing import parse_amount, parse_flag
from .resources import (
    BILL_AMOUNT_FIELD,
    ROUND_UP_LABEL,
    TIP_PERCENT_FIELD,
    TITLE,
    tip_amount_text,
)
from .state import FormState, TipForm
from .tip_core import compute_tip

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "tipconfig.json"


class ConfigError(RuntimeError):
    """Raised when a configuration file cannot be read."""


@dataclass
class AppConfig:
    locale: Optional[str] = None
    round_up: bool = False


def _apply_settings(cfg: AppConfig, settings: Dict[str, str]) -> None:
    if settings.get("TIP_LOCALE"):
        cfg.locale = settings["TIP_LOCALE"]
    if "TIP_ROUND_UP" in settings:
        cfg.round_up = parse_flag(settings["TIP_ROUND_UP"], default=cfg.round_up)


def _read_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        values[k.strip().upper()] = v.strip().strip('"').strip("'")
    return values


def load_config(path: Optional[str] = None) -> AppConfig:
    """Build the shell configuration.

    Sources, later ones winning: ``path`` or ``./tipconfig.json``, then
    ``./.env``, then the process environment (``TIP_LOCALE``,
    ``TIP_ROUND_UP``).
    """
    cfg = AppConfig()

    if path:
        json_path: Optional[Path] = Path(path).expanduser()
        if not json_path.is_file():
            raise ConfigError(f"Config file not found: {json_path}")
    else:
        json_path = Path.cwd() / CONFIG_FILENAME
        if not json_path.is_file():
            json_path = None
    if json_path is not None:
        try:
            data = json.loads(json_path.read_text())
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Failed to parse config file: {json_path}") from exc
        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a JSON object")
        if data.get("locale"):
            cfg.locale = str(data["locale"])
        if "round_up" in data:
            cfg.round_up = parse_flag(str(data["round_up"]), default=cfg.round_up)
        logger.debug("Loaded config from %s", json_path)

    env_path = Path.cwd() / ".env"
    if env_path.is_file():
        _apply_settings(cfg, _read_env_file(env_path))
    _apply_settings(cfg, {k: v for k, v in os.environ.items() if k.startswith("TIP_")})
    return cfg


T = TypeVar("T")


def prompt(text: str, handler: Callable[[str], T]) -> T:
    return handler(input(text))


def yes_no(prompt_text: str, *, default_yes: bool = True) -> bool:
    suffix = "[Y/n]" if default_yes else "[y/N]"
    while True:
        ans = input(f"{prompt_text} {suffix} ").strip().lower()
        if not ans:
            return default_yes
        if ans in {"y", "yes"}:
            return True
        if ans in {"n", "no"}:
            return False
        print("Please answer 'y' or 'n'.")


def run_interactive(form: TipForm) -> None:
    """Prompt for each field in turn, showing the tip after every answer."""
    print(f"--- {TITLE} ---")
    unsubscribe = form.subscribe(lambda _state, result: print(tip_amount_text(result)))
    try:
        while True:
            prompt(f"{BILL_AMOUNT_FIELD.label}: ", form.set_bill_amount_text)
            prompt(f"{TIP_PERCENT_FIELD.label}: ", form.set_tip_percent_text)
            form.set_round_up(yes_no(ROUND_UP_LABEL, default_yes=form.state.round_up))
            if not yes_no("Calculate another tip?", default_yes=False):
                break
    finally:
        unsubscribe()


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Tip calculator. Unparseable numbers count as 0; amounts are shown in the host locale's currency."
    )
    parser.add_argument("--amount", help="Bill amount, e.g. 50 or 42.80")
    parser.add_argument("--tip", help="Tip percentage, e.g. 15")
    parser.add_argument(
        "--round-up",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Round the tip up to the next whole currency unit. Default comes from config",
    )
    parser.add_argument("--locale", help="Locale for currency formatting (e.g., en_US). Default: host locale")
    parser.add_argument("--config", help="Path to a JSON config file with locale and round_up")
    parser.add_argument("--json", action="store_true", help="Output the result as JSON")
    parser.add_argument("--csv", action="store_true", help="Output the result as CSV")
    parser.add_argument("--copy", action="store_true", help="Copy the output to clipboard")
    parser.add_argument("--interactive", action="store_true", help="Force interactive mode regardless of provided flags.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr")
    return parser


def _render(form: TipForm, locale_id: str, *, as_json: bool, as_csv: bool) -> str:
    state: FormState = form.state
    if not (as_json or as_csv):
        return tip_amount_text(form.current_result())
    amount = parse_amount(state.bill_amount_text)
    tip_percent = parse_amount(state.tip_percent_text)
    d = result_to_dict(
        bill_amount=amount,
        tip_percent=tip_percent,
        round_up=state.round_up,
        tip=compute_tip(amount, tip_percent, state.round_up),
        formatted=form.current_result(),
        locale=locale_id,
    )
    if as_json:
        return json.dumps(d)
    return ",".join(CSV_COLUMNS) + "\n" + dict_to_csv_line(d)


def run_cli(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        parser.error(str(exc))

    locale_value = args.locale or config.locale
    try:
        locale_id = str(resolve_locale(locale_value))
    except ValueError as exc:
        parser.error(str(exc))
    round_up = config.round_up if args.round_up is None else args.round_up

    form = TipForm(FormState(round_up=round_up), locale=locale_id)

    if args.interactive or (args.amount is None and args.tip is None):
        try:
            run_interactive(form)
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
        return 0

    form.set_bill_amount_text(args.amount or "")
    form.set_tip_percent_text(args.tip or "")
    out = _render(form, locale_id, as_json=args.json, as_csv=args.csv)
    print(out)
    if args.copy:
        if not copy_to_clipboard(out):
            print("(Could not copy to clipboard on this system)", file=sys.stderr)
    return 0


def main() -> None:
    sys.exit(run_cli())
