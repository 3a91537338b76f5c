"""
CLI interface and shared display-data computation for the
Buy vs Commute calculator.
"""

from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional

import config as cfg
from calculator import CalculationResult, CalculatorSession, parse_inputs
from formatting import convert_to_words, fmt, format_indian_number, tons
import report


# ═══════════════════════════════════════════════════════════════════
# Shared display-data computation (used by CLI and web app)
# ═══════════════════════════════════════════════════════════════════

def compute_display_data(
    session: CalculatorSession,
    result: CalculationResult,
) -> Dict[str, Any]:
    """Extract every figure needed for the output sections."""
    mode = session.view_mode
    inputs = parse_inputs(session.values)
    period = "year" if mode == "yearly" else "month"

    car = result.car_cost(mode)
    commute = result.commute_cost(mode)
    savings = result.savings(mode)

    if savings > 0:
        winner = "commute"
    elif savings < 0:
        winner = "car"
    else:
        winner = "tie"

    breakdown = result.components()
    positive_total = sum(v for v in breakdown.values() if v > 0)
    shares = {
        name: (value / positive_total * 100 if positive_total > 0 and value > 0 else 0.0)
        for name, value in breakdown.items()
    }

    return {
        # Inputs echo
        "values": dict(session.values),
        "monthly_distance": inputs.monthly_distance,
        "view_mode": mode,
        "chart_type": session.chart_type,
        "period": period,
        "period_label": "Monthly" if mode == "monthly" else "Yearly",
        # Car ownership
        "car_cost": car,
        "breakdown": breakdown,
        "breakdown_shares": shares,
        # Public transport
        "commute_cost": commute,
        # Verdict
        "savings": savings,
        "monthly_savings": result.monthly_savings,
        "yearly_savings": result.yearly_savings,
        "winner": winner,
        "advantage": abs(savings),
        # Environment
        "yearly_emissions": result.yearly_emissions,
        "tips": list(cfg.ENVIRONMENTAL_TIPS),
    }


def generate_verdict_text(d: Dict[str, Any]) -> str:
    """Build a short plain-English verdict."""
    period = d["period"]
    adv = fmt(d["advantage"])
    yearly = fmt(abs(d["yearly_savings"]))

    if d["winner"] == "commute":
        return (
            f"Public transport is cheaper by {adv} per {period} "
            f"({yearly} a year). Owning the car would also add about "
            f"{tons(d['yearly_emissions'])} of CO2 a year."
        )
    if d["winner"] == "car":
        return (
            f"Owning the car is cheaper by {adv} per {period} "
            f"({yearly} a year), at the cost of roughly "
            f"{tons(d['yearly_emissions'])} of CO2 a year."
        )
    return (
        f"Both options cost the same per {period}. Public transport "
        f"avoids about {tons(d['yearly_emissions'])} of CO2 a year."
    )


# ═══════════════════════════════════════════════════════════════════
# Input collection (CLI)
# ═══════════════════════════════════════════════════════════════════

def _prompt_field(session: CalculatorSession, name: str) -> None:
    label, unit, tooltip = cfg.FIELDS[name]
    marker = " *" if name in cfg.REQUIRED_FIELDS else ""
    while True:
        raw = input(f"  {label} ({unit}){marker}: ").strip().replace(",", "")
        if raw == "?":
            print(f"    {tooltip}")
            continue
        if not session.update_field(name, raw):
            print(f"    {cfg.MSG_REJECTED_INPUT}")
            continue
        if not raw and name in cfg.REQUIRED_FIELDS:
            print(f"    {cfg.MSG_REQUIRED}")
            continue
        error = session.errors.get(name, "")
        if error:
            print(f"    {error}")
            continue
        words = convert_to_words(raw)
        if words:
            print(f"    = {words} {unit}")
        return


def collect_inputs(session: CalculatorSession) -> None:
    """Prompt the user for every field until the whole form validates."""
    print("\n  Enter your details (* = required, ? = help, Enter to skip):\n")
    for name in cfg.FIELD_NAMES:
        _prompt_field(session, name)

    while not session.validate():
        for name, error in list(session.errors.items()):
            if error:
                print(f"  {cfg.FIELDS[name][0]}: {error}")
                _prompt_field(session, name)


# ═══════════════════════════════════════════════════════════════════
# Box-drawing CLI output
# ═══════════════════════════════════════════════════════════════════

W = 78  # box width (characters)
H_LINE = "═"


def _box_top(title: str) -> str:
    inner = W - 2
    return (
        f"╔{H_LINE * inner}╗\n"
        f"║  {title:<{inner - 2}}║\n"
        f"╠{H_LINE * inner}╣"
    )


def _box_line(text: str = "") -> str:
    inner = W - 4
    if len(text) > inner:
        text = text[:inner]
    return f"║  {text:<{inner}}║"


def _box_row(label: str, value: str, lw: int = 38) -> str:
    return _box_line(f"{label:<{lw}}{value}")


def _box_bottom() -> str:
    return f"╚{H_LINE * (W - 2)}╝"


def _wrap(text: str, width: int = W - 6) -> List[str]:
    lines = []
    line = ""
    for word in text.split():
        if len(line) + len(word) + 1 <= width:
            line = f"{line} {word}" if line else word
        else:
            lines.append(line)
            line = word
    if line:
        lines.append(line)
    return lines


def _print_section(title: str, rows: List[str]) -> None:
    """Print a titled box with content rows."""
    print(_box_top(title))
    for r in rows:
        print(r)
    print(_box_bottom())
    print()


# ═══════════════════════════════════════════════════════════════════
# CLI Section Printers
# ═══════════════════════════════════════════════════════════════════

def _print_inputs(d: Dict[str, Any]) -> None:
    rows = []
    for name in cfg.FIELD_NAMES:
        label, unit, _ = cfg.FIELDS[name]
        raw = d["values"][name]
        rows.append(_box_row(label, f"{raw} {unit}" if raw else "-"))
    rows.append(_box_line())
    rows.append(_box_row("Distance driven per month",
                         f"{format_indian_number(d['monthly_distance'])} km"))
    _print_section("YOUR INPUTS", rows)


def _print_car(d: Dict[str, Any]) -> None:
    rows = [
        _box_row(f"Total cost ({d['period_label'].lower()})", fmt(d["car_cost"])),
        _box_line(),
        _box_line("Monthly breakdown"),
    ]
    for name, value in d["breakdown"].items():
        share = d["breakdown_shares"][name]
        rows.append(_box_row(f"  {name}", f"{fmt(value)}  ({share:.0f}%)"))
    _print_section("CAR OWNERSHIP", rows)


def _print_commute(d: Dict[str, Any]) -> None:
    rows = [_box_row(f"Total cost ({d['period_label'].lower()})", fmt(d["commute_cost"]))]
    _print_section("PUBLIC TRANSPORT", rows)


def _print_verdict(d: Dict[str, Any]) -> None:
    if d["winner"] == "commute":
        label = "PUBLIC TRANSPORT WINS"
    elif d["winner"] == "car":
        label = "CAR WINS"
    else:
        label = "IT'S A TIE"

    rows = [
        _box_row("Winner", label),
        _box_row("Monthly savings", fmt(d["monthly_savings"])),
        _box_row("Yearly savings", fmt(d["yearly_savings"])),
        _box_line(),
    ]
    rows.extend(_box_line(line) for line in _wrap(generate_verdict_text(d)))
    _print_section("THE VERDICT", rows)


def _print_environment(d: Dict[str, Any]) -> None:
    rows = [
        _box_row("Your carbon footprint", tons(d["yearly_emissions"])),
        _box_line("of CO2 emissions per year from car usage"),
        _box_line(),
    ]
    for tip in d["tips"]:
        wrapped = _wrap(tip, W - 8)
        rows.append(_box_line(f"- {wrapped[0]}"))
        rows.extend(_box_line(f"  {line}") for line in wrapped[1:])
    _print_section("ENVIRONMENTAL IMPACT", rows)


def print_report(d: Dict[str, Any]) -> None:
    _print_inputs(d)
    _print_car(d)
    _print_commute(d)
    _print_verdict(d)
    _print_environment(d)


# ═══════════════════════════════════════════════════════════════════
# Main CLI entry point
# ═══════════════════════════════════════════════════════════════════

def run_cli(view_mode: str = "monthly", pdf_path: Optional[str] = None) -> int:
    """Run the full CLI workflow. Returns a process exit code."""
    # Ensure box-drawing characters render on Windows
    try:
        sys.stdout.reconfigure(encoding="utf-8")
    except (AttributeError, OSError):
        pass
    print()
    print("=" * W)
    print("  Buy a Car vs Commute by Public Transport")
    print("=" * W)

    session = CalculatorSession(view_mode=view_mode)
    collect_inputs(session)

    result = session.calculate()
    if result is None:
        print(f"\n  {session.notice}\n")
        return 1

    d = compute_display_data(session, result)
    print()
    print_report(d)

    if pdf_path:
        print("  Generating PDF report...")
        report.generate_pdf(session, result, d, generate_verdict_text(d), pdf_path)
        print(f"  Saved to {pdf_path}\n")
    return 0


if __name__ == "__main__":
    sys.exit(run_cli())
