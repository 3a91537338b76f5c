"""
PDF report generation and reusable chart rendering for the
Buy vs Commute calculator.

Provides:
  - Multi-page PDF report (generate_pdf)
  - Base64-encoded chart images for web embedding (get_web_charts)
  - Individual chart renderers shared by both
"""

from __future__ import annotations

import base64
import io
from typing import IO, Any, Dict, List, Union

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.ticker import FuncFormatter

import config as cfg
from calculator import CalculationResult, CalculatorSession, monthly_projection
from formatting import fmt, format_indian_number, tons

# ═══════════════════════════════════════════════════════════════════
# Style constants
# ═══════════════════════════════════════════════════════════════════

BG = "#0a101f"
CARD = "#131b2e"
TEXT = "#f1f5f9"
TEXT2 = "#cbd5e1"
BLUE = "#0088FE"
GREEN = "#00C49F"
AMBER = "#FFBB28"
ORANGE = "#FF8042"
SLATE = "#94a3b8"
BORDER = "#1e293b"

PIE_COLORS = [BLUE, GREEN, AMBER, ORANGE]

A4W, A4H = 8.27, 11.69
WEB_W, WEB_H = 10, 6


# ═══════════════════════════════════════════════════════════════════
# Axis formatters
# ═══════════════════════════════════════════════════════════════════

def _inr_fmt(x, _):
    return f"₹{format_indian_number(x)}"


INR_FMT = FuncFormatter(_inr_fmt)


# ═══════════════════════════════════════════════════════════════════
# Style helpers
# ═══════════════════════════════════════════════════════════════════

def _style(fig, *axes):
    """Apply dark theme to figure and all axes."""
    fig.patch.set_facecolor(BG)
    for ax in axes:
        ax.set_facecolor(CARD)
        ax.tick_params(colors=TEXT, labelsize=8)
        ax.xaxis.label.set_color(TEXT)
        ax.yaxis.label.set_color(TEXT)
        ax.title.set_color(TEXT)
        for spine in ax.spines.values():
            spine.set_color(BORDER)
        ax.grid(True, alpha=0.15, color=SLATE)


def _legend(ax, loc="upper left"):
    ax.legend(loc=loc, fontsize=8, facecolor=CARD, edgecolor=BORDER, labelcolor=TEXT)


# ═══════════════════════════════════════════════════════════════════
# Chart 1 — 12-month cost comparison (line or area)
# ═══════════════════════════════════════════════════════════════════

def _chart_comparison(result: CalculationResult, chart_type: str = "line",
                      figsize=(WEB_W, WEB_H)) -> plt.Figure:
    proj = monthly_projection(result)
    x = proj["months"]

    fig, ax = plt.subplots(figsize=figsize)
    _style(fig, ax)

    for key, label, color in (("car", "Car", BLUE), ("commute", "Public Transport", GREEN)):
        y = proj[key]
        if chart_type == "area":
            ax.fill_between(x, 0, y, color=color, alpha=0.2)
            ax.plot(x, y, color=color, linewidth=2, label=label)
        else:
            ax.plot(x, y, color=color, linewidth=2, marker="o", markersize=4, label=label)

    ax.set_xticks(x)
    ax.set_xticklabels([f"Month {m}" for m in x], rotation=45, ha="right")
    ax.yaxis.set_major_formatter(INR_FMT)
    ax.set_ylabel("Monthly cost")
    ax.set_title("Cost Comparison", fontsize=12, fontweight="bold")
    _legend(ax)
    fig.tight_layout()
    return fig


# ═══════════════════════════════════════════════════════════════════
# Chart 2 — monthly / yearly totals
# ═══════════════════════════════════════════════════════════════════

def _chart_totals(result: CalculationResult, view_mode: str = "monthly",
                  figsize=(WEB_W, WEB_H - 1)) -> plt.Figure:
    labels = ["Car", "Public Transport"]
    values = [result.car_cost(view_mode), result.commute_cost(view_mode)]

    fig, ax = plt.subplots(figsize=figsize)
    _style(fig, ax)
    bars = ax.bar(labels, values, color=[BLUE, GREEN], width=0.5)
    for bar, val in zip(bars, values):
        ax.annotate(fmt(val), (bar.get_x() + bar.get_width() / 2, bar.get_height()),
                    textcoords="offset points", xytext=(0, 4), ha="center",
                    fontsize=9, color=TEXT, fontweight="bold")
    ax.yaxis.set_major_formatter(INR_FMT)
    period = "Yearly" if view_mode == "yearly" else "Monthly"
    ax.set_title(f"{period} Total Cost", fontsize=12, fontweight="bold")
    fig.tight_layout()
    return fig


# ═══════════════════════════════════════════════════════════════════
# Chart 3 — car cost breakdown
# ═══════════════════════════════════════════════════════════════════

def _chart_breakdown(result: CalculationResult, figsize=(WEB_W, WEB_H)) -> plt.Figure:
    """Pie of the monthly car cost components.

    A pie cannot show negative or zero wedges (e.g. a resale value above
    the purchase price); those components are listed underneath instead.
    """
    comps = result.components()
    shown = {k: v for k, v in comps.items() if v > 0}
    left_out = {k: v for k, v in comps.items() if v <= 0}

    fig, ax = plt.subplots(figsize=figsize)
    _style(fig, ax)
    ax.grid(False)

    if shown:
        colors = [PIE_COLORS[list(comps).index(k)] for k in shown]
        total = sum(shown.values())
        labels = [f"{k} ({fmt(v)}) {v / total * 100:.0f}%" for k, v in shown.items()]
        ax.pie(list(shown.values()), labels=labels, colors=colors, startangle=90,
               wedgeprops={"edgecolor": BG}, textprops={"color": TEXT, "fontsize": 9})
        ax.axis("equal")
    else:
        ax.axis("off")
        ax.text(0.5, 0.5, "No positive cost components", ha="center",
                va="center", color=TEXT2, transform=ax.transAxes)

    if left_out:
        note = ", ".join(f"{k}: {fmt(v)}" for k, v in left_out.items())
        fig.text(0.5, 0.03, f"Not shown: {note}", ha="center", fontsize=8, color=SLATE)

    ax.set_title("Car Cost Breakdown (monthly)", fontsize=12, fontweight="bold", color=TEXT)
    return fig


# ═══════════════════════════════════════════════════════════════════
# Page 1 — Summary (text only, dark background)
# ═══════════════════════════════════════════════════════════════════

def _page_summary(session: CalculatorSession, d: Dict[str, Any],
                  verdict_text: str) -> plt.Figure:
    fig = plt.figure(figsize=(A4W, A4H))
    fig.patch.set_facecolor(BG)

    fig.text(0.50, 0.93, "Buy a Car vs Commute", ha="center",
             fontsize=18, color=TEXT, fontweight="bold")
    fig.text(0.50, 0.91, f"{d['period_label']} Cost Report", ha="center",
             fontsize=11, color=TEXT2)

    y = 0.86
    fig.text(0.08, y, "Your Inputs", fontsize=13, color=TEXT, fontweight="bold")
    y -= 0.028
    for name in cfg.FIELD_NAMES:
        label, unit, _ = cfg.FIELDS[name]
        raw = session.values.get(name, "")
        fig.text(0.10, y, f"{label}: {raw + ' ' + unit if raw else '-'}",
                 fontsize=9, color=TEXT2)
        y -= 0.022

    y -= 0.02
    fig.text(0.08, y, "Car Ownership", fontsize=13, color=BLUE, fontweight="bold")
    y -= 0.028
    fig.text(0.10, y, f"Total cost ({d['period']}): {fmt(d['car_cost'])}",
             fontsize=9.5, color=TEXT2)
    y -= 0.024
    for name, value in d["breakdown"].items():
        fig.text(0.12, y, f"{name}: {fmt(value)} / month", fontsize=9, color=TEXT2)
        y -= 0.022

    y -= 0.02
    fig.text(0.08, y, "Public Transport", fontsize=13, color=GREEN, fontweight="bold")
    y -= 0.028
    fig.text(0.10, y, f"Total cost ({d['period']}): {fmt(d['commute_cost'])}",
             fontsize=9.5, color=TEXT2)

    y -= 0.045
    fig.text(0.08, y, "Verdict", fontsize=13, color=AMBER, fontweight="bold")
    y -= 0.028
    fig.text(0.10, y, verdict_text, fontsize=9.5, color=TEXT2, wrap=True,
             va="top")

    y -= 0.08
    fig.text(0.08, y, "Environmental Impact", fontsize=13, color=GREEN, fontweight="bold")
    y -= 0.028
    fig.text(0.10, y, f"{tons(d['yearly_emissions'])} of CO2 per year from car usage",
             fontsize=9.5, color=TEXT2)
    return fig


# ═══════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════

def figure_to_base64(fig: plt.Figure) -> str:
    """Convert a matplotlib figure to a base64-encoded PNG string."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", facecolor=fig.get_facecolor(),
                dpi=120, bbox_inches="tight")
    buf.seek(0)
    b64 = base64.b64encode(buf.read()).decode()
    buf.close()
    return b64


def generate_pdf(
    session: CalculatorSession,
    result: CalculationResult,
    d: Dict[str, Any],
    verdict_text: str,
    dest: Union[str, IO[bytes]] = cfg.PDF_FILENAME,
) -> Union[str, IO[bytes]]:
    """Write the PDF report to a path or binary buffer and return *dest*."""
    pages = []
    try:
        pages.append(_page_summary(session, d, verdict_text))
        pages.append(_chart_comparison(result, session.chart_type, figsize=(A4W, A4H * 0.5)))
        pages.append(_chart_totals(result, session.view_mode, figsize=(A4W, A4H * 0.45)))
        pages.append(_chart_breakdown(result, figsize=(A4W, A4H * 0.5)))
        with PdfPages(dest) as pdf:
            for fig in pages:
                pdf.savefig(fig, facecolor=fig.get_facecolor())
    finally:
        for fig in pages:
            plt.close(fig)
    return dest


def get_web_charts(session: CalculatorSession, result: CalculationResult) -> List[str]:
    """Return base64-encoded PNG chart images for web embedding.

    Returns 3 charts:
      [0] Cost Comparison  (12 months, line or area per chart_type)
      [1] Totals           (bar, monthly or yearly per view_mode)
      [2] Car Cost Breakdown  (pie)
    """
    chart_figs = []
    try:
        chart_figs.append(_chart_comparison(result, session.chart_type))
        chart_figs.append(_chart_totals(result, session.view_mode))
        chart_figs.append(_chart_breakdown(result))
        return [figure_to_base64(f) for f in chart_figs]
    finally:
        for f in chart_figs:
            plt.close(f)
