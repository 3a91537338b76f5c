"""
Cost engine for the Buy vs Commute calculator.

Compares the monthly cost of owning a car (fuel, maintenance, insurance,
depreciation) with a monthly public transport spend, and estimates the
CO2 produced by the car commute.

The engine itself does no validation and no rounding; callers validate
raw form text first (see ``validation.py``) and format for display last
(see ``formatting.py``).
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from typing import Dict, Mapping, Optional

import numpy as np

import config as cfg
from validation import accepts_input, parse_number, validate_field, validate_form

logger = logging.getLogger(__name__)


class CalculationError(Exception):
    """Raised when the arithmetic produces no usable result."""


# ─── Data Classes ─────────────────────────────────────────────────────

@dataclass
class CostInputs:
    """Parsed form values. Empty fields already replaced by defaults."""

    car_price: float = 0.0
    fuel_efficiency: float = 0.0         # km per liter
    fuel_price: float = 0.0              # per liter
    distance_to_work: float = 0.0        # km, one way
    working_days_per_month: float = 0.0
    maintenance_costs: float = 0.0       # monthly
    insurance_costs: float = 0.0         # yearly
    resale_value: float = 0.0
    resale_years: float = 1.0
    public_transport_costs: float = 0.0  # monthly

    @property
    def monthly_distance(self) -> float:
        return self.distance_to_work * cfg.TRIPS_PER_DAY * self.working_days_per_month


@dataclass(frozen=True)
class CalculationResult:
    """Outcome of one calculation. All costs on a monthly basis."""

    total_car_cost: float
    total_commute_cost: float
    monthly_savings: float       # positive: public transport is cheaper
    yearly_savings: float
    fuel_cost: float
    maintenance_cost: float
    insurance_cost: float
    depreciation_cost: float
    yearly_emissions: float      # metric tons CO2

    @property
    def yearly_car_cost(self) -> float:
        return self.total_car_cost * cfg.MONTHS_PER_YEAR

    @property
    def yearly_commute_cost(self) -> float:
        return self.total_commute_cost * cfg.MONTHS_PER_YEAR

    def components(self) -> Dict[str, float]:
        """Monthly car cost breakdown, in summation order."""
        return {
            "Fuel": self.fuel_cost,
            "Maintenance": self.maintenance_cost,
            "Insurance": self.insurance_cost,
            "Depreciation": self.depreciation_cost,
        }

    def car_cost(self, view_mode: str = "monthly") -> float:
        return self.yearly_car_cost if view_mode == "yearly" else self.total_car_cost

    def commute_cost(self, view_mode: str = "monthly") -> float:
        return self.yearly_commute_cost if view_mode == "yearly" else self.total_commute_cost

    def savings(self, view_mode: str = "monthly") -> float:
        return self.yearly_savings if view_mode == "yearly" else self.monthly_savings

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, float]) -> "CalculationResult":
        return cls(**{f.name: float(data[f.name]) for f in fields(cls)})


# ─── Engine ──────────────────────────────────────────────────────────

def parse_inputs(values: Mapping[str, str]) -> CostInputs:
    """Convert raw field text to floats, defaulting empty or unparsable text."""
    parsed = {}
    for name in cfg.FIELD_NAMES:
        num = parse_number(values.get(name, ""))
        # zero falls back to the default too, so resale_years never divides by 0
        parsed[name] = num if num else cfg.FIELD_DEFAULTS[name]
    return CostInputs(**parsed)


def calculate_emissions(monthly_distance: float) -> float:
    """Yearly CO2 in metric tons for a given monthly driving distance."""
    return (monthly_distance * cfg.MONTHS_PER_YEAR * cfg.CO2_KG_PER_KM) / cfg.KG_PER_METRIC_TON


def calculate_costs(inputs: CostInputs) -> CalculationResult:
    """Compute the car vs public transport comparison.

    Depreciation and savings may come out negative (resale above price,
    public transport dearer than the car); they are reported as-is.
    A zero fuel efficiency raises ``ZeroDivisionError``.
    """
    months = cfg.MONTHS_PER_YEAR
    monthly_distance = inputs.monthly_distance

    monthly_fuel = (monthly_distance / inputs.fuel_efficiency) * inputs.fuel_price
    monthly_depreciation = (inputs.car_price - inputs.resale_value) / (inputs.resale_years * months)
    monthly_insurance = inputs.insurance_costs / months

    monthly_car = (
        monthly_fuel
        + inputs.maintenance_costs
        + monthly_insurance
        + monthly_depreciation
    )

    yearly_car = monthly_car * months
    yearly_commute = inputs.public_transport_costs * months

    return CalculationResult(
        total_car_cost=monthly_car,
        total_commute_cost=inputs.public_transport_costs,
        monthly_savings=inputs.public_transport_costs - monthly_car,
        yearly_savings=yearly_commute - yearly_car,
        fuel_cost=monthly_fuel,
        maintenance_cost=inputs.maintenance_costs,
        insurance_cost=monthly_insurance,
        depreciation_cost=monthly_depreciation,
        yearly_emissions=calculate_emissions(monthly_distance),
    )


def run_calculation(values: Mapping[str, str]) -> CalculationResult:
    """Parse raw values and run the engine.

    Any arithmetic failure, or a result with a non-finite number in it,
    is raised as :class:`CalculationError`.
    """
    inputs = parse_inputs(values)
    try:
        result = calculate_costs(inputs)
    except (ZeroDivisionError, OverflowError) as exc:
        raise CalculationError(cfg.MSG_CALCULATION_FAILED) from exc

    numbers = np.array(list(result.to_dict().values()), dtype=float)
    if not np.isfinite(numbers).all():
        raise CalculationError(cfg.MSG_CALCULATION_FAILED)
    return result


def monthly_projection(
    result: CalculationResult,
    months: int = cfg.PROJECTION_MONTHS,
) -> Dict[str, np.ndarray]:
    """Flat month-by-month projection of both monthly costs.

    Returns
    -------
    dict with
        months  : (months,) month numbers 1..months
        car     : (months,) monthly car cost
        commute : (months,) monthly public transport cost
        car_cumulative, commute_cumulative : running totals
    """
    month_idx = np.arange(1, months + 1)
    car = np.full(months, result.total_car_cost)
    commute = np.full(months, result.total_commute_cost)
    return {
        "months": month_idx,
        "car": car,
        "commute": commute,
        "car_cumulative": np.cumsum(car),
        "commute_cumulative": np.cumsum(commute),
    }


# ─── Session ─────────────────────────────────────────────────────────

class CalculatorSession:
    """Form state, errors, last result and display toggles for one user.

    Create one per active session; nothing here is shared between users.
    """

    def __init__(
        self,
        values: Optional[Mapping[str, str]] = None,
        view_mode: str = "monthly",
        chart_type: str = "line",
    ):
        self.values: Dict[str, str] = {name: "" for name in cfg.FIELD_NAMES}
        self.errors: Dict[str, str] = {}
        self.result: Optional[CalculationResult] = None
        self.notice = ""
        self.view_mode = "monthly"
        self.chart_type = "line"
        self.set_view_mode(view_mode)
        self.set_chart_type(chart_type)
        for name, value in (values or {}).items():
            self.update_field(name, value)

    def update_field(self, name: str, value: str) -> bool:
        """Apply one edit. Returns False (and changes nothing) if rejected."""
        if name not in cfg.FIELDS:
            raise ValueError(f"Unknown field: {name}")
        if not accepts_input(value):
            logger.debug("Rejected input for %s: %r", name, value)
            return False
        self.values[name] = value
        self.errors[name] = validate_field(name, value)
        return True

    def validate(self) -> bool:
        is_valid, self.errors = validate_form(self.values)
        return is_valid

    def calculate(self) -> Optional[CalculationResult]:
        """Validate the whole form and, if it passes, replace the result.

        On a calculation failure the notice is set and the previous
        result is kept. Returns the new result, or None.
        """
        if not self.validate():
            return None
        try:
            result = run_calculation(self.values)
        except CalculationError as exc:
            logger.exception("Calculation failed for inputs %s", self.values)
            self.notice = str(exc)
            return None
        self.result = result
        self.notice = ""
        return result

    def set_view_mode(self, mode: str) -> None:
        if mode not in cfg.VIEW_MODES:
            raise ValueError(f"View mode must be one of {cfg.VIEW_MODES}")
        self.view_mode = mode

    def set_chart_type(self, kind: str) -> None:
        if kind not in cfg.CHART_TYPES:
            raise ValueError(f"Chart type must be one of {cfg.CHART_TYPES}")
        self.chart_type = kind
