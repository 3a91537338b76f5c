"""
Constants for the Buy vs Commute calculator.

All monetary values in INR. Costs are entered either per month or per
year as noted on each field; the engine works on a monthly basis.
"""

import os

# ── Form fields ──────────────────────────────────────────────────────
# name -> (label, unit, tooltip)
FIELDS = {
    "car_price": (
        "Car Price", "₹",
        "The purchase price of the vehicle including taxes and registration",
    ),
    "fuel_efficiency": (
        "Fuel Efficiency", "km/L",
        "Average kilometers traveled per liter of fuel",
    ),
    "fuel_price": (
        "Fuel Price", "₹/L",
        "Current fuel price per liter",
    ),
    "distance_to_work": (
        "Distance to Work", "km",
        "One-way distance to your workplace",
    ),
    "working_days_per_month": (
        "Working Days per Month", "days",
        "Number of days you commute to work per month",
    ),
    "maintenance_costs": (
        "Monthly Maintenance", "₹/month",
        "Expected monthly maintenance costs including servicing, repairs, etc.",
    ),
    "insurance_costs": (
        "Yearly Insurance", "₹/year",
        "Annual insurance premium for the vehicle",
    ),
    "resale_value": (
        "Expected Resale Value", "₹",
        "Expected resale value after planned usage period",
    ),
    "resale_years": (
        "Years Until Resale", "years",
        "Number of years after which you plan to sell the vehicle",
    ),
    "public_transport_costs": (
        "Monthly Public Transport", "₹/month",
        "Monthly expenses on public transportation",
    ),
}
FIELD_NAMES = list(FIELDS)

REQUIRED_FIELDS = (
    "car_price",
    "fuel_efficiency",
    "fuel_price",
    "working_days_per_month",
)

# Fields that must be strictly positive, with the message prefix used
POSITIVE_FIELDS = {
    "car_price": "Car price",
    "fuel_efficiency": "Fuel efficiency",
    "fuel_price": "Fuel price",
    "resale_years": "Years until resale",
}

MAX_WORKING_DAYS = 31

# Parsed value when a field is left empty
FIELD_DEFAULTS = {name: 0.0 for name in FIELD_NAMES}
FIELD_DEFAULTS["resale_years"] = 1.0

# ── Messages ─────────────────────────────────────────────────────────
MSG_REQUIRED = "This field is required"
MSG_NEGATIVE = "Value cannot be negative"
MSG_WORKING_DAYS = f"Working days must be between 1 and {MAX_WORKING_DAYS}"
MSG_REJECTED_INPUT = "Only digits and a single decimal point are allowed"
MSG_CALCULATION_FAILED = "An error occurred while calculating. Please check your inputs."

# ── Engine ───────────────────────────────────────────────────────────
MONTHS_PER_YEAR = 12
TRIPS_PER_DAY = 2                  # there and back
CO2_KG_PER_KM = 0.404              # average passenger car
KG_PER_METRIC_TON = 1000

PROJECTION_MONTHS = 12

VIEW_MODES = ("monthly", "yearly")
CHART_TYPES = ("line", "area")

# ── Indian numbering bands: (threshold, short suffix, word) ──────────
MAGNITUDE_BANDS = [
    (10_000_000, "Cr", "crores"),
    (100_000, "L", "lakhs"),
    (1_000, "K", "thousand"),
]

CURRENCY_SYMBOL = "₹"

ENVIRONMENTAL_TIPS = [
    "Using public transport can reduce your carbon footprint by up to 4,800 pounds of CO2 per year",
    "One full bus can take 60 cars off the road",
    "Public transportation uses 50% less fuel per passenger mile than private vehicles",
    "Choosing public transit over private vehicles helps reduce air pollution and traffic congestion",
]

# ── Web server ───────────────────────────────────────────────────────
WEB_HOST = os.environ.get("BVC_HOST", "127.0.0.1")
WEB_PORT = int(os.environ.get("BVC_PORT", "5000"))
SECRET_KEY = os.environ.get("BVC_SECRET_KEY") or os.urandom(24).hex()
OPEN_BROWSER = os.environ.get("BVC_OPEN_BROWSER", "true").lower() in {"1", "true", "yes", "on"}

PDF_FILENAME = "buy_vs_commute_report.pdf"
