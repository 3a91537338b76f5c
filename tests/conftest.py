"""
Pytest fixtures for the Buy vs Commute calculator tests.

Provides:
- Repo root on sys.path (the modules are flat top-level scripts)
- Flask test client with an isolated session cookie
- The reference scenario inputs
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


SCENARIO = {
    "car_price": "600000",
    "fuel_efficiency": "15",
    "fuel_price": "100",
    "distance_to_work": "10",
    "working_days_per_month": "22",
    "maintenance_costs": "1000",
    "insurance_costs": "12000",
    "resale_value": "200000",
    "resale_years": "5",
    "public_transport_costs": "2000",
}


@pytest.fixture
def scenario():
    """Fresh copy of the reference inputs."""
    return dict(SCENARIO)


@pytest.fixture
def client():
    """Flask test client; each test gets its own cookie jar."""
    from app import app

    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c
