"""
Input validation for the Buy vs Commute calculator.

Values arrive as the raw text the user typed. Each field is checked on
its own (no cross-field rules); a separate whole-form pass adds the
required-field check and gates the calculation.
"""

from __future__ import annotations

import re
from typing import Dict, Mapping, Optional, Tuple

import config as cfg

_NUMERIC_TEXT = re.compile(r"^\d*\.?\d*$")


def accepts_input(value: str) -> bool:
    """True if *value* is digits with at most one decimal point (or empty)."""
    return bool(_NUMERIC_TEXT.match(value))


def parse_number(value: str) -> Optional[float]:
    """Parse raw field text; None for empty or unparsable text such as '.'."""
    try:
        return float(value)
    except ValueError:
        return None


def validate_field(name: str, value: str) -> str:
    """Return an error message for one field, or '' when it is valid.

    Empty text is always valid here; required fields are only enforced by
    :func:`validate_form`. Text that does not parse to a number fails no
    bound and is therefore valid.
    """
    if name not in cfg.FIELDS:
        raise ValueError(f"Unknown field: {name}")
    if value == "":
        return ""

    num = parse_number(value)
    if num is None:
        return ""

    if name in cfg.POSITIVE_FIELDS:
        return f"{cfg.POSITIVE_FIELDS[name]} must be greater than 0" if num <= 0 else ""
    if name == "working_days_per_month":
        return cfg.MSG_WORKING_DAYS if num <= 0 or num > cfg.MAX_WORKING_DAYS else ""
    return cfg.MSG_NEGATIVE if num < 0 else ""


def validate_form(values: Mapping[str, str]) -> Tuple[bool, Dict[str, str]]:
    """Validate every field plus required-field presence.

    Returns
    -------
    is_valid : bool
        True when no field carries an error.
    errors : dict
        Field name -> message ('' for valid fields), for every field.
    """
    errors = {name: validate_field(name, values.get(name, "")) for name in cfg.FIELD_NAMES}

    for name in cfg.REQUIRED_FIELDS:
        if not values.get(name, ""):
            errors[name] = cfg.MSG_REQUIRED

    is_valid = not any(errors.values())
    return is_valid, errors
