import pytest

import config as cfg
from validation import accepts_input, parse_number, validate_field, validate_form


class TestAcceptsInput:

    @pytest.mark.parametrize("text", ["", "0", "123", "12.5", ".5", "5.", "."])
    def test_digits_and_one_point_accepted(self, text):
        assert accepts_input(text)

    @pytest.mark.parametrize("text", ["-1", "1.2.3", "12a", "1,000", " 1", "1e5", "+3"])
    def test_other_text_rejected(self, text):
        assert not accepts_input(text)


class TestParseNumber:

    def test_plain_numbers(self):
        assert parse_number("12.5") == 12.5
        assert parse_number("5.") == 5.0
        assert parse_number(".5") == 0.5

    def test_unparsable_is_none(self):
        assert parse_number("") is None
        assert parse_number(".") is None


class TestValidateField:

    def test_empty_always_valid(self):
        for name in cfg.FIELD_NAMES:
            assert validate_field(name, "") == ""

    @pytest.mark.parametrize("name,message", [
        ("car_price", "Car price must be greater than 0"),
        ("fuel_efficiency", "Fuel efficiency must be greater than 0"),
        ("fuel_price", "Fuel price must be greater than 0"),
        ("resale_years", "Years until resale must be greater than 0"),
    ])
    def test_positive_fields(self, name, message):
        assert validate_field(name, "0") == message
        assert validate_field(name, "-3") == message
        assert validate_field(name, "0.01") == ""

    @pytest.mark.parametrize("days,ok", [
        ("0", False), ("32", False), ("31.5", False),
        ("1", True), ("31", True), ("22", True), ("0.5", True),
    ])
    def test_working_days_bounds(self, days, ok):
        error = validate_field("working_days_per_month", days)
        if ok:
            assert error == ""
        else:
            assert error == "Working days must be between 1 and 31"

    @pytest.mark.parametrize("name", [
        "distance_to_work", "maintenance_costs", "insurance_costs",
        "resale_value", "public_transport_costs",
    ])
    def test_other_fields_non_negative(self, name):
        assert validate_field(name, "0") == ""
        assert validate_field(name, "-1") == "Value cannot be negative"

    def test_lone_point_is_not_an_error(self):
        assert validate_field("car_price", ".") == ""

    def test_unknown_field(self):
        with pytest.raises(ValueError):
            validate_field("horsepower", "10")


class TestValidateForm:

    def test_valid_scenario(self, scenario):
        ok, errors = validate_form(scenario)
        assert ok
        assert set(errors) == set(cfg.FIELD_NAMES)
        assert not any(errors.values())

    def test_missing_car_price_is_required(self, scenario):
        scenario["car_price"] = ""
        ok, errors = validate_form(scenario)
        assert not ok
        assert errors["car_price"] == "This field is required"

    def test_all_required_fields_reported(self):
        ok, errors = validate_form({})
        assert not ok
        for name in cfg.REQUIRED_FIELDS:
            assert errors[name] == cfg.MSG_REQUIRED
        assert errors["distance_to_work"] == ""

    def test_optional_fields_may_be_empty(self, scenario):
        for name in ("distance_to_work", "maintenance_costs", "insurance_costs",
                     "resale_value", "resale_years", "public_transport_costs"):
            scenario[name] = ""
        ok, _ = validate_form(scenario)
        assert ok

    def test_field_errors_collected(self, scenario):
        scenario["working_days_per_month"] = "40"
        scenario["fuel_price"] = "0"
        ok, errors = validate_form(scenario)
        assert not ok
        assert errors["working_days_per_month"] == cfg.MSG_WORKING_DAYS
        assert errors["fuel_price"] == "Fuel price must be greater than 0"
        assert errors["car_price"] == ""
