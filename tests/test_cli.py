import pytest

import config as cfg
import cli
from calculator import CalculatorSession


def _feed(monkeypatch, answers):
    it = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(it))


class TestDisplayData:

    def test_car_wins_reference_scenario(self, scenario):
        s = CalculatorSession(scenario)
        d = cli.compute_display_data(s, s.calculate())
        assert d["winner"] == "car"
        assert d["advantage"] == pytest.approx(9600.0, abs=0.01)
        assert d["monthly_distance"] == 440.0
        assert d["period"] == "month"
        assert sum(d["breakdown_shares"].values()) == pytest.approx(100.0)

    def test_yearly_view_scales_display_only(self, scenario):
        s = CalculatorSession(scenario, view_mode="yearly")
        result = s.calculate()
        d = cli.compute_display_data(s, result)
        assert d["car_cost"] == pytest.approx(result.total_car_cost * 12)
        assert d["commute_cost"] == 24000.0
        assert d["breakdown"]["Fuel"] == result.fuel_cost

    def test_commute_wins(self, scenario):
        scenario["public_transport_costs"] = "20000"
        s = CalculatorSession(scenario)
        d = cli.compute_display_data(s, s.calculate())
        assert d["winner"] == "commute"
        assert "Public transport is cheaper" in cli.generate_verdict_text(d)

    def test_verdict_mentions_amount(self, scenario):
        s = CalculatorSession(scenario)
        d = cli.compute_display_data(s, s.calculate())
        text = cli.generate_verdict_text(d)
        assert text.startswith("Owning the car is cheaper by ₹9.60 K per month")
        assert "2.13 metric tons" in text


class TestRunCli:

    def test_full_run(self, monkeypatch, capsys, scenario):
        _feed(monkeypatch, [scenario[name] for name in cfg.FIELD_NAMES])
        assert cli.run_cli() == 0
        out = capsys.readouterr().out
        assert "CAR OWNERSHIP" in out
        assert "CAR WINS" in out
        assert "₹11.60 K" in out
        assert "2.13 metric tons" in out

    def test_bad_entries_reprompt(self, monkeypatch, capsys, scenario):
        answers = ["abc", "", "0", "?"] + [scenario[name] for name in cfg.FIELD_NAMES]
        _feed(monkeypatch, answers)
        assert cli.run_cli(view_mode="yearly") == 0
        out = capsys.readouterr().out
        assert cfg.MSG_REJECTED_INPUT in out
        assert cfg.MSG_REQUIRED in out
        assert "Car price must be greater than 0" in out
        assert cfg.FIELDS["car_price"][2] in out
        assert "Total cost (yearly)" in out

    def test_calculation_failure_exit_code(self, monkeypatch, capsys, scenario):
        scenario["fuel_efficiency"] = "."
        _feed(monkeypatch, [scenario[name] for name in cfg.FIELD_NAMES])
        assert cli.run_cli() == 1
        assert cfg.MSG_CALCULATION_FAILED in capsys.readouterr().out

    def test_pdf_written(self, monkeypatch, tmp_path, scenario):
        _feed(monkeypatch, [scenario[name] for name in cfg.FIELD_NAMES])
        path = tmp_path / "report.pdf"
        assert cli.run_cli(pdf_path=str(path)) == 0
        assert path.read_bytes().startswith(b"%PDF")
