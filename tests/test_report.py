import base64
import io

import matplotlib.pyplot as plt
import pytest

import report
from calculator import CalculatorSession
from cli import compute_display_data, generate_verdict_text


def _session(values, **kwargs):
    s = CalculatorSession(values, **kwargs)
    assert s.calculate() is not None
    return s


def _is_png(b64):
    return base64.b64decode(b64).startswith(b"\x89PNG")


class TestWebCharts:

    def test_three_png_charts(self, scenario):
        s = _session(scenario)
        images = report.get_web_charts(s, s.result)
        assert len(images) == 3
        assert all(_is_png(img) for img in images)

    def test_area_and_yearly(self, scenario):
        s = _session(scenario, view_mode="yearly", chart_type="area")
        assert len(report.get_web_charts(s, s.result)) == 3

    def test_negative_depreciation_left_out_of_pie(self, scenario):
        scenario["resale_value"] = "900000"
        s = _session(scenario)
        fig = report._chart_breakdown(s.result)
        texts = [t.get_text() for t in fig.texts]
        assert any(t.startswith("Not shown: Depreciation") for t in texts)
        plt.close(fig)

    def test_no_positive_components(self):
        s = _session({
            "car_price": "500000", "resale_value": "500000",
            "fuel_efficiency": "15", "fuel_price": "100",
            "working_days_per_month": "20",
        })
        fig = report._chart_breakdown(s.result)
        plt.close(fig)

    def test_figures_closed(self, scenario):
        s = _session(scenario)
        before = len(plt.get_fignums())
        report.get_web_charts(s, s.result)
        assert len(plt.get_fignums()) == before


class TestPdf:

    def test_pdf_to_buffer(self, scenario):
        s = _session(scenario)
        d = compute_display_data(s, s.result)
        buf = io.BytesIO()
        assert report.generate_pdf(s, s.result, d, generate_verdict_text(d), buf) is buf
        assert buf.getvalue().startswith(b"%PDF")

    def test_figures_closed_when_pdf_write_fails(self, scenario, monkeypatch):
        s = _session(scenario)
        d = compute_display_data(s, s.result)

        def broken_pages(dest):
            raise OSError("disk full")

        monkeypatch.setattr(report, "PdfPages", broken_pages)
        before = len(plt.get_fignums())
        with pytest.raises(OSError):
            report.generate_pdf(s, s.result, d, generate_verdict_text(d), io.BytesIO())
        assert len(plt.get_fignums()) == before


class TestWebChartCleanup:

    def test_figures_closed_when_encoding_fails(self, scenario, monkeypatch):
        s = _session(scenario)

        def broken_encode(fig):
            raise ValueError("cannot encode")

        monkeypatch.setattr(report, "figure_to_base64", broken_encode)
        before = len(plt.get_fignums())
        with pytest.raises(ValueError):
            report.get_web_charts(s, s.result)
        assert len(plt.get_fignums()) == before
