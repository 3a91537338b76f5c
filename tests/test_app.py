import config as cfg


def _text(resp):
    return resp.get_data(as_text=True)


class TestIndex:

    def test_get_renders_form(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        body = _text(resp)
        assert "Your Details" in body
        for name in cfg.FIELD_NAMES:
            assert f'name="{name}"' in body
        assert "Car Ownership" not in body

    def test_post_scenario_shows_results(self, client, scenario):
        resp = client.post("/", data=scenario)
        assert resp.status_code == 200
        body = _text(resp)
        assert "Car Ownership" in body
        assert "₹11.60 K" in body
        assert "₹2.00 K" in body
        assert "The car wins" in body
        assert "2.13 metric tons" in body
        assert body.count("data:image/png;base64,") == 3

    def test_missing_required_field(self, client, scenario):
        scenario["car_price"] = ""
        body = _text(client.post("/", data=scenario))
        assert "This field is required" in body
        assert "Car Ownership" not in body

    def test_rejected_text_blocks_calculation(self, client, scenario):
        scenario["fuel_price"] = "1OO"
        body = _text(client.post("/", data=scenario))
        assert cfg.MSG_REJECTED_INPUT in body
        assert "Car Ownership" not in body

    def test_failure_keeps_previous_result(self, client, scenario):
        client.post("/", data=scenario)
        scenario["fuel_efficiency"] = "."
        body = _text(client.post("/", data=scenario))
        assert cfg.MSG_CALCULATION_FAILED in body
        assert "Car Ownership" in body
        assert "₹11.60 K" in body

    def test_result_survives_reload_in_same_session(self, client, scenario):
        client.post("/", data=scenario)
        body = _text(client.get("/"))
        assert "Car Ownership" in body


class TestValidateEndpoint:

    def test_field_error(self, client):
        resp = client.post("/validate", json={"name": "working_days_per_month", "value": "32"})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data == {"accepted": True, "error": cfg.MSG_WORKING_DAYS, "words": ""}

    def test_words_for_valid_value(self, client):
        data = client.post("/validate", json={"name": "car_price", "value": "1500"}).get_json()
        assert data["error"] == ""
        assert data["words"] == "1.50 thousand"

    def test_rejected_text(self, client):
        data = client.post("/validate", json={"name": "car_price", "value": "1.2.3"}).get_json()
        assert data["accepted"] is False
        assert data["error"] == cfg.MSG_REJECTED_INPUT

    def test_unknown_field(self, client):
        resp = client.post("/validate", json={"name": "colour", "value": "1"})
        assert resp.status_code == 400

    def test_keystrokes_are_kept_in_session(self, client):
        client.post("/validate", json={"name": "car_price", "value": "750000"})
        assert 'value="750000"' in _text(client.get("/"))


class TestToggles:

    def test_yearly_view(self, client, scenario):
        client.post("/", data=scenario)
        resp = client.get("/view/yearly")
        assert resp.status_code == 302
        body = _text(client.get("/"))
        assert "Total Cost (Yearly)" in body
        assert "₹24.00 K" in body

    def test_chart_type(self, client, scenario):
        client.post("/", data=scenario)
        assert client.get("/chart/area").status_code == 302
        body = _text(client.get("/"))
        assert 'class="toggle active" href="/chart/area"' in body

    def test_unknown_values(self, client):
        assert client.get("/view/weekly").status_code == 404
        assert client.get("/chart/pie").status_code == 404


class TestDownloadPdf:

    def test_before_calculation(self, client):
        assert client.get("/download-pdf").status_code == 404

    def test_after_calculation(self, client, scenario):
        client.post("/", data=scenario)
        resp = client.get("/download-pdf")
        assert resp.status_code == 200
        assert resp.mimetype == "application/pdf"
        assert resp.data.startswith(b"%PDF")
