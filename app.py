"""
Flask web application for the Buy vs Commute calculator.

Single-file app using render_template_string.  Run via ``python main.py``
which starts the dev server on localhost:5000.

Form values, the last successful result and the display toggles live in
the signed session cookie, so each browser session has its own
calculator and nothing outlives it.
"""

from __future__ import annotations

import io
import logging
from typing import Any, Dict, Optional

from flask import Flask, abort, jsonify, redirect, render_template_string, request, send_file, session, url_for

import config as cfg
from calculator import CalculationResult, CalculatorSession
from cli import compute_display_data, generate_verdict_text
from formatting import convert_to_words, fmt, tons
import report

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["SECRET_KEY"] = cfg.SECRET_KEY


# ═══════════════════════════════════════════════════════════════════
# Session state
# ═══════════════════════════════════════════════════════════════════

def load_calculator() -> CalculatorSession:
    """Rebuild this browser's calculator from the session cookie."""
    calc = CalculatorSession(
        values=session.get("values", {}),
        view_mode=session.get("view_mode", "monthly"),
        chart_type=session.get("chart_type", "line"),
    )
    stored = session.get("result")
    if stored:
        calc.result = CalculationResult.from_dict(stored)
    return calc


def save_calculator(calc: CalculatorSession) -> None:
    session["values"] = calc.values
    session["view_mode"] = calc.view_mode
    session["chart_type"] = calc.chart_type
    session["result"] = calc.result.to_dict() if calc.result is not None else None


def apply_form(calc: CalculatorSession, form: Dict[str, str]) -> Dict[str, str]:
    """Feed submitted text into the calculator; returns boundary rejections."""
    rejected = {}
    for name in cfg.FIELD_NAMES:
        value = form.get(name, "").strip()
        if not calc.update_field(name, value):
            rejected[name] = cfg.MSG_REJECTED_INPUT
    return rejected


# ═══════════════════════════════════════════════════════════════════
# HTML Template
# ═══════════════════════════════════════════════════════════════════

HTML_TEMPLATE = r"""
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Buy a Car vs Commute</title>
<style>
  *{margin:0;padding:0;box-sizing:border-box}
  :root{
    --bg:#050816;--surface:rgba(15,23,42,0.6);--input:rgba(8,11,22,0.85);
    --border:rgba(59,130,246,0.15);--text:#f1f5f9;--text2:#94a3b8;
    --blue:#3b82f6;--green:#10b981;--red:#f87171;--amber:#fbbf24;
  }
  body{background:var(--bg);color:var(--text);font-family:system-ui,-apple-system,sans-serif;line-height:1.6}
  .container{max-width:1100px;margin:0 auto;padding:2rem 1.5rem}
  .hero{text-align:center;padding:1rem 0 2rem}
  .hero h1{font-size:clamp(1.5rem,4vw,2.3rem);font-weight:800;letter-spacing:-.03em}
  .hero p{color:var(--text2);margin-top:.4rem}
  .card{background:var(--surface);border:1px solid var(--border);border-radius:14px;padding:1.6rem;margin-bottom:1.3rem}
  h2{font-size:1.1rem;font-weight:700;margin-bottom:1rem}
  .form-grid{display:grid;grid-template-columns:repeat(auto-fill,minmax(250px,1fr));gap:1rem 1.5rem}
  .form-group{display:flex;flex-direction:column}
  .form-group label{font-size:.8rem;color:var(--text2);margin-bottom:.3rem;font-weight:500}
  .form-group label .req{color:var(--red);margin-left:.2rem}
  .form-group label .tip{cursor:help;margin-left:.35rem;opacity:.7}
  .input-wrap{position:relative}
  .input-wrap input{width:100%;background:var(--input);border:1px solid rgba(71,85,105,.4);border-radius:9px;
    color:var(--text);padding:.6rem 4.5rem .6rem .85rem;font-size:.9rem}
  .input-wrap input.has-error{border-color:var(--red)}
  .input-wrap .unit{position:absolute;right:.8rem;top:50%;transform:translateY(-50%);color:var(--text2);font-size:.78rem}
  .field-error{color:var(--red);font-size:.75rem;margin-top:.25rem;min-height:1em}
  .field-words{color:var(--text2);font-size:.72rem;font-style:italic}
  .btn{display:inline-block;background:var(--blue);color:#fff;border:none;border-radius:9px;padding:.7rem 1.6rem;
    font-size:.92rem;font-weight:600;cursor:pointer;text-decoration:none;margin-top:1.2rem}
  .notice{background:rgba(248,113,113,.1);border:1px solid rgba(248,113,113,.35);color:var(--red);
    border-radius:10px;padding:.8rem 1rem;margin-bottom:1.3rem}
  .toggles{display:flex;gap:.5rem;flex-wrap:wrap;margin-bottom:1rem}
  .toggle{padding:.3rem .8rem;border-radius:8px;background:rgba(148,163,184,.12);color:var(--text2);
    text-decoration:none;font-size:.8rem;font-weight:600}
  .toggle.active{background:var(--blue);color:#fff}
  .results{display:grid;grid-template-columns:repeat(auto-fit,minmax(300px,1fr));gap:1.3rem}
  .stat-row{display:flex;justify-content:space-between;padding:.3rem 0;border-bottom:1px solid rgba(148,163,184,.08)}
  .stat-label{color:var(--text2)}
  .stat-value{font-weight:700}
  .sub .stat-row{font-size:.85rem}
  .car h2{color:var(--blue)} .commute h2{color:var(--green)}
  .verdict{text-align:center}
  .verdict-winner{font-size:1.4rem;font-weight:800;margin:.3rem 0}
  .verdict-text{color:var(--text2);max-width:720px;margin:.6rem auto 0}
  .emissions{font-size:1.6rem;font-weight:800;color:var(--green)}
  .tips li{margin:.35rem 0 .35rem 1.2rem;color:var(--text2)}
  .chart-img{width:100%;border-radius:10px;margin-top:.5rem}
  .footer{text-align:center;color:var(--text2);font-size:.75rem;padding:1.5rem 0}
</style>
</head>
<body>
<div class="container">

<div class="hero">
  <h1>Buy a Car or Take Public Transport?</h1>
  <p>Compare the real monthly cost of owning a car with your commute.</p>
</div>

<form method="post" action="/" id="calc-form" class="card" autocomplete="off">
  <h2>Your Details</h2>
  <div class="form-grid">
  {% for name, meta in fields.items() %}
    <div class="form-group">
      <label for="{{ name }}">{{ meta[0] }}
        {% if name in required %}<span class="req">*</span>{% endif %}
        <span class="tip" title="{{ meta[2] }}">&#9432;</span>
      </label>
      <div class="input-wrap">
        <input type="text" inputmode="decimal" id="{{ name }}" name="{{ name }}" placeholder="0"
               value="{{ values[name] }}" class="{{ 'has-error' if errors.get(name) }}">
        <span class="unit">{{ meta[1] }}</span>
      </div>
      <div class="field-error" id="{{ name }}-error">{{ errors.get(name, '') }}</div>
      <div class="field-words" id="{{ name }}-words">{% if values[name] and not errors.get(name) %}{{ words(values[name]) }} {{ meta[1] }}{% endif %}</div>
    </div>
  {% endfor %}
  </div>
  <button type="submit" class="btn">Calculate</button>
</form>

{% if notice %}
<div class="notice">{{ notice }}</div>
{% endif %}

{% if d %}
<div class="toggles">
  <a class="toggle {{ 'active' if d.view_mode == 'monthly' }}" href="/view/monthly">Monthly</a>
  <a class="toggle {{ 'active' if d.view_mode == 'yearly' }}" href="/view/yearly">Yearly</a>
  <a class="toggle {{ 'active' if d.chart_type == 'line' }}" href="/chart/line">Line</a>
  <a class="toggle {{ 'active' if d.chart_type == 'area' }}" href="/chart/area">Area</a>
</div>

<div class="results">
  <div class="card car">
    <h2>Car Ownership</h2>
    <div class="stat-row"><span class="stat-label">Total Cost ({{ d.period_label }})</span><span class="stat-value">{{ fmt(d.car_cost) }}</span></div>
    <div class="sub">
    {% for name, value in d.breakdown.items() %}
      <div class="stat-row"><span class="stat-label">{{ name }}</span><span>{{ fmt(value) }}</span></div>
    {% endfor %}
    </div>
  </div>
  <div class="card commute">
    <h2>Public Transport</h2>
    <div class="stat-row"><span class="stat-label">Total Cost ({{ d.period_label }})</span><span class="stat-value">{{ fmt(d.commute_cost) }}</span></div>
  </div>
</div>

<div class="card verdict">
  <h2>The Verdict</h2>
  <div class="verdict-winner">
    {% if d.winner == 'commute' %}Public transport wins{% elif d.winner == 'car' %}The car wins{% else %}It's a tie{% endif %}
  </div>
  <div>by {{ fmt(d.advantage) }} per {{ d.period }}</div>
  <p class="verdict-text">{{ verdict_text }}</p>
</div>

{% for img in charts %}
<div class="card">
  <img class="chart-img" src="data:image/png;base64,{{ img }}" alt="Chart {{ loop.index }}">
</div>
{% endfor %}

<div class="card">
  <h2>Environmental Impact</h2>
  <p class="stat-label">Your Carbon Footprint:</p>
  <div class="emissions">{{ tons(d.yearly_emissions) }}</div>
  <p class="stat-label">of CO2 emissions per year from car usage</p>
  <ul class="tips">
  {% for tip in d.tips %}<li>{{ tip }}</li>{% endfor %}
  </ul>
</div>

<div style="text-align:center"><a href="/download-pdf" class="btn">Download PDF Report</a></div>
{% endif %}

<div class="footer">All figures are estimates. Nothing you enter is stored after you close the browser.</div>
</div>

<script>
(function(){
  var allowed=['Backspace','Delete','Tab','Escape','Enter','ArrowLeft','ArrowRight','ArrowUp','ArrowDown','Home','End'];
  document.querySelectorAll('#calc-form input').forEach(function(input){
    input.addEventListener('keydown',function(e){
      if(e.ctrlKey||e.metaKey||allowed.indexOf(e.key)!==-1) return;
      if(e.key==='.'){ if(input.value.indexOf('.')!==-1) e.preventDefault(); return; }
      if(!/^\d$/.test(e.key)) e.preventDefault();
    });
    input.addEventListener('input',function(){
      fetch('/validate',{method:'POST',headers:{'Content-Type':'application/json'},
        body:JSON.stringify({name:input.name,value:input.value})})
      .then(function(r){return r.json()})
      .then(function(res){
        var err=document.getElementById(input.name+'-error');
        var words=document.getElementById(input.name+'-words');
        var unit=input.parentNode.querySelector('.unit').textContent;
        err.textContent=res.error;
        input.classList.toggle('has-error',!!res.error);
        words.textContent=(res.words&&!res.error)?res.words+' '+unit:'';
      });
    });
  });
})();
</script>
</body>
</html>
"""


def _render(calc: CalculatorSession, errors: Optional[Dict[str, str]] = None):
    d: Optional[Dict[str, Any]] = None
    charts = []
    verdict_text = ""
    if calc.result is not None:
        d = compute_display_data(calc, calc.result)
        verdict_text = generate_verdict_text(d)
        charts = report.get_web_charts(calc, calc.result)

    return render_template_string(
        HTML_TEMPLATE,
        fields=cfg.FIELDS,
        required=cfg.REQUIRED_FIELDS,
        values=calc.values,
        errors=errors if errors is not None else calc.errors,
        notice=calc.notice,
        d=d,
        charts=charts,
        verdict_text=verdict_text,
        fmt=fmt,
        tons=tons,
        words=convert_to_words,
    )


# ═══════════════════════════════════════════════════════════════════
# Routes
# ═══════════════════════════════════════════════════════════════════

@app.route("/", methods=["GET", "POST"])
def index():
    calc = load_calculator()
    if request.method == "GET":
        return _render(calc)

    # POST — validate and calculate
    form = request.form.to_dict()
    rejected = apply_form(calc, form)
    if rejected:
        calc.validate()
        errors = {**calc.errors, **rejected}
        save_calculator(calc)
        return _render(calc, errors)

    if calc.calculate() is None:
        logger.debug("No new result: %s", {k: v for k, v in calc.errors.items() if v})
    save_calculator(calc)
    return _render(calc)


@app.route("/validate", methods=["POST"])
def validate():
    """Per-keystroke check of a single field."""
    payload = request.get_json(silent=True) or {}
    name = payload.get("name", "")
    value = str(payload.get("value", ""))
    if name not in cfg.FIELDS:
        return jsonify({"error": f"Unknown field: {name}"}), 400

    calc = load_calculator()
    accepted = calc.update_field(name, value)
    if accepted:
        save_calculator(calc)
    error = calc.errors.get(name, "") if accepted else cfg.MSG_REJECTED_INPUT
    return jsonify({
        "accepted": accepted,
        "error": error,
        "words": convert_to_words(value) if accepted and not error else "",
    })


@app.route("/view/<mode>")
def set_view(mode: str):
    calc = load_calculator()
    try:
        calc.set_view_mode(mode)
    except ValueError:
        abort(404)
    save_calculator(calc)
    return redirect(url_for("index"))


@app.route("/chart/<kind>")
def set_chart(kind: str):
    calc = load_calculator()
    try:
        calc.set_chart_type(kind)
    except ValueError:
        abort(404)
    save_calculator(calc)
    return redirect(url_for("index"))


@app.route("/download-pdf")
def download_pdf():
    calc = load_calculator()
    if calc.result is None:
        return "No report generated yet. Run a calculation first.", 404

    d = compute_display_data(calc, calc.result)
    buf = io.BytesIO()
    report.generate_pdf(calc, calc.result, d, generate_verdict_text(d), buf)
    buf.seek(0)
    return send_file(buf, mimetype="application/pdf", as_attachment=True,
                     download_name=cfg.PDF_FILENAME)


# ═══════════════════════════════════════════════════════════════════
# Entry point
# ═══════════════════════════════════════════════════════════════════

def run_web(debug: bool = True) -> None:
    """Start the Flask development server and open browser."""
    import webbrowser
    import threading

    url = f"http://{cfg.WEB_HOST}:{cfg.WEB_PORT}"
    logger.info("Starting web app at %s", url)
    if cfg.OPEN_BROWSER:
        threading.Timer(1.0, lambda: webbrowser.open(url)).start()
    app.run(host=cfg.WEB_HOST, port=cfg.WEB_PORT, debug=debug)


if __name__ == "__main__":
    run_web()
