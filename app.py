"""Serum ethanol Flask API.

Run from project root:
    python app.py

Quantities in request bodies are either a bare number in the field's
default unit or ``{"value": x, "unit": "symbol"}``.
"""

import os
from typing import Any

from flask import Flask, jsonify, request

from serum_ethanol.calculations import (
    ebac,
    ebac_curve,
    elimination_time,
    ethanol_ingested,
    peak_serum_ethanol,
)
from serum_ethanol.clinical import CLINICAL_EFFECTS, classify
from serum_ethanol.constants import PROFILES, profile_for
from serum_ethanol.drinks import DRINK_TYPES
from serum_ethanol.exceptions import UnitError
from serum_ethanol.logger import LOGGER, configure_logging
from serum_ethanol.units import (
    Quantity,
    Unit,
    g_per_dl_per_h,
    grams,
    hours,
    kilograms,
    l_per_kg,
    liters,
    mg_per_dl,
    milliliters,
    parse_unit,
    require,
)

app = Flask(__name__)

MAX_CURVE_POINTS = 2000


class RequestError(ValueError):
    """Invalid request body."""


def _parse_quantity(data: dict[str, Any], key: str, default_unit: Unit, required: bool = True) -> Quantity | None:
    raw = data.get(key)
    if raw is None:
        if required:
            raise RequestError(f"{key} is required")
        return None

    unit = default_unit
    if isinstance(raw, dict):
        if "unit" in raw:
            unit = parse_unit(str(raw["unit"]))
        raw = raw.get("value")

    if isinstance(raw, bool):
        raise RequestError(f"{key} must be a number")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise RequestError(f"{key} must be a number")
    return require(Quantity.of(value, unit), default_unit.dimension, key)


def _parse_fraction(data: dict[str, Any], key: str) -> float:
    raw = data.get(key)
    if raw is None or isinstance(raw, bool):
        raise RequestError(f"{key} is required")
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise RequestError(f"{key} must be a number")


def _json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RequestError("request body must be a JSON object")
    return data


def _profile_from(data: dict[str, Any]):
    return profile_for(str(data.get("profile", "population")))


def _quantity_payload(quantity: Quantity, unit: Unit) -> dict[str, Any]:
    return {"value": round(quantity.to(unit), 6), "unit": unit.symbol}


def _classification_payload(concentration: Quantity) -> dict[str, Any] | None:
    band = classify(concentration)
    return None if band is None else band.as_dict()


@app.errorhandler(UnitError)
def handle_unit_error(exc):
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(ValueError)
def handle_value_error(exc):
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(ZeroDivisionError)
def handle_zero_division(exc):
    return jsonify({"error": "weight and elimination rate must be > 0"}), 400


@app.route("/healthz")
def healthz():
    return jsonify({"ok": True})


@app.route("/api/profiles")
def api_profiles():
    return jsonify({
        "profiles": [
            {
                "name": p.name,
                "volume_of_distribution": _quantity_payload(p.volume_of_distribution, l_per_kg),
                "elimination_rate": _quantity_payload(p.elimination_rate, g_per_dl_per_h),
            }
            for p in PROFILES.values()
        ]
    })


@app.route("/api/drink-types")
def api_drink_types():
    return jsonify({
        "drink_types": [
            {
                "key": d.key,
                "name": d.name,
                "abv": d.abv,
                "serving": _quantity_payload(d.serving, milliliters),
                "ethanol": _quantity_payload(d.ethanol, grams),
            }
            for d in DRINK_TYPES.values()
        ]
    })


@app.route("/api/clinical-effects")
def api_clinical_effects():
    return jsonify({"ranges": [band.as_dict() for band in CLINICAL_EFFECTS]})


@app.route("/api/ethanol-ingested", methods=["POST"])
def api_ethanol_ingested():
    data = _json_body()
    volume = _parse_quantity(data, "volume", liters)
    concentration = _parse_fraction(data, "concentration")
    ethanol = ethanol_ingested(volume, concentration)
    return jsonify({"ethanol": _quantity_payload(ethanol, grams)})


@app.route("/api/peak-serum-ethanol", methods=["POST"])
def api_peak_serum_ethanol():
    data = _json_body()
    ethanol = _parse_quantity(data, "ethanol", grams)
    weight = _parse_quantity(data, "weight", kilograms)
    vd = _parse_quantity(data, "vd", l_per_kg, required=False)
    peak = peak_serum_ethanol(ethanol, weight, vd=vd, profile=_profile_from(data))
    return jsonify({
        "peak": _quantity_payload(peak, mg_per_dl),
        "clinical_effect": _classification_payload(peak),
    })


@app.route("/api/ebac", methods=["POST"])
def api_ebac():
    data = _json_body()
    ethanol = _parse_quantity(data, "ethanol", grams)
    weight = _parse_quantity(data, "weight", kilograms)
    duration = _parse_quantity(data, "duration", hours)
    vd = _parse_quantity(data, "vd", l_per_kg, required=False)
    r = _parse_quantity(data, "r", g_per_dl_per_h, required=False)
    profile = _profile_from(data)

    estimate = ebac(ethanol, weight, duration, vd=vd, r=r, profile=profile)
    eliminated_after = elimination_time(ethanol, weight, vd=vd, r=r, profile=profile)
    LOGGER.info("ebac profile=%s result=%s", profile.name, estimate.format(mg_per_dl, 3))
    return jsonify({
        "ebac": _quantity_payload(estimate, mg_per_dl),
        "ebac_clamped": _quantity_payload(max(estimate, Quantity.of(0.0, mg_per_dl)), mg_per_dl),
        "eliminated_after": _quantity_payload(eliminated_after, hours),
        "clinical_effect": _classification_payload(estimate),
    })


@app.route("/api/curve", methods=["POST"])
def api_curve():
    data = _json_body()
    ethanol = _parse_quantity(data, "ethanol", grams)
    weight = _parse_quantity(data, "weight", kilograms)
    step = _parse_quantity(data, "step", hours, required=False) or Quantity.of(0.25, hours)
    end = _parse_quantity(data, "end", hours, required=False)
    vd = _parse_quantity(data, "vd", l_per_kg, required=False)
    r = _parse_quantity(data, "r", g_per_dl_per_h, required=False)
    profile = _profile_from(data)

    if end is None:
        end = elimination_time(ethanol, weight, vd=vd, r=r, profile=profile)
    if step.value > 0 and end.div(step).value > MAX_CURVE_POINTS:
        raise RequestError(f"curve would exceed {MAX_CURVE_POINTS} points")

    points = ebac_curve(ethanol, weight, step, end, vd=vd, r=r, profile=profile)
    return jsonify({
        "unit": {"time": hours.symbol, "concentration": mg_per_dl.symbol},
        "points": [
            [round(t.to(hours), 4), round(max(c.to(mg_per_dl), 0.0), 4)]
            for t, c in points
        ],
    })


if __name__ == "__main__":
    configure_logging()
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG", "0") == "1")
