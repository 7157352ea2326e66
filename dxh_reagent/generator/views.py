from __future__ import annotations

from datetime import date

from flask import Blueprint, Response, abort, current_app, jsonify, render_template, request, session

from dxh_reagent import log_message
from dxh_reagent.catalog import reagent_choices, reagent_name
from dxh_reagent.generator.forms import (
    EVENT_MANUFACTURE_DATE,
    EVENT_PRODUCT_CODE,
    EVENT_REAGENT_TYPE,
    ReagentForm,
    validate_lot,
)
from dxh_reagent.rendering import RenderError, render_datamatrix_png
from dxh_reagent.udi import generate_udi
from dxh_reagent.validation import (
    DigestUnavailableError,
    ReagentData,
    ReagentParams,
    generate_reagent_data,
)

# blueprint router configuration
generator = Blueprint("generator", __name__)

# Events that rewrite lot/container (and the product/reagent pair).
_SYNC_EVENTS = {EVENT_REAGENT_TYPE, EVENT_PRODUCT_CODE, EVENT_MANUFACTURE_DATE}

_SESSION_BARCODE = "current_barcode"
_SESSION_UDI = "current_udi"


def _json_str(payload: dict, key: str) -> str:
    """Trimmed string field; only for fields that are never hashed."""
    value = payload.get(key)
    return value.strip() if isinstance(value, str) else ""


def _json_raw(payload: dict, key: str) -> str:
    """String field exactly as sent; lot and container are hashed verbatim."""
    value = payload.get(key)
    return value if isinstance(value, str) else ""


def _generator_context(form: ReagentForm) -> dict:
    """Compute everything the results panel shows for one form snapshot."""
    lot_check = validate_lot(form.lot, current_app.config["LOT_LENGTH"])

    udi = None
    if lot_check.ok:
        udi = generate_udi(form.product_code, form.manufacture_date, form.expiration_date, form.lot)

    data = ReagentData()
    error = None
    if form.expiration_date and form.lot and form.container and lot_check.ok:
        try:
            data = generate_reagent_data(form.to_params())
        except DigestUnavailableError as e:
            current_app.logger.exception(log_message("Failed to calculate validation code"))
            error = f"Error calculating validation code: {e}"

    session[_SESSION_BARCODE] = data.barcode_payload
    session[_SESSION_UDI] = udi.full if udi else None

    return {
        "form": form,
        "reagent_choices": reagent_choices(),
        "reagent_label": reagent_name(form.product_code) or "Custom",
        "lot_check": lot_check,
        "udi": udi,
        "data": data,
        "error": error,
    }


@generator.route("/", methods=["GET"])
def index():
    """Route to display the generator page with today's defaults"""

    form = ReagentForm.initial(date.today(), labeler_id=current_app.config["DEFAULT_LABELER_ID"])
    return render_template("index.html", **_generator_context(form))


@generator.route("/update", methods=["POST"])
def update():
    """Apply one form event and return the refreshed results fragment."""
    form = ReagentForm.from_mapping(request.form)
    event = (request.form.get("event") or "").strip()
    if event:
        form = form.apply_event(event, request.form.get(event))

    context = _generator_context(form)
    if context["data"].ok:
        current_app.logger.info(log_message(f"Generated barcode {context['data'].barcode_payload}"))

    # HTMX-friendly: sync events also swap the lot/container inputs out of band.
    return render_template("oob_update_fragment.html", sync=event in _SYNC_EVENTS, **context), 200


@generator.route("/api/generate", methods=["POST"])
def api_generate():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    params = ReagentParams(
        labeler_id=_json_str(payload, "labelerId"),
        product_code=_json_str(payload, "productCode"),
        expiration_date=_json_raw(payload, "expirationDate"),
        lot=_json_raw(payload, "lot"),
        container=_json_raw(payload, "container"),
    )
    try:
        data = generate_reagent_data(params)
    except DigestUnavailableError as e:
        current_app.logger.exception(log_message("Failed to calculate validation code"))
        return jsonify({"error": f"Error calculating validation code: {e}"}), 500

    current_app.logger.info(log_message(f"API generate: {data.barcode_payload or 'incomplete input'}"))
    return jsonify(data.to_dict()), 200


@generator.route("/api/udi", methods=["POST"])
def api_udi():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    udi = generate_udi(
        _json_str(payload, "productCode"),
        _json_raw(payload, "manufactureDate"),
        _json_raw(payload, "expirationDate"),
        _json_raw(payload, "lot"),
    )
    if udi is None:
        return jsonify({"udi": None}), 200
    return jsonify({"udi": udi.to_dict()}), 200


def _datamatrix_response(data: str | None):
    if not data:
        abort(404)
    try:
        png = render_datamatrix_png(
            data,
            scale=current_app.config["BARCODE_SCALE"],
            padding=current_app.config["BARCODE_PADDING"],
        )
    except RenderError as e:
        current_app.logger.error(log_message(f"Error generating barcode: {e}"))
        return jsonify({"error": f"Error generating barcode: {e}"}), 500
    return Response(png, mimetype="image/png")


@generator.route("/barcode.png", methods=["GET"])
def barcode_png():
    return _datamatrix_response(request.args.get("data") or session.get(_SESSION_BARCODE))


@generator.route("/udi.png", methods=["GET"])
def udi_png():
    return _datamatrix_response(request.args.get("data") or session.get(_SESSION_UDI))


def _text_or_empty(value: str | None) -> Response:
    if not value:
        return Response(status=204)
    return Response(value, mimetype="text/plain")


@generator.route("/copy", methods=["GET"])
def copy_barcode():
    """Current barcode payload as plain text, for the copy button."""
    return _text_or_empty(session.get(_SESSION_BARCODE))


@generator.route("/copy-udi", methods=["GET"])
def copy_udi():
    return _text_or_empty(session.get(_SESSION_UDI))
