# /dxh_reagent/error_pages/handlers.py

# Third-party imports
from flask import Blueprint, jsonify, render_template, request


# Local imports
from dxh_reagent import app, log_message

# blueprint router configuration
error_pages = Blueprint("error_pages", __name__)


def _wants_json() -> bool:
    return request.path.startswith("/api/")


@error_pages.app_errorhandler(404)
def error_404(error):
    """Error 404 page handler"""
    incoming_url = request.path
    app.logger.error(log_message(f"404 Error: {error}, URL: {incoming_url}"))
    if _wants_json():
        return jsonify({"error": "Not found"}), 404
    return render_template("error_pages/404.html"), 404


@error_pages.app_errorhandler(500)
def error_500(error):
    """Error 500 page handler"""
    app.logger.error(log_message(error))
    if _wants_json():
        return jsonify({"error": "Internal server error"}), 500
    return render_template("error_pages/500.html"), 500
