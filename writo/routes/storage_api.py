from flask import Blueprint, current_app, jsonify

from ..extensions import db

bp = Blueprint("storage_api", __name__)


@bp.get("/health")
def api_health():
    try:
        data_dir = db.resolve_data_directory()
    except OSError as e:
        current_app.logger.exception("Data directory unavailable")
        return jsonify({"ok": False, "error": str(e)}), 500
    return jsonify({"ok": True, "data_dir": str(data_dir)})


@bp.get("/collections")
def api_collections():
    try:
        collections = db.stats()
    except OSError as e:
        current_app.logger.exception("Failed to list collections")
        return jsonify({"error": str(e)}), 500
    return jsonify({"collections": collections})
