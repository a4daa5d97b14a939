"""Flask app factory for Ringside Wrestling Manager."""

import inspect

from flask import Flask, jsonify, request
from werkzeug.exceptions import BadRequest

from api.services import ENTITIES, GameService

COLLECTIONS = {plural: kind for kind, plural in ENTITIES.items()}


def _respond(result):
    """Map a command result onto an HTTP response."""
    if isinstance(result, dict) and result.get("success") is False:
        status = 404 if result.get("error") == "not_found" else 400
        return jsonify(result), status
    return jsonify(result)


def _body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return data


def _bad_request(message: str):
    return jsonify({"success": False, "message": message, "error": "invalid_argument"}), 400


def create_app(service: GameService) -> Flask:
    app = Flask(__name__)
    app.config["GAME_SERVICE"] = service

    @app.errorhandler(BadRequest)
    def bad_request(exc):
        return _bad_request(exc.description)

    # ------------------------------------------------------------------
    # Game State
    # ------------------------------------------------------------------

    @app.route("/api/gamestate")
    def get_gamestate():
        return jsonify(service.execute("get-gamestate"))

    @app.route("/api/promotion")
    def get_player_promotion():
        promotion = service.execute("get-player-promotion")
        if promotion is None:
            return jsonify({"error": "No player promotion found"}), 404
        return jsonify(promotion)

    @app.route("/api/game/new", methods=["POST"])
    def new_game():
        return _respond(service.execute("new-game"))

    @app.route("/api/game/save", methods=["POST"])
    def save_game():
        return _respond(service.execute("save-game"))

    @app.route("/api/game/load", methods=["POST"])
    def load_game():
        return _respond(service.execute("load-game"))

    @app.route("/api/game/advance-week", methods=["POST"])
    def advance_week():
        return _respond(service.execute("advance-week"))

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @app.route("/api/settings")
    def get_settings():
        return jsonify(service.execute("get-settings"))

    @app.route("/api/settings", methods=["PATCH"])
    def update_settings():
        return _respond(service.execute("update-settings", _body()))

    @app.route("/api/settings/reset", methods=["POST"])
    def reset_settings():
        return _respond(service.execute("reset-settings"))

    # ------------------------------------------------------------------
    # Entity CRUD
    # ------------------------------------------------------------------

    @app.route("/api/<collection>")
    def list_entities(collection: str):
        if collection not in COLLECTIONS:
            return jsonify({"error": "Unknown collection"}), 404
        return jsonify(service.execute(f"get-all-{collection}"))

    @app.route("/api/<collection>", methods=["POST"])
    def add_entity(collection: str):
        if collection not in COLLECTIONS:
            return jsonify({"error": "Unknown collection"}), 404
        return _respond(service.execute(f"add-{COLLECTIONS[collection]}", _body()))

    @app.route("/api/<collection>/<entity_id>")
    def get_entity(collection: str, entity_id: str):
        if collection not in COLLECTIONS:
            return jsonify({"error": "Unknown collection"}), 404
        kind = COLLECTIONS[collection]
        entity = service.execute(f"get-{kind}", entity_id)
        if entity is None:
            return jsonify({"error": f"{kind.capitalize()} not found"}), 404
        return jsonify(entity)

    @app.route("/api/<collection>/<entity_id>", methods=["PATCH"])
    def update_entity(collection: str, entity_id: str):
        if collection not in COLLECTIONS:
            return jsonify({"error": "Unknown collection"}), 404
        return _respond(service.execute(f"update-{COLLECTIONS[collection]}", entity_id, _body()))

    @app.route("/api/<collection>/<entity_id>", methods=["DELETE"])
    def delete_entity(collection: str, entity_id: str):
        if collection not in COLLECTIONS:
            return jsonify({"error": "Unknown collection"}), 404
        return _respond(service.execute(f"delete-{COLLECTIONS[collection]}", entity_id))

    # ------------------------------------------------------------------
    # Championships
    # ------------------------------------------------------------------

    @app.route("/api/championships/<championship_id>/history")
    def title_history(championship_id: str):
        history = service.execute("get-title-history", championship_id)
        if history is None:
            return jsonify({"error": "Championship not found"}), 404
        return jsonify(history)

    @app.route("/api/championships/<championship_id>/champion", methods=["POST"])
    def change_champion(championship_id: str):
        data = _body()
        return _respond(service.execute(
            "change-champion",
            championship_id,
            data.get("wrestler_id"),
            data.get("event_name", ""),
            data.get("date"),
        ))

    @app.route("/api/championships/<championship_id>/defense", methods=["POST"])
    def record_defense(championship_id: str):
        data = _body()
        return _respond(service.execute(
            "record-defense",
            championship_id,
            data.get("opponent", ""),
            data.get("event_name", ""),
            data.get("date"),
        ))

    @app.route("/api/championships/<championship_id>/vacate", methods=["POST"])
    def vacate_championship(championship_id: str):
        data = _body()
        return _respond(service.execute(
            "vacate-championship", championship_id, data.get("reason", ""), data.get("date")
        ))

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    @app.route("/api/events/<event_id>/matches", methods=["POST"])
    def add_match(event_id: str):
        return _respond(service.execute("add-match", event_id, _body()))

    @app.route("/api/events/<event_id>/matches/<match_id>/result", methods=["POST"])
    def record_match_result(event_id: str, match_id: str):
        data = _body()
        return _respond(service.execute(
            "record-match-result",
            event_id,
            match_id,
            data.get("winner_id"),
            data.get("rating", 0.0),
        ))

    @app.route("/api/events/<event_id>/start", methods=["POST"])
    def start_event(event_id: str):
        return _respond(service.execute("start-event", event_id))

    @app.route("/api/events/<event_id>/cancel", methods=["POST"])
    def cancel_event(event_id: str):
        return _respond(service.execute("cancel-event", event_id))

    @app.route("/api/events/<event_id>/finalize", methods=["POST"])
    def finalize_event(event_id: str):
        data = _body()
        return _respond(service.execute(
            "finalize-event",
            event_id,
            data.get("attendance", 0),
            data.get("ratings"),
            data.get("finances"),
        ))

    # ------------------------------------------------------------------
    # Roster and finances
    # ------------------------------------------------------------------

    @app.route("/api/roster/sign", methods=["POST"])
    def sign_wrestler():
        data = _body()
        return _respond(service.execute("sign-wrestler", data.get("wrestler_id"), data.get("promotion_id")))

    @app.route("/api/roster/release", methods=["POST"])
    def release_wrestler():
        data = _body()
        return _respond(service.execute("release-wrestler", data.get("wrestler_id"), data.get("promotion_id")))

    @app.route("/api/roster/reconcile", methods=["POST"])
    def reconcile_rosters():
        return _respond(service.execute("reconcile-rosters"))

    @app.route("/api/finances/weekly", methods=["POST"])
    def process_weekly_finances():
        data = _body()
        return _respond(service.execute("process-weekly-finances", data.get("promotion_id")))

    # ------------------------------------------------------------------
    # Generic command channel
    # ------------------------------------------------------------------

    @app.route("/api/commands")
    def list_commands():
        return jsonify(service.commands)

    @app.route("/api/commands/<command>", methods=["POST"])
    def run_command(command: str):
        handler = service.handler(command)
        if handler is None:
            return jsonify({"error": f"Unknown command: {command}"}), 404
        args = _body().get("args", [])
        if not isinstance(args, list):
            return _bad_request("args must be a list")
        try:
            inspect.signature(handler).bind(*args)
        except TypeError as exc:
            return _bad_request(f"{command}: {exc}")
        return _respond(service.execute(command, *args))

    return app
