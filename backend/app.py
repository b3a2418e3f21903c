import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

import config
from domain.constants import DIRECTION_NAMES
from services.game_session import GameSession

# Query-string values accepted as "true"
TRUTHY_VALUES = ("1", "true", "yes")


def create_app(session: Optional[GameSession] = None) -> Flask:
    """
    Build the local control surface for one shared session.

    The renderer polls /api/state; the input adapter posts intents and
    lifecycle commands. Both players drive the same session.
    """
    app = Flask(__name__)
    app.config["game_session"] = session or GameSession()

    # Enable CORS for API routes so a browser renderer on a different origin can call Flask
    CORS(app, resources={r"/api/*": {"origins": config.CORS_ALLOWED_ORIGINS}})

    def current_session() -> GameSession:
        return app.config["game_session"]

    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """
        Read-only snapshot of the round.

        Query parameters:
        - board: 1/true/yes to include the text rendering of the board
        """
        try:
            state = current_session().snapshot()
            payload = state.to_dict()
            if request.args.get("board", default="").strip().lower() in TRUTHY_VALUES:
                payload["board"] = state.print_board()
            return jsonify(payload)
        except Exception as error:
            logging.error(f"Error reading game state: {error}")
            return jsonify({"error": "Failed to read game state"}), 500

    @app.route("/api/intent", methods=["POST"])
    def post_intent():
        """
        Set a player's next direction.

        Body: {"player": "p1" | "p2", "direction": "UP" | "DOWN" | "LEFT" | "RIGHT"}
        """
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400

        player = data.get("player")
        direction_name = str(data.get("direction", "")).upper()

        if direction_name not in DIRECTION_NAMES:
            return jsonify({"error": f"Invalid direction '{data.get('direction')}'"}), 400

        try:
            current_session().set_intent(player, DIRECTION_NAMES[direction_name])
        except ValueError as error:
            return jsonify({"error": str(error)}), 400
        except Exception as error:
            logging.error(f"Error setting intent for {player}: {error}")
            return jsonify({"error": "Failed to set intent"}), 500

        return jsonify({"player": player, "direction": direction_name})

    @app.route("/api/start", methods=["POST"])
    def post_start():
        try:
            started = current_session().start()
            return jsonify({"started": started, "state": current_session().snapshot().to_dict()})
        except Exception as error:
            logging.error(f"Error starting session: {error}")
            return jsonify({"error": "Failed to start session"}), 500

    @app.route("/api/pause", methods=["POST"])
    def post_pause():
        try:
            paused = current_session().toggle_pause()
            return jsonify({"paused": paused})
        except Exception as error:
            logging.error(f"Error toggling pause: {error}")
            return jsonify({"error": "Failed to toggle pause"}), 500

    @app.route("/api/restart", methods=["POST"])
    def post_restart():
        try:
            current_session().restart()
            logging.info("Session restarted via API")
            return jsonify({"state": current_session().snapshot().to_dict()})
        except Exception as error:
            logging.error(f"Error restarting session: {error}")
            return jsonify({"error": "Failed to restart session"}), 500

    return app


if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    live_session = GameSession()
    live_session.start_loop()
    create_app(live_session).run(host=config.HOST, port=config.PORT, threaded=True)
