import logging
import typing

from flask import Flask, jsonify, request

from battlerat.config import ServerConfig
from battlerat.grid import SnapshotError

logger = logging.getLogger(__name__)


def create_app(handlers: typing.Dict) -> Flask:
    """Flask app exposing the Battlesnake webhook API for the given handlers."""
    app = Flask("Battlesnake")

    @app.get("/")
    def on_info():
        return jsonify(handlers["info"]())

    @app.post("/start")
    def on_start():
        handlers["start"](request.get_json())
        return "ok"

    @app.post("/move")
    def on_move():
        return jsonify(handlers["move"](request.get_json()))

    @app.post("/end")
    def on_end():
        handlers["end"](request.get_json())
        return "ok"

    @app.errorhandler(SnapshotError)
    def on_bad_snapshot(error):
        logger.exception("Rejected game state from %s", request.path)
        return jsonify({"error": str(error)}), 400

    @app.after_request
    def identify_server(response):
        response.headers.set("server", "battlesnake/github/starter-snake-python")
        return response

    return app


def run_server(handlers: typing.Dict, config: ServerConfig = None):
    if config is None:
        config = ServerConfig.from_env()
    config.configure_logging()
    logging.getLogger("werkzeug").setLevel(logging.ERROR)

    app = create_app(handlers)
    logger.info("Running Battlesnake at http://%s:%s", config.host, config.port)
    app.run(host=config.host, port=config.port)
