"""HTTP API over the slang dictionary."""

import logging
import threading

from flask import Flask, jsonify, request
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as SchemaError
from werkzeug.exceptions import MethodNotAllowed, NotFound
from werkzeug.serving import make_server

from . import workflows
from .core.entries import Entry, parse_position
from .core.errors import (
    AlreadyRegisteredError,
    DuplicateError,
    InvalidCredentialsError,
    NotRegisteredError,
    RangeError,
    SlangError,
    ValidationError,
)
from .ports import DocumentStore

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[SlangError], int] = {
    ValidationError: 400,
    DuplicateError: 409,
    RangeError: 404,
    AlreadyRegisteredError: 409,
    NotRegisteredError: 401,
    InvalidCredentialsError: 401,
}

ENTRY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


class EntryBody(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    word: str = ""
    meaning: str = ""
    example: str = ""
    origin: str = ""
    synonyms: list[str] | None = None

    def to_entry(self) -> Entry:
        return Entry(
            word=self.word,
            meaning=self.meaning,
            example=self.example,
            origin=self.origin,
            synonyms=list(self.synonyms or []),
        )


class CredentialsBody(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    username: str = ""
    password: str = ""


class MalformedRequest(Exception):
    """Malformed request; rejected before the document is touched."""

    pass


def _parse_body(model: type[BaseModel]):
    try:
        return model.model_validate_json(request.get_data())
    except SchemaError as e:
        logger.debug(f"Rejected {request.path} body: {e}")
        raise MalformedRequest("Invalid JSON")


def _parse_position(segment: str) -> int:
    """Strict decimal position >= 1."""
    position = parse_position(segment)
    if position is None or position < 1:
        raise MalformedRequest("Invalid index")
    return position


def create_app(store: DocumentStore) -> Flask:
    """Create the Flask app bound to one document store."""
    app = Flask(__name__)
    app.config["store"] = store
    register_error_handlers(app)
    register_routes(app)
    return app


def register_error_handlers(app: Flask):
    @app.errorhandler(MalformedRequest)
    def bad_request(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(SlangError)
    def domain_error(e):
        status = ERROR_STATUS.get(type(e), 500)
        return jsonify({"error": str(e)}), status

    @app.errorhandler(MethodNotAllowed)
    def method_not_allowed(e):
        return jsonify({"error": "Method not allowed"}), 405, {"Allow": ", ".join(e.valid_methods or [])}

    @app.errorhandler(NotFound)
    def not_found(e):
        return jsonify({"error": "Not found"}), 404


def register_routes(app: Flask):
    def get_store() -> DocumentStore:
        return app.config["store"]

    # All methods land here; only GET and POST are served.
    @app.route("/api/entries", methods=ENTRY_METHODS, provide_automatic_options=False)
    def entries():
        if request.method == "GET":
            return list_entries()
        if request.method == "POST":
            return create_entry()
        raise MethodNotAllowed(valid_methods=["GET", "POST"])

    def list_entries():
        return jsonify([e.to_dict() for e in workflows.list_entries(get_store())]), 200

    def create_entry():
        body = _parse_body(EntryBody)
        workflows.add_entry(get_store(), body.to_entry())
        return jsonify({"message": "Entry added"}), 201

    @app.route("/api/entries/", defaults={"segment": ""}, methods=["DELETE"], provide_automatic_options=False)
    @app.route("/api/entries/<path:segment>", methods=["DELETE"], provide_automatic_options=False)
    def delete_entry(segment: str):
        position = _parse_position(segment)
        workflows.delete_entry(get_store(), position)
        return jsonify({"message": "Entry deleted"}), 200

    @app.route("/api/user", methods=["GET"])
    def get_user():
        user = workflows.current_user(get_store())
        if user is None:
            raise NotRegisteredError("User is not registered")
        return jsonify(user.public()), 200

    @app.route("/api/register", methods=["POST"])
    def register():
        body = _parse_body(CredentialsBody)
        workflows.register_user(get_store(), body.username, body.password)
        return jsonify({"message": "Registration successful"}), 201

    @app.route("/api/login", methods=["POST"])
    def login():
        body = _parse_body(CredentialsBody)
        username = workflows.login_user(get_store(), body.username, body.password)
        return jsonify({"message": "Login successful", "username": username}), 200


def start_server(app: Flask, host: str, port: int, background: bool = False):
    """
    Serve the app with one thread per request.

    With background=True the server runs in a daemon thread and is returned
    so the caller can shut it down; otherwise this blocks until interrupted.
    Raises OSError if the address is unavailable.
    """
    server = make_server(host, port, app, threaded=True)
    logger.info(f"API listening on http://{host}:{port}")
    if not background:
        server.serve_forever()
        return server
    thread = threading.Thread(target=server.serve_forever, name="sleng-api", daemon=True)
    thread.start()
    return server
