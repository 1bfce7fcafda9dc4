"""Flask REST API exposing the expense ledger services."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from ledger.config import load_settings
from ledger.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from ledger.models import Entry, Record, Selection
from ledger.services import LedgerQueries, LedgerStore
from ledger.storage import LineFileStorage


def create_app(data_file: Optional[Path] = None) -> Flask:
    app = Flask(__name__)
    settings = load_settings()

    if settings.is_development:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    elif settings.allowed_origins:
        CORS(app, resources={r"/*": {"origins": list(settings.allowed_origins)}}, supports_credentials=True)
    else:
        CORS(app)

    store = LedgerStore(LineFileStorage(Path(data_file or settings.data_file)))
    store.load()
    queries = LedgerQueries(store)

    def _success(payload: Any, status: int = 200):
        if status == 204:
            return ("", status)
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int, message: str):
        app.logger.error("%s: %s", message, exc)
        return jsonify({"error": message, "details": str(exc)}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error")

    @app.errorhandler(RecordNotFoundError)
    def handle_not_found(exc: RecordNotFoundError):
        return _handle_error(exc, 404, "Record not found")

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(exc: PersistenceError):
        return _handle_error(exc, 500, "Persistence error")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    def _selection_payload(selection: Selection) -> Dict[str, Any]:
        return {
            "items": [entry.to_dict() for entry in selection],
            "found": selection.found,
            "message": "" if selection.found else selection.empty_message,
        }

    @app.get("/records")
    def list_records():
        category = request.args.get("category")
        start = request.args.get("start")
        end = request.args.get("end")
        if category:
            selection = queries.filter_by_category(category)
        elif start or end:
            if not (start and end):
                raise ValidationError("start and end must be given together")
            selection = queries.filter_by_date_range(start, end)
        else:
            selection = queries.list_all()
        return _success(_selection_payload(selection))

    @app.post("/records")
    def create_record():
        record = Record.from_dict(_json_body())
        store.append(record)
        return _success(Entry(position=len(store), record=record).to_dict(), 201)

    @app.get("/records/<int:position>")
    def get_record(position: int):
        record = store.get(position - 1)
        return _success(Entry(position=position, record=record).to_dict())

    @app.put("/records/<int:position>")
    def update_record(position: int):
        store.get(position - 1)
        record = Record.from_dict(_json_body())
        store.replace_at(position - 1, record)
        return _success(Entry(position=position, record=record).to_dict())

    @app.delete("/records/<int:position>")
    def delete_record(position: int):
        store.get(position - 1)
        store.remove_at(position - 1)
        return _success({}, 204)

    @app.get("/summary")
    def summary():
        payload: Dict[str, Any] = {"total": str(queries.total_all())}
        month = request.args.get("month")
        if month is not None:
            payload["month"] = month
            payload["month_total"] = str(queries.total_for_month(month))
        return _success(payload)

    return app


if __name__ == "__main__":
    # The ledger store is not thread-safe; serve one request at a time.
    create_app().run(threaded=False)
