"""Flask REST API exposing the expense tracker ledger."""

from __future__ import annotations

import os
import threading
from io import BytesIO
from typing import Any, Dict, Iterable, Optional

from flask import Flask, jsonify, request, send_file
from flask_cors import CORS

from common.config import categories_from_env
from common.exceptions import DuplicateCategoryError, ExportIOError, UnknownCategoryError, ValidationError
from common.export import ExcelWriter
from common.services import ExpenseLedger
from common.validators import optional_category, parse_amount, parse_date, validate_category_name

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def create_app(categories: Optional[Iterable[str]] = None) -> Flask:
    app = Flask(__name__)

    env_name = os.getenv("EXPENSE_TRACKER_ENV", "prod").lower()
    if env_name in {"dev", "development"}:
        CORS(app, resources={r"/*": {"origins": "*"}}, supports_credentials=True)
    else:
        allowed_origins = os.getenv("EXPENSE_TRACKER_ALLOWED_ORIGINS")
        if allowed_origins:
            origins = [origin.strip() for origin in allowed_origins.split(",") if origin.strip()]
            CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)
        else:
            CORS(app)

    ledger = ExpenseLedger(categories if categories is not None else categories_from_env())
    writer = ExcelWriter()
    # The ledger itself is not thread-safe; every request holds this lock.
    lock = threading.Lock()

    def _success(payload: Any, status: int = 200):
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int, message: str):
        app.logger.error("%s: %s", message, exc)
        return jsonify({"error": message, "details": str(exc)}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error")

    @app.errorhandler(UnknownCategoryError)
    def handle_unknown_category(exc: UnknownCategoryError):
        return _handle_error(exc, 404, "Unknown category")

    @app.errorhandler(DuplicateCategoryError)
    def handle_duplicate_category(exc: DuplicateCategoryError):
        return _handle_error(exc, 409, "Duplicate category")

    @app.errorhandler(ExportIOError)
    def handle_export_error(exc: ExportIOError):
        return _handle_error(exc, 500, "Export error")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Malformed JSON body")
        return data

    def _category_filter() -> Optional[str]:
        return optional_category(request.args.get("category"))

    @app.get("/categories")
    def list_categories():
        with lock:
            categories = list(ledger.categories)
        return _success({"items": categories})

    @app.post("/categories")
    def create_category():
        payload = _json_body()
        with lock:
            name = ledger.add_category(payload.get("name"))
        return _success({"name": name}, 201)

    @app.get("/expenses")
    def list_expenses():
        category = _category_filter()
        with lock:
            expenses = ledger.expenses(category)
            total = ledger.total(category)
        return _success({
            "items": [expense.to_dict() for expense in expenses],
            "total": f"{total:.2f}",
        })

    @app.post("/expenses")
    def create_expense():
        payload = _json_body()
        category = validate_category_name(payload.get("category"))
        amount = parse_amount(payload.get("amount"))
        on = parse_date(payload.get("date"))
        with lock:
            expense = ledger.add_expense(category, amount, on)
        return _success(expense.to_dict(), 201)

    @app.get("/statistics")
    def statistics():
        category = _category_filter()
        with lock:
            report = ledger.statistics(category)
        payload = report.to_dict()
        payload["lines"] = report.lines()
        return _success(payload)

    @app.get("/export")
    def export():
        category = _category_filter()
        sort_dates = request.args.get("sort", "").lower() in {"1", "true", "date"}
        with lock:
            rows = list(ledger.export_rows(category, sort_dates=sort_dates))
        content = writer.to_bytes(rows)
        app.logger.info("Exported %d rows to Excel download", len(rows))
        download_name = f"expenses-{category}.xlsx" if category else "expenses.xlsx"
        return send_file(
            BytesIO(content),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=download_name,
        )

    return app
