"""Envelope JSON padrão: {"success": bool, "data"?, "error"?} + extras opcionais."""
from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal
from flask import jsonify
from flask.json.provider import DefaultJSONProvider

class ApiJSONProvider(DefaultJSONProvider):
    """Decimal vira número e datas saem em ISO 8601."""
    ensure_ascii = False
    sort_keys = False

    @staticmethod
    def default(o):
        if isinstance(o, Decimal):
            return float(o)
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        return DefaultJSONProvider.default(o)

def ok(data=None, status: int = 200, message: str | None = None, warnings: list[str] | None = None, **extra):
    body = {"success": True, "data": data}
    if message:
        body["message"] = message
    if warnings:
        body["warnings"] = warnings
    body.update(extra)
    return jsonify(body), status

def fail(error: dict, status: int):
    return jsonify({"success": False, "error": error}), status
