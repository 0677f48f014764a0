"""Rotas de pedidos."""
from __future__ import annotations
from flask import Blueprint
from ..auth import authenticate, current_user, parse_id
from ..responses import ok
from ...domain import orders

bp = Blueprint("orders", __name__, url_prefix="/orders")
bp.before_request(authenticate)

@bp.get("/<order_id>")
def get_order(order_id: str):
    return ok(orders.get_order(parse_id(order_id, "pedido"), current_user()))
