"""Conversão de entidades ORM para o JSON camelCase da API."""
from __future__ import annotations
from datetime import date, datetime
from decimal import Decimal
from ..repo.models import Lead, CartItem, Order, OrderItem

def num(value) -> float | None:
    return float(value) if isinstance(value, Decimal) else value

def iso(value) -> str | None:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value

def _customer(c) -> dict | None:
    if c is None:
        return None
    return {"id": c.id, "name": c.name, "address": c.address, "city": c.city, "state": c.state, "phone": c.phone}

def _product(p) -> dict | None:
    if p is None:
        return None
    return {"id": p.id, "model": p.model, "brand": p.brand, "name": p.name}

def remarks_of(lead: Lead) -> dict:
    return {
        "finance": lead.remarks_finance,
        "logistic": lead.remarks_logistic,
        "nfe": lead.remarks_nfe,
        "obs": lead.remarks_obs,
        "manager": lead.remarks_manager,
    }

def lead_to_dict(lead: Lead) -> dict:
    return {
        "id": lead.id,
        "createdAt": iso(lead.created_at),
        "customerId": lead.customer_id,
        "customer": _customer(lead.customer),
        "userId": lead.user_id,
        "sellerId": lead.seller_id,
        "resellerId": lead.reseller_id,
        "segment": lead.segment,
        "cNatOp": lead.nat_op,
        "cEmitUnity": lead.emit_unity,
        "cLogUnity": lead.log_unity,
        "cTransporter": lead.transporter_id,
        "paymentType": lead.payment_type,
        "paymentTerms": lead.payment_terms,
        "vPaymentTerms": lead.payment_terms_id,
        "freight": num(lead.freight),
        "freightType": lead.freight_type,
        "deliveryDate": iso(lead.delivery_date),
        "remarks": remarks_of(lead),
        "type": lead.type,
        "orderWeb": lead.order_web,
        "buyer": lead.buyer,
        "purchaseOrder": lead.purchase_order,
        "authorized": lead.authorized,
        "commission": num(lead.commission),
    }

def item_to_dict(item: CartItem) -> dict:
    return {
        "id": item.id,
        "leadId": item.lead_id,
        "productId": item.product_id,
        "quantity": num(item.quantity),
        "price": num(item.price),
        "consumerPrice": num(item.consumer_price),
        "originalPrice": num(item.original_price),
        "times": item.times,
        "ipi": num(item.ipi),
        "st": num(item.st),
        "ttd": item.ttd,
        "inquiryDate": iso(item.inquiry_date),
        "subtotal": num(item.price * item.quantity),
        "product": _product(item.product),
    }

def order_item_to_dict(row: OrderItem) -> dict:
    return {
        "id": row.id,
        "productId": row.product_id,
        "quantity": num(row.quantity),
        "price": num(row.price or row.base_value),
        "consumerPrice": num(row.consumer_price or row.price or row.base_value),
        "originalPrice": num(row.list_price or row.base_value),
        "times": row.times or 1,
        "ipi": num(row.ipi_value),
        "st": num(row.st_value),
        "ttd": row.ttd,
        "subtotal": num(row.value),
        "product": _product(row.product),
    }

def order_to_dict(order: Order, order_web: str | None = None) -> dict:
    return {
        "id": order.id,
        "orderWeb": order_web or str(order.id),
        "createdAt": iso(order.created_at),
        "customerId": order.customer_id,
        "customer": _customer(order.customer),
        "userId": order.emitter_id,
        "sellerId": order.seller_id,
        "nop": order.nop,
        "paymentType": order.payment_type,
        "paymentTerms": order.payment_terms,
        "freight": num(order.freight),
        "deliveryDate": iso(order.delivery_date),
        "remarks": {
            "obs": order.obs,
            "finance": order.obs_finance,
            "logistic": order.obs_logistic,
            "nfe": order.obs_nfe,
        },
        "cEmitUnity": order.emit_unity,
        "cLogUnity": order.log_unity,
        "transporter": {"id": order.transporter.id, "name": order.transporter.name} if order.transporter else None,
        "subtotal": num(order.base_value),
        "totalIPI": num(order.ipi_value),
        "totalST": num(order.st_value),
        "total": num(order.total),
        "commission": num(order.reseller_commission),
        "items": [order_item_to_dict(i) for i in order.items],
    }
