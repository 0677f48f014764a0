"""Erros de aplicação com códigos estáveis e mensagens em pt-BR."""
from __future__ import annotations
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    # 400
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_ID = "INVALID_ID"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    # 401 / 403
    UNAUTHORIZED = "UNAUTHORIZED"
    TOKEN_REQUIRED = "TOKEN_REQUIRED"
    TOKEN_INVALID = "TOKEN_INVALID"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    FORBIDDEN = "FORBIDDEN"
    # 404
    NOT_FOUND = "NOT_FOUND"
    LEAD_NOT_FOUND = "LEAD_NOT_FOUND"
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    # 409
    CONFLICT = "CONFLICT"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    LEAD_ALREADY_CONVERTED = "LEAD_ALREADY_CONVERTED"
    # 422
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    EMPTY_CART = "EMPTY_CART"
    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


class AppError(Exception):
    """Erro operacional: vira resposta HTTP com status, código e mensagem."""

    def __init__(self, message: str, status: int = 500, code: ErrorCode = ErrorCode.INTERNAL_ERROR, details: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.details = details

    def to_dict(self) -> dict:
        body = {"code": self.code.value, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


def _ref(resource: str, id_: int | None) -> str:
    return f"{resource} #{id_} " if id_ is not None else f"{resource} "


def validation(details: list[dict]) -> AppError:
    return AppError("Erro de validação", 400, ErrorCode.VALIDATION_ERROR, details)

def invalid_input(message: str = "Entrada inválida") -> AppError:
    return AppError(message, 400, ErrorCode.INVALID_INPUT)

def invalid_id(resource: str = "recurso") -> AppError:
    return AppError(f"ID de {resource} inválido", 400, ErrorCode.INVALID_ID)

def missing_field(field: str) -> AppError:
    return AppError(f"Campo obrigatório não informado: {field}", 400, ErrorCode.MISSING_REQUIRED_FIELD, {"field": field})

def token_required() -> AppError:
    return AppError("Token de acesso requerido", 401, ErrorCode.TOKEN_REQUIRED)

def token_invalid() -> AppError:
    return AppError("Token inválido", 401, ErrorCode.TOKEN_INVALID)

def token_expired() -> AppError:
    return AppError("Token expirado", 401, ErrorCode.TOKEN_EXPIRED)

def forbidden(message: str = "Acesso negado") -> AppError:
    return AppError(message, 403, ErrorCode.FORBIDDEN)

def not_found(message: str = "Recurso não encontrado") -> AppError:
    return AppError(message, 404, ErrorCode.NOT_FOUND)

def lead_not_found(id_: int | None = None) -> AppError:
    return AppError(f"{_ref('Lead', id_)}não encontrado", 404, ErrorCode.LEAD_NOT_FOUND)

def item_not_found(id_: int | None = None) -> AppError:
    return AppError(f"{_ref('Item', id_)}não encontrado", 404, ErrorCode.ITEM_NOT_FOUND)

def product_not_found(id_: int | None = None) -> AppError:
    return AppError(f"{_ref('Produto', id_)}não encontrado", 404, ErrorCode.PRODUCT_NOT_FOUND)

def order_not_found(id_: int | None = None) -> AppError:
    return AppError(f"{_ref('Pedido', id_)}não encontrado", 404, ErrorCode.ORDER_NOT_FOUND)

def lead_already_converted(id_: int | None = None) -> AppError:
    return AppError(f"{_ref('Lead', id_)}já foi convertido em pedido", 409, ErrorCode.LEAD_ALREADY_CONVERTED)

def empty_cart() -> AppError:
    return AppError("Não é possível converter um lead sem itens", 422, ErrorCode.EMPTY_CART)

def business_rule(message: str, details: Any = None) -> AppError:
    return AppError(message, 422, ErrorCode.BUSINESS_RULE_VIOLATION, details)

def database(message: str = "Erro ao acessar banco de dados", status: int = 500) -> AppError:
    return AppError(message, status, ErrorCode.DATABASE_ERROR)

def service_unavailable(service: str) -> AppError:
    return AppError(f"Serviço {service} indisponível", 503, ErrorCode.SERVICE_UNAVAILABLE, {"service": service})

def external_service(service: str, upstream_status: int, body: Any = None) -> AppError:
    return AppError(
        f"Erro retornado por {service}", 502, ErrorCode.EXTERNAL_SERVICE_ERROR,
        {"service": service, "status": upstream_status, "body": body},
    )


def from_validation_error(exc) -> AppError:
    """Converte pydantic.ValidationError em VALIDATION_ERROR com todos os campos."""
    details = []
    for err in exc.errors(include_url=False):
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "__root__")
        details.append({"field": field, "message": err.get("msg", "valor inválido")})
    return validation(details)
