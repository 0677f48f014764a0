"""API Flask do Leads Agent: factory, trace id e mapeamento de erros para o envelope padrão."""
from __future__ import annotations
import traceback
from flask import Flask, request, g
from kink import di
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from werkzeug.exceptions import HTTPException
from ..core import errors
from ..core.di import bootstrap_di
from ..core.errors import AppError, ErrorCode
from ..core.logging import set_trace_id, get_trace_id, get_logger
from ..core.settings import Settings
from .responses import ApiJSONProvider, fail
from .routes import leads, metadata, orders, pricing

log = get_logger()

def _error_body(err: AppError, exc: BaseException | None = None) -> dict:
    body = err.to_dict()
    if exc is not None and not di[Settings].is_production:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return body

def _respond(err: AppError, exc: BaseException | None = None):
    if err.status >= 500:
        log.error("request_failed", path=request.path, method=request.method, status=err.status,
                  code=err.code.value, exc_info=exc)
    else:
        log.warning("request_rejected", path=request.path, method=request.method, status=err.status,
                    code=err.code.value, message=err.message)
    return fail(_error_body(err, exc if err.status >= 500 else None), err.status)

def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def _app_error(exc: AppError):
        return _respond(exc)

    @app.errorhandler(ValidationError)
    def _validation(exc: ValidationError):
        return _respond(errors.from_validation_error(exc))

    @app.errorhandler(IntegrityError)
    def _integrity(exc: IntegrityError):
        if "foreign key" in str(exc.orig).lower():
            return _respond(errors.invalid_input("Referência inválida"), exc)
        return _respond(AppError("Registro duplicado", 409, ErrorCode.DUPLICATE_ENTRY), exc)

    @app.errorhandler(OperationalError)
    def _operational(exc: OperationalError):
        return _respond(errors.database("Banco de dados indisponível", 503), exc)

    @app.errorhandler(SQLAlchemyError)
    def _database(exc: SQLAlchemyError):
        return _respond(errors.database(), exc)

    @app.errorhandler(HTTPException)
    def _http(exc: HTTPException):
        code = {404: ErrorCode.NOT_FOUND, 405: ErrorCode.INVALID_INPUT, 401: ErrorCode.UNAUTHORIZED,
                403: ErrorCode.FORBIDDEN}.get(exc.code, ErrorCode.INVALID_INPUT if (exc.code or 500) < 500 else ErrorCode.INTERNAL_ERROR)
        return _respond(AppError(exc.description or exc.name, exc.code or 500, code))

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        return _respond(AppError("Erro interno do servidor", 500, ErrorCode.INTERNAL_ERROR), exc)

def create_app(settings: Settings | None = None) -> Flask:
    """Cria a aplicação, inicializando o container de DI."""
    bootstrap_di(settings)
    app = Flask(__name__)
    app.json = ApiJSONProvider(app)

    @app.before_request
    def _trace():
        g.trace_id = set_trace_id(request.headers.get("X-Trace-Id"))

    @app.after_request
    def _echo_trace(response):
        response.headers["X-Trace-Id"] = get_trace_id()
        return response

    @app.get("/healthz")
    def healthz():
        """Health check básico."""
        return {"success": True, "data": {"ok": True}}

    for bp in (leads.bp, metadata.bp, metadata.admin_bp, orders.bp, pricing.bp):
        app.register_blueprint(bp)
    register_error_handlers(app)
    log.info("app_started", environment=di[Settings].environment)
    return app
