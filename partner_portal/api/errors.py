import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from partner_portal.exceptions import FieldViolation, PortalError, ValidationError
from partner_portal.onboarding.rules import check_interface, merge_violations


logger = logging.getLogger("portal.api")


def _get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _respond(request: Request, status_code: int, payload: dict) -> JSONResponse:
    request_id = _get_request_id(request)
    payload["request_id"] = request_id

    response = JSONResponse(status_code=status_code, content=payload)
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response


def _violations_from_request(exc: RequestValidationError) -> list[FieldViolation]:
    violations = []
    for error in exc.errors():
        # Drop the "body"/"query" marker; keep the field path.
        loc = [str(part) for part in error.get("loc", ())]
        path = tuple(loc[1:]) if len(loc) > 1 and loc[0] in {"body", "query", "path", "header"} else tuple(loc)
        violations.append(FieldViolation(path=path, message=error.get("msg", "Invalid value")))
    return violations


def _interface_rule_violations(body: Any) -> list[FieldViolation]:
    """Run the interface rules on a raw body whose schema parse failed."""

    config = body.get("interfaceConfig") if isinstance(body, dict) else None
    interface = config.get("interface") if isinstance(config, dict) else None
    if not isinstance(interface, dict):
        return []
    return [v.prefixed("interfaceConfig", "interface") for v in check_interface(interface)]


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError):
        if exc.status_code >= 500:
            logger.error("portal_error request_id=%s detail=%s", _get_request_id(request), exc.message)
        return _respond(request, exc.status_code, exc.payload())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _respond(request, exc.status_code, {"detail": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        violations = merge_violations(_violations_from_request(exc), _interface_rule_violations(exc.body))
        error = ValidationError(violations)
        return _respond(request, error.status_code, error.payload())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        request_id = _get_request_id(request)
        logger.exception("unhandled_exception request_id=%s", request_id, exc_info=exc)
        return _respond(request, 500, {"detail": "Internal Server Error"})
