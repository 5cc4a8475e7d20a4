"""
HTTP API for Expense Tracker

A single resource, /api/expenses:
- GET   → 200, every expense, newest day first
- POST  → 201 with the created expense, 400 on a rejected payload
- other → 405 with an Allow header, whatever the method

Unexpected failures are logged here and answered with a generic 500.
No internal detail reaches the client.
"""

import json
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.audit import create_correlation_id
from src.orchestrator import ExpenseFlow, create_app_components
from src.validation import ExpenseValidationError
from src.validation.validator import INVALID_BODY_MESSAGE


logger = structlog.get_logger(__name__)

EXPENSES_PATH = "/api/expenses"
ALLOWED_METHODS = ("GET", "POST")
SERVER_ERROR_MESSAGE = "Server error"

router = APIRouter()


class UnsupportedMethodError(Exception):
    """An HTTP method the expenses endpoint doesn't serve."""

    def __init__(self, method: str, allowed: tuple[str, ...] = ALLOWED_METHODS):
        super().__init__(f"Method {method} Not Allowed")
        self.method = method
        self.allowed = allowed


def get_expense_flow(request: Request) -> ExpenseFlow:
    return request.app.state.expense_flow


def _server_error() -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": SERVER_ERROR_MESSAGE})


@router.get(EXPENSES_PATH)
async def list_expenses(flow: ExpenseFlow = Depends(get_expense_flow)):
    correlation_id = create_correlation_id()
    try:
        expenses = await flow.list_expenses(correlation_id=correlation_id)
        content = [expense.to_api_dict() for expense in expenses]
    except Exception:
        logger.exception("list_expenses_failed", correlation_id=str(correlation_id))
        return _server_error()

    return JSONResponse(status_code=200, content=content)


@router.post(EXPENSES_PATH)
async def create_expense(
    request: Request,
    flow: ExpenseFlow = Depends(get_expense_flow),
):
    correlation_id = create_correlation_id()
    try:
        body = await request.body()
        try:
            payload = json.loads(body) if body else None
        except ValueError:
            raise ExpenseValidationError(INVALID_BODY_MESSAGE)

        expense = await flow.record_expense(payload, correlation_id=correlation_id)
        content = expense.to_api_dict()
    except ExpenseValidationError:
        raise
    except Exception:
        logger.exception("create_expense_failed", correlation_id=str(correlation_id))
        return _server_error()

    logger.info(
        "expense_created",
        expense_id=str(expense.id),
        correlation_id=str(correlation_id),
    )
    return JSONResponse(status_code=201, content=content)


@router.api_route(
    EXPENSES_PATH,
    methods=["PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"],
    include_in_schema=False,
)
async def reject_method(
    request: Request,
    flow: ExpenseFlow = Depends(get_expense_flow),
):
    await _audit_rejected_method(request, flow)
    raise UnsupportedMethodError(request.method)


async def _audit_rejected_method(request: Request, flow: ExpenseFlow) -> None:
    if flow.audit_logger:
        await flow.audit_logger.log_method_not_allowed(
            method=request.method,
            path=request.url.path,
        )


async def handle_validation_error(request: Request, exc: ExpenseValidationError) -> JSONResponse:
    logger.info(
        "expense_rejected",
        error=exc.message,
        issues=exc.issues_as_dicts(),
    )
    return JSONResponse(status_code=400, content={"error": exc.message})


async def handle_unsupported_method(request: Request, exc: UnsupportedMethodError) -> PlainTextResponse:
    return PlainTextResponse(
        str(exc),
        status_code=405,
        headers={"Allow": ", ".join(exc.allowed)},
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    """
    Router-level 405s (methods no route lists, such as TRACE) get the
    same answer as the explicitly rejected ones.
    """
    if exc.status_code == 405 and request.url.path == EXPENSES_PATH:
        await _audit_rejected_method(request, get_expense_flow(request))
        return await handle_unsupported_method(request, UnsupportedMethodError(request.method))
    return await http_exception_handler(request, exc)


def create_api_app(flow: Optional[ExpenseFlow] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        flow: The expense flow to serve. When None, components are
              built from settings (see create_app_components).
    """
    if flow is None:
        flow, _ = create_app_components(use_storage=True)

    app = FastAPI(title="Expense Tracker API")
    app.state.expense_flow = flow
    app.add_exception_handler(ExpenseValidationError, handle_validation_error)
    app.add_exception_handler(UnsupportedMethodError, handle_unsupported_method)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.include_router(router)
    return app
