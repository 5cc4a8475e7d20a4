"""HTTP API package."""

from src.api.routes import (
    ALLOWED_METHODS,
    EXPENSES_PATH,
    UnsupportedMethodError,
    create_api_app,
)

__all__ = [
    "ALLOWED_METHODS",
    "EXPENSES_PATH",
    "UnsupportedMethodError",
    "create_api_app",
]
