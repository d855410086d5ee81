"""Core infrastructure modules."""

from .exceptions import (
    CineFlowException,
    CatalogError,
    CatalogNotConfiguredError,
    CatalogUnavailableError,
    CatalogHTTPError,
    CatalogInvalidResponseError,
    ChatError,
    ChatServiceUnavailableError,
    ChatModelNotFoundError,
    ChatHTTPError,
    ChatInvalidResponseError,
    ProfileValidationError,
)
from .logging import setup_logging, get_logger

__all__ = [
    "CineFlowException",
    "CatalogError",
    "CatalogNotConfiguredError",
    "CatalogUnavailableError",
    "CatalogHTTPError",
    "CatalogInvalidResponseError",
    "ChatError",
    "ChatServiceUnavailableError",
    "ChatModelNotFoundError",
    "ChatHTTPError",
    "ChatInvalidResponseError",
    "ProfileValidationError",
    "setup_logging",
    "get_logger",
]
