"""
Exception Taxonomy

Errors raised by the catalog and chat clients and by profile validation.
Callers decide whether to surface or absorb them; the clients never do.
"""

from typing import Optional


class CineFlowException(Exception):
    """Base exception for CineFlow errors."""
    
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# =============================================================================
# Catalog (TMDB)
# =============================================================================

class CatalogError(CineFlowException):
    """Any failure talking to the movie catalog."""


class CatalogNotConfiguredError(CatalogError):
    """No usable API key is set."""
    
    def __init__(self):
        super().__init__("TMDB API key not configured")


class CatalogUnavailableError(CatalogError):
    """Transport-level failure (DNS, connect, timeout)."""
    
    def __init__(self, detail: str = ""):
        message = "Couldn't reach the movie catalog"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class CatalogHTTPError(CatalogError):
    """Catalog answered with a non-success status."""
    
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"HTTP error: {status_code}")


class CatalogInvalidResponseError(CatalogError):
    """Response body could not be parsed into the expected shape."""
    
    def __init__(self, detail: str = ""):
        message = "Invalid response from server"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


# =============================================================================
# Chat assistant (Ollama)
# =============================================================================

class ChatError(CineFlowException):
    """Any failure talking to the chat assistant."""


class ChatServiceUnavailableError(ChatError):
    """The local chat service could not be reached."""
    
    def __init__(self, base_url: Optional[str] = None):
        self.base_url = base_url
        super().__init__("Chat service unavailable")


class ChatModelNotFoundError(ChatError):
    """The configured model is not installed on the chat service."""
    
    def __init__(self, model: str):
        self.model = model
        super().__init__(f"Model not found: {model}")


class ChatHTTPError(ChatError):
    """Chat service answered with a non-success status."""
    
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Server error ({status_code})")


class ChatInvalidResponseError(ChatError):
    """Chat reply did not contain a message."""
    
    def __init__(self):
        super().__init__("Couldn't understand the response")


# =============================================================================
# Profile
# =============================================================================

class ProfileValidationError(CineFlowException):
    """Onboarding input rejected."""
    
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)
