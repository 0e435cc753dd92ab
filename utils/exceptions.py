"""
Exception handling
"""
from typing import Optional

from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from utils.logger import get_logger
from utils.time_utils import now_ms

logger = get_logger("exceptions")

class BusinessError(Exception):
    """Base class for business errors"""
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

class ValidationError(BusinessError):
    """Missing or malformed request input"""
    def __init__(self, message: str):
        super().__init__(message, 400)

class AuthenticationError(BusinessError):
    """Missing or wrong proxy credentials"""
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, 401)

class ConfigurationError(BusinessError):
    """Required configuration is absent"""
    def __init__(self, message: str):
        super().__init__(message, 500)

class ZegoAPIError(BusinessError):
    """ZEGO server API failure

    status_code is 400 when ZEGO answered with a non-zero Code for a request
    the client made, 500 when the call itself failed.
    """
    def __init__(self, message: str, status_code: int = 500,
                 action: Optional[str] = None, code: Optional[int] = None):
        self.action = action
        self.code = code
        super().__init__(message, status_code)

class LLMServiceError(BusinessError):
    """Upstream LLM provider failure"""
    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message, status_code)

class TokenGenerationError(BusinessError):
    """RTC token could not be generated"""
    def __init__(self, message: str, code: int = 0):
        self.code = code
        super().__init__(message, 500)

def error_content(message: str, error_type: str) -> dict:
    """Error body shared by every handler; error stays a plain string"""
    return {
        "success": False,
        "error": message,
        "error_type": error_type,
        "timestamp": now_ms()
    }

async def business_error_handler(request: Request, exc: BusinessError):
    """Business error handler"""
    logger.warning("Business error", error=exc.message, path=request.url.path, status=exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_content(exc.message, type(exc).__name__)
    )

async def http_error_handler(request: Request, exc: HTTPException):
    """HTTP error handler"""
    logger.warning("HTTP error", status=exc.status_code, detail=exc.detail, path=request.url.path)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_content(str(exc.detail), "HTTPException"),
        headers=getattr(exc, "headers", None)
    )

async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors (400)"""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{location}: {message}"
    logger.warning("Request validation error", path=request.url.path, error=message)
    return JSONResponse(
        status_code=400,
        content=error_content(message, "ValidationError")
    )

async def general_error_handler(request: Request, exc: Exception):
    """General error handler"""
    logger.error("Unexpected error", error=str(exc), path=request.url.path, exc_info=True)
    return JSONResponse(
        status_code=500,
        content=error_content("Internal server error", "InternalError")
    )
