"""
Error handling middleware
"""
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from utils.exceptions import (
    BusinessError, 
    business_error_handler,
    http_error_handler,
    request_validation_error_handler,
    general_error_handler
)

def add_error_handlers(app: FastAPI):
    """Add error handlers"""
    
    # Business error handling (including ZegoAPIError and other subclasses)
    app.add_exception_handler(BusinessError, business_error_handler)
    
    # HTTP error handling, including routing 404/405
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    
    # Malformed request bodies
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    
    # General error handling
    app.add_exception_handler(Exception, general_error_handler)
