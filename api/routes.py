"""
API route registration
"""
from fastapi import APIRouter

from .agent import router as agent_router
from .token import router as token_router
from .llm_proxy import router as llm_proxy_router
from .conversation import router as conversation_router
from .health import router as health_router

api_router = APIRouter()

api_router.include_router(
    health_router,
    tags=["health"],
    responses={
        200: {"description": "Success"}
    }
)

api_router.include_router(
    agent_router,
    tags=["agent"],
    responses={
        200: {"description": "Success"},
        400: {"description": "Bad Request"},
        500: {"description": "Internal Server Error"}
    }
)

api_router.include_router(
    token_router,
    tags=["token"],
    responses={
        200: {"description": "Success"},
        400: {"description": "Bad Request"},
        500: {"description": "Internal Server Error"}
    }
)

api_router.include_router(
    llm_proxy_router,
    tags=["llm"],
    responses={
        200: {"description": "Success"},
        401: {"description": "Unauthorized"},
        502: {"description": "Bad Gateway"}
    }
)

api_router.include_router(
    conversation_router,
    prefix="/api",
    tags=["conversation"],
    responses={
        200: {"description": "Success"},
        400: {"description": "Bad Request"},
        404: {"description": "Not Found"},
        500: {"description": "Internal Server Error"}
    }
)

__all__ = ["api_router"]
