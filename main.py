"""
Voice Agent Proxy Application Entry
"""
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from api.routes import api_router
from api.middleware.error_handler import add_error_handlers
from api.middleware.logging import add_logging_middleware

# Data layer and services
from data import initialize_data_layer, cleanup_data_layer
from services.agent_service import agent_service
from services.llm_service import llm_service

# Configuration and utilities
from configs.settings import settings
from configs.zego_config import zego_config
from configs.llm_config import llm_config
from utils.logger import get_logger


logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    logger.info("Starting voice agent proxy", environment=settings.environment, debug=settings.debug)
    
    if not zego_config.is_configured:
        logger.warning("ZEGO is not configured; agent endpoints will fail until "
                       "ZEGO_APP_ID, ZEGO_SERVER_SECRET and ZEGO_API_BASE_URL are set")
    if not llm_config.api_key:
        logger.warning("DASHSCOPE_API_KEY is not set")
    
    if not await initialize_data_layer():
        raise RuntimeError("Failed to initialize data layer")
    logger.info("Data layer initialized successfully")
    
    try:
        yield
    finally:
        logger.info("Shutting down voice agent proxy...")
        
        try:
            await agent_service.cleanup()
            await llm_service.cleanup()
        except Exception as e:
            logger.error("Error during service cleanup", error=str(e))
        
        await cleanup_data_layer()
        logger.info("Voice agent proxy shutdown completed")

def create_app() -> FastAPI:
    """Create FastAPI application"""
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Signing proxy between the voice chat client, ZEGO AI Agent and the LLM provider",
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    
    # Add middleware (order is important)
    add_error_handlers(app)
    add_logging_middleware(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    app.include_router(api_router)
    
    if settings.debug:
        logger.info("=== Registered Routes ===")
        for route in app.routes:
            if hasattr(route, 'methods') and hasattr(route, 'path'):
                logger.info(f"  {sorted(route.methods)} -> {route.path}")
        logger.info("========================")

    @app.get("/", tags=["root"])
    async def root():
        """Root path - Service information"""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "endpoints": {
                "start": "/api/start",
                "send_message": "/api/send-message",
                "stop": "/api/stop",
                "token": "/api/token",
                "llm": "/api/llm/chat/completions",
                "conversations": "/api/conversations",
                "health": "/health"
            }
        }
    
    return app

# Create application instance
app = create_app()

if __name__ == "__main__":
    uvicorn_config = {
        "app": "main:app",
        "host": settings.host,
        "port": settings.port,
        "reload": settings.debug,
        "log_level": settings.log_level.lower(),
        "access_log": settings.debug,
    }
    
    logger.info(f"Server will be available at: http://{settings.host}:{settings.port}")
    uvicorn.run(**uvicorn_config)
