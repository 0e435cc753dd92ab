"""
Log Utils
"""
import logging
import logging.handlers
import os
import structlog
from typing import Optional, Any
from configs.settings import settings

class CustomLogger:
    """Custom Logger class, supports error parameters and structlog style"""
    
    def __init__(self, name: str = None):
        self._logger = logging.getLogger(name or __name__)
        
        log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
        self._logger.setLevel(log_level)
    
    def _format_message_with_kwargs(self, message: str, **kwargs) -> str:
        """Format kwargs into message"""
        if kwargs:
            kwargs_str = ", ".join([f"{k}={v}" for k, v in kwargs.items()])
            return f"{message} [{kwargs_str}]"
        return message
    
    def debug(self, message: str, error: Optional[Any] = None, **kwargs):
        """Debug log"""
        if error:
            self._logger.debug(self._format_message_with_kwargs(f"{message}: {error}", **kwargs))
        else:
            self._logger.debug(self._format_message_with_kwargs(message, **kwargs))
    
    def info(self, message: str, error: Optional[Any] = None, **kwargs):
        """Info log - Compatible with structlog style"""
        if error:
            self._logger.info(self._format_message_with_kwargs(f"{message}: {error}", **kwargs))
        else:
            self._logger.info(self._format_message_with_kwargs(message, **kwargs))
    
    def warning(self, message: str, error: Optional[Any] = None, **kwargs):
        """Warning log"""
        if error:
            self._logger.warning(self._format_message_with_kwargs(f"{message}: {error}", **kwargs))
        else:
            self._logger.warning(self._format_message_with_kwargs(message, **kwargs))
    
    def error(self, message: str, error: Optional[Any] = None, exc_info: bool = False, **kwargs):
        """Error log"""
        if error:
            formatted_msg = self._format_message_with_kwargs(f"{message}: {error}", **kwargs)
        else:
            formatted_msg = self._format_message_with_kwargs(message, **kwargs)
        self._logger.error(formatted_msg, exc_info=exc_info)
    
    def exception(self, message: str, **kwargs):
        """Exception log (automatically includes stack information)"""
        self._logger.exception(self._format_message_with_kwargs(message, **kwargs))

def setup_logging():
    """Setup logging configuration"""
    # Ensure log directory exists
    if settings.log_file:
        log_dir = os.path.dirname(settings.log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)
    
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    
    handlers = []
    
    # File handler
    if settings.log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            settings.log_file,
            maxBytes=settings.log_max_size,
            backupCount=settings.log_backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        handlers.append(file_handler)
    
    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    handlers.append(console_handler)
    
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )
    
    # aiohttp access noise stays at warning
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)
    
    # Route structlog through the stdlib handlers configured above
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.KeyValueRenderer(key_order=["event", "level", "logger"]),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    
    logging.getLogger("setup").debug(
        f"Logging setup completed - Level: {settings.log_level}, handlers: {len(handlers)}"
    )

def get_logger(name: str = None) -> CustomLogger:
    """Get custom logger"""
    return CustomLogger(name)

# Initialize logging
setup_logging()
