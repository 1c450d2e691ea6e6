from .log import InterceptHandler, Loggin, logger

__all__ = ["InterceptHandler", "Loggin", "logger"]
