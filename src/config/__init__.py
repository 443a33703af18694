from .settings import LogLevel, Settings

__all__ = ["LogLevel", "Settings"]
