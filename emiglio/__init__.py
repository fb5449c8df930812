"""Trading bot utilities: logging, JSON access, configuration and live market text formatting."""

__version__ = "0.1.0"
__all__ = ["config", "display", "jsonparser", "logger", "market"]