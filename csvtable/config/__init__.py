from .loader import ConfigError, Settings, load_config

__all__ = ["ConfigError", "Settings", "load_config"]
