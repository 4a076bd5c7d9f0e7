from .core.env import Env, get_env, get_env_flags
from .core.logging import setup_logging
from .settings import AppSettings, get_app_settings

__all__ = [
    "Env",
    "get_env",
    "get_env_flags",
    "setup_logging",
    "AppSettings",
    "get_app_settings",
]
