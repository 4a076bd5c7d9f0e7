from .health import router as health_router
from .me import router as me_router
from .resources import resource_router

__all__ = ["health_router", "me_router", "resource_router"]
