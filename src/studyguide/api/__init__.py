from .guide import router as guide_router
from .preferences import router as preferences_router

__all__ = ["guide_router", "preferences_router"]
