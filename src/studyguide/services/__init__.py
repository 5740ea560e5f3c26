from .guide import GuideService, get_guide_service

__all__ = ["GuideService", "get_guide_service"]
