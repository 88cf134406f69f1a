from .favorites import router as favorites_router

__all__ = ["favorites_router"]
