from .router import router
from .root_routes import favicon_router

__all__ = ["router", "favicon_router"]
