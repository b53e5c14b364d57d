"""Route modules."""

from .admin import router as admin_router
from .blog import router as blog_router
from .hotels import router as hotels_router
from .posts import router as posts_router

__all__ = ["admin_router", "blog_router", "hotels_router", "posts_router"]
