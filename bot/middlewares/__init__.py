"""
Middlewares.

Bot middlewares for request processing.
"""

from bot.middlewares.admin_auth_middleware import AdminAuthMiddleware


__all__ = [
    "AdminAuthMiddleware",
]
