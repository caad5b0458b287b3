"""
Services.

Business logic layer.
"""

from app.services.base_service import BaseService, ServiceResult, log_operation
from app.services.store import PlatformStore


__all__ = [
    "BaseService",
    "PlatformStore",
    "ServiceResult",
    "log_operation",
]
