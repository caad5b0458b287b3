"""
Bot Initialization Module.

This module contains all initialization logic split into focused modules:
- logging: Logger configuration
- handlers: Handler registration (user and admin)
"""

__all__ = []
