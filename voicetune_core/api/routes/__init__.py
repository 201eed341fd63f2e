"""
API Routes Module

Routers for the settings service endpoints.
"""

from .agent import router as agent_router
from .settings import router as settings_router


__all__ = [
    "agent_router",
    "settings_router",
]
