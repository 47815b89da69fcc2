"""
app/api/routers package marker.
"""

from app.api.routers.contact_intake import router as contact_intake_router
from app.api.routers.health import router as health_router

__all__ = [
    "contact_intake_router",
    "health_router",
]
