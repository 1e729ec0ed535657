from .locations import router as locations_router
from .admin_locations import router as admin_locations_router
