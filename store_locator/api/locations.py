from fastapi import APIRouter, Depends
from sqlmodel import Session, select
from typing import List, Dict, Any
from store_locator.models import StoreLocation
from store_locator.database import get_session
from store_locator.core.config import settings
from store_locator.cache import cache
from store_locator.services import google_maps_search_url

router = APIRouter()

CACHE_PREFIX = "locations"


@router.get("/", response_model=List[Dict[str, Any]])
@cache(prefix=CACHE_PREFIX, expire=settings.PUBLIC_CACHE_SECONDS)
async def get_active_locations(session: Session = Depends(get_session)):
    """Active store locations for the public store finder, newest first."""
    locations = session.exec(
        select(StoreLocation)
        .where(StoreLocation.is_active == True)  # noqa: E712
        .order_by(StoreLocation.created_at.desc())
    ).all()

    return [
        {
            "id": location.id,
            "name": location.name,
            "address": location.address,
            "phone": location.phone,
            "store_type": location.store_type,
            "latitude": location.latitude,
            "longitude": location.longitude,
            "maps_url": google_maps_search_url(location.address),
        }
        for location in locations
    ]
