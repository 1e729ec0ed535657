import uuid
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import field_validator
from sqlmodel import Field, SQLModel
from .base import TimestampMixin

DEFAULT_STORE_TYPE = "Retail Partner"


class LocationField(str, Enum):
    """Fields an admin may change on a location."""
    NAME = "name"
    ADDRESS = "address"
    PHONE = "phone"
    STORE_TYPE = "store_type"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    IS_ACTIVE = "is_active"


EDITABLE_FIELDS = [f.value for f in LocationField]


class StoreLocationBase(SQLModel):
    name: str = Field(default="")
    address: str = Field(default="")
    phone: Optional[str] = None
    store_type: str = Field(default=DEFAULT_STORE_TYPE)
    # latitude and longitude are independent; a half-set pair is allowed
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    is_active: bool = Field(default=True)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class StoreLocation(StoreLocationBase, TimestampMixin, table=True):
    __tablename__ = "store_locations"

    id: Optional[uuid.UUID] = Field(default_factory=uuid.uuid4, primary_key=True)


class StoreLocationRecord(StoreLocationBase):
    """Working copy of a location held by the editor.

    ``id`` is None until the record has been written to the store once.
    """
    id: Optional[uuid.UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def payload(self) -> dict:
        """Editable fields only, as written to the store."""
        return self.model_dump(include=set(EDITABLE_FIELDS))
