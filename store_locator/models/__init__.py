from .base import TimestampMixin, utcnow
from .store_location import (
    DEFAULT_STORE_TYPE,
    EDITABLE_FIELDS,
    LocationField,
    StoreLocation,
    StoreLocationBase,
    StoreLocationRecord,
)
from .user import User
