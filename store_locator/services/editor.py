"""Editor actions for the store locations admin screen.

Every action returns an :class:`ActionResult` instead of raising; turning a
result into something the admin sees is left to the caller.
"""
from dataclasses import dataclass
from typing import Any, Optional

from store_locator.exception import LocatorError, ValidationError
from store_locator.logger import logging
from store_locator.models import LocationField
from .gateway import LocationGateway
from .geocoding import GeocodingClient
from .working_set import LocationWorkingSet


@dataclass
class ActionResult:
    action: str
    message: str = ""
    value: Any = None
    error: Optional[LocatorError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SaveReport:
    total: int
    committed: int
    failed_index: Optional[int] = None
    reloaded: bool = False


class EditorController:
    def __init__(
        self,
        gateway: LocationGateway,
        geocoder: GeocodingClient,
        working_set: Optional[LocationWorkingSet] = None,
    ):
        self.gateway = gateway
        self.geocoder = geocoder
        self.working_set = working_set if working_set is not None else LocationWorkingSet()
        self.loading = False
        self.saving = False

    async def load(self) -> ActionResult:
        self.loading = True
        try:
            records = await self.gateway.fetch_all()
        except LocatorError as e:
            return self._failed("load", e)
        finally:
            self.loading = False

        self.working_set.load(records)
        return ActionResult("load", value=len(records))

    def add(self) -> ActionResult:
        index = self.working_set.add()
        return ActionResult("add", value=index)

    def edit_field(self, index: int, field: LocationField, value: Any) -> ActionResult:
        try:
            record = self.working_set.update_field(index, field, value)
        except LocatorError as e:
            return self._failed("edit", e)
        return ActionResult("edit", value=record)

    async def remove(self, index: int) -> ActionResult:
        try:
            record = self.working_set[index]
            if record.id is not None:
                await self.gateway.delete(record.id)
            self.working_set.remove_local(index)
        except LocatorError as e:
            return self._failed("remove", e)

        message = "Store location deleted successfully" if record.id is not None else ""
        return ActionResult("remove", message=message, value=record)

    async def geocode(self, index: int) -> ActionResult:
        try:
            record = self.working_set[index]
            if not record.address or not record.address.strip():
                raise ValidationError("Please enter an address first")

            coords = await self.geocoder.resolve(record.address)
            self.working_set.update_field(index, LocationField.LATITUDE, coords.latitude)
            self.working_set.update_field(index, LocationField.LONGITUDE, coords.longitude)
        except LocatorError as e:
            return self._failed("geocode", e)

        return ActionResult("geocode", message="Coordinates updated successfully", value=coords)

    async def save_all(self) -> ActionResult:
        if self.saving:
            return self._failed("save", ValidationError("A save is already in progress"))

        self.saving = True
        records = self.working_set.records()
        report = SaveReport(total=len(records), committed=0)
        try:
            # Best-effort sequential commit: records before a failure stay
            # written, the failing record and everything after it do not.
            for position, record in enumerate(records):
                report.failed_index = position
                await self.gateway.upsert(record)
                report.committed += 1
            report.failed_index = None
        except LocatorError as e:
            logging.error(
                f"Save aborted at position {report.failed_index}: "
                f"{report.committed} of {report.total} location(s) already committed"
            )
            result = self._failed("save", e)
            result.value = report
            return result
        finally:
            self.saving = False

        reload = await self.load()
        report.reloaded = reload.ok
        if not reload.ok:
            reload.action = "save"
            reload.value = report
            return reload

        return ActionResult("save", message="Store locations updated successfully", value=report)

    def _failed(self, action: str, error: LocatorError) -> ActionResult:
        logging.error(f"Editor action '{action}' failed: {error}")
        return ActionResult(action, message=error.message, error=error)
