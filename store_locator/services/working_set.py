"""In-memory, ordered set of locations being edited.

Position in the sequence is the record's identity for the session, so every
operation is addressed by index. Records are replaced, never mutated, which
keeps earlier snapshots returned by :meth:`records` stable.
"""
from typing import Any, Iterable, Iterator, List
from pydantic import ValidationError as PydanticValidationError

from store_locator.exception import ValidationError
from store_locator.models import LocationField, StoreLocationRecord


class LocationWorkingSet:
    def __init__(self, records: Iterable[StoreLocationRecord] = ()):
        self._records: List[StoreLocationRecord] = list(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[StoreLocationRecord]:
        return iter(list(self._records))

    def __getitem__(self, index: int) -> StoreLocationRecord:
        self._check_index(index)
        return self._records[index]

    def records(self) -> List[StoreLocationRecord]:
        return list(self._records)

    def load(self, records: Iterable[StoreLocationRecord]) -> None:
        self._records = list(records)

    def add(self) -> int:
        self._records.append(
            StoreLocationRecord(
                name="",
                address="",
                phone="",
                latitude=None,
                longitude=None,
                is_active=True,
            )
        )
        return len(self._records) - 1

    def update_field(self, index: int, field: LocationField, value: Any) -> StoreLocationRecord:
        self._check_index(index)
        try:
            field = LocationField(field)
        except ValueError:
            raise ValidationError(f"Unknown location field '{field}'")

        current = self._records[index]
        data = current.model_dump()
        data[field.value] = value
        try:
            updated = StoreLocationRecord.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid value for {field.value}", detail=str(e))

        self._records[index] = updated
        return updated

    def remove_local(self, index: int) -> StoreLocationRecord:
        self._check_index(index)
        return self._records.pop(index)

    def _check_index(self, index: int) -> None:
        # negative positions are out of range too
        if not isinstance(index, int) or index < 0 or index >= len(self._records):
            raise ValidationError(f"No location at position {index}")
