from __future__ import annotations

from typing import Callable, Generic, Iterable, TypeVar

T = TypeVar("T")


class NotFoundError(LookupError):
    """Raised when a record could not be located by id."""


class InMemoryStore(Generic[T]):
    """Ordered, id-keyed store of immutable records.

    Records are replaced wholesale on ``put``; callers build a new value and
    store it instead of mutating what ``get`` returned. Insertion order is
    kept across replacements.
    """

    not_found_error: type[NotFoundError] = NotFoundError
    kind: str = "Record"

    def __init__(self, records: Iterable[T] = (), *, key: Callable[[T], str] | None = None) -> None:
        self._key = key or (lambda record: getattr(record, "id"))
        self._records: dict[str, T] = {}
        for record in records:
            self.put(record)

    def list(self) -> list[T]:
        return list(self._records.values())

    def get(self, record_id: str) -> T:
        try:
            return self._records[record_id]
        except KeyError:
            raise self.not_found_error(f"{self.kind} {record_id} not found") from None

    def find(self, record_id: str) -> T | None:
        return self._records.get(record_id)

    def put(self, record: T) -> T:
        self._records[self._key(record)] = record
        return record

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def __len__(self) -> int:
        return len(self._records)
