from __future__ import annotations

from typing import Any

from schemas.application import LoanApplication, NewApplication
from services.errors import StoreUnavailable
from stores.base import ID_ATTEMPTS, ApplicationStore, check_patch, new_application_id


class MemoryApplicationStore(ApplicationStore):
    """
    In-process store; contents are lost on restart. Keeps insertion order.
    Mutations never await, so on a single event loop they cannot interleave.
    Records are copied on the way in and out so callers cannot mutate stored state.
    """

    def __init__(self) -> None:
        self._records: dict[str, LoanApplication] = {}

    async def insert(self, new: NewApplication) -> LoanApplication:
        application_id = new_application_id()
        attempts = 1
        while application_id in self._records:
            if attempts == ID_ATTEMPTS:
                raise StoreUnavailable()
            application_id = new_application_id()
            attempts += 1
        record = LoanApplication(id=application_id, **new.model_dump())
        self._records[application_id] = record
        return record.model_copy()

    async def find_all(self) -> list[LoanApplication]:
        return [r.model_copy() for r in self._records.values()]

    async def find_by_id(self, application_id: str) -> LoanApplication | None:
        record = self._records.get(application_id)
        return record.model_copy() if record else None

    async def update_by_id(self, application_id: str, patch: dict[str, Any]) -> LoanApplication | None:
        check_patch(patch)
        record = self._records.get(application_id)
        if record is None:
            return None
        updated = record.model_copy(update=patch)
        self._records[application_id] = updated
        return updated.model_copy()
