from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from typing import Any

from schemas.application import LoanApplication, NewApplication

# Fields a store may change after insert
MUTABLE_FIELDS = frozenset({"status"})

# Fresh ids drawn before an insert gives up on primary key clashes
ID_ATTEMPTS = 5


def new_application_id() -> str:
    return f"APP-{uuid.uuid4().hex[:12]}"


def check_patch(patch: dict[str, Any]) -> None:
    extra = set(patch) - MUTABLE_FIELDS
    if extra:
        raise ValueError(f"Immutable application fields in patch: {', '.join(sorted(extra))}")


class ApplicationStore(ABC):
    """
    Persistence collaborator for loan applications.
    Implementations assign ids on insert and only ever patch the status field.
    """

    @abstractmethod
    async def insert(self, new: NewApplication) -> LoanApplication:
        ...

    @abstractmethod
    async def find_all(self) -> list[LoanApplication]:
        ...

    @abstractmethod
    async def find_by_id(self, application_id: str) -> LoanApplication | None:
        ...

    @abstractmethod
    async def update_by_id(self, application_id: str, patch: dict[str, Any]) -> LoanApplication | None:
        ...

    async def startup(self) -> None:
        """Prepare the backend (create tables, open pools); no-op by default."""

    async def shutdown(self) -> None:
        """Release backend resources; no-op by default."""
