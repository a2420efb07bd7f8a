from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel

from utils.case import dict_keys_to_camel


class ApplicationStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class NewApplication(BaseModel):
    """Validated creation record, before the store assigns an id."""

    applicant_name: str
    email: str
    loan_amount: int | float
    loan_purpose: str
    status: ApplicationStatus = ApplicationStatus.PENDING
    submitted_at: datetime


class LoanApplication(NewApplication):
    id: str

    def to_response(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dict with camelCase keys for clients."""
        data = self.model_dump(mode="json")
        return dict_keys_to_camel({"id": data.pop("id"), **data})


class StatusUpdateResponse(BaseModel):
    message: str
    application: dict[str, Any]
