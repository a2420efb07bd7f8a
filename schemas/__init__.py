from schemas.application import (
    ApplicationStatus,
    LoanApplication,
    NewApplication,
    StatusUpdateResponse,
)

__all__ = [
    "ApplicationStatus",
    "LoanApplication",
    "NewApplication",
    "StatusUpdateResponse",
]
