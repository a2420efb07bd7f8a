from __future__ import annotations

from datetime import timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from database import init_db, make_sessionmaker
from models import LoanApplication as LoanApplicationRow
from schemas.application import ApplicationStatus, LoanApplication, NewApplication
from services.errors import StoreUnavailable
from stores.base import ID_ATTEMPTS, ApplicationStore, check_patch, new_application_id


def _row_to_record(row: LoanApplicationRow) -> LoanApplication:
    submitted_at = row.submitted_at
    # SQLite hands back naive datetimes; everything is stored in UTC
    if submitted_at is not None and submitted_at.tzinfo is None:
        submitted_at = submitted_at.replace(tzinfo=timezone.utc)
    return LoanApplication(
        id=row.id,
        applicant_name=row.applicant_name,
        email=row.email,
        loan_amount=row.loan_amount,
        loan_purpose=row.loan_purpose,
        status=ApplicationStatus(row.status),
        submitted_at=submitted_at,
    )


class SqlApplicationStore(ApplicationStore):
    """Persistent store on async SQLAlchemy; one transaction per operation."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._sessionmaker = make_sessionmaker(engine)

    async def startup(self) -> None:
        try:
            await init_db(self.engine)
        except SQLAlchemyError as e:
            raise StoreUnavailable() from e

    async def shutdown(self) -> None:
        await self.engine.dispose()

    async def insert(self, new: NewApplication) -> LoanApplication:
        for attempt in range(1, ID_ATTEMPTS + 1):
            try:
                return await self._insert_row(new, new_application_id())
            except IntegrityError as e:
                # Primary key clash: draw a new id, like the memory store does
                if attempt == ID_ATTEMPTS:
                    raise StoreUnavailable() from e
            except SQLAlchemyError as e:
                raise StoreUnavailable() from e

    async def _insert_row(self, new: NewApplication, application_id: str) -> LoanApplication:
        async with self._sessionmaker() as session:
            async with session.begin():
                row = LoanApplicationRow(
                    id=application_id,
                    applicant_name=new.applicant_name,
                    email=new.email,
                    loan_amount=new.loan_amount,
                    loan_purpose=new.loan_purpose,
                    status=new.status.value,
                    submitted_at=new.submitted_at,
                )
                session.add(row)
                await session.flush()
                return _row_to_record(row)

    async def find_all(self) -> list[LoanApplication]:
        try:
            async with self._sessionmaker() as session:
                result = await session.execute(
                    select(LoanApplicationRow).order_by(LoanApplicationRow.submitted_at, LoanApplicationRow.id)
                )
                return [_row_to_record(r) for r in result.scalars().all()]
        except SQLAlchemyError as e:
            raise StoreUnavailable() from e

    async def find_by_id(self, application_id: str) -> LoanApplication | None:
        try:
            async with self._sessionmaker() as session:
                row = await session.get(LoanApplicationRow, application_id)
                return _row_to_record(row) if row else None
        except SQLAlchemyError as e:
            raise StoreUnavailable() from e

    async def update_by_id(self, application_id: str, patch: dict[str, Any]) -> LoanApplication | None:
        check_patch(patch)
        try:
            async with self._sessionmaker() as session:
                async with session.begin():
                    row = await session.get(LoanApplicationRow, application_id)
                    if row is None:
                        return None
                    if "status" in patch:
                        row.status = ApplicationStatus(patch["status"]).value
                    await session.flush()
                    return _row_to_record(row)
        except SQLAlchemyError as e:
            raise StoreUnavailable() from e
