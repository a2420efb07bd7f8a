from __future__ import annotations

import logging
from typing import Any

from schemas.application import LoanApplication
from services.errors import NotFound, StoreUnavailable
from services.validation import validate_create, validate_status
from stores.base import ApplicationStore

logger = logging.getLogger(__name__)


class ApplicationRegistry:
    """
    Create, list, fetch and re-status loan applications against an injected store.
    Validation always happens before the store is touched; each call makes at most one store call.
    """

    def __init__(self, store: ApplicationStore):
        self.store = store

    async def create(self, payload: Any) -> LoanApplication:
        new = validate_create(payload)
        try:
            application = await self.store.insert(new)
        except StoreUnavailable:
            logger.exception("Store failed while creating application")
            raise
        logger.info("New application submitted: %s (%s)", application.id, application.applicant_name)
        return application

    async def list(self) -> list[LoanApplication]:
        try:
            return await self.store.find_all()
        except StoreUnavailable:
            logger.exception("Store failed while listing applications")
            raise

    async def get_by_id(self, application_id: str) -> LoanApplication:
        try:
            application = await self.store.find_by_id(application_id)
        except StoreUnavailable:
            logger.exception("Store failed while loading application %s", application_id)
            raise
        if application is None:
            logger.info("Application %s not found", application_id)
            raise NotFound()
        return application

    async def update_status(self, application_id: str, status: Any) -> LoanApplication:
        # Any status may move to any other (including itself); only the target value is checked
        new_status = validate_status(status)
        try:
            application = await self.store.update_by_id(application_id, {"status": new_status})
        except StoreUnavailable:
            logger.exception("Store failed while updating application %s", application_id)
            raise
        if application is None:
            logger.info("Application %s not found", application_id)
            raise NotFound()
        logger.info("Application %s status set to %s", application_id, new_status.value)
        return application
