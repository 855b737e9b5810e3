"""Screen service layer."""

import logging

from signage.core.logging_safety import safe_log_identifier
from signage.errors import ApiError
from signage.repositories.memory import InMemoryStore, ScreenRecord
from signage.schemas.pagination import Page, PaginationMeta
from signage.schemas.screen import Screen, UpdateScreenResponse
from signage.services.pagination import filter_by_name, paginate

logger = logging.getLogger(__name__)


class ScreenService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def list_screens(self, *, search: str | None, page: int, limit: int) -> Page[Screen]:
        matching = filter_by_name(self._store.list_screens(), search, name_of=lambda record: record.name)
        return Page[Screen](
            data=[self._to_screen(record) for record in paginate(matching, page=page, limit=limit)],
            pagination=PaginationMeta(page=page, limit=limit, total=len(matching)),
        )

    def update_status(self, *, screen_id: str, is_active: bool) -> UpdateScreenResponse:
        record = self._store.set_screen_status(screen_id=screen_id, is_active=is_active)
        if record is None:
            raise ApiError(status_code=404, code="RESOURCE_NOT_FOUND", message="Screen not found")

        logger.info(
            "screen.status_updated screen_id=%s is_active=%s",
            safe_log_identifier(record.id, prefix="sid"),
            record.is_active,
        )
        return UpdateScreenResponse(
            message="Screen status updated successfully",
            screen=self._to_screen(record),
        )

    @staticmethod
    def _to_screen(record: ScreenRecord) -> Screen:
        return Screen(id=record.id, name=record.name, is_active=record.is_active)
