import logging
from typing import Any, Dict, List, Optional, Union

from zohodesk_core import NodeHandler
from zohodesk_core.models import ApiRequest, OutputItem, PollCursor, PollResult
from zohodesk_core.polling import (
    EVENT_SPECS,
    advance_cursor,
    build_query,
    filter_new_items,
    now_ms,
    reference_time,
    resolve_event,
)

logger = logging.getLogger("zohodesk-trigger")


class ZohoDeskTrigger(NodeHandler):
    """Polls Zoho Desk for new or updated tickets, contacts and accounts."""

    name = "zohoDeskTrigger"

    async def poll(
        self,
        event: str,
        cursor: Union[PollCursor, Dict[str, Any], None] = None,
        department_id: str = "",
        include: Optional[List[str]] = None,
        limit: Optional[int] = None,
        now: Optional[int] = None,
    ) -> PollResult:
        """Fetch one page of records and return those not emitted before.

        ``cursor`` is the state returned by the previous poll (or the host's
        raw ``{"lastPollTime", "lastSeenIds"}`` blob); omit it on the first
        run. The returned cursor replaces it. A failed first run yields no
        events and a fresh cursor; later failures are raised unchanged and
        the previous cursor stays valid.
        """
        if cursor is None:
            cursor = PollCursor()
        elif not isinstance(cursor, PollCursor):
            cursor = PollCursor.model_validate(cursor)
        now = now_ms() if now is None else now

        resolved = resolve_event(event)
        event_spec = EVENT_SPECS[resolved]
        since = reference_time(cursor, now)
        request = ApiRequest(
            method="GET",
            path=event_spec.endpoint,
            params=build_query(resolved, since, department_id=department_id, include=include, limit=limit),
        )

        try:
            response = await self.client.send(request)
        except Exception as e:
            if cursor.is_first_run:
                logger.warning(f"First poll for {resolved.value} failed, starting from now: {str(e)}")
                return PollResult(items=None, cursor=PollCursor(last_poll_time=now, last_seen_ids=[]))
            raise

        records = []
        if isinstance(response, dict) and isinstance(response.get("data"), list):
            records = [item for item in response["data"] if isinstance(item, dict)]

        new_items = filter_new_items(records, event_spec, cursor, since)
        next_cursor = advance_cursor(new_items, now)
        logger.info(f"Polled {event_spec.endpoint} for {resolved.value}: {len(records)} fetched, {len(new_items)} new")

        if not new_items:
            return PollResult(items=None, cursor=next_cursor)
        return PollResult(items=[OutputItem(data=item) for item in new_items], cursor=next_cursor)
