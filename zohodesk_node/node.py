import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from zohodesk_core import NodeHandler, Operation, Resource, LoadOption
from zohodesk_core.exceptions import RateLimitError, UnsupportedOperationError
from zohodesk_core.models import ApiRequest, CreateTicketInput, OptionItem, OutputItem, UpdateTicketInput

logger = logging.getLogger("zohodesk-node")

RATE_LIMIT_MESSAGE = (
    "Zoho Desk API rate limit exceeded (10 requests/second per organization). "
    "Please wait a moment and try again, or reduce the number of items being processed."
)


def _status_code(error: Exception) -> Optional[int]:
    status = getattr(error, "status_code", None)
    if status is None:
        response = getattr(error, "response", None)
        status = getattr(response, "status_code", None)
    return status


class ZohoDeskNode(NodeHandler):
    """Creates and updates Zoho Desk tickets, one request per input item."""

    name = "zohoDesk"

    def build_request(self, resource: str, operation: str, params: Dict[str, Any]) -> ApiRequest:
        """Validate one item's parameters and describe the request for it.

        Raises:
            TicketValidationError: if the contact, custom fields or ticket ID
                are rejected.
            UnsupportedOperationError: for anything but ticket create/update.
        """
        if resource != Resource.TICKET.value:
            raise UnsupportedOperationError(f"The resource {resource!r} is not supported")
        if operation == Operation.CREATE.value:
            return CreateTicketInput.model_validate(params).to_request()
        if operation == Operation.UPDATE.value:
            return UpdateTicketInput.model_validate(params).to_request()
        raise UnsupportedOperationError(f"The operation {operation!r} is not supported for {resource!r}")

    async def execute(self, resource: str, operation: str, items: List[Dict[str, Any]], continue_on_fail: bool = False) -> List[OutputItem]:
        results = []
        for index, params in enumerate(items):
            try:
                request = self.build_request(resource, operation, params)
                response = await self.client.send(request)
                results.append(OutputItem(data=response, paired_item=index))
            except Exception as e:
                if _status_code(e) == 429:
                    rate_limit = RateLimitError(RATE_LIMIT_MESSAGE, status_code=429)
                    if not continue_on_fail:
                        raise rate_limit from e
                    message = str(rate_limit)
                elif not continue_on_fail:
                    raise
                else:
                    message = str(e)
                logger.error(f"Item {index} failed: {message}")
                results.append(OutputItem(data={"error": message}, paired_item=index))
        logger.info(f"Processed {len(items)} item(s) for {resource}.{operation}")
        return results

    def option_loaders(self):
        loaders = super().option_loaders()
        loaders[LoadOption.GET_TEAMS.value] = self.get_teams
        return loaders

    async def get_teams(self, department_id: Any = None, **params: Any) -> List[OptionItem]:
        # departmentId is optional on update, so there may be nothing to scope by
        department_id = params.get("departmentId", department_id)
        if not department_id or not isinstance(department_id, str):
            return []
        return await self._load_option_list(f"/departments/{quote(department_id, safe='')}/teams", "teams")
