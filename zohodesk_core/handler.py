import logging
from typing import Any, Awaitable, Callable, Dict, List

from .client import HostClient
from .actions import LoadOption
from .exceptions import UnsupportedOperationError
from .models import ApiRequest, OptionItem, OutputItem, PollResult

logger = logging.getLogger("zohodesk-core")


class NodeHandler:
    """Entry points the workflow host calls into.

    Subclasses override the entry points they support; the others raise
    UnsupportedOperationError. Option loaders are registered by name in
    ``option_loaders`` and never raise: a failed load is an empty dropdown.
    """

    name = "node"

    def __init__(self, client: HostClient):
        self.client = client

    async def execute(self, resource: str, operation: str, items: List[Dict[str, Any]], continue_on_fail: bool = False) -> List[OutputItem]:
        raise UnsupportedOperationError(f"{self.name} does not support execute")

    async def poll(self, event: str, cursor: Any = None, **options: Any) -> PollResult:
        raise UnsupportedOperationError(f"{self.name} does not support poll")

    def option_loaders(self) -> Dict[str, Callable[..., Awaitable[List[OptionItem]]]]:
        return {LoadOption.GET_DEPARTMENTS.value: self.get_departments}

    async def load_options(self, method: str, **params: Any) -> List[OptionItem]:
        loader = self.option_loaders().get(method)
        if loader is None:
            raise UnsupportedOperationError(f"{self.name} has no option loader {method!r}")
        return await loader(**params)

    async def get_departments(self, **params: Any) -> List[OptionItem]:
        return await self._load_option_list("/departments", "departments")

    async def _load_option_list(self, path: str, label: str) -> List[OptionItem]:
        try:
            response = await self.client.send(ApiRequest(method="GET", path=path))
            if not isinstance(response, dict) or not isinstance(response.get("data"), list):
                logger.error(f"Invalid API response structure from Zoho Desk while loading {label}")
                return []
            return [OptionItem(name=entry["name"], value=entry["id"]) for entry in response["data"]]
        except Exception as e:
            logger.error(f"Failed to load {label} from Zoho Desk: {str(e)}")
            return []
