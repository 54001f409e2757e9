import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from .config import DEFAULT_BASE_URL, ZohoDeskSettings
from .exceptions import ApiError, AuthenticationError
from .models import ApiRequest

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("zohodesk-core")


class HostClient(ABC):
    """The host's authenticated HTTP helper, bound to one organization."""

    org_id: str
    base_url: str

    @abstractmethod
    async def send(self, request: ApiRequest) -> Any:
        """Send the request with the orgId header and return the decoded JSON body."""


class ZohoDeskClient(HostClient):
    def __init__(
        self,
        org_id: str,
        access_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not org_id:
            logger.error("Zoho Desk orgId is not provided or empty")
            raise ValueError("ZOHO_DESK_ORG_ID is required")
        if not access_token:
            logger.error("Zoho Desk access token is not provided or empty")
            raise ValueError("ZOHO_DESK_ACCESS_TOKEN is required")
        self.org_id = org_id
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self._client = httpx.AsyncClient(
            headers={
                "orgId": org_id,
                "Authorization": f"Zoho-oauthtoken {access_token}",
            },
            timeout=timeout,
            transport=transport,
        )
        logger.info("ZohoDeskClient initialized")

    @classmethod
    def from_settings(cls, settings: ZohoDeskSettings, **kwargs: Any) -> "ZohoDeskClient":
        return cls(
            org_id=settings.org_id,
            access_token=settings.access_token,
            base_url=settings.base_url,
            timeout=settings.timeout,
            **kwargs,
        )

    async def send(self, request: ApiRequest) -> Any:
        url = f"{self.base_url}{request.path}"
        logger.debug(f"{request.method} {url} params={request.params} body={request.body}")
        try:
            response = await self._client.request(
                request.method,
                url,
                params=request.params,
                json=request.body,
            )
        except httpx.HTTPError as e:
            logger.error(f"Request {request.method} {request.path} failed: {str(e)}")
            raise ApiError(f"Request to Zoho Desk failed: {str(e)}") from e

        if response.status_code == 401:
            raise AuthenticationError(f"Zoho Desk rejected the access token: {response.text}", status_code=401)
        if response.is_error:
            logger.error(f"Zoho Desk returned {response.status_code} for {request.method} {request.path}")
            raise ApiError(
                f"Zoho Desk API error {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        logger.info(f"{request.method} {request.path} -> {response.status_code}")
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Zoho Desk returned a non-JSON body for {request.method} {request.path}")
            raise ApiError(
                f"Zoho Desk returned an invalid JSON response: {str(e)}",
                status_code=response.status_code,
            ) from e

    async def close(self):
        await self._client.aclose()
        logger.info("ZohoDeskClient closed")

    async def __aenter__(self) -> "ZohoDeskClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
