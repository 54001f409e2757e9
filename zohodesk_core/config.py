import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://desk.zoho.com/api/v1"


class ZohoDeskSettings(BaseModel):
    org_id: str = Field(..., description="Zoho Desk organization ID, sent as the orgId header")
    access_token: str = Field(..., description="OAuth2 access token")
    base_url: str = Field(DEFAULT_BASE_URL, description="API base URL of the organization's data center")
    timeout: float = Field(30.0, description="Request timeout in seconds")


def load_settings(env_file: Optional[str] = None) -> ZohoDeskSettings:
    """Read settings from the environment, loading a .env file first."""
    load_dotenv(env_file)
    return ZohoDeskSettings(
        org_id=os.getenv("ZOHO_DESK_ORG_ID", ""),
        access_token=os.getenv("ZOHO_DESK_ACCESS_TOKEN", ""),
        base_url=os.getenv("ZOHO_DESK_BASE_URL") or DEFAULT_BASE_URL,
        timeout=float(os.getenv("ZOHO_DESK_TIMEOUT", "30")),
    )
