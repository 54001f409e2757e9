from .client import HostClient, ZohoDeskClient
from .actions import Resource, Operation, Event, LoadOption
from .config import ZohoDeskSettings, load_settings
from .handler import NodeHandler
from .models import (
    ApiRequest,
    Contact,
    TicketFields,
    UpdateTicketFields,
    CreateTicketInput,
    UpdateTicketInput,
    PollCursor,
    EventSpec,
    OutputItem,
    PollResult,
    OptionItem,
)
from .exceptions import (
    ZohoDeskError,
    TicketValidationError,
    UnsupportedOperationError,
    ApiError,
    AuthenticationError,
    RateLimitError,
)

__all__ = [
    "HostClient", "ZohoDeskClient", "Resource", "Operation", "Event", "LoadOption",
    "ZohoDeskSettings", "load_settings", "NodeHandler",
    "ApiRequest", "Contact", "TicketFields", "UpdateTicketFields", "CreateTicketInput", "UpdateTicketInput",
    "PollCursor", "EventSpec", "OutputItem", "PollResult", "OptionItem",
    "ZohoDeskError", "TicketValidationError", "UnsupportedOperationError", "ApiError", "AuthenticationError", "RateLimitError",
]
