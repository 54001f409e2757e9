from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union
from urllib.parse import quote

from .exceptions import TicketValidationError
from .fields import (
    TICKET_CREATE_OPTIONAL_FIELDS,
    TICKET_UPDATE_OPTIONAL_FIELDS,
    UPDATE_TICKET_DOCS,
    build_contact,
    build_ticket_body,
    is_valid_ticket_id,
    parse_custom_fields,
)

Scalar = Union[str, int, float]
Identifier = Union[str, int]


class ApiRequest(BaseModel):
    method: str = Field(..., description="HTTP method")
    path: str = Field(..., description="Path relative to the API base URL")
    params: Optional[Dict[str, Any]] = Field(None, description="Query parameters")
    body: Optional[Dict[str, Any]] = Field(None, description="JSON body")


class Contact(BaseModel):
    """Contact attached to a new ticket; matched by email or created by Zoho Desk."""
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[Scalar] = None
    last_name: Optional[Scalar] = Field(None, alias="lastName")
    first_name: Optional[Scalar] = Field(None, alias="firstName")
    phone: Optional[Scalar] = None
    mobile: Optional[Scalar] = None

    @model_validator(mode="before")
    @classmethod
    def _validate_values(cls, data: Any) -> Any:
        if isinstance(data, Contact):
            return data
        return build_contact(data)

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class TicketFields(BaseModel):
    """Optional fields of a new ticket. Only fields given explicitly are sent."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    optional_fields: ClassVar[Tuple[str, ...]] = TICKET_CREATE_OPTIONAL_FIELDS

    description: Optional[Any] = None
    due_date: Optional[Any] = Field(None, alias="dueDate")
    priority: Optional[Any] = None
    secondary_contacts: Optional[Any] = Field(None, alias="secondaryContacts", description="Comma-separated contact IDs")
    cf: Optional[Any] = Field(None, description="Custom fields as an object or JSON string")
    account_id: Optional[Any] = Field(None, alias="accountId")
    assignee_id: Optional[Any] = Field(None, alias="assigneeId")
    category: Optional[Any] = None
    channel: Optional[Any] = None
    classification: Optional[Any] = None
    email: Optional[Any] = None
    language: Optional[Any] = None
    phone: Optional[Any] = None
    product_id: Optional[Any] = Field(None, alias="productId")
    resolution: Optional[Any] = None
    status: Optional[Any] = None
    sub_category: Optional[Any] = Field(None, alias="subCategory")
    team_id: Optional[Any] = Field(None, alias="teamId")
    tags: Optional[Any] = Field(None, description="Comma-separated tags")

    @field_validator("cf")
    @classmethod
    def _parse_cf(cls, value: Any) -> Dict[str, Any]:
        return parse_custom_fields(value)

    def to_body(self) -> Dict[str, Any]:
        values = self.model_dump(by_alias=True, exclude_unset=True)
        return build_ticket_body(values, self.optional_fields)


class UpdateTicketFields(TicketFields):
    optional_fields: ClassVar[Tuple[str, ...]] = TICKET_UPDATE_OPTIONAL_FIELDS

    contact_id: Optional[Any] = Field(None, alias="contactId")
    department_id: Optional[Any] = Field(None, alias="departmentId")
    subject: Optional[Any] = None


class CreateTicketInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    department_id: Identifier = Field(..., alias="departmentId")
    subject: str
    contact: Optional[Contact] = Field(None, validate_default=True)
    additional_fields: TicketFields = Field(default_factory=TicketFields, alias="additionalFields")

    @field_validator("contact", mode="before")
    @classmethod
    def _require_contact(cls, value: Any) -> Any:
        if isinstance(value, Contact):
            return value
        return build_contact(value)

    @field_validator("additional_fields", mode="before")
    @classmethod
    def _default_fields(cls, value: Any) -> Any:
        return value or {}

    def to_request(self) -> ApiRequest:
        body = {
            "departmentId": self.department_id,
            "subject": self.subject,
            "contact": self.contact.to_body(),
        }
        body.update(self.additional_fields.to_body())
        return ApiRequest(method="POST", path="/tickets", body=body)


class UpdateTicketInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ticket_id: str = Field(..., alias="ticketId")
    update_fields: UpdateTicketFields = Field(default_factory=UpdateTicketFields, alias="updateFields")

    @field_validator("ticket_id", mode="before")
    @classmethod
    def _validate_ticket_id(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str) or not is_valid_ticket_id(value):
            raise TicketValidationError(
                f'Invalid ticket ID format: "{value}". Ticket ID must be a numeric value. '
                f"See: {UPDATE_TICKET_DOCS}"
            )
        return value

    @field_validator("update_fields", mode="before")
    @classmethod
    def _default_fields(cls, value: Any) -> Any:
        return value or {}

    def to_request(self) -> ApiRequest:
        return ApiRequest(
            method="PATCH",
            path=f"/tickets/{quote(self.ticket_id, safe='')}",
            body=self.update_fields.to_body(),
        )


class PollCursor(BaseModel):
    """Poll state persisted by the host between runs."""
    model_config = ConfigDict(populate_by_name=True)

    last_poll_time: Optional[int] = Field(None, alias="lastPollTime", description="Epoch milliseconds")
    last_seen_ids: List[str] = Field(default_factory=list, alias="lastSeenIds")

    @field_validator("last_seen_ids", mode="before")
    @classmethod
    def _ids_as_strings(cls, value: Any) -> Any:
        # Records are matched on str(id)
        if isinstance(value, list):
            return [str(item) for item in value]
        return value

    @property
    def is_first_run(self) -> bool:
        return self.last_poll_time is None


class EventSpec(BaseModel):
    endpoint: str
    time_field: str
    sort_field: str


class OutputItem(BaseModel):
    data: Any
    paired_item: Optional[int] = None


class PollResult(BaseModel):
    items: Optional[List[OutputItem]] = None
    cursor: PollCursor


class OptionItem(BaseModel):
    name: str
    value: Identifier
