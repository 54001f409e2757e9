import json
import re
from typing import Any, Dict, Iterable, List, Optional

from .exceptions import TicketValidationError

CREATE_TICKET_DOCS = "https://desk.zoho.com/support/APIDocument#Tickets#Tickets_CreateTicket"
UPDATE_TICKET_DOCS = "https://desk.zoho.com/support/APIDocument#Tickets#Tickets_UpdateTicket"

# description, dueDate, priority, secondaryContacts, cf and tags are parsed separately
TICKET_CREATE_OPTIONAL_FIELDS = (
    "accountId",
    "assigneeId",
    "category",
    "channel",
    "classification",
    "email",
    "language",
    "phone",
    "productId",
    "resolution",
    "status",
    "subCategory",
    "teamId",
)

TICKET_UPDATE_OPTIONAL_FIELDS = (
    "accountId",
    "assigneeId",
    "category",
    "channel",
    "classification",
    "contactId",
    "departmentId",
    "email",
    "language",
    "phone",
    "productId",
    "resolution",
    "status",
    "subCategory",
    "subject",
    "teamId",
)

CONTACT_FIELDS = ("email", "lastName", "firstName", "phone", "mobile")

# Ticket IDs are usually 16-19 digits; the length varies across data centers
MIN_TICKET_ID_LENGTH = 10

_EXPRESSION = re.compile(r"\{\{.+?\}\}")
_TICKET_ID = re.compile(r"^[0-9]{%d,}$" % MIN_TICKET_ID_LENGTH)


def parse_comma_separated_list(value: Optional[str]) -> List[str]:
    """Split a comma-separated string into trimmed, non-empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_custom_fields(cf: Any) -> Dict[str, Any]:
    """Return custom fields given as a mapping or as a JSON-encoded string.

    Raises:
        TicketValidationError: if the string is not valid JSON, or the value
            is not a JSON object.
    """
    parsed = cf
    if isinstance(cf, str):
        try:
            parsed = json.loads(cf)
        except json.JSONDecodeError as e:
            raise TicketValidationError(
                f"Custom fields must be valid JSON. Parse error: {str(e)}. "
                'Please ensure your JSON is properly formatted, e.g., {"cf_field": "value"}. '
                f"See: {CREATE_TICKET_DOCS}"
            ) from e

    if not isinstance(parsed, dict):
        raise TicketValidationError(
            "Custom fields must be a JSON object, not an array or primitive value. "
            f"See: {CREATE_TICKET_DOCS}"
        )
    return parsed


def is_valid_ticket_id(ticket_id: str) -> bool:
    trimmed = ticket_id.strip()
    # Expressions are resolved by the host at call time
    if _EXPRESSION.search(trimmed):
        return True
    return bool(_TICKET_ID.match(trimmed))


def build_contact(values: Any) -> Dict[str, Any]:
    """Build the contact sub-object of a new ticket.

    Zoho Desk matches an existing contact by email or creates a new one, so
    either ``email`` or ``lastName`` has to survive. Values are sent as given;
    only their trimmed string form is checked for emptiness.
    """
    if not values:
        raise TicketValidationError(
            "Contact information is required for ticket creation. "
            "Please provide at least email or lastName. "
            f"See: {CREATE_TICKET_DOCS}"
        )
    if not isinstance(values, dict):
        raise TicketValidationError(
            f"Contact validation failed: Invalid contact data format. See: {CREATE_TICKET_DOCS}"
        )

    contact = {}
    for field in CONTACT_FIELDS:
        value = values.get(field)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise TicketValidationError(
                f"Contact validation failed: {field} must be a string or number, "
                f"not a complex object. See: {CREATE_TICKET_DOCS}"
            )
        if str(value).strip() != "":
            contact[field] = value

    if not contact.get("email") and not contact.get("lastName"):
        raise TicketValidationError(
            "Contact validation failed: Either email or lastName must have a non-empty value. "
            f"See: {CREATE_TICKET_DOCS}"
        )
    return contact


def add_optional_fields(body: Dict[str, Any], source: Dict[str, Any], fields: Iterable[str]) -> None:
    for field in fields:
        if field in source:
            body[field] = source[field]


def _add_list_field(body: Dict[str, Any], source: Dict[str, Any], field: str) -> None:
    value = source.get(field)
    if isinstance(value, str):
        items = parse_comma_separated_list(value)
        if items:
            body[field] = items


def add_common_ticket_fields(body: Dict[str, Any], fields: Dict[str, Any]) -> None:
    """Copy the fields shared by create and update into ``body``."""
    for field in ("description", "dueDate", "priority"):
        if field in fields:
            body[field] = fields[field]
    _add_list_field(body, fields, "secondaryContacts")
    if "cf" in fields:
        body["cf"] = parse_custom_fields(fields["cf"])


def build_ticket_body(fields: Dict[str, Any], optional_fields: Iterable[str]) -> Dict[str, Any]:
    body: Dict[str, Any] = {}
    add_common_ticket_fields(body, fields)
    add_optional_fields(body, fields, optional_fields)
    _add_list_field(body, fields, "tags")
    return body
