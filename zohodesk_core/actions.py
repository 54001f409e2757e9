from enum import Enum

class Resource(str, Enum):
    TICKET = "ticket"

class Operation(str, Enum):
    CREATE = "create"
    UPDATE = "update"

class Event(str, Enum):
    NEW_TICKET = "newTicket"
    TICKET_UPDATED = "ticketUpdated"
    NEW_CONTACT = "newContact"
    CONTACT_UPDATED = "contactUpdated"
    NEW_ACCOUNT = "newAccount"
    ACCOUNT_UPDATED = "accountUpdated"

class LoadOption(str, Enum):
    GET_DEPARTMENTS = "getDepartments"
    GET_TEAMS = "getTeams"
