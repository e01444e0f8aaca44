from .contacts import Contacts
from .errors import EndOfInput, InvalidFieldError, PhonebookError, SnapshotError
from .records import NO_DATA, NO_NUMBER, Organization, Person, Record, Timestamps
from .session import Session

__all__ = [
    "Contacts",
    "EndOfInput",
    "InvalidFieldError",
    "NO_DATA",
    "NO_NUMBER",
    "Organization",
    "Person",
    "PhonebookError",
    "Record",
    "Session",
    "SnapshotError",
    "Timestamps",
]
