"""
Interactive phone book session.

The session is a small state machine::

    MENU ⇄ LIST / SEARCH → RECORD ⇄ edit
    RECORD → delete / menu → MENU
    MENU → exit → EXIT

Every handler returns the next state. Running out of input ends the
session the same way ``exit`` does.
"""
import logging
from enum import Enum
from functools import wraps
from typing import Optional, Sequence

from .console import ConsoleIO
from .contacts import Contacts
from .errors import EndOfInput, InvalidFieldError

log = logging.getLogger(__name__)

MENU_COMMANDS = ("add", "list", "search", "count", "exit")

MENU_PROMPT = "[menu] Enter action (add, list, search, count, exit): "
LIST_PROMPT = "[list] Enter action ([number], back): "
SEARCH_PROMPT = "[search] Enter action ([number], back, again): "
RECORD_PROMPT = "[record] Enter action (edit, delete, menu): "


class State(Enum):
    MENU = "menu"
    LIST = "list"
    SEARCH = "search"
    RECORD = "record"
    EXIT = "exit"


def record_guard(fn):
    """A record that disappeared under the view sends the user back to the menu."""
    @wraps(fn)
    def wrap(self, *args):
        try:
            return fn(self, *args)
        except IndexError:
            self.io.warn("Record not found.")
            self.index = None
            return State.MENU

    return wrap


class Session:
    def __init__(self, contacts: Contacts, io: Optional[ConsoleIO] = None, suggester=None):
        if contacts is None:
            raise ValueError("Initial contacts cannot be None.")
        self.contacts = Contacts(contacts)
        self.io = io or ConsoleIO()
        self.suggester = suggester
        self.state = State.MENU
        self.index: Optional[int] = None

    def run(self) -> None:
        handlers = {
            State.MENU: self._menu,
            State.LIST: self._list,
            State.SEARCH: self._search,
            State.RECORD: self._record,
        }
        try:
            while self.state is not State.EXIT:
                self.state = handlers[self.state]()
        except EndOfInput:
            log.info("Input exhausted, leaving the session")
            self.state = State.EXIT
        except KeyboardInterrupt:
            self.io.say()
            log.info("Interrupted, leaving the session")
            self.state = State.EXIT

    def close(self) -> None:
        self.io.close()

    # ────────────────────────────────────────────────────────────────────
    # helpers
    # ────────────────────────────────────────────────────────────────────
    def _save(self) -> None:
        if not self.contacts.save():
            self.io.warn("Error saving data.")

    def _hint(self, action: str) -> None:
        if self.suggester is None or not action:
            return
        guess = self.suggester.suggest(action, MENU_COMMANDS)
        if guess:
            self.io.say(f"Did you mean '{guess}'?")

    def _select(self, action: str, indices: Sequence[int]) -> State:
        if action.isdigit() and 1 <= int(action) <= len(indices):
            self.index = indices[int(action) - 1]
            return State.RECORD
        return State.MENU

    # ────────────────────────────────────────────────────────────────────
    # states
    # ────────────────────────────────────────────────────────────────────
    def _menu(self) -> State:
        action = self.io.ask(MENU_PROMPT).strip()
        if action == "add":
            if self.contacts.add_record_interactive(self.io) is not None:
                self._save()
                self.io.ok("The record added.")
            return State.MENU
        if action == "count":
            self.io.say(f"The Phone Book has {self.contacts.size()} records.")
            return State.MENU
        if action == "list":
            return State.LIST
        if action == "search":
            return State.SEARCH
        if action == "exit":
            return State.EXIT
        self.io.warn("Unknown command")
        self._hint(action)
        return State.MENU

    def _list(self) -> State:
        if not self.contacts.size():
            self.io.say("No records to list!")
            return State.MENU
        self.contacts.print_short_list(self.io)
        action = self.io.ask(LIST_PROMPT).strip()
        if action == "back":
            return State.MENU
        return self._select(action, range(self.contacts.size()))

    def _search(self) -> State:
        results = self.contacts.search(self.io)
        self.io.say(f"Found {len(results)} results")
        if not results:
            self.io.say("No matches found!")
            return State.MENU
        self.contacts.print_short_list(self.io, results)
        action = self.io.ask(SEARCH_PROMPT).strip()
        if action == "again":
            return State.SEARCH
        if action == "back":
            return State.MENU
        return self._select(action, results)

    @record_guard
    def _record(self) -> State:
        if self.index is None:
            raise IndexError("No record selected.")
        rec = self.contacts.get(self.index)
        self.io.say(str(rec))
        action = self.io.ask(RECORD_PROMPT).strip()
        if action == "edit":
            try:
                self.contacts.edit_record(self.io, self.index)
            except InvalidFieldError:
                self.io.warn("Invalid field")
                return State.RECORD
            self._save()
            self.io.ok("Saved")
            return State.RECORD
        if action == "delete":
            self.contacts.delete_record(self.index)
            self.index = None
            self._save()
            self.io.ok("The record removed!")
            return State.MENU
        if action == "menu":
            return State.MENU
        self.io.warn("Unknown command")
        return State.RECORD
