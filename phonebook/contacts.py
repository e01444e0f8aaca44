import logging
from collections import UserList
from typing import Iterable, List, Optional

from . import storage
from .errors import InvalidFieldError
from .records import RECORD_TYPES, RecordLike

log = logging.getLogger(__name__)


class Contacts(UserList):
    """Ordered collection of records with an optional snapshot file."""

    def __init__(self, records: Optional[Iterable[RecordLike]] = None,
                 filename: Optional[str] = None):
        # UserList copies the incoming sequence, so a Contacts built from
        # another one never shares its list
        super().__init__(records if records is not None else [])
        if filename is None and isinstance(records, Contacts):
            filename = records.filename
        self.filename = filename

    @classmethod
    def load(cls, path: str) -> "Contacts":
        return cls(storage.load_snapshot(path), filename=path)

    def size(self) -> int:
        return len(self.data)

    def get(self, index: int) -> RecordLike:
        if not 0 <= index < len(self.data):
            raise IndexError(f"Record index {index} out of range.")
        return self.data[index]

    def add_record(self, rec: RecordLike) -> None:
        if rec is None:
            raise ValueError("Record cannot be None.")
        self.data.append(rec)

    def add_record_interactive(self, io) -> Optional[RecordLike]:
        if io is None:
            raise ValueError("Input source cannot be None.")
        kind = io.ask("Enter the type (person, organization): ").strip()
        cls = RECORD_TYPES.get(kind)
        if cls is None:
            io.warn("Unknown record type.")
            return None
        rec = cls.create(io)
        self.add_record(rec)
        log.info("Added %s record '%s'", kind, rec.short_info())
        return rec

    def delete_record(self, index: int) -> RecordLike:
        rec = self.get(index)
        del self.data[index]
        log.info("Removed record '%s'", rec.short_info())
        return rec

    def edit_record(self, io, index: int) -> None:
        rec = self.get(index)
        fields = rec.editable_fields()
        key = io.ask(f"Select a field ({', '.join(fields)}): ").strip()
        if key not in fields:
            raise InvalidFieldError(key)
        value = io.ask(f"Enter {key}: ").strip()
        problem = rec.apply_edit(key, value)
        if problem is not None:
            io.warn(problem.value)

    def search(self, io) -> List[int]:
        query = io.ask("Enter search query: ").strip()
        return [i for i, rec in enumerate(self.data) if rec.matches(query)]

    def short_list(self, indices: Optional[List[int]] = None) -> List[str]:
        if indices is None:
            indices = range(len(self.data))
        return [f"{n}. {self.get(i).short_info()}" for n, i in enumerate(indices, 1)]

    def print_short_list(self, io, indices: Optional[List[int]] = None) -> None:
        for line in self.short_list(indices):
            io.say(line)

    def save(self) -> bool:
        """Write the whole collection to ``filename``; False if the write failed."""
        if self.filename is None:
            return True
        try:
            storage.save_snapshot(self.data, self.filename)
        except OSError as e:
            log.warning("Cannot save %s: %s", self.filename, e)
            return False
        return True
