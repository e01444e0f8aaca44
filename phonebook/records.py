"""
Contact records: people and organizations.

Both variants carry the same ``Timestamps`` payload and describe their
fields with a ``FieldSpec`` table; editing, matching, rendering and the
interactive create flow are driven from that table, so the variants
share behaviour without sharing a base class.
"""
import datetime
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, ClassVar, Dict, List, NamedTuple, Optional, Protocol, Tuple, Type, Union, runtime_checkable

NO_DATA = "[no data]"
NO_NUMBER = "[no number]"
TIME_FORMAT = "%Y-%m-%dT%H:%M"


# ────────────────────────────────────────────────────────────────────────────
# Validators
# ────────────────────────────────────────────────────────────────────────────
class Problem(Enum):
    BAD_BIRTH = "Bad birth date!"
    BAD_GENDER = "Bad gender!"
    BAD_PHONE = "Bad phone number!"


class Checked(NamedTuple):
    value: str
    problem: Optional[Problem] = None


BIRTH_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
PHONE_RE = re.compile(r"\+?[0-9 \-().]+")


def check_text(value: Optional[str]) -> Checked:
    return Checked(value if value is not None else "")


def check_birth(value: Optional[str]) -> Checked:
    if value and BIRTH_RE.fullmatch(value):
        try:
            datetime.datetime.strptime(value, "%Y-%m-%d")
            return Checked(value)
        except ValueError:
            pass
    return Checked(NO_DATA, Problem.BAD_BIRTH)


def check_gender(value: Optional[str]) -> Checked:
    if value in ("M", "F"):
        return Checked(value)
    return Checked(NO_DATA, Problem.BAD_GENDER)


def check_phone(value: Optional[str]) -> Checked:
    if value and PHONE_RE.fullmatch(value) and any(ch.isdigit() for ch in value):
        return Checked(value)
    return Checked(NO_NUMBER, Problem.BAD_PHONE)


# ────────────────────────────────────────────────────────────────────────────
# Timestamps
# ────────────────────────────────────────────────────────────────────────────
def _now() -> datetime.datetime:
    return datetime.datetime.now()


def _naive(when: datetime.datetime) -> datetime.datetime:
    # all record times are naive local time; mixing in an aware one breaks ordering
    if when.tzinfo is not None:
        raise ValueError("Record timestamps must not carry a timezone.")
    return when


class Timestamps:
    """Creation time (fixed) and last edit time (never earlier than creation)."""

    __slots__ = ("_created", "_last_edited")

    def __init__(self, created: Optional[datetime.datetime] = None,
                 last_edited: Optional[datetime.datetime] = None):
        self._created = _naive(created or _now())
        if last_edited is None:
            last_edited = self._created
        _naive(last_edited)
        if last_edited < self._created:
            raise ValueError("Last edit time cannot precede creation time.")
        self._last_edited = last_edited

    @property
    def created(self) -> datetime.datetime:
        return self._created

    @property
    def last_edited(self) -> datetime.datetime:
        return self._last_edited

    def touch(self, when: Optional[datetime.datetime] = None) -> None:
        if when is None:
            when = _now()
        elif _naive(when) < self._created:
            raise ValueError("Last edit time cannot precede creation time.")
        # wall clock may step back; keep the edit time non-decreasing
        self._last_edited = max(self._last_edited, when)

    def __eq__(self, other):
        if not isinstance(other, Timestamps):
            return NotImplemented
        return (self._created, self._last_edited) == (other._created, other._last_edited)

    def __repr__(self):
        return f"Timestamps(created={self._created!r}, last_edited={self._last_edited!r})"

    def __str__(self):
        return (f"Time created: {self._created.strftime(TIME_FORMAT)}\n"
                f"Time last edit: {self._last_edited.strftime(TIME_FORMAT)}")


# ────────────────────────────────────────────────────────────────────────────
# Field tables
# ────────────────────────────────────────────────────────────────────────────
class FieldSpec(NamedTuple):
    key: str                       # identifier the user types when editing
    attr: str                      # attribute on the record
    label: str
    prompt: str
    check: Callable[[Optional[str]], Checked]


class LineIO(Protocol):
    def ask(self, prompt: str) -> str: ...

    def warn(self, text: str) -> None: ...


@runtime_checkable
class RecordLike(Protocol):
    """What every record variant offers to the collection and the session."""

    KIND: ClassVar[str]
    FIELDS: ClassVar[Tuple[FieldSpec, ...]]
    stamps: Timestamps

    @property
    def created(self) -> datetime.datetime: ...

    @property
    def last_edited(self) -> datetime.datetime: ...

    def editable_fields(self) -> List[str]: ...

    def apply_edit(self, key: Optional[str], value: Optional[str]) -> Optional[Problem]: ...

    def short_info(self) -> str: ...

    def matches(self, pattern: Optional[str]) -> bool: ...


def _spec_for(record: RecordLike, key: Optional[str]) -> Optional[FieldSpec]:
    if not key:
        return None
    for spec in record.FIELDS:
        if spec.key == key:
            return spec
    return None


def _editable_fields(record: RecordLike) -> List[str]:
    return [spec.key for spec in record.FIELDS]


def _apply_edit(record: RecordLike, key: Optional[str], value: Optional[str]) -> Optional[Problem]:
    spec = _spec_for(record, key)
    if spec is None:
        return None
    checked = spec.check(value)
    setattr(record, spec.attr, checked.value)
    record.stamps.touch()
    return checked.problem


def _matches(record: RecordLike, pattern: Optional[str]) -> bool:
    if not pattern:
        return False
    try:
        regex = re.compile(pattern, re.IGNORECASE)
    except re.error:
        return False
    return any(regex.search(getattr(record, spec.attr)) for spec in record.FIELDS)


def _render(record: RecordLike) -> str:
    lines = [f"{spec.label}: {getattr(record, spec.attr)}" for spec in record.FIELDS]
    lines.append(str(record.stamps))
    return "\n".join(lines)


def _create(cls, io: LineIO):
    if io is None:
        raise ValueError("Input source cannot be None.")
    values: Dict[str, str] = {}
    for spec in cls.FIELDS:
        checked = spec.check(io.ask(spec.prompt))
        if checked.problem is not None:
            io.warn(checked.problem.value)
        values[spec.attr] = checked.value
    return cls(**values)


# ────────────────────────────────────────────────────────────────────────────
# Variants
# ────────────────────────────────────────────────────────────────────────────
@dataclass
class Person:
    KIND: ClassVar[str] = "person"
    FIELDS: ClassVar[Tuple[FieldSpec, ...]] = (
        FieldSpec("name", "name", "Name", "Enter the name: ", check_text),
        FieldSpec("surname", "surname", "Surname", "Enter the surname: ", check_text),
        FieldSpec("birth", "birth", "Birth date", "Enter the birth date: ", check_birth),
        FieldSpec("gender", "gender", "Gender", "Enter the gender (M, F): ", check_gender),
        FieldSpec("number", "phone", "Number", "Enter the number: ", check_phone),
    )

    name: str = ""
    surname: str = ""
    birth: str = NO_DATA
    gender: str = NO_DATA
    phone: str = NO_NUMBER
    stamps: Timestamps = field(default_factory=Timestamps)

    @classmethod
    def create(cls, io: LineIO) -> "Person":
        return _create(cls, io)

    @property
    def created(self) -> datetime.datetime:
        return self.stamps.created

    @property
    def last_edited(self) -> datetime.datetime:
        return self.stamps.last_edited

    def editable_fields(self) -> List[str]:
        return _editable_fields(self)

    def apply_edit(self, key: Optional[str], value: Optional[str]) -> Optional[Problem]:
        return _apply_edit(self, key, value)

    def short_info(self) -> str:
        return f"{self.name} {self.surname}"

    def matches(self, pattern: Optional[str]) -> bool:
        return _matches(self, pattern)

    def __str__(self):
        return _render(self)


@dataclass
class Organization:
    KIND: ClassVar[str] = "organization"
    FIELDS: ClassVar[Tuple[FieldSpec, ...]] = (
        FieldSpec("name", "name", "Organization name", "Enter the organization name: ", check_text),
        FieldSpec("address", "address", "Address", "Enter the address: ", check_text),
        FieldSpec("number", "phone", "Number", "Enter the number: ", check_phone),
    )

    name: str = ""
    address: str = ""
    phone: str = NO_NUMBER
    stamps: Timestamps = field(default_factory=Timestamps)

    @classmethod
    def create(cls, io: LineIO) -> "Organization":
        return _create(cls, io)

    @property
    def created(self) -> datetime.datetime:
        return self.stamps.created

    @property
    def last_edited(self) -> datetime.datetime:
        return self.stamps.last_edited

    def editable_fields(self) -> List[str]:
        return _editable_fields(self)

    def apply_edit(self, key: Optional[str], value: Optional[str]) -> Optional[Problem]:
        return _apply_edit(self, key, value)

    def short_info(self) -> str:
        return self.name

    def matches(self, pattern: Optional[str]) -> bool:
        return _matches(self, pattern)

    def __str__(self):
        return _render(self)


Record = Union[Person, Organization]

RECORD_TYPES: Dict[str, Type[Record]] = {
    Person.KIND: Person,
    Organization.KIND: Organization,
}
