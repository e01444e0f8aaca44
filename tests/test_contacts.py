"""Tests for the contacts collection."""

import json

import pytest

from phonebook import storage
from phonebook.contacts import Contacts
from phonebook.errors import InvalidFieldError
from phonebook.records import NO_DATA, Organization, Person


@pytest.fixture
def people() -> Contacts:
    contacts = Contacts()
    for name in ("Ann", "Bob", "Cid", "Dan"):
        contacts.add_record(Person(name=name, surname="Test"))
    return contacts


def test_empty():
    contacts = Contacts()
    assert contacts.size() == 0
    assert len(contacts) == 0
    assert contacts.filename is None


def test_add_and_get(people: Contacts):
    assert people.size() == 4
    assert people.get(0).name == "Ann"
    assert people.get(3).name == "Dan"


@pytest.mark.parametrize("index", [-1, 4, 100])
def test_get_out_of_range(people: Contacts, index):
    with pytest.raises(IndexError):
        people.get(index)


def test_add_none():
    with pytest.raises(ValueError):
        Contacts().add_record(None)


def test_delete_shifts_following_records(people: Contacts):
    removed = people.delete_record(1)
    assert removed.name == "Bob"
    assert people.size() == 3
    assert [people.get(i).name for i in range(3)] == ["Ann", "Cid", "Dan"]


def test_delete_out_of_range(people: Contacts):
    with pytest.raises(IndexError):
        people.delete_record(4)
    assert people.size() == 4


def test_copy_does_not_alias(people: Contacts):
    people.filename = "book.json"
    copy = Contacts(people)
    copy.add_record(Person(name="Eve"))
    copy.delete_record(0)
    assert people.size() == 4
    assert copy.size() == 4
    assert copy.filename == "book.json"
    assert people.get(0).name == "Ann"


def test_add_record_interactive_person(scripted):
    contacts = Contacts()
    io = scripted("person\nJohn\nDoe\n2000-01-01\nM\n555-1234\n")
    rec = contacts.add_record_interactive(io)
    assert isinstance(rec, Person)
    assert contacts.size() == 1
    assert contacts.get(0).short_info() == "John Doe"


def test_add_record_interactive_organization(scripted):
    contacts = Contacts()
    io = scripted("organization\nAcme\nMain st. 1\n555\n")
    rec = contacts.add_record_interactive(io)
    assert isinstance(rec, Organization)
    assert contacts.get(0).address == "Main st. 1"


def test_add_record_interactive_unknown_type(scripted):
    contacts = Contacts()
    io = scripted("robot\n")
    assert contacts.add_record_interactive(io) is None
    assert contacts.size() == 0
    assert "Unknown record type." in io.output


def test_add_record_interactive_requires_input():
    with pytest.raises(ValueError):
        Contacts().add_record_interactive(None)


def test_edit_record(people: Contacts, scripted):
    io = scripted("surname\nSmith\n")
    people.edit_record(io, 2)
    assert people.get(2).surname == "Smith"
    assert "Select a field (name, surname, birth, gender, number): " in io.output


def test_edit_record_bad_value_reports(people: Contacts, scripted):
    io = scripted("gender\nm\n")
    people.edit_record(io, 0)
    assert people.get(0).gender == NO_DATA
    assert "Bad gender!" in io.output


def test_edit_record_invalid_field(people: Contacts, scripted):
    before = people.get(0).last_edited
    io = scripted("address\nSomewhere\n")
    with pytest.raises(InvalidFieldError):
        people.edit_record(io, 0)
    assert people.get(0).last_edited == before


def test_search_returns_indices_in_order(scripted):
    contacts = Contacts([
        Person(name="John", surname="Doe"),
        Organization(name="Acme", address="John st."),
        Person(name="Alice"),
    ])
    assert contacts.search(scripted("JOHN\n")) == [0, 1]
    assert contacts.search(scripted("nobody\n")) == []
    assert contacts.search(scripted("[invalid\n")) == []
    assert contacts.size() == 3


def test_short_list(people: Contacts):
    assert people.short_list() == ["1. Ann Test", "2. Bob Test", "3. Cid Test", "4. Dan Test"]
    assert people.short_list([3, 1]) == ["1. Dan Test", "2. Bob Test"]


def test_print_short_list(people: Contacts, scripted):
    io = scripted()
    people.print_short_list(io, [2])
    assert io.output == "1. Cid Test\n"


def test_save_without_filename_is_noop(people: Contacts, tmp_path):
    assert people.save() is True
    assert list(tmp_path.iterdir()) == []


def test_save_and_load_round_trip(people: Contacts, tmp_path):
    people.add_record(Organization(name="Acme", address="Main st. 1", phone="+1 555"))
    people.get(0).apply_edit("birth", "1990-05-06")
    path = str(tmp_path / "book.json")
    people.filename = path

    assert people.save() is True
    loaded = Contacts.load(path)

    assert loaded.filename == path
    assert loaded.size() == people.size()
    for i in range(people.size()):
        assert loaded.get(i) == people.get(i)
        assert loaded.get(i).created == people.get(i).created
        assert loaded.get(i).last_edited == people.get(i).last_edited


def test_save_failure_is_reported(people: Contacts, tmp_path):
    people.filename = str(tmp_path / "missing" / "book.json")
    assert people.save() is False


def test_save_replaces_whole_snapshot(people: Contacts, tmp_path):
    path = tmp_path / "book.json"
    people.filename = str(path)
    people.save()
    people.delete_record(0)
    people.save()
    doc = json.loads(path.read_text(encoding="utf-8"))
    assert doc["version"] == storage.FORMAT_VERSION
    assert [r["fields"]["name"] for r in doc["records"]] == ["Bob", "Cid", "Dan"]
    assert [p.name for p in tmp_path.iterdir()] == ["book.json"]
