import argparse
import logging
import os
from typing import List, Optional

from rich.logging import RichHandler

from .assistant import CommandSuggester
from .config import Settings, load_settings
from .console import ConsoleIO, make_console
from .contacts import Contacts
from .errors import SnapshotError
from .session import Session

log = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    handlers: List[logging.Handler] = [
        RichHandler(console=make_console(stderr=True), show_path=False),
    ]
    if settings.log_file:
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"))
        handlers.append(file_handler)
    logging.basicConfig(level=settings.level, format="%(message)s", handlers=handlers, force=True)


def open_contacts(path: Optional[str], io: ConsoleIO) -> Contacts:
    """Load the snapshot at ``path`` or fall back to an empty, unnamed collection."""
    if not path or not os.path.isfile(path):
        return Contacts()
    try:
        return Contacts.load(path)
    except SnapshotError as e:
        log.warning("Cannot load %s: %s", path, e)
        io.warn("Cannot load file.")
        return Contacts()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="phonebook", description="Console phone book.")
    # only the first file is used, the rest are accepted and ignored
    parser.add_argument("files", nargs="*", metavar="FILE", help="snapshot to open")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, io: Optional[ConsoleIO] = None,
         settings: Optional[Settings] = None) -> None:
    args = parse_args(argv)
    if settings is None:
        settings = load_settings()
        configure_logging(settings)
    io = io or ConsoleIO()

    contacts = open_contacts(args.files[0] if args.files else None, io)
    suggester = CommandSuggester.from_key_file(settings.openai_key_file, settings.openai_model)
    if suggester is None:
        log.info("Command hints disabled (no %s).", settings.openai_key_file)

    session = Session(contacts, io, suggester)
    try:
        session.run()
    finally:
        session.close()
