import io

import pytest

from phonebook.console import ConsoleIO, make_console


class ScriptedIO(ConsoleIO):
    """ConsoleIO fed from a fixed script, with everything printed kept in ``out``."""

    def __init__(self, script: str = ""):
        self.out = io.StringIO()
        super().__init__(console=make_console(file=self.out, color_system=None, force_terminal=False),
                         stream=io.StringIO(script))

    @property
    def output(self) -> str:
        return self.out.getvalue()


@pytest.fixture
def scripted():
    return ScriptedIO
