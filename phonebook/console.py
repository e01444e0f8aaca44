from typing import Optional, TextIO

from rich.console import Console

from .errors import EndOfInput


def make_console(file: Optional[TextIO] = None, stderr: bool = False, **kwargs) -> Console:
    # prompts such as "[menu]" and values such as "[no data]" must print literally
    return Console(file=file, stderr=stderr, markup=False, emoji=False,
                   highlight=False, soft_wrap=True, **kwargs)


class ConsoleIO:
    """Line-oriented input/output for the interactive session.

    Reads from ``stream`` when one is given, otherwise from stdin through
    ``Console.input``. Either way the end of input surfaces as ``EndOfInput``.
    """

    def __init__(self, console: Optional[Console] = None, stream: Optional[TextIO] = None):
        self.console = console if console is not None else make_console()
        self.stream = stream
        self.closed = False

    def ask(self, prompt: str) -> str:
        if self.closed:
            raise EndOfInput()
        try:
            line = self.console.input(prompt, markup=False, emoji=False, stream=self.stream)
        except EOFError:
            raise EndOfInput() from None
        if self.stream is not None:
            if not line:
                raise EndOfInput()
            line = line.rstrip("\r\n")
        return line

    def say(self, text: str = "") -> None:
        self.console.print(text)

    def warn(self, text: str) -> None:
        self.console.print(text, style="red")

    def ok(self, text: str) -> None:
        self.console.print(text, style="green")

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self.stream is not None:
            self.stream.close()
