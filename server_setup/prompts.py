"""Blocking console questions for interactive mode."""

from typing import Optional, TextIO

from rich.console import Console
from rich.prompt import Confirm, InvalidResponse, Prompt
from rich.text import TextType

from server_setup.errors import InputClosedError
from server_setup.ui import console as default_console

YES_ANSWERS = ("y", "yes")
NO_ANSWERS = ("n", "no")


class _ClosedInputMixin:
    """Raise instead of spinning forever once the input stream is exhausted."""

    @classmethod
    def get_input(
        cls,
        console: Console,
        prompt: TextType,
        password: bool,
        stream: Optional[TextIO] = None,
    ) -> str:
        try:
            value = super().get_input(console, prompt, password, stream=stream)
        except EOFError:
            raise InputClosedError("Input closed while waiting for an answer")
        # A stream returns "" at EOF; a blank answer still carries its newline.
        if stream is not None:
            if value == "":
                raise InputClosedError("Input closed while waiting for an answer")
            value = value.rstrip("\r\n")
        return value


class YesNoConfirm(_ClosedInputMixin, Confirm):
    """Confirm that also takes yes/no, in any case, and never assumes a default."""

    validate_error_message = "[prompt.invalid]Please answer y or n."

    def process_response(self, value: str) -> bool:
        value = value.strip().lower()
        if value in YES_ANSWERS:
            return True
        if value in NO_ANSWERS:
            return False
        raise InvalidResponse(self.validate_error_message)


class TextPrompt(_ClosedInputMixin, Prompt):
    pass


class Prompter:
    """Asks questions on a console, reading answers from ``stream`` (stdin by default)."""

    def __init__(
        self, out: Optional[Console] = None, stream: Optional[TextIO] = None
    ) -> None:
        self.console = out or default_console
        self.stream = stream

    def confirm(self, question: str) -> bool:
        """Ask until the answer is y/yes/n/no."""
        return YesNoConfirm.ask(question, console=self.console, stream=self.stream)

    def ask(self, question: str, default: Optional[str] = None) -> str:
        """Ask for a non-empty line of text."""
        while True:
            if default is None:
                answer = TextPrompt.ask(question, console=self.console, stream=self.stream)
            else:
                answer = TextPrompt.ask(
                    question, console=self.console, stream=self.stream, default=default
                )
            answer = answer.strip()
            if answer:
                return answer
            self.console.print("[prompt.invalid]An answer is required.")
