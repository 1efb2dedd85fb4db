"""Tests for interactive yes/no and text prompts."""

import pytest

from server_setup.errors import InputClosedError
from tests.fakes.context import make_console, make_prompter, output_of


class TestConfirm:
    """Tests for Prompter.confirm."""

    @pytest.mark.parametrize("answer", ["y", "Y", "yes", "YES", " Yes "])
    def test_yes_answers(self, answer: str) -> None:
        assert make_prompter(f"{answer}\n").confirm("Continue?") is True

    @pytest.mark.parametrize("answer", ["n", "N", "no", "No", "  NO"])
    def test_no_answers(self, answer: str) -> None:
        assert make_prompter(f"{answer}\n").confirm("Continue?") is False

    def test_invalid_answer_reprompts_with_hint(self) -> None:
        out = make_console()
        prompter = make_prompter("maybe\nyep\n\nn\n", out)
        assert prompter.confirm("Install Docker?") is False
        output = output_of(out)
        assert output.count("Please answer y or n.") == 3
        assert output.count("Install Docker?") == 4

    def test_closed_input_raises(self) -> None:
        with pytest.raises(InputClosedError):
            make_prompter("").confirm("Continue?")

    def test_closed_input_after_invalid_answer_raises(self) -> None:
        with pytest.raises(InputClosedError):
            make_prompter("what\n").confirm("Continue?")


class TestAsk:
    """Tests for Prompter.ask."""

    def test_returns_stripped_answer(self) -> None:
        assert make_prompter("  Ada Lovelace \n").ask("Name") == "Ada Lovelace"

    def test_empty_answer_reprompts(self) -> None:
        out = make_console()
        assert make_prompter("\n   \nAda\n", out).ask("Name") == "Ada"
        assert output_of(out).count("An answer is required.") == 2

    def test_empty_answer_takes_default(self) -> None:
        assert make_prompter("\n").ask("Timezone", default="UTC") == "UTC"

    def test_closed_input_raises(self) -> None:
        with pytest.raises(InputClosedError):
            make_prompter("").ask("Name")
