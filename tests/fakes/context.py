"""Builders for SetupContext and consoles backed by in-memory streams."""

import io
from typing import Optional

from rich.console import Console

from server_setup.components.base import SetupContext
from server_setup.config import Config, RunConfig
from server_setup.prompts import Prompter
from server_setup.ui import nord_theme
from tests.fakes.runner import FakeCommandRunner


def make_console() -> Console:
    return Console(
        file=io.StringIO(), width=120, theme=nord_theme, color_system=None
    )


def output_of(out: Console) -> str:
    return out.file.getvalue()


def make_prompter(answers: str = "", out: Optional[Console] = None) -> Prompter:
    """Prompter reading answers (one per line) from memory."""
    return Prompter(out or make_console(), stream=io.StringIO(answers))


def make_context(
    config: Config,
    runner: Optional[FakeCommandRunner] = None,
    run: Optional[RunConfig] = None,
    answers: str = "",
) -> SetupContext:
    out = make_console()
    return SetupContext(
        config=config,
        run=run or RunConfig(),
        runner=runner or FakeCommandRunner(config),
        prompter=make_prompter(answers, out),
        console=out,
    )
