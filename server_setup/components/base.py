"""Component descriptor and the context every installer action receives."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from rich.console import Console

from server_setup import ui
from server_setup.config import Config, RunConfig
from server_setup.prompts import Prompter
from server_setup.runner import CommandRunner

logger = logging.getLogger(__name__)

VERSION_RE = re.compile(r"\d+(?:\.\d+)+")


def extract_version(text: Optional[str]) -> Optional[str]:
    """
    Pull the dotted version number out of a ``--version`` line.

    Args:
        text: Output line such as "Docker version 24.0.7, build afdd53b"

    Returns:
        The version ("24.0.7"), or None when the text carries none
    """
    if not text:
        return None
    match = VERSION_RE.search(text)
    return match.group(0) if match else None


@dataclass
class SetupContext:
    """Everything an installer action may touch during one run."""

    config: Config
    run: RunConfig
    runner: CommandRunner
    prompter: Prompter
    console: Console = field(default_factory=lambda: ui.console)

    @property
    def interactive(self) -> bool:
        return self.run.interactive

    # === Questions ===

    def confirm(self, question: str, unattended: bool) -> bool:
        """
        Ask in interactive mode; in CLI mode answer ``unattended`` without asking.

        Args:
            question: Yes/no question shown to the user
            unattended: Answer used when running from command line flags

        Returns:
            True for yes, False for no
        """
        if not self.interactive:
            logger.debug(f"Unattended answer {unattended} for: {question}")
            return unattended
        return self.prompter.confirm(question)

    def ask(
        self,
        question: str,
        default: Optional[str] = None,
        unattended: Optional[str] = None,
    ) -> Optional[str]:
        """
        Ask for text in interactive mode; in CLI mode return ``unattended``.

        Args:
            question: Prompt text
            default: Answer taken when the user just presses Enter
            unattended: Value returned when running from command line flags

        Returns:
            The (non-empty) answer, or ``unattended`` in CLI mode
        """
        if not self.interactive:
            return unattended
        return self.prompter.ask(question, default=default)

    # === Output ===

    def section(self, title: str) -> None:
        ui.print_section(title, self.console)
        logger.info(f"--- {title} ---")

    def success(self, message: str) -> None:
        ui.print_success(message, self.console)
        logger.info(message)

    def warning(self, message: str) -> None:
        ui.print_warning(message, self.console)
        logger.info(message)

    def step(self, message: str) -> None:
        ui.print_step(message, self.console)
        logger.info(message)

    def show(self, text: str) -> None:
        """Print text verbatim (keys, command output, hints)."""
        self.console.print(text, markup=False, highlight=False)

    # === System helpers ===

    def apt_install(self, packages: Sequence[str], reinstall: bool = False) -> None:
        """
        Install packages non-interactively with apt-get.

        Args:
            packages: Package names
            reinstall: Pass --reinstall so installed packages are fetched again
        """
        logger.info(f"Installing packages: {', '.join(packages)}")
        cmd = ["apt-get", "install", "-y"]
        if reinstall:
            cmd.append("--reinstall")
        self.runner.run(cmd + list(packages), privileged=True)

    def systemctl(self, action: str, service: str) -> None:
        self.runner.run(["systemctl", action, service], privileged=True)

    def version_of(self, cmd: Sequence[str]) -> Optional[str]:
        return self.runner.version_of(cmd)

    def _owned_by_other_user(self) -> bool:
        return self.runner.is_root and self.config.USERNAME != "root"

    def ensure_user_dir(self, path: Path, mode: int = 0o755) -> None:
        """
        Create ``path`` (and parents) owned by the invoking user.

        Args:
            path: Directory to create
            mode: Permission mode for newly created directories
        """
        path = Path(path)
        top_created = None
        for candidate in [path] + list(path.parents):
            if candidate.exists():
                break
            top_created = candidate
        path.mkdir(parents=True, exist_ok=True, mode=mode)
        if top_created is not None and self._owned_by_other_user():
            owner = f"{self.config.USERNAME}:{self.config.USERNAME}"
            self.runner.run(["chown", "-R", owner, str(top_created)])

    def write_user_file(self, path: Path, content: str, mode: int = 0o644) -> None:
        """
        Write (overwrite) a file in the invoking user's home.

        Args:
            path: Destination file
            content: Full file text
            mode: Permission mode of the file
        """
        path = Path(path)
        self.ensure_user_dir(path.parent)
        path.write_text(content)
        path.chmod(mode)
        if self._owned_by_other_user():
            owner = f"{self.config.USERNAME}:{self.config.USERNAME}"
            self.runner.run(["chown", owner, str(path)])
        logger.info(f"File written: {path}")


CheckFn = Callable[[SetupContext], Optional[str]]
ActionFn = Callable[[SetupContext, bool], None]


def _never(run: RunConfig) -> bool:
    return False


@dataclass(frozen=True)
class Component:
    """
    One independently selectable installation step.

    Attributes:
        name: CLI flag name (``--<name>``) and registry key
        title: Section header shown before the step
        prompt: Interactive question asked when the tool is not present yet
        action: Installer, called as ``action(ctx, rerun)``; ``rerun`` is True when
            the tool was already present and the user chose to run it again
        help: One-line description for ``--help``
        check: Returns a warning like "Docker is already installed (...)" when the
            tool is present, otherwise None
        rerun_prompt: Question asked after the warning; None means the step is
            simply skipped when the tool is present
        rerun_unattended: Answer to ``rerun_prompt`` in CLI mode
        aliases: Extra flag names selecting this component
        metavar: Set for flags that take an optional value (``--swap [SIZE]``)
    """

    name: str
    title: str
    prompt: str
    action: ActionFn
    help: str
    check: Optional[CheckFn] = None
    rerun_prompt: Optional[str] = None
    rerun_unattended: Callable[[RunConfig], bool] = _never
    aliases: Tuple[str, ...] = ()
    metavar: Optional[str] = None

    @property
    def flags(self) -> List[str]:
        return [f"--{self.name}"] + [f"--{alias}" for alias in self.aliases]


def installed_notice(
    ctx: SetupContext, title: str, executable: str, version_cmd: Optional[Sequence[str]]
) -> Optional[str]:
    """
    Standard already-installed check for a single executable.

    Args:
        ctx: Setup context
        title: Tool name used in the message
        executable: Executable whose presence marks the tool as installed
        version_cmd: Command printing the version, or None to skip it

    Returns:
        "<title> is already installed (<version line>)", or None if missing
    """
    if not ctx.runner.command_exists(executable):
        return None
    version = ctx.version_of(version_cmd) if version_cmd else None
    if version:
        return f"{title} is already installed ({version})"
    return f"{title} is already installed"
