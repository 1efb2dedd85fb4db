"""Command line entry point: argument parsing, preflight and the setup run."""

import argparse
import logging
import os
import subprocess
import sys
from typing import List, Optional, Sequence

from rich.console import Console
from rich.traceback import install as install_rich_traceback

from server_setup import APP_NAME, VERSION
from server_setup.components import COMPONENTS, Component, SetupContext
from server_setup.components.system import is_valid_swap_size
from server_setup.config import DEFAULT_SWAP_SIZE, DEFAULT_TIMEZONE, Config, RunConfig
from server_setup.errors import PreflightError, SetupError
from server_setup.executor import run_components
from server_setup.log import setup_logger
from server_setup.prompts import Prompter
from server_setup.runner import CommandRunner
from server_setup.summary import print_summary
from server_setup.ui import (
    console,
    create_header,
    display_panel,
    print_error,
    print_step,
    print_warning,
)

logger = logging.getLogger(__name__)

# Values used when the flag is given without an argument
FLAG_CONSTS = {"swap": DEFAULT_SWAP_SIZE, "timezone": DEFAULT_TIMEZONE}

EPILOG = """\
With no component flags every step is offered interactively.
With component flags only those steps run, without prompting.
"""


class SetupArgumentParser(argparse.ArgumentParser):
    """Prints the full help, not just the usage line, on a bad flag."""

    def error(self, message: str) -> None:
        self.print_help(sys.stderr)
        self.exit(2, f"\n{self.prog}: error: {message}\n")


def swap_size(value: str) -> str:
    value = value.strip().upper()
    if not is_valid_swap_size(value):
        raise argparse.ArgumentTypeError(
            f"invalid swap size '{value}' (expected e.g. 512M or 2G)"
        )
    return value


def build_parser(components: Sequence[Component] = COMPONENTS) -> SetupArgumentParser:
    parser = SetupArgumentParser(
        prog="server-setup",
        description=f"{APP_NAME} v{VERSION}: bootstrap a fresh Ubuntu/Debian server",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--all", action="store_true", help="Install everything without prompting"
    )

    group = parser.add_argument_group("components")
    for component in components:
        if component.metavar:
            group.add_argument(
                *component.flags,
                dest=component.name,
                nargs="?",
                const=FLAG_CONSTS.get(component.name),
                default=None,
                metavar=component.metavar,
                type=swap_size if component.name == "swap" else str,
                help=component.help,
            )
        else:
            group.add_argument(
                *component.flags,
                dest=component.name,
                action="store_true",
                help=component.help,
            )

    options = parser.add_argument_group("options")
    options.add_argument("--git-name", help="Git user.name (configures git unattended)")
    options.add_argument("--git-email", help="Git user.email")
    options.add_argument("--ssh-email", help="Comment for the generated SSH key")
    options.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug output on the console"
    )
    options.add_argument(
        "--version", action="version", version=f"%(prog)s {VERSION}"
    )
    return parser


def parse_run_config(
    argv: Optional[Sequence[str]] = None,
    components: Sequence[Component] = COMPONENTS,
) -> RunConfig:
    """Turn command line tokens into the run selection. Exits 2 on bad flags."""
    args = build_parser(components).parse_args(argv)

    if args.all:
        selected = {c.name for c in components}
    else:
        selected = {c.name for c in components if getattr(args, c.name)}

    return RunConfig(
        selected=frozenset(selected),
        interactive=not selected,
        verbose=args.verbose,
        timezone=getattr(args, "timezone", None),
        swap_size=getattr(args, "swap", None) or DEFAULT_SWAP_SIZE,
        git_name=args.git_name,
        git_email=args.git_email,
        ssh_email=args.ssh_email,
    )


def preflight(runner: CommandRunner) -> None:
    """Refuse to start on hosts the setup cannot handle."""
    if not runner.command_exists("apt-get"):
        raise PreflightError("apt-get not found. This tool supports Ubuntu and Debian only.")
    if not runner.is_root and not runner.command_exists("sudo"):
        raise PreflightError("Not running as root and sudo is not available.")
    logger.debug(f"Preflight passed (root={runner.is_root})")


def _format_cmd(cmd) -> str:
    if isinstance(cmd, (list, tuple)):
        return " ".join(str(part) for part in cmd)
    return str(cmd)


def run(
    run_config: RunConfig,
    config: Optional[Config] = None,
    runner: Optional[CommandRunner] = None,
    prompter: Optional[Prompter] = None,
    out: Optional[Console] = None,
) -> int:
    """
    Execute one setup run and return the process exit code.

    The first failing command ends the run; its exit status becomes ours.
    """
    out = out or console
    config = config or Config.for_invoking_user()
    runner = runner or CommandRunner(config)
    prompter = prompter or Prompter(out)

    out.print(create_header(out=out))
    try:
        preflight(runner)
        ctx = SetupContext(config, run_config, runner, prompter, out)

        if run_config.interactive:
            display_panel(
                "This tool will help you set up your server.\n"
                "You will be asked about each component.",
                title="Welcome",
                out=out,
            )
            if not prompter.confirm("Do you want to continue?"):
                print_warning("Setup cancelled", out)
                return 0
        else:
            names = [c.title for c in COMPONENTS if run_config.is_selected(c.name)]
            print_step(f"Selected: {', '.join(names)}", out)

        ran = run_components(ctx, COMPONENTS)
        logger.info(f"Components run: {', '.join(ran) or 'none'}")
        print_summary(runner, out)
    except subprocess.CalledProcessError as e:
        print_error(
            f"Command failed with exit code {e.returncode}: {_format_cmd(e.cmd)}", out
        )
        return e.returncode if e.returncode > 0 else 1
    except SetupError as e:
        logger.error(str(e))
        print_error(str(e), out)
        return 1
    except OSError as e:
        logger.error(f"Setup aborted: {e}")
        print_error(f"Setup aborted: {e}", out)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    install_rich_traceback(show_locals=False)
    run_config = parse_run_config(argv)

    config = Config.for_invoking_user()
    setup_logger(
        config.LOG_FILE,
        verbose=run_config.verbose,
        owner=config.file_owner(os.geteuid()),
    )
    logger.info(f"Starting {APP_NAME} v{VERSION} (interactive={run_config.interactive})")

    try:
        code = run(run_config, config)
    except KeyboardInterrupt:
        console.print()
        print_warning("Setup interrupted by user.")
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
