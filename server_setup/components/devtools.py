"""Developer tooling: Git and Python with the uv package manager."""

from typing import Optional

from server_setup.components.base import Component, SetupContext, installed_notice
from server_setup.config import RunConfig

UV_INSTALL_SCRIPT = "https://astral.sh/uv/install.sh"


# ----------------------------------------------------------------
# Git
# ----------------------------------------------------------------
def git_notice(ctx: SetupContext) -> Optional[str]:
    return installed_notice(ctx, "Git", "git", ["git", "--version"])


def _has_git_identity(run: RunConfig) -> bool:
    return bool(run.git_name and run.git_email)


def configure_git(ctx: SetupContext) -> None:
    """Set the global name, email and default branch for the invoking user."""
    name = ctx.run.git_name or ctx.ask("Enter your Git username")
    email = ctx.run.git_email or ctx.ask("Enter your Git email")
    settings = [
        ("user.name", name),
        ("user.email", email),
        ("init.defaultBranch", ctx.config.GIT_DEFAULT_BRANCH),
    ]
    for key, value in settings:
        ctx.runner.run(["git", "config", "--global", key, value], as_user=True)
    ctx.success("Git configured")


def install_git(ctx: SetupContext, rerun: bool) -> None:
    if not ctx.runner.command_exists("git"):
        ctx.apt_install(["git"])
        ctx.success("Git installed")

    # rerun means the user already asked for configuration
    if rerun or ctx.confirm(
        "Do you want to configure Git (name and email)?",
        unattended=_has_git_identity(ctx.run),
    ):
        configure_git(ctx)


# ----------------------------------------------------------------
# Python with uv
# ----------------------------------------------------------------
def python_notice(ctx: SetupContext) -> Optional[str]:
    """Only counts as installed when both python3 and uv are present."""
    if not (ctx.runner.command_exists("python3") and ctx.runner.command_exists("uv")):
        return None
    versions = [
        v
        for v in (ctx.version_of(["python3", "--version"]), ctx.version_of(["uv", "--version"]))
        if v
    ]
    notice = "Python3 and uv are already installed"
    return f"{notice} ({', '.join(versions)})" if versions else notice


def install_python_uv(ctx: SetupContext, rerun: bool) -> None:
    if ctx.runner.command_exists("python3"):
        version = ctx.version_of(["python3", "--version"])
        ctx.warning(f"Python3 is already installed ({version or 'unknown version'})")
    else:
        ctx.apt_install(ctx.config.PYTHON_PACKAGES)
        ctx.success("Python3 installed")

    if ctx.runner.command_exists("uv") and not rerun:
        version = ctx.version_of(["uv", "--version"])
        ctx.warning(f"uv is already installed ({version or 'unknown version'})")
        return

    ctx.step("Installing uv...")
    ctx.runner.run_shell(f"curl -LsSf {UV_INSTALL_SCRIPT} | sh", as_user=True)
    ctx.success("uv installed")
    ctx.warning("Run 'source ~/.bashrc' or restart your shell to use uv")


GIT = Component(
    name="git",
    title="Git",
    prompt="Do you want to install Git?",
    action=install_git,
    help="Git, plus global name/email configuration",
    check=git_notice,
    rerun_prompt="Do you want to configure Git?",
    rerun_unattended=_has_git_identity,
)

PYTHON = Component(
    name="python",
    title="Python & uv Package Manager",
    prompt="Do you want to install Python3 and uv (fast Python package manager)?",
    action=install_python_uv,
    help="Python3 and the uv package manager",
    check=python_notice,
    rerun_prompt="Do you want to reinstall uv?",
    aliases=("uv",),
)
