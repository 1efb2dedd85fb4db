"""End-of-run checklist of what is installed, re-probed from the system."""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.table import Table

from server_setup.components.base import extract_version
from server_setup.runner import CommandRunner
from server_setup.ui import NordColors, print_section, print_success, print_warning


@dataclass(frozen=True)
class ToolProbe:
    label: str
    executable: str
    version_cmd: Tuple[str, ...]


@dataclass(frozen=True)
class ToolStatus:
    label: str
    installed: bool
    version: Optional[str] = None


SUMMARY_TOOLS: Tuple[ToolProbe, ...] = (
    ToolProbe("Git", "git", ("git", "--version")),
    ToolProbe("Docker", "docker", ("docker", "--version")),
    ToolProbe("Python", "python3", ("python3", "--version")),
    ToolProbe("uv", "uv", ("uv", "--version")),
    ToolProbe("Nginx", "nginx", ("nginx", "-v")),
    ToolProbe("Certbot", "certbot", ("certbot", "--version")),
    ToolProbe("Fail2ban", "fail2ban-client", ("fail2ban-client", "--version")),
)

REMINDERS: Tuple[str, ...] = (
    "Log out and back in for docker group changes",
    "Run 'source ~/.bashrc' to use uv",
    "Configure your firewall rules as needed",
)


def probe_tools(
    runner: CommandRunner, tools: Sequence[ToolProbe] = SUMMARY_TOOLS
) -> List[ToolStatus]:
    """Check each tool's presence and version as the system reports it now."""
    statuses = []
    for tool in tools:
        if not runner.command_exists(tool.executable):
            statuses.append(ToolStatus(tool.label, installed=False))
            continue
        version = extract_version(runner.version_of(tool.version_cmd))
        statuses.append(ToolStatus(tool.label, installed=True, version=version))
    return statuses


def build_summary_table(statuses: Sequence[ToolStatus]) -> Table:
    table = Table(title="Installed Components", style="banner", box=box.ROUNDED)
    table.add_column("Component", style="header")
    table.add_column("Status")
    table.add_column("Version", style="info")

    for status in statuses:
        if status.installed:
            mark = f"[{NordColors.GREEN}]✓ installed[/]"
        else:
            mark = f"[{NordColors.POLAR_NIGHT_3}]✗ not found[/]"
        table.add_row(status.label, mark, status.version or "")
    return table


def print_summary(runner: CommandRunner, out: Console) -> List[ToolStatus]:
    print_section("Installation Summary", out)
    statuses = probe_tools(runner)
    out.print(build_summary_table(statuses))

    out.print()
    print_warning("Remember to:", out)
    for reminder in REMINDERS:
        out.print(f"  - {reminder}", markup=False)
    out.print()
    print_success("Setup complete!", out)
    return statuses
