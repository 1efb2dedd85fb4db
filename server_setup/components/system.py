"""System-level steps: package update, essential tools, swap file, timezone."""

import logging
import re
from typing import Optional

from server_setup.components.base import Component, SetupContext
from server_setup.config import DEFAULT_SWAP_SIZE, DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)

SWAP_SIZE_RE = re.compile(r"^[1-9]\d*[MG]$")
ZONEINFO_DIR = "/usr/share/zoneinfo"


def is_valid_swap_size(size: str) -> bool:
    """Sizes fallocate understands and we allow: 512M, 2G, ..."""
    return bool(SWAP_SIZE_RE.match(size))


# ----------------------------------------------------------------
# System Update
# ----------------------------------------------------------------
def update_system(ctx: SetupContext, rerun: bool) -> None:
    ctx.step("Updating package lists...")
    ctx.runner.run(["apt-get", "update"], privileged=True)
    ctx.step("Upgrading installed packages...")
    ctx.runner.run(["apt-get", "upgrade", "-y"], privileged=True)
    ctx.success("System updated")


# ----------------------------------------------------------------
# Essential Tools
# ----------------------------------------------------------------
def install_essentials(ctx: SetupContext, rerun: bool) -> None:
    ctx.apt_install(ctx.config.ESSENTIAL_PACKAGES)
    ctx.success("Essential tools installed")


# ----------------------------------------------------------------
# Swap File
# ----------------------------------------------------------------
def swap_notice(ctx: SetupContext) -> Optional[str]:
    result = ctx.runner.run(
        ["swapon", "--show=NAME,SIZE", "--noheadings"], check=False, capture_output=True
    )
    active = " ".join((result.stdout or "").split())
    if result.returncode == 0 and active:
        return f"Swap is already active ({active})"
    if ctx.runner.path_exists(ctx.config.SWAP_FILE):
        return f"Swap file {ctx.config.SWAP_FILE} already exists"
    return None


def _swap_size(ctx: SetupContext) -> str:
    if not ctx.interactive:
        return ctx.run.swap_size
    while True:
        size = ctx.ask("Swap file size (e.g. 1G, 512M)", default=ctx.run.swap_size)
        size = size.strip().upper()
        if is_valid_swap_size(size):
            return size
        ctx.warning(f"Invalid size '{size}'. Use a number followed by M or G.")


def create_swap(ctx: SetupContext, rerun: bool) -> None:
    size = _swap_size(ctx)
    path = str(ctx.config.SWAP_FILE)

    ctx.step(f"Creating {size} swap file at {path}...")
    ctx.runner.run(["fallocate", "-l", size, path], privileged=True)
    ctx.runner.run(["chmod", "600", path], privileged=True)
    ctx.runner.run(["mkswap", path], privileged=True)
    ctx.runner.run(["swapon", path], privileged=True)

    entry = f"{path} none swap sw 0 0"
    fstab = ctx.config.FSTAB
    current = fstab.read_text() if fstab.exists() else ""
    if any(line.split()[:1] == [path] for line in current.splitlines()):
        logger.info(f"{fstab} already mounts {path}")
    else:
        ctx.runner.run_shell(f"echo '{entry}' >> {fstab}", privileged=True)
    ctx.success(f"Swap file of {size} created and enabled")


# ----------------------------------------------------------------
# Timezone
# ----------------------------------------------------------------
def _current_timezone(ctx: SetupContext) -> Optional[str]:
    result = ctx.runner.run(
        ["timedatectl", "show", "--property=Timezone", "--value"],
        check=False,
        capture_output=True,
    )
    zone = (result.stdout or "").strip()
    return zone if result.returncode == 0 and zone else None


def is_known_timezone(ctx: SetupContext, zone: str) -> bool:
    """
    Check ``zone`` names a zoneinfo file, e.g. Europe/Berlin.

    Args:
        ctx: Setup context whose runner inspects the filesystem
        zone: Zone name as typed by the user

    Returns:
        True for a real zone; False for region directories (Europe), absolute
        paths and names with ".." components
    """
    if not zone or zone.startswith("/") or ".." in zone.split("/"):
        return False
    return ctx.runner.is_file(f"{ZONEINFO_DIR}/{zone}")


def _timezone(ctx: SetupContext) -> str:
    if not ctx.interactive:
        return ctx.run.timezone or DEFAULT_TIMEZONE
    default = ctx.run.timezone or _current_timezone(ctx) or DEFAULT_TIMEZONE
    while True:
        zone = ctx.ask("Timezone (e.g. Europe/Berlin)", default=default)
        if is_known_timezone(ctx, zone):
            return zone
        ctx.warning(f"Unknown timezone '{zone}'. See 'timedatectl list-timezones'.")


def set_timezone(ctx: SetupContext, rerun: bool) -> None:
    zone = _timezone(ctx)
    ctx.runner.run(["timedatectl", "set-timezone", zone], privileged=True)
    ctx.success(f"Timezone set to {zone}")


UPDATE = Component(
    name="update",
    title="System Update",
    prompt="Do you want to update system packages?",
    action=update_system,
    help="Update package lists and upgrade installed packages",
)

ESSENTIALS = Component(
    name="essentials",
    title="Essential Tools",
    prompt="Do you want to install essential tools (curl, wget, vim, htop, unzip, etc.)?",
    action=install_essentials,
    help="Essential tools (curl, wget, vim, htop, build-essential, ...)",
)

SWAP = Component(
    name="swap",
    title="Swap File",
    prompt="Do you want to create a swap file?",
    action=create_swap,
    help=f"Create and enable a swap file (default size {DEFAULT_SWAP_SIZE})",
    check=swap_notice,
    metavar="SIZE",
)

TIMEZONE = Component(
    name="timezone",
    title="Timezone",
    prompt="Do you want to set the timezone?",
    action=set_timezone,
    help=f"Set the system timezone (default {DEFAULT_TIMEZONE})",
    metavar="ZONE",
)
