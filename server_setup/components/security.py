"""Security hardening: UFW firewall, Fail2ban and the user's SSH key."""

import datetime
import logging
import shutil
from pathlib import Path
from typing import Optional

from server_setup.components.base import Component, SetupContext, installed_notice

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------
# Firewall (UFW)
# ----------------------------------------------------------------
def setup_firewall(ctx: SetupContext, rerun: bool) -> None:
    ctx.apt_install(["ufw"])
    ctx.runner.run(["ufw", "default", "deny", "incoming"], privileged=True)
    ctx.runner.run(["ufw", "default", "allow", "outgoing"], privileged=True)
    for service in ctx.config.FIREWALL_SERVICES:
        ctx.runner.run(["ufw", "allow", service], privileged=True)

    if ctx.confirm("Do you want to enable the firewall now?", unattended=True):
        ctx.runner.run(["ufw", "--force", "enable"], privileged=True)
        ctx.success("Firewall enabled")
    else:
        ctx.warning(
            "Firewall configured but not enabled. Run 'sudo ufw enable' to activate."
        )

    ctx.runner.run(["ufw", "status"], privileged=True)


# ----------------------------------------------------------------
# Fail2ban
# ----------------------------------------------------------------
def fail2ban_notice(ctx: SetupContext) -> Optional[str]:
    return installed_notice(
        ctx, "Fail2ban", "fail2ban-client", ["fail2ban-client", "--version"]
    )


def install_fail2ban(ctx: SetupContext, rerun: bool) -> None:
    ctx.apt_install(["fail2ban"], reinstall=rerun)
    ctx.systemctl("enable", "fail2ban")
    ctx.systemctl("start", "fail2ban")
    ctx.success("Fail2ban installed and started")


# ----------------------------------------------------------------
# SSH Key
# ----------------------------------------------------------------
def ssh_key_notice(ctx: SetupContext) -> Optional[str]:
    key_file = ctx.config.SSH_KEY_FILE
    if ctx.runner.path_exists(key_file):
        return f"SSH key already exists ({key_file})"
    return None


def backup_key_pair(key_file: Path) -> Optional[Path]:
    """Move an existing key pair aside with a timestamp suffix."""
    if not key_file.is_file():
        return None
    timestamp = datetime.datetime.now().strftime("%Y%m%d%H%M%S")
    backup = key_file.with_name(f"{key_file.name}.bak.{timestamp}")
    shutil.move(str(key_file), str(backup))
    public = key_file.with_name(key_file.name + ".pub")
    if public.is_file():
        shutil.move(str(public), str(backup) + ".pub")
    logger.info(f"Backed up {key_file} to {backup}")
    return backup


def generate_ssh_key(ctx: SetupContext, rerun: bool) -> None:
    key_file = ctx.config.SSH_KEY_FILE
    if rerun:
        backup = backup_key_pair(key_file)
        if backup:
            ctx.warning(f"Previous key moved to {backup}")

    email = ctx.run.ssh_email or ctx.ask("Enter your email for SSH key")
    cmd = ["ssh-keygen", "-t", "ed25519", "-f", str(key_file)]
    if email:
        cmd += ["-C", email]
    if not ctx.interactive:
        # No passphrase prompt in CLI mode
        cmd += ["-N", ""]

    ctx.ensure_user_dir(key_file.parent, mode=0o700)
    ctx.runner.run(cmd, as_user=True)
    ctx.success("SSH key generated")

    public = key_file.with_name(key_file.name + ".pub")
    if public.is_file():
        ctx.show("\nYour public key:")
        ctx.show(public.read_text().strip())


FIREWALL = Component(
    name="firewall",
    title="Firewall (UFW)",
    prompt="Do you want to configure UFW firewall?",
    action=setup_firewall,
    help="UFW: deny incoming, allow outgoing, allow ssh/http/https",
)

FAIL2BAN = Component(
    name="fail2ban",
    title="Fail2ban (Security)",
    prompt="Do you want to install Fail2ban for SSH protection?",
    action=install_fail2ban,
    help="Fail2ban brute-force protection (enabled and started)",
    check=fail2ban_notice,
    rerun_prompt="Do you want to reinstall Fail2ban?",
)

SSH = Component(
    name="ssh",
    title="SSH Key",
    prompt="Do you want to generate an SSH key?",
    action=generate_ssh_key,
    help="Generate an ed25519 SSH key pair",
    check=ssh_key_notice,
    rerun_prompt="Do you want to generate a new SSH key?",
)
