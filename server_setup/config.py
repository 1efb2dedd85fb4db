"""Host defaults (``Config``) and the per-run selection (``RunConfig``)."""

import getpass
import os
import pwd
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple

DEFAULT_TIMEZONE = "UTC"
DEFAULT_SWAP_SIZE = "2G"


def _invoking_user() -> str:
    """The user who ran the tool, looking through sudo."""
    return os.environ.get("SUDO_USER") or getpass.getuser()


@dataclass
class Config:
    """Host-level settings for the setup run."""

    USERNAME: str = "root"
    USER_HOME: Path = field(default_factory=lambda: Path("/root"))
    TEMPLATES_DIR: Optional[Path] = None
    SSH_KEY_FILE: Optional[Path] = None
    LOG_FILE: Optional[Path] = None
    SWAP_FILE: Path = field(default_factory=lambda: Path("/swapfile"))
    FSTAB: Path = field(default_factory=lambda: Path("/etc/fstab"))
    GIT_DEFAULT_BRANCH: str = "main"

    ESSENTIAL_PACKAGES: List[str] = field(
        default_factory=lambda: [
            "curl",
            "wget",
            "vim",
            "htop",
            "unzip",
            "zip",
            "tree",
            "net-tools",
            "software-properties-common",
            "apt-transport-https",
            "ca-certificates",
            "gnupg",
            "lsb-release",
            "build-essential",
        ]
    )

    PYTHON_PACKAGES: List[str] = field(
        default_factory=lambda: ["python3", "python3-dev", "python3-venv"]
    )

    DOCKER_PACKAGES: List[str] = field(
        default_factory=lambda: [
            "docker-ce",
            "docker-ce-cli",
            "containerd.io",
            "docker-buildx-plugin",
            "docker-compose-plugin",
        ]
    )

    OLD_DOCKER_PACKAGES: List[str] = field(
        default_factory=lambda: [
            "docker",
            "docker-engine",
            "docker.io",
            "containerd",
            "runc",
        ]
    )

    # Firewall services to allow
    FIREWALL_SERVICES: List[str] = field(
        default_factory=lambda: ["ssh", "http", "https"]
    )

    def __post_init__(self) -> None:
        self.USER_HOME = Path(self.USER_HOME)
        if self.TEMPLATES_DIR is None:
            self.TEMPLATES_DIR = self.USER_HOME / "docker" / "databases"
        if self.SSH_KEY_FILE is None:
            self.SSH_KEY_FILE = self.USER_HOME / ".ssh" / "id_ed25519"
        if self.LOG_FILE is None:
            self.LOG_FILE = (
                self.USER_HOME / ".local" / "state" / "server-setup" / "setup.log"
            )

    @property
    def user_bin_dirs(self) -> List[Path]:
        """Per-user install locations that may not be on PATH yet."""
        return [self.USER_HOME / ".local" / "bin", self.USER_HOME / ".cargo" / "bin"]

    def file_owner(self, euid: int) -> Optional[Tuple[int, int]]:
        """
        Owner for files and directories the tool creates in USER_HOME.

        Args:
            euid: Effective uid the tool runs with

        Returns:
            (uid, gid) of USERNAME when running as root on behalf of another
            user, otherwise None (new files already belong to the right user)
        """
        if euid != 0 or self.USERNAME == "root":
            return None
        entry = pwd.getpwnam(self.USERNAME)
        return entry.pw_uid, entry.pw_gid

    @classmethod
    def for_invoking_user(cls) -> "Config":
        """Build the defaults for whoever ran the tool (through sudo or not)."""
        username = _invoking_user()
        home = Path(os.path.expanduser(f"~{username}"))
        return cls(USERNAME=username, USER_HOME=home)


@dataclass(frozen=True)
class RunConfig:
    """What to run in this invocation. Built once from the command line."""

    selected: FrozenSet[str] = frozenset()
    interactive: bool = True
    verbose: bool = False
    timezone: Optional[str] = None
    swap_size: str = DEFAULT_SWAP_SIZE
    git_name: Optional[str] = None
    git_email: Optional[str] = None
    ssh_email: Optional[str] = None

    def is_selected(self, name: str) -> bool:
        return name in self.selected
