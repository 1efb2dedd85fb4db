"""External command execution.

Every shell-out of the setup run goes through ``CommandRunner``. Failing
commands raise ``subprocess.CalledProcessError`` unless ``check=False``; the
CLI turns that into a non-zero exit, so the first failure ends the run.
"""

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union

from server_setup.config import Config

logger = logging.getLogger(__name__)


class CommandRunner:
    """Runs system commands, adding sudo where the command needs it."""

    def __init__(self, config: Config, euid: Optional[int] = None) -> None:
        self.config = config
        self.euid = os.geteuid() if euid is None else euid

    @property
    def is_root(self) -> bool:
        return self.euid == 0

    def build_command(
        self, cmd: Sequence[str], privileged: bool = False, as_user: bool = False
    ) -> List[str]:
        """
        Prefix ``cmd`` for the current privileges.

        privileged commands get ``sudo`` when not already root. as_user commands
        run as the invoking user when the tool itself runs as root through sudo.

        Args:
            cmd: Command and arguments
            privileged: The command needs root
            as_user: The command writes the invoking user's home

        Returns:
            The command to execute
        """
        cmd = list(cmd)
        if privileged and not self.is_root:
            return ["sudo"] + cmd
        if as_user and self.is_root and self.config.USERNAME != "root":
            return ["sudo", "-u", self.config.USERNAME, "-H"] + cmd
        return cmd

    def run(
        self,
        cmd: Sequence[str],
        privileged: bool = False,
        as_user: bool = False,
        check: bool = True,
        capture_output: bool = False,
    ) -> subprocess.CompletedProcess:
        """
        Run a command; output goes straight to the terminal unless captured.

        Args:
            cmd: Command and arguments
            privileged: Prefix with sudo when not root
            as_user: Run as the invoking user when root through sudo
            check: Raise on a non-zero exit status
            capture_output: Capture stdout/stderr as text instead of streaming them

        Returns:
            subprocess.CompletedProcess object

        Raises:
            subprocess.CalledProcessError: If check is set and the command fails
            FileNotFoundError: If the executable does not exist
        """
        full_cmd = self.build_command(cmd, privileged=privileged, as_user=as_user)
        logger.debug(f"Running command: {' '.join(full_cmd)}")
        try:
            return self._execute(full_cmd, check=check, capture_output=capture_output)
        except subprocess.CalledProcessError as e:
            logger.error(f"Command failed with exit code {e.returncode}: {' '.join(full_cmd)}")
            raise
        except FileNotFoundError:
            logger.error(f"Command not found: {full_cmd[0]}")
            raise

    def run_shell(
        self,
        script: str,
        privileged: bool = False,
        as_user: bool = False,
        check: bool = True,
    ) -> subprocess.CompletedProcess:
        """
        Run a shell pipeline; any failing stage fails the whole command.

        Args:
            script: bash script, usually a pipeline or a redirection
            privileged: Prefix with sudo when not root
            as_user: Run as the invoking user when root through sudo
            check: Raise on a non-zero exit status

        Returns:
            subprocess.CompletedProcess object
        """
        return self.run(
            ["bash", "-o", "pipefail", "-c", script],
            privileged=privileged,
            as_user=as_user,
            check=check,
        )

    def _execute(
        self, cmd: List[str], check: bool, capture_output: bool
    ) -> subprocess.CompletedProcess:
        return subprocess.run(
            cmd, check=check, capture_output=capture_output, text=True
        )

    def which(self, name: str) -> Optional[str]:
        """
        Locate an executable on PATH or in the user's own bin directories.

        Args:
            name: Executable name

        Returns:
            Full path of the executable, or None if not found
        """
        found = shutil.which(name)
        if found:
            return found
        extra = os.pathsep.join(str(p) for p in self.config.user_bin_dirs)
        return shutil.which(name, path=extra)

    def command_exists(self, name: str) -> bool:
        """
        Check if a command exists on PATH or in the user's bin directories.

        Args:
            name: Command name to check

        Returns:
            True if the command exists, False otherwise
        """
        return self.which(name) is not None

    def path_exists(self, path: Union[str, Path]) -> bool:
        return Path(path).exists()

    def is_file(self, path: Union[str, Path]) -> bool:
        return Path(path).is_file()

    def version_of(self, cmd: Sequence[str]) -> Optional[str]:
        """
        First line a ``--version`` style command prints, or None.

        Some tools (nginx) print their version on stderr, so both streams are read.

        Args:
            cmd: Version command, e.g. ["git", "--version"]

        Returns:
            The first non-empty output line, or None when the tool is missing
            or prints nothing
        """
        executable = self.which(cmd[0])
        if executable is None:
            return None
        try:
            result = self.run([executable] + list(cmd[1:]), check=False, capture_output=True)
        except OSError as e:
            logger.debug(f"Version probe failed for {cmd[0]}: {e}")
            return None
        for stream in (result.stdout, result.stderr):
            for line in (stream or "").splitlines():
                if line.strip():
                    return line.strip()
        return None
