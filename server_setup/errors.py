"""Exceptions raised by the setup run.

Failing external commands are not wrapped: ``subprocess.CalledProcessError``
propagates unchanged and aborts the run.
"""


class SetupError(Exception):
    """Base class for errors that stop the setup run."""


class PreflightError(SetupError):
    """The host cannot run the setup (no apt-get, no sudo, ...)."""


class InputClosedError(SetupError):
    """Standard input ended while an answer was still required."""
