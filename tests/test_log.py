"""Tests for logger setup."""

import logging
import os

import pytest

from server_setup.log import LOGGER_NAME, setup_logger
from tests.fakes.context import make_console


@pytest.fixture
def clean_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for h in logger.handlers[:]:
        logger.removeHandler(h)
        h.close()


def test_log_file_is_private_and_gets_debug(tmp_path, clean_logger) -> None:
    log_file = tmp_path / "state" / "server-setup" / "setup.log"
    logger = setup_logger(log_file, out=make_console())

    logging.getLogger("server_setup.runner").debug("Running command: apt-get update")
    for h in logger.handlers:
        h.flush()

    assert (log_file.stat().st_mode & 0o777) == 0o600
    assert "[DEBUG] Running command: apt-get update" in log_file.read_text()


def test_console_shows_warnings_only_unless_verbose(tmp_path, clean_logger) -> None:
    out = make_console()
    setup_logger(None, out=out)
    log = logging.getLogger("server_setup.executor")
    log.info("quiet detail")
    log.warning("loud problem")

    text = out.file.getvalue()
    assert "quiet detail" not in text
    assert "loud problem" in text


def test_verbose_console_shows_debug(clean_logger) -> None:
    out = make_console()
    setup_logger(None, verbose=True, out=out)
    logging.getLogger("server_setup.cli").debug("preflight detail")
    assert "preflight detail" in out.file.getvalue()


def test_setup_is_idempotent(tmp_path, clean_logger) -> None:
    setup_logger(tmp_path / "a.log", out=make_console())
    logger = setup_logger(tmp_path / "a.log", out=make_console())
    assert len(logger.handlers) == 2


def test_created_log_dirs_are_handed_to_owner(tmp_path, clean_logger, monkeypatch) -> None:
    """Under sudo, ~/.local must not end up owned by root."""
    chowned = []
    monkeypatch.setattr(
        "server_setup.log.os.chown",
        lambda path, uid, gid: chowned.append((path, uid, gid)),
    )
    home = tmp_path / "home"
    (home / ".local").mkdir(parents=True)
    log_file = home / ".local" / "state" / "server-setup" / "setup.log"

    setup_logger(log_file, out=make_console(), owner=(1000, 1000))

    assert chowned == [
        (str(home / ".local" / "state"), 1000, 1000),
        (str(home / ".local" / "state" / "server-setup"), 1000, 1000),
        (str(log_file), 1000, 1000),
    ]


def test_no_owner_means_no_chown(tmp_path, clean_logger, monkeypatch) -> None:
    chowned = []
    monkeypatch.setattr("server_setup.log.os.chown", lambda *args: chowned.append(args))
    setup_logger(tmp_path / "a" / "b.log", out=make_console())
    assert chowned == []


@pytest.mark.skipif(os.geteuid() != 0, reason="needs root to chown")
def test_log_dirs_really_owned_by_invoking_user(tmp_path, clean_logger) -> None:
    home = tmp_path / "home"
    home.mkdir()
    os.chown(str(home), 65534, 65534)
    log_file = home / ".local" / "state" / "server-setup" / "setup.log"

    setup_logger(log_file, out=make_console(), owner=(65534, 65534))

    assert (home / ".local").stat().st_uid == 65534
    assert (home / ".local" / "state").stat().st_uid == 65534
    assert log_file.stat().st_uid == 65534
