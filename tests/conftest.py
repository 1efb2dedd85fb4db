import pytest

from server_setup.config import Config


@pytest.fixture
def config(tmp_path) -> Config:
    """Config whose user home, swap file and fstab all live under tmp_path."""
    home = tmp_path / "home"
    home.mkdir()
    return Config(
        USERNAME="root",
        USER_HOME=home,
        SWAP_FILE=tmp_path / "swapfile",
        FSTAB=tmp_path / "fstab",
        LOG_FILE=tmp_path / "setup.log",
    )
