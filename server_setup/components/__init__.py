"""
Component registry.

``COMPONENTS`` is the run order: essentials come before the tools that rely on
curl/gnupg, and the database templates assume Docker is already set up.
"""

from typing import Dict, List, Optional, Tuple

from server_setup.components.base import Component, SetupContext
from server_setup.components.databases import DATABASES
from server_setup.components.devtools import GIT, PYTHON
from server_setup.components.docker import DOCKER
from server_setup.components.security import FAIL2BAN, FIREWALL, SSH
from server_setup.components.system import ESSENTIALS, SWAP, TIMEZONE, UPDATE
from server_setup.components.web import CERTBOT, NGINX

COMPONENTS: Tuple[Component, ...] = (
    UPDATE,
    ESSENTIALS,
    GIT,
    DOCKER,
    PYTHON,
    NGINX,
    CERTBOT,
    FIREWALL,
    FAIL2BAN,
    DATABASES,
    SSH,
    SWAP,
    TIMEZONE,
)

_BY_NAME: Dict[str, Component] = {c.name: c for c in COMPONENTS}


def get_component(name: str) -> Optional[Component]:
    return _BY_NAME.get(name)


def component_names() -> List[str]:
    return [c.name for c in COMPONENTS]


__all__ = [
    "COMPONENTS",
    "Component",
    "SetupContext",
    "component_names",
    "get_component",
]
