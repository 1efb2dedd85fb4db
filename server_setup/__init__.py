"""
server-setup

Interactive bootstrap for a fresh Ubuntu/Debian server: system update, essential
packages, git, Docker, Python/uv, Nginx, Certbot, UFW, Fail2ban, Docker Compose
database templates, SSH key, swap file and timezone.
"""

APP_NAME: str = "Server Setup"
VERSION: str = "1.0.0"

__version__ = VERSION
