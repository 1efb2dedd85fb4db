"""Web serving: Nginx and Certbot (Let's Encrypt)."""

from typing import Optional

from server_setup.components.base import Component, SetupContext, installed_notice


def nginx_notice(ctx: SetupContext) -> Optional[str]:
    return installed_notice(ctx, "Nginx", "nginx", ["nginx", "-v"])


def install_nginx(ctx: SetupContext, rerun: bool) -> None:
    ctx.apt_install(["nginx"], reinstall=rerun)
    ctx.systemctl("enable", "nginx")
    ctx.systemctl("start", "nginx")
    ctx.success("Nginx installed and started")


def certbot_notice(ctx: SetupContext) -> Optional[str]:
    return installed_notice(ctx, "Certbot", "certbot", ["certbot", "--version"])


def install_certbot(ctx: SetupContext, rerun: bool) -> None:
    ctx.apt_install(["certbot", "python3-certbot-nginx"], reinstall=rerun)
    ctx.success("Certbot installed")
    ctx.show("To get an SSL certificate run: sudo certbot --nginx -d yourdomain.com")


NGINX = Component(
    name="nginx",
    title="Nginx",
    prompt="Do you want to install Nginx?",
    action=install_nginx,
    help="Nginx web server (enabled and started)",
    check=nginx_notice,
    rerun_prompt="Do you want to reinstall Nginx?",
)

CERTBOT = Component(
    name="certbot",
    title="Certbot (Let's Encrypt SSL)",
    prompt="Do you want to install Certbot for SSL certificates?",
    action=install_certbot,
    help="Certbot with the Nginx plugin",
    check=certbot_notice,
    rerun_prompt="Do you want to reinstall Certbot?",
)
