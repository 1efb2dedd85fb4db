"""Docker Engine from Docker's own apt repository."""

from typing import Optional

from server_setup.components.base import Component, SetupContext, installed_notice

KEYRINGS_DIR = "/etc/apt/keyrings"
DOCKER_KEYRING = f"{KEYRINGS_DIR}/docker.gpg"
DOCKER_SOURCES_LIST = "/etc/apt/sources.list.d/docker.list"

# $ID is "ubuntu" or "debian"; Docker publishes a repository for each.
OS_ID = '$(. /etc/os-release && echo "$ID")'
OS_CODENAME = '$(. /etc/os-release && echo "$VERSION_CODENAME")'
DOCKER_REPO_URL = f"https://download.docker.com/linux/{OS_ID}"


def docker_notice(ctx: SetupContext) -> Optional[str]:
    return installed_notice(ctx, "Docker", "docker", ["docker", "--version"])


def install_docker(ctx: SetupContext, rerun: bool) -> None:
    ctx.step("Removing old Docker packages...")
    # Some of these names do not exist on every release
    ctx.runner.run(
        ["apt-get", "remove", "-y"] + ctx.config.OLD_DOCKER_PACKAGES,
        privileged=True,
        check=False,
    )

    ctx.step("Adding Docker's official GPG key...")
    ctx.runner.run(["install", "-m", "0755", "-d", KEYRINGS_DIR], privileged=True)
    ctx.runner.run_shell(
        f"curl -fsSL {DOCKER_REPO_URL}/gpg | gpg --dearmor -o {DOCKER_KEYRING} --yes",
        privileged=True,
    )
    ctx.runner.run(["chmod", "a+r", DOCKER_KEYRING], privileged=True)

    ctx.step("Adding Docker apt repository...")
    ctx.runner.run_shell(
        f'echo "deb [arch=$(dpkg --print-architecture) signed-by={DOCKER_KEYRING}] '
        f'{DOCKER_REPO_URL} {OS_CODENAME} stable" > {DOCKER_SOURCES_LIST}',
        privileged=True,
    )

    ctx.runner.run(["apt-get", "update"], privileged=True)
    ctx.apt_install(ctx.config.DOCKER_PACKAGES, reinstall=rerun)

    ctx.runner.run(["usermod", "-aG", "docker", ctx.config.USERNAME], privileged=True)

    ctx.success("Docker installed")
    ctx.warning("Log out and back in for docker group changes to take effect")


DOCKER = Component(
    name="docker",
    title="Docker",
    prompt="Do you want to install Docker?",
    action=install_docker,
    help="Docker Engine with the compose and buildx plugins",
    check=docker_notice,
    rerun_prompt="Do you want to reinstall Docker?",
)
