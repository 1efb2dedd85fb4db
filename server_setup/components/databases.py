"""
Docker Compose templates for common databases.

The templates are fixed text: only ``${VAR:-default}`` placeholders, resolved by
docker compose at start time. Files are overwritten on every run.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from server_setup.components.base import Component, SetupContext

POSTGRES_COMPOSE = """services:
  postgres:
    image: postgres:16-alpine
    container_name: postgres
    restart: unless-stopped
    environment:
      POSTGRES_USER: ${POSTGRES_USER:-postgres}
      POSTGRES_PASSWORD: ${POSTGRES_PASSWORD:-changeme}
      POSTGRES_DB: ${POSTGRES_DB:-app}
    volumes:
      - postgres_data:/var/lib/postgresql/data
    ports:
      - "5432:5432"

volumes:
  postgres_data:
"""

MYSQL_COMPOSE = """services:
  mysql:
    image: mysql:8
    container_name: mysql
    restart: unless-stopped
    environment:
      MYSQL_ROOT_PASSWORD: ${MYSQL_ROOT_PASSWORD:-changeme}
      MYSQL_DATABASE: ${MYSQL_DATABASE:-app}
      MYSQL_USER: ${MYSQL_USER:-user}
      MYSQL_PASSWORD: ${MYSQL_PASSWORD:-changeme}
    volumes:
      - mysql_data:/var/lib/mysql
    ports:
      - "3306:3306"

volumes:
  mysql_data:
"""

REDIS_COMPOSE = """services:
  redis:
    image: redis:7-alpine
    container_name: redis
    restart: unless-stopped
    command: redis-server --appendonly yes
    volumes:
      - redis_data:/data
    ports:
      - "6379:6379"

volumes:
  redis_data:
"""

FULLSTACK_COMPOSE = """services:
  postgres:
    image: postgres:16-alpine
    container_name: postgres
    restart: unless-stopped
    environment:
      POSTGRES_USER: ${POSTGRES_USER:-postgres}
      POSTGRES_PASSWORD: ${POSTGRES_PASSWORD:-changeme}
      POSTGRES_DB: ${POSTGRES_DB:-app}
    volumes:
      - postgres_data:/var/lib/postgresql/data
    ports:
      - "5432:5432"

  redis:
    image: redis:7-alpine
    container_name: redis
    restart: unless-stopped
    command: redis-server --appendonly yes
    volumes:
      - redis_data:/data
    ports:
      - "6379:6379"

volumes:
  postgres_data:
  redis_data:
"""


@dataclass(frozen=True)
class ComposeTemplate:
    label: str
    filename: str
    prompt: str
    content: str


COMPOSE_TEMPLATES: Tuple[ComposeTemplate, ...] = (
    ComposeTemplate(
        "PostgreSQL",
        "postgres-compose.yml",
        "Create PostgreSQL docker-compose template?",
        POSTGRES_COMPOSE,
    ),
    ComposeTemplate(
        "MySQL",
        "mysql-compose.yml",
        "Create MySQL docker-compose template?",
        MYSQL_COMPOSE,
    ),
    ComposeTemplate(
        "Redis",
        "redis-compose.yml",
        "Create Redis docker-compose template?",
        REDIS_COMPOSE,
    ),
    ComposeTemplate(
        "Full stack",
        "fullstack-compose.yml",
        "Create full stack docker-compose (PostgreSQL + Redis)?",
        FULLSTACK_COMPOSE,
    ),
)


def write_template(ctx: SetupContext, template: ComposeTemplate) -> Path:
    path = ctx.config.TEMPLATES_DIR / template.filename
    ctx.write_user_file(path, template.content)
    return path


def create_compose_templates(ctx: SetupContext, rerun: bool) -> None:
    directory = ctx.config.TEMPLATES_DIR
    ctx.ensure_user_dir(directory)

    written: List[Path] = []
    for template in COMPOSE_TEMPLATES:
        if not ctx.confirm(template.prompt, unattended=True):
            continue
        path = write_template(ctx, template)
        written.append(path)
        ctx.success(f"{template.label} template created at {path}")

    if not written:
        ctx.warning("No templates created")
        return

    ctx.show("\nTo start a database, run:")
    ctx.show(f"  cd {directory}")
    ctx.show("  docker compose -f <filename>.yml up -d")


DATABASES = Component(
    name="databases",
    title="Docker Compose Database Templates",
    prompt="Do you want to create Docker Compose templates for databases?",
    action=create_compose_templates,
    help="Docker Compose templates for PostgreSQL, MySQL, Redis and a full stack",
)
