"""Alembic helpers shared by the database scripts."""

from __future__ import annotations

from typing import Iterator

from alembic import command
from alembic.autogenerate import api as ag_api
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from sqlalchemy.engine import Engine

from ..config import ROOT_DIR


def alembic_config() -> Config:
    """Return the project's Alembic config; the URL comes from ``DB_URL`` in env.py."""
    cfg = Config(str(ROOT_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT_DIR / "alembic"))
    return cfg


def upgrade(target_revision: str = "head") -> None:
    """Apply migrations up to ``target_revision`` on the configured ``DB_URL``."""
    command.upgrade(alembic_config(), target_revision)


def schema_differences(engine: Engine) -> list:
    """Return the Alembic operations needed to bring ``engine`` in line with the models.

    An empty list means the live schema matches ``luckydraw.models``.
    """
    from ..models import Base

    with engine.connect() as connection:
        context = MigrationContext.configure(
            connection=connection,
            opts={
                "compare_type": True,
                "compare_server_default": True,
                "render_as_batch": connection.dialect.name == "sqlite",
            },
        )
        migration = ag_api.produce_migrations(context, Base.metadata)

    upgrade_ops = migration.upgrade_ops
    if upgrade_ops is None:
        raise RuntimeError("Alembic produced no upgrade operations")
    return list(upgrade_ops.ops or [])


def describe_operations(ops, indent: int = 0) -> Iterator[str]:
    """Yield one indented line per operation, descending into nested ops."""
    prefix = "  " * indent
    for op in ops:
        yield f"{prefix}- {op}"
        sub_ops = getattr(op, "ops", None)
        if sub_ops:
            yield from describe_operations(sub_ops, indent + 1)


__all__ = ["alembic_config", "describe_operations", "schema_differences", "upgrade"]
