"""Alembicマイグレーション実行環境(非同期エンジン)."""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel

from company_api.database import model  # noqa: F401  モデルをメタデータに登録
from company_api.settings.settings import get_settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata


def get_url() -> str:
    """接続URLを取得. alembic.ini で指定があればそちらを優先."""
    return config.get_main_option("sqlalchemy.url") or (
        get_settings().postgres_driver_url
    )


def run_migrations_offline() -> None:
    """DBに接続せずSQLを出力する."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    """同期コネクション上でマイグレーションを実行."""
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """非同期エンジンでDBに接続してマイグレーションを実行."""
    connectable = create_async_engine(get_url())

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
