from __future__ import annotations

import asyncio
import os
from typing import Optional

import typer
import uvicorn

from portfolio_api.app import setup_logging
from portfolio_api.db.nosql import RESOURCE_KINDS, IdentifierPolicy, ResourceStore
from portfolio_api.db.nosql.mongo import connect_mongo, get_mongo_settings

app = typer.Typer(no_args_is_help=True, add_completion=False)


@app.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(8888, envvar="PORT", help="Bind port"),
    reload: bool = typer.Option(False, help="Reload on code changes (development only)"),
    log_level: Optional[str] = typer.Option(None, help="Override LOG_LEVEL"),
):
    """Run the API with uvicorn."""
    if log_level:
        # portfolio_api.main configures logging on import
        os.environ["LOG_LEVEL"] = log_level
    uvicorn.run("portfolio_api.main:app", host=host, port=port, reload=reload, log_config=None)


async def _init_collections() -> dict[str, int]:
    settings = get_mongo_settings()
    conn = await connect_mongo(settings)
    policy = IdentifierPolicy(legacy_canonical_fallback=settings.legacy_canonical_fallback)
    counts: dict[str, int] = {}
    try:
        for kind in RESOURCE_KINDS:
            store = ResourceStore(kind, conn.db, policy=policy)
            await store.initialize()
            counts[kind.name] = await store.count()
    finally:
        conn.close()
    return counts


@app.command("init-collections")
def init_collections():
    """Check every resource collection once, without seeding data."""
    setup_logging()
    for name, count in asyncio.run(_init_collections()).items():
        typer.echo(f"{name}: {count} documents")


def main():  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
