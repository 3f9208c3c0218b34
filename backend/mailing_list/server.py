"""Process Runner: boots the store and runs the JSON and JSON-RPC listeners concurrently.

Invariants:
    - The database is configured and ensure_schema() succeeds before any listener
      starts; either failure exits with status 1
    - Both listeners run as tasks on ONE event loop and share ONE session manager
    - The first listener to stop brings the whole process down (shared state)
    - A listener's SystemExit (uvicorn bind failure) becomes ListenerError inside
      its own task: it never escapes into the shared event loop
    - Exit status 0 only if every listener stopped cleanly

Design Decisions:
    - uvicorn Server objects over uvicorn.run(): two servers in one loop,
      shutdown coordinated through should_exit
    - log_config=None: uvicorn logs through the root handler set by setup_logging
"""

import asyncio
import logging
import sys
from typing import Protocol

from uvicorn import Config, Server

from mailing_list.config import Settings, get_settings, split_bind_address
from mailing_list.core.errors import ListenerError, PersistenceError
from mailing_list.infrastructure.database import close_db, init_db
from mailing_list.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


class Listener(Protocol):
    """The part of uvicorn.Server the runner relies on."""
    should_exit: bool

    async def serve(self) -> None: ...


def build_listener(app: str, bind: str, settings: Settings) -> Server:
    host, port = split_bind_address(bind)
    config = Config(
        app=app, host=host, port=port, reload=False,
        log_config=None, log_level=settings.log_level.lower(),
        access_log=settings.access_log,
    )
    return Server(config)


async def _run_listener(name: str, listener: Listener) -> None:
    logger.info(f"Starting {name} listener", extra={"listener": name})
    try:
        await listener.serve()
    except SystemExit as e:
        raise ListenerError(name, f"exited with status {e.code}")
    logger.info(f"{name} listener stopped", extra={"listener": name})


async def run_listeners(listeners: dict[str, Listener]) -> int:
    """Run every listener until the first one stops, then stop the rest."""
    tasks = {
        asyncio.create_task(_run_listener(name, listener), name=name): name
        for name, listener in listeners.items()
    }
    done, pending = await asyncio.wait(
        tasks, return_when=asyncio.FIRST_COMPLETED,
    )
    for listener in listeners.values():
        listener.should_exit = True
    if pending:
        await asyncio.wait(pending)

    exit_code = 0
    for task, name in tasks.items():
        if task.cancelled():
            exit_code = 1
            continue
        if exception := task.exception():
            logger.error(
                f"Listener {name} failed: {exception}",
                exc_info=exception, extra={"listener": name},
            )
            exit_code = 1
    return exit_code


async def serve(settings: Settings) -> int:
    """Boot the shared store, run both listeners, and return the exit status."""
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"using database '{settings.database_url}'")
    try:
        try:
            manager = init_db(
                settings.database_url,
                pool_size=settings.database_pool_size,
                max_overflow=settings.database_max_overflow,
            )
            await manager.ensure_schema()
        except PersistenceError as e:
            logger.critical(
                f"Cannot initialize database: {e.message}",
                extra={"error_code": e.code},
            )
            return 1

        return await run_listeners({
            "json": build_listener(
                "mailing_list.main:app", settings.bind_json, settings,
            ),
            "rpc": build_listener(
                "mailing_list.rpc_main:app", settings.bind_rpc, settings,
            ),
        })
    finally:
        await close_db()


def main() -> None:
    try:
        sys.exit(asyncio.run(serve(get_settings())))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
