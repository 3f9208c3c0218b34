"""Root conftest: shared database, facade, and front-end client fixtures.

Invariants:
    - Every test gets a fresh SQLite database file (tmp_path), schema already ensured
    - The module-level db_manager singleton is patched so both FastAPI apps
      and their dependencies resolve to the test manager
    - rest_client and rpc_client talk to the SAME store (one manager)

Design Decisions:
    - File-backed SQLite over :memory:: each session gets its own connection,
      matching production pooling; StaticPool would share one connection and
      let one session's rollback undo another's pending write
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient

# Ensure tests never pick up a developer's local database
os.environ.setdefault("MAILINGLST_DB", "sqlite+aiosqlite:///:memory:")

import mailing_list.infrastructure.database as db_module  # noqa: E402
from mailing_list.infrastructure.database import DatabaseSessionManager  # noqa: E402
from mailing_list.infrastructure.subscriber_store import SubscriberStore  # noqa: E402
from mailing_list.services.subscriber_service import SubscriberService  # noqa: E402


@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite'}",
    )
    await manager.ensure_schema()
    original_manager = db_module.db_manager
    db_module.db_manager = manager
    yield manager
    db_module.db_manager = original_manager
    await manager.close()


@pytest.fixture
def store(db_manager):
    return SubscriberStore(db_manager)


@pytest.fixture
def service(store):
    return SubscriberService(store)


@pytest.fixture
async def rest_client(db_manager):
    """REST front-end client bound to the test manager."""
    from mailing_list.main import app
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def rpc_client(db_manager):
    """JSON-RPC front-end client bound to the same test manager."""
    from mailing_list.rpc_main import app
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
