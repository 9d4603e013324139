import os
import tempfile

import pytest

# Point the app at a throwaway database before anything imports app.config
_TEST_DIR = tempfile.mkdtemp(prefix="survey-report-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test.sqlite3"
os.environ["DATA_DIR"] = _TEST_DIR
os.environ["UPLOADS_DIR"] = os.path.join(_TEST_DIR, "uploads")


@pytest.fixture(autouse=True, scope="session")
def setup_test_db():
    import asyncio

    # Disable API key auth for tests
    from app.config import settings
    settings.api_key = ""
    os.makedirs(settings.uploads_dir, exist_ok=True)

    from app.database import create_tables, async_session, engine
    from app.seed import seed_data

    async def _setup():
        await create_tables()
        async with async_session() as session:
            await seed_data(session)
        await engine.dispose()

    asyncio.run(_setup())
