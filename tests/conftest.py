"""공용 테스트 픽스처 (임시 SQLite DB + ASGI 클라이언트)"""
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.main import app
from app.models import ExamToken, Student
from app.models.base import get_db, init_models


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def override_get_db(session_factory):
    async def _get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def asgi_transport(override_get_db):
    return ASGITransport(app=app)


@pytest_asyncio.fixture
async def client(asgi_transport):
    async with AsyncClient(transport=asgi_transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_token(test_db_session):
    async def _make_token(
        token: str = "ABCD1234",
        exam_type: str = "hiragana",
        exam_category: str = "hiragana-basic",
        difficulty: str = "beginner",
        used: bool = False,
    ) -> ExamToken:
        record = ExamToken(
            token=token,
            exam_type=exam_type,
            exam_category=exam_category,
            difficulty=difficulty,
            used=used,
        )
        test_db_session.add(record)
        await test_db_session.commit()
        return record

    return _make_token


@pytest.fixture
def make_student(test_db_session):
    async def _make_student(student_id: str = "student-1", name: str = "김민수", **overrides) -> Student:
        values = {
            "id": student_id,
            "name": name,
            "token": "ABCD1234",
            "exam_type": "hiragana",
            "exam_category": "hiragana-basic",
            "difficulty": "beginner",
            "start_time": datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc),
            "status": "active",
            "time_remaining": 20 * 60 * 1000,
            "current_question": 0,
        }
        values.update(overrides)
        record = Student(**values)
        test_db_session.add(record)
        await test_db_session.commit()
        return record

    return _make_student
