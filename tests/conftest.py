"""
Pytest configuration and fixtures.

Beanie is bound to an in-memory mongomock database per test, so every
test starts from empty collections and no MongoDB server is needed.
"""
import os

import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("MONGODB_DATABASE", "quizhub_test")

from main import make_app  # noqa: E402
from quizhub.core import database  # noqa: E402
from quizhub.core.config import load_settings  # noqa: E402
from quizhub.helpers.jwt_handler import JWT  # noqa: E402
from quizhub.models.user import User, UserRoleEnum  # noqa: E402


@pytest.fixture
async def db():
    """Fresh in-memory database with Beanie initialised."""
    await database.init_db(load_settings(), mongo_client=AsyncMongoMockClient())
    yield database.db
    database.client = None
    database.db = None


@pytest.fixture
async def client(db):
    app = make_app(init_database=False)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


async def _create_user(username: str, role: UserRoleEnum = UserRoleEnum.USER) -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        password="not-a-real-hash",
        role=role,
    )
    await user.insert()
    return user


@pytest.fixture
async def user(db):
    return await _create_user("alice")


@pytest.fixture
async def other_user(db):
    return await _create_user("bob")


@pytest.fixture
async def admin(db):
    return await _create_user("root", UserRoleEnum.ADMIN)


@pytest.fixture
def make_user(db):
    return _create_user


def auth_headers(user: User) -> dict:
    token = JWT().encode(str(user.id), user.role.value)
    return {"Authorization": f"Bearer {token}"}


def quiz_payload(question_count: int = 2, **overrides) -> dict:
    """Quiz body where option 0 is the correct answer of every question."""
    payload = {
        "title": "Python basics",
        "description": "Warm-up questions",
        "category": "programming",
        "difficulty": "easy",
        "timeLimit": 10,
        "isPublished": True,
        "questions": [
            {
                "text": f"Question {index + 1}",
                "options": [
                    {"text": "right", "isCorrect": True},
                    {"text": "wrong", "isCorrect": False},
                    {"text": "also wrong", "isCorrect": False},
                ],
            }
            for index in range(question_count)
        ],
    }
    payload.update(overrides)
    return payload


def answers_with_correct(question_count: int, correct: int) -> list:
    """The first `correct` answers pick the right option, the rest a wrong one."""
    return [
        {"questionIndex": index, "selectedOption": 0 if index < correct else 1}
        for index in range(question_count)
    ]


@pytest.fixture
def create_quiz(client):
    async def _create(owner: User, **overrides) -> dict:
        question_count = overrides.pop("question_count", 2)
        response = await client.post(
            "/quizzes",
            json=quiz_payload(question_count, **overrides),
            headers=auth_headers(owner),
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
