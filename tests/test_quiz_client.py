from __future__ import annotations

import httpx
import pytest

from quiz_tutor.cli.export import export_question_bank
from quiz_tutor.client.errors import ClassifiedError, ErrorKind
from quiz_tutor.client.quiz_client import QuizClient
from quiz_tutor.client.resilience import RetryConfig
from quiz_tutor.web.app import create_app

BASE_URL = "http://quiz.test"


class NoSleep:
    def __init__(self):
        self.calls = 0

    async def __call__(self, seconds: float) -> None:
        self.calls += 1


@pytest.fixture
async def quiz_client(test_config):
    app = create_app(test_config)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport) as http_client:
        async with QuizClient(
            BASE_URL, client=http_client, sleep=NoSleep()
        ) as client:
            yield client


async def seed_category(client: QuizClient, category_id: str = "python") -> None:
    await client.create_category(
        {"id": category_id, "title": category_id.title(), "description": None}
    )


def question_payload(**overrides):
    payload = {
        "category_id": "python",
        "level_id": "junior",
        "text": "What does len([1, 2]) return?",
        "options": ["1", "2", "3"],
        "correct_answer": 1,
        "explanation": "Two elements",
    }
    payload.update(overrides)
    return payload


class TestQuizFlow:
    async def test_levels_are_seeded(self, quiz_client):
        levels = await quiz_client.get_levels()
        assert [level["id"] for level in levels] == ["junior", "middle", "senior"]

    async def test_create_and_take_quiz(self, quiz_client):
        await seed_category(quiz_client)
        created = await quiz_client.create_question(question_payload())

        assert created["message"] == "Question created"
        assert isinstance(created["id"], int)

        questions = await quiz_client.get_questions("python", "junior")
        assert len(questions) == 1
        question = questions[0]
        assert sorted(question["options"]) == ["1", "2", "3"]
        assert question["options"][question["correct_answer"]] == "2"

    async def test_get_questions_with_limit(self, quiz_client):
        await seed_category(quiz_client)
        for index in range(4):
            await quiz_client.create_question(question_payload(text=f"Q{index}"))

        questions = await quiz_client.get_questions("python", "junior", limit=2)
        assert len(questions) == 2

    async def test_admin_listing_filters(self, quiz_client):
        await seed_category(quiz_client)
        await seed_category(quiz_client, "sql")
        await quiz_client.create_question(question_payload(text="List comprehension"))
        await quiz_client.create_question(
            question_payload(category_id="sql", text="JOIN types")
        )

        assert len(await quiz_client.get_all_questions()) == 2
        found = await quiz_client.get_all_questions(search="join")
        assert [question["text"] for question in found] == ["JOIN types"]
        found = await quiz_client.get_all_questions(
            category_id="python", level_id="all"
        )
        assert [question["text"] for question in found] == ["List comprehension"]

    async def test_update_and_delete_question(self, quiz_client):
        await seed_category(quiz_client)
        created = await quiz_client.create_question(question_payload())

        result = await quiz_client.update_question(
            created["id"], question_payload(text="Updated")
        )
        assert result == {"message": "Question updated"}

        result = await quiz_client.delete_question(created["id"])
        assert result == {"message": "Question deleted"}
        assert await quiz_client.get_all_questions() == []

    async def test_category_crud(self, quiz_client):
        await seed_category(quiz_client)
        await quiz_client.update_category(
            "python", {"title": "Python 3", "description": "Core language"}
        )

        categories = await quiz_client.get_categories()
        assert categories[0]["title"] == "Python 3"

        await quiz_client.delete_category("python")
        assert await quiz_client.get_categories() == []

    async def test_export_question_bank(self, quiz_client):
        await seed_category(quiz_client)
        await quiz_client.create_question(question_payload())

        bank = await export_question_bank(quiz_client)

        assert [category["id"] for category in bank["categories"]] == ["python"]
        assert len(bank["levels"]) == 3
        assert len(bank["questions"]) == 1


class TestErrors:
    async def test_missing_question_is_client_error(self, quiz_client):
        with pytest.raises(ClassifiedError) as exc_info:
            await quiz_client.delete_question(999)

        assert exc_info.value.kind == ErrorKind.HTTP_CLIENT
        assert exc_info.value.status_code == 404
        assert quiz_client.fetcher._sleep.calls == 0

    async def test_duplicate_category_conflict(self, quiz_client):
        await seed_category(quiz_client)

        with pytest.raises(ClassifiedError) as exc_info:
            await seed_category(quiz_client)

        assert exc_info.value.status_code == 409

    async def test_invalid_question_rejected(self, quiz_client):
        await seed_category(quiz_client)

        with pytest.raises(ClassifiedError) as exc_info:
            await quiz_client.create_question(question_payload(text=""))

        assert exc_info.value.status_code == 400
        assert exc_info.value.retryable is False


class TestLogin:
    async def test_valid_credentials(self, quiz_client, test_config):
        admin = test_config.admin
        assert await quiz_client.login(admin.email, admin.password) is True

    async def test_invalid_credentials(self, quiz_client, test_config):
        assert await quiz_client.login(test_config.admin.email, "wrong") is False


class TestRetriesThroughClient:
    async def test_transient_failure_is_retried(self):
        statuses = [503, 200]
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(statuses.pop(0), json=[])

        sleep = NoSleep()
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        async with QuizClient(BASE_URL, client=http_client, sleep=sleep) as client:
            assert await client.get_categories() == []

        assert seen == ["/api/quiz/categories", "/api/quiz/categories"]
        assert sleep.calls == 1
        await http_client.aclose()

    async def test_login_is_never_retried(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = QuizClient(BASE_URL, client=http_client, sleep=NoSleep())

        with pytest.raises(ClassifiedError) as exc_info:
            await client.login("a@b.c", "pw")

        assert exc_info.value.kind == ErrorKind.HTTP_SERVER
        assert len(calls) == 1
        await http_client.aclose()

    async def test_network_failure_after_budget(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        sleep = NoSleep()
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = QuizClient(
            BASE_URL,
            client=http_client,
            retry_config=RetryConfig(max_retries=2),
            sleep=sleep,
            locale="en",
        )

        with pytest.raises(ClassifiedError) as exc_info:
            await client.get_levels()

        assert exc_info.value.kind == ErrorKind.NETWORK
        assert exc_info.value.message == "Unable to connect to the server"
        assert sleep.calls == 2
        await http_client.aclose()

    async def test_query_parameters(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url)
            return httpx.Response(200, json=[])

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = QuizClient(BASE_URL, client=http_client)

        await client.get_questions("python", "junior", limit=5)
        await client.get_all_questions(search="list")

        assert dict(seen[0].params) == {
            "categoryId": "python",
            "levelId": "junior",
            "limit": "5",
        }
        assert dict(seen[1].params) == {"search": "list"}
        await http_client.aclose()
