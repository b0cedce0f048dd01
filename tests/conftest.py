import os

# Must be set before smartlesson.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LLM_PROVIDER"] = "mock"
os.environ.setdefault("LOG_FILE", "/tmp/smartlesson-test.log")

from datetime import date

import pytest
from fastapi.testclient import TestClient

from smartlesson.client.api_client import SmartLessonClient
from smartlesson.main import app


@pytest.fixture
def http():
    return TestClient(app)


@pytest.fixture
def api(http):
    return SmartLessonClient(http, user_id="teacher-1")


@pytest.fixture
def lesson_payload():
    return {
        "user_id": "teacher-1",
        "grade": "5",
        "date": date.today().isoformat(),
        "subject": "Mathematics",
        "themeOfWeek": "Patterns",
        "notes": "",
        "assessmentType": "teacher",
        "learnerLevel": "on-track",
    }


@pytest.fixture
def lesson(api, lesson_payload):
    """A freshly generated lesson document"""
    return api.generate_lesson(lesson_payload)["content"]
