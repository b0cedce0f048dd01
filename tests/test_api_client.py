import pytest

from smartlesson.client.api_client import SmartLessonClient
from smartlesson.core.errors import NotFoundError, RemoteInvocationError, ValidationFailed


def test_missing_lesson_carries_its_id(api):
    with pytest.raises(NotFoundError) as exc:
        api.get_lesson("no-such-plan")
    assert exc.value.kind == "Lesson plan"
    assert exc.value.identifier == "no-such-plan"


def test_missing_quiz_carries_its_id(api):
    with pytest.raises(NotFoundError) as exc:
        api.update_quiz("no-such-quiz", [])
    assert exc.value.kind == "Quiz"
    assert exc.value.identifier == "no-such-quiz"


def test_validation_errors_are_per_field(api, lesson):
    with pytest.raises(ValidationFailed) as exc:
        api.generate_quiz(lesson["id"], ["Fractions"], "on-track", 11)
    assert "numQuestions" in exc.value.errors


def test_unauthorized_is_remote_error(http):
    with pytest.raises(RemoteInvocationError) as exc:
        SmartLessonClient(http).log_event("resource_clicked")
    assert exc.value.status_code == 401


def test_profile_round_trip(http):
    client = SmartLessonClient(http, user_id="client-profile")
    assert client.get_profile().full_name == ""

    saved = client.update_profile("Katherine Johnson", subjects=["Mathematics"], school_name="West End")
    assert saved.user_id == "client-profile"
    assert saved.subjects == ["Mathematics"]
    assert saved.bio is None
    assert client.get_profile().school_name == "West End"


def test_profile_name_too_short(http):
    client = SmartLessonClient(http, user_id="client-profile")
    with pytest.raises(ValidationFailed) as exc:
        client.update_profile("K")
    assert "full_name" in exc.value.errors
