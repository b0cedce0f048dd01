import pytest

from smartlesson.core.errors import RemoteInvocationError
from smartlesson.editor.preview import LessonPreview
from smartlesson.editor.section_editor import SectionEditor
from smartlesson.editor.sections import UNSUPPORTED_MESSAGE
from smartlesson.schemas.lesson import LESSON_CONTENT_KEYS, LessonContent


@pytest.fixture
def preview(api, lesson):
    return LessonPreview(lesson["id"], LessonContent.model_validate(lesson), api)


def test_every_section_has_an_editor(preview):
    assert list(preview.sections) == list(LESSON_CONTENT_KEYS)


def test_save_without_changes_is_a_noop(preview, lesson):
    """Nothing is sent and nothing changes when the draft equals the committed value"""
    for key in LESSON_CONTENT_KEYS:
        editor = preview.section(key)
        editor.begin_edit()
        assert not editor.can_save
        assert editor.save() is False
        assert editor.committed == lesson[key]
    assert preview.notices.items == []


def test_cancel_restores_committed_value(preview, lesson):
    topic = preview.section("lessonTopic")
    topic.begin_edit()
    topic.set_text("Something else")
    topic.cancel()
    assert topic.draft == lesson["lessonTopic"]
    assert not topic.is_editing

    materials = preview.section("materialsNeeded")
    materials.begin_edit()
    materials.add_material("Glue")
    materials.remove_material(0)
    materials.cancel()
    assert materials.draft == lesson["materialsNeeded"]

    activities = preview.section("mainActivities")
    activities.begin_edit()
    activities.update_activity(0, "title", "Changed")
    activities.add_activity()
    activities.cancel()
    assert activities.draft == lesson["mainActivities"]

    diff = preview.section("differentiations")
    diff.begin_edit()
    diff.set_differentiation("accommodations", "Extra time")
    diff.cancel()
    assert diff.draft == lesson["differentiations"]

    choice = preview.section("assessmentType")
    choice.begin_edit()
    choice.set_choice("peer")
    choice.cancel()
    assert choice.draft == lesson["assessmentType"]


def test_toggle_edit(preview):
    editor = preview.section("conclusion")
    editor.toggle_edit()
    assert editor.is_editing and editor.is_open
    editor.set_text("changed")
    editor.toggle_edit()
    assert not editor.is_editing
    assert not editor.has_unsaved_changes


def test_save_replaces_only_its_section(preview, lesson):
    editor = preview.section("conclusion")
    editor.begin_edit()
    editor.set_text("Learners write a one-line summary.")
    assert editor.save() is True

    saved = preview.content.to_document()
    assert saved["conclusion"] == "Learners write a one-line summary."
    assert {k: v for k, v in saved.items() if k != "conclusion"} == \
        {k: v for k, v in lesson.items() if k != "conclusion"}
    assert not editor.is_editing
    assert editor.committed == "Learners write a one-line summary."
    assert preview.notices.latest.title == "Saved!"


def test_empty_topic_filled_in(api, lesson):
    content = LessonContent.model_validate({**lesson, "lessonTopic": ""})
    preview = LessonPreview(lesson["id"], content, api)
    editor = preview.section("lessonTopic")
    assert editor.render() == "Not specified"

    editor.begin_edit()
    editor.set_text("Fractions")
    assert editor.save() is True

    stored = api.get_lesson(lesson["id"])["content"]
    assert stored["lessonTopic"] == "Fractions"
    assert {k: v for k, v in stored.items() if k != "lessonTopic"} == \
        {k: v for k, v in lesson.items() if k != "lessonTopic"}


def test_remove_only_material(api, lesson):
    content = LessonContent.model_validate({**lesson, "materialsNeeded": ["Whiteboard"]})
    preview = LessonPreview(lesson["id"], content, api)
    editor = preview.section("materialsNeeded")

    editor.begin_edit()
    editor.remove_material(0)
    assert editor.save() is True
    assert editor.committed == []
    assert editor.render() == "None specified"
    assert editor.summary == "Empty"


def test_failed_save_keeps_draft(api, preview, monkeypatch):
    def broken(plan_id, content):
        raise RemoteInvocationError("update-lesson failed: boom", status_code=500)

    monkeypatch.setattr(api, "update_lesson", broken)
    editor = preview.section("evaluation")
    original = editor.committed
    editor.begin_edit()
    editor.set_text("Thumbs up, thumbs down")

    assert editor.save() is False
    assert editor.is_editing
    assert editor.draft == "Thumbs up, thumbs down"
    assert editor.committed == original
    assert "boom" in editor.error
    assert preview.notices.latest.title == "Save Failed"
    assert preview.notices.latest.destructive


def test_empty_update_response(api, preview, monkeypatch):
    monkeypatch.setattr(api, "update_lesson", lambda plan_id, content: {})
    editor = preview.section("evaluation")
    editor.begin_edit()
    editor.set_text("Quick quiz")
    assert editor.save() is False
    assert editor.error == "Update response was empty or invalid."


def test_missing_plan_id_blocks_save(api, lesson):
    preview = LessonPreview(None, LessonContent.model_validate(lesson), api)
    editor = preview.section("introduction")
    editor.begin_edit()
    editor.set_text("A new hook")

    assert editor.save() is False
    assert editor.error == "Plan ID is missing."
    assert len(preview.notices.items) == 1
    notice = preview.notices.latest
    assert notice.blocking
    assert notice.description == "Plan ID is missing. Cannot save."


def test_deleted_plan_reports_not_found(api, lesson):
    preview = LessonPreview("plan-that-was-deleted", LessonContent.model_validate(lesson), api)
    editor = preview.section("conclusion")
    editor.begin_edit()
    editor.set_text("Wrap up")

    assert editor.save() is False
    assert editor.is_editing
    assert editor.draft == "Wrap up"
    assert [n.title for n in preview.notices.items] == ["Lesson plan not found"]


def test_text_is_capped(preview):
    editor = preview.section("learningObjective")
    editor.begin_edit()
    editor.set_text("x" * 250)
    assert len(editor.draft) == 200
    assert editor.render().endswith("200/200")


def test_add_material_dedupes(preview):
    editor = preview.section("materialsNeeded")
    editor.begin_edit()
    assert editor.add_material("  Glue  ") is True
    assert editor.add_material("Glue") is False
    assert editor.add_material("   ") is False
    assert editor.draft.count("Glue") == 1


def test_last_activity_cannot_be_removed(preview):
    editor = preview.section("mainActivities")
    editor.begin_edit()
    while len(editor.draft) > 1:
        assert editor.remove_activity(0) is True
    assert editor.remove_activity(0) is False
    assert len(editor.draft) == 1
    assert "[Remove Activity]" not in editor.render()


def test_differentiations_are_closed(preview):
    editor = preview.section("differentiations")
    editor.begin_edit()
    with pytest.raises(KeyError):
        editor.set_differentiation("giftedLearners", "x")
    editor.set_differentiation("strugglingLearners", "y" * 300)
    assert len(editor.draft["strugglingLearners"]) == 200


def test_assessment_choice(preview):
    editor = preview.section("assessmentType")
    editor.begin_edit()
    with pytest.raises(ValueError):
        editor.set_choice("exam")
    editor.set_choice("self")
    assert editor.save() is True
    assert preview.content.assessment_type == "self"
    assert editor.render() == "Self"


def test_edits_require_edit_mode_and_kind(preview):
    with pytest.raises(RuntimeError):
        preview.section("conclusion").set_text("x")
    editor = preview.section("conclusion")
    editor.begin_edit()
    with pytest.raises(TypeError):
        editor.add_material("Glue")


def test_unknown_section_has_no_edit_path(preview):
    editor = SectionEditor(
        plan_id=preview.plan_id,
        key="homework",
        committed="Read chapter 2",
        get_full_content=preview.get_full_content,
        on_save=preview.save_section,
    )
    editor.begin_edit()
    assert editor.render() == UNSUPPORTED_MESSAGE
    assert editor.summary == "No data"


def test_summaries(preview):
    assert preview.section("materialsNeeded").summary == "3 items"
    assert preview.section("differentiations").summary == "4 properties"
    long = preview.section("learningObjective").summary
    assert len(long) <= 63
