import pytest

from smartlesson.core.errors import RemoteInvocationError, ValidationFailed
from smartlesson.editor.notices import NoticeBoard
from smartlesson.editor.quiz import QuizEditor, QuizGenerationFlow, question_count_allowed
from smartlesson.schemas.lesson import LessonContent
from smartlesson.schemas.quiz import Quiz


class RecordingClient:
    """Answers generate-quiz locally and remembers each call"""

    def __init__(self):
        self.calls = []

    def generate_quiz(self, plan_id, topics, learner_level, num_questions):
        self.calls.append((plan_id, topics, learner_level, num_questions))
        return {
            "quizId": "quiz-1",
            "planId": plan_id,
            "content": [
                {"question": f"Q{i}", "choices": ["a", "b"], "answer": "a"} for i in range(num_questions)
            ],
        }


def make_quiz(choices=("a", "b", "c"), answer="b"):
    return Quiz(
        id="quiz-1",
        plan_id="plan-1",
        content=[{"question": "Pick one", "choices": list(choices), "answer": answer}],
    )


def test_question_count_bounds():
    assert not question_count_allowed(2)
    assert question_count_allowed(3)
    assert question_count_allowed(10)
    assert not question_count_allowed(11)


@pytest.mark.parametrize("num_questions", [2, 11])
def test_out_of_range_count_sends_nothing(num_questions):
    client = RecordingClient()
    flow = QuizGenerationFlow(client, "plan-1", LessonContent(lesson_topic="Fractions"))
    with pytest.raises(ValidationFailed) as exc:
        flow.generate(num_questions=num_questions)
    assert "numQuestions" in exc.value.errors
    assert client.calls == []


@pytest.mark.parametrize("num_questions", [3, 10])
def test_in_range_count_is_sent(num_questions):
    client = RecordingClient()
    flow = QuizGenerationFlow(client, "plan-1", LessonContent(lesson_topic="Fractions"))
    quiz = flow.generate(num_questions=num_questions, learner_level="advanced")
    assert len(quiz.content) == num_questions
    assert client.calls == [("plan-1", ["Fractions"], "advanced", num_questions)]


def test_topic_falls_back_to_general_knowledge():
    client = RecordingClient()
    QuizGenerationFlow(client, "plan-1", LessonContent()).generate()
    assert client.calls[0][1] == ["General Knowledge"]


def test_invalid_learner_level():
    client = RecordingClient()
    flow = QuizGenerationFlow(client, "plan-1", LessonContent(lesson_topic="Fractions"))
    with pytest.raises(ValidationFailed):
        flow.generate(learner_level="expert")
    assert client.calls == []


def test_missing_lesson_data():
    notices = NoticeBoard()
    flow = QuizGenerationFlow(RecordingClient(), None, None, notices)
    assert flow.generate() is None
    assert notices.latest.blocking
    assert notices.latest.description == "Lesson data is missing."


def test_response_without_quiz_id():
    class EmptyClient:
        def generate_quiz(self, *args):
            return {"content": []}

    notices = NoticeBoard()
    flow = QuizGenerationFlow(EmptyClient(), "plan-1", LessonContent(lesson_topic="x"), notices)
    assert flow.generate() is None
    assert notices.latest.title == "Quiz Generation Failed"


def test_remove_choice_keeps_answer_valid():
    """Removing any choice leaves the answer among the remaining choices or empty"""
    for answer in ("a", "b", "c"):
        for index in range(3):
            editor = QuizEditor(make_quiz(answer=answer), client=None)
            assert editor.remove_choice(0, index) is True
            question = editor.questions[0]
            assert len(question.choices) == 2
            assert question.answer in question.choices or question.answer == ""
            if answer != ("a", "b", "c")[index]:
                assert question.answer == answer


def test_remove_duplicate_answer_choice():
    editor = QuizEditor(make_quiz(choices=("x", "x"), answer="x"), client=None)
    editor.remove_choice(0, 0)
    assert editor.questions[0].choices == ["x"]
    assert editor.questions[0].answer == ""


def test_last_choice_cannot_be_removed():
    editor = QuizEditor(make_quiz(choices=("only",), answer="only"), client=None)
    assert editor.remove_choice(0, 0) is False
    assert editor.questions[0].choices == ["only"]


def test_set_choice_follows_answer():
    editor = QuizEditor(make_quiz(answer="b"), client=None)
    editor.set_choice(0, 1, "B!")
    assert editor.questions[0].answer == "B!"
    editor.set_choice(0, 0, "A!")
    assert editor.questions[0].answer == "B!"


def test_set_answer_must_be_a_choice():
    editor = QuizEditor(make_quiz(), client=None)
    with pytest.raises(ValueError):
        editor.set_answer(0, "z")
    editor.set_answer(0, "c")
    assert editor.questions[0].answer == "c"


def test_editor_copies_quiz():
    quiz = make_quiz()
    editor = QuizEditor(quiz, client=None)
    editor.set_question_text(0, "Changed")
    assert quiz.content[0].question == "Pick one"


def test_save_without_quiz():
    notices = NoticeBoard()
    editor = QuizEditor(None, client=None, notices=notices)
    assert editor.save_all() is False
    assert notices.latest.blocking
    assert notices.latest.description == "No quiz data to save."


def test_save_failure_keeps_edits():
    class FailingClient:
        def update_quiz(self, quiz_id, content):
            raise RemoteInvocationError("update-quiz failed: down", status_code=503)

    notices = NoticeBoard()
    editor = QuizEditor(make_quiz(), FailingClient(), notices)
    editor.start_editing(0)
    editor.set_question_text(0, "Edited")
    assert editor.save_all() is False
    assert editor.questions[0].question == "Edited"
    assert editor.editing_index == 0
    assert notices.latest.title == "Save Failed"


def test_generate_edit_and_save(api, lesson):
    lesson_content = LessonContent.model_validate(lesson)
    quiz = QuizGenerationFlow(api, lesson["id"], lesson_content).generate(num_questions=3)
    assert quiz.parameters["topics"] == [lesson["lessonTopic"]]

    editor = QuizEditor(quiz, api)
    editor.start_editing(1)
    editor.set_question_text(1, "Which shape has three sides?")
    editor.set_choice(1, 0, "Triangle")
    editor.set_answer(1, "Triangle")
    assert editor.save_all() is True
    assert editor.editing_index is None

    stored = [q for q in api.list_quizzes("teacher-1") if q["id"] == quiz.id]
    assert len(stored) == 1
    second = stored[0]["content"][1]
    assert second["question"] == "Which shape has three sides?"
    assert second["answer"] == "Triangle"
    assert "Triangle" in second["choices"]
