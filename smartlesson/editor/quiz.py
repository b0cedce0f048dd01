from typing import List, Optional

from smartlesson.client.api_client import SmartLessonClient
from smartlesson.core.errors import InvalidResponseError, SmartLessonError, ValidationFailed
from smartlesson.core.logging import logger
from smartlesson.editor.notices import NoticeBoard
from smartlesson.schemas.lesson import LEARNER_LEVELS, LessonContent
from smartlesson.schemas.quiz import MAX_QUESTIONS, MIN_QUESTIONS, Quiz, QuizQuestion


def question_count_allowed(num_questions: int) -> bool:
    return MIN_QUESTIONS <= num_questions <= MAX_QUESTIONS


class QuizGenerationFlow:
    """Requests a quiz for a lesson plan from its topic"""

    def __init__(self, client: SmartLessonClient, plan_id: Optional[str], lesson: Optional[LessonContent],
                 notices: Optional[NoticeBoard] = None):
        self.client = client
        self.plan_id = plan_id
        self.lesson = lesson
        self.notices = notices if notices is not None else NoticeBoard()
        self.quiz: Optional[Quiz] = None
        self.is_generating = False

    def generate(self, num_questions: int = 5, learner_level: str = "on-track") -> Optional[Quiz]:
        if not self.plan_id or self.lesson is None:
            self.notices.error("Error", "Lesson data is missing.", blocking=True)
            return None
        if not question_count_allowed(num_questions):
            message = f"Number of questions must be between {MIN_QUESTIONS} and {MAX_QUESTIONS}."
            self.notices.error("Validation Error", message)
            raise ValidationFailed({"numQuestions": message})
        if learner_level not in LEARNER_LEVELS:
            raise ValidationFailed({"learnerLevel": f"Learner level must be one of {', '.join(LEARNER_LEVELS)}."})

        topics = [self.lesson.lesson_topic or "General Knowledge"]
        self.is_generating = True
        try:
            data = self.client.generate_quiz(self.plan_id, topics, learner_level, num_questions)
            if not data or not data.get("quizId") or data.get("content") is None:
                raise InvalidResponseError("Invalid response from quiz generation function.")
            quiz = Quiz(
                id=data["quizId"],
                plan_id=data.get("planId") or self.plan_id,
                content=data["content"],
                parameters={"topics": topics, "learnerLevel": learner_level, "numQuestions": num_questions},
            )
        except (SmartLessonError, ValueError) as e:
            logger.error(f"Error generating quiz: {e}")
            self.notices.error("Quiz Generation Failed", str(e) or "Could not generate quiz. Please try again.")
            return None
        finally:
            self.is_generating = False

        self.quiz = quiz
        self.notices.success("Success!", "Quiz generated successfully.")
        return quiz


class QuizEditor:
    """Per-question editing with one bulk save for the whole quiz.

    Answers are stored by value, so every choice edit keeps ``answer``
    pointing at an existing choice (or the empty string).
    """

    def __init__(self, quiz: Optional[Quiz], client: SmartLessonClient, notices: Optional[NoticeBoard] = None):
        self.quiz = quiz.model_copy(deep=True) if quiz else None
        self.client = client
        self.notices = notices if notices is not None else NoticeBoard()
        self.editing_index: Optional[int] = None
        self.is_saving = False

    @property
    def questions(self) -> List[QuizQuestion]:
        return self.quiz.content if self.quiz else []

    def start_editing(self, index: int) -> None:
        self._question(index)
        self.editing_index = index

    def stop_editing(self) -> None:
        self.editing_index = None

    def _question(self, index: int) -> QuizQuestion:
        if self.quiz is None:
            raise RuntimeError("No quiz has been generated for this lesson yet.")
        return self.quiz.content[index]

    def set_question_text(self, index: int, text: str) -> None:
        self._question(index).question = text

    def set_choice(self, index: int, choice_index: int, value: str) -> None:
        question = self._question(index)
        previous = question.choices[choice_index]
        choices = list(question.choices)
        choices[choice_index] = value
        question.choices = choices
        if question.answer == previous:
            question.answer = value

    def add_choice(self, index: int) -> None:
        question = self._question(index)
        question.choices = [*question.choices, ""]

    def remove_choice(self, index: int, choice_index: int) -> bool:
        question = self._question(index)
        if len(question.choices) <= 1:
            return False
        removed = question.choices[choice_index]
        remaining = [c for i, c in enumerate(question.choices) if i != choice_index]
        if question.answer == removed:
            question.answer = next((c for c in remaining if c != removed), "")
        question.choices = remaining
        return True

    def set_answer(self, index: int, value: str) -> None:
        question = self._question(index)
        if value not in question.choices:
            raise ValueError(f"{value!r} is not one of the choices")
        question.answer = value

    def save_all(self) -> bool:
        if self.quiz is None or not self.quiz.id:
            self.notices.error("Error", "No quiz data to save.", blocking=True)
            return False

        self.is_saving = True
        try:
            saved = self.client.update_quiz(self.quiz.id, self.quiz.content)
        except SmartLessonError as e:
            logger.error(f"Error saving quiz: {e}")
            self.notices.error("Save Failed", str(e) or "Could not save quiz.")
            return False
        finally:
            self.is_saving = False

        self.quiz = saved
        self.editing_index = None
        self.notices.success("Success!", "Quiz saved successfully.")
        return True
