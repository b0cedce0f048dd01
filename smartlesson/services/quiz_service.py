from typing import List

from sqlalchemy.orm import Session

from smartlesson.core.errors import NotFoundError
from smartlesson.core.logging import logger
from smartlesson.models.records import LessonPlan, Quiz
from smartlesson.schemas.quiz import GenerateQuizRequest, QuizQuestion, QuizSummary
from smartlesson.services.lesson_service import get_lesson_plan
from smartlesson.services.llm_service import GenerationService


def _repair_answer(question: QuizQuestion) -> QuizQuestion:
    """Point a dangling answer at the first choice, or empty when there are none"""
    if question.answer not in question.choices:
        logger.warning(f"Generated answer {question.answer!r} is not a choice; using the first choice")
        question.answer = question.choices[0] if question.choices else ""
    return question


def create_quiz(db: Session, request: GenerateQuizRequest, generator: GenerationService) -> Quiz:
    get_lesson_plan(db, request.plan_id)

    raw_questions = generator.generate_quiz(request.topics, request.learner_level, request.num_questions)
    questions = [_repair_answer(QuizQuestion.model_validate(q)).model_dump() for q in raw_questions]

    quiz = Quiz(
        plan_id=request.plan_id,
        content=questions,
        parameters={
            "topics": request.topics,
            "learnerLevel": request.learner_level,
            "numQuestions": request.num_questions,
        },
    )
    db.add(quiz)
    db.commit()
    db.refresh(quiz)
    logger.info(f"Quiz stored successfully with ID: {quiz.id}")
    return quiz


def update_quiz_content(db: Session, quiz_id: str, content: List[QuizQuestion]) -> Quiz:
    quiz = db.get(Quiz, quiz_id)
    if quiz is None:
        raise NotFoundError("Quiz", quiz_id)
    quiz.content = [q.model_dump() for q in content]
    db.commit()
    db.refresh(quiz)
    logger.info(f"Quiz {quiz_id} saved with {len(content)} questions")
    return quiz


def list_quizzes_for_user(db: Session, user_id: str) -> List[QuizSummary]:
    """Quizzes across the user's plans, newest first, with lesson details"""
    rows = (
        db.query(Quiz, LessonPlan)
        .join(LessonPlan, Quiz.plan_id == LessonPlan.id)
        .filter(LessonPlan.user_id == user_id)
        .order_by(Quiz.created_at.desc())
        .all()
    )
    summaries = []
    for quiz, plan in rows:
        parameters = plan.parameters or {}
        summaries.append(QuizSummary(
            id=quiz.id,
            plan_id=quiz.plan_id,
            content=quiz.content,
            parameters=quiz.parameters,
            created_at=quiz.created_at,
            lesson_topic=(plan.content or {}).get("lessonTopic") or "Untitled Lesson",
            lesson_subject=parameters.get("subject"),
            lesson_grade=parameters.get("grade"),
        ))
    return summaries
