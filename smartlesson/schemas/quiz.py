from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from smartlesson.core.config import settings
from smartlesson.schemas.lesson import CamelModel, LearnerLevel

MIN_QUESTIONS = settings.min_quiz_questions
MAX_QUESTIONS = settings.max_quiz_questions


class QuizQuestion(BaseModel):
    question: str
    choices: List[str]
    answer: str  # compared by value against choices


class GenerateQuizRequest(CamelModel):
    plan_id: str = Field(..., min_length=1)
    topics: List[str] = Field(..., min_length=1)
    learner_level: LearnerLevel
    num_questions: int = Field(default=5, ge=MIN_QUESTIONS, le=MAX_QUESTIONS)


class GenerateQuizResponse(CamelModel):
    quiz_id: str
    content: List[QuizQuestion]
    plan_id: str


class UpdateQuizRequest(CamelModel):
    quiz_id: str = Field(..., min_length=1)
    content: List[QuizQuestion]


class Quiz(BaseModel):
    """Row shape of ``quizzes``"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    plan_id: str
    content: List[QuizQuestion]
    parameters: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None


class QuizSummary(Quiz):
    lesson_topic: str = "N/A"
    lesson_subject: Optional[str] = None
    lesson_grade: Optional[str] = None
