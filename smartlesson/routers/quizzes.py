from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from smartlesson.core.logging import logger
from smartlesson.db.database import get_db
from smartlesson.schemas.quiz import (
    GenerateQuizRequest,
    GenerateQuizResponse,
    Quiz,
    QuizSummary,
    UpdateQuizRequest,
)
from smartlesson.services import quiz_service
from smartlesson.services.llm_service import GenerationService, get_generation_service

router = APIRouter(tags=["quizzes"])


@router.post("/generate-quiz", response_model=GenerateQuizResponse)
async def generate_quiz(
    request: GenerateQuizRequest,
    db: Session = Depends(get_db),
    generator: GenerationService = Depends(get_generation_service),
):
    """Generate multiple-choice questions for a lesson plan"""
    logger.info(f"Generating quiz - plan {request.plan_id}, {request.num_questions} questions")
    try:
        quiz = quiz_service.create_quiz(db, request, generator)
    except (ValueError, SQLAlchemyError) as e:
        logger.error(f"Quiz error: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return GenerateQuizResponse(quiz_id=quiz.id, content=quiz.content, plan_id=quiz.plan_id)


@router.post("/update-quiz", response_model=Quiz)
async def update_quiz(request: UpdateQuizRequest, db: Session = Depends(get_db)):
    """Save every question of a quiz at once"""
    try:
        return quiz_service.update_quiz_content(db, request.quiz_id, request.content)
    except SQLAlchemyError as e:
        logger.error(f"Update quiz error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/quizzes", response_model=List[QuizSummary])
async def list_quizzes(user_id: str, db: Session = Depends(get_db)):
    return quiz_service.list_quizzes_for_user(db, user_id)
