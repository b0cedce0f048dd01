from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from smartlesson.core.logging import logger
from smartlesson.db.database import get_db
from smartlesson.schemas.lesson import (
    GenerateLessonRequest,
    LessonContent,
    LessonEnvelope,
    LessonPlanRecord,
    UpdateLessonRequest,
)
from smartlesson.services import lesson_service
from smartlesson.services.llm_service import GenerationService, get_generation_service

router = APIRouter(tags=["lessons"])


@router.post("/generate-lesson", response_model=LessonEnvelope)
async def generate_lesson(
    request: GenerateLessonRequest,
    db: Session = Depends(get_db),
    generator: GenerationService = Depends(get_generation_service),
):
    """Generate a lesson plan document and store it"""
    logger.info(f"Lesson plan - {request.subject}, Grade {request.grade}")
    try:
        plan = lesson_service.create_lesson_plan(db, request, generator)
    except (ValueError, SQLAlchemyError) as e:
        logger.error(f"Lesson plan error: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return LessonEnvelope(content=LessonContent.model_validate(plan.content))


@router.post("/update-lesson", response_model=LessonEnvelope)
async def update_lesson(request: UpdateLessonRequest, db: Session = Depends(get_db)):
    """Replace the whole document of an existing plan"""
    logger.info(f"Received update for planId: {request.plan_id}")
    try:
        plan = lesson_service.replace_lesson_content(db, request.plan_id, request.content)
    except SQLAlchemyError as e:
        logger.error(f"Update lesson error: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return LessonEnvelope(content=LessonContent.model_validate(plan.content))


@router.get("/lessons/{plan_id}", response_model=LessonPlanRecord)
async def get_lesson(plan_id: str, db: Session = Depends(get_db)):
    return lesson_service.get_lesson_plan(db, plan_id)


@router.get("/lessons", response_model=List[LessonPlanRecord])
async def list_lessons(user_id: str, db: Session = Depends(get_db)):
    return lesson_service.list_lesson_plans(db, user_id)
