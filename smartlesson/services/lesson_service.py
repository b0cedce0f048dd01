from typing import List

from sqlalchemy.orm import Session

from smartlesson.core.errors import NotFoundError
from smartlesson.core.logging import logger
from smartlesson.models.records import LessonPlan, ResourceSuggestion, new_id, utcnow
from smartlesson.schemas.lesson import GenerateLessonRequest, LessonContent
from smartlesson.services.llm_service import GenerationService


def create_lesson_plan(db: Session, request: GenerateLessonRequest, generator: GenerationService) -> LessonPlan:
    """Generate a lesson document, store it, and seed resource suggestions"""
    params = request.model_dump(by_alias=True, mode="json")
    raw = generator.generate_lesson(params)

    plan_id = new_id()
    content = LessonContent.from_generated({**raw, "id": plan_id}, params)
    plan = LessonPlan(
        id=plan_id,
        user_id=request.user_id,
        content=content.to_document(),
        parameters=params,
    )
    db.add(plan)

    try:
        suggestions = generator.suggest_resources(plan.content, request.subject)
    except ValueError as e:
        logger.warning(f"Resource suggestions skipped for plan {plan_id}: {e}")
        suggestions = []
    for resource in suggestions:
        db.add(ResourceSuggestion(plan_id=plan_id, resource=resource))

    db.commit()
    db.refresh(plan)
    logger.info(f"✅ Lesson plan generated: {plan_id} ({len(suggestions)} resources)")
    return plan


def get_lesson_plan(db: Session, plan_id: str) -> LessonPlan:
    plan = db.get(LessonPlan, plan_id)
    if plan is None:
        raise NotFoundError("Lesson plan", plan_id)
    return plan


def replace_lesson_content(db: Session, plan_id: str, content: LessonContent) -> LessonPlan:
    """Whole-document replace; the stored id always equals the row id."""
    plan = get_lesson_plan(db, plan_id)
    document = content.model_copy(update={"id": plan_id}).to_document()
    plan.content = document
    plan.updated_at = utcnow()
    db.commit()
    db.refresh(plan)
    logger.info(f"Lesson plan {plan_id} updated")
    return plan


def list_lesson_plans(db: Session, user_id: str) -> List[LessonPlan]:
    return (
        db.query(LessonPlan)
        .filter(LessonPlan.user_id == user_id)
        .order_by(LessonPlan.created_at.desc())
        .all()
    )
