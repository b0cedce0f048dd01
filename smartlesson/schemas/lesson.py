"""
Lesson plan document schemas.

Function payloads travel as camelCase JSON (``lessonTopic``), while the
Python attributes stay snake_case. ``user_id`` keeps its column name on the
wire.
"""

from datetime import date as date_type, datetime
from typing import Any, Dict, List, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

AssessmentType = Literal["peer", "self", "teacher"]
LearnerLevel = Literal["struggling", "on-track", "advanced"]

ASSESSMENT_TYPES = get_args(AssessmentType)
LEARNER_LEVELS = get_args(LearnerLevel)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LessonActivity(CamelModel):
    title: str = ""
    description: str = ""


class Differentiations(CamelModel):
    """Closed record: exactly these four keys"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    struggling_learners: str = ""
    on_track_learners: str = ""
    advanced_learners: str = ""
    accommodations: str = ""


class LessonContent(CamelModel):
    id: str = ""
    lesson_topic: str = ""
    theme_of_week: str = ""
    learning_objective: str = ""
    materials_needed: List[str] = Field(default_factory=list)
    introduction: str = ""
    main_activities: List[LessonActivity] = Field(default_factory=list)
    differentiations: Differentiations = Field(default_factory=Differentiations)
    extension_activity: str = ""
    conclusion: str = ""
    evaluation: str = ""
    assessment_type: AssessmentType = "teacher"
    teacher_reflection: str = ""

    # Carried over from the generation form; not authoritative
    grade: Optional[str] = None
    date: Optional[str] = None
    learner_level: Optional[LearnerLevel] = None
    user_id: Optional[str] = Field(default=None, alias="user_id")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")

    @classmethod
    def from_generated(cls, raw: Dict[str, Any], fallback: Optional[Dict[str, Any]] = None) -> "LessonContent":
        """Build a complete document from generator output that may omit keys.

        ``fallback`` carries the generation request (camelCase keys) and fills
        theme, assessment type and the denormalized form fields.
        """
        fallback = fallback or {}
        raw = raw or {}
        diff = raw.get("differentiations")
        if not isinstance(diff, dict):
            diff = {}
        activities = [_activity(act) for act in (raw.get("mainActivities") or [])]
        return cls.model_validate({
            "id": raw.get("id") or "",
            "lessonTopic": raw.get("lessonTopic") or "N/A",
            "themeOfWeek": raw.get("themeOfWeek") or fallback.get("themeOfWeek") or "N/A",
            "learningObjective": raw.get("learningObjective") or "N/A",
            "materialsNeeded": _materials(raw.get("materialsNeeded")),
            "introduction": raw.get("introduction") or "N/A",
            "mainActivities": activities,
            "differentiations": {key: diff.get(key) or "" for key in DIFFERENTIATION_KEYS},
            "extensionActivity": raw.get("extensionActivity") or "",
            "conclusion": raw.get("conclusion") or "",
            "evaluation": raw.get("evaluation") or "",
            "assessmentType": _assessment_type(raw.get("assessmentType"), fallback.get("assessmentType")),
            "teacherReflection": raw.get("teacherReflection") or "",
            "grade": fallback.get("grade") or raw.get("grade"),
            "date": fallback.get("date") or raw.get("date"),
            "learnerLevel": fallback.get("learnerLevel") or raw.get("learnerLevel"),
            "user_id": fallback.get("user_id") or raw.get("user_id"),
        })


DIFFERENTIATION_KEYS = ("strugglingLearners", "onTrackLearners", "advancedLearners", "accommodations")


def _activity(act: Any) -> Dict[str, str]:
    if isinstance(act, str):
        return {"title": act or "Activity", "description": "No description"}
    if not isinstance(act, dict):
        act = {}
    return {
        "title": act.get("title") or "Activity",
        "description": act.get("description") or "No description",
    }


def _materials(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    return [str(item) for item in (value or []) if item]


def _assessment_type(value: Any, fallback: Any) -> str:
    for candidate in (value, fallback):
        if isinstance(candidate, str) and candidate.strip().lower() in ASSESSMENT_TYPES:
            return candidate.strip().lower()
    return "teacher"


# Rendering order of the editable sections
LESSON_CONTENT_KEYS = (
    "lessonTopic",
    "themeOfWeek",
    "learningObjective",
    "materialsNeeded",
    "introduction",
    "mainActivities",
    "differentiations",
    "extensionActivity",
    "conclusion",
    "evaluation",
    "assessmentType",
    "teacherReflection",
)

LESSON_SECTION_TITLES = {
    "lessonTopic": "Lesson Topic",
    "themeOfWeek": "Theme of the Week",
    "learningObjective": "Learning Objective(s)",
    "materialsNeeded": "Materials Needed",
    "introduction": "Introduction / Hook",
    "mainActivities": "Main Activities",
    "differentiations": "Differentiations & Support",
    "extensionActivity": "Extension Activity (Optional)",
    "conclusion": "Conclusion / Wrap-up",
    "evaluation": "Evaluation / Check for Understanding",
    "assessmentType": "Primary Assessment Type",
    "teacherReflection": "Teacher Reflection (Post-Lesson)",
}


# ============================================
# FUNCTION PAYLOADS
# ============================================

class GenerateLessonRequest(CamelModel):
    user_id: str = Field(..., alias="user_id", min_length=1)
    grade: str = Field(..., min_length=1)
    date: date_type
    subject: str = Field(..., min_length=1)
    theme_of_week: str = ""
    notes: str = ""
    assessment_type: AssessmentType
    learner_level: LearnerLevel


class LessonEnvelope(CamelModel):
    content: LessonContent


class UpdateLessonRequest(CamelModel):
    plan_id: str = Field(..., min_length=1)
    content: LessonContent


class LessonPlanRecord(BaseModel):
    """Row shape of ``lesson_plans``"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    content: Dict[str, Any]
    parameters: Dict[str, Any]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
