from datetime import date as date_type
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from smartlesson.client.api_client import SmartLessonClient
from smartlesson.core.errors import InvalidResponseError, SmartLessonError, ValidationFailed
from smartlesson.core.logging import logger
from smartlesson.editor.notices import NoticeBoard
from smartlesson.editor.preview import LessonPreview
from smartlesson.schemas.lesson import AssessmentType, LearnerLevel, LessonContent

REQUIRED_MESSAGES = {
    "grade": "Grade is required.",
    "date": "Date is required.",
    "subject": "Subject is required.",
    "assessment_type": "Assessment type is required.",
    "learner_level": "Learner level is required.",
}


class LessonForm(BaseModel):
    """Parameters collected before a lesson plan is generated"""
    model_config = ConfigDict(str_strip_whitespace=True)

    grade: str = Field(..., min_length=1)
    date: date_type
    subject: str = Field(..., min_length=1)
    theme_of_week: str = ""
    notes: str = ""
    assessment_type: AssessmentType
    learner_level: LearnerLevel

    @field_validator("date")
    @classmethod
    def not_in_past(cls, value: date_type) -> date_type:
        if value < date_type.today():
            raise ValueError("Date cannot be in the past.")
        return value

    @classmethod
    def parse(cls, **values: Any) -> "LessonForm":
        """Validate raw form values, raising field-level ``ValidationFailed``"""
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            errors = {}
            for err in e.errors():
                field = str(err["loc"][0]) if err["loc"] else "form"
                if err["type"] in ("missing", "string_too_short") and field in REQUIRED_MESSAGES:
                    errors[field] = REQUIRED_MESSAGES[field]
                else:
                    errors[field] = err["msg"].removeprefix("Value error, ")
            raise ValidationFailed(errors) from e

    def to_payload(self, user_id: str) -> Dict[str, Any]:
        return {
            "user_id": user_id,
            "grade": self.grade,
            "date": self.date.isoformat(),
            "subject": self.subject,
            "themeOfWeek": self.theme_of_week,
            "notes": self.notes,
            "assessmentType": self.assessment_type,
            "learnerLevel": self.learner_level,
        }


class LessonGenerationFlow:
    """Form submission -> generate-lesson -> editable preview"""

    def __init__(self, client: SmartLessonClient, user_id: Optional[str], notices: Optional[NoticeBoard] = None):
        self.client = client
        self.user_id = user_id
        self.notices = notices if notices is not None else NoticeBoard()
        self.preview: Optional[LessonPreview] = None
        self.is_generating = False

    def submit(self, form: LessonForm) -> Optional[LessonPreview]:
        if not self.user_id:
            self.notices.error(
                "Authentication Error", "You must be logged in to generate a lesson plan.", blocking=True
            )
            return None

        self.preview = None
        self.is_generating = True
        payload = form.to_payload(self.user_id)
        try:
            response = self.client.generate_lesson(payload)
            raw = (response or {}).get("content")
            if not raw:
                raise InvalidResponseError("The lesson generation returned no content.")
            if not raw.get("id"):
                raise InvalidResponseError("The generated lesson plan has no id.")
            content = LessonContent.from_generated(raw, payload)
        except (SmartLessonError, ValueError) as e:
            logger.error(f"Lesson generation failed: {e}")
            self.notices.error("Generation Failed", str(e) or "Could not generate lesson plan. Please try again.")
            return None
        finally:
            self.is_generating = False

        self.preview = LessonPreview(content.id, content, self.client, self.notices)
        self.notices.success("Success", "Lesson plan generated successfully!")
        return self.preview
