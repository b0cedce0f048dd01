from typing import Dict, Optional

from smartlesson.client.api_client import SmartLessonClient
from smartlesson.core.errors import MissingIdentifierError, NotFoundError, SmartLessonError
from smartlesson.core.logging import logger
from smartlesson.editor.notices import NoticeBoard
from smartlesson.editor.section_editor import SaveResult, SectionEditor
from smartlesson.schemas.lesson import LESSON_CONTENT_KEYS, LessonContent


class LessonPreview:
    """Owns the committed lesson document and one editor per section.

    Section editors only ever see snapshots of the document; the preview
    replaces its copy with whatever ``update-lesson`` returns.
    """

    def __init__(self, plan_id: Optional[str], content: LessonContent, client: SmartLessonClient,
                 notices: Optional[NoticeBoard] = None):
        self.plan_id = plan_id
        self.content = content
        self.client = client
        self.notices = notices if notices is not None else NoticeBoard()
        document = content.to_document()
        self.sections: Dict[str, SectionEditor] = {
            key: SectionEditor(
                plan_id=plan_id or "",
                key=key,
                committed=document[key],
                get_full_content=self.get_full_content,
                on_save=self.save_section,
                notices=self.notices,
            )
            for key in LESSON_CONTENT_KEYS
        }

    def section(self, key: str) -> SectionEditor:
        return self.sections[key]

    def get_full_content(self) -> LessonContent:
        return self.content.model_copy(deep=True)

    def save_section(self, _plan_id: str, updated: LessonContent) -> SaveResult:
        if not self.plan_id:
            error = MissingIdentifierError("Plan ID is missing. Cannot save.")
            self.notices.error("Error", str(error), blocking=True)
            return SaveResult(success=False, error="Plan ID is missing.", notified=True)

        try:
            response = self.client.update_lesson(self.plan_id, updated.to_document())
        except NotFoundError as e:
            logger.error(f"Lesson plan {self.plan_id} no longer exists: {e}")
            self.notices.error("Lesson plan not found", f"Lesson plan {self.plan_id} could not be found.")
            return SaveResult(success=False, error=str(e), notified=True)
        except SmartLessonError as e:
            logger.error(f"Failed to save lesson plan {self.plan_id}: {e}")
            return SaveResult(success=False, error=str(e) or "An unexpected error occurred during save.")

        raw = (response or {}).get("content")
        if not raw:
            logger.error(f"Update response was empty or invalid: {response}")
            return SaveResult(success=False, error="Update response was empty or invalid.")

        saved = LessonContent.model_validate(raw)
        self.content = saved
        document = saved.to_document()
        for key, editor in self.sections.items():
            editor.sync(document[key])
        return SaveResult(success=True, data=saved)
