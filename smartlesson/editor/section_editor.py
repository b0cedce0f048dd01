"""
Editable view of one section of a lesson plan document.

The editor keeps a draft apart from the committed value and hands the
whole document, with only its own section replaced, to the parent's save
callback. After a successful save the server's copy of the section becomes
the committed value.
"""

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import ValidationError

from smartlesson.core.config import settings
from smartlesson.core.errors import SmartLessonError
from smartlesson.core.logging import logger
from smartlesson.editor.notices import NoticeBoard
from smartlesson.editor.sections import (
    DIFFERENTIATION_LABELS,
    RENDERERS,
    UNSUPPORTED_MESSAGE,
    SectionKind,
    section_def,
    summarize,
)
from smartlesson.schemas.lesson import LessonContent


class EditorState(Enum):
    VIEWING = "viewing"
    EDITING = "editing"


@dataclass
class SaveResult:
    success: bool
    data: Optional[LessonContent] = None
    error: Optional[str] = None
    notified: bool = False  # failure already surfaced by the save callback


SaveCallback = Callable[[str, LessonContent], SaveResult]


class SectionEditor:
    def __init__(
        self,
        plan_id: str,
        key: str,
        committed: Any,
        get_full_content: Callable[[], LessonContent],
        on_save: SaveCallback,
        notices: Optional[NoticeBoard] = None,
        max_chars: int = settings.max_section_chars,
    ):
        self.plan_id = plan_id
        self.key = key
        self.section_def = section_def(key)
        self.get_full_content = get_full_content
        self.on_save = on_save
        self.notices = notices if notices is not None else NoticeBoard()
        self.max_chars = max_chars

        self.committed = copy.deepcopy(committed)
        self.draft = copy.deepcopy(committed)
        self.state = EditorState.VIEWING
        self.is_open = False
        self.is_saving = False
        self.error: Optional[str] = None

    @property
    def title(self) -> str:
        return self.section_def.title if self.section_def else self.key

    @property
    def is_editing(self) -> bool:
        return self.state is EditorState.EDITING

    @property
    def has_unsaved_changes(self) -> bool:
        return self.draft != self.committed

    @property
    def can_save(self) -> bool:
        return self.is_editing and self.has_unsaved_changes and not self.is_saving

    # ---------------------
    # State transitions
    # ---------------------
    def sync(self, committed: Any) -> None:
        """Accept a new committed value pushed down by the parent"""
        self.committed = copy.deepcopy(committed)
        if not self.is_editing:
            self.draft = copy.deepcopy(committed)

    def toggle_open(self) -> None:
        self.is_open = not self.is_open

    def toggle_edit(self) -> None:
        if self.is_editing:
            self.cancel()
        else:
            self.begin_edit()

    def begin_edit(self) -> None:
        self.draft = copy.deepcopy(self.committed)
        self.state = EditorState.EDITING
        self.is_open = True
        self.error = None

    def cancel(self) -> None:
        self.draft = copy.deepcopy(self.committed)
        self.state = EditorState.VIEWING
        self.error = None

    def save(self) -> bool:
        """Submit the draft; returns True when the server accepted it"""
        if not self.can_save:
            return False

        self.is_saving = True
        try:
            document = self.get_full_content().to_document()
            document[self.key] = copy.deepcopy(self.draft)
            result = self.on_save(self.plan_id, LessonContent.model_validate(document))
        except ValidationError as e:
            result = SaveResult(success=False, error=f"Invalid {self.title.lower()}: {e.error_count()} error(s)")
        except SmartLessonError as e:
            result = SaveResult(success=False, error=str(e))
        finally:
            self.is_saving = False

        if result.success and result.data is not None:
            saved = result.data.to_document()[self.key]
            self.committed = copy.deepcopy(saved)
            self.draft = copy.deepcopy(saved)
            self.state = EditorState.VIEWING
            self.error = None
            self.notices.success("Saved!", f"{self.title} updated successfully.")
            return True

        self.error = result.error or "Could not save changes."
        logger.warning(f"Saving section {self.key} of plan {self.plan_id} failed: {self.error}")
        if not result.notified:
            self.notices.error("Save Failed", self.error)
        return False

    # ---------------------
    # Draft edits
    # ---------------------
    def _require(self, kind: SectionKind) -> None:
        if not self.is_editing:
            raise RuntimeError(f"Section {self.key} is not in edit mode")
        if self.section_def is None or self.section_def.kind is not kind:
            raise TypeError(f"Section {self.key} does not hold {kind.value} content")

    def set_text(self, value: str) -> None:
        self._require(SectionKind.TEXT)
        self.draft = value[:self.max_chars]

    def add_material(self, material: str) -> bool:
        self._require(SectionKind.STRING_LIST)
        material = material.strip()
        if not material or material in self.draft:
            return False
        self.draft = [*self.draft, material]
        return True

    def remove_material(self, index: int) -> None:
        self._require(SectionKind.STRING_LIST)
        self.draft = [m for i, m in enumerate(self.draft) if i != index]

    def add_activity(self) -> None:
        self._require(SectionKind.ACTIVITY_LIST)
        self.draft = [*self.draft, {"title": "", "description": ""}]

    def update_activity(self, index: int, field: str, value: str) -> None:
        self._require(SectionKind.ACTIVITY_LIST)
        if field not in ("title", "description"):
            raise KeyError(field)
        activities = [dict(activity) for activity in self.draft]
        activities[index][field] = value
        self.draft = activities

    def remove_activity(self, index: int) -> bool:
        self._require(SectionKind.ACTIVITY_LIST)
        if len(self.draft) <= 1:
            return False
        self.draft = [a for i, a in enumerate(self.draft) if i != index]
        return True

    def set_differentiation(self, key: str, value: str) -> None:
        self._require(SectionKind.RECORD)
        if key not in DIFFERENTIATION_LABELS:
            raise KeyError(key)
        self.draft = {**self.draft, key: value[:self.max_chars]}

    def set_choice(self, value: str) -> None:
        self._require(SectionKind.CHOICE)
        if value not in self.section_def.options:
            raise ValueError(f"{value!r} is not one of {', '.join(self.section_def.options)}")
        self.draft = value

    # ---------------------
    # Rendering
    # ---------------------
    @property
    def summary(self) -> str:
        return summarize(self.section_def, self.committed)

    def render(self) -> str:
        if self.is_editing:
            if self.section_def is None:
                return UNSUPPORTED_MESSAGE
            return RENDERERS[self.section_def.kind].edit_view(self.section_def, self.draft, self.max_chars)
        if self.section_def is None:
            return "Not specified"
        return RENDERERS[self.section_def.kind].display(self.committed)
