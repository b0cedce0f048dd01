"""
Section kinds of a lesson plan document.

Each section key maps to exactly one kind through ``SECTION_DEFS``; each
kind has one renderer. Keys missing from the table have no edit path.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from smartlesson.schemas.lesson import (
    ASSESSMENT_TYPES,
    DIFFERENTIATION_KEYS,
    LESSON_SECTION_TITLES,
)

UNSUPPORTED_MESSAGE = "Edit mode not implemented for this section type."
SUMMARY_CHARS = 60


class SectionKind(Enum):
    TEXT = "text"
    STRING_LIST = "string_list"
    ACTIVITY_LIST = "activity_list"
    RECORD = "record"
    CHOICE = "choice"


@dataclass(frozen=True)
class SectionDef:
    key: str
    title: str
    kind: SectionKind
    options: Tuple[str, ...] = ()


DIFFERENTIATION_LABELS = {
    "strugglingLearners": "Support for Struggling Learners",
    "onTrackLearners": "Activities for On-Track Learners",
    "advancedLearners": "Challenge for Advanced Learners",
    "accommodations": "Accommodations/Modifications (IEPs, 504s, ELLs)",
}


def _humanize(key: str) -> str:
    return re.sub(r"([A-Z])", r" \1", key).strip().capitalize()


class TextRenderer:
    kind = SectionKind.TEXT

    def display(self, value: str) -> str:
        return value or "Not specified"

    def summary(self, value: str) -> str:
        return value[:SUMMARY_CHARS] + ("..." if len(value) > SUMMARY_CHARS else "")

    def edit_view(self, section: SectionDef, draft: str, max_chars: int) -> str:
        return f"{draft or 'Enter ' + section.title.lower() + '...'}\n{len(draft)}/{max_chars}"


class StringListRenderer:
    kind = SectionKind.STRING_LIST

    def display(self, value: list) -> str:
        return ", ".join(value) if value else "None specified"

    def summary(self, value: list) -> str:
        return f"{len(value)} items" if value else "Empty"

    def edit_view(self, section: SectionDef, draft: list, max_chars: int) -> str:
        lines = [f"[x] {item}" for item in draft]
        lines.append("[+] Add material")
        return "\n".join(lines)


class ActivityListRenderer:
    kind = SectionKind.ACTIVITY_LIST

    def display(self, value: list) -> str:
        if not value:
            return "No activities"
        blocks = []
        for index, activity in enumerate(value):
            title = activity.get("title") or f"Activity {index + 1}"
            blocks.append(f"{title}\n{activity.get('description') or 'No description'}")
        return "\n\n".join(blocks)

    def summary(self, value: list) -> str:
        return f"{len(value)} items" if value else "Empty"

    def edit_view(self, section: SectionDef, draft: list, max_chars: int) -> str:
        blocks = []
        for index, activity in enumerate(draft):
            block = f"Activity {index + 1} Title: {activity.get('title', '')}\nDescription: {activity.get('description', '')}"
            if len(draft) > 1:
                block += "\n[Remove Activity]"
            blocks.append(block)
        blocks.append("[Add Activity]")
        return "\n\n".join(blocks)


class RecordRenderer:
    kind = SectionKind.RECORD

    def display(self, value: dict) -> str:
        return "\n".join(
            f"- {_humanize(key)}: {value.get(key) or 'Not specified'}" for key in DIFFERENTIATION_KEYS
        )

    def summary(self, value: dict) -> str:
        return f"{len(value)} properties" if value else "Empty"

    def edit_view(self, section: SectionDef, draft: dict, max_chars: int) -> str:
        return "\n".join(
            f"{DIFFERENTIATION_LABELS[key]}: {draft.get(key, '')} ({len(draft.get(key, ''))}/{max_chars})"
            for key in DIFFERENTIATION_KEYS
        )


class ChoiceRenderer:
    kind = SectionKind.CHOICE

    def display(self, value: str) -> str:
        return value.capitalize() if value else "Not specified"

    def summary(self, value: str) -> str:
        return value

    def edit_view(self, section: SectionDef, draft: str, max_chars: int) -> str:
        return "  ".join(f"({'x' if option == draft else ' '}) {option.capitalize()}" for option in section.options)


RENDERERS: Dict[SectionKind, Any] = {
    SectionKind.TEXT: TextRenderer(),
    SectionKind.STRING_LIST: StringListRenderer(),
    SectionKind.ACTIVITY_LIST: ActivityListRenderer(),
    SectionKind.RECORD: RecordRenderer(),
    SectionKind.CHOICE: ChoiceRenderer(),
}

_KINDS = {
    "lessonTopic": SectionKind.TEXT,
    "themeOfWeek": SectionKind.TEXT,
    "learningObjective": SectionKind.TEXT,
    "materialsNeeded": SectionKind.STRING_LIST,
    "introduction": SectionKind.TEXT,
    "mainActivities": SectionKind.ACTIVITY_LIST,
    "differentiations": SectionKind.RECORD,
    "extensionActivity": SectionKind.TEXT,
    "conclusion": SectionKind.TEXT,
    "evaluation": SectionKind.TEXT,
    "assessmentType": SectionKind.CHOICE,
    "teacherReflection": SectionKind.TEXT,
}

SECTION_DEFS: Dict[str, SectionDef] = {
    key: SectionDef(
        key=key,
        title=LESSON_SECTION_TITLES[key],
        kind=kind,
        options=ASSESSMENT_TYPES if kind is SectionKind.CHOICE else (),
    )
    for key, kind in _KINDS.items()
}


def section_def(key: str) -> Optional[SectionDef]:
    return SECTION_DEFS.get(key)


def summarize(section: Optional[SectionDef], value: Any) -> str:
    if section is None:
        return "No data"
    return RENDERERS[section.kind].summary(value)
