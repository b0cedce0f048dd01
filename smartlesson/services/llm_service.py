from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any, Dict, List

import google.generativeai as genai
from langchain_openai import ChatOpenAI

from smartlesson.core.config import settings
from smartlesson.core.logging import logger


class GenerationService:
    """Produces lesson content, quiz questions and resource suggestions.

    The ``mock`` provider returns deterministic placeholder content so the
    rest of the system can be exercised without an API key.
    """

    def __init__(self):
        self._llm = None
        self.llm_type = None
        self._initialize_llm()

    # ---------------------
    # LLM Initialization
    # ---------------------
    def _initialize_llm(self):
        provider = settings.llm_provider.lower()
        logger.info(f"Initializing LLM provider={provider}")

        if provider == "mock":
            self.llm_type = "mock"
            logger.info("Using mock generator; no LLM calls will be made.")

        elif provider == "google" and settings.google_api_key:
            genai.configure(api_key=settings.google_api_key)

            requested = settings.llm_model
            model_name = requested if requested.startswith("models/") else f"models/{requested}"
            logger.info(f"Using Gemini model: {model_name}")

            generation_config = genai.GenerationConfig(
                temperature=settings.llm_temperature,
                max_output_tokens=settings.max_tokens,
            )
            self._llm = genai.GenerativeModel(
                model_name=model_name,
                generation_config=generation_config
            )
            self.llm_type = "google"
            logger.info("✓ Gemini LLM initialized successfully.")

        elif provider == "openai" and settings.openai_api_key:
            self._llm = ChatOpenAI(
                temperature=settings.llm_temperature,
                model=settings.llm_model,
                max_tokens=settings.max_tokens,
                openai_api_key=settings.openai_api_key
            )
            self.llm_type = "openai"
            logger.info("✓ OpenAI LLM initialized successfully.")

        else:
            raise ValueError(
                f"No valid LLM provider or API key provided. "
                f"Provider: {provider}, "
                f"Google key: {'set' if settings.google_api_key else 'missing'}, "
                f"OpenAI key: {'set' if settings.openai_api_key else 'missing'}"
            )

    @property
    def is_mock(self) -> bool:
        return self.llm_type == "mock"

    def _complete(self, prompt: str) -> str:
        if self.llm_type == "google":
            return self._llm.generate_content(prompt).text
        if self.llm_type == "openai":
            return self._llm.invoke(prompt).content
        raise ValueError(f"Unknown LLM type: {self.llm_type}")

    @staticmethod
    def _parse_json(response: str) -> Any:
        """Parse model output, tolerating markdown fences and chatter"""
        cleaned = re.sub(r'```json\s*|\s*```', '', response.strip())
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError:
            json_match = re.search(r'[\{\[].*[\}\]]', cleaned, re.DOTALL)
            if not json_match:
                raise ValueError("Model response did not contain JSON")
            return json.loads(json_match.group())

    # ---------------------
    # Lesson plans
    # ---------------------
    def generate_lesson(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Return raw lesson content (camelCase keys, no id)"""
        if self.is_mock:
            return self._mock_lesson(params)

        prompt = f"""Generate a lesson plan as JSON (no markdown).

Subject: {params['subject']}
Grade: {params['grade']}
Date: {params['date']}
Theme of the week: {params.get('themeOfWeek') or 'none'}
Learner level: {params['learnerLevel']}
Primary assessment type: {params['assessmentType']}
Teacher notes: {params.get('notes') or 'none'}

Use exactly these keys:
lessonTopic, themeOfWeek, learningObjective, materialsNeeded (list of strings),
introduction, mainActivities (list of {{"title", "description"}}),
differentiations ({{"strugglingLearners", "onTrackLearners", "advancedLearners", "accommodations"}}),
extensionActivity, conclusion, evaluation, assessmentType, teacherReflection.
Keep every text value under 200 characters."""

        data = self._parse_json(self._complete(prompt))
        if not isinstance(data, dict):
            raise ValueError("Lesson generation returned a non-object")
        logger.info(f"✅ Lesson content generated by {self.llm_type}")
        return data

    @staticmethod
    def _mock_lesson(params: Dict[str, Any]) -> Dict[str, Any]:
        subject = params["subject"]
        grade = params["grade"]
        theme = params.get("themeOfWeek") or ""
        return {
            "lessonTopic": f"Introduction to {subject}",
            "themeOfWeek": theme,
            "learningObjective": f"Grade {grade} learners will explain one key idea in {subject}.",
            "materialsNeeded": ["Whiteboard", "Markers", "Worksheets"],
            "introduction": f"Open with a short question connecting {subject} to daily life.",
            "mainActivities": [
                {"title": "Guided exploration", "description": "Model the concept with a worked example."},
                {"title": "Group practice", "description": "Learners solve two problems in pairs."},
            ],
            "differentiations": {
                "strugglingLearners": "Provide a step-by-step prompt card.",
                "onTrackLearners": "Complete the standard worksheet.",
                "advancedLearners": "Design their own example problem.",
                "accommodations": "Offer large-print materials on request.",
            },
            "extensionActivity": "Find one real-world use of today's idea at home.",
            "conclusion": "Learners share one thing they learned.",
            "evaluation": "Exit ticket with two quick questions.",
            "assessmentType": params["assessmentType"],
            "teacherReflection": "",
        }

    # ---------------------
    # Quizzes
    # ---------------------
    def generate_quiz(self, topics: List[str], learner_level: str, num_questions: int) -> List[Dict[str, Any]]:
        if self.is_mock:
            stamp = datetime.now().isoformat()
            return [
                {
                    "question": f"Sample Question {i + 1} on {', '.join(topics)} for {learner_level} learners? Generated at {stamp}",
                    "choices": [f"Option A{i}", f"Option B{i}", f"Correct Answer C{i}", f"Option D{i}"],
                    "answer": f"Correct Answer C{i}",
                }
                for i in range(num_questions)
            ]

        prompt = f"""Generate {num_questions} multiple-choice questions for {learner_level} learners.

Topics: {', '.join(topics)}

Return ONLY valid JSON (no markdown):
{{
  "questions": [
    {{"question": "Question text?", "choices": ["...", "...", "...", "..."], "answer": "<exact text of the correct choice>"}}
  ]
}}"""

        data = self._parse_json(self._complete(prompt))
        questions = data.get("questions", []) if isinstance(data, dict) else data
        logger.info(f"✅ Quiz generated with {len(questions)} questions")
        return questions

    # ---------------------
    # Resource suggestions
    # ---------------------
    def suggest_resources(self, content: Dict[str, Any], subject: str) -> List[Dict[str, Any]]:
        topic = content.get("lessonTopic") or subject
        if self.is_mock:
            slug = re.sub(r'[^a-z0-9]+', '-', topic.lower()).strip('-')
            return [
                {
                    "type": "Video",
                    "title": f"{topic} explained",
                    "url": f"https://www.youtube.com/results?search_query={slug}",
                    "description": f"Short video introducing {topic}.",
                    "tags": [subject, "video"],
                },
                {
                    "type": "Worksheet",
                    "title": f"{topic} practice worksheet",
                    "url": f"https://example.org/worksheets/{slug}",
                    "description": "Printable practice problems.",
                    "tags": [subject, "practice"],
                },
                {
                    "type": "Article",
                    "title": f"Teaching {topic}",
                    "url": f"https://example.org/articles/{slug}",
                    "description": "Background reading for the teacher.",
                },
            ]

        prompt = f"""Suggest 3 to 5 classroom resources for a lesson on "{topic}" ({subject}).

Return ONLY a JSON list of objects with keys:
type (Video, Worksheet, Article or Image), title, url, description, tags (list of strings)."""

        data = self._parse_json(self._complete(prompt))
        if not isinstance(data, list):
            raise ValueError("Resource suggestion returned a non-list")
        return data


# Global instance
generation_service = GenerationService()


def get_generation_service() -> GenerationService:
    return generation_service
