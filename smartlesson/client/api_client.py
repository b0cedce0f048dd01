"""
Thin HTTP client for the SmartLesson endpoints.

Accepts any ``httpx.Client``; FastAPI's ``TestClient`` is one, so the same
code drives a deployed server and the in-process app.
"""

from typing import Any, Dict, List, Optional

import httpx

from smartlesson.core.config import settings
from smartlesson.core.errors import NotFoundError, RemoteInvocationError, ValidationFailed
from smartlesson.core.logging import logger
from smartlesson.schemas.profile import Profile
from smartlesson.schemas.quiz import Quiz, QuizQuestion
from smartlesson.schemas.resource import ResourceItem


class SmartLessonClient:
    def __init__(self, http: httpx.Client, user_id: Optional[str] = None, prefix: str = settings.api_v1_prefix):
        self.http = http
        self.user_id = user_id
        self.prefix = prefix.rstrip("/")

    def _headers(self) -> Dict[str, str]:
        return {"X-User-Id": self.user_id} if self.user_id else {}

    def _request(self, method: str, name: str, kind: str = "Endpoint", identifier: Optional[str] = None,
                 **kwargs) -> Any:
        url = f"{self.prefix}/{name}"
        try:
            response = self.http.request(method, url, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{name} invocation failed: {e}")
            raise RemoteInvocationError(f"Could not reach {name}: {e}") from e

        if response.is_success:
            return response.json()

        detail = self._detail(response)
        if response.status_code == 404:
            raise NotFoundError(kind, identifier or url, message=detail)
        if response.status_code == 422:
            raise ValidationFailed(self._field_errors(response))
        raise RemoteInvocationError(f"{name} failed: {detail}", status_code=response.status_code)

    def _invoke(self, name: str, payload: Dict[str, Any], kind: str = "Endpoint",
                identifier: Optional[str] = None) -> Any:
        return self._request("POST", name, kind, identifier, json=payload)

    @staticmethod
    def _detail(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(body, dict):
            return str(body.get("detail") or body.get("error") or body)
        return str(body)

    @staticmethod
    def _field_errors(response: httpx.Response) -> Dict[str, str]:
        try:
            details = response.json().get("detail", [])
        except (ValueError, AttributeError):
            return {"request": response.text}
        if not isinstance(details, list):
            return {"request": str(details)}
        errors = {}
        for item in details:
            loc = [str(part) for part in item.get("loc", []) if part != "body"]
            errors[".".join(loc) or "request"] = item.get("msg", "invalid")
        return errors

    # ---------------------
    # Lesson plans
    # ---------------------
    def generate_lesson(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return self._invoke("generate-lesson", params)

    def update_lesson(self, plan_id: str, content: Dict[str, Any]) -> Dict[str, Any]:
        return self._invoke("update-lesson", {"planId": plan_id, "content": content}, "Lesson plan", plan_id)

    def get_lesson(self, plan_id: str) -> Dict[str, Any]:
        return self._request("GET", f"lessons/{plan_id}", "Lesson plan", plan_id)

    def list_lessons(self, user_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", "lessons", params={"user_id": user_id})

    # ---------------------
    # Quizzes
    # ---------------------
    def generate_quiz(self, plan_id: str, topics: List[str], learner_level: str, num_questions: int) -> Dict[str, Any]:
        return self._invoke("generate-quiz", {
            "planId": plan_id,
            "topics": topics,
            "learnerLevel": learner_level,
            "numQuestions": num_questions,
        }, "Lesson plan", plan_id)

    def update_quiz(self, quiz_id: str, content: List[QuizQuestion]) -> Quiz:
        data = self._invoke("update-quiz", {
            "quizId": quiz_id,
            "content": [q.model_dump() for q in content],
        }, "Quiz", quiz_id)
        return Quiz.model_validate(data)

    def list_quizzes(self, user_id: str) -> List[Dict[str, Any]]:
        return self._request("GET", "quizzes", params={"user_id": user_id})

    # ---------------------
    # Resources, analytics, calendar
    # ---------------------
    def fetch_resources(self, plan_id: str) -> List[ResourceItem]:
        data = self._invoke("fetch-resources", {"planId": plan_id})
        return [ResourceItem.model_validate(item) for item in data or []]

    def log_event(self, event_type: str, plan_id: Optional[str] = None, resource_id: Optional[str] = None,
                  quiz_id: Optional[str] = None, metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        payload = {"eventType": event_type}
        for key, value in (("planId", plan_id), ("resourceId", resource_id),
                           ("quizId", quiz_id), ("metadata", metadata)):
            if value:
                payload[key] = value
        return self._invoke("log-event", payload)

    def schedule_lesson(self, plan_id: str, scheduled_for: str, title: Optional[str] = None) -> Dict[str, Any]:
        payload = {"planId": plan_id, "scheduledFor": scheduled_for}
        if title:
            payload["title"] = title
        return self._invoke("calendar-events", payload, "Lesson plan", plan_id)

    # ---------------------
    # Profile
    # ---------------------
    def get_profile(self) -> Profile:
        return Profile.model_validate(self._request("GET", "profile"))

    def update_profile(self, full_name: str, subjects: Optional[List[str]] = None, school_name: str = "",
                       location: str = "", bio: str = "") -> Profile:
        data = self._request("PUT", "profile", json={
            "full_name": full_name,
            "subjects": subjects or [],
            "school_name": school_name,
            "location": location,
            "bio": bio,
        })
        return Profile.model_validate(data)
