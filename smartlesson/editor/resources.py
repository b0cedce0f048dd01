from typing import List, Optional

from smartlesson.client.api_client import SmartLessonClient
from smartlesson.core.errors import SmartLessonError
from smartlesson.core.logging import logger
from smartlesson.schemas.resource import ResourceSuggestion

RESOURCE_FILTERS = ("All", "Video", "Worksheet", "Article", "Image")
EMPTY_MESSAGE = "No resources found for this lesson plan matching your filter."


def matches_type(resource_type: str, selected: str) -> bool:
    if selected == "All":
        return True
    resource_type = resource_type.lower()
    selected = selected.lower()
    if selected == "worksheet":
        return any(word in resource_type for word in ("worksheet", "textbook", "chapter", "article"))
    return selected in resource_type


class ResourcesPanel:
    def __init__(self, plan_id: str, client: SmartLessonClient):
        self.plan_id = plan_id
        self.client = client
        self.suggestions: List[ResourceSuggestion] = []
        self.error: Optional[str] = None
        self.is_loading = False
        self.selected_type = "All"

    def load(self) -> List[ResourceSuggestion]:
        if not self.plan_id:
            return []
        self.is_loading = True
        self.error = None
        try:
            items = self.client.fetch_resources(self.plan_id)
            self.suggestions = [
                ResourceSuggestion(id=item.id, plan_id=self.plan_id, resource=item.resource) for item in items
            ]
        except SmartLessonError as e:
            logger.error(f"Error fetching resources for plan {self.plan_id}: {e}")
            self.error = str(e) or "Failed to load resources for this lesson plan."
        finally:
            self.is_loading = False
        return self.suggestions

    def select_type(self, resource_type: str) -> None:
        if resource_type not in RESOURCE_FILTERS:
            raise ValueError(f"Unknown resource filter: {resource_type}")
        self.selected_type = resource_type

    def filtered(self) -> List[ResourceSuggestion]:
        return [s for s in self.suggestions if matches_type(s.resource.type, self.selected_type)]

    def open_resource(self, suggestion: ResourceSuggestion) -> str:
        """Record the click, then hand back the URL regardless of the outcome"""
        try:
            self.client.log_event(
                "resource_clicked",
                plan_id=self.plan_id,
                resource_id=suggestion.id,
                metadata={"resourceType": suggestion.resource.type, "resourceTitle": suggestion.resource.title},
            )
        except SmartLessonError as e:
            logger.warning(f"Failed to log resource click for {suggestion.id}: {e}")
        return suggestion.resource.url
