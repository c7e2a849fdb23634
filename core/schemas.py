# ABOUTME: Pydantic models for the roadmap contract (RoadmapSuggestion, Resource).
# ABOUTME: is_valid_roadmap() is the strict structural check applied before any roadmap is trusted.

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Resource(BaseModel):
    """One recommended learning resource; unknown keys from the model are kept."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(description="Resource name.")
    type: str = Field(description="Resource type (course/book/tutorial/tool/community).")
    url: Optional[str] = Field(default=None, description="Direct URL, if applicable.")


class RoadmapSuggestion(BaseModel):
    """Generated learning roadmap as returned by the generation endpoint."""

    model_config = ConfigDict(extra="allow")

    title: str = Field(description="A clear, motivating title for the roadmap.")
    description: str = Field(description="Overview of the learning path and expected outcomes.")
    steps: list[str] = Field(description="Ordered, actionable steps.")
    resources: list[Resource] = Field(description="Ordered list of recommended resources.")

    def to_payload(self) -> dict:
        """Dump to the wire shape, extra keys included; url is omitted when absent rather than sent as null."""
        return self.model_dump(exclude_none=True)


def _is_valid_resource(resource: Any) -> bool:
    if not isinstance(resource, dict):
        return False
    if not isinstance(resource.get("name"), str) or not isinstance(resource.get("type"), str):
        return False
    # url is optional, but when present (null included) it must be a string.
    return "url" not in resource or isinstance(resource["url"], str)


def is_valid_roadmap(content: Any) -> bool:
    """Return True only if content has every RoadmapSuggestion field with the right type.

    Pydantic would coerce or accept null for url, so this runs on the raw decoded JSON first.
    """
    if not isinstance(content, dict):
        return False
    if not isinstance(content.get("title"), str):
        return False
    if not isinstance(content.get("description"), str):
        return False
    steps = content.get("steps")
    if not isinstance(steps, list) or not all(isinstance(s, str) for s in steps):
        return False
    resources = content.get("resources")
    if not isinstance(resources, list):
        return False
    return all(_is_valid_resource(r) for r in resources)
