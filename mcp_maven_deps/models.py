"""Pydantic request, search and outcome models.

Upstream Maven Central documents carry many more fields than are modeled
here; unknown fields are tolerated and ignored.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Annotated, Any, Literal, Optional, Union

from mcp import types
from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

INVALID_DEPENDENCY_MESSAGE = 'Invalid Maven dependency format. Expected "groupId:artifactId"'


class MavenCoordinate(BaseModel):
    """A Maven coordinate (groupId:artifactId) without a version.

    Parts are kept exactly as split from the request; empty parts are not
    rejected here.
    """

    model_config = ConfigDict(frozen=True)

    group_id: str
    artifact_id: str

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


class CoordinateRequest(BaseModel):
    """Raw ``get_maven_latest_version`` arguments."""

    model_config = ConfigDict(extra="ignore")

    dependency: StrictStr


class CoordinateRejected(BaseModel):
    """Rejection half of parse_coordinate_request's result; nothing is fetched."""

    reason: str = INVALID_DEPENDENCY_MESSAGE


def parse_coordinate_request(payload: Any) -> Union[MavenCoordinate, CoordinateRejected]:
    """Check an untyped tool payload and split it into a coordinate.

    The payload must be a mapping whose ``dependency`` is a string containing
    at least one ``:``. The group id is everything before the first colon and
    the artifact id everything after it, so ``"a:b:c"`` yields artifact
    ``"b:c"``.
    """

    try:
        request = CoordinateRequest.model_validate(payload)
    except ValidationError:
        return CoordinateRejected()

    group_id, sep, artifact_id = request.dependency.partition(":")
    if not sep:
        return CoordinateRejected()
    return MavenCoordinate(group_id=group_id, artifact_id=artifact_id)


class SearchQuery(BaseModel):
    """Solr parameters for the newest GAV record of one coordinate."""

    model_config = ConfigDict(frozen=True)

    q: str
    core: Literal["gav"] = "gav"
    rows: int = 1
    wt: Literal["json"] = "json"
    sort: str = "timestamp desc"

    def to_params(self) -> dict[str, str]:
        return {k: str(v) for k, v in self.model_dump().items()}


class SearchDoc(BaseModel):
    model_config = ConfigDict(extra="ignore")

    v: str
    timestamp: Optional[int] = None
    g: Optional[str] = None
    a: Optional[str] = None


class SearchResponseBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    docs: list[SearchDoc] = Field(default_factory=list)


class SearchResponse(BaseModel):
    """Top-level Maven Central search payload: ``{"response": {"docs": [...]}}``."""

    model_config = ConfigDict(extra="ignore")

    response: SearchResponseBody


# Tool outcomes. Exactly one is produced per tools/call and rendered as a
# single text item.


class _Outcome(BaseModel, ABC):
    model_config = ConfigDict(frozen=True)

    @property
    @abstractmethod
    def text(self) -> str:
        """The single line sent back to the caller."""

    @property
    def is_error(self) -> bool:
        return False

    def to_call_tool_result(self) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=self.text)],
            isError=self.is_error,
        )


class VersionFound(_Outcome):
    kind: Literal["success"] = "success"
    version: str

    @property
    def text(self) -> str:
        return self.version


class DependencyNotFound(_Outcome):
    kind: Literal["not_found"] = "not_found"
    coordinate: MavenCoordinate

    @property
    def text(self) -> str:
        return f"No Maven dependency found for {self.coordinate}"

    @property
    def is_error(self) -> bool:
        return True


class UpstreamError(_Outcome):
    kind: Literal["error"] = "error"
    message: str

    @property
    def text(self) -> str:
        return f"Maven Central API error: {self.message}"

    @property
    def is_error(self) -> bool:
        return True


ToolOutcome = Annotated[
    Union[VersionFound, DependencyNotFound, UpstreamError],
    Field(discriminator="kind"),
]


__all__ = [
    "INVALID_DEPENDENCY_MESSAGE",
    "MavenCoordinate",
    "CoordinateRequest",
    "CoordinateRejected",
    "parse_coordinate_request",
    "SearchQuery",
    "SearchDoc",
    "SearchResponseBody",
    "SearchResponse",
    "VersionFound",
    "DependencyNotFound",
    "UpstreamError",
    "ToolOutcome",
]
