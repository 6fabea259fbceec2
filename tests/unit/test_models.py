import pytest
from pydantic import TypeAdapter

from mcp_maven_deps.models import (
    INVALID_DEPENDENCY_MESSAGE,
    CoordinateRejected,
    DependencyNotFound,
    MavenCoordinate,
    SearchResponse,
    ToolOutcome,
    UpstreamError,
    VersionFound,
    parse_coordinate_request,
)


def test_parse_valid_dependency():
    coord = parse_coordinate_request({"dependency": "org.springframework:spring-core"})
    assert coord == MavenCoordinate(group_id="org.springframework", artifact_id="spring-core")
    assert str(coord) == "org.springframework:spring-core"


def test_parse_ignores_extra_fields():
    coord = parse_coordinate_request({"dependency": "g:a", "unused": 1})
    assert isinstance(coord, MavenCoordinate)


def test_extra_colons_fold_into_artifact_id():
    coord = parse_coordinate_request({"dependency": "a:b:c"})
    assert coord == MavenCoordinate(group_id="a", artifact_id="b:c")


@pytest.mark.parametrize("dependency", [":a", "g:", ":"])
def test_empty_parts_are_not_rejected(dependency: str):
    assert isinstance(parse_coordinate_request({"dependency": dependency}), MavenCoordinate)


@pytest.mark.parametrize(
    "payload",
    [
        None,
        "org.example:lib",
        ["org.example:lib"],
        42,
        {},
        {"dep": "org.example:lib"},
        {"dependency": None},
        {"dependency": 123},
        {"dependency": ["g:a"]},
        {"dependency": "org.example.lib"},
        {"dependency": ""},
    ],
)
def test_rejected_payloads(payload):
    result = parse_coordinate_request(payload)
    assert isinstance(result, CoordinateRejected)
    assert result.reason == INVALID_DEPENDENCY_MESSAGE


def test_search_response_tolerates_extra_fields():
    parsed = SearchResponse.model_validate(
        {
            "responseHeader": {"status": 0},
            "response": {
                "numFound": 1,
                "start": 0,
                "docs": [{"id": "g:a:1.0", "g": "g", "a": "a", "v": "1.0", "timestamp": 5, "p": "jar"}],
            },
        }
    )
    assert parsed.response.docs[0].v == "1.0"
    assert parsed.response.docs[0].timestamp == 5


def test_version_found_renders_plain_text():
    result = VersionFound(version="6.1.2").to_call_tool_result()
    assert result.isError is False
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    assert result.content[0].text == "6.1.2"


def test_not_found_renders_soft_error():
    outcome = DependencyNotFound(coordinate=MavenCoordinate(group_id="no.group", artifact_id="none"))
    result = outcome.to_call_tool_result()
    assert result.isError is True
    assert result.content[0].text == "No Maven dependency found for no.group:none"


def test_upstream_error_renders_soft_error():
    outcome = UpstreamError(message="bad query")
    assert outcome.is_error is True
    assert outcome.text == "Maven Central API error: bad query"


def test_outcome_union_discriminates_on_kind():
    adapter = TypeAdapter(ToolOutcome)
    outcome = adapter.validate_python({"kind": "error", "message": "boom"})
    assert isinstance(outcome, UpstreamError)
    dumped = adapter.dump_python(VersionFound(version="1.0"))
    assert dumped == {"kind": "success", "version": "1.0"}


@pytest.mark.parametrize("outcome_cls", [VersionFound, DependencyNotFound, UpstreamError])
def test_every_outcome_defines_text(outcome_cls):
    assert "text" not in getattr(outcome_cls, "__abstractmethods__", frozenset())
