"""Schema validation for uploaded content packs.

A content pack is a JSON object mapping topic names to mission entries.
Validation is all-or-nothing: a single malformed topic rejects the pack.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from loguru import logger
from pydantic import ValidationError

from ..errors import SchemaIssue, SchemaViolation
from .mission import MissionSpec


@dataclass(frozen=True)
class ContentPack:
    """A pack that passed validation; the only input the merger accepts."""

    topics: Dict[str, MissionSpec] = field(default_factory=dict)

    def keys(self) -> List[str]:
        return list(self.topics)

    def __len__(self) -> int:
        return len(self.topics)


def _issues_from_error(topic: str, error: ValidationError) -> List[SchemaIssue]:
    issues = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        issues.append(
            SchemaIssue(topic=topic, field=location or None, message=detail["msg"])
        )
    return issues


class ContentPackValidator:
    """Checks candidate packs against the mission schema."""

    def _collect(
        self, candidate: Any
    ) -> Tuple[Dict[str, MissionSpec], List[SchemaIssue]]:
        if not isinstance(candidate, dict):
            kind = "null" if candidate is None else type(candidate).__name__
            return {}, [
                SchemaIssue(message=f"Content pack must be a JSON object, got {kind}")
            ]

        topics: Dict[str, MissionSpec] = {}
        issues: List[SchemaIssue] = []
        for topic, entry in candidate.items():
            if not isinstance(topic, str) or not topic.strip():
                issues.append(
                    SchemaIssue(
                        topic=str(topic), message="Topic name must not be blank"
                    )
                )
                continue
            try:
                topics[topic] = MissionSpec.model_validate(entry)
            except ValidationError as e:
                issues.extend(_issues_from_error(topic, e))
        return topics, issues

    def check(self, candidate: Any) -> List[SchemaIssue]:
        """Return every schema issue found in ``candidate`` (empty if valid)."""
        _, issues = self._collect(candidate)
        return issues

    def validate(self, candidate: Any) -> ContentPack:
        """Validate ``candidate`` and return it as a :class:`ContentPack`.

        Raises:
            SchemaViolation: listing every offending topic/field
        """
        topics, issues = self._collect(candidate)
        if issues:
            logger.debug(f"Content pack rejected with {len(issues)} issue(s)")
            raise SchemaViolation(issues)
        return ContentPack(topics=topics)

    def is_valid(self, candidate: Any) -> bool:
        return not self.check(candidate)
