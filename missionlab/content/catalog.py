"""Live mapping of topic name to mission content."""

import threading
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from loguru import logger

from .mission import MissionSpec, load_presets


class Catalog:
    """Insertion-ordered topic catalog.

    The mapping is replaced wholesale on every merge, so a reader holding a
    snapshot sees either the pre- or post-merge state. Merges on the same
    instance are serialised by a lock.
    """

    def __init__(
        self, entries: Mapping[str, MissionSpec], default_topic: str = "projectile"
    ):
        if default_topic not in entries:
            raise ValueError(f"Default topic '{default_topic}' is not in the catalog")
        self._entries: Dict[str, MissionSpec] = dict(entries)
        self._default_topic = default_topic
        self._lock = threading.RLock()

    @classmethod
    def with_presets(cls, default_topic: str = "projectile") -> "Catalog":
        """Build a catalog holding the built-in topics."""
        return cls(load_presets(), default_topic=default_topic)

    @property
    def default_topic(self) -> str:
        return self._default_topic

    def keys(self) -> List[str]:
        return list(self._entries)

    def get(self, topic: str) -> Optional[MissionSpec]:
        return self._entries.get(topic)

    def snapshot(self) -> Dict[str, MissionSpec]:
        """Copy of the current mapping."""
        return dict(self._entries)

    def replace_topics(
        self, updates: Mapping[str, MissionSpec]
    ) -> Tuple[List[str], List[str]]:
        """Apply topic-level replacements in one step.

        Returns:
            (added, overwritten) topic keys, in ``updates`` order
        """
        with self._lock:
            current = self._entries
            added = [topic for topic in updates if topic not in current]
            overwritten = [topic for topic in updates if topic in current]

            merged = dict(current)
            merged.update(updates)
            self._entries = merged

        logger.debug(f"Catalog now holds {len(merged)} topics")
        return added, overwritten

    def __getitem__(self, topic: str) -> MissionSpec:
        return self._entries[topic]

    def __contains__(self, topic: object) -> bool:
        return topic in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Catalog):
            return NotImplemented
        return (
            self._default_topic == other._default_topic
            and list(self._entries.items()) == list(other._entries.items())
        )

    def __repr__(self) -> str:
        return f"Catalog(topics={self.keys()!r}, default_topic={self._default_topic!r})"
