"""Free-text prompt to topic resolution."""

from typing import Optional, Sequence, Tuple

from loguru import logger

# Secondary keyword table, checked in order after the catalog's own keys.
DEFAULT_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("electrostatics", ("charge", "electric", "electro")),
    ("thermodynamics", ("thermo", "heat", "gas")),
)


class TopicResolver:
    """Maps a prompt to a catalog topic.

    Catalog keys take priority over the keyword table; within each tier the
    first match in iteration order wins. Anything unmatched resolves to the
    default topic.
    """

    def __init__(
        self,
        default_topic: str = "projectile",
        keywords: Sequence[Tuple[str, Sequence[str]]] = DEFAULT_KEYWORDS,
    ):
        self.default_topic = default_topic
        self.keywords = tuple((topic, tuple(tokens)) for topic, tokens in keywords)

    def resolve(self, text: Optional[str], catalog_keys: Sequence[str]) -> str:
        """Return the topic key for ``text``."""
        if text is None or not text.strip():
            return self.default_topic

        lowered = text.lower()

        for key in catalog_keys:
            if key and key.lower() in lowered:
                logger.debug(f"Resolved '{text}' to catalog topic '{key}'")
                return key

        available = set(catalog_keys)
        for topic, tokens in self.keywords:
            if topic not in available:
                continue
            if any(token in lowered for token in tokens):
                logger.debug(f"Resolved '{text}' to '{topic}' by keyword")
                return topic

        return self.default_topic
