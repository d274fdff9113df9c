"""Mission content: schema, catalog, pack ingestion and topic resolution."""

from .mission import MissionSpec, load_presets
from .catalog import Catalog
from .validator import ContentPack, ContentPackValidator
from .merger import CatalogMerger, MergeResult
from .resolver import DEFAULT_KEYWORDS, TopicResolver

__all__ = [
    "MissionSpec",
    "load_presets",
    "Catalog",
    "ContentPack",
    "ContentPackValidator",
    "CatalogMerger",
    "MergeResult",
    "DEFAULT_KEYWORDS",
    "TopicResolver",
]
