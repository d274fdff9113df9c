"""Apply validated content packs to a catalog."""

from dataclasses import dataclass, field
from typing import List

from loguru import logger

from .catalog import Catalog
from .validator import ContentPack


@dataclass
class MergeResult:
    """Outcome of a successful merge."""

    catalog: Catalog
    merged: List[str] = field(default_factory=list)
    added: List[str] = field(default_factory=list)
    overwritten: List[str] = field(default_factory=list)


class CatalogMerger:
    """Topic-granular merge of a :class:`ContentPack` into a :class:`Catalog`.

    Each pack topic fully replaces any existing entry of the same name or is
    appended. The pack is not re-validated here; callers obtain a
    ``ContentPack`` from :class:`ContentPackValidator`.
    """

    def merge(self, catalog: Catalog, pack: ContentPack) -> MergeResult:
        if not isinstance(pack, ContentPack):
            raise TypeError("merge() requires a validated ContentPack")

        added, overwritten = catalog.replace_topics(pack.topics)
        if overwritten:
            logger.debug(f"Overwrote topics: {', '.join(overwritten)}")

        return MergeResult(
            catalog=catalog,
            merged=pack.keys(),
            added=added,
            overwritten=overwritten,
        )
