"""
Catalog Repository - Data Access Layer for catalog/sections

Reads the whole sections node and writes back one section node at a time.
Returns Section domain models, not raw dictionaries.
"""
import logging
from typing import Any, List, Tuple

from pydantic import ValidationError

from liquido.connectors.firebase_connector import FirebaseConnector
from liquido.domain.catalog import Section

logger = logging.getLogger(__name__)

SECTIONS_PATH = "catalog/sections"


class CatalogRepository:
    """
    Repository for catalog data

    Section nodes are addressed by their child key, which is the array
    index when the node is stored as a list.
    """

    def __init__(self, connector: FirebaseConnector):
        self.connector = connector

    @staticmethod
    def _keyed(raw: Any) -> List[Tuple[str, Any]]:
        if raw is None:
            return []
        if isinstance(raw, dict):
            return [(str(k), v) for k, v in raw.items() if v is not None]
        return [(str(i), v) for i, v in enumerate(raw) if v is not None]

    async def get_section_nodes(self) -> List[Tuple[str, Section]]:
        """
        Get every section with its child key

        Returns:
            List of (key, Section) in stored order; nodes that are not a
            section at all are skipped with a warning
        """
        raw = await self.connector.get(SECTIONS_PATH)
        nodes = []
        for key, value in self._keyed(raw):
            try:
                nodes.append((key, Section.model_validate(value)))
            except ValidationError as e:
                logger.warning(f"Skipping malformed section {SECTIONS_PATH}/{key}: {e}")
        return nodes

    async def get_sections(self) -> List[Section]:
        return [section for _, section in await self.get_section_nodes()]

    async def save_section(self, key: str, section: Section) -> None:
        """Overwrite a single section node"""
        await self.connector.set(f"{SECTIONS_PATH}/{key}", section.to_dict())

    async def save_all(self, sections: List[Section]) -> None:
        """Overwrite the whole sections node (used by seeding)"""
        await self.connector.set(SECTIONS_PATH, [s.to_dict() for s in sections])
