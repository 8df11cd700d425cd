"""
Catalog Service
Catalog queries and admin writes over the sections -> brands -> lines ->
products tree

Reads come from the Realtime Database. If a database read fails the
service switches to the bundled JSON catalog and keeps using it for the
rest of the process. Writes are only possible while the database is the
active source.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from liquido.connectors.firebase_connector import FirebaseError
from liquido.domain.catalog import Brand, Line, Product, Section, parse_sections
from liquido.repositories.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)

SOURCE_FIREBASE = "firebase"
SOURCE_JSON = "json"


class CatalogNotFoundError(LookupError):
    """Section, brand, line or product does not exist"""


class CatalogUnavailableError(RuntimeError):
    """No usable catalog source for the requested operation"""


class CatalogValidationError(ValueError):
    """Item cannot be stored as given"""


def _require_product_ids(products: List[Product]) -> None:
    """Products are stored keyed by id, so an empty id cannot be written"""
    for product in products:
        if not product.id:
            raise CatalogValidationError(
                f"Product id is empty: name '{product.name}' has no letters or digits to build one from"
            )


class CatalogService:
    """
    Service for catalog retrieval, search and admin CRUD

    All mutations rewrite the affected section node as a whole; no
    concurrency control (last write wins).
    """

    def __init__(self, repository: Optional[CatalogRepository], fallback_path: str):
        """
        Args:
            repository: Database repository, None when the database is not configured
            fallback_path: JSON file shaped {"catalog": {"sections": [...]}}
        """
        self.repository = repository
        self.fallback_path = Path(fallback_path)
        self.use_firebase = repository is not None
        self._fallback_sections: Optional[List[Section]] = None

    @property
    def source(self) -> str:
        return SOURCE_FIREBASE if self.use_firebase else SOURCE_JSON

    # =========================================================================
    # Sources
    # =========================================================================

    def _load_fallback(self) -> List[Section]:
        """Load (once) the bundled JSON catalog"""
        if self._fallback_sections is not None:
            return self._fallback_sections

        try:
            with open(self.fallback_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading catalog from {self.fallback_path}: {e}")
            raise CatalogUnavailableError(f"Failed to load catalog: {e}") from e

        self._fallback_sections = parse_sections((data.get("catalog") or {}).get("sections"))
        logger.info(f"Loaded {len(self._fallback_sections)} sections from {self.fallback_path}")
        return self._fallback_sections

    async def get_sections(self) -> List[Section]:
        return await self.load_catalog()

    async def load_catalog(self) -> List[Section]:
        """Get all sections from the active source"""
        if self.use_firebase:
            try:
                return await self.repository.get_sections()
            except FirebaseError as e:
                logger.warning(f"Firebase load failed, falling back to JSON: {e}")
                self.use_firebase = False
        return self._load_fallback()

    async def _require_section_nodes(self) -> List[Tuple[str, Section]]:
        if not self.use_firebase:
            raise CatalogUnavailableError("Firebase not available. Cannot modify the catalog.")
        return await self.repository.get_section_nodes()

    async def _get_section_node(self, section_id: str) -> Tuple[str, Section]:
        for key, section in await self._require_section_nodes():
            if section.id == section_id:
                return key, section
        raise CatalogNotFoundError(f"Section {section_id} not found")

    # =========================================================================
    # Queries
    # =========================================================================

    async def get_section(self, section_id: str) -> Optional[Section]:
        sections = await self.get_sections()
        return next((s for s in sections if s.id == section_id), None)

    async def get_brands_by_section(self, section_id: str) -> List[Brand]:
        section = await self.get_section(section_id)
        return section.brands if section else []

    async def get_all_brands(self) -> List[Dict[str, Any]]:
        """
        All brands of all sections, annotated with sectionId/sectionName

        A brand appears once per section it belongs to.
        """
        brands = []
        seen = set()
        for section in await self.get_sections():
            for brand in section.brands:
                key = f"{section.id}-{brand.name}"
                if key in seen:
                    continue
                seen.add(key)
                brands.append({**brand.model_dump(), "sectionId": section.id, "sectionName": section.name})
        return brands

    async def get_brand_by_name(self, brand_name: str) -> Optional[Brand]:
        """Case-insensitive lookup across sections (first match)"""
        wanted = brand_name.lower()
        for section in await self.get_sections():
            for brand in section.brands:
                if brand.name.lower() == wanted:
                    return brand
        return None

    async def get_brand_by_name_in_section(self, section_id: str, brand_name: str) -> Optional[Brand]:
        wanted = brand_name.lower()
        brands = await self.get_brands_by_section(section_id)
        return next((b for b in brands if b.name.lower() == wanted), None)

    async def get_brand_lines(self, brand_name: str, section_id: str = None) -> List[Line]:
        if section_id:
            brand = await self.get_brand_by_name_in_section(section_id, brand_name)
        else:
            brand = await self.get_brand_by_name(brand_name)
        return brand.lines if brand else []

    @staticmethod
    def _line_view(line: Line, brand: Brand) -> Dict[str, Any]:
        return {**line.model_dump(), "brandName": brand.name, "brandLogo": brand.logo_url}

    async def get_all_lines_by_section(self, section_id: str) -> List[Dict[str, Any]]:
        """Lines of every brand in a section, annotated with brandName/brandLogo"""
        return [
            self._line_view(line, brand)
            for brand in await self.get_brands_by_section(section_id)
            for line in brand.lines
        ]

    async def get_all_lines(self) -> List[Dict[str, Any]]:
        """Lines of all sections, also annotated with sectionId/sectionName"""
        lines = []
        for section in await self.get_sections():
            for brand in section.brands:
                for line in brand.lines:
                    lines.append({
                        **self._line_view(line, brand),
                        "sectionId": section.id,
                        "sectionName": section.name
                    })
        return lines

    async def search_brands(self, query: str) -> List[Dict[str, Any]]:
        """Case-insensitive substring match on brand name"""
        needle = query.lower()
        return [b for b in await self.get_all_brands() if needle in b["name"].lower()]

    async def get_brands_with_lines(self, section_id: str = None) -> List[Dict[str, Any]]:
        """Brands that have at least one product line"""
        if section_id:
            section = await self.get_section(section_id)
            if not section:
                return []
            brands = [
                {**b.model_dump(), "sectionId": section.id, "sectionName": section.name}
                for b in section.brands
            ]
        else:
            brands = await self.get_all_brands()
        return [b for b in brands if b["lines"]]

    @staticmethod
    def _product_view(product: Product, section: Section, brand: Brand, line: Line) -> Dict[str, Any]:
        return {
            **product.to_dict(),
            "sectionId": section.id,
            "sectionName": section.name,
            "brandName": brand.name,
            "brandLogo": brand.logo_url,
            "lineName": line.name,
            "lineImage": line.image_url,
        }

    async def get_products_by_line(self, section_id: str, brand_name: str, line_name: str) -> List[Dict[str, Any]]:
        section = await self.get_section(section_id)
        if not section:
            return []
        brand = section.find_brand(brand_name)
        if not brand:
            return []
        line = brand.find_line(line_name)
        if not line:
            return []
        return [self._product_view(p, section, brand, line) for p in line.products]

    async def get_product(
        self,
        section_id: str,
        brand_name: str,
        line_name: str,
        product_id: str
    ) -> Optional[Dict[str, Any]]:
        products = await self.get_products_by_line(section_id, brand_name, line_name)
        return next((p for p in products if p["id"] == product_id), None)

    @classmethod
    def _section_products(cls, section: Section) -> List[Dict[str, Any]]:
        return [
            cls._product_view(product, section, brand, line)
            for brand in section.brands
            for line in brand.lines
            for product in line.products
        ]

    async def get_all_products_by_section(self, section_id: str) -> List[Dict[str, Any]]:
        section = await self.get_section(section_id)
        return self._section_products(section) if section else []

    async def get_all_products(self) -> List[Dict[str, Any]]:
        products = []
        for section in await self.get_sections():
            products.extend(self._section_products(section))
        return products

    async def search_products(self, query: str, section_id: str = None) -> List[Dict[str, Any]]:
        """Case-insensitive substring match on product, brand and line fields"""
        if section_id:
            products = await self.get_all_products_by_section(section_id)
        else:
            products = await self.get_all_products()

        needle = query.lower()
        fields = ("name", "description", "flavorProfile", "brandName", "lineName")
        return [
            p for p in products
            if any(needle in (p.get(f) or "").lower() for f in fields)
        ]

    # =========================================================================
    # Admin writes
    # =========================================================================

    async def save_brand(self, section_id: str, brand: Brand) -> None:
        """Add a brand, or replace the one with the same name"""
        for line in brand.lines:
            _require_product_ids(line.products)
        key, section = await self._get_section_node(section_id)

        for i, existing in enumerate(section.brands):
            if existing.name == brand.name:
                section.brands[i] = brand
                break
        else:
            section.brands.append(brand)

        await self.repository.save_section(key, section)
        logger.info(f"Saved brand '{brand.name}' in section {section_id}")

    async def save_product_line(self, section_id: str, brand_name: str, line: Line) -> None:
        """
        Add a line, or replace the one with the same name

        The brand is created (empty logo and website) when it does not exist.
        """
        _require_product_ids(line.products)
        key, section = await self._get_section_node(section_id)

        brand = section.find_brand(brand_name)
        if brand is None:
            wanted = brand_name.lower()
            brand = next((b for b in section.brands if b.name.lower() == wanted), None)

        if brand is None:
            section.brands.append(Brand(name=brand_name, lines=[line]))
        else:
            for i, existing in enumerate(brand.lines):
                if existing.name == line.name:
                    brand.lines[i] = line
                    break
            else:
                brand.lines.append(line)

        await self.repository.save_section(key, section)
        logger.info(f"Saved line '{line.name}' of brand '{brand_name}' in section {section_id}")

    async def delete_brand(self, section_id: str, brand_name: str) -> None:
        """Remove a brand from its section; other sections are not written"""
        key, section = await self._get_section_node(section_id)

        remaining = [b for b in section.brands if b.name != brand_name]
        if len(remaining) == len(section.brands):
            raise CatalogNotFoundError(f"Brand {brand_name} not found in section {section_id}")

        section.brands = remaining
        await self.repository.save_section(key, section)
        logger.info(f"Deleted brand '{brand_name}' from section {section_id}")

    def _find_brand(self, section: Section, brand_name: str) -> Brand:
        brand = section.find_brand(brand_name)
        if brand is None:
            raise CatalogNotFoundError(f"Brand {brand_name} not found in section {section.id}")
        return brand

    def _find_line(self, brand: Brand, line_name: str) -> Line:
        line = brand.find_line(line_name)
        if line is None:
            raise CatalogNotFoundError(f"Line {line_name} not found in brand {brand.name}")
        return line

    async def delete_product_line(self, section_id: str, brand_name: str, line_name: str) -> None:
        key, section = await self._get_section_node(section_id)
        brand = self._find_brand(section, brand_name)
        self._find_line(brand, line_name)

        brand.lines = [line for line in brand.lines if line.name != line_name]
        await self.repository.save_section(key, section)
        logger.info(f"Deleted line '{line_name}' of brand '{brand_name}' in section {section_id}")

    async def save_product(self, section_id: str, brand_name: str, line_name: str, product: Product) -> str:
        """
        Add a product to a line, or replace the one with the same id

        Returns:
            Product id
        """
        _require_product_ids([product])
        key, section = await self._get_section_node(section_id)
        line = self._find_line(self._find_brand(section, brand_name), line_name)

        for i, existing in enumerate(line.products):
            if existing.id == product.id:
                line.products[i] = product
                break
        else:
            line.products.append(product)

        await self.repository.save_section(key, section)
        logger.info(f"Saved product '{product.id}' in {section_id}/{brand_name}/{line_name}")
        return product.id

    async def delete_product(self, section_id: str, brand_name: str, line_name: str, product_id: str) -> None:
        key, section = await self._get_section_node(section_id)
        line = self._find_line(self._find_brand(section, brand_name), line_name)

        if line.find_product(product_id) is None:
            raise CatalogNotFoundError(f"Product {product_id} not found in line {line_name}")

        line.products = [p for p in line.products if p.id != product_id]
        await self.repository.save_section(key, section)
        logger.info(f"Deleted product '{product_id}' from {section_id}/{brand_name}/{line_name}")
