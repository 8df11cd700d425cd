"""
Component Loader
Shared HTML partials (header, footer, nav) read from disk once and served
from memory afterwards
"""
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class ComponentNotFoundError(LookupError):
    """Partial does not exist under the components directory"""


class ComponentLoader:
    """
    In-memory cache of HTML partials keyed by component path

    Paths are relative to the components directory; anything resolving
    outside of it is treated as missing.
    """

    def __init__(self, components_dir: str):
        self.components_dir = Path(components_dir).resolve()
        self._cache: Dict[str, str] = {}

    def _resolve(self, component_path: str) -> Path:
        path = (self.components_dir / component_path).resolve()
        if self.components_dir not in path.parents or not path.is_file():
            raise ComponentNotFoundError(f"Component {component_path} not found")
        return path

    def load(self, component_path: str) -> str:
        """Return the partial's HTML, reading it on first use"""
        if component_path in self._cache:
            return self._cache[component_path]

        path = self._resolve(component_path)
        html = path.read_text(encoding="utf-8")
        self._cache[component_path] = html
        logger.debug(f"Loaded component {component_path}")
        return html

    def is_cached(self, component_path: str) -> bool:
        return component_path in self._cache

    def clear_cache(self, component_path: Optional[str] = None) -> None:
        """Drop one cached partial, or all of them"""
        if component_path is None:
            self._cache.clear()
        else:
            self._cache.pop(component_path, None)
