"""
Localized strings for user-facing dialogs

Lookup order for a key: the user's catalog for the language, the catalog
shipped with the package for that language, the shipped English catalog,
then the caller's default.
"""

import json
from pathlib import Path
from typing import Dict, Optional

from launcherdeps.utils.logger import get_logger
from launcherdeps.utils.paths import get_locales_dir

BUILTIN_LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"
FALLBACK_LANGUAGE = "en"


class Translator:
    """Looks up dialog strings in JSON catalogs, falling back to defaults"""

    def __init__(self, language: str = FALLBACK_LANGUAGE, locales_dir=None,
                 builtin_dir: Path = BUILTIN_LOCALES_DIR):
        self.logger = get_logger(__name__)
        self.language = language
        self.locales_dir = Path(locales_dir) if locales_dir else get_locales_dir()
        self.builtin_dir = Path(builtin_dir)

        self.catalog: Dict[str, str] = {}
        languages = [FALLBACK_LANGUAGE] if language == FALLBACK_LANGUAGE else [FALLBACK_LANGUAGE, language]
        for lang in languages:
            self.catalog.update(self._load_catalog(self.builtin_dir / f"{lang}.json"))
        self.catalog.update(self._load_catalog(self.locales_dir / f"{language}.json"))

    def _load_catalog(self, catalog_file: Path) -> Dict[str, str]:
        if not catalog_file.exists():
            return {}

        try:
            with open(catalog_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except Exception as e:
            self.logger.warning(f"Failed to load translations from {catalog_file}: {e}")
            return {}

        if not isinstance(data, dict):
            self.logger.warning(f"Ignoring malformed translation catalog: {catalog_file}")
            return {}

        # Catalogs may be nested ({"box": {"error": {...}}}) or flat dotted keys
        return self._flatten(data)

    def _flatten(self, data: dict, prefix: str = "") -> Dict[str, str]:
        flat = {}
        for key, value in data.items():
            full_key = f"{prefix}.{key}" if prefix else key
            if isinstance(value, dict):
                flat.update(self._flatten(value, full_key))
            else:
                flat[full_key] = str(value)
        return flat

    def t(self, key: str, default: Optional[str] = None) -> str:
        """Translate key, returning default (or the key itself) when missing"""
        if key in self.catalog:
            return self.catalog[key]
        return default if default is not None else key
