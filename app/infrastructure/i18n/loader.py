"""Translation loading interface and implementations.

Defines the contract for loading message catalogs and provides the
YAML-based loader used for the bundled ``locales`` directory.
"""

import copy
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Set, Tuple

import yaml

import structlog
from infrastructure.i18n.models import Locale, TranslationCatalog, merge_message_trees

logger = structlog.get_logger()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class TranslationLoader(ABC):
    """Abstract base for translation loaders."""

    @abstractmethod
    def load(self, locale: Locale) -> TranslationCatalog:
        """Load translations for a specific locale.

        Raises:
            FileNotFoundError: If no translations exist for the locale.
            ValueError: If translation format is invalid.
        """
        pass

    @abstractmethod
    def load_all(self) -> Dict[Locale, TranslationCatalog]:
        """Load translations for all available locales."""
        pass

    def clear_cache(self) -> None:
        """Drop cached catalogs so the next load re-reads the source."""


class DictTranslationLoader(TranslationLoader):
    """Loader over catalogs already held in memory.

    Attributes:
        data: Mapping of locale to its message tree.
    """

    def __init__(self, data: Mapping[Locale, Dict[str, Any]]):
        self.data = dict(data)

    def load(self, locale: Locale) -> TranslationCatalog:
        if locale not in self.data:
            raise FileNotFoundError(f"No translations defined for locale {locale.value}")
        catalog = TranslationCatalog(locale=locale, loaded_at=_now_iso())
        merge_message_trees(catalog.messages, copy.deepcopy(self.data[locale]))
        return catalog

    def load_all(self) -> Dict[Locale, TranslationCatalog]:
        return {locale: self.load(locale) for locale in self.data}


def locale_from_filename(path: Path) -> Optional[Locale]:
    """``screens.fa.yml`` -> Locale.FA; None for names without a known locale."""
    parts = path.name.split(".")
    if len(parts) != 3 or parts[2] != "yml":
        return None
    try:
        return Locale.from_string(parts[1])
    except ValueError:
        return None


class YAMLTranslationLoader(TranslationLoader):
    """Reads catalogs from ``<namespace>.<locale>.yml`` files.

    All files of one locale are deep-merged into a single catalog, in file
    name order. Top-level keys of each file are namespaces; anything that
    is not a mapping at that level is skipped with a warning.
    """

    def __init__(self, translations_dir: Path, use_cache: bool = True):
        """
        Args:
            translations_dir: Directory holding the YAML files.
            use_cache: Keep parsed catalogs until clear_cache().

        Raises:
            ValueError: The directory does not exist.
        """
        self.translations_dir = Path(translations_dir)
        if not self.translations_dir.is_dir():
            raise ValueError(
                f"Translations directory not found: {self.translations_dir}"
            )
        self.use_cache = use_cache
        self.cache: Dict[Locale, TranslationCatalog] = {}
        logger.info(
            "initialized_yaml_loader",
            translations_dir=str(self.translations_dir),
            use_cache=use_cache,
        )

    def available_locales(self) -> Set[Locale]:
        found = set()
        for path in self.translations_dir.glob("*.yml"):
            locale = locale_from_filename(path)
            if locale is None:
                logger.warning("skipped_unknown_locale_file", file=str(path))
                continue
            found.add(locale)
        return found

    def load(self, locale: Locale) -> TranslationCatalog:
        """Parse and merge every file for ``locale``.

        Raises:
            FileNotFoundError: No file for the locale.
            ValueError: A file is not valid YAML.
        """
        cached = self.cache.get(locale) if self.use_cache else None
        if cached is not None:
            return cached

        paths = sorted(self.translations_dir.glob(f"*.{locale.value}.yml"))
        if not paths:
            raise FileNotFoundError(
                f"No translation files for locale {locale.value} in {self.translations_dir}"
            )

        catalog = TranslationCatalog(locale=locale, loaded_at=_now_iso())
        for path in paths:
            for namespace, subtree in self._read_namespaces(path):
                merge_message_trees(catalog.messages, {namespace: subtree})

        logger.info(
            "loaded_translations",
            locale=locale.value,
            file_count=len(paths),
            namespace_count=len(catalog.messages),
        )
        if self.use_cache:
            self.cache[locale] = catalog
        return catalog

    def load_all(self) -> Dict[Locale, TranslationCatalog]:
        """Load every locale that has at least one file.

        Raises:
            ValueError: The directory holds no catalog files.
        """
        locales = self.available_locales()
        if not locales:
            raise ValueError(f"No translation files found in {self.translations_dir}")
        return {locale: self.load(locale) for locale in locales}

    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("cleared_translation_cache")

    def _read_namespaces(self, path: Path) -> Iterator[Tuple[str, Dict[str, Any]]]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error("yaml_parse_error", file=str(path), error=str(e))
            raise ValueError(f"Failed to parse {path}: {e}") from e

        if data is None:
            return
        if not isinstance(data, dict):
            logger.warning("invalid_yaml_format", file=str(path), expected="dict")
            return

        for namespace, subtree in data.items():
            if isinstance(subtree, dict):
                yield namespace, subtree
            else:
                logger.warning(
                    "invalid_namespace_format", file=str(path), namespace=namespace
                )
