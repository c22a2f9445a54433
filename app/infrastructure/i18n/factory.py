"""Builders for the bundled message catalogs."""

from pathlib import Path
from typing import Optional

import structlog
from infrastructure.i18n.loader import YAMLTranslationLoader
from infrastructure.i18n.models import Locale
from infrastructure.i18n.translator import Translator

logger = structlog.get_logger()

# app/infrastructure/i18n/factory.py -> app/locales
BUNDLED_LOCALES_DIR = Path(__file__).resolve().parents[2] / "locales"


def default_translations_dir() -> Path:
    return BUNDLED_LOCALES_DIR


def create_translator(
    translations_dir: Optional[Path] = None,
    default_locale: Locale = Locale.EN,
    use_cache: bool = True,
    preload: bool = True,
) -> Translator:
    """Translator over a directory of ``<namespace>.<locale>.yml`` files.

    Catalogs are read once here; interactions only ever read them.

    Args:
        translations_dir: Catalog directory (default: the bundled app/locales).
        default_locale: Locale used when a caller passes none.
        use_cache: Keep parsed catalogs in the loader.
        preload: Load every locale now instead of on demand.

    Raises:
        ValueError: The directory does not exist, or preload found no files.

    Usage:
        translator = create_translator()
        translator.translate_message("screens.settings.choose_option", Locale.FA)
    """
    directory = translations_dir or default_translations_dir()
    translator = Translator(
        loader=YAMLTranslationLoader(directory, use_cache=use_cache),
        default_locale=default_locale,
    )

    if preload:
        translator.load_all()

    logger.info(
        "translator_created",
        translations_dir=str(directory),
        preload=preload,
        locale_count=len(translator.get_available_locales()),
    )
    return translator
