"""Locale resolution for mapping stored language codes to a supported Locale."""

from typing import Any, Iterable, Mapping, Optional

import structlog
from infrastructure.i18n.models import Locale

logger = structlog.get_logger().bind(component="i18n.resolver")

LANGUAGE_CODE_KEY = "language_code"


class LocaleResolver:
    """Resolves a user's locale from the raw code stored in their settings.

    Resolution is total: anything that is not exactly the value of a
    supported locale resolves to ``default_locale``. Matching is
    case-sensitive and region suffixes are not normalized ("en-US" and
    "EN" both resolve to the default).
    """

    def __init__(
        self,
        default_locale: Locale = Locale.EN,
        supported_locales: Optional[Iterable[Locale]] = None,
    ):
        self.default_locale = default_locale
        self.supported_locales = frozenset(supported_locales or Locale)
        self.log = logger.bind(default_locale=default_locale.value)

    def resolve_from_code(self, raw_code: Optional[str]) -> Locale:
        """Map a raw stored code (or its absence) to a supported locale."""
        if not raw_code or not isinstance(raw_code, str):
            return self.default_locale

        for locale in self.supported_locales:
            if locale.value == raw_code:
                return locale

        self.log.debug("unsupported_language_code", raw_code=raw_code)
        return self.default_locale

    def resolve_from_settings(
        self, settings_json: Optional[Mapping[str, Any]]
    ) -> Locale:
        """Resolve from the ``language_code`` entry of a preference bag."""
        return self.resolve_from_code((settings_json or {}).get(LANGUAGE_CODE_KEY))


_default_resolver = LocaleResolver()


def resolve_locale(raw_code: Optional[str]) -> Locale:
    """Resolve ``raw_code`` against all supported locales with the default fallback."""
    return _default_resolver.resolve_from_code(raw_code)
