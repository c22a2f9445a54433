"""Translation models for i18n system.

Defines core data structures for managing message catalogs and locales.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Locale(str, Enum):
    """Supported locale identifiers.

    Values are the bare language codes stored in a user's
    ``settings_json["language_code"]``.
    """

    EN = "en"
    FA = "fa"

    @classmethod
    def from_string(cls, locale_str: str) -> "Locale":
        """Convert string to Locale enum.

        Args:
            locale_str: Locale string (e.g., "en", "fa"). Matching is exact.

        Returns:
            Matching Locale enum value.

        Raises:
            ValueError: If locale string is not supported.
        """
        try:
            return cls(locale_str)
        except ValueError as e:
            raise ValueError(f"Unsupported locale: {locale_str}") from e


@dataclass(frozen=True)
class TranslationKey:
    """Dotted key path addressing a template inside a locale's catalog.

    Keys may be any depth (e.g., "common.back", "screens.settings.choose_option").
    Frozen to ensure immutability and hashability.

    Attributes:
        path: Original dot-delimited key path.
    """

    path: str

    @property
    def segments(self) -> Tuple[str, ...]:
        """Path split on dots, e.g. ("screens", "settings", "choose_option")."""
        return tuple(self.path.split("."))

    def __str__(self) -> str:
        return self.path

    @classmethod
    def from_string(cls, key_string: str) -> "TranslationKey":
        """Create TranslationKey from a dot-separated string."""
        return cls(path=key_string)


@dataclass
class TranslationCatalog:
    """Container for the message tree of a single locale.

    Attributes:
        locale: The Locale this catalog is for.
        messages: Nested dict tree whose leaves are template strings.
        loaded_at: Timestamp (ISO 8601) when translations were loaded.
    """

    locale: Locale
    messages: Dict[str, Any] = field(default_factory=dict)
    loaded_at: Optional[str] = None

    def get_message(self, key: TranslationKey) -> Optional[str]:
        """Walk the tree along ``key`` and return the leaf as text.

        Returns None when any segment is missing, a node on the way is not a
        mapping, the value is None, or the path stops on a subtree.
        """
        current: Any = self.messages
        for segment in key.segments:
            if not isinstance(current, dict):
                return None
            current = current.get(segment)
            if current is None:
                return None

        if isinstance(current, dict):
            return None
        return str(current)

    def has_message(self, key: TranslationKey) -> bool:
        """Check if a leaf template exists at ``key``."""
        return self.get_message(key) is not None


def merge_message_trees(target: Dict[str, Any], source: Dict[str, Any]) -> None:
    for name, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(name), dict):
            merge_message_trees(target[name], value)
        else:
            target[name] = value
