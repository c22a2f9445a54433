"""Feature-level fixtures for i18n system tests."""

import pytest
import yaml

from infrastructure.i18n import YAMLTranslationLoader


@pytest.fixture
def temp_translations_dir(tmp_path):
    """Create temporary directory with sample YAML translation files.

    Returns a directory structure like:
    - common.en.yml
    - common.fa.yml
    - screens.en.yml
    - screens.fa.yml
    """
    files = {
        "common.en.yml": {"common": {"back": "Back", "home": "Home"}},
        "common.fa.yml": {"common": {"back": "بازگشت", "home": "خانه"}},
        "screens.en.yml": {
            "screens": {
                "settings": {"choose_option": "Choose an option:"},
                "language": {"changed": "Language changed to {language}."},
            }
        },
        "screens.fa.yml": {
            "screens": {
                "settings": {"choose_option": "یک گزینه را انتخاب کنید:"},
            }
        },
    }
    for name, data in files.items():
        with open(tmp_path / name, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, allow_unicode=True)

    return tmp_path


@pytest.fixture
def yaml_loader(temp_translations_dir):
    """Create YAMLTranslationLoader for temporary translations directory."""
    return YAMLTranslationLoader(temp_translations_dir, use_cache=False)


@pytest.fixture
def yaml_loader_with_cache(temp_translations_dir):
    """Create YAMLTranslationLoader with caching enabled."""
    return YAMLTranslationLoader(temp_translations_dir, use_cache=True)
