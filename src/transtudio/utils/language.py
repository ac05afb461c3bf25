"""Target language codes, aliases and display labels."""

from enum import Enum
from typing import Dict


class TargetLanguage(str, Enum):
    """Languages a document can be translated into."""

    ENGLISH = "en"
    CHINESE_SIMPLIFIED = "zh"

    @property
    def label(self) -> str:
        """Human readable name used inside translation prompts."""
        return LANGUAGE_LABELS[self]


LANGUAGE_LABELS: Dict[TargetLanguage, str] = {
    TargetLanguage.ENGLISH: "English",
    TargetLanguage.CHINESE_SIMPLIFIED: "Simplified Chinese",
}

# Common aliases mapping to the canonical codes
LANGUAGE_ALIASES: Dict[str, str] = {
    # English aliases
    "eng": "en",
    "english": "en",
    "en-us": "en",
    "en-gb": "en",
    # Chinese aliases
    "chi": "zh",
    "zho": "zh",
    "chinese": "zh",
    "mandarin": "zh",
    "zh-cn": "zh",
    "zh-hans": "zh",
    "chinese-simplified": "zh",
    "simplified chinese": "zh",
    "中文": "zh",
}


class LanguageError(ValueError):
    """Exception raised for unsupported target languages."""

    pass


def normalize_language(code: str) -> TargetLanguage:
    """Normalize a language code or alias to a supported target language.

    Args:
        code: A language code or alias (e.g., 'en', 'english', 'zh-CN')

    Returns:
        The matching target language

    Raises:
        LanguageError: If the language is not one of the supported targets
    """
    normalized = (code or "").lower().strip()

    try:
        return TargetLanguage(normalized)
    except ValueError:
        pass

    if normalized in LANGUAGE_ALIASES:
        return TargetLanguage(LANGUAGE_ALIASES[normalized])

    raise LanguageError(
        f"Unsupported target language: {code}. "
        f"Supported languages: {', '.join(lang.value for lang in TargetLanguage)}"
    )
