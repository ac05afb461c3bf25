"""Prompts used for token counting and translation."""

from transtudio.core.translation.interface import TranslationPrompt
from transtudio.utils.language import TargetLanguage

# Shared by estimation and generation so counted system tokens match billed ones
TRANSLATION_SYSTEM_PROMPT = (
    "You are a professional translator. Preserve technical accuracy, attend to "
    "idioms, and keep formatting aligned with the provided text."
)


def build_user_prompt(target_language: TargetLanguage, text: str) -> str:
    """Embed the source text in the translation instruction."""
    return (
        f"Translate the following document into {target_language.label}. "
        "Keep the tone neutral and describe cultural notes only when helpful:"
        f"\n\n{text}"
    )


def build_translation_prompt(
    target_language: TargetLanguage,
    text: str,
    temperature: float = 0.1,
) -> TranslationPrompt:
    """Create the full prompt for translating ``text``."""
    return TranslationPrompt(
        system=TRANSLATION_SYSTEM_PROMPT,
        user=build_user_prompt(target_language, text),
        temperature=temperature,
    )
