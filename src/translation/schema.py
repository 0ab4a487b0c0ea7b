"""
Shared value types for the translation engine.

* :class:`Language`            — the two supported languages.
* :class:`ProviderName`        — network backends, in priority order.
* :class:`TranslationRequest`  — one validated translate call.
* :class:`TranslationResult`   — translated text plus provenance.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from .errors import EmptyInputError


class Language(Enum):
    """Languages the engine translates between."""
    ZH = "zh"
    EN = "en"

    @property
    def other(self) -> "Language":
        """The opposite language of the pair."""
        return Language.EN if self is Language.ZH else Language.ZH


class ProviderName(Enum):
    """Network translation backends.  Declaration order is priority order."""
    MYMEMORY = "mymemory"
    LIBRE = "libre"
    BAIDU = "baidu"


@dataclass(frozen=True)
class TranslationRequest:
    """
    A single translation call.

    Attributes:
        text: Stripped, non-empty text to translate.
        source_lang: Language of ``text``.
        target_lang: Language to translate into.
    """
    text: str
    source_lang: Language
    target_lang: Language

    @classmethod
    def build(
        cls,
        text: str,
        source_lang: Union[Language, str],
        target_lang: Union[Language, str],
    ) -> "TranslationRequest":
        """
        Validate raw caller input and build a request.

        Raises:
            EmptyInputError: If ``text`` is empty or whitespace only.
            ValueError: If a language code is unknown or both are equal.
        """
        if not isinstance(text, str) or not text.strip():
            raise EmptyInputError("Text to translate must not be empty.")

        source = Language(source_lang)
        target = Language(target_lang)
        if source is target:
            raise ValueError(f"Source and target language are both '{source.value}'.")

        return cls(text=text.strip(), source_lang=source, target_lang=target)


@dataclass
class TranslationResult:
    """
    Translation output with provenance.

    Attributes:
        original: The request text.
        translated: The translation (or dictionary-substituted text).
        source_lang: Source language code.
        target_lang: Target language code.
        provider: Backend that answered; ``None`` when the dictionary
            fallback produced the text.
        degraded: ``True`` when the dictionary fallback answered.
        failures: ``(provider, message)`` for each backend that failed or
            was skipped, in the order they were consulted.
    """
    original: str
    translated: str
    source_lang: str
    target_lang: str
    provider: Optional[ProviderName] = None
    degraded: bool = False
    failures: List[Tuple[str, str]] = field(default_factory=list)
