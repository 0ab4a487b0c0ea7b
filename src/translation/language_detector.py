"""
Input Language Detection for field names.

Decides which direction a field name should be translated in.  Field names
are short (one to a few words), so statistical detectors have almost
nothing to work with; the decision is made on script alone:

* any CJK unified ideograph (U+4E00–U+9FA5) → ``zh``
* anything else                              → ``en``

:class:`DetectionResult` also reports the share of CJK and ASCII-letter
characters, which the web panel shows next to the result.

Example
-------
>>> from src.translation.language_detector import detect_language
>>> detect_language("用户名").language
<Language.ZH: 'zh'>
>>> detect_language("userName").language
<Language.EN: 'en'>
"""

from dataclasses import dataclass
from typing import Dict

from .schema import Language


@dataclass
class DetectionResult:
    """
    Language detection output.

    Attributes:
        language: ``Language.ZH`` or ``Language.EN``.
        script_proportions: Share of ``cjk``, ``latin`` and ``other``
            characters among non-whitespace characters.
    """
    language: Language
    script_proportions: Dict[str, float]


class LanguageDetector:
    """Script-based zh/en detector for short identifiers."""

    CJK_START = 0x4E00
    CJK_END = 0x9FA5

    def _is_cjk_char(self, char: str) -> bool:
        return self.CJK_START <= ord(char) <= self.CJK_END

    def _calculate_script_proportions(self, text: str) -> Dict[str, float]:
        chars = [c for c in text if not c.isspace()]
        if not chars:
            return {"cjk": 0.0, "latin": 0.0, "other": 0.0}

        cjk = sum(1 for c in chars if self._is_cjk_char(c))
        latin = sum(1 for c in chars if c.isascii() and c.isalpha())
        total = len(chars)
        return {
            "cjk": cjk / total,
            "latin": latin / total,
            "other": (total - cjk - latin) / total,
        }

    def contains_chinese(self, text: str) -> bool:
        """Return ``True`` if *text* holds at least one CJK ideograph."""
        return any(self._is_cjk_char(c) for c in text)

    def detect(self, text: str) -> DetectionResult:
        """
        Classify *text* as Chinese or English.

        Args:
            text: Field name to inspect.

        Returns:
            A :class:`DetectionResult`.
        """
        language = Language.ZH if self.contains_chinese(text or "") else Language.EN
        return DetectionResult(
            language=language,
            script_proportions=self._calculate_script_proportions(text or ""),
        )


def detect_language(text: str) -> DetectionResult:
    """Module-level convenience wrapper around :meth:`LanguageDetector.detect`."""
    return LanguageDetector().detect(text)
