"""
Identifier Naming Conversion Module.

Turns natural-language phrases (typically a translated field name such as
``"user name"``) into programming identifier conventions:

* ``camelCase``   — :func:`to_camel_case`
* ``snake_case``  — :func:`to_snake_case`
* ``alllower`` / ``ALLUPPER`` — :func:`to_lower_identifier`,
  :func:`to_upper_identifier`

:func:`to_snake_case` branches on the shape of its input:

::

    contains whitespace        → split on spaces, join with "_"
    contains an uppercase A-Z  → camelCase / PascalCase boundary rules
                                 (acronym runs handled: XMLHttp → XML_Http)
    all lowercase, one token   → decided by ``handle_lowercase``

Lowercase segmentation
----------------------
A single all-lowercase token like ``"userid"`` carries no boundary
information.  :func:`smart_split` guesses boundaries with two cheap rules
(consonant clusters and a handful of common field words).  It is a
best-effort heuristic and is **not** guaranteed to be correct;
:func:`segment_lowercase` returns the same guess together with an
``ambiguous`` flag so the UI can ask the user instead of trusting it.

Example
-------
>>> from src.naming.converter import to_camel_case, to_snake_case
>>> to_camel_case("user name")
'userName'
>>> to_snake_case("XMLHttpRequest")
'xml_http_request'
>>> to_snake_case("userid", handle_lowercase="split")
'user_id'
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class LowercaseHandling(Enum):
    """How :func:`to_snake_case` treats a single all-lowercase token."""
    KEEP = "keep"
    SPLIT = "split"
    ASK = "ask"


@dataclass
class SegmentationResult:
    """
    Outcome of :func:`segment_lowercase`.

    Attributes:
        original: The token as given.
        segmented: The ``_``-joined guess from :func:`smart_split`.
        ambiguous: ``False`` only when every part of the guess is one of
            :data:`COMMON_FIELD_WORDS`; callers should prompt otherwise.
    """
    original: str
    segmented: str
    ambiguous: bool


# Words frequent enough in field names to force a boundary before them.
COMMON_FIELD_WORDS: Tuple[str, ...] = ("data", "user", "name", "id", "type", "status")

_DECISION_PREFIX = "[lowercase identifier needs a decision: "

_NON_WORD_OR_SPACE = re.compile(r"[^A-Za-z0-9_\s]")
_NON_WORD = re.compile(r"[^A-Za-z0-9_]")
_WHITESPACE = re.compile(r"\s+")
_HAS_UPPER = re.compile(r"[A-Z]")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_CONSONANT_CLUSTER = re.compile(r"([bcdfghjklmnpqrstvwxyz]{2,})([aeiou])")
_REPEATED_UNDERSCORE = re.compile(r"_+")


def _words(phrase: str):
    cleaned = _NON_WORD_OR_SPACE.sub("", phrase.strip())
    return [w for w in _WHITESPACE.split(cleaned) if w]


def to_camel_case(phrase):
    """
    Convert a space-separated phrase to ``camelCase``.

    Punctuation is dropped, whitespace runs are collapsed, the first word is
    lowercased and every later word is capitalised.

    Args:
        phrase: Phrase such as ``"user name"``.

    Returns:
        The camelCase identifier.  Empty or non-string input is returned
        unchanged.
    """
    if not phrase or not isinstance(phrase, str):
        return phrase

    words = _words(phrase)
    return "".join(
        word.lower() if index == 0 else word[:1].upper() + word[1:].lower()
        for index, word in enumerate(words)
    )


def decision_sentinel(token: str) -> str:
    """Return the placeholder produced by ``handle_lowercase="ask"``."""
    return f"{_DECISION_PREFIX}{token}]"


def is_decision_sentinel(value) -> bool:
    """Return ``True`` if *value* is an ``ask`` placeholder, not an identifier."""
    return isinstance(value, str) and value.startswith(_DECISION_PREFIX) and value.endswith("]")


def to_snake_case(
    phrase,
    handle_lowercase: Optional[Union[LowercaseHandling, str]] = None,
):
    """
    Convert a phrase or camelCase identifier to ``snake_case``.

    Args:
        phrase: Input phrase or identifier.
        handle_lowercase: Policy for single all-lowercase tokens, which carry
            no boundary information.  ``"keep"`` (or ``None``) returns the
            token unchanged, ``"split"`` applies :func:`smart_split`, and
            ``"ask"`` returns :func:`decision_sentinel` so the caller can
            collect a decision from the user.

    Returns:
        The snake_case identifier.  Empty or non-string input is returned
        unchanged.

    Raises:
        ValueError: If ``handle_lowercase`` is not a known policy.
    """
    if not phrase or not isinstance(phrase, str):
        return phrase

    if _WHITESPACE.search(phrase):
        return "_".join(_words(phrase)).lower()

    if _HAS_UPPER.search(phrase):
        result = _ACRONYM_BOUNDARY.sub(r"\1_\2", phrase)
        result = _CAMEL_BOUNDARY.sub(r"\1_\2", result)
        return result.lower()

    if handle_lowercase is None:
        return phrase

    policy = LowercaseHandling(handle_lowercase)
    if policy is LowercaseHandling.SPLIT:
        return smart_split(phrase)
    if policy is LowercaseHandling.ASK:
        return decision_sentinel(phrase)
    return phrase


def smart_split(token: str) -> str:
    """
    Guess word boundaries in an all-lowercase token.

    Best effort only.  A boundary goes before each run of two or more
    consonants that is followed by a vowel, and before every occurrence of
    a :data:`COMMON_FIELD_WORDS` entry.  Redundant underscores are then
    collapsed and trimmed.

    Args:
        token: Identifier such as ``"userid"``.

    Returns:
        Underscore-separated guess, e.g. ``"user_id"``.
    """
    result = token.lower()
    result = _CONSONANT_CLUSTER.sub(r"_\1\2", result)

    for word in COMMON_FIELD_WORDS:
        if word in result:
            result = result.replace(word, "_" + word)

    return _REPEATED_UNDERSCORE.sub("_", result).strip("_")


def segment_lowercase(token: str) -> SegmentationResult:
    """
    Run :func:`smart_split` and report whether the guess is trustworthy.

    Args:
        token: All-lowercase identifier.

    Returns:
        A :class:`SegmentationResult`.
    """
    segmented = smart_split(token)
    parts = [p for p in segmented.split("_") if p]
    ambiguous = not parts or any(p not in COMMON_FIELD_WORDS for p in parts)
    return SegmentationResult(original=token, segmented=segmented, ambiguous=ambiguous)


def to_lower_identifier(text: str) -> str:
    """Lowercase *text* and drop every character outside ``[A-Za-z0-9_]``."""
    return _NON_WORD.sub("", text.lower())


def to_upper_identifier(text: str) -> str:
    """Uppercase *text* and drop every character outside ``[A-Za-z0-9_]``."""
    return _NON_WORD.sub("", text.upper())
