"""
Naming module for the Field Name Translator.

This module converts translated phrases into identifier naming
conventions (camelCase, snake_case, all-lower, all-upper) and guesses
word boundaries in ambiguous all-lowercase identifiers.
"""

from .converter import (
    COMMON_FIELD_WORDS,
    LowercaseHandling,
    SegmentationResult,
    decision_sentinel,
    is_decision_sentinel,
    segment_lowercase,
    smart_split,
    to_camel_case,
    to_lower_identifier,
    to_snake_case,
    to_upper_identifier,
)

__all__ = [
    "COMMON_FIELD_WORDS",
    "LowercaseHandling",
    "SegmentationResult",
    "decision_sentinel",
    "is_decision_sentinel",
    "segment_lowercase",
    "smart_split",
    "to_camel_case",
    "to_lower_identifier",
    "to_snake_case",
    "to_upper_identifier",
]
