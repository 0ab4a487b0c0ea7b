"""
Utility module for the Field Name Translator.

This module provides the self-contained MD5 digest and the request
signing helper used by the Baidu translation backend.
"""

from .signature import (
    MD5,
    md5_hexdigest,
    sign_request,
)

__all__ = [
    "MD5",
    "md5_hexdigest",
    "sign_request",
]
