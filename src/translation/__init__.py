"""
Translation module for the Field Name Translator.

This module provides the network translation backends, the ordered
provider chain with its offline dictionary fallback, the persisted
provider configuration, and script-based input language detection.
"""

from .errors import (
    TranslationError,
    EmptyInputError,
    BackendError,
    BackendUnreachable,
    BackendRejected,
    BackendNoResult,
    InvalidCredentials,
    NoProviderAvailable,
)
from .schema import Language, ProviderName, TranslationRequest, TranslationResult
from .config_store import (
    ConfigStore,
    JsonFileStorage,
    KeyValueStorage,
    MemoryStorage,
    ProviderConfig,
    ProviderCredentials,
    TranslationConfig,
    default_provider_config,
)
from .fallback import FallbackDictionaryTranslator
from .providers import (
    BaseBackend,
    MyMemoryBackend,
    LibreTranslateBackend,
    BaiduBackend,
    default_backends,
)
from .chain import TranslationProviderChain
from .language_detector import LanguageDetector, DetectionResult, detect_language

__all__ = [
    # Errors
    "TranslationError",
    "EmptyInputError",
    "BackendError",
    "BackendUnreachable",
    "BackendRejected",
    "BackendNoResult",
    "InvalidCredentials",
    "NoProviderAvailable",
    # Types
    "Language",
    "ProviderName",
    "TranslationRequest",
    "TranslationResult",
    # Configuration
    "ConfigStore",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "ProviderConfig",
    "ProviderCredentials",
    "TranslationConfig",
    "default_provider_config",
    # Backends and chain
    "FallbackDictionaryTranslator",
    "BaseBackend",
    "MyMemoryBackend",
    "LibreTranslateBackend",
    "BaiduBackend",
    "default_backends",
    "TranslationProviderChain",
    # Language detection
    "LanguageDetector",
    "DetectionResult",
    "detect_language",
]
