"""
Field Name Translation Facade.

This module is the top-level entry point of the field-name translator.  It
wires together the provider chain, the persisted provider configuration and
the naming converter, and exposes the handful of operations the web panel
calls.

Flow
----
::

    text ──► TranslationRequest.build (rejects empty input)
         ──► TranslationProviderChain.resolve(request, config)
               mymemory → libre → baidu → dictionary fallback
         ──► naming conversions (camelCase, snake_case, lower, UPPER)

Configuration is an explicit value: the facade loads it once from its
:class:`~src.translation.config_store.ConfigStore` at construction, hands it
to the chain on every call, and writes it back after every mutation
(:meth:`FieldTranslationFacade.toggle_provider`,
:meth:`FieldTranslationFacade.save_baidu_credentials`).

Public symbols
--------------
* :class:`NamingVariant`            — one labelled identifier suggestion.
* :class:`FieldTranslationFacade`   — the facade.
* :func:`load_facade_from_config`   — factory using ``config.yaml``.

Example
-------
>>> from src.pipeline import FieldTranslationFacade
>>> from src.translation import ConfigStore, MemoryStorage
>>> facade = FieldTranslationFacade(ConfigStore(MemoryStorage()))
>>> facade.toggle_provider("mymemory", False)
>>> facade.translate_to_target("用户名称", "en")
'username'
>>> [v.value for v in facade.suggest_naming_variants("user name")]
['用户 名称', 'userName', 'user_name', 'username', 'USERNAME']
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional, Union

import requests
import yaml

from src.naming.converter import (
    LowercaseHandling,
    to_camel_case,
    to_lower_identifier,
    to_snake_case,
    to_upper_identifier,
)
from src.translation.chain import TranslationProviderChain
from src.translation.config_store import (
    DEFAULT_STORAGE_KEY,
    ConfigStore,
    JsonFileStorage,
    TranslationConfig,
)
from src.translation.errors import InvalidCredentials
from src.translation.language_detector import LanguageDetector
from src.translation.providers import DEFAULT_TIMEOUT, default_backends
from src.translation.schema import Language, ProviderName, TranslationRequest, TranslationResult

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.yaml"
DEFAULT_STORAGE_PATH = ".field_translator/settings.json"


class NamingVariant(NamedTuple):
    """A labelled identifier suggestion, e.g. ``("camelCase", "userName")``."""
    label: str
    value: str


class FieldTranslationFacade:
    """
    Single entry point for translating and normalising field names.

    Args:
        store: Loads and persists the provider configuration.
        chain: Provider chain; a default chain with a fresh HTTP session is
            built when omitted.
        detector: Decides the translation direction for
            :meth:`suggest_naming_variants`.

    Attributes:
        store: The configuration store.
        chain: The provider chain.
    """

    def __init__(
        self,
        store: ConfigStore,
        chain: Optional[TranslationProviderChain] = None,
        detector: Optional[LanguageDetector] = None,
    ):
        self.store = store
        self.chain = chain or TranslationProviderChain()
        self.detector = detector or LanguageDetector()
        self._config: TranslationConfig = store.load()
        logger.info(f"Loaded provider configuration: {self._config!r}")

    @property
    def config(self) -> TranslationConfig:
        """The live provider configuration."""
        return self._config

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def translate_with_provenance(
        self,
        text: str,
        source_lang: Union[Language, str],
        target_lang: Union[Language, str],
    ) -> TranslationResult:
        """
        Translate *text* and report which backend answered.

        Raises:
            EmptyInputError: If *text* is empty or whitespace only.
            ValueError: If a language code is unknown or both are equal.
        """
        request = TranslationRequest.build(text, source_lang, target_lang)
        return self.chain.resolve_with_provenance(request, self._config)

    def translate(
        self,
        text: str,
        source_lang: Union[Language, str],
        target_lang: Union[Language, str],
    ) -> str:
        """Translate *text* from *source_lang* to *target_lang*."""
        return self.translate_with_provenance(text, source_lang, target_lang).translated

    def translate_to_target(self, text: str, target_lang: Union[Language, str]) -> str:
        """
        Translate *text* into *target_lang* from the other language of the pair.

        Args:
            text: Field name to translate.
            target_lang: ``"en"`` or ``"zh"``.
        """
        target = Language(target_lang)
        return self.translate(text, target.other, target)

    # ------------------------------------------------------------------
    # Naming variants
    # ------------------------------------------------------------------

    def suggest_naming_variants(
        self,
        text: str,
        handle_lowercase: Optional[Union[LowercaseHandling, str]] = None,
    ) -> List[NamingVariant]:
        """
        Translate *text* and suggest identifier spellings.

        Chinese input is translated to English and the identifiers are built
        from the translation.  English input is translated to Chinese for
        reference, and the identifiers are built from the input itself.

        Args:
            text: Field name in Chinese or English.
            handle_lowercase: Passed to :func:`to_snake_case` for single
                all-lowercase tokens.

        Returns:
            Variants labelled ``translation``, ``camelCase``, ``snake_case``,
            ``lowercase`` and ``UPPERCASE``, in that order.

        Raises:
            EmptyInputError: If *text* is empty or whitespace only.
        """
        source = self.detector.detect(text or "").language
        translated = self.translate(text, source, source.other)
        basis = translated if source is Language.ZH else text.strip()

        return [
            NamingVariant("translation", translated),
            NamingVariant("camelCase", to_camel_case(basis)),
            NamingVariant("snake_case", to_snake_case(basis, handle_lowercase)),
            NamingVariant("lowercase", to_lower_identifier(basis)),
            NamingVariant("UPPERCASE", to_upper_identifier(basis)),
        ]

    @staticmethod
    def format_variants(variants: List[NamingVariant]) -> str:
        """Render variants one ``label: value`` per line."""
        return "\n".join(f"{v.label}: {v.value}" for v in variants)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def toggle_provider(self, name: Union[ProviderName, str], enabled: bool) -> None:
        """Enable or disable one backend and persist the change."""
        self._config.set_enabled(name, enabled)
        self.store.save(self._config)
        logger.info(f"Provider {ProviderName(name).value} {'enabled' if enabled else 'disabled'}")

    def save_baidu_credentials(self, app_id: str, secret_key: str) -> None:
        """
        Store Baidu credentials and persist them.

        Raises:
            InvalidCredentials: If either value is blank.
        """
        app_id = (app_id or "").strip()
        secret_key = (secret_key or "").strip()
        if not app_id or not secret_key:
            raise InvalidCredentials(
                "Both the Baidu App ID and Secret Key are required.",
                ProviderName.BAIDU.value,
            )

        self._config.set_credentials(ProviderName.BAIDU, app_id, secret_key)
        self.store.save(self._config)

    def get_status(self) -> Dict[str, Any]:
        """
        Get the current status of the facade.

        Returns:
            Dictionary with per-provider ``enabled``/``ready`` flags, in
            priority order.  Credentials are never included.
        """
        providers = {}
        for backend in self.chain.backends:
            provider_config = self._config.get(backend.name)
            providers[backend.name.value] = {
                "enabled": provider_config.enabled,
                "ready": backend.is_ready(provider_config),
            }
        return {"providers": providers, "storage_key": self.store.key}


def _section(settings: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return ``settings[name]`` if it is a mapping, else an empty dict."""
    value = settings.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        logger.warning(f"Settings section '{name}' is not a mapping. Using defaults.")
        return {}
    return value


def load_facade_from_config(
    path: Optional[Union[str, Path]] = None,
    session: Optional[requests.Session] = None,
) -> FieldTranslationFacade:
    """
    Build a facade with settings from ``config.yaml``.

    Missing or unreadable settings fall back to the built-in defaults.

    Args:
        path: Settings file; defaults to ``config.yaml`` at the project root.
        session: HTTP session for the backends.

    Returns:
        Configured :class:`FieldTranslationFacade`.
    """
    settings: Dict[str, Any] = {}
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH

    try:
        if config_path.exists():
            with open(config_path, "r", encoding="utf-8") as f:
                settings = yaml.safe_load(f) or {}
        else:
            logger.warning(f"Settings file {config_path} not found. Using defaults.")

    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config: {e}. Using defaults.")
        settings = {}

    if not isinstance(settings, dict):
        logger.warning(f"Settings file {config_path} is not a mapping. Using defaults.")
        settings = {}
    translation = _section(settings, "translation")
    logging_cfg = _section(settings, "logging")

    level = logging_cfg.get("level")
    if level is not None:
        try:
            logging.getLogger("src").setLevel(str(level).upper())
        except (TypeError, ValueError) as e:
            logger.warning(f"Invalid logging level {level!r}: {e}. Keeping current level.")

    try:
        timeout = float(translation.get("timeout", DEFAULT_TIMEOUT))
    except (TypeError, ValueError):
        logger.warning(
            f"Invalid translation timeout {translation.get('timeout')!r}. "
            f"Using {DEFAULT_TIMEOUT} seconds."
        )
        timeout = DEFAULT_TIMEOUT

    endpoints = _section(translation, "endpoints")
    storage_path = str(translation.get("storage_path") or DEFAULT_STORAGE_PATH)
    storage_key = str(translation.get("storage_key") or DEFAULT_STORAGE_KEY)

    chain = TranslationProviderChain(
        backends=default_backends(session=session, timeout=timeout, endpoints=endpoints),
    )
    store = ConfigStore(JsonFileStorage(storage_path), key=storage_key)
    return FieldTranslationFacade(store, chain=chain)
