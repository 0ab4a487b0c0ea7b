"""
Provider Configuration and Persistence.

Holds the user's provider choices (which backends are enabled, Baidu
credentials, LibreTranslate candidate endpoints) and persists them as a
single JSON blob under one storage key.

Persisted shape
---------------
::

    {
      "baidu":    {"appId": "", "enabled": false, "secretKey": ""},
      "libre":    {"enabled": false, "endpoints": ["https://...", ...]},
      "mymemory": {"enabled": true}
    }

Merge rule
----------
:meth:`ConfigStore.load` is a *shallow* merge: each provider key present in
the stored blob replaces that provider's compiled-in default wholesale, and
a provider key missing from the blob keeps its default.  Sub-fields are
never merged individually.

Storage ports
-------------
The store talks to a :class:`KeyValueStorage` (anything with ``get`` and
``set``).  Two implementations are provided: :class:`MemoryStorage` for
tests and embedding, and :class:`JsonFileStorage` which keeps all entries
in one JSON file on disk.
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from .schema import ProviderName

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "translationConfig"

DEFAULT_LIBRE_ENDPOINTS: List[str] = [
    "https://translate.argosopentech.com/translate",
    "https://libretranslate.com/translate",
    "https://libretranslate.de/translate",
]


@dataclass
class ProviderCredentials:
    """API credentials for a signing backend."""
    app_id: str = ""
    secret_key: str = ""

    def is_complete(self) -> bool:
        """Both ``app_id`` and ``secret_key`` are non-blank."""
        return bool(self.app_id.strip()) and bool(self.secret_key.strip())


@dataclass
class ProviderConfig:
    """
    Settings for one backend.

    Attributes:
        name: Which backend this configures.
        enabled: Whether the chain may call it.
        credentials: Baidu only.
        endpoint_candidates: LibreTranslate only; tried in order.
    """
    name: ProviderName
    enabled: bool = False
    credentials: Optional[ProviderCredentials] = None
    endpoint_candidates: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"enabled": self.enabled}
        if self.name is ProviderName.LIBRE:
            data["endpoints"] = list(self.endpoint_candidates)
        if self.name is ProviderName.BAIDU:
            creds = self.credentials or ProviderCredentials()
            data["appId"] = creds.app_id
            data["secretKey"] = creds.secret_key
        return data

    @classmethod
    def from_dict(cls, name: ProviderName, data: Dict[str, Any]) -> "ProviderConfig":
        config = default_provider_config(name)
        config.enabled = bool(data.get("enabled", False))

        if name is ProviderName.LIBRE:
            endpoints = data.get("endpoints")
            if isinstance(endpoints, list):
                config.endpoint_candidates = [str(url) for url in endpoints if url]

        if name is ProviderName.BAIDU:
            config.credentials = ProviderCredentials(
                app_id=str(data.get("appId") or ""),
                secret_key=str(data.get("secretKey") or ""),
            )

        return config


def default_provider_config(name: ProviderName) -> ProviderConfig:
    """Compiled-in defaults for a single backend."""
    if name is ProviderName.MYMEMORY:
        return ProviderConfig(name=name, enabled=True)
    if name is ProviderName.LIBRE:
        return ProviderConfig(
            name=name,
            enabled=False,
            endpoint_candidates=list(DEFAULT_LIBRE_ENDPOINTS),
        )
    return ProviderConfig(name=name, enabled=False, credentials=ProviderCredentials())


class TranslationConfig:
    """
    Ordered set of :class:`ProviderConfig`, one per :class:`ProviderName`.

    Iteration always follows the fixed priority order
    ``mymemory → libre → baidu`` regardless of how the config was built.
    """

    def __init__(self, providers: Optional[Dict[ProviderName, ProviderConfig]] = None):
        self._providers: Dict[ProviderName, ProviderConfig] = {}
        for name in ProviderName:
            supplied = (providers or {}).get(name)
            self._providers[name] = supplied if supplied is not None else default_provider_config(name)

    @classmethod
    def defaults(cls) -> "TranslationConfig":
        return cls()

    def __iter__(self) -> Iterator[ProviderConfig]:
        return iter(self._providers.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TranslationConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        enabled = [c.name.value for c in self if c.enabled]
        return f"TranslationConfig(enabled={enabled})"

    def get(self, name: Union[ProviderName, str]) -> ProviderConfig:
        """Return the config for *name* (enum or its string value)."""
        return self._providers[ProviderName(name)]

    def set_enabled(self, name: Union[ProviderName, str], enabled: bool) -> None:
        self.get(name).enabled = bool(enabled)

    def set_credentials(self, name: Union[ProviderName, str], app_id: str, secret_key: str) -> None:
        self.get(name).credentials = ProviderCredentials(app_id=app_id, secret_key=secret_key)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {config.name.value: config.to_dict() for config in self}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranslationConfig":
        """
        Build a config from a (possibly partial) serialized mapping.

        Provider keys that are missing, unknown, or not objects fall back to
        the compiled-in default for that provider.
        """
        providers: Dict[ProviderName, ProviderConfig] = {}
        for name in ProviderName:
            section = data.get(name.value)
            if isinstance(section, dict):
                providers[name] = ProviderConfig.from_dict(name, section)
        return cls(providers)


# ---------------------------------------------------------------------------
# Storage ports
# ---------------------------------------------------------------------------

class KeyValueStorage(ABC):
    """Minimal string-keyed storage interface used by :class:`ConfigStore`."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under *key*, or ``None``."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*."""


class MemoryStorage(KeyValueStorage):
    """In-process storage backed by a dict."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.entries: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.entries.get(key)

    def set(self, key: str, value: str) -> None:
        self.entries[key] = value


class JsonFileStorage(KeyValueStorage):
    """
    Storage that keeps every entry in one JSON object on disk.

    A missing file reads as empty.  A file that cannot be parsed is logged
    and also treated as empty; the next :meth:`set` overwrites it.  Writes go
    to a temporary file in the same directory that then replaces the target.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read settings file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Settings file {self.path} is not a JSON object; ignoring it.")
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)

        # Target is only ever replaced whole
        fd, tmp_name = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise


# ---------------------------------------------------------------------------
# ConfigStore
# ---------------------------------------------------------------------------

class ConfigStore:
    """
    Loads and saves :class:`TranslationConfig` through a storage port.

    Args:
        storage: Where the serialized config lives.
        key: Storage key for the blob.

    Example:
        >>> store = ConfigStore(MemoryStorage())
        >>> config = store.load()
        >>> config.get("mymemory").enabled
        True
        >>> config.set_enabled("libre", True)
        >>> store.save(config)
        >>> store.load().get("libre").enabled
        True
    """

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> TranslationConfig:
        """Read the persisted blob and shallow-merge it over the defaults."""
        blob = self.storage.get(self.key)
        if not blob:
            return TranslationConfig.defaults()

        try:
            persisted = json.loads(blob)
        except ValueError as e:
            logger.warning(f"Stored translation config is not valid JSON ({e}); using defaults.")
            return TranslationConfig.defaults()

        if not isinstance(persisted, dict):
            logger.warning("Stored translation config is not an object; using defaults.")
            return TranslationConfig.defaults()

        merged = TranslationConfig.defaults().to_dict()
        for name, section in persisted.items():
            if name in merged:
                merged[name] = deepcopy(section)

        return TranslationConfig.from_dict(merged)

    def save(self, config: TranslationConfig) -> None:
        """Serialize the whole config and overwrite the stored blob."""
        blob = json.dumps(config.to_dict(), ensure_ascii=False, sort_keys=True)
        self.storage.set(self.key, blob)
        logger.info(f"Saved translation config: {config!r}")
