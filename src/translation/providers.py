"""
Network Translation Backends.

Each backend speaks one provider's HTTP protocol and exposes the same
capability, :meth:`BaseBackend.attempt`, which either returns a translation
or raises a :class:`~src.translation.errors.BackendError`.  Backends never
retry; the chain decides what happens after a failure.

Backends
--------
``mymemory``  (:class:`MyMemoryBackend`)
    Free MyMemory translation proxy.  ``GET`` with ``q`` and
    ``langpair=<from>|<to>``.  Success needs ``responseStatus == 200`` and a
    non-empty ``responseData.translatedText``.

``libre``  (:class:`LibreTranslateBackend`)
    Public LibreTranslate instances.  ``POST`` JSON
    ``{q, source, target, format: "text"}`` to each candidate endpoint in
    order, stopping at the first non-empty translation that differs from the
    input.

``baidu``  (:class:`BaiduBackend`)
    Baidu Fanyi general translation API.  ``GET`` with
    ``q, from, to, appid, salt, sign`` where
    ``sign = md5(appid + q + salt + secretKey)``.  Requires both credentials.

All HTTP goes through a :class:`requests.Session` passed at construction,
so one session is shared by the whole chain and tests can swap in a fake.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

import requests

from src.utils.signature import sign_request

from .config_store import ProviderConfig
from .errors import (
    BackendNoResult,
    BackendRejected,
    BackendUnreachable,
    InvalidCredentials,
)
from .schema import ProviderName, TranslationRequest

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

MYMEMORY_URL = "https://api.mymemory.translated.net/get"
BAIDU_URL = "https://fanyi-api.baidu.com/api/trans/vip/translate"


class BaseBackend(ABC):
    """Abstract base class defining the interface for network backends.

    Subclasses set :attr:`name` and implement :meth:`attempt`.  Backends
    that need credentials also override :meth:`is_ready` so the chain can
    skip them before any request is made.

    Subclasses
    ----------
    * :class:`MyMemoryBackend`
    * :class:`LibreTranslateBackend`
    * :class:`BaiduBackend`
    """

    name: ProviderName

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def is_ready(self, config: ProviderConfig) -> bool:
        """Return ``True`` if *config* carries everything this backend needs."""
        return True

    @abstractmethod
    def attempt(self, request: TranslationRequest, config: ProviderConfig) -> str:
        """Translate *request* once.

        Args:
            request: The validated translation request.
            config: This backend's current provider settings.

        Returns:
            The translated text.

        Raises:
            BackendError: On any failure.
        """
        pass

    def _decode_json(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise BackendRejected(f"Malformed JSON payload: {e}", self.name.value)

    def _check_status(self, response: requests.Response) -> None:
        if not response.ok:
            raise BackendRejected(
                f"HTTP {response.status_code}: {response.reason}", self.name.value
            )


class MyMemoryBackend(BaseBackend):
    """Translator using the MyMemory translation proxy."""

    name = ProviderName.MYMEMORY

    def __init__(self, session=None, timeout: float = DEFAULT_TIMEOUT, url: str = MYMEMORY_URL):
        super().__init__(session=session, timeout=timeout)
        self.url = url

    def attempt(self, request: TranslationRequest, config: ProviderConfig) -> str:
        params = {
            "q": request.text,
            "langpair": f"{request.source_lang.value}|{request.target_lang.value}",
        }

        try:
            response = self.session.get(self.url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise BackendUnreachable(f"MyMemory request failed: {e}", self.name.value)

        self._check_status(response)
        data = self._decode_json(response)

        if not isinstance(data, dict):
            raise BackendRejected("Unexpected MyMemory response format.", self.name.value)

        response_data = data.get("responseData")
        translated = response_data.get("translatedText") if isinstance(response_data, dict) else None

        if data.get("responseStatus") == 200 and isinstance(translated, str) and translated.strip():
            return translated

        details = data.get("responseDetails") or "Translation failed"
        raise BackendRejected(f"MyMemory: {details}", self.name.value)


class LibreTranslateBackend(BaseBackend):
    """
    Translator using a list of public LibreTranslate instances.

    The candidate endpoints come from the provider config and are tried
    strictly in order.  An endpoint that echoes the input back unchanged
    counts as a miss, not a success.
    """

    name = ProviderName.LIBRE

    def is_ready(self, config: ProviderConfig) -> bool:
        return bool(config.endpoint_candidates)

    def attempt(self, request: TranslationRequest, config: ProviderConfig) -> str:
        payload = {
            "q": request.text,
            "source": request.source_lang.value,
            "target": request.target_lang.value,
            "format": "text",
        }

        endpoints: List[str] = list(config.endpoint_candidates)
        unreachable = 0

        for url in endpoints:
            try:
                response = self.session.post(url, json=payload, timeout=self.timeout)
            except requests.RequestException as e:
                unreachable += 1
                logger.debug(f"LibreTranslate instance {url} failed: {e}")
                continue

            if not response.ok:
                logger.debug(f"LibreTranslate instance {url} returned HTTP {response.status_code}")
                continue

            try:
                data = response.json()
            except ValueError as e:
                logger.debug(f"LibreTranslate instance {url} sent malformed JSON: {e}")
                continue

            translated = data.get("translatedText") if isinstance(data, dict) else None
            if isinstance(translated, str) and translated and translated != request.text:
                logger.info(f"LibreTranslate answered from {url}")
                return translated

            logger.debug(f"LibreTranslate instance {url} returned no usable translation")

        if endpoints and unreachable == len(endpoints):
            raise BackendUnreachable(
                f"All {len(endpoints)} LibreTranslate instances were unreachable.",
                self.name.value,
            )
        raise BackendNoResult("No LibreTranslate instance produced a translation.", self.name.value)


class BaiduBackend(BaseBackend):
    """
    Translator using the signed Baidu Fanyi API.

    Args:
        session: Shared HTTP session.
        timeout: Per-request timeout in seconds.
        url: API endpoint.
        clock: Returns the current time in seconds; the salt is derived
            from it in milliseconds.
    """

    name = ProviderName.BAIDU

    def __init__(
        self,
        session=None,
        timeout: float = DEFAULT_TIMEOUT,
        url: str = BAIDU_URL,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(session=session, timeout=timeout)
        self.url = url
        self._clock = clock

    def is_ready(self, config: ProviderConfig) -> bool:
        return config.credentials is not None and config.credentials.is_complete()

    def build_params(self, request: TranslationRequest, config: ProviderConfig) -> Dict[str, str]:
        """Return the signed query parameters for *request*."""
        if not self.is_ready(config):
            raise InvalidCredentials("Baidu app id and secret key are both required.", self.name.value)

        creds = config.credentials
        salt = str(int(self._clock() * 1000))
        return {
            "q": request.text,
            "from": request.source_lang.value,
            "to": request.target_lang.value,
            "appid": creds.app_id,
            "salt": salt,
            "sign": sign_request(creds.app_id, request.text, salt, creds.secret_key),
        }

    def attempt(self, request: TranslationRequest, config: ProviderConfig) -> str:
        params = self.build_params(request, config)

        try:
            response = self.session.get(self.url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise BackendUnreachable(f"Baidu request failed: {e}", self.name.value)

        self._check_status(response)
        data = self._decode_json(response)

        if not isinstance(data, dict):
            raise BackendRejected("Unexpected Baidu response format.", self.name.value)

        if data.get("error_code"):
            raise BackendRejected(
                f"Baidu error {data['error_code']}: {data.get('error_msg', '')}",
                self.name.value,
            )

        try:
            translated = data["trans_result"][0]["dst"]
        except (KeyError, IndexError, TypeError):
            raise BackendRejected("Baidu response has no trans_result.", self.name.value)

        if not isinstance(translated, str) or not translated.strip():
            raise BackendNoResult("Baidu returned an empty translation.", self.name.value)
        return translated


def default_backends(
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT,
    endpoints: Optional[Dict[str, str]] = None,
) -> List[BaseBackend]:
    """
    Build the standard backend list in priority order.

    Args:
        session: HTTP session shared by every backend.
        timeout: Per-request timeout in seconds.
        endpoints: Optional URL overrides keyed by provider value
            (``"mymemory"``, ``"baidu"``).
    """
    session = session if session is not None else requests.Session()
    endpoints = endpoints or {}
    return [
        MyMemoryBackend(session, timeout, url=endpoints.get("mymemory", MYMEMORY_URL)),
        LibreTranslateBackend(session, timeout),
        BaiduBackend(session, timeout, url=endpoints.get("baidu", BAIDU_URL)),
    ]
