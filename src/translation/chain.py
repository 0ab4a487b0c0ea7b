"""
Provider Chain with Ordered Fallback.

Consults the network backends one at a time in fixed priority order and
falls back to the offline dictionary when none of them answers:

::

    mymemory ──fail──► libre ──fail──► baidu ──fail──► dictionary fallback
       │                 │               │
       └─────────────────┴───────────────┴──► first success is returned

Rules
-----
* Disabled backends are skipped without a request.
* A backend whose config is incomplete (Baidu without both keys) is skipped
  with an :class:`~src.translation.errors.InvalidCredentials` warning.
* Every enabled backend gets exactly one attempt.  Any
  :class:`~src.translation.errors.BackendError` is logged and the chain
  moves on; nothing is retried and nothing propagates.
* The dictionary fallback runs exactly once, only after every backend is
  exhausted, and its output is accepted even when it changed nothing.
* Attempts are strictly sequential; the chain holds no state between calls.
"""

import logging
from typing import List, Optional

from .config_store import TranslationConfig
from .errors import BackendError, InvalidCredentials, NoProviderAvailable
from .fallback import FallbackDictionaryTranslator
from .providers import BaseBackend, default_backends
from .schema import TranslationRequest, TranslationResult

logger = logging.getLogger(__name__)


class TranslationProviderChain:
    """
    Ordered list of backends plus the dictionary fallback.

    Attributes:
        backends: Backends in the order they are consulted.
        fallback: Offline translator used when every backend fails.
        accept_unchanged_fallback: When ``False``, :meth:`resolve` raises
            :class:`NoProviderAvailable` if no backend is enabled and the
            fallback substituted nothing.  Defaults to ``True``, under which
            the chain never fails.

    Example:
        >>> chain = TranslationProviderChain()
        >>> config = TranslationConfig.defaults()
        >>> config.set_enabled("mymemory", False)
        >>> chain.resolve(TranslationRequest.build("用户名称", "zh", "en"), config)
        'username'
    """

    def __init__(
        self,
        backends: Optional[List[BaseBackend]] = None,
        fallback: Optional[FallbackDictionaryTranslator] = None,
        accept_unchanged_fallback: bool = True,
    ):
        self.backends: List[BaseBackend] = list(backends) if backends is not None else default_backends()
        self.fallback = fallback or FallbackDictionaryTranslator()
        self.accept_unchanged_fallback = accept_unchanged_fallback

    def resolve(self, request: TranslationRequest, config: TranslationConfig) -> str:
        """Translate *request* and return only the text."""
        return self.resolve_with_provenance(request, config).translated

    def resolve_with_provenance(
        self,
        request: TranslationRequest,
        config: TranslationConfig,
    ) -> TranslationResult:
        """
        Translate *request*, recording which backend answered.

        Args:
            request: Validated request.
            config: Provider settings for this call.

        Returns:
            A :class:`TranslationResult`; ``degraded`` is ``True`` when the
            dictionary fallback produced the text.

        Raises:
            NoProviderAvailable: Only with ``accept_unchanged_fallback=False``.
        """
        failures = []
        attempted = 0

        for backend in self.backends:
            provider_config = config.get(backend.name)
            if not provider_config.enabled:
                continue

            if not backend.is_ready(provider_config):
                error = InvalidCredentials(
                    f"{backend.name.value} is enabled but not fully configured; skipping.",
                    backend.name.value,
                )
                logger.warning(str(error))
                failures.append((backend.name.value, str(error)))
                continue

            attempted += 1
            try:
                translated = backend.attempt(request, provider_config)
            except BackendError as e:
                logger.warning(f"{backend.name.value} translation failed ({type(e).__name__}): {e}")
                failures.append((backend.name.value, str(e)))
                continue

            logger.info(f"Translated via {backend.name.value}")
            return TranslationResult(
                original=request.text,
                translated=translated,
                source_lang=request.source_lang.value,
                target_lang=request.target_lang.value,
                provider=backend.name,
                degraded=False,
                failures=failures,
            )

        translated = self.fallback.translate(request.text, request.source_lang, request.target_lang)

        if attempted == 0 and translated == request.text and not self.accept_unchanged_fallback:
            raise NoProviderAvailable(
                "No translation backend is enabled and the dictionary has no matching terms."
            )

        if attempted:
            logger.warning(f"All {attempted} enabled backends failed; using dictionary fallback.")
        else:
            logger.info("No backend enabled; using dictionary fallback.")

        return TranslationResult(
            original=request.text,
            translated=translated,
            source_lang=request.source_lang.value,
            target_lang=request.target_lang.value,
            provider=None,
            degraded=True,
            failures=failures,
        )
