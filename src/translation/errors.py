"""
Exceptions raised by the field-name translation engine.

Backend-level errors (:class:`BackendError` and its subclasses) are caught
inside :class:`~src.translation.chain.TranslationProviderChain` and never
reach the caller.  Only :class:`EmptyInputError`, :class:`InvalidCredentials`
raised from the credential form, and the opt-in :class:`NoProviderAvailable`
propagate out of the facade.
"""

from typing import Optional


class TranslationError(Exception):
    """Base class for every translation-engine failure."""
    pass


class EmptyInputError(TranslationError, ValueError):
    """Raised when the text to translate is empty or whitespace only."""
    pass


class BackendError(TranslationError):
    """
    A single backend failed to produce a translation.

    Attributes:
        provider: Value of the :class:`ProviderName` that failed, if known.
    """

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message)
        self.provider = provider


class BackendUnreachable(BackendError):
    """Network or transport failure talking to a backend."""
    pass


class BackendRejected(BackendError):
    """Non-success HTTP status, malformed payload, or business error code."""
    pass


class BackendNoResult(BackendError):
    """The backend answered but the translation was empty or unchanged."""
    pass


class InvalidCredentials(BackendError):
    """A signing backend is enabled without both ``app_id`` and ``secret_key``."""
    pass


class NoProviderAvailable(TranslationError):
    """No backend enabled and the dictionary fallback substituted nothing."""
    pass
