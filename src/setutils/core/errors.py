"""
Core exception types raised by the encoders, the signature codec, and the dispatcher.

Provides typed exceptions for core-domain failures:
- EncodingError for values that cannot be represented in a 32-byte slot.
- MalformedSignatureError for raw signatures of the wrong length or recovery id.
- UnclassifiableOrderError for orders that match zero or several venue shapes.
- SignerError for failures or timeouts surfaced from an external signer.
- ConfigError for invalid runtime settings.

Notes:
    - Every error is raised at the point of violation; no encoder returns a
      partial buffer.
    - SignerError always chains the collaborator's original exception as
      ``__cause__``; the core never retries a signing call.

Examples:
    Catch an out-of-range value.

    >>> from setutils.core.encoding import encode_big_unsigned
    >>> from setutils.core.errors import EncodingError
    >>> try:
    ...     encode_big_unsigned(-1)
    ... except EncodingError as e:
    ...     msg = str(e)
    >>> "non-negative" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "SetUtilsError",
    "EncodingError",
    "MalformedSignatureError",
    "UnclassifiableOrderError",
    "SignerError",
    "ConfigError",
]


class SetUtilsError(Exception):
    """Base class for all setutils errors."""


class EncodingError(SetUtilsError, ValueError):
    """Value outside the representable range of a 32-byte slot (or of unsupported type)."""


class MalformedSignatureError(SetUtilsError, ValueError):
    """Raw signature is not 65 bytes or carries a recovery id outside {27, 28}."""


class UnclassifiableOrderError(SetUtilsError, ValueError):
    """Order matches no venue shape, or more than one."""


class SignerError(SetUtilsError, RuntimeError):
    """Opaque failure or timeout reported by the external signer."""


class ConfigError(SetUtilsError, ValueError):
    """
    Raised when runtime configuration is invalid.

    Examples:
        - Non-numeric signer timeout in the environment
        - Negative default expiration
    """
