"""Admin gate for content uploads.

:class:`StaticSecretVerifier` compares against one shared string. It is a
placeholder, not a security boundary; swap in a real verifier through the
:class:`CredentialVerifier` protocol.
"""

import hmac
from typing import Optional, Protocol


class CredentialVerifier(Protocol):
    def verify(self, provided_key: Optional[str]) -> bool:
        ...


class StaticSecretVerifier:
    """Accepts exactly one configured secret."""

    def __init__(self, secret: str):
        if not secret:
            raise ValueError("secret must not be empty")
        self._secret = secret

    def verify(self, provided_key: Optional[str]) -> bool:
        if provided_key is None:
            return False
        return hmac.compare_digest(
            provided_key.encode("utf-8"), self._secret.encode("utf-8")
        )
