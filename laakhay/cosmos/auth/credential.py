"""Signing credential derived from an account master key."""

from __future__ import annotations

import base64
import binascii

from ..core.exceptions import CredentialError


class CosmosCredential:
    """Opaque HMAC key decoded once from a base64 master key.

    The decoded bytes never appear in ``repr`` or ``str`` output, so a
    credential can be passed around and logged alongside other objects
    without leaking the key.
    """

    __slots__ = ("_key",)

    def __init__(self, key: bytes) -> None:
        if not key:
            raise CredentialError("Signing key must not be empty")
        self._key = key

    @classmethod
    def from_master_key(cls, master_key: str) -> CosmosCredential:
        """Decode a base64-encoded account master key.

        Args:
            master_key: Primary or secondary key as shown by the account

        Returns:
            Credential ready for request signing

        Raises:
            CredentialError: If the key is empty or not valid base64
        """
        if not master_key or not master_key.strip():
            raise CredentialError("Master key must be a non-empty string")
        try:
            key = base64.b64decode(master_key.strip(), validate=True)
        except (binascii.Error, ValueError) as e:
            raise CredentialError("Master key is not valid base64") from e
        return cls(key)

    @property
    def key(self) -> bytes:
        return self._key

    def __repr__(self) -> str:
        return "CosmosCredential(key=***)"

    __str__ = __repr__

    def __reduce__(self):
        raise TypeError("CosmosCredential cannot be serialized")
