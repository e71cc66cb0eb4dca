"""Base Pydantic models for sealedenv.

This module provides the base model class that all sealedenv Pydantic models
inherit from, plus the `KeyPair` model shared by the codec, the scanner and the
key providers.

Example:
    >>> from sealedenv.models import KeyPair
    >>>
    >>> pair = KeyPair(public_key="Ek1K...", private_key="cK9c...")
    >>> pair
    KeyPair(public_key='Ek1K...', private_key=SecretStr('**********'))
"""

from pydantic import BaseModel, ConfigDict, SecretStr


class SealedEnvBaseModel(BaseModel):
    """Base model for all sealedenv Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable

    Configuration models that need mutability override `model_config`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)


class KeyPair(SealedEnvBaseModel):
    """A sealed-box key pair, both halves base64 encoded (standard alphabet).

    The private key is held as a `SecretStr` so that `repr()`, `str()`, log
    records and `model_dump()` never expose it. Use
    `private_key.get_secret_value()` at the single point where the raw key is
    needed.

    Attributes:
        public_key: Base64 encoded 32-byte Curve25519 public key
        private_key: Base64 encoded 32-byte Curve25519 private key
    """

    public_key: str
    private_key: SecretStr
