# did_whisper/models.py

from dataclasses import dataclass
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Scope(str, Enum):
    """
    Where a DID document may be resolved from.
    LOCAL only reaches documents this node controls (these carry secret keys);
    ANY may also consult the ledger.
    """
    LOCAL = "local"
    ANY = "all"


@dataclass(frozen=True)
class AuthenticationEntry:
    id: str
    public_key: str
    secret_key: str | None = None


@dataclass(frozen=True)
class SigningKeyPair:
    """Ed25519 authentication key: 32-byte public, optional 64-byte secret."""
    key_id: str
    public_key: bytes
    secret_key: bytes | None = None


@dataclass(frozen=True)
class EncryptionKeyPair:
    """Curve25519 key pair derived from a SigningKeyPair."""
    key_id: str
    public_key: bytes
    secret_key: bytes | None = None

    @property
    def can_decrypt(self) -> bool:
        return self.secret_key is not None


class Envelope(BaseModel):
    """
    Transport record for one sealed message:
      {"keyId": "...", "expirationSeconds": 3600, "cipher": "<base58>"}
    expirationSeconds == 0 means the message never expires.
    """
    model_config = ConfigDict(populate_by_name=True)

    key_id: str = Field(alias="keyId", min_length=1)
    expiration_seconds: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("expirationSeconds", "expiration", "expiration_seconds"),
        serialization_alias="expirationSeconds",
    )
    cipher: str = Field(min_length=1)

    @field_validator("expiration_seconds", mode="before")
    @classmethod
    def _none_means_never(cls, v):
        return 0 if v is None else v

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)
