# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/cognito_idp

"""
Data models for the cognito-idp package.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, SecretStr, computed_field, field_validator

T = TypeVar("T")


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class GrantType(StrEnum):
    AUTHORIZATION_CODE = "authorization_code"
    CLIENT_CREDENTIALS = "client_credentials"
    REFRESH_TOKEN = "refresh_token"


class ClientCredentials(BaseModel):
    """
    Identity of the app client and the hosted domain it talks to.

    A client with a `client_secret` is confidential and authenticates to the token
    endpoint with HTTP Basic; without one it is a public client.

    Attributes:
        client_id (str): The app client ID.
        client_secret (SecretStr | None): The app client secret. Protected from logging.
        domain (str): Bare host of the authorization server (e.g. auth.example.com).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    client_id: str = Field(..., min_length=1)
    client_secret: SecretStr | None = None
    domain: str = Field(..., min_length=1, examples=["auth.example.com"])

    @field_validator("domain")
    @classmethod
    def require_bare_host(cls, v: str) -> str:
        if "://" in v or "/" in v:
            raise ValueError(f"domain must be a bare host without scheme or path, got '{v}'")
        return v

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}"


class TokenRecord(BaseModel):
    """
    Tokens issued by the token endpoint.

    `expires_at` is computed once, at construction, as now + `expires_in`. It is None when
    the provider did not report a lifetime. Unknown response fields are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    access_token: str | None = None
    id_token: str | None = None
    token_type: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = Field(default=None, description="Lifetime of the access token in seconds.")

    _expires_at: datetime | None = PrivateAttr(default=None)

    def model_post_init(self, context: Any, /) -> None:
        if self.expires_in is not None:
            self._expires_at = utcnow() + timedelta(seconds=self.expires_in)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def expires_at(self) -> datetime | None:
        return self._expires_at

    def is_expired(self, leeway: int = 0) -> bool:
        """
        Whether the access token is past its expiry.

        Args:
            leeway: Seconds subtracted from the expiry to allow for clock skew and latency.

        Returns:
            False when the expiry is unknown.
        """
        if self._expires_at is None:
            return False
        return utcnow() >= self._expires_at - timedelta(seconds=leeway)

    def __repr__(self) -> str:
        # Token values MUST NOT leak through repr
        return (
            f"TokenRecord(access_token={'<REDACTED>' if self.access_token else None}, "
            f"id_token={'<REDACTED>' if self.id_token else None}, "
            f"token_type={self.token_type!r}, "
            f"refresh_token={'<REDACTED>' if self.refresh_token else None}, "
            f"expires_in={self.expires_in!r}, "
            f"expires_at={self._expires_at!r})"
        )

    def __str__(self) -> str:
        return self.__repr__()


def _freeze_claim(value: Any) -> Any:
    if isinstance(value, Mapping):
        return UserIdentity(value)
    if isinstance(value, (list, tuple)):
        return tuple(_freeze_claim(item) for item in value)
    return value


def _thaw_claim(value: Any) -> Any:
    if isinstance(value, UserIdentity):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_thaw_claim(item) for item in value]
    return value


class UserIdentity(Mapping[str, Any]):
    """
    Claims returned by the UserInfo endpoint.

    An immutable mapping from claim name to value. Scalar values are kept verbatim and
    nested objects become nested `UserIdentity` instances. Looking up a claim the provider
    did not return yields None instead of failing, both through `claim()` and through
    attribute access (`identity.email`).

    Claims that share a name with a mapping method (`items`, `get`, `keys`, `values`,
    `claim`, `to_dict`) resolve to the method by attribute; read those with `claim()`.
    """

    __slots__ = ("_claims",)

    def __init__(self, claims: Mapping[str, Any] | None = None) -> None:
        frozen = {str(key): _freeze_claim(value) for key, value in (claims or {}).items()}
        object.__setattr__(self, "_claims", MappingProxyType(frozen))

    def claim(self, name: str) -> Any | None:
        """
        Returns the claim value, or None when the claim is absent.

        Args:
            name: The claim name (e.g. "sub", "email", "custom:tenant").
        """
        return self._claims.get(name)

    def to_dict(self) -> dict[str, Any]:
        """Plain, mutable copy of the claims with nested identities converted back to dicts."""
        return {key: _thaw_claim(value) for key, value in self._claims.items()}

    def __getitem__(self, key: str) -> Any:
        return self._claims[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._claims)

    def __len__(self) -> int:
        return len(self._claims)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._claims.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[type["UserIdentity"], tuple[dict[str, Any]]]:
        return (UserIdentity, (self.to_dict(),))

    def __repr__(self) -> str:
        # Claim values are PII, only the names are shown
        return f"UserIdentity(claims={sorted(self._claims)!r})"

    def __str__(self) -> str:
        return self.__repr__()


@dataclass(frozen=True)
class RawAccessToken:
    """An access token supplied as a bare string."""

    value: str

    @property
    def access_token(self) -> str:
        return self.value


@dataclass(frozen=True)
class IssuedToken:
    """An access token taken from a previously issued `TokenRecord`."""

    token: TokenRecord

    @property
    def access_token(self) -> str:
        if self.token.access_token is None:
            raise ValueError("TokenRecord carries no access_token")
        return self.token.access_token


AccessToken = RawAccessToken | IssuedToken


def resolve_access_token(token: "str | TokenRecord | AccessToken") -> AccessToken:
    """
    Wraps the accepted inputs of a UserInfo call into the `AccessToken` sum type.

    Args:
        token: A bare access token, a `TokenRecord`, or an already wrapped token.

    Returns:
        RawAccessToken or IssuedToken.

    Raises:
        TypeError: If the value is none of the accepted kinds.
    """
    match token:
        case RawAccessToken() | IssuedToken():
            return token
        case TokenRecord():
            return IssuedToken(token)
        case str():
            return RawAccessToken(token)
        case _:
            raise TypeError(f"Expected an access token string or TokenRecord, got {type(token).__name__}")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful provider response, decoded."""

    value: T


@dataclass(frozen=True)
class Rejected:
    """
    A non-2xx provider response.

    Attributes:
        status_code (int): The HTTP status.
        error (str | None): The OAuth2 `error` code when the body was a JSON error object.
        error_description (str | None): The provider's `error_description`, if any.
    """

    status_code: int
    error: str | None = None
    error_description: str | None = None


Result = Ok[T] | Rejected
