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
Internal data models for the cognito-idp package.
These are not exposed in the public API.
"""

from typing import Annotated, ClassVar
from urllib.parse import urlencode, urlunsplit

from pydantic import BaseModel, ConfigDict, Field, Strict, StrictStr

# A scope is either a preformatted space-delimited string or an ordered sequence of scope names.
# Strict: sets and bytes are rejected, never coerced.
Scope = StrictStr | Annotated[list[StrictStr], Strict()] | Annotated[tuple[StrictStr, ...], Strict()]


def join_scope(scope: Scope | None) -> str | None:
    """
    Serializes a scope value, joining sequences with a single space in the given order.

    Args:
        scope: A scope string, a sequence of scope names, or None.

    Returns:
        The space-delimited scope string, or None when no scope was given.
    """
    if scope is None:
        return None
    if isinstance(scope, str):
        return scope
    return " ".join(scope)


def compact_params(pairs: list[tuple[str, str | None]]) -> list[tuple[str, str]]:
    """Keeps only the (key, value) pairs whose value is present, preserving order."""
    return [(key, value) for key, value in pairs if value is not None]


class RedirectRequest(BaseModel):
    """
    Base for browser redirect URIs on the hosted domain.

    Subclasses set `path` and list their query parameters in `query_params`. Absent
    values are left out of the query string entirely.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: ClassVar[str]

    client_id: str = Field(..., description="The app client ID registered with the identity provider.")
    domain: str = Field(..., description="The bare host of the hosted authorization server.")
    scope: Scope | None = Field(default=None, description="Requested scopes, as a string or a sequence.")
    state: str | None = Field(default=None, description="Opaque value round-tripped to the redirect URI.")

    @property
    def scope_string(self) -> str | None:
        return join_scope(self.scope)

    def query_params(self) -> list[tuple[str, str | None]]:
        raise NotImplementedError

    def render(self) -> str:
        """
        Builds the redirect URI.

        Returns:
            `https://{domain}{path}?{query}` with every present parameter form-encoded.
        """
        query = urlencode(compact_params(self.query_params()))
        return urlunsplit(("https", self.domain, self.path, query, ""))

    def __str__(self) -> str:
        return self.render()
