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
AuthorizationRequest component for building the `/oauth2/authorize` redirect URI.
"""

from typing import ClassVar

from pydantic import Field

from cognito_idp.models_internal import RedirectRequest


class AuthorizationRequest(RedirectRequest):
    """
    The authorization redirect for the Authorization Code flow, with optional PKCE.

    Attributes:
        redirect_uri (str): Where the provider sends the browser back with the code.
        response_type (str | None): Defaults to "code".
        code_challenge (str | None): PKCE code challenge.
        code_challenge_method (str | None): PKCE method, e.g. "S256".
        identity_provider (str | None): Federated provider name to skip the hosted sign-in page.
        idp_identifier (str | None): Identifier mapped to a federated provider.
        nonce (str | None): Value echoed back in the ID token.
    """

    path: ClassVar[str] = "/oauth2/authorize"

    redirect_uri: str
    response_type: str | None = "code"
    code_challenge: str | None = None
    code_challenge_method: str | None = None
    identity_provider: str | None = None
    idp_identifier: str | None = Field(default=None, description="Identifier mapped to a federated provider.")
    nonce: str | None = None

    def query_params(self) -> list[tuple[str, str | None]]:
        return [
            ("client_id", self.client_id),
            ("code_challenge_method", self.code_challenge_method),
            ("code_challenge", self.code_challenge),
            ("identity_provider", self.identity_provider),
            ("idp_identifier", self.idp_identifier),
            ("nonce", self.nonce),
            ("redirect_uri", self.redirect_uri),
            ("response_type", self.response_type),
            ("scope", self.scope_string),
            ("state", self.state),
        ]
