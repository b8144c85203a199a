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
LogoutRequest component for building the `/logout` redirect URI.
"""

from typing import ClassVar

from cognito_idp.models_internal import RedirectRequest


class LogoutRequest(RedirectRequest):
    """
    The logout redirect. Only `client_id` is always emitted.

    Either `logout_uri` (sign out and return) or `redirect_uri` together with
    `response_type` (sign out and sign back in) is normally supplied.
    """

    path: ClassVar[str] = "/logout"

    logout_uri: str | None = None
    redirect_uri: str | None = None
    response_type: str | None = None

    def query_params(self) -> list[tuple[str, str | None]]:
        return [
            ("client_id", self.client_id),
            ("logout_uri", self.logout_uri),
            ("redirect_uri", self.redirect_uri),
            ("response_type", self.response_type),
            ("scope", self.scope_string),
            ("state", self.state),
        ]
