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
Configuration for the cognito-idp package.
"""

from urllib.parse import urlparse

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cognito_idp.models import ClientCredentials


class CognitoIdpConfig(BaseSettings):
    """
    Configuration settings for cognito-idp, read from `COGNITO_IDP_*` environment variables.

    Attributes:
        domain (str): The hosted authorization-server domain (e.g. auth.example.com).
        client_id (str): The app client ID.
        client_secret (SecretStr | None): The app client secret, for confidential clients.
        http_timeout (float): Timeout in seconds applied to every provider request.
    """

    model_config = SettingsConfigDict(
        env_prefix="COGNITO_IDP_",
        case_sensitive=False,
    )

    domain: str
    client_id: str
    client_secret: SecretStr | None = None
    http_timeout: float = Field(default=10.0, gt=0, description="Timeout in seconds for all provider requests.")

    @field_validator("domain")
    @classmethod
    def normalize_domain(cls, v: str) -> str:
        """
        Ensures domain is just the hostname (e.g. auth.example.com).
        Strips scheme and path if present.

        Args:
            v: The domain string to normalize.

        Returns:
            The normalized hostname string.
        """
        v = v.strip().lower()
        if "://" not in v:
            v = f"https://{v}"

        parsed = urlparse(v)
        return parsed.netloc or v

    @field_validator("client_secret", mode="before")
    @classmethod
    def empty_secret_is_none(cls, v: object) -> object:
        # An exported-but-empty COGNITO_IDP_CLIENT_SECRET means a public client
        if v == "":
            return None
        return v

    def credentials(self) -> ClientCredentials:
        return ClientCredentials(client_id=self.client_id, client_secret=self.client_secret, domain=self.domain)
