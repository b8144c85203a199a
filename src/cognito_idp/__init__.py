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
Client for hosted OAuth2/OIDC authorization servers: authorization and logout redirects,
Authorization Code (with PKCE), Client Credentials and Refresh Token exchanges, and UserInfo.
"""

__version__ = "0.1.0"
__author__ = "Gowtham A Rao"
__email__ = "gowtham.rao@coreason.ai"

from .authorization_request import AuthorizationRequest
from .client import IdentityClient, IdentityClientAsync
from .config import CognitoIdpConfig
from .exceptions import CognitoIdpError, InvalidResponseError, TransportError
from .logout_request import LogoutRequest
from .models import (
    ClientCredentials,
    GrantType,
    IssuedToken,
    Ok,
    RawAccessToken,
    Rejected,
    TokenRecord,
    UserIdentity,
)
from .pkce import PKCEPair, generate_pkce_pair

__all__ = [
    "AuthorizationRequest",
    "ClientCredentials",
    "CognitoIdpConfig",
    "CognitoIdpError",
    "GrantType",
    "IdentityClient",
    "IdentityClientAsync",
    "InvalidResponseError",
    "IssuedToken",
    "LogoutRequest",
    "Ok",
    "PKCEPair",
    "RawAccessToken",
    "Rejected",
    "TokenRecord",
    "TransportError",
    "UserIdentity",
    "generate_pkce_pair",
]
