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
PKCE (Proof Key for Code Exchange, RFC 7636) helpers for public clients.
"""

from dataclasses import dataclass
from typing import Literal

from authlib.common.security import generate_token
from authlib.oauth2.rfc7636 import create_s256_code_challenge

CodeChallengeMethod = Literal["S256", "plain"]


@dataclass(frozen=True)
class PKCEPair:
    """
    A code verifier and the challenge derived from it.

    The challenge goes into the authorization URI; the verifier is kept by the client and
    sent with the `authorization_code` token exchange.
    """

    code_verifier: str
    code_challenge: str
    code_challenge_method: CodeChallengeMethod = "S256"


def create_code_challenge(code_verifier: str, method: CodeChallengeMethod = "S256") -> str:
    """
    Derives the code challenge for a verifier.

    Args:
        code_verifier: The high-entropy verifier.
        method: "S256" (BASE64URL(SHA256(verifier)) without padding) or "plain".

    Returns:
        The code challenge.

    Raises:
        ValueError: If the method is not supported.
    """
    if method == "S256":
        return create_s256_code_challenge(code_verifier)
    if method == "plain":
        return code_verifier
    raise ValueError(f"Unsupported code_challenge_method: {method}")


def generate_pkce_pair(length: int = 64, method: CodeChallengeMethod = "S256") -> PKCEPair:
    """
    Generates a fresh code verifier and its challenge.

    Args:
        length: Verifier length, between 43 and 128 characters.
        method: The challenge method.

    Returns:
        PKCEPair ready to pass to `authorization_uri` and `token_exchange`.

    Raises:
        ValueError: If the length is out of range.
    """
    if not 43 <= length <= 128:
        raise ValueError("code_verifier length must be between 43 and 128")

    code_verifier = generate_token(length)
    return PKCEPair(
        code_verifier=code_verifier,
        code_challenge=create_code_challenge(code_verifier, method),
        code_challenge_method=method,
    )
