# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/cognito_idp

import os
import sys

# Add src to path for running directly
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "../src")))

from cognito_idp import CognitoIdpConfig, GrantType, IdentityClient, generate_pkce_pair


def main() -> None:
    """
    Walks through the Authorization Code flow with PKCE for a public client.

    Expects COGNITO_IDP_DOMAIN and COGNITO_IDP_CLIENT_ID in the environment.
    """
    config = CognitoIdpConfig()  # type: ignore[call-arg]
    redirect_uri = "http://localhost:8000/auth/callback"
    pkce = generate_pkce_pair()

    with IdentityClient.from_config(config) as client:
        print(">>> Open this URL and sign in:")
        print(
            client.authorization_uri(
                redirect_uri,
                scope=["openid", "email", "profile"],
                code_challenge=pkce.code_challenge,
                code_challenge_method=pkce.code_challenge_method,
            )
        )
        code = input(">>> Paste the 'code' query parameter from the callback: ").strip()

        token = client.token_exchange(
            GrantType.AUTHORIZATION_CODE,
            code=code,
            code_verifier=pkce.code_verifier,
            redirect_uri=redirect_uri,
        )
        if token is None:
            print(">>> The authorization server rejected the code.")
            return

        print(f">>> Token expires at {token.expires_at}")
        user = client.user_info(token)
        if user is not None:
            print(f">>> Signed in as {user.email or user.sub}")

        print(">>> Sign out at:")
        print(client.logout_uri(logout_uri="http://localhost:8000/"))


if __name__ == "__main__":
    main()
