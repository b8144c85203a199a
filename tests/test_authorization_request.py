# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/cognito_idp

from urllib.parse import parse_qsl, urlsplit

import pytest
from pydantic import ValidationError

from cognito_idp.authorization_request import AuthorizationRequest

CLIENT_ID = "client-id-1"
DOMAIN = "id.example.com"
REDIRECT_URI = "https://example.com/auth/callback"


def decode(uri: str) -> tuple[str, str, str, list[tuple[str, str]]]:
    parts = urlsplit(uri)
    return parts.scheme, parts.netloc, parts.path, parse_qsl(parts.query)


@pytest.fixture
def request_() -> AuthorizationRequest:
    return AuthorizationRequest(client_id=CLIENT_ID, domain=DOMAIN, redirect_uri=REDIRECT_URI)


def test_defaults(request_: AuthorizationRequest) -> None:
    """Only the required fields and the default response type are set."""
    assert request_.client_id == CLIENT_ID
    assert request_.domain == DOMAIN
    assert request_.redirect_uri == REDIRECT_URI
    assert request_.response_type == "code"
    assert request_.code_challenge is None
    assert request_.code_challenge_method is None
    assert request_.identity_provider is None
    assert request_.idp_identifier is None
    assert request_.nonce is None
    assert request_.scope is None
    assert request_.state is None


def test_render_minimal(request_: AuthorizationRequest) -> None:
    scheme, host, path, params = decode(request_.render())

    assert scheme == "https"
    assert host == DOMAIN
    assert path == "/oauth2/authorize"
    assert sorted(params) == [
        ("client_id", CLIENT_ID),
        ("redirect_uri", REDIRECT_URI),
        ("response_type", "code"),
    ]


def test_str_matches_render(request_: AuthorizationRequest) -> None:
    assert str(request_) == request_.render()


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("code_challenge_method", "S256"),
        ("code_challenge", "CHALLENGE"),
        ("identity_provider", "LoginWithAmazon"),
        ("idp_identifier", "MyIdP"),
        ("nonce", "RANDOM"),
        ("scope", "openid email"),
        ("state", "STATE"),
    ],
)
def test_render_optional_field(field: str, value: str) -> None:
    """Each optional field adds exactly one parameter."""
    uri = AuthorizationRequest(client_id=CLIENT_ID, domain=DOMAIN, redirect_uri=REDIRECT_URI, **{field: value})
    _, _, _, params = decode(uri.render())

    assert getattr(uri, field) == value
    assert (field, value) in params
    assert len(params) == 4


def test_render_all_fields() -> None:
    uri = AuthorizationRequest(
        client_id=CLIENT_ID,
        domain=DOMAIN,
        redirect_uri=REDIRECT_URI,
        code_challenge="CHALLENGE",
        code_challenge_method="S256",
        identity_provider="Google",
        idp_identifier="corp",
        nonce="n-0S6_WzA2Mj",
        scope=["openid", "profile"],
        state="xyz",
    )
    _, _, _, params = decode(uri.render())

    assert dict(params) == {
        "client_id": CLIENT_ID,
        "code_challenge": "CHALLENGE",
        "code_challenge_method": "S256",
        "identity_provider": "Google",
        "idp_identifier": "corp",
        "nonce": "n-0S6_WzA2Mj",
        "redirect_uri": REDIRECT_URI,
        "response_type": "code",
        "scope": "openid profile",
        "state": "xyz",
    }


def test_scope_sequence_matches_string() -> None:
    """A scope list is joined by single spaces in the given order."""
    from_list = AuthorizationRequest(
        client_id=CLIENT_ID, domain=DOMAIN, redirect_uri=REDIRECT_URI, scope=["openid", "email", "profile"]
    )
    from_tuple = AuthorizationRequest(
        client_id=CLIENT_ID, domain=DOMAIN, redirect_uri=REDIRECT_URI, scope=("openid", "email", "profile")
    )
    from_string = AuthorizationRequest(
        client_id=CLIENT_ID, domain=DOMAIN, redirect_uri=REDIRECT_URI, scope="openid email profile"
    )

    assert from_list.render() == from_string.render() == from_tuple.render()
    assert ("scope", "openid email profile") in decode(from_list.render())[3]


def test_values_are_form_encoded() -> None:
    uri = AuthorizationRequest(
        client_id=CLIENT_ID, domain=DOMAIN, redirect_uri=REDIRECT_URI, state="a b&c=d", scope=["openid", "email"]
    ).render()

    assert "redirect_uri=https%3A%2F%2Fexample.com%2Fauth%2Fcallback" in uri
    assert "state=a+b%26c%3Dd" in uri
    assert "scope=openid+email" in uri
    assert ("state", "a b&c=d") in decode(uri)[3]


def test_response_type_override_and_omission() -> None:
    token = AuthorizationRequest(client_id=CLIENT_ID, domain=DOMAIN, redirect_uri=REDIRECT_URI, response_type="token")
    omitted = AuthorizationRequest(client_id=CLIENT_ID, domain=DOMAIN, redirect_uri=REDIRECT_URI, response_type=None)

    assert ("response_type", "token") in decode(token.render())[3]
    assert "response_type" not in dict(decode(omitted.render())[3])


def test_no_empty_values_emitted(request_: AuthorizationRequest) -> None:
    assert "=&" not in request_.render()
    assert not request_.render().endswith("=")


@pytest.mark.parametrize(
    "scope",
    [42, ["openid", 7], {"openid": True}, {"openid", "email"}, frozenset({"openid"}), b"openid", [b"openid"]],
)
def test_malformed_scope_fails_fast(scope: object) -> None:
    with pytest.raises(ValidationError):
        AuthorizationRequest(client_id=CLIENT_ID, domain=DOMAIN, redirect_uri=REDIRECT_URI, scope=scope)


def test_unknown_option_rejected() -> None:
    with pytest.raises(ValidationError):
        AuthorizationRequest(client_id=CLIENT_ID, domain=DOMAIN, redirect_uri=REDIRECT_URI, prompt="login")


def test_redirect_uri_required() -> None:
    with pytest.raises(ValidationError):
        AuthorizationRequest(client_id=CLIENT_ID, domain=DOMAIN)  # type: ignore[call-arg]


def test_immutable(request_: AuthorizationRequest) -> None:
    with pytest.raises(ValidationError):
        request_.state = "changed"  # type: ignore[misc]
