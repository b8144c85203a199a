# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/cognito_idp

from collections.abc import Callable
from typing import Any

import httpx
import pytest
from pydantic import SecretStr

from cognito_idp.models import ClientCredentials

DOMAIN = "auth.example.com"
CLIENT_ID = "client1"
CLIENT_SECRET = "SECRET"


class RecordingHandler:
    """
    httpx.MockTransport handler that replays canned responses and keeps every request.
    """

    def __init__(self, status_code: int = 200, json_data: Any | None = None, content: bytes | None = None) -> None:
        self.status_code = status_code
        self.json_data = json_data
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.json_data is not None:
            return httpx.Response(self.status_code, json=self.json_data)
        return httpx.Response(self.status_code, content=self.content or b"")

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "No request was sent"
        return self.requests[-1]

    def last_form(self) -> dict[str, str]:
        pairs = httpx.QueryParams(self.last_request.content.decode("utf-8"))
        return dict(pairs.multi_items())


@pytest.fixture
def credentials() -> ClientCredentials:
    return ClientCredentials(client_id=CLIENT_ID, domain=DOMAIN)


@pytest.fixture
def confidential_credentials() -> ClientCredentials:
    return ClientCredentials(client_id=CLIENT_ID, client_secret=SecretStr(CLIENT_SECRET), domain=DOMAIN)


@pytest.fixture
def token_payload() -> dict[str, Any]:
    return {
        "access_token": "eyJra1example",
        "id_token": "eyJra2example",
        "token_type": "Bearer",
        "expires_in": 7200,
    }


@pytest.fixture
def claims_payload() -> dict[str, Any]:
    return {
        "sub": "248289761001",
        "name": "Jane Doe",
        "given_name": "Jane",
        "family_name": "Doe",
        "preferred_username": "j.doe",
        "email": "janedoe@example.com",
        "phone_number": "+12065551212",
        "email_verified": "true",
        "phone_number_verified": "true",
    }


@pytest.fixture
def handler_factory() -> Callable[..., RecordingHandler]:
    return RecordingHandler

