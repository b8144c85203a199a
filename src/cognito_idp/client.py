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
IdentityClient component for talking to a hosted OAuth2/OIDC authorization server.

Builds the authorization and logout redirects, exchanges grants for tokens at
`/oauth2/token` and fetches claims from `/oauth2/userInfo`.
"""

import base64
from collections.abc import Callable
from typing import Any, Self

import httpx
from opentelemetry import trace
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.trace import Span, Status, StatusCode
from pydantic import TypeAdapter, ValidationError

from cognito_idp.authorization_request import AuthorizationRequest
from cognito_idp.config import CognitoIdpConfig
from cognito_idp.exceptions import InvalidResponseError, TransportError
from cognito_idp.logout_request import LogoutRequest
from cognito_idp.models import (
    AccessToken,
    ClientCredentials,
    GrantType,
    Ok,
    Rejected,
    Result,
    TokenRecord,
    UserIdentity,
    resolve_access_token,
)
from cognito_idp.models_internal import Scope, join_scope
from cognito_idp.utils.logger import logger

tracer = trace.get_tracer(__name__)

TOKEN_PATH = "/oauth2/token"
USER_INFO_PATH = "/oauth2/userInfo"

_scope_adapter: TypeAdapter[Scope | None] = TypeAdapter(Scope | None)


class _IdentityClientBase:
    """
    Request construction and response normalization shared by the sync and async clients.
    """

    def __init__(self, credentials: ClientCredentials, timeout: float = 10.0) -> None:
        self.credentials = credentials
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: CognitoIdpConfig, **kwargs: Any) -> Self:
        """
        Builds a client from `CognitoIdpConfig`, applying its `http_timeout`.

        Args:
            config: The loaded configuration.
            **kwargs: Forwarded to the constructor (e.g. `client` or `transport`).
        """
        return cls(config.credentials(), timeout=config.http_timeout, **kwargs)

    @property
    def token_url(self) -> str:
        return f"{self.credentials.base_url}{TOKEN_PATH}"

    @property
    def user_info_url(self) -> str:
        return f"{self.credentials.base_url}{USER_INFO_PATH}"

    def authorization_uri(self, redirect_uri: str, **options: Any) -> str:
        """
        Returns the URI to send the browser to for sign-in.

        Args:
            redirect_uri: The registered callback URI.
            **options: Any of `response_type`, `code_challenge`, `code_challenge_method`,
                `identity_provider`, `idp_identifier`, `nonce`, `scope`, `state`.

        Raises:
            ValidationError: If an option is unknown or has the wrong type.
        """
        return AuthorizationRequest(
            client_id=self.credentials.client_id,
            domain=self.credentials.domain,
            redirect_uri=redirect_uri,
            **options,
        ).render()

    def logout_uri(self, **options: Any) -> str:
        """
        Returns the URI to send the browser to for sign-out.

        Args:
            **options: Any of `logout_uri`, `redirect_uri`, `response_type`, `scope`, `state`.

        Raises:
            ValidationError: If an option is unknown or has the wrong type.
        """
        return LogoutRequest(
            client_id=self.credentials.client_id,
            domain=self.credentials.domain,
            **options,
        ).render()

    def _basic_authorization_headers(self) -> dict[str, str]:
        if self.credentials.client_secret is None:
            return {}

        client_id_and_secret = f"{self.credentials.client_id}:{self.credentials.client_secret.get_secret_value()}"
        encoded = base64.urlsafe_b64encode(client_id_and_secret.encode("utf-8")).decode("ascii")
        return {"Authorization": f"Basic {encoded}"}

    def _token_form(
        self,
        grant_type: GrantType | str,
        code: str | None,
        code_verifier: str | None,
        redirect_uri: str | None,
        refresh_token: str | None,
        scope: Scope | None,
    ) -> dict[str, str]:
        fields = [
            ("client_id", self.credentials.client_id),
            ("code", code),
            ("code_verifier", code_verifier),
            ("grant_type", str(grant_type)),
            ("redirect_uri", redirect_uri),
            ("refresh_token", refresh_token),
            ("scope", join_scope(_scope_adapter.validate_python(scope))),
        ]
        return {key: value for key, value in fields if value is not None}

    @staticmethod
    def _bearer_headers(token: AccessToken) -> dict[str, str]:
        return {"Authorization": f"Bearer {token.access_token}"}

    @staticmethod
    def _decode_json_object(response: httpx.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError as e:
            raise InvalidResponseError(f"Response from {response.request.url} is not valid JSON: {e}") from e
        if not isinstance(body, dict):
            raise InvalidResponseError(
                f"Response from {response.request.url} is not a JSON object (got {type(body).__name__})"
            )
        return body

    @staticmethod
    def _rejected(response: httpx.Response, span: Span) -> Rejected:
        error: str | None = None
        error_description: str | None = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            if isinstance(body.get("error"), str):
                error = body["error"]
            if isinstance(body.get("error_description"), str):
                error_description = body["error_description"]

        logger.warning(f"Request to {response.request.url.path} rejected with status {response.status_code}: {error}")
        span.set_status(Status(StatusCode.ERROR, f"HTTP {response.status_code}"))
        return Rejected(status_code=response.status_code, error=error, error_description=error_description)

    def _to_token_result(self, response: httpx.Response, span: Span) -> Result[TokenRecord]:
        span.set_attribute("http.status_code", response.status_code)
        if not response.is_success:
            return self._rejected(response, span)

        try:
            token = TokenRecord(**self._decode_json_object(response))
        except ValidationError as e:
            raise InvalidResponseError(f"Invalid token response: {e}") from e

        logger.info(f"Token issued (token_type={token.token_type}, expires_in={token.expires_in})")
        span.set_status(Status(StatusCode.OK))
        return Ok(token)

    def _to_user_info_result(self, response: httpx.Response, span: Span) -> Result[UserIdentity]:
        span.set_attribute("http.status_code", response.status_code)
        if not response.is_success:
            return self._rejected(response, span)

        user_info = UserIdentity(self._decode_json_object(response))
        logger.info(f"User info retrieved with {len(user_info)} claims")
        span.set_status(Status(StatusCode.OK))
        return Ok(user_info)


class IdentityClient(_IdentityClientBase):
    """
    Blocking client for a hosted authorization server.

    Each I/O operation performs exactly one request. The underlying `httpx.Client` is
    created on first use and reused; an injected client is never closed by this class.

    Attributes:
        credentials (ClientCredentials): The app client identity and domain.
        timeout (float): Timeout in seconds for the internally created HTTP client.
    """

    def __init__(
        self,
        credentials: ClientCredentials,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        """
        Initialize the IdentityClient.

        Args:
            credentials: Client ID, optional secret and domain.
            client: External HTTP client (optional). Owned by the caller.
            transport: Transport for the internally created client (optional).
            timeout: Timeout in seconds for the internally created client.
        """
        super().__init__(credentials, timeout)
        self._client = client
        self._transport = transport
        self._internal_client = client is None

    def __enter__(self) -> "IdentityClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Closes the HTTP client if this instance created it."""
        if self._internal_client and self._client is not None:
            self._client.close()
            self._client = None

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(transport=self._transport, timeout=self.timeout)
            HTTPXClientInstrumentor().instrument_client(self._client)
        return self._client

    def _post(self, url: str, headers: dict[str, str], data: dict[str, str] | None = None) -> httpx.Response:
        logger.debug(f"POST {url}")
        try:
            return self._get_client().post(url, data=data, headers=headers)
        except httpx.TransportError as e:
            logger.error(f"Request to {url} failed: {e}")
            raise TransportError(f"Request to {url} failed: {e}") from e

    def token_exchange_result(
        self,
        grant_type: GrantType | str,
        *,
        code: str | None = None,
        code_verifier: str | None = None,
        redirect_uri: str | None = None,
        refresh_token: str | None = None,
        scope: Scope | None = None,
    ) -> Result[TokenRecord]:
        """
        Calls the token endpoint and reports the outcome as `Ok` or `Rejected`.

        Args:
            grant_type: `authorization_code`, `client_credentials` or `refresh_token`.
            code: Authorization code (authorization_code grant).
            code_verifier: PKCE verifier matching the challenge sent at authorization.
            redirect_uri: Redirect URI used at authorization (authorization_code grant).
            refresh_token: Refresh token (refresh_token grant).
            scope: Requested scopes (client_credentials grant).

        Returns:
            Ok(TokenRecord) on a 2xx response, Rejected otherwise.

        Raises:
            TransportError: If no response was received.
            InvalidResponseError: If a 2xx body is not a valid token object.
            ValidationError: If `scope` is neither a string nor a sequence of strings.
        """
        form = self._token_form(grant_type, code, code_verifier, redirect_uri, refresh_token, scope)
        with tracer.start_as_current_span("cognito_idp.token_exchange") as span:
            span.set_attribute("oauth.grant_type", str(grant_type))
            response = self._post(self.token_url, self._basic_authorization_headers(), form)
            return self._to_token_result(response, span)

    def token_exchange(
        self,
        grant_type: GrantType | str,
        *,
        code: str | None = None,
        code_verifier: str | None = None,
        redirect_uri: str | None = None,
        refresh_token: str | None = None,
        scope: Scope | None = None,
        on_success: Callable[[TokenRecord], Any] | None = None,
    ) -> TokenRecord | None:
        """
        Exchanges a grant for tokens.

        A provider rejection yields None; transport failures still raise. `on_success`
        is called with the record before it is returned.

        Returns:
            TokenRecord, or None if the provider rejected the request.
        """
        match self.token_exchange_result(
            grant_type,
            code=code,
            code_verifier=code_verifier,
            redirect_uri=redirect_uri,
            refresh_token=refresh_token,
            scope=scope,
        ):
            case Ok(value=token):
                if on_success is not None:
                    on_success(token)
                return token
            case _:
                return None

    def user_info_result(self, token: str | TokenRecord | AccessToken) -> Result[UserIdentity]:
        """
        Calls the UserInfo endpoint and reports the outcome as `Ok` or `Rejected`.

        Args:
            token: A bare access token, a TokenRecord, or a RawAccessToken/IssuedToken.

        Raises:
            TransportError: If no response was received.
            InvalidResponseError: If a 2xx body is not a JSON object.
            ValueError: If a TokenRecord without an access token is given.
        """
        headers = self._bearer_headers(resolve_access_token(token))
        with tracer.start_as_current_span("cognito_idp.user_info") as span:
            response = self._post(self.user_info_url, headers)
            return self._to_user_info_result(response, span)

    def user_info(
        self,
        token: str | TokenRecord | AccessToken,
        on_success: Callable[[UserIdentity], Any] | None = None,
    ) -> UserIdentity | None:
        """
        Fetches the claims of the user the access token was issued to.

        Returns:
            UserIdentity, or None if the provider rejected the request.
        """
        match self.user_info_result(token):
            case Ok(value=user_info):
                if on_success is not None:
                    on_success(user_info)
                return user_info
            case _:
                return None


class IdentityClientAsync(_IdentityClientBase):
    """
    Async implementation of IdentityClient over `httpx.AsyncClient`.
    Handles resources via async context manager.
    """

    def __init__(
        self,
        credentials: ClientCredentials,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        super().__init__(credentials, timeout)
        self._client = client
        self._transport = transport
        self._internal_client = client is None

    async def __aenter__(self) -> "IdentityClientAsync":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._internal_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(transport=self._transport, timeout=self.timeout)
            HTTPXClientInstrumentor().instrument_client(self._client)
        return self._client

    async def _post(self, url: str, headers: dict[str, str], data: dict[str, str] | None = None) -> httpx.Response:
        logger.debug(f"POST {url}")
        try:
            return await self._get_client().post(url, data=data, headers=headers)
        except httpx.TransportError as e:
            logger.error(f"Request to {url} failed: {e}")
            raise TransportError(f"Request to {url} failed: {e}") from e

    async def token_exchange_result(
        self,
        grant_type: GrantType | str,
        *,
        code: str | None = None,
        code_verifier: str | None = None,
        redirect_uri: str | None = None,
        refresh_token: str | None = None,
        scope: Scope | None = None,
    ) -> Result[TokenRecord]:
        """See `IdentityClient.token_exchange_result`."""
        form = self._token_form(grant_type, code, code_verifier, redirect_uri, refresh_token, scope)
        with tracer.start_as_current_span("cognito_idp.token_exchange") as span:
            span.set_attribute("oauth.grant_type", str(grant_type))
            response = await self._post(self.token_url, self._basic_authorization_headers(), form)
            return self._to_token_result(response, span)

    async def token_exchange(
        self,
        grant_type: GrantType | str,
        *,
        code: str | None = None,
        code_verifier: str | None = None,
        redirect_uri: str | None = None,
        refresh_token: str | None = None,
        scope: Scope | None = None,
        on_success: Callable[[TokenRecord], Any] | None = None,
    ) -> TokenRecord | None:
        match await self.token_exchange_result(
            grant_type,
            code=code,
            code_verifier=code_verifier,
            redirect_uri=redirect_uri,
            refresh_token=refresh_token,
            scope=scope,
        ):
            case Ok(value=token):
                if on_success is not None:
                    on_success(token)
                return token
            case _:
                return None

    async def user_info_result(self, token: str | TokenRecord | AccessToken) -> Result[UserIdentity]:
        headers = self._bearer_headers(resolve_access_token(token))
        with tracer.start_as_current_span("cognito_idp.user_info") as span:
            response = await self._post(self.user_info_url, headers)
            return self._to_user_info_result(response, span)

    async def user_info(
        self,
        token: str | TokenRecord | AccessToken,
        on_success: Callable[[UserIdentity], Any] | None = None,
    ) -> UserIdentity | None:
        match await self.user_info_result(token):
            case Ok(value=user_info):
                if on_success is not None:
                    on_success(user_info)
                return user_info
            case _:
                return None
