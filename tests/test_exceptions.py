# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/cognito_idp

import cognito_idp
from cognito_idp.exceptions import CognitoIdpError, InvalidResponseError, TransportError


def test_exception_hierarchy():
    """Test that all custom exceptions inherit from CognitoIdpError."""
    assert issubclass(TransportError, CognitoIdpError)
    assert issubclass(InvalidResponseError, CognitoIdpError)
    assert not issubclass(TransportError, InvalidResponseError)


def test_exception_instantiation():
    err = TransportError("Connection refused")
    assert str(err) == "Connection refused"


def test_public_api_exports():
    for name in cognito_idp.__all__:
        assert hasattr(cognito_idp, name)
