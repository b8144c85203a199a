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
Custom exceptions for the cognito-idp package.
"""


class CognitoIdpError(Exception):
    """Base exception for all cognito-idp errors."""


class TransportError(CognitoIdpError):
    """
    Raised when the HTTP exchange with the identity provider could not complete
    (connection refused, timeout, broken stream).

    Distinct from a provider rejection, which is reported as a `Rejected` result.
    """


class InvalidResponseError(CognitoIdpError):
    """Raised when a successful response carries a body that cannot be decoded into the expected record."""
