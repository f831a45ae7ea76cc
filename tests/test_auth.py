# -*- coding: utf-8 -*-
"""Tests for the client-secret token provider."""

import logging
from unittest.mock import patch

import pytest
from azure.core.credentials import AccessToken
from azure.core.exceptions import ClientAuthenticationError

from collector.errors import RateLimitTransportError
from config.loader import AzureCredentials
from provider.azure.auth import ClientSecretTokenProvider, AZURE_TOKEN_SCOPE


TOKEN = "eyJ0eXAiOiJKV1QiLCJhbGciOiJSUzI1NiJ9.payload.signature"


@pytest.fixture
def credentials():
    return AzureCredentials(client_id='client', client_secret='secret', tenant_id='tenant')


@pytest.fixture
def credential_cls():
    """ClientSecretCredential 替身，上下文管理器返回实例本身"""
    with patch('provider.azure.auth.ClientSecretCredential') as credential_cls:
        credential = credential_cls.return_value
        credential.__enter__.return_value = credential
        credential.get_token.return_value = AccessToken(TOKEN, 0)
        yield credential_cls


class TestClientSecretTokenProvider:

    def test_get_token(self, credentials, credential_cls):
        token = ClientSecretTokenProvider(credentials).get_token()

        assert token == TOKEN
        credential_cls.assert_called_once_with(
            tenant_id='tenant',
            client_id='client',
            client_secret='secret',
            connection_timeout=4.0
        )
        credential_cls.return_value.get_token.assert_called_once_with(AZURE_TOKEN_SCOPE)
        assert AZURE_TOKEN_SCOPE == "https://management.azure.com/.default"

    def test_new_credential_every_call(self, credentials, credential_cls):
        provider = ClientSecretTokenProvider(credentials)

        provider.get_token()
        provider.get_token()

        assert credential_cls.call_count == 2

    def test_credential_closed_after_every_call(self, credentials, credential_cls):
        provider = ClientSecretTokenProvider(credentials)
        credential = credential_cls.return_value

        provider.get_token()
        assert credential.__exit__.call_count == 1

        provider.get_token()
        assert credential.__exit__.call_count == 2

    def test_credential_closed_when_token_request_fails(self, credentials, credential_cls):
        credential = credential_cls.return_value
        credential.get_token.side_effect = ClientAuthenticationError("AADSTS7000215")

        with pytest.raises(RateLimitTransportError):
            ClientSecretTokenProvider(credentials).get_token()

        assert credential.__exit__.call_count == 1

    def test_only_token_prefix_logged(self, credentials, credential_cls, caplog):
        with caplog.at_level(logging.DEBUG, logger='provider.azure.auth'):
            ClientSecretTokenProvider(credentials).get_token()

        assert TOKEN[:10] in caplog.text
        assert TOKEN not in caplog.text

    def test_authentication_failure_wrapped(self, credentials, credential_cls):
        credential_cls.return_value.get_token.side_effect = ClientAuthenticationError("AADSTS7000215")

        with pytest.raises(RateLimitTransportError) as exc_info:
            ClientSecretTokenProvider(credentials).get_token()

        assert isinstance(exc_info.value.__cause__, ClientAuthenticationError)
