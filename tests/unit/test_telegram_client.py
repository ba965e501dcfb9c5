"""
Unit tests for TelegramClient

Tests message delivery with a mocked requests session:
- Payload and URL of sendMessage
- Error translation to TelegramDeliveryError
"""

import pytest
from unittest.mock import Mock
import requests

from q3reportbot.config import AppConfig
from q3reportbot.services.telegram_client import TelegramClient, TelegramDeliveryError


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def mock_session():
    """requests.Session mock returning a successful sendMessage reply."""
    session = Mock()
    response = Mock()
    response.status_code = 200
    response.json.return_value = {'ok': True, 'result': {'message_id': 17}}
    session.post.return_value = response
    return session


@pytest.fixture
def client(mock_session):
    return TelegramClient(token="123:abc", session=mock_session, timeout=5.0)


# ============================================================================
# TESTS
# ============================================================================

class TestSendMessage:
    
    def test_posts_markdown_v2_payload(self, client, mock_session):
        result = client.send_message(-1001, "*Match concluded*")
        
        assert result == {'message_id': 17}
        mock_session.post.assert_called_once_with(
            "https://api.telegram.org/bot123:abc/sendMessage",
            json={
                'chat_id': -1001,
                'text': "*Match concluded*",
                'parse_mode': "MarkdownV2",
            },
            timeout=5.0
        )
    
    def test_custom_api_base(self, mock_session):
        client = TelegramClient(token="t", api_base="http://localhost:8081/", session=mock_session)
        client.send_message(1, "x")
        
        url = mock_session.post.call_args[0][0]
        assert url == "http://localhost:8081/bott/sendMessage"
    
    def test_rejected_message_raises(self, client, mock_session):
        response = mock_session.post.return_value
        response.status_code = 400
        response.json.return_value = {
            'ok': False,
            'description': "Bad Request: can't parse entities"
        }
        
        with pytest.raises(TelegramDeliveryError) as exc_info:
            client.send_message(1, "unescaped.")
        
        assert exc_info.value.description == "Bad Request: can't parse entities"
    
    def test_transport_error_raises(self, client, mock_session):
        mock_session.post.side_effect = requests.exceptions.ConnectionError("down")
        
        with pytest.raises(TelegramDeliveryError, match="request failed"):
            client.send_message(1, "x")
    
    def test_non_json_response_raises(self, client, mock_session):
        response = mock_session.post.return_value
        response.status_code = 502
        response.json.side_effect = ValueError("not json")
        
        with pytest.raises(TelegramDeliveryError, match="non-JSON"):
            client.send_message(1, "x")
    
    @pytest.mark.parametrize("body", [["bad gateway"], "oops", None, 3])
    def test_non_object_json_raises(self, client, mock_session, body):
        """A JSON reply that is not an object is a delivery failure."""
        response = mock_session.post.return_value
        response.status_code = 502
        response.json.return_value = body
        
        with pytest.raises(TelegramDeliveryError, match="unexpected JSON"):
            client.send_message(1, "x")


class TestConstruction:
    
    def test_empty_token_rejected(self):
        with pytest.raises(ValueError):
            TelegramClient(token="")
    
    def test_from_config(self):
        config = AppConfig(
            telegram_bot_token="123:abc",
            telegram_api_base="http://localhost:8081",
            request_timeout_sec=3.0
        )
        client = TelegramClient.from_config(config)
        
        assert client.api_base == "http://localhost:8081"
        assert client.timeout == 3.0
    
    def test_from_config_without_token(self):
        config = AppConfig(telegram_bot_token=None)
        
        with pytest.raises(ValueError, match="TELEGRAM_BOT_TOKEN"):
            TelegramClient.from_config(config)
