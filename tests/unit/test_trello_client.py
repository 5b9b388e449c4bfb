"""
Unit tests for TrelloClient (Trello API client)
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from trello_cli import (
    TrelloAPIError,
    TrelloAuthenticationError,
    TrelloClient,
    TrelloDecodeError,
    TrelloNotFoundError,
    TrelloRateLimitError,
    TrelloRequestFailed,
    TrelloServerError,
    TrelloTransportError,
)
from trello_cli.models import Board, Card, Comment, DetailedCard, Organization, TrelloList


def make_response(payload=None, status_code=200, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = payload
    return response


@pytest.fixture
def client():
    return TrelloClient(api_key="test_key", api_token="test_token")


class TestRequestParameters:
    """Every request carries key/token and the endpoint's own params"""

    def test_get_cards_requests_members(self, client, board_fixture):
        """Should call /boards/{id}/cards with members=true"""
        with patch("requests.get") as mock_get:
            mock_get.return_value = make_response(board_fixture["cards"])

            cards = client.get_cards("board-1")

            url = mock_get.call_args[0][0]
            params = mock_get.call_args[1]["params"]
            assert url == "https://api.trello.com/1/boards/board-1/cards"
            assert params == {"key": "test_key", "token": "test_token", "members": "true"}
            assert all(isinstance(card, Card) for card in cards)

    def test_get_lists(self, client, board_fixture):
        """Should call /boards/{id}/lists with only credentials"""
        with patch("requests.get") as mock_get:
            mock_get.return_value = make_response(board_fixture["lists"])

            lists = client.get_lists("board-1")

            assert mock_get.call_args[0][0] == "https://api.trello.com/1/boards/board-1/lists"
            assert mock_get.call_args[1]["params"] == {"key": "test_key", "token": "test_token"}
            assert lists[0] == TrelloList(id="list-todo", name="To Do")

    def test_get_boards_filters_open(self, client, board_fixture):
        """Should only ask for open boards"""
        with patch("requests.get") as mock_get:
            mock_get.return_value = make_response(board_fixture["boards"])

            boards = client.get_boards("org-1")

            assert mock_get.call_args[0][0] == "https://api.trello.com/1/organizations/org-1/boards"
            assert mock_get.call_args[1]["params"]["filter"] == "open"
            assert boards == [Board(id="board-1", name="Roadmap"), Board(id="board-2", name="Bugs")]

    def test_get_organizations_uses_display_name(self, client, board_fixture):
        """Should name workspaces by displayName"""
        with patch("requests.get") as mock_get:
            mock_get.return_value = make_response(board_fixture["organizations"])

            organizations = client.get_organizations()

            assert mock_get.call_args[0][0] == "https://api.trello.com/1/members/me/organizations"
            assert organizations[0] == Organization(id="org-1", name="Engine Works")

    def test_get_member_id(self, client, board_fixture):
        """Should return the id of /members/me"""
        with patch("requests.get") as mock_get:
            mock_get.return_value = make_response(board_fixture["member"])

            assert client.get_member_id() == "member-me"
            assert mock_get.call_args[0][0] == "https://api.trello.com/1/members/me"

    def test_get_member(self, client, board_fixture):
        """Should fetch one member by id"""
        with patch("requests.get") as mock_get:
            mock_get.return_value = make_response(board_fixture["members"]["member-bob"])

            member = client.get_member("member-bob")

            assert mock_get.call_args[0][0] == "https://api.trello.com/1/members/member-bob"
            assert member.full_name == "Bob Builder"
            assert member.username == "bob"

    def test_get_card_details_requests_members_and_labels(self, client, board_fixture):
        """Should ask for members and labels"""
        with patch("requests.get") as mock_get:
            mock_get.return_value = make_response(board_fixture["card_details"])

            card = client.get_card_details("card-b")

            params = mock_get.call_args[1]["params"]
            assert mock_get.call_args[0][0] == "https://api.trello.com/1/cards/card-b"
            assert params["members"] == "true"
            assert params["labels"] == "true"
            assert isinstance(card, DetailedCard)
            assert [label.name for label in card.labels] == ["bug", "auth"]

    def test_get_card_comments_filters_comment_actions(self, client, board_fixture):
        """Should ask only for commentCard actions"""
        with patch("requests.get") as mock_get:
            mock_get.return_value = make_response(board_fixture["comments"])

            comments = client.get_card_comments("card-b")

            assert mock_get.call_args[0][0] == "https://api.trello.com/1/cards/card-b/actions"
            assert mock_get.call_args[1]["params"]["filter"] == "commentCard"
            assert comments[0] == Comment(
                id="action-2",
                text="Reproduced on staging.",
                created_at="2024-03-05T14:07:00.000Z",
                author_name="Bob Builder",
            )

    def test_custom_base_url(self, board_fixture):
        """Should strip a trailing slash from a custom base URL"""
        client = TrelloClient("k", "t", base_url="http://localhost:8080/1/")
        with patch("requests.get") as mock_get:
            mock_get.return_value = make_response(board_fixture["lists"])
            client.get_lists("b")
            assert mock_get.call_args[0][0] == "http://localhost:8080/1/boards/b/lists"

    def test_single_attempt(self, client):
        """Should not retry failed requests"""
        with patch("requests.get") as mock_get:
            mock_get.return_value = make_response(status_code=503, text="down")

            with pytest.raises(TrelloServerError):
                client.get_lists("board-1")

            assert mock_get.call_count == 1


class TestStatusErrors:
    """Non-200 responses map to TrelloRequestFailed subclasses carrying the status"""

    @pytest.mark.parametrize(
        "status_code,error_class",
        [
            (401, TrelloAuthenticationError),
            (403, TrelloAuthenticationError),
            (404, TrelloNotFoundError),
            (429, TrelloRateLimitError),
            (500, TrelloServerError),
            (502, TrelloServerError),
            (400, TrelloRequestFailed),
            (201, TrelloRequestFailed),
        ],
    )
    def test_status_maps_to_error(self, client, status_code, error_class):
        with patch("requests.get") as mock_get:
            mock_get.return_value = make_response(status_code=status_code, text="nope")

            with pytest.raises(error_class) as exc_info:
                client.get_cards("board-1")

        assert isinstance(exc_info.value, TrelloRequestFailed)
        assert exc_info.value.status_code == status_code
        assert f"HTTP {status_code}" in str(exc_info.value)
        assert "/boards/board-1/cards" in str(exc_info.value)

    def test_error_message_does_not_leak_token(self, client):
        """Should never put the token into the message"""
        with patch("requests.get") as mock_get:
            mock_get.return_value = make_response(status_code=401, text="invalid token")

            with pytest.raises(TrelloAuthenticationError) as exc_info:
                client.get_member_id()

        assert "test_token" not in str(exc_info.value)

    def test_html_body_is_folded_onto_one_line(self, client):
        body = "<html>\n  <body>\n    <h1>Bad Request</h1>\n  </body>\n</html>\n"
        with patch("requests.get") as mock_get:
            mock_get.return_value = make_response(status_code=400, text=body)

            with pytest.raises(TrelloRequestFailed) as exc_info:
                client.get_cards("board-1")

        message = str(exc_info.value)
        assert "\n" not in message
        assert message.endswith("<html> <body> <h1>Bad Request</h1> </body> </html>")
        assert exc_info.value.response_text == body


class TestTransportAndDecodeErrors:
    """Network failures and unexpected bodies"""

    @pytest.mark.parametrize(
        "exception",
        [
            requests.ConnectionError("Max retries exceeded with url: /1/members/me?token=test_token"),
            requests.Timeout("timed out"),
        ],
    )
    def test_network_error_raises_transport_error(self, client, exception):
        with patch("requests.get", side_effect=exception):
            with pytest.raises(TrelloTransportError) as exc_info:
                client.get_member_id()

        assert exc_info.value.status_code is None
        assert "test_token" not in str(exc_info.value)
        assert "/members/me" in str(exc_info.value)

    def test_invalid_json_raises_decode_error(self, client):
        response = make_response(text="<html>")
        response.json.side_effect = ValueError("No JSON object could be decoded")
        with patch("requests.get", return_value=response):
            with pytest.raises(TrelloDecodeError):
                client.get_lists("board-1")

    def test_object_where_list_expected_raises_decode_error(self, client):
        with patch("requests.get", return_value=make_response({"id": "x"})):
            with pytest.raises(TrelloDecodeError, match="Expected a JSON array"):
                client.get_cards("board-1")

    def test_malformed_card_raises_decode_error(self, client):
        with patch("requests.get", return_value=make_response([{"id": "x", "idShort": "7"}])):
            with pytest.raises(TrelloDecodeError, match="idShort"):
                client.get_cards("board-1")

    def test_all_errors_share_base_class(self, client):
        with patch("requests.get", side_effect=requests.ConnectionError("boom")):
            with pytest.raises(TrelloAPIError):
                client.get_organizations()
