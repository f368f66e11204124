import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from telegraphkit.client import ACCOUNT_INFO_FIELDS, TelegraphClient
from telegraphkit.config import ClientConfig
from telegraphkit.exceptions import HttpTransportError, TelegraphApiError, TokenNotProvidedError
from telegraphkit.models import Account, GetViewsParams
from telegraphkit.parser import ContentParser
from telegraphkit.types_content import NodeElement


class Recorder:
    """Mock transport that records requests and answers with a fixed result."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []
        self._responder = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    def body(self, index: int = -1) -> Dict[str, Any]:
        return json.loads(self.requests[index].content)


def _ok(result: Any) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(200, json={"ok": True, "result": result})


def _client(recorder: Recorder, token: str | None = "tok", **kwargs: Any) -> TelegraphClient:
    return TelegraphClient(
        token,
        base_url="https://api.example.test/",
        transport=httpx.MockTransport(recorder),
        **kwargs,
    )


def test_create_page_converts_html_and_posts_json() -> None:
    recorder = Recorder(_ok({"path": "Test-01-01", "title": "Test page", "content": [{"tag": "p", "children": ["Hello"]}]}))
    client = _client(recorder)

    page = client.create_page("Test page", "<p>Hello</p>", author_name="Tester")

    request = recorder.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/createPage"
    assert request.headers["content-type"] == "application/json"
    assert recorder.body() == {
        "title": "Test page",
        "content": '[{"tag":"p","children":["Hello"]}]',
        "return_content": True,
        "author_name": "Tester",
        "access_token": "tok",
    }
    assert page.path == "Test-01-01"
    assert page.content == [NodeElement(tag="p", children=["Hello"])]


def test_create_page_applies_parser_rules() -> None:
    recorder = Recorder(_ok({"path": "x"}))
    parser = ContentParser().add_tag_rules({"h1": "h3", "footer": False})
    client = _client(recorder, parser=parser)

    client.create_page("T", "<h1>Title</h1><footer>c</footer>")

    assert recorder.body()["content"] == '[{"tag":"h3","children":["Title"]}]'


def test_edit_page_sends_node_content_to_path() -> None:
    recorder = Recorder(_ok({"path": "Test-01-01", "title": "Edited"}))
    client = _client(recorder)
    content = [NodeElement(tag="p", children=["Hello world"])]

    page = client.edit_page("Test-01-01", "Edited", content, author_url="https://example.com/")

    assert recorder.requests[0].url.path == "/editPage/Test-01-01"
    body = recorder.body()
    assert body["content"] == '[{"tag":"p","children":["Hello world"]}]'
    assert body["author_url"] == "https://example.com/"
    assert "author_name" not in body
    assert page.title == "Edited"


@pytest.mark.parametrize(
    "call",
    [
        lambda c: c.create_page("T", "<p>x</p>"),
        lambda c: c.edit_page("p", "T", []),
        lambda c: c.get_page_list(),
        lambda c: c.get_account_info(),
        lambda c: c.edit_account_info(Account(short_name="s")),
        lambda c: c.revoke_access_token(),
    ],
)
def test_token_required_before_any_request(call) -> None:
    recorder = Recorder(_ok({}))
    client = _client(recorder, token=None)

    with pytest.raises(TokenNotProvidedError):
        call(client)
    assert recorder.requests == []


def test_get_page_without_token() -> None:
    recorder = Recorder(_ok({"path": "Sample-01-01", "content": '["text"]', "views": 4}))
    client = _client(recorder, token=None)

    page = client.get_page("Sample-01-01")

    assert recorder.requests[0].url.path == "/getPage/Sample-01-01"
    assert recorder.body() == {"return_content": True}
    assert page.content == ["text"]
    assert page.views == 4


def test_get_views_without_params_sends_no_body() -> None:
    recorder = Recorder(_ok({"views": 40}))
    client = _client(recorder, token=None)

    views = client.get_views("Sample-01-01")

    assert recorder.requests[0].content == b""
    assert views.views == 40


def test_get_views_with_params() -> None:
    recorder = Recorder(_ok({"views": 2}))
    client = _client(recorder, token=None)

    client.get_views("Sample-01-01", GetViewsParams(year=2024, month=5, day=1))

    assert recorder.body() == {"year": 2024, "month": 5, "day": 1}


def test_create_account_merges_result() -> None:
    recorder = Recorder(
        _ok(
            {
                "short_name": "test-account",
                "author_name": "Test account",
                "author_url": "",
                "access_token": "new-token",
                "auth_url": "https://edit.telegra.ph/auth/x",
            }
        )
    )
    client = _client(recorder, token=None)
    account = Account(short_name="test-account", author_name="Test account")

    created = client.create_account(account)

    assert recorder.body() == {"short_name": "test-account", "author_name": "Test account"}
    assert created.access_token == "new-token"
    assert created.auth_url == "https://edit.telegra.ph/auth/x"
    assert account.access_token is None


def test_caller_token_and_path_are_replaced() -> None:
    recorder = Recorder(_ok({"short_name": "s"}))
    client = _client(recorder)

    client.edit_account_info(Account(short_name="s", access_token="other"))

    assert recorder.body() == {"short_name": "s", "access_token": "tok"}


def test_get_account_info_requests_fields() -> None:
    recorder = Recorder(_ok({"short_name": "s", "page_count": 3}))
    client = _client(recorder)

    account = client.get_account_info()

    assert recorder.body()["fields"] == list(ACCOUNT_INFO_FIELDS)
    assert account.page_count == 3


def test_get_page_list() -> None:
    recorder = Recorder(_ok({"total_count": 1, "pages": [{"path": "a", "can_edit": True}]}))
    client = _client(recorder)

    page_list = client.get_page_list(0, 5)

    assert recorder.body() == {"offset": 0, "limit": 5, "access_token": "tok"}
    assert page_list.pages[0].can_edit is True


def test_api_error_carries_message_and_status() -> None:
    recorder = Recorder(lambda request: httpx.Response(200, json={"ok": False, "error": "PAGE_NOT_FOUND"}))
    client = _client(recorder)

    with pytest.raises(TelegraphApiError) as excinfo:
        client.get_page("missing")

    assert str(excinfo.value) == "PAGE_NOT_FOUND"
    assert excinfo.value.status_code == 200
    assert client.last_response is not None
    assert client.last_response.status_code == 200


def test_non_json_response_is_unknown_error() -> None:
    recorder = Recorder(lambda request: httpx.Response(502, text="Bad gateway"))
    client = _client(recorder)

    with pytest.raises(TelegraphApiError) as excinfo:
        client.get_page("p")

    assert str(excinfo.value) == "Unknown Telegraph API error"
    assert excinfo.value.status_code == 502


def test_transport_failure() -> None:
    def _fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(Recorder(_fail))

    with pytest.raises(HttpTransportError):
        client.get_page("p")


def test_from_config_and_context_manager() -> None:
    recorder = Recorder(_ok({"views": 1}))
    config = ClientConfig(base_url="https://api.example.test", timeout=5, access_token="cfg")

    with TelegraphClient.from_config(config, transport=httpx.MockTransport(recorder)) as client:
        client.get_views("p")
        assert client.access_token == "cfg"
        assert client.timeout == 5

    assert str(recorder.requests[0].url) == "https://api.example.test/getViews/p"
    assert client._client is None


def test_invalid_result_is_api_error() -> None:
    recorder = Recorder(_ok({"path": "p", "content": "{broken"}))
    client = _client(recorder)

    with pytest.raises(TelegraphApiError) as excinfo:
        client.get_page("p")

    assert str(excinfo.value).startswith("Invalid Page in API response")
    assert excinfo.value.status_code == 200


def test_invalid_page_list_result_is_api_error() -> None:
    recorder = Recorder(_ok({"total_count": "many", "pages": []}))
    client = _client(recorder)

    with pytest.raises(TelegraphApiError):
        client.get_page_list()
