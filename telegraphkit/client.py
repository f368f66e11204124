"""HTTP client for the Telegraph API.

Every API method is a POST to ``{base_url}{method}[/{path}]`` with a JSON
body; the response envelope is ``{"ok": bool, "result": ..., "error": str}``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Sequence, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from .config import DEFAULT_BASE_URL, ClientConfig
from .content_json import encode_content_tree
from .exceptions import HttpTransportError, TelegraphApiError, TokenNotProvidedError
from .models import Account, GetViewsParams, Page, PageList, PageViews
from .parser import ContentParser
from .types_content import ContentNode

logger = logging.getLogger(__name__)

ACCOUNT_INFO_FIELDS = ("short_name", "author_name", "author_url", "auth_url", "page_count")

PageContent = Union[str, Sequence[ContentNode]]
ModelT = TypeVar("ModelT", bound=BaseModel)


class TelegraphClient:
    """Client for the Telegraph API.

    Args:
        access_token: Access token of the Telegraph account, if any.
        base_url: API root URL.
        timeout: Request timeout in seconds.
        parser: Parser used to convert HTML page content. A default parser
            (no rules) is created when omitted.
        transport: Optional httpx transport, mainly for tests.
        http_options: Extra keyword arguments for ``httpx.Client``
            (headers, proxy, verify, ...).
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        parser: Optional[ContentParser] = None,
        transport: Optional[httpx.BaseTransport] = None,
        http_options: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.access_token = access_token
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self.parser = parser or ContentParser()
        self.http_options: Dict[str, Any] = dict(http_options or {})
        self._transport = transport
        self._client: Optional[httpx.Client] = None
        self.last_response: Optional[httpx.Response] = None

    @classmethod
    def from_config(
        cls, config: ClientConfig, parser: Optional[ContentParser] = None, **kwargs: Any
    ) -> "TelegraphClient":
        return cls(
            config.access_token,
            base_url=config.base_url,
            timeout=config.timeout,
            parser=parser,
            **kwargs,
        )

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    @access_token.setter
    def access_token(self, token: Optional[str]) -> None:
        self._access_token = None if token is None else str(token)

    @property
    def client(self) -> httpx.Client:
        """The underlying httpx client, created on first use."""
        if self._client is None:
            options = dict(self.http_options)
            options.setdefault("timeout", self.timeout)
            options.setdefault("follow_redirects", True)
            if self._transport is not None:
                options["transport"] = self._transport
            self._client = httpx.Client(**options)
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "TelegraphClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # Account methods

    def create_account(self, account: Account) -> Account:
        """Create a new Telegraph account.

        Returns the account with the regular fields plus ``access_token`` and
        ``auth_url``.
        """
        result = self._call_api("createAccount", data=account.to_request())
        return account.model_copy(update=self._build(Account, result).to_request())

    def edit_account_info(self, account: Account) -> Account:
        """Update account information. Only set fields are sent."""
        self._require_token()
        result = self._call_api("editAccountInfo", data=account.to_request())
        return account.model_copy(update=self._build(Account, result).to_request())

    def get_account_info(self, fields: Iterable[str] = ACCOUNT_INFO_FIELDS) -> Account:
        self._require_token()
        return self._build(Account, self._call_api("getAccountInfo", data={"fields": list(fields)}))

    def revoke_access_token(self) -> Account:
        """Revoke the current token and return the account with a new one.

        The client keeps using the old token; assign ``access_token`` to switch.
        """
        self._require_token()
        return self._build(Account, self._call_api("revokeAccessToken"))

    # Page methods

    def create_page(
        self,
        title: str,
        content: PageContent,
        author_name: Optional[str] = None,
        author_url: Optional[str] = None,
    ) -> Page:
        """Create a new page.

        ``content`` is a list of nodes or an HTML string, converted with the
        client's parser. The description of a freshly created page may be
        empty; fetch it with :meth:`get_page` to get the final one.
        """
        self._require_token()
        data = self._page_payload(title, content, author_name, author_url)
        return self._build(Page, self._call_api("createPage", data=data))

    def edit_page(
        self,
        path: str,
        title: str,
        content: PageContent,
        author_name: Optional[str] = None,
        author_url: Optional[str] = None,
    ) -> Page:
        self._require_token()
        data = self._page_payload(title, content, author_name, author_url)
        return self._build(Page, self._call_api("editPage", path, data))

    def get_page(self, path: str, return_content: bool = True) -> Page:
        return self._build(Page, self._call_api("getPage", path, {"return_content": return_content}))

    def get_page_list(self, offset: int = 0, limit: int = 50) -> PageList:
        """List pages of the account, most recently created first."""
        self._require_token()
        result = self._call_api("getPageList", data={"offset": offset, "limit": limit})
        return self._build(PageList, result)

    def get_views(self, path: str, params: Optional[GetViewsParams] = None) -> PageViews:
        """Number of views for a page; total views unless ``params`` narrows the period."""
        data = params.to_request() if params is not None else None
        return self._build(PageViews, self._call_api("getViews", path, data))

    # Internals

    def _page_payload(
        self,
        title: str,
        content: PageContent,
        author_name: Optional[str],
        author_url: Optional[str],
    ) -> Dict[str, Any]:
        if isinstance(content, str):
            content = self.parser.html_to_content_tree(content)
        data: Dict[str, Any] = {
            "title": title,
            "content": encode_content_tree(content),
            "return_content": True,
        }
        if author_name:
            data["author_name"] = str(author_name)
        if author_url:
            data["author_url"] = str(author_url)
        return data

    def _build(self, model: Type[ModelT], result: Any) -> ModelT:
        """Validate an API ``result`` into ``model``.

        Raises:
            TelegraphApiError: If the result does not match the model.
        """
        try:
            return model.model_validate(result)
        except ValidationError as exc:
            status_code = self.last_response.status_code if self.last_response is not None else None
            logger.warning("Telegraph API returned an invalid %s: %s", model.__name__, exc)
            raise TelegraphApiError(f"Invalid {model.__name__} in API response: {exc}", status_code) from exc

    def _require_token(self) -> None:
        if not self.access_token:
            raise TokenNotProvidedError("Token not provided")

    def _call_api(self, method: str, path: Optional[str] = None, data: Optional[Dict[str, Any]] = None) -> Any:
        """POST ``data`` as JSON to an API method and return its ``result``.

        Raises:
            HttpTransportError: If no HTTP response was received.
            TelegraphApiError: If the API reports an error or the body is not
                a valid response envelope.
        """
        url = self.base_url + method
        if path:
            url += "/" + path.lstrip("/")

        payload = dict(data or {})
        payload.pop("path", None)
        payload.pop("access_token", None)
        if self.access_token:
            payload["access_token"] = self.access_token

        logger.debug("Calling Telegraph API method %s (path=%s)", method, path)
        try:
            if payload:
                response = self.client.post(url, json=payload)
            else:
                response = self.client.post(url)
        except httpx.HTTPError as exc:
            logger.error("HTTP request to %s failed: %s", method, exc)
            raise HttpTransportError(str(exc) or "Unknown HTTP error") from exc
        self.last_response = response

        try:
            parsed = response.json()
        except ValueError:
            parsed = None

        if not isinstance(parsed, dict) or not parsed.get("ok"):
            error = None
            if isinstance(parsed, dict) and parsed.get("error"):
                error = str(parsed["error"])
            message = error or "Unknown Telegraph API error"
            logger.warning("Telegraph API method %s failed: %s (HTTP %s)", method, message, response.status_code)
            raise TelegraphApiError(message, response.status_code)

        return parsed.get("result") or {}


__all__ = ["ACCOUNT_INFO_FIELDS", "PageContent", "TelegraphClient"]
