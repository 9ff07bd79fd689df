"""Coggle REST API client.

Creates diagrams and issues authenticated requests against the Coggle web
API. Diagrams and nodes returned by the client keep a reference back to it
and use it for their own requests.

Environment:
    COGGLE_USER_AUTH_TOKEN: user authentication token (required unless token= is passed)
    COGGLE_BASE_URL: service root, defaults to https://coggle.it

Usage:
    async with CoggleApi(token="...") as coggle:
        diagram = await coggle.create_diagram("Ideas")
        root, = await diagram.get_nodes()
        child = await root.add_child("First branch", {"x": 100, "y": 50})
"""

import logging
import os
from typing import Any, Dict, Optional, Tuple

import httpx
from pydantic import ValidationError as SchemaError

from .diagram import Diagram
from .errors import ConfigurationError, RequestError
from .models import CreateDiagramRequest, DiagramResource
from .validation import raise_for_issues, validate_title

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://coggle.it"

DIAGRAMS_ENDPOINT = "/api/1/diagrams"


def _error_description(response: httpx.Response) -> str:
    """Pull the server's explanation out of an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("description", "details"):
            if body.get(key):
                return str(body[key])
    return response.text[:200] or response.reason_phrase


class CoggleApi:
    """Async Coggle API client.

    Args:
        token: User auth token. Falls back to COGGLE_USER_AUTH_TOKEN env var.
        base_url: Service root. Falls back to COGGLE_BASE_URL, then https://coggle.it.
        timeout: HTTP request timeout in seconds.
        transport: Optional httpx transport, e.g. to talk to an in-process app.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        token = token or os.getenv("COGGLE_USER_AUTH_TOKEN", "")
        if not token:
            raise ConfigurationError(
                "you must provide a user's authentication token: set "
                "COGGLE_USER_AUTH_TOKEN or pass token= to CoggleApi()"
            )
        base_url = base_url or os.getenv("COGGLE_BASE_URL") or DEFAULT_BASE_URL
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def token(self) -> str:
        return self._token

    def __repr__(self) -> str:
        return f"CoggleApi(base_url={self._base_url!r})"

    async def __aenter__(self) -> "CoggleApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------
    # Low-level request helpers
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        endpoint: str,
        query: Optional[Dict[str, Any]] = None,
        body: Any = None,
    ) -> httpx.Response:
        """Send one authenticated request; raise RequestError unless it succeeds."""
        params = {"access_token": self._token}
        if query:
            params.update(query)

        client = self._get_client()
        try:
            if body is None:
                resp = await client.request(method, endpoint, params=params)
            else:
                resp = await client.request(method, endpoint, params=params, json=body)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {endpoint}: transport error: {e}")
            raise RequestError(
                f"{method} {endpoint} failed: {e}",
                method=method,
                endpoint=endpoint,
            ) from e

        logger.debug(f"{method} {endpoint} -> {resp.status_code}")
        if not resp.is_success:
            description = _error_description(resp)
            logger.warning(f"{method} {endpoint} failed ({resp.status_code}): {description}")
            raise RequestError(
                f"{method} {endpoint} failed ({resp.status_code}): {description}",
                status_code=resp.status_code,
                description=description,
                method=method,
                endpoint=endpoint,
            )
        return resp

    @staticmethod
    def _json(resp: httpx.Response, method: str, endpoint: str) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise RequestError(
                f"{method} {endpoint} returned a body that is not JSON",
                status_code=resp.status_code,
                method=method,
                endpoint=endpoint,
            ) from e

    async def request_json(
        self,
        method: str,
        endpoint: str,
        query: Optional[Dict[str, Any]] = None,
        body: Any = None,
    ) -> Tuple[int, Any]:
        """Send a request; returns the response status code and its parsed JSON body."""
        resp = await self._request(method, endpoint, query, body)
        return resp.status_code, self._json(resp, method, endpoint)

    async def get(self, endpoint: str, query: Optional[Dict[str, Any]] = None) -> Any:
        """GET from an endpoint (relative to the base URL); returns the parsed JSON body."""
        _, data = await self.request_json("GET", endpoint, query)
        return data

    async def post(
        self, endpoint: str, query: Optional[Dict[str, Any]] = None, body: Any = None
    ) -> Any:
        """POST `body` as JSON to an endpoint; returns the parsed JSON body."""
        _, data = await self.request_json("POST", endpoint, query, {} if body is None else body)
        return data

    async def put(
        self, endpoint: str, query: Optional[Dict[str, Any]] = None, body: Any = None
    ) -> Any:
        """PUT `body` as JSON to an endpoint; returns the parsed JSON body."""
        _, data = await self.request_json("PUT", endpoint, query, {} if body is None else body)
        return data

    async def delete(self, endpoint: str, query: Optional[Dict[str, Any]] = None) -> None:
        """DELETE an endpoint. Any response body is discarded."""
        await self._request("DELETE", endpoint, query)

    # ------------------------------------------------------------------
    # Diagrams
    # ------------------------------------------------------------------

    def diagram(self, diagram_id: str, title: str = "") -> Diagram:
        """Handle on an existing diagram. Does not contact the service."""
        return Diagram(self, DiagramResource(id=diagram_id, title=title))

    async def create_diagram(self, title: str) -> Diagram:
        """Create a new Coggle diagram titled `title`.

        POST /api/1/diagrams
        """
        raise_for_issues(validate_title(title))
        body = CreateDiagramRequest(title=title).model_dump()
        try:
            status, data = await self.request_json("POST", DIAGRAMS_ENDPOINT, body=body)
            resource = DiagramResource.model_validate(data)
        except RequestError as e:
            raise e.wrap("failed to create diagram") from e
        except SchemaError as e:
            raise RequestError(
                f"failed to create diagram: unexpected response: {e}",
                status_code=status,
                method="POST",
                endpoint=DIAGRAMS_ENDPOINT,
            ) from e
        logger.info(f"create_diagram: id={resource.id}, title={resource.title!r}")
        return Diagram(self, resource)

