"""Shared web-request helper for the GreenLake and COM APIs."""

import json
from typing import Any, Dict, List, Optional, Union

import aiohttp

from .config import get_settings
from .exceptions import ApiError
from .logging import get_logger, log_api_call
from .models import WhatIfRequest
from .session import Connection, get_connection

logger = get_logger(__name__)

Response = Union[None, Dict[str, Any], List[Dict[str, Any]], WhatIfRequest]

REDACTED = "Bearer ********"


def error_from_response(status: int, payload: Any, reason: Optional[str] = None) -> ApiError:
    """Build an ApiError from an error response body."""
    message = reason or "Unexpected response"
    error_code = None
    if isinstance(payload, dict):
        message = payload.get("message") or payload.get("detail") or message
        error_code = payload.get("errorCode")
        debug_id = payload.get("debugId")
        if debug_id:
            message = f"{message} (debugId: {debug_id})"
    elif isinstance(payload, str) and payload.strip():
        message = payload.strip()
    return ApiError(status, message, error_code=error_code, body=payload)


def unwrap(payload: Any) -> Any:
    """Return the item list of a collection response, else the payload."""
    if isinstance(payload, dict) and isinstance(payload.get("items"), list):
        return payload["items"]
    return payload


class ComWebRequest:
    """Send authenticated requests to a COM region or to GreenLake."""

    def __init__(self, connection: Optional[Connection] = None, *, timeout: Optional[float] = None):
        self._connection = connection
        self._timeout = timeout if timeout is not None else get_settings().timeout

    @property
    def connection(self) -> Connection:
        return self._connection or get_connection()

    def resolve_url(self, uri: str, region: Optional[str] = None) -> str:
        if uri.startswith("https://") or uri.startswith("http://"):
            return uri
        if region is not None:
            return self.connection.com_base_url(region) + uri
        return self.connection.glp_endpoint + uri

    def build_headers(self, method: str, content_type: str, *, redact: bool = False) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Authorization": REDACTED if redact else f"Bearer {self.connection.require_token()}",
        }
        if method in ("POST", "PUT", "PATCH", "DELETE"):
            headers["Content-Type"] = (
                "application/merge-patch+json" if method == "PATCH" else content_type
            )
        return headers

    async def invoke(
        self,
        uri: str,
        *,
        region: Optional[str] = None,
        method: str = "GET",
        body: Optional[Any] = None,
        whatif: bool = False,
        content_type: str = "application/json",
    ) -> Response:
        """Send one request and return the decoded JSON body."""
        method = method.upper()
        url = self.resolve_url(uri, region)
        service = "com" if region is not None else "glp"

        log_api_call(logger, service=service, method=method, uri=uri, body=body, whatif=whatif, region=region)

        if whatif:
            return WhatIfRequest(
                method=method,
                url=url,
                headers=self.build_headers(method, content_type, redact=True),
                body=body,
            )

        headers = self.build_headers(method, content_type)
        data = json.dumps(body) if body is not None else None

        try:
            async with aiohttp.ClientSession() as session:
                async with session.request(
                    method,
                    url,
                    data=data,
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(total=self._timeout),
                ) as response:
                    text = await response.text()
                    payload = _decode(text)

                    if response.status >= 400:
                        error = error_from_response(response.status, payload, response.reason)
                        logger.error(
                            "API call failed",
                            method=method,
                            url=url,
                            status_code=response.status,
                            error=str(error),
                        )
                        raise error

                    logger.debug(
                        "API call completed",
                        method=method,
                        url=url,
                        status_code=response.status,
                    )
                    return unwrap(payload)

        except aiohttp.ClientError as e:
            logger.error("API call failed", method=method, url=url, error=str(e))
            raise ApiError(0, str(e) or e.__class__.__name__) from e


def _decode(text: str) -> Any:
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text
