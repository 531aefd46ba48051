"""Shared plumbing for resource commands."""

from typing import Any, Dict, List, Optional, Tuple, Union

from ..exceptions import ApiError
from ..filters import build_uri, eq
from ..logging import get_logger
from ..models import OperationStatus, WhatIfRequest
from ..web import ComWebRequest

logger = get_logger(__name__)

Outcome = Union[OperationStatus, WhatIfRequest]
Lookup = Tuple[Optional[Dict[str, Any]], Optional[OperationStatus]]


class ResourceCommands:
    """Base class holding the web-request helper used by every command."""

    kind = "Resource"

    def __init__(self, web: Optional[ComWebRequest] = None):
        self.web = web or ComWebRequest()

    def validate_region(self, region: str) -> str:
        return self.web.connection.validate_region(region)

    async def get_items(self, uri: str, region: Optional[str] = None) -> List[Dict[str, Any]]:
        """GET ``uri`` and always return a list of JSON objects."""
        logger.debug("Resolved URI", uri=uri, region=region)
        result = await self.web.invoke(uri, region=region)
        if result is None:
            return []
        if isinstance(result, dict):
            return [result]
        return list(result)

    async def find_by(
        self, uri: str, field: str, value: str, region: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """First object whose ``field`` equals ``value``, or None."""
        items = await self.get_items(build_uri(uri, filter=eq(field, value)), region)
        return items[0] if items else None

    def lookup_failed(self, name: str, error: ApiError, kind: Optional[str] = None) -> OperationStatus:
        details = f"{kind or self.kind} cannot be found!"
        logger.error(details, resource=self.kind, name=name, error=str(error))
        return OperationStatus.failed(name, details, error)

    async def lookup(self, name: str, uri: str, region: Optional[str] = None) -> Lookup:
        """Find the object named ``name`` for a mutating command.

        Returns ``(object, None)``, ``(None, None)`` when nothing matches, or
        ``(None, status)`` when the lookup itself failed.
        """
        try:
            return await self.find_by(uri, "name", name, region), None
        except ApiError as e:
            return None, self.lookup_failed(name, e)

    async def send(
        self,
        name: str,
        uri: str,
        *,
        method: str,
        region: Optional[str] = None,
        body: Optional[Any] = None,
        whatif: bool = False,
        success: str,
        failure: str,
    ) -> Outcome:
        """Run one mutating call and report it as a status object.

        A DELETE answered with 404 means the object is already gone and is
        reported as a warning.
        """
        try:
            result = await self.web.invoke(uri, region=region, method=method, body=body, whatif=whatif)
        except ApiError as e:
            if method == "DELETE" and e.is_not_found:
                logger.warning("Already deleted", resource=self.kind, name=name)
                return OperationStatus.warning(name, f"{self.kind} cannot be found! No action needed.")
            logger.error(failure, resource=self.kind, name=name, error=str(e))
            return OperationStatus.failed(name, failure, e)

        if whatif:
            return result
        logger.info(success, resource=self.kind, name=name)
        return OperationStatus.complete(name, success)
