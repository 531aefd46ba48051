"""Unit tests for GreenLake organization commands."""

from unittest.mock import AsyncMock

import pytest

from hpecom.exceptions import ApiError, NotConnectedError
from hpecom.resources import Organizations
from hpecom.session import Connection
from hpecom.web import ComWebRequest

BASE = "/organizations/v2alpha1/organizations"
ORG = {"id": "org-1", "name": "Acme"}


@pytest.mark.asyncio
async def test_get_uses_glp_endpoint(web, sent):
    web.invoke.return_value = [ORG]

    organizations = await Organizations(web).get(name="Acme")

    assert sent() == [("GET", f"{BASE}?filter=name eq 'Acme'", None)]
    assert web.invoke.call_args.kwargs["region"] is None
    assert organizations[0].type_name == "HPEGreenLake.Organizations"


@pytest.mark.asyncio
async def test_new_associates_current_workspace(web, sent):
    web.invoke.side_effect = [[], {"id": "org-2"}]

    status = await Organizations(web).new("Acme", description="Parent org")

    assert status.is_complete
    assert sent()[-1] == ("POST", BASE, {
        "name": "Acme",
        "description": "Parent org",
        "associatedWorkspace": {"id": "ws-123"},
    })


@pytest.mark.asyncio
async def test_new_without_association(web, sent):
    web.invoke.side_effect = [[], {}]

    await Organizations(web).new("Acme", associate_workspace=False)

    assert sent()[-1][2] == {"name": "Acme"}


@pytest.mark.asyncio
async def test_new_existing_is_a_warning(web):
    web.invoke.return_value = [ORG]

    status = await Organizations(web).new("Acme")

    assert status.status == "Warning"


@pytest.mark.asyncio
async def test_set(web, sent):
    web.invoke.side_effect = [[ORG], {}]

    await Organizations(web).set("Acme", description="Updated")

    assert sent()[-1] == ("PATCH", f"{BASE}/org-1", {"description": "Updated"})


@pytest.mark.asyncio
async def test_join_and_leave(web, sent):
    web.invoke.side_effect = [[ORG], {}, [ORG], None]

    joined = await Organizations(web).join("Acme")
    left = await Organizations(web).leave("Acme")

    assert joined.is_complete and left.is_complete
    assert sent()[1] == ("POST", f"{BASE}/org-1/workspaces", {"workspaceId": "ws-123"})
    assert sent()[3] == ("DELETE", f"{BASE}/org-1/workspaces/ws-123", None)


@pytest.mark.asyncio
async def test_join_unknown_organization(web):
    status = await Organizations(web).join("Ghost")

    assert status.status == "Failed"


@pytest.mark.asyncio
async def test_lookup_error_is_reported(web, sent):
    web.invoke.side_effect = ApiError(403, "Forbidden", error_code="HPE_GL_ERROR_FORBIDDEN")

    status = await Organizations(web).leave("Acme")

    assert status.status == "Failed"
    assert status.details == "Organization cannot be found!"
    assert status.exception == "HTTP 403 (HPE_GL_ERROR_FORBIDDEN): Forbidden"
    assert len(sent()) == 1


@pytest.mark.asyncio
async def test_join_requires_workspace():
    web = ComWebRequest(Connection(token="t", workspace_id=None), timeout=5)
    web.invoke = AsyncMock(return_value=[ORG])

    with pytest.raises(NotConnectedError):
        await Organizations(web).join("Acme")

    web.invoke.assert_not_awaited()
