"""Unit tests for typed resources and status objects."""

import json

import pytest

from hpecom.models import OperationStatus, TypedResource, WhatIfRequest, repackage


class TestTypedResource:
    """Test cases for TypedResource."""

    def test_access(self):
        resource = TypedResource("HPEGreenLake.COM.Schedules", {"id": "s1", "name": "Nightly", "state": "ENABLED"})

        assert resource["state"] == "ENABLED"
        assert resource.state == "ENABLED"
        assert resource.id == "s1"
        assert resource.name == "Nightly"
        assert "state" in resource
        assert resource.get("missing", 42) == 42
        with pytest.raises(AttributeError):
            resource.missing

    def test_to_dict_and_json_return_the_wrapped_object(self):
        resource = TypedResource("HPEGreenLake.COM.Activities", {"id": "a1"})

        assert resource.to_dict() == {"id": "a1"}
        assert json.loads(resource.to_json()) == {"id": "a1"}

    def test_empty_type_name(self):
        with pytest.raises(ValueError, match="Type name cannot be empty"):
            TypedResource("", {})

    def test_repackage(self):
        assert repackage(None, "T") == []

        single = repackage({"id": "1"}, "T")
        assert len(single) == 1
        assert single[0].type_name == "T"

        many = repackage([{"id": "1"}, {"id": "2"}], "T")
        assert [r.id for r in many] == ["1", "2"]

    def test_repackage_copies_items(self):
        item = {"id": "1"}
        resource = repackage([item], "T")[0]
        resource["extra"] = True

        assert "extra" not in item


class TestOperationStatus:
    """Test cases for OperationStatus."""

    def test_pascal_case_serialization(self):
        status = OperationStatus.failed("Policy A", "Approval policy cannot be created!", RuntimeError("boom"))

        assert status.to_dict() == {
            "Name": "Policy A",
            "Status": "Failed",
            "Details": "Approval policy cannot be created!",
            "Exception": "boom",
        }
        assert OperationStatus.type_name == "HPEGreenLake.COM.objStatus.NSDE"

    def test_constructors(self):
        assert OperationStatus.complete("a", "done").is_complete is True
        assert OperationStatus.warning("a", "exists").status == "Warning"
        assert OperationStatus.failed("a", "nope").exception is None

    def test_invalid_status(self):
        with pytest.raises(ValueError, match="Invalid status"):
            OperationStatus(name="a", status="Done")


def test_whatif_describe():
    request = WhatIfRequest(
        method="POST",
        url="https://eu-central1-api.compute.cloud.hpe.com/compute-ops-mgmt/v1beta1/approval-policies",
        headers={"Authorization": "Bearer ********"},
        body={"name": "Policy A"},
    )

    text = request.describe()

    assert text.startswith("POST https://eu-central1-api.compute.cloud.hpe.com/")
    assert "Authorization: Bearer ********" in text
    assert '"name": "Policy A"' in text
