"""Unit tests for appliance commands."""

import pytest

from hpecom.exceptions import ApiError, InvalidParameterError
from hpecom.resources import Appliances

BASE = "/compute-ops-mgmt/v1beta1/appliances"
KEYS = "/compute-ops-mgmt/v1beta1/activation-keys"

INVENTORY = [
    {"id": "ov1", "name": "oneview-lab", "hostname": "ov.lab.local", "ipAddress": "10.0.0.5", "applianceType": "VM"},
    {"id": "syn1", "name": "Synergy-A", "hostname": "syn.lab.local", "ipAddress": "10.0.0.6",
     "applianceType": "SYNERGY"},
]


class TestGet:
    """Test cases for Appliances.get."""

    @pytest.mark.asyncio
    async def test_type_filter(self, web, sent):
        await Appliances(web).get("eu-central", type="synergycomposer", limit=10)

        assert sent() == [("GET", f"{BASE}?filter=applianceType eq 'SYNERGY'&limit=10", None)]

    @pytest.mark.asyncio
    async def test_name_matches_ip_address(self, web):
        web.invoke.return_value = [dict(item) for item in INVENTORY]

        appliances = await Appliances(web).get("eu-central", name="10.0.0.6")

        assert [a.id for a in appliances] == ["syn1"]
        assert appliances[0].type == "SynergyComposer"
        assert appliances[0].type_name == "HPEGreenLake.COM.Appliances"

    @pytest.mark.asyncio
    async def test_unknown_type(self, web):
        with pytest.raises(InvalidParameterError, match="Unknown appliance type"):
            await Appliances(web).get("eu-central", type="Toaster")


class TestActivationKey:
    """Test cases for Appliances.new_activation_key."""

    @pytest.mark.asyncio
    async def test_payload(self, web, sent):
        web.invoke.return_value = {"activationKey": "ABC123", "expiresAt": "2024-05-16T12:00:00Z"}

        keys = await Appliances(web).new_activation_key(
            "eu-central", "OneViewVM", expiration_hours=24, subscription_key="SUB-1"
        )

        assert sent() == [("POST", KEYS, {
            "targetDevice": "OVE_APPLIANCE_VM",
            "expirationInHours": 24,
            "subscriptionKey": "SUB-1",
        })]
        assert keys[0].activationKey == "ABC123"
        assert keys[0].type_name == "HPEGreenLake.COM.Appliances.ActivationKey"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("hours", [0, 169])
    async def test_expiration_range(self, web, hours):
        with pytest.raises(InvalidParameterError, match="Expiration must be between 1 and 168"):
            await Appliances(web).new_activation_key("eu-central", "SecureGateway", expiration_hours=hours)

        web.invoke.assert_not_awaited()


class TestRemove:
    """Test cases for Appliances.remove."""

    @pytest.mark.asyncio
    async def test_remove_by_hostname(self, web, sent):
        web.invoke.side_effect = [list(INVENTORY), None]

        results = await Appliances(web).remove("eu-central", ["OV.LAB.LOCAL", "missing"])

        assert [r.status for r in results] == ["Complete", "Warning"]
        assert sent() == [("GET", BASE, None), ("DELETE", f"{BASE}/ov1", None)]

    @pytest.mark.asyncio
    async def test_inventory_error_fails_each_name(self, web, sent):
        web.invoke.side_effect = ApiError(0, "Connection refused")

        results = await Appliances(web).remove("eu-central", ["oneview-lab", "Synergy-A"])

        assert [(r.name, r.status) for r in results] == [("oneview-lab", "Failed"), ("Synergy-A", "Failed")]
        assert results[0].exception == "Request failed: Connection refused"
        assert len(sent()) == 1

    @pytest.mark.asyncio
    async def test_delete_error_does_not_stop_the_batch(self, web):
        web.invoke.side_effect = [list(INVENTORY), ApiError(409, "Appliance busy"), None]

        results = await Appliances(web).remove("eu-central", ["oneview-lab", "Synergy-A"])

        assert [r.status for r in results] == ["Failed", "Complete"]
        assert results[0].details == "Appliance cannot be removed!"
