"""REST resource paths.

COM paths are relative to the region base URL, GLP paths to the global
GreenLake endpoint.
"""

COM_V1BETA1 = "/compute-ops-mgmt/v1beta1"
COM_V1BETA2 = "/compute-ops-mgmt/v1beta2"
GLP_ORGANIZATIONS = "/organizations/v2alpha1"


def activities_uri() -> str:
    return f"{COM_V1BETA2}/activities"


def approval_policies_uri() -> str:
    return f"{COM_V1BETA1}/approval-policies"


def appliances_uri() -> str:
    return f"{COM_V1BETA1}/appliances"


def activation_keys_uri() -> str:
    return f"{COM_V1BETA1}/activation-keys"


def servers_uri() -> str:
    return f"{COM_V1BETA2}/servers"


def server_alerts_uri(server_id: str) -> str:
    return f"{servers_uri()}/{server_id}/alerts"


def groups_uri() -> str:
    return f"{COM_V1BETA2}/groups"


def schedules_uri() -> str:
    return f"{COM_V1BETA2}/schedules"


def schedule_history_uri(schedule_id: str) -> str:
    return f"{schedules_uri()}/{schedule_id}/history"


def organizations_uri() -> str:
    return f"{GLP_ORGANIZATIONS}/organizations"


def organization_workspaces_uri(organization_id: str) -> str:
    return f"{organizations_uri()}/{organization_id}/workspaces"
