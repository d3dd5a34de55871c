"""
Household Role Configuration
Defines the actions available on each household resource and which household
roles (owner, member) may perform them. Used by the household resolver to gate
routes and by /auth/session to tell the frontend what the user can do.
"""
from typing import Dict, List

# Resources and their actions
MODULES = {
    "households": {
        "resource": "households",
        "actions": ["read", "update"],
        "description": "Household details"
    },
    "members": {
        "resource": "members",
        "actions": ["read", "remove"],
        "description": "Household membership"
    },
    "tasks": {
        "resource": "tasks",
        "actions": ["create", "read", "update", "delete", "assign"],
        "description": "Shared task list"
    },
    "events": {
        "resource": "events",
        "actions": ["create", "read", "delete"],
        "description": "Shared calendar events"
    },
    "budgets": {
        "resource": "budgets",
        "actions": ["create", "read", "update"],
        "description": "Household budget periods"
    },
    "transactions": {
        "resource": "transactions",
        "actions": ["create", "read"],
        "description": "Bills and contributions"
    },
    "invitations": {
        "resource": "invitations",
        "actions": ["create", "read"],
        "description": "Invitations sent to new members"
    }
}

# Actions reserved to the household owner
OWNER_ONLY_ACTIONS = {
    "households:update",
    "members:remove",
    "budgets:create",
    "budgets:update",
    "invitations:create",
    "invitations:read",
}

ROLE_TYPES = {
    "owner": {
        "description": "Created the household; manages budget, invitations and members"
    },
    "member": {
        "description": "Shares tasks, calendar and transactions"
    }
}


def get_permission_matrix() -> Dict[str, List[dict]]:
    """
    Returns a dictionary with all actions and the roles holding them
    Format: {
        "permissions": [
            {"name": "tasks:create", "resource": "tasks", "action": "create", "description": "..."},
            ...
        ],
        "roles": [
            {"name": "owner", "description": "...", "permissions": ["budgets:create", ...]},
            ...
        ]
    }
    """
    permissions = []
    for module_config in MODULES.values():
        resource = module_config["resource"]
        for action in module_config["actions"]:
            permissions.append({
                "name": f"{resource}:{action}",
                "resource": resource,
                "action": action,
                "description": f"{action.capitalize()} {module_config['description'].lower()}"
            })

    all_names = [p["name"] for p in permissions]
    roles = []
    for role_name, role_config in ROLE_TYPES.items():
        if role_name == "owner":
            role_permissions = all_names
        else:
            role_permissions = [name for name in all_names if name not in OWNER_ONLY_ACTIONS]
        roles.append({
            "name": role_name,
            "description": role_config["description"],
            "permissions": sorted(role_permissions)
        })

    return {
        "permissions": permissions,
        "roles": roles
    }


PERMISSION_MATRIX = get_permission_matrix()


def get_role_permissions(role: str) -> List[str]:
    """Actions held by a household role; unknown roles hold none."""
    for r in PERMISSION_MATRIX["roles"]:
        if r["name"] == role:
            return r["permissions"]
    return []


def role_can(role: str, action: str) -> bool:
    return action in get_role_permissions(role)
