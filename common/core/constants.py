from enum import Enum


class Environment(str, Enum):
    """Environment profiles."""

    LOCAL = "local"
    DEV = "dev"
    STAGING = "staging"
    PRODUCTION = "production"


# Plan config every user falls back to when no plan is assigned
BASIC_PLAN_ID = "basic"

# Name of the workspace provisioned for every new user
DEFAULT_WORKSPACE_NAME = "My workspace"
