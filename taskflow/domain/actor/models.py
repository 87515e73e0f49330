"""Actor domain models.

The actor is the authenticated user attempting an operation. Accounts and
members are distinct: tasks are assigned to member ids, while the creator of
a task is recorded by account id.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, field_validator


class Role(str, Enum):
    """Organization role of an actor."""

    ADMIN = "admin"
    DIRECTOR = "director"
    PMO = "pmo"
    LEADER = "leader"
    STAFF = "staff"


MANAGER_ROLES: frozenset[Role] = frozenset(
    {Role.ADMIN, Role.DIRECTOR, Role.PMO, Role.LEADER}
)


class Actor(BaseModel):
    """The current user context."""

    id: str
    role: Role
    member_id: str | None = None

    model_config = {"frozen": True}

    @field_validator("role", mode="before")
    @classmethod
    def _lower_role(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def is_manager(self) -> bool:
        return self.role in MANAGER_ROLES
