"""Actor domain - roles and authorization.

Key Types:
    Role - Organization role
    Actor - Current user context
    TaskRelation - Creator/assignee/manager flags for one task

Authorization Functions:
    authorize_transition - Result-returning transition check
    can_transition - Boolean transition check
    allowed_targets - Statuses an actor may move a task to
    can_edit - Content edit authority
    can_assign - Assignment and archive authority
"""

from .authorization import (
    TaskRelation,
    allowed_targets,
    authorize_transition,
    can_assign,
    can_edit,
    can_transition,
    relation_to,
)
from .models import MANAGER_ROLES, Actor, Role

__all__ = [
    "Role",
    "Actor",
    "MANAGER_ROLES",
    "TaskRelation",
    "relation_to",
    "authorize_transition",
    "can_transition",
    "allowed_targets",
    "can_edit",
    "can_assign",
]
