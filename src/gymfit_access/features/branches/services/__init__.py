"""Branch scope services."""

from .branch_scope_resolver import (
    BranchScopeResolver,
    can_access_branch,
    get_accessible_branches,
    get_current_branch_id,
)

__all__ = [
    "BranchScopeResolver",
    "can_access_branch",
    "get_accessible_branches",
    "get_current_branch_id",
]
