"""Branches feature.

Branch directory snapshots and the scope rules deciding which branches a
resolved user may operate on.
"""

from .entities import Branch, BranchDirectorySnapshot, BranchDirectory
from .repositories import InMemoryBranchDirectory
from .services import BranchScopeResolver

__all__ = [
    "Branch",
    "BranchDirectorySnapshot",
    "BranchDirectory",
    "InMemoryBranchDirectory",
    "BranchScopeResolver",
]
