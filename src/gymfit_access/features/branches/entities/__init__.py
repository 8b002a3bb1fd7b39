"""Branch entities package."""

from .branch import Branch, BranchDirectorySnapshot
from .protocols import BranchDirectory

__all__ = [
    "Branch",
    "BranchDirectorySnapshot",
    "BranchDirectory",
]
