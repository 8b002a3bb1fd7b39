"""Branch directory implementations."""

from .memory_branch_directory import InMemoryBranchDirectory

__all__ = ["InMemoryBranchDirectory"]
