"""Permission value object and permission catalog.

A permission is an exact-match capability tag of the form
``<resource>.<action>``. The catalog is the closed vocabulary of tags a
deployment recognizes; nothing outside it is ever granted.
"""

import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, List, Union

from ....core.exceptions import InvalidPermissionError

_PERMISSION_PATTERN = re.compile(r"^[a-z][a-z0-9_-]*(\.[a-z][a-z0-9_-]*)+$")


@dataclass(frozen=True)
class PermissionCode:
    """Immutable value object for a permission tag with validation."""

    value: str

    def __post_init__(self):
        """Validate permission format: resource.action"""
        if not isinstance(self.value, str) or not _PERMISSION_PATTERN.match(self.value):
            raise InvalidPermissionError(
                f"Permission must be in format 'resource.action', got: {self.value!r}",
                details={"permission": self.value},
            )

    @classmethod
    def is_valid(cls, value: object) -> bool:
        """Check format without raising."""
        return isinstance(value, str) and bool(_PERMISSION_PATTERN.match(value))

    @classmethod
    def compose(cls, resource: str, action: str) -> "PermissionCode":
        return cls(f"{resource}.{action}")

    @property
    def resource(self) -> str:
        """Everything before the last dot (``sms.logs`` for ``sms.logs.export``)."""
        return self.value.rsplit(".", 1)[0]

    @property
    def action(self) -> str:
        return self.value.rsplit(".", 1)[1]

    def __str__(self) -> str:
        return self.value


PermissionLike = Union[str, PermissionCode]


def permission_value(permission: PermissionLike) -> str:
    """Return the raw tag for a string or PermissionCode."""
    if isinstance(permission, PermissionCode):
        return permission.value
    return permission


class PermissionCatalog:
    """Closed, immutable set of permission tags recognized by a deployment."""

    def __init__(self, permissions: Iterable[PermissionLike]):
        codes = [PermissionCode(permission_value(p)) for p in permissions]
        self._codes: FrozenSet[str] = frozenset(code.value for code in codes)
        if not self._codes:
            raise InvalidPermissionError("Permission catalog cannot be empty")

    @property
    def codes(self) -> FrozenSet[str]:
        return self._codes

    def contains(self, permission: object) -> bool:
        """Membership test that never raises, even for malformed input."""
        if isinstance(permission, PermissionCode):
            return permission.value in self._codes
        return isinstance(permission, str) and permission in self._codes

    def validate(self, permissions: Iterable[PermissionLike]) -> FrozenSet[str]:
        """Return the permissions as a frozenset of tags.

        Raises:
            InvalidPermissionError: If any tag is outside the catalog. Every
                offending tag is listed in the error details.
        """
        values = [permission_value(p) for p in permissions]
        unknown = sorted({str(v) for v in values if not self.contains(v)})
        if unknown:
            raise InvalidPermissionError(
                f"Permissions not in catalog: {', '.join(unknown)}",
                details={"unknown_permissions": unknown},
            )
        return frozenset(values)

    def filter_known(self, permissions: Iterable[PermissionLike]) -> FrozenSet[str]:
        """Keep only the tags present in the catalog."""
        return frozenset(
            permission_value(p) for p in permissions if self.contains(p)
        )

    def resources(self) -> List[str]:
        """Sorted list of distinct resources."""
        return sorted({PermissionCode(code).resource for code in self._codes})

    def for_resource(self, resource: str) -> FrozenSet[str]:
        return frozenset(
            code for code in self._codes if PermissionCode(code).resource == resource
        )

    def __contains__(self, permission: object) -> bool:
        return self.contains(permission)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._codes))

    def __len__(self) -> int:
        return len(self._codes)

    def __repr__(self) -> str:
        return f"PermissionCatalog(permissions={len(self._codes)})"


def _actions(resource: str, *actions: str) -> List[str]:
    return [f"{resource}.{action}" for action in actions]


REFERENCE_PERMISSIONS: List[str] = [
    *_actions("users", "view", "create", "edit", "delete", "export"),
    *_actions("roles", "view", "create", "edit", "delete"),
    *_actions("members", "view", "create", "edit", "delete", "export"),
    *_actions("staff", "view", "create", "edit", "delete"),
    *_actions("team", "view", "create", "edit", "delete"),
    *_actions("classes", "view", "create", "edit", "delete", "schedule"),
    *_actions("equipment", "view", "create", "edit", "delete"),
    *_actions("billing", "view", "create", "edit", "process"),
    *_actions("finance", "view", "create", "edit", "export"),
    *_actions("lockers", "view", "create", "edit", "delete", "assign"),
    *_actions("attendance", "view", "create", "export"),
    "analytics.view",
    *_actions("reports", "view", "export"),
    *_actions("settings", "view", "edit"),
    *_actions("system", "view", "manage", "backup", "restore"),
    *_actions("branches", "view", "create", "edit", "delete"),
    *_actions("notifications", "view", "send"),
    *_actions("sms", "view", "send"),
    *_actions("sms.logs", "view", "export"),
    *_actions("leads", "view", "create", "edit", "delete", "assign", "export"),
    *_actions("referrals", "view", "create", "edit", "process", "export"),
    *_actions("feedback", "view", "create", "edit", "delete", "respond", "export"),
    *_actions("tasks", "view", "create", "edit", "delete", "assign"),
    *_actions("products", "view", "create", "edit", "delete"),
    *_actions("devices", "view", "manage"),
]

DEFAULT_PERMISSION_CATALOG = PermissionCatalog(REFERENCE_PERMISSIONS)
