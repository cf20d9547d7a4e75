"""
Permission Gate - roles, features, actions and the per-request auth context
"""
import enum
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Mapping, Optional
from uuid import UUID

from .exceptions import InvalidInputError


class Role(str, enum.Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    NORMAL_ADMIN = "NORMAL_ADMIN"


class Feature(str, enum.Enum):
    """Features that can be granted to a NORMAL_ADMIN"""
    SERVICE = "service"
    PRODUCT = "product"
    STOCK_IN = "stockIn"
    STOCK_OUT = "stockOut"


class Action(str, enum.Enum):
    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"


PermissionMap = Dict[Feature, FrozenSet[Action]]

# snake_case keys written by earlier releases
FEATURE_ALIASES = {"stock_in": Feature.STOCK_IN, "stock_out": Feature.STOCK_OUT}


def parse_permissions(raw: Optional[Mapping[str, Iterable[str]]]) -> PermissionMap:
    """
    Validate a {feature: [action, ...]} mapping into a fixed-shape map.
    Every feature is present in the result; unknown names are rejected.
    """
    permissions: PermissionMap = {f: frozenset() for f in Feature}
    if not raw:
        return permissions
    
    for feature_name, actions in raw.items():
        try:
            feature = FEATURE_ALIASES.get(feature_name) or Feature(feature_name)
        except ValueError:
            raise InvalidInputError(f"Unknown permission feature: {feature_name}")
        try:
            permissions[feature] = frozenset(Action(a) for a in (actions or []))
        except ValueError:
            raise InvalidInputError(f"Unknown permission action for {feature_name}: {list(actions)}")
    
    return permissions


def dump_permissions(permissions: PermissionMap) -> Dict[str, list]:
    """Serialize for storage / JSON, actions in enum order"""
    return {
        feature.value: [a.value for a in Action if a in permissions.get(feature, frozenset())]
        for feature in Feature
    }


@dataclass(frozen=True)
class AuthContext:
    """Acting identity with its capabilities, resolved once per request"""
    user_id: UUID
    username: str
    email: str
    role: Role
    permissions: PermissionMap = field(default_factory=dict)

    @property
    def is_super_admin(self) -> bool:
        return self.role == Role.SUPER_ADMIN

    def can(self, feature: Feature, action: Action) -> bool:
        if self.is_super_admin:
            return True
        # Missing feature or action means denied
        return action in self.permissions.get(feature, frozenset())

    @classmethod
    def from_user(cls, user) -> "AuthContext":
        return cls(
            user_id=user.id,
            username=user.username,
            email=user.email,
            role=Role(user.role),
            permissions=parse_permissions(user.permissions),
        )
