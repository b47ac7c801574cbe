from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union, Iterable, List

from app.domains.access.errors import InvalidAccessLevel

WRITE_SCOPE = "room:write"
READ_SCOPE = "room:read"
PRESENCE_WRITE_SCOPE = "room:presence:write"


class AccessLevel(Enum):
    """Уровень доступа, выбираемый пользователем при шаринге"""
    VIEWER = "viewer"
    EDITOR = "editor"
    OWNER = "owner"

    @classmethod
    def parse(cls, label: Union["AccessLevel", str]) -> "AccessLevel":
        if isinstance(label, AccessLevel):
            return label
        if not isinstance(label, str):
            raise InvalidAccessLevel(label)

        normalized = label.strip().lower()
        # В интерфейсе владелец называется "creator"
        if normalized == "creator":
            return cls.OWNER
        try:
            return cls(normalized)
        except ValueError:
            raise InvalidAccessLevel(label) from None


class CapabilitySet(Enum):
    """Набор возможностей пользователя в документе"""
    READ_WRITE = "read_write"
    READ_ONLY = "read_only"
    NONE = "none"

    @property
    def scopes(self) -> List[str]:
        """Скоупы комнаты в формате бэкенда совместной работы"""
        if self is CapabilitySet.READ_WRITE:
            return [WRITE_SCOPE]
        if self is CapabilitySet.READ_ONLY:
            return [READ_SCOPE, PRESENCE_WRITE_SCOPE]
        return []

    @property
    def can_write(self) -> bool:
        return self is CapabilitySet.READ_WRITE

    @classmethod
    def from_scopes(cls, scopes: Optional[Iterable[str]]) -> "CapabilitySet":
        scopes = list(scopes or [])
        if WRITE_SCOPE in scopes:
            return cls.READ_WRITE
        if scopes:
            return cls.READ_ONLY
        return cls.NONE


_LEVEL_CAPABILITIES = {
    AccessLevel.VIEWER: CapabilitySet.READ_ONLY,
    AccessLevel.EDITOR: CapabilitySet.READ_WRITE,
    AccessLevel.OWNER: CapabilitySet.READ_WRITE,
}


def encode(level: Union[AccessLevel, str]) -> CapabilitySet:
    """Преобразование уровня доступа в набор возможностей"""
    return _LEVEL_CAPABILITIES[AccessLevel.parse(level)]


def normalize_user_key(user_key: str) -> str:
    """Единый вид ключа пользователя: домен email в нижнем регистре"""
    user_key = user_key.strip()
    local, separator, domain = user_key.rpartition("@")
    if not separator:
        return user_key
    return f"{local}@{domain.lower()}"


@dataclass(frozen=True)
class Actor:
    """Пользователь, от имени которого выполняется запрос"""
    user_id: str
    email: str
    name: str
    avatar: Optional[str] = None


@dataclass(frozen=True)
class AccessEntry:
    document_id: str
    user_key: str
    capabilities: CapabilitySet


@dataclass(frozen=True)
class AccessChangeRequest:
    """Запрос на изменение доступа. None в requested_level означает отзыв"""
    document_id: str
    target_user: str
    requested_level: Optional[Union[AccessLevel, str]]
    initiating_user: Optional[Actor] = None


@dataclass(frozen=True)
class Notification:
    """Событие о выданном доступе"""
    id: str
    recipient: str
    document_id: str
    granted_level: AccessLevel
    granted_by_name: str
    granted_by_email: str
    granted_by_avatar: Optional[str] = None
    kind: str = "$documentAccess"
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def title(self) -> str:
        return (
            f"You have been granted {self.granted_level.value} access "
            f"to the document by {self.granted_by_name}"
        )

    def activity_data(self) -> dict:
        return {
            "userType": self.granted_level.value,
            "title": self.title,
            "updatedBy": self.granted_by_name,
            "avatar": self.granted_by_avatar,
            "email": self.granted_by_email,
        }
