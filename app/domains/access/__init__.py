from app.domains.access.entities import (
    AccessLevel, CapabilitySet, Actor, AccessEntry, AccessChangeRequest, Notification, encode
)
from app.domains.access.errors import (
    AccessControlError, DocumentNotFound, AccessDenied, SelfRemovalForbidden,
    ProtectedEntry, InvalidAccessLevel, DocumentStoreError, TransportError
)
from app.domains.access.notifier import ChangeNotifier
from app.domains.access.registry import AccessRegistry
from app.domains.access.services import AccessPolicyEngine

__all__ = [
    "AccessLevel", "CapabilitySet", "Actor", "AccessEntry", "AccessChangeRequest",
    "Notification", "encode",
    "AccessControlError", "DocumentNotFound", "AccessDenied", "SelfRemovalForbidden",
    "ProtectedEntry", "InvalidAccessLevel", "DocumentStoreError", "TransportError",
    "ChangeNotifier", "AccessRegistry", "AccessPolicyEngine"
]
