import logging
from typing import Optional

from app.domains.access.entities import (
    AccessChangeRequest, AccessEntry, AccessLevel, Notification, encode, normalize_user_key
)
from app.domains.access.errors import DocumentNotFound, SelfRemovalForbidden
from app.domains.access.notifier import ChangeNotifier
from app.domains.access.ports import DocumentStore, IdGenerator, new_id
from app.domains.access.registry import AccessRegistry

logger = logging.getLogger(__name__)


class AccessPolicyEngine:
    """Движок политик доступа.

    Решает, допустимо ли изменение доступа, и передает проверенную команду
    в реестр. Сам реестр напрямую не изменяет.
    """

    def __init__(
        self,
        store: DocumentStore,
        registry: AccessRegistry,
        notifier: ChangeNotifier,
        id_generator: IdGenerator = new_id,
    ):
        self.store = store
        self.registry = registry
        self.notifier = notifier
        self.id_generator = id_generator

    async def apply_change(self, request: AccessChangeRequest) -> AccessEntry:
        """Применение запроса на изменение доступа"""
        target = normalize_user_key(request.target_user)
        document = await self.store.get(request.document_id)
        if document is None:
            raise DocumentNotFound(request.document_id)

        # Создателя нельзя лишить доступа, в том числе им самим
        if request.requested_level is None:
            if target == document.creator_email:
                raise SelfRemovalForbidden()
            entry = await self.registry.revoke(request.document_id, target)
            logger.info(f"Access of {target} to document {request.document_id} revoked")
            return entry

        level = AccessLevel.parse(request.requested_level)
        capabilities = encode(level)
        previous = document.capabilities_of(target)

        entry = await self.registry.grant(request.document_id, target, capabilities)
        logger.info(f"{level.value} access to document {request.document_id} granted to {target}")

        initiator = request.initiating_user
        self_initiated = initiator is not None and normalize_user_key(initiator.email) == target
        # Повторная выдача себе уже имеющегося доступа не уведомляется
        if not (self_initiated and previous is capabilities):
            await self._notify(request, target, level)

        return entry

    async def _notify(self, request: AccessChangeRequest, target: str, level: AccessLevel) -> Optional[bool]:
        initiator = request.initiating_user
        notification = Notification(
            id=self.id_generator(),
            recipient=target,
            document_id=request.document_id,
            granted_level=level,
            granted_by_name=initiator.name if initiator else "",
            granted_by_email=initiator.email if initiator else "",
            granted_by_avatar=initiator.avatar if initiator else None,
        )
        return await self.notifier.notify(notification)
