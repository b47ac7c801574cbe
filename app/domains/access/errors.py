"""Ошибки подсистемы управления доступом к документам.

Ошибки валидации прерывают операцию до каких-либо изменений и всегда
пробрасываются вызывающему коду. ``TransportError`` перехватывается на
границе уведомителя и наружу не выходит.
"""


class AccessControlError(Exception):
    """Базовая ошибка управления доступом"""


class DocumentNotFound(AccessControlError, LookupError):
    def __init__(self, document_id: str):
        super().__init__(f"Document {document_id} not found")
        self.document_id = document_id


class AccessDenied(AccessControlError, PermissionError):
    def __init__(self, message: str = "You do not have access to this document"):
        super().__init__(message)


class SelfRemovalForbidden(AccessControlError, PermissionError):
    def __init__(self, message: str = "You cannot remove yourself from the document"):
        super().__init__(message)


class ProtectedEntry(AccessControlError, PermissionError):
    def __init__(self, document_id: str, user_key: str):
        super().__init__(f"Access entry of {user_key} on document {document_id} is protected")
        self.document_id = document_id
        self.user_key = user_key


class InvalidAccessLevel(AccessControlError, ValueError):
    def __init__(self, level: object):
        super().__init__(f"Unsupported access level: {level!r}")
        self.level = level


class DocumentStoreError(AccessControlError):
    """Сбой хранилища документов (бэкенд совместной работы)"""


class TransportError(AccessControlError):
    """Сбой доставки уведомления"""
