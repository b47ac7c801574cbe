from fastapi import APIRouter, Depends, HTTPException, status
from typing import List

from app.api.dependencies import get_document_service
from app.core.auth import get_current_user
from app.domains.access.entities import AccessEntry, Actor
from app.domains.access.errors import (
    AccessControlError, AccessDenied, DocumentNotFound, DocumentStoreError,
    InvalidAccessLevel, ProtectedEntry, SelfRemovalForbidden
)
from app.domains.documents.entities import Document
from app.domains.documents.schemas import (
    DocumentAccessResponse, DocumentListResponse, DocumentResponse,
    DocumentShareRequest, DocumentUpdate
)
from app.domains.documents.services import DocumentService

router = APIRouter(prefix="/documents", tags=["documents"])

_ERROR_STATUSES = (
    (DocumentNotFound, status.HTTP_404_NOT_FOUND),
    (AccessDenied, status.HTTP_403_FORBIDDEN),
    (SelfRemovalForbidden, status.HTTP_409_CONFLICT),
    (ProtectedEntry, status.HTTP_409_CONFLICT),
    (InvalidAccessLevel, 422),
    (DocumentStoreError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def _http_error(error: AccessControlError) -> HTTPException:
    for error_type, status_code in _ERROR_STATUSES:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


def _access_response(entry: AccessEntry) -> DocumentAccessResponse:
    return DocumentAccessResponse(
        document_id=entry.document_id,
        user_key=entry.user_key,
        capabilities=entry.capabilities,
        scopes=entry.capabilities.scopes
    )


def _document_response(document: Document) -> DocumentResponse:
    return DocumentResponse(
        id=document.id,
        title=document.title,
        creator_id=document.creator_id,
        creator_email=document.creator_email,
        users_accesses=[_access_response(entry) for entry in document.access_entries()],
        created_at=document.created_at,
        updated_at=document.updated_at
    )


@router.post("/", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    user: Actor = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Создание нового документа"""
    try:
        document = await document_service.create_document(user.user_id, user.email)
    except AccessControlError as e:
        raise _http_error(e)
    
    return _document_response(document)


@router.get("/", response_model=DocumentListResponse)
async def get_user_documents(
    user: Actor = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Получение списка документов пользователя"""
    try:
        documents = await document_service.list_documents_for_user(user.email)
    except AccessControlError as e:
        raise _http_error(e)
    
    return DocumentListResponse(
        documents=[_document_response(doc) for doc in documents],
        total=len(documents)
    )


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    user: Actor = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Получение документа"""
    try:
        document = await document_service.get_document(document_id, user.email)
    except AccessControlError as e:
        raise _http_error(e)
    
    return _document_response(document)


@router.put("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: str,
    update_data: DocumentUpdate,
    user: Actor = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Переименование документа"""
    try:
        document = await document_service.update_document(
            document_id,
            update_data.title,
            requested_by=user.email
        )
    except AccessControlError as e:
        raise _http_error(e)
    
    return _document_response(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: str,
    user: Actor = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Удаление документа"""
    try:
        await document_service.delete_document(document_id, requested_by=user.email)
    except AccessControlError as e:
        raise _http_error(e)


@router.get("/{document_id}/access", response_model=List[DocumentAccessResponse])
async def get_collaborators(
    document_id: str,
    user: Actor = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Список соавторов документа"""
    try:
        entries = await document_service.list_collaborators(document_id, user.email)
    except AccessControlError as e:
        raise _http_error(e)
    
    return [_access_response(entry) for entry in entries]


@router.post("/{document_id}/access", response_model=DocumentAccessResponse)
async def share_document(
    document_id: str,
    share_request: DocumentShareRequest,
    user: Actor = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Предоставление доступа к документу"""
    try:
        entry = await document_service.share_document(
            document_id,
            share_request.email,
            share_request.level,
            initiator=user
        )
    except AccessControlError as e:
        raise _http_error(e)
    
    return _access_response(entry)


@router.delete("/{document_id}/access/{email}", response_model=DocumentAccessResponse)
async def remove_collaborator(
    document_id: str,
    email: str,
    user: Actor = Depends(get_current_user),
    document_service: DocumentService = Depends(get_document_service)
):
    """Удаление соавтора"""
    try:
        entry = await document_service.remove_collaborator(document_id, email, initiator=user)
    except AccessControlError as e:
        raise _http_error(e)
    
    return _access_response(entry)
