import pytest

from app.db.repositories.document_repository import DocumentRepository
from app.db.repositories.notification_repository import InboxNotificationRepository
from app.domains.access.entities import AccessLevel, CapabilitySet
from app.domains.access.errors import AccessDenied, DocumentNotFound, SelfRemovalForbidden
from app.domains.access.transports import InboxNotificationTransport
from app.domains.documents.services import DocumentService
from conftest import ALICE, BOB, FailingTransport, sequential_ids


@pytest.mark.asyncio
async def test_sharing_scenario(document_service, transport):
    document = await document_service.create_document(ALICE.user_id, ALICE.email)
    registry = document_service.registry

    assert document.id == "doc-1"
    assert document.title == "Untitled"
    assert await registry.list_accessors(document.id) == {ALICE.email}
    assert await registry.get(document.id, ALICE.email) is CapabilitySet.READ_WRITE

    entry = await document_service.share_document(document.id, BOB.email, "viewer", initiator=ALICE)
    assert entry.capabilities is CapabilitySet.READ_ONLY
    assert await registry.get(document.id, BOB.email) is CapabilitySet.READ_ONLY
    assert [n.recipient for n in transport.sent] == [BOB.email]

    with pytest.raises(SelfRemovalForbidden):
        await document_service.remove_collaborator(document.id, ALICE.email)
    assert await registry.list_accessors(document.id) == {ALICE.email, BOB.email}

    removed = await document_service.remove_collaborator(document.id, BOB.email)
    assert removed.capabilities is CapabilitySet.NONE
    assert await registry.get(document.id, BOB.email) is CapabilitySet.NONE


@pytest.mark.asyncio
async def test_share_succeeds_when_transport_always_fails(repository):
    transport = FailingTransport()
    service = DocumentService(repository, transport, id_generator=sequential_ids("doc"))
    document = await service.create_document(ALICE.user_id, ALICE.email)

    entry = await service.share_document(document.id, BOB.email, AccessLevel.EDITOR, initiator=ALICE)

    assert entry.capabilities is CapabilitySet.READ_WRITE
    assert transport.attempts == 1
    assert await service.registry.get(document.id, BOB.email) is CapabilitySet.READ_WRITE


@pytest.mark.asyncio
async def test_get_document_requires_an_access_entry(document_service):
    document = await document_service.create_document(ALICE.user_id, ALICE.email)

    assert (await document_service.get_document(document.id, ALICE.email)).id == document.id
    with pytest.raises(AccessDenied):
        await document_service.get_document(document.id, BOB.email)
    with pytest.raises(DocumentNotFound):
        await document_service.get_document("missing", ALICE.email)


@pytest.mark.asyncio
async def test_update_title_requires_write_access(document_service):
    document = await document_service.create_document(ALICE.user_id, ALICE.email)
    await document_service.share_document(document.id, BOB.email, "viewer", initiator=ALICE)

    with pytest.raises(AccessDenied):
        await document_service.update_document(document.id, "Bob's title", requested_by=BOB.email)

    updated = await document_service.update_document(document.id, "Quarterly plan", requested_by=ALICE.email)
    assert updated.title == "Quarterly plan"
    assert updated.capabilities_of(BOB.email) is CapabilitySet.READ_ONLY

    with pytest.raises(DocumentNotFound):
        await document_service.update_document("missing", "x")


@pytest.mark.asyncio
async def test_only_editors_can_share(document_service):
    document = await document_service.create_document(ALICE.user_id, ALICE.email)
    await document_service.share_document(document.id, BOB.email, "viewer", initiator=ALICE)

    with pytest.raises(AccessDenied):
        await document_service.share_document(document.id, "carol@z.com", "editor", initiator=BOB)
    with pytest.raises(AccessDenied):
        await document_service.remove_collaborator(document.id, BOB.email, initiator=BOB)

    assert await document_service.registry.list_accessors(document.id) == {ALICE.email, BOB.email}


@pytest.mark.asyncio
async def test_list_documents_for_user(document_service):
    first = await document_service.create_document(ALICE.user_id, ALICE.email)
    second = await document_service.create_document(BOB.user_id, BOB.email)
    await document_service.share_document(second.id, ALICE.email, "editor", initiator=BOB)

    documents = await document_service.list_documents_for_user(ALICE.email)

    assert {doc.id for doc in documents} == {first.id, second.id}
    assert await document_service.registry.query(ALICE.email) == {first.id, second.id}
    assert await document_service.list_documents_for_user("nobody@x.com") == []


@pytest.mark.asyncio
async def test_list_collaborators(document_service):
    document = await document_service.create_document(ALICE.user_id, ALICE.email)
    await document_service.share_document(document.id, BOB.email, "viewer", initiator=ALICE)

    entries = await document_service.list_collaborators(document.id, BOB.email)

    assert [(e.user_key, e.capabilities) for e in entries] == [
        (ALICE.email, CapabilitySet.READ_WRITE),
        (BOB.email, CapabilitySet.READ_ONLY),
    ]


@pytest.mark.asyncio
async def test_delete_document(document_service):
    document = await document_service.create_document(ALICE.user_id, ALICE.email)
    await document_service.share_document(document.id, BOB.email, "editor", initiator=ALICE)

    with pytest.raises(AccessDenied):
        await document_service.delete_document(document.id, requested_by=BOB.email)

    await document_service.delete_document(document.id, requested_by=ALICE.email)

    with pytest.raises(DocumentNotFound):
        await document_service.registry.get(document.id, ALICE.email)
    assert await document_service.registry.query(BOB.email) == set()
    with pytest.raises(DocumentNotFound):
        await document_service.delete_document(document.id)


@pytest.mark.asyncio
async def test_share_writes_inbox_notification(session):
    service = DocumentService(
        DocumentRepository(session),
        InboxNotificationTransport(session),
        id_generator=sequential_ids("id")
    )
    document = await service.create_document(ALICE.user_id, ALICE.email)

    await service.share_document(document.id, BOB.email, "editor", initiator=ALICE)

    inbox = await InboxNotificationRepository(session).get_by_recipient(BOB.email)
    assert len(inbox) == 1
    assert inbox[0].uuid == "id-2"
    assert inbox[0].document_id == document.id
    assert inbox[0].activity_data["title"] == "You have been granted editor access to the document by Alice"
