from uuid import uuid4

import psycopg2
import pytest

from docsmith.errors import BadRequestError, NotFoundError, ServiceUnavailableError, ValidationError
from docsmith.models.document_type import DocumentTypeCreate, DocumentTypeUpdate
from docsmith.models.user_document import (
    DocumentFieldDataInput,
    DocumentStatus,
    UserDocumentCreate,
    UserDocumentUpdate,
)

USER_ID = uuid4()


def fields_by_name(document_type):
    return {f.field_name: f for f in document_type.fields}


def complete_payload(document_type, title="My resignation"):
    by_name = fields_by_name(document_type)
    return UserDocumentCreate(
        document_type_id=document_type.id,
        title=title,
        field_data=[
            DocumentFieldDataInput(field_id=by_name["authorName"].id, value="Ada Lovelace"),
            DocumentFieldDataInput(field_id=by_name["companyName"].id, value="Analytical Engines"),
        ],
    )


async def test_create_with_complete_field_data(user_document_service, resignation_type):
    created = await user_document_service.create_user_document(USER_ID, complete_payload(resignation_type))

    assert created.status == DocumentStatus.COMPLETED
    assert created.version == 1
    assert created.document_type.name == "Resignation Letter"
    assert {fd.field_name: fd.value for fd in created.field_data} == {
        "authorName": "Ada Lovelace",
        "companyName": "Analytical Engines",
    }
    assert all(fd.version_number == 1 for fd in created.field_data)


async def test_create_without_field_data_skips_validation(user_document_service, resignation_type):
    created = await user_document_service.create_user_document(
        USER_ID, UserDocumentCreate(document_type_id=resignation_type.id, title="Draft")
    )
    assert created.field_data == []


async def test_create_rejects_foreign_field_and_persists_nothing(
    user_document_service, document_type_service, resignation_type, db
):
    other = await document_type_service.create_document_type(
        DocumentTypeCreate(name="Other", fields=[{"field_name": "x", "label": "X", "field_type": "text"}])
    )
    payload = complete_payload(resignation_type)
    payload.field_data.append(DocumentFieldDataInput(field_id=other.fields[0].id, value="sneaky"))

    with pytest.raises(ValidationError) as exc:
        await user_document_service.create_user_document(USER_ID, payload)

    assert exc.value.details == {"invalid_fields": [str(other.fields[0].id)]}
    assert db.rows("user_documents") == {}
    assert db.rows("document_field_data") == {}


@pytest.mark.parametrize("company", [None, ""])
async def test_create_requires_required_values(user_document_service, resignation_type, company, db):
    by_name = fields_by_name(resignation_type)
    payload = UserDocumentCreate(
        document_type_id=resignation_type.id,
        title="Incomplete",
        field_data=[
            DocumentFieldDataInput(field_id=by_name["authorName"].id, value="Ada"),
            DocumentFieldDataInput(field_id=by_name["companyName"].id, value=company),
        ],
    )

    with pytest.raises(ValidationError) as exc:
        await user_document_service.create_user_document(USER_ID, payload)

    assert [m["field_name"] for m in exc.value.details["missing_fields"]] == ["companyName"]
    assert db.rows("user_documents") == {}


async def test_create_for_unknown_type(user_document_service):
    with pytest.raises(NotFoundError):
        await user_document_service.create_user_document(
            USER_ID, UserDocumentCreate(document_type_id=uuid4(), title="Orphan")
        )


async def test_update_bumps_version_of_existing_values(user_document_service, resignation_type):
    created = await user_document_service.create_user_document(USER_ID, complete_payload(resignation_type))
    by_name = fields_by_name(resignation_type)

    once = await user_document_service.update_user_document(
        USER_ID,
        created.id,
        UserDocumentUpdate(field_data=[DocumentFieldDataInput(field_id=by_name["authorName"].id, value="A. Lovelace")]),
    )
    twice = await user_document_service.update_user_document(
        USER_ID,
        created.id,
        UserDocumentUpdate(field_data=[DocumentFieldDataInput(field_id=by_name["authorName"].id, value="Ada L.")]),
    )

    author_once = next(fd for fd in once.field_data if fd.field_name == "authorName")
    author_twice = next(fd for fd in twice.field_data if fd.field_name == "authorName")
    assert author_once.version_number == 2
    assert author_twice.version_number == 3
    assert author_twice.value == "Ada L."

    company = next(fd for fd in twice.field_data if fd.field_name == "companyName")
    assert company.version_number == 1


async def test_update_inserts_new_values_at_version_one(user_document_service, resignation_type):
    created = await user_document_service.create_user_document(USER_ID, complete_payload(resignation_type))
    reason = fields_by_name(resignation_type)["resignationReason"]

    updated = await user_document_service.update_user_document(
        USER_ID,
        created.id,
        UserDocumentUpdate(title="Renamed", field_data=[DocumentFieldDataInput(field_id=reason.id, value="Relocating")]),
    )

    assert updated.title == "Renamed"
    new_value = next(fd for fd in updated.field_data if fd.field_name == "resignationReason")
    assert new_value.version_number == 1
    assert new_value.value == "Relocating"


async def test_update_rejects_foreign_field(user_document_service, resignation_type, db):
    created = await user_document_service.create_user_document(USER_ID, complete_payload(resignation_type))
    before = {k: dict(v) for k, v in db.rows("document_field_data").items()}

    with pytest.raises(ValidationError):
        await user_document_service.update_user_document(
            USER_ID,
            created.id,
            UserDocumentUpdate(title="x", field_data=[DocumentFieldDataInput(field_id=uuid4(), value="x")]),
        )

    assert db.rows("document_field_data") == before
    assert db.rows("user_documents")[created.id]["title"] == "My resignation"


async def test_update_does_not_require_all_fields(user_document_service, resignation_type):
    created = await user_document_service.create_user_document(USER_ID, complete_payload(resignation_type))
    by_name = fields_by_name(resignation_type)

    updated = await user_document_service.update_user_document(
        USER_ID,
        created.id,
        UserDocumentUpdate(field_data=[DocumentFieldDataInput(field_id=by_name["companyName"].id, value="")]),
    )

    company = next(fd for fd in updated.field_data if fd.field_name == "companyName")
    assert company.value == ""


async def test_other_users_cannot_see_or_change_document(user_document_service, resignation_type):
    created = await user_document_service.create_user_document(USER_ID, complete_payload(resignation_type))
    intruder = uuid4()

    with pytest.raises(NotFoundError):
        await user_document_service.get_user_document(intruder, created.id)
    with pytest.raises(NotFoundError):
        await user_document_service.update_user_document(intruder, created.id, UserDocumentUpdate(title="Mine"))
    with pytest.raises(NotFoundError):
        await user_document_service.delete_user_document(intruder, created.id)
    with pytest.raises(NotFoundError):
        await user_document_service.update_status(intruder, created.id, DocumentStatus.ARCHIVED)


async def test_get_includes_field_overview(user_document_service, resignation_type):
    created = await user_document_service.create_user_document(USER_ID, complete_payload(resignation_type))

    detail = await user_document_service.get_user_document(USER_ID, created.id)

    assert [f.field_name for f in detail.document_type.fields] == [
        "authorName",
        "companyName",
        "resignationReason",
    ]


async def test_list_is_newest_first_and_filterable(
    user_document_service, document_type_service, resignation_type
):
    other = await document_type_service.create_document_type(DocumentTypeCreate(name="Other"))
    first = await user_document_service.create_user_document(
        USER_ID, UserDocumentCreate(document_type_id=resignation_type.id, title="First")
    )
    second = await user_document_service.create_user_document(
        USER_ID, UserDocumentCreate(document_type_id=other.id, title="Second")
    )
    await user_document_service.create_user_document(
        uuid4(), UserDocumentCreate(document_type_id=other.id, title="Someone else's")
    )

    listed = await user_document_service.list_user_documents(USER_ID)
    assert [d.title for d in listed] == ["Second", "First"]

    # Touching the older document moves it to the front.
    await user_document_service.update_status(USER_ID, first.id, DocumentStatus.DRAFT)
    listed = await user_document_service.list_user_documents(USER_ID)
    assert [d.id for d in listed] == [first.id, second.id]

    drafts = await user_document_service.list_user_documents(USER_ID, status=DocumentStatus.DRAFT)
    assert [d.title for d in drafts] == ["First"]

    of_type = await user_document_service.list_user_documents(USER_ID, document_type_id=other.id)
    assert [d.title for d in of_type] == ["Second"]
    assert of_type[0].document_type.name == "Other"


async def test_update_status(user_document_service, resignation_type):
    created = await user_document_service.create_user_document(USER_ID, complete_payload(resignation_type))

    change = await user_document_service.update_status(USER_ID, created.id, DocumentStatus.ARCHIVED)

    assert change.status == DocumentStatus.ARCHIVED
    assert change.document_type == "Resignation Letter"


async def test_delete_removes_values(user_document_service, resignation_type, db):
    created = await user_document_service.create_user_document(USER_ID, complete_payload(resignation_type))

    deleted = await user_document_service.delete_user_document(USER_ID, created.id)

    assert deleted.title == "My resignation"
    assert db.rows("user_documents") == {}
    assert db.rows("document_field_data") == {}
    with pytest.raises(NotFoundError):
        await user_document_service.get_user_document(USER_ID, created.id)


async def test_generate_renders_registered_template(
    user_document_service, resignation_type, renderer, monkeypatch, tmp_path
):
    monkeypatch.setenv("ARTIFACTS_DIR", str(tmp_path))
    created = await user_document_service.create_user_document(USER_ID, complete_payload(resignation_type))

    result = await user_document_service.generate_artifacts(USER_ID, created.id, theme="modern")

    assert result.rendered is True
    assert result.pdf_path.startswith(f"/documents/{USER_ID}/{created.id}_")
    assert result.pdf_path.endswith(".pdf")
    assert result.docx_path == result.pdf_path[:-4] + ".docx"
    assert result.generated_at is not None

    slug, theme, values = renderer.calls[0]
    assert (slug, theme) == ("resignation-letter", "modern")
    assert values["authorName"] == "Ada Lovelace"

    written = tmp_path / str(USER_ID) / result.pdf_path.rsplit("/", 1)[1]
    assert written.read_bytes() == b"%PDF-1.4 stub"

    detail = await user_document_service.get_user_document(USER_ID, created.id)
    assert detail.generated_pdf_path == result.pdf_path
    assert detail.last_generated_at is not None


async def test_generate_records_paths_for_unregistered_template(
    user_document_service, document_type_service, renderer
):
    document_type = await document_type_service.create_document_type(
        DocumentTypeCreate(name="Custom", template_path="templates/custom.docx")
    )
    created = await user_document_service.create_user_document(
        USER_ID, UserDocumentCreate(document_type_id=document_type.id, title="Custom doc")
    )

    result = await user_document_service.generate_artifacts(USER_ID, created.id)

    assert result.rendered is False
    assert result.pdf_path.endswith(".pdf")
    assert renderer.calls == []


async def test_generate_without_template_is_bad_request(
    user_document_service, document_type_service, resignation_type, renderer
):
    created = await user_document_service.create_user_document(USER_ID, complete_payload(resignation_type))
    await document_type_service.update_document_type(resignation_type.id, DocumentTypeUpdate(template_path=None))

    with pytest.raises(BadRequestError):
        await user_document_service.generate_artifacts(USER_ID, created.id)
    assert renderer.calls == []


async def test_generate_write_failure_records_nothing(
    user_document_service, resignation_type, monkeypatch, tmp_path
):
    monkeypatch.setenv("ARTIFACTS_DIR", str(tmp_path))
    created = await user_document_service.create_user_document(USER_ID, complete_payload(resignation_type))

    def disk_full(relative_path, content):
        raise OSError("No space left on device")

    monkeypatch.setattr(user_document_service, "_write_artifact", disk_full)
    with pytest.raises(OSError):
        await user_document_service.generate_artifacts(USER_ID, created.id)

    detail = await user_document_service.get_user_document(USER_ID, created.id)
    assert detail.generated_pdf_path is None
    assert detail.last_generated_at is None


async def test_generate_commit_failure_removes_written_pdf(
    user_document_service, resignation_type, db, monkeypatch, tmp_path
):
    monkeypatch.setenv("ARTIFACTS_DIR", str(tmp_path))
    created = await user_document_service.create_user_document(USER_ID, complete_payload(resignation_type))

    def lost_connection():
        raise psycopg2.OperationalError("server closed the connection unexpectedly")

    monkeypatch.setattr(db, "commit", lost_connection)
    with pytest.raises(ServiceUnavailableError):
        await user_document_service.generate_artifacts(USER_ID, created.id)

    assert list(tmp_path.rglob("*.pdf")) == []
    assert db.rows("user_documents")[created.id]["generated_pdf_path"] is None
