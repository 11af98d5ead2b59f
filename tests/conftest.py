import pytest
from fastapi.testclient import TestClient

from docsmith.api.app import create_app
from docsmith.api.dependencies import (
    get_auth_service,
    get_document_type_service,
    get_render_service,
    get_user_document_service,
)
from docsmith.api.routes import (
    auth_router,
    document_templates_router,
    document_types_router,
    user_documents_router,
)
from docsmith.models.document_type import DocumentFieldInput, DocumentTypeCreate
from docsmith.services.auth_service import AuthService
from docsmith.services.document_type_service import DocumentTypeService
from docsmith.services.user_document_service import UserDocumentService
from tests.fakes import (
    FakeDocumentFieldDataRepository,
    FakeDocumentFieldRepository,
    FakeDocumentTypeRepository,
    FakeUserDocumentRepository,
    FakeUserRepository,
    InMemoryDatabase,
)

ADMIN_KEY = "test-admin-key"


class StubRenderer:
    """Records render calls and returns a tiny PDF."""

    def __init__(self):
        self.calls = []

    async def render(self, slug, theme, field_values):
        self.calls.append((slug, theme, dict(field_values or {})))
        return b"%PDF-1.4 stub"


@pytest.fixture
def db():
    return InMemoryDatabase()


@pytest.fixture
def renderer():
    return StubRenderer()


@pytest.fixture
def document_type_service(db):
    return DocumentTypeService(
        db,
        repository=FakeDocumentTypeRepository(db),
        field_repository=FakeDocumentFieldRepository(db),
        field_data_repository=FakeDocumentFieldDataRepository(db),
    )


@pytest.fixture
def user_document_service(db, renderer):
    return UserDocumentService(
        db,
        repository=FakeUserDocumentRepository(db),
        field_data_repository=FakeDocumentFieldDataRepository(db),
        document_type_repository=FakeDocumentTypeRepository(db),
        field_repository=FakeDocumentFieldRepository(db),
        renderer=renderer,
    )


@pytest.fixture
def auth_service(db):
    return AuthService(db, repository=FakeUserRepository(db))


@pytest.fixture
def resignation_type_payload():
    return DocumentTypeCreate(
        name="Resignation Letter",
        description="Formal resignation",
        template_path="resignation-letter",
        category="professional",
        fields=[
            DocumentFieldInput(field_name="authorName", label="Your name", field_type="text", sort_order=1),
            DocumentFieldInput(field_name="companyName", label="Company", field_type="text", sort_order=2),
            DocumentFieldInput(
                field_name="resignationReason",
                label="Reason",
                field_type="textarea",
                is_required=False,
                sort_order=3,
            ),
        ],
    )


@pytest.fixture
async def resignation_type(document_type_service, resignation_type_payload):
    return await document_type_service.create_document_type(resignation_type_payload)


@pytest.fixture
def app(document_type_service, user_document_service, auth_service, renderer, monkeypatch, tmp_path):
    monkeypatch.setenv("DOCSMITH_ADMIN_API_KEY", ADMIN_KEY)
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("ARTIFACTS_DIR", str(tmp_path / "documents"))

    app = create_app()
    app.include_router(auth_router)
    app.include_router(document_types_router)
    app.include_router(user_documents_router)
    app.include_router(document_templates_router)

    app.dependency_overrides[get_document_type_service] = lambda: document_type_service
    app.dependency_overrides[get_user_document_service] = lambda: user_document_service
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_render_service] = lambda: renderer
    return app


@pytest.fixture
def client(app):
    return TestClient(app)
