import os
from dotenv import load_dotenv
from fastapi.staticfiles import StaticFiles

# Load environment variables from .env files
load_dotenv()

from docsmith.api.app import create_app
from docsmith.api.routes import (
    auth_router,
    document_templates_router,
    document_types_router,
    user_documents_router,
)
from docsmith.db.client import check_tables_exist, close_pool
from docsmith.utils.uploads import upload_root

app = create_app()

# Include the routers
app.include_router(auth_router)
app.include_router(document_types_router)
app.include_router(user_documents_router)
app.include_router(document_templates_router)

os.makedirs(upload_root(), exist_ok=True)
app.mount("/uploads", StaticFiles(directory=upload_root()), name="uploads")


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok", "database": "available" if check_tables_exist() else "unavailable"}


@app.on_event("shutdown")
def shutdown():
    close_pool()

## Local Development (run from the root directory)
# uvicorn docsmith.server:app --host 0.0.0.0 --reload --log-level debug
