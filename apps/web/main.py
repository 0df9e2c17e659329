"""FastAPI web application for whats-changed."""

from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from core.compare import parse_tables
from core.detect import identify
from core.differ import compare_manifest
from core.exceptions import ManifestError


app = FastAPI(
    title="whats-changed",
    description="Report dependencies upgraded or removed between two manifest versions",
    version="0.1.0",
)


class CompareRequest(BaseModel):
    """Request model for comparing two manifest versions."""
    current_content: str
    previous_content: str
    filename: Optional[str] = None
    ecosystem: Optional[str] = None


class ChangeModel(BaseModel):
    name: str
    kind: str
    new_min_version: Optional[str] = None
    message: str


class CompareResponse(BaseModel):
    """Response model for manifest comparison."""
    ecosystem: str
    changes: list[ChangeModel]
    has_changes: bool


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/api/compare", response_model=CompareResponse)
async def compare_manifests(request: CompareRequest):
    """Compare previous and current manifest content."""
    if not request.current_content.strip() or not request.previous_content.strip():
        raise HTTPException(status_code=400, detail="No content provided")

    ecosystem = request.ecosystem or identify(request.current_content, request.filename)
    if ecosystem not in ("cargo", "node"):
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported ecosystem: {ecosystem}. Only cargo and node manifests are supported.",
        )

    try:
        current_tables = parse_tables(ecosystem, request.current_content)
        previous_tables = parse_tables(ecosystem, request.previous_content)
    except ManifestError as e:
        raise HTTPException(status_code=400, detail=f"Invalid manifest: {e}")

    file_path = request.filename or "manifest"
    records = compare_manifest(file_path, current_tables, previous_tables)

    changes = [
        ChangeModel(
            name=record.dependency_key,
            kind=record.kind.value,
            new_min_version=str(record.new_min_version) if record.new_min_version else None,
            message=record.describe(),
        )
        for record in records
    ]
    return CompareResponse(ecosystem=ecosystem, changes=changes, has_changes=bool(changes))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "apps.web.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        reload_dirs=["apps", "core"]
    )
