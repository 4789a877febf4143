# backend/routers/files.py

from fastapi import APIRouter, HTTPException, Request

from models.response_models import MessageResponse
from models.table_models import UploadError
from services.csv_parser import parse_csv
from utils.logger import get_logger

router = APIRouter(prefix="/api", tags=["Files"])
logger = get_logger()

ERROR_STATUS = {
    UploadError.FILE_TOO_LARGE: 413,
}

# The form is read by hand so a `file` field sent as plain text gets the
# same 400 as a missing one; this keeps the upload documented in /docs.
UPLOAD_BODY = {
    "requestBody": {
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {"file": {"type": "string", "format": "binary"}},
                }
            }
        }
    }
}


@router.post("/files", response_model=MessageResponse, openapi_extra=UPLOAD_BODY)
async def upload_file(request: Request):
    """
    Accepts a CSV, parses it, and replaces the in-memory table.
    Does NOT return raw data.
    """
    settings = request.app.state.settings
    store = request.app.state.store

    async with request.form() as form:
        result = await parse_csv(form.get("file"), settings.parser, settings.max_upload_bytes)

    if not result.ok:
        logger.info(f"Upload rejected: {result.error.name}")
        raise HTTPException(
            status_code=ERROR_STATUS.get(result.error, 400),
            detail=result.error.value,
        )

    table = result.table
    store.replace(table)
    logger.info(f"CSV uploaded. Loaded {len(table.records)} rows, {len(table.columns)} columns.")

    return {"message": "File uploaded successfully"}
