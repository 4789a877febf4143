# backend/routers/users.py

from typing import Optional, Union
from fastapi import APIRouter, HTTPException, Request

from models.response_models import DataResponse, MessageResponse

router = APIRouter(prefix="/api", tags=["Users"])


@router.get("/users", response_model=Union[DataResponse, MessageResponse])
def search_users(request: Request, q: Optional[str] = None):
    """
    Returns every uploaded row, or the rows where any cell contains `q`
    (case-insensitive). Example:
    /api/users?q=lima
    """
    settings = request.app.state.settings
    result = request.app.state.store.query(q)

    if not result.loaded:
        return {"message": result.message}

    if q and not result.data and settings.not_found_on_empty_match:
        raise HTTPException(status_code=404, detail="Not found")

    return {"data": result.data}
