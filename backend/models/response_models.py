# backend/models/response_models.py

from pydantic import BaseModel
from typing import Dict, List, Optional

class MessageResponse(BaseModel):
    message: str

class DataResponse(BaseModel):
    data: List[Dict[str, Optional[str]]]
