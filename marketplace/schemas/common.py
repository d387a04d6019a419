from pydantic import BaseModel, Field
from typing import Any, Dict


class ApiResponse(BaseModel):
    """Envelope shared by every endpoint"""

    success: bool = True
    message: str = ""
    data: Dict[str, Any] = Field(default_factory=dict)
