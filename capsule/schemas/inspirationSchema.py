from datetime import datetime
from pydantic import BaseModel


class InspirationResponse(BaseModel):
    id: str
    content: str
    category: str
    created_at: datetime

    class Config:
        from_attributes = True
