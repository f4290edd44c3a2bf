# app/ticket/schemas.py
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

class TicketCreate(BaseModel):
    service_id: int = Field(..., ge=1)

class TicketCreated(BaseModel):
    id: int
    list_code: str = Field(..., alias="listCode")

    model_config = ConfigDict(populate_by_name=True)

class NextCustomerRequest(BaseModel):
    service_ids: list[int] | None = None

class TicketOut(BaseModel):
    id: int
    service_id: int
    ticket_code: str
    created_at: datetime

    model_config = {"from_attributes": True}
