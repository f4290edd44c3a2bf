# app/report/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from app.report.workflow import ReportStatus, ReviewAction

class ReportCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    category_id: int
    user_id: int | None = None
    is_anonymous: bool = False
    photos: list[str] = Field(..., min_length=1, max_length=3)

class PhotoOut(BaseModel):
    position: int
    uri: str

    model_config = {"from_attributes": True}

class ReportOut(BaseModel):
    id: int
    title: str
    description: str
    latitude: float
    longitude: float
    category_id: int
    user_id: int | None = None
    is_anonymous: bool
    status: ReportStatus
    reject_explanation: str | None = None
    assigned_external: bool
    external_maintainer_id: int | None = None
    technician_id: int | None = None
    photos: list[PhotoOut] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

class ReviewRequest(BaseModel):
    action: ReviewAction
    explanation: str | None = None
    category_id: int | None = None

    @model_validator(mode="after")
    def explanation_required_on_reject(self):
        if self.action is ReviewAction.REJECT and not self.explanation:
            raise ValueError("explanation is required when rejecting a report")
        return self

class TechnicianAction(BaseModel):
    technician_id: int | None = None

class ExternalAssignment(BaseModel):
    external_maintainer_id: int

class ExternalAction(BaseModel):
    external_maintainer_id: int

class ExternalStatusChange(BaseModel):
    status: str
    external_maintainer_id: int
