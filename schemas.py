from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


RequestStatus = Literal["pending", "reviewing", "approved", "rejected", "completed"]
RequestPriority = Literal["low", "medium", "high", "urgent"]
StoryStatus = Literal["published", "draft"]
StoryCategory = Literal["surgery", "emergency", "chronic-conditions", "cancer", "maternity"]


class DonorInfo(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    email: EmailStr
    message: str = ""


class DonationCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: float = Field(gt=0, allow_inf_nan=False)
    donor_info: DonorInfo = Field(alias="donorInfo")


class DonationRead(BaseModel):
    id: int
    donor_name: str
    email: str
    amount: float
    message: Optional[str] = None
    status: str
    payment_method: str
    transaction_id: str
    created_at: date

    model_config = ConfigDict(from_attributes=True)


class DonationSummary(BaseModel):
    total_amount: float
    completed: int
    pending: int
    failed: int


class DonationList(BaseModel):
    donations: list[DonationRead]
    summary: DonationSummary


class HelpDocumentRead(BaseModel):
    id: int
    filename: str
    content_type: str
    size: int

    model_config = ConfigDict(from_attributes=True)


class HelpRequestRead(BaseModel):
    id: int
    full_name: str
    email: str
    phone: str
    address: str
    age: str
    gender: str
    ailment_type: str
    description: str
    treatment_progress: str
    status: str
    priority: str
    assigned_to: Optional[str] = None
    notes: Optional[str] = None
    created_at: date

    model_config = ConfigDict(from_attributes=True)


class HelpRequestUpdate(BaseModel):
    """Fields left out of the payload are not touched."""

    status: Optional[RequestStatus] = None
    priority: Optional[RequestPriority] = None
    assigned_to: Optional[str] = None
    notes: Optional[str] = None


class StoryCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    story: str = Field(min_length=1)
    before_image: str = ""
    after_image: str = ""
    category: StoryCategory = "surgery"
    status: StoryStatus = "draft"


class StoryUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(default=None, min_length=1)
    story: Optional[str] = Field(default=None, min_length=1)
    before_image: Optional[str] = None
    after_image: Optional[str] = None
    category: Optional[StoryCategory] = None
    status: Optional[StoryStatus] = None


class StoryRead(BaseModel):
    id: int
    name: str
    story: str
    before_image: str
    after_image: str
    category: str
    status: str
    created_at: date

    model_config = ConfigDict(from_attributes=True)


class LoginData(BaseModel):
    email: EmailStr
    password: str
