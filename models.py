from datetime import date
from typing import Optional

from sqlmodel import Field, SQLModel


REQUEST_STATUSES = ("pending", "reviewing", "approved", "rejected", "completed")
REQUEST_PRIORITIES = ("low", "medium", "high", "urgent")
DONATION_STATUSES = ("completed", "pending", "failed")
STORY_STATUSES = ("published", "draft")
STORY_CATEGORIES = ("surgery", "emergency", "chronic-conditions", "cancer", "maternity")


class AdminUser(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    name: str
    password_hash: str


class HelpRequest(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    full_name: str
    email: str
    phone: str
    address: str
    age: str
    gender: str

    ailment_type: str
    description: str
    treatment_progress: str

    status: str = "pending"  # pending | reviewing | approved | rejected | completed
    priority: str = "medium"  # low | medium | high | urgent
    assigned_to: Optional[str] = None
    notes: Optional[str] = None
    created_at: date = Field(default_factory=date.today)


class HelpDocument(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    request_id: int = Field(foreign_key="helprequest.id", index=True)

    filename: str
    content_type: str
    size: int = 0


class Donation(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    donor_name: str
    email: str
    amount: float
    message: Optional[str] = None
    status: str = "pending"  # completed | pending | failed
    payment_method: str
    transaction_id: str = ""
    created_at: date = Field(default_factory=date.today)


class Story(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    name: str
    story: str
    before_image: str = ""
    after_image: str = ""
    category: str = "surgery"
    status: str = "draft"  # published | draft
    created_at: date = Field(default_factory=date.today)
