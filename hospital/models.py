from sqlalchemy import Index, UniqueConstraint, text
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


ACTIVE_BOOKING = text("status != 'cancelled'")


class Booking(SQLModel, table=True):
    # One live booking per department/date/time; cancelled rows free the slot
    __table_args__ = (
        Index(
            "ix_booking_active_slot",
            "department",
            "date",
            "time",
            unique=True,
            sqlite_where=ACTIVE_BOOKING,
            postgresql_where=ACTIVE_BOOKING,
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str
    phone: str
    appointment_type: str = "Offline"
    department: str = Field(index=True)
    date: str = Field(index=True)  # YYYY-MM-DD
    time: str  # canonical time range label
    message: str = ""
    file_data: Optional[str] = None  # base64 payload
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    payment_id: Optional[str] = None
    order_id: Optional[str] = None
    payment_status: str = "UNPAID"
    amount_paid: float = 0
    status: str = Field(default="pending", index=True)
    cancel_reason: str = ""
    next_suggested_slot: Optional[str] = None  # JSON string of {date, time, department}
    meeting_link: str = ""
    meeting_id: str = ""
    meeting_password: str = ""
    host_link: str = ""
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None


class Contact(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str
    phone: str
    message: str
    status: str = "new"
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None


class DepartmentTemplate(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    department: str = Field(unique=True)
    slots: str = "[]"  # JSON list of {"time": ..., "status": ...}
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class SlotOverride(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    department: str = Field(index=True)
    date: str = Field(index=True)
    time: str
    status: str = "available"
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class Holiday(SQLModel, table=True):
    __table_args__ = (UniqueConstraint("department", "date", name="uq_holiday_department_date"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    department: str
    date: str
    reason: str = "Closed"
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Department(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Doctor(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    department: str = Field(index=True)
    specialty: Optional[str] = None
    qualification: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Specialist(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    image: str
    created_at: datetime = Field(default_factory=datetime.utcnow)


class HeroImage(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    image: str
    active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)


class AboutImage(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    image: str
    title: str = ""
    section: str
    active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)
