from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, StringConstraints, field_validator
from typing_extensions import Annotated

from hospital.utils.timeslots import normalize_time_label


Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

BookingStatus = Literal["pending", "confirmed", "cancelled", "completed"]
ContactStatus = Literal["new", "read", "replied"]
SlotStatus = Literal["available", "closed"]


def _check_day(value: str) -> str:
    return datetime.strptime(value.strip(), "%Y-%m-%d").date().isoformat()


class BookingCreate(BaseModel):
    name: Text
    email: Text
    phone: Text
    department: Text
    date: Text
    time: Text
    appointment_type: Literal["Online", "Offline"] = "Offline"
    message: str = ""
    file_base64: Optional[str] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    payment_id: Optional[str] = None
    order_id: Optional[str] = None
    payment_status: Literal["PAID", "UNPAID", "REFUNDED", "FAILED"] = "UNPAID"
    amount_paid: float = 0

    @field_validator("date")
    @classmethod
    def check_day(cls, value):
        return _check_day(value)

    @field_validator("time")
    @classmethod
    def canonical_time(cls, value):
        return normalize_time_label(value)


class BookingStatusUpdate(BaseModel):
    id: int
    status: BookingStatus
    cancel_reason: str = ""


class ContactCreate(BaseModel):
    name: Text
    email: Text
    phone: Text
    message: Text


class ContactStatusUpdate(BaseModel):
    id: int
    status: ContactStatus


class SlotInput(BaseModel):
    time: Text
    status: SlotStatus = "available"

    @field_validator("time")
    @classmethod
    def canonical_time(cls, value):
        return normalize_time_label(value)


class SlotsUpdate(BaseModel):
    department: Optional[str] = None
    date: Optional[str] = None
    slots: List[SlotInput] = []
    is_global_template: bool = False
    apply_to_all: bool = False
    is_holiday: bool = False

    @field_validator("date")
    @classmethod
    def check_day(cls, value):
        return _check_day(value) if value else value


class DepartmentCreate(BaseModel):
    name: Text


class DoctorCreate(BaseModel):
    name: Text
    department: Text
    specialty: Optional[str] = None
    qualification: Optional[str] = None
    image: Optional[str] = None


class HeroImageCreate(BaseModel):
    image: Text


class AboutImageCreate(BaseModel):
    image: Text
    section: Text
    title: str = ""


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class OrderRequest(BaseModel):
    amount: float = 0
    service: Optional[str] = None
    patient_name: Optional[str] = None
    patient_email: Optional[str] = None
    patient_phone: Optional[str] = None


class PaymentVerification(BaseModel):
    razorpay_order_id: Optional[str] = None
    razorpay_payment_id: Optional[str] = None
    razorpay_signature: Optional[str] = None
