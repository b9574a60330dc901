from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a student admission record."""

    student_id: int
    fcc_id: str
    name: str
    father: Optional[str]
    mother: Optional[str]
    schooling_class: Optional[str]
    mobile_number: Optional[str]
    address: Optional[str]
    paid: bool
    tutionfee_paid: Optional[Decimal]
    fcc_class: Optional[str]
    skills: Optional[str]
    admission_date: Optional[datetime]


@dataclass(frozen=True)
class NewStudent:
    fcc_id: str
    name: str
    father: Optional[str] = None
    mother: Optional[str] = None
    schooling_class: Optional[str] = None
    mobile_number: Optional[str] = None
    address: Optional[str] = None
    paid: bool = False
    tutionfee_paid: Optional[Decimal] = None
    fcc_class: Optional[str] = None
    skills: Optional[str] = None
    admission_date: Optional[datetime] = None


@dataclass(frozen=True)
class StudentPatch:
    """Partial update: None means "leave unchanged"."""

    skills: Optional[str] = None
    tutionfee_paid: Optional[Decimal] = None
    payment_status: Optional[str] = None

    def student_assignments(self) -> list[tuple[str, object]]:
        out: list[tuple[str, object]] = []
        if self.skills is not None:
            out.append(("skills", self.skills))
        if self.tutionfee_paid is not None:
            out.append(("tutionfee_paid", self.tutionfee_paid))
        return out

    def is_empty(self) -> bool:
        return not self.student_assignments() and self.payment_status is None


@dataclass(frozen=True)
class StudentSkill:
    skill_topic: str
    skill_level: Optional[str]
    skill_description: Optional[str]
    skill_image_url: Optional[str]
    status: Optional[str]
    skill_log: Optional[str]


@dataclass(frozen=True)
class TuitionFeeDetails:
    total_fee: Decimal
    fee_paid: Decimal
    fee_remaining: Decimal
    due_date: Optional[date]
    offer_price: Optional[Decimal]
    offer_valid_till: Optional[date]
    fee_class: Optional[str]
