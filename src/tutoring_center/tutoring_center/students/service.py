from __future__ import annotations

import dataclasses
import logging
from typing import Optional

from ..common.datetime_utils import format_admission_date
from ..common.validators import require_fcc_id, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import NewStudent, Student, StudentPatch, StudentSkill, TuitionFeeDetails
from .photos import PhotoLookup, StaticPhotoLookup
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    """Use cases: admission, profile reads and the transactional profile update."""

    def __init__(self, students: StudentRepository, photos: Optional[PhotoLookup] = None):
        self._students = students
        self._photos = photos or StaticPhotoLookup()

    def admit(self, new_student: NewStudent) -> Student:
        fcc_id = require_fcc_id(new_student.fcc_id)
        name = require_non_empty(new_student.name, "name")
        student = self._students.create(dataclasses.replace(new_student, fcc_id=fcc_id, name=name))
        logger.info("Admitted student %s", student.fcc_id)
        return student

    def list_students(self) -> list[dict]:
        rows = []
        for s in self._students.list_all():
            row = dataclasses.asdict(s)
            row["admission_date"] = format_admission_date(s.admission_date)
            rows.append(row)
        return rows

    def get_student(self, fcc_id: str) -> Student:
        fcc_id = require_non_empty(fcc_id, "fcc_id")
        student = self._students.get_by_fcc_id(fcc_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def get_profile(self, fcc_id: str) -> dict:
        student = self.get_student(fcc_id)
        profile = dataclasses.asdict(student)
        profile["photo_url"] = self._photos.photo_url(student.fcc_id)
        return profile

    def update_student(self, fcc_id: str, patch: StudentPatch) -> Student:
        fcc_id = require_non_empty(fcc_id, "fcc_id")
        if patch.is_empty():
            raise ValidationError("Nothing to update")
        student = self._students.update_profile(fcc_id, patch)
        logger.info(
            "Updated student %s (payment_status=%s)",
            fcc_id,
            patch.payment_status if patch.payment_status is not None else "unchanged",
        )
        return student

    def get_skills(self, fcc_id: str) -> list[StudentSkill]:
        skills = self._students.list_skills(require_non_empty(fcc_id, "fcc_id"))
        if not skills:
            raise NotFoundError("No skills found for this student")
        return [
            dataclasses.replace(
                s,
                skill_level=s.skill_level or "Unknown",
                status=s.status or "Not Specified",
                skill_description=s.skill_description or "No description available",
            )
            for s in skills
        ]

    def get_tuition_fee_details(self, fcc_id: str) -> TuitionFeeDetails:
        details = self._students.get_tuition_fee_details(require_non_empty(fcc_id, "fcc_id"))
        if not details:
            raise NotFoundError("No fee details found for this FCC ID")
        return details
