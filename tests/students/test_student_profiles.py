from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from decimal import Decimal

import pytest

from src.tutoring_center.tutoring_center.core.exceptions import NotFoundError, ValidationError
from src.tutoring_center.tutoring_center.students.model import NewStudent, Student, StudentPatch, StudentSkill
from src.tutoring_center.tutoring_center.students.photos import StaticPhotoLookup
from src.tutoring_center.tutoring_center.students.service import StudentService


class InMemoryStudents:
    def __init__(self):
        self.by_fcc_id: dict[str, Student] = {}
        self.payment_status: dict[str, str] = {}
        self.payment_updates = 0
        self.skills: dict[str, list[StudentSkill]] = {}

    def get_by_fcc_id(self, fcc_id):
        return self.by_fcc_id.get(fcc_id)

    def list_all(self):
        return list(self.by_fcc_id.values())

    def create(self, student: NewStudent) -> Student:
        if student.fcc_id in self.by_fcc_id:
            raise ValidationError(f"Student {student.fcc_id} already exists")
        stored = Student(student_id=len(self.by_fcc_id) + 1, **vars(student))
        self.by_fcc_id[student.fcc_id] = stored
        return stored

    def update_profile(self, fcc_id, patch: StudentPatch) -> Student:
        current = self.by_fcc_id.get(fcc_id)
        if current is None:
            raise NotFoundError(f"Student {fcc_id} not found")
        updated = replace(current, **dict(patch.student_assignments()))
        if patch.payment_status is not None:
            self.payment_status[fcc_id] = patch.payment_status
            self.payment_updates += 1
        self.by_fcc_id[fcc_id] = updated
        return updated

    def list_skills(self, fcc_id):
        return self.skills.get(fcc_id, [])

    def get_tuition_fee_details(self, fcc_id):
        return None


@pytest.fixture
def repo(fixed_now):
    r = InMemoryStudents()
    r.create(NewStudent(fcc_id="4949200024", name="Asha", fcc_class="5", admission_date=fixed_now))
    r.payment_status["4949200024"] = "Pending"
    return r


def test_admission_validates_fcc_id_format(repo):
    svc = StudentService(repo)

    with pytest.raises(ValidationError):
        svc.admit(NewStudent(fcc_id="1234567890", name="Ravi"))
    with pytest.raises(ValidationError):
        svc.admit(NewStudent(fcc_id="9631200024", name=" "))

    student = svc.admit(NewStudent(fcc_id=" 9631200024 ", name="Ravi"))
    assert student.fcc_id == "9631200024"


def test_skills_update_without_payment_status_leaves_payments_alone(repo):
    svc = StudentService(repo)

    student = svc.update_student("4949200024", StudentPatch(skills="Abacus"))

    assert student.skills == "Abacus"
    assert repo.payment_updates == 0
    assert repo.payment_status["4949200024"] == "Pending"


def test_update_with_payment_status_changes_both(repo):
    svc = StudentService(repo)

    student = svc.update_student(
        "4949200024", StudentPatch(tutionfee_paid=Decimal("1500"), payment_status="Paid")
    )

    assert student.tutionfee_paid == Decimal("1500")
    assert repo.payment_status["4949200024"] == "Paid"


def test_empty_update_and_unknown_student(repo):
    svc = StudentService(repo)

    with pytest.raises(ValidationError):
        svc.update_student("4949200024", StudentPatch())
    with pytest.raises(NotFoundError):
        svc.update_student("9631200024", StudentPatch(skills="Chess"))


def test_profile_includes_injected_photo(repo):
    svc = StudentService(repo, photos=StaticPhotoLookup.from_json('{"4949200024": "https://img.test/asha.jpg"}'))

    assert svc.get_profile("4949200024")["photo_url"] == "https://img.test/asha.jpg"
    assert StudentService(repo).get_profile("4949200024")["photo_url"] is None


def test_list_students_formats_admission_date(repo):
    rows = StudentService(repo).list_students()

    assert rows[0]["admission_date"] == "05/03/25 9:07 AM"


def test_skills_default_missing_fields(repo):
    repo.skills["4949200024"] = [
        StudentSkill(
            skill_topic="Abacus",
            skill_level=None,
            skill_description=None,
            skill_image_url=None,
            status=None,
            skill_log=None,
        )
    ]
    svc = StudentService(repo)

    skill = svc.get_skills("4949200024")[0]
    assert (skill.skill_level, skill.status) == ("Unknown", "Not Specified")
    with pytest.raises(NotFoundError):
        svc.get_skills("9631200024")


def test_student_routes(client_for, repo):
    client = client_for(student_service=StudentService(repo))

    resp = client.put("/update-student/4949200024", json={"skills": "Vedic Maths"})
    assert resp.status_code == 200
    assert resp.get_json()["student"]["skills"] == "Vedic Maths"

    assert client.put("/update-student/4949200024", json={"tutionfee_paid": "x"}).status_code == 400
    assert client.put("/update-student/9631200024", json={"skills": "Chess"}).status_code == 404
    assert client.get("/get-student-profile/9631200024").status_code == 404

    resp = client.post("/add-student", json={"fcc_id": "9631200024", "name": "Ravi", "paid": "true"})
    assert resp.status_code == 201
    assert resp.get_json()["paid"] is True
    assert client.post("/add-student", json={"fcc_id": "9631200024", "name": "Ravi"}).status_code == 400


def test_fee_paid_above_column_limit_is_rejected(client_for, repo):
    client = client_for(student_service=StudentService(repo))

    resp = client.put("/update-student/4949200024", json={"tutionfee_paid": "100000000"})

    assert resp.status_code == 400
    assert "must not exceed" in resp.get_json()["error"]
    assert repo.by_fcc_id["4949200024"].tutionfee_paid is None
