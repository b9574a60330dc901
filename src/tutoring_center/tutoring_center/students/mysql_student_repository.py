from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.exceptions import NotFoundError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewStudent, Student, StudentPatch, StudentSkill, TuitionFeeDetails
from .repository import StudentRepository

_STUDENT_COLUMNS = """
    id, fcc_id, name, father, mother, schooling_class, mobile_number, address,
    paid, tutionfee_paid, fcc_class, skills, admission_date
"""


def _to_student(r: dict) -> Student:
    fee = r.get("tutionfee_paid")
    return Student(
        student_id=int(r["id"]),
        fcc_id=r["fcc_id"],
        name=r["name"],
        father=r.get("father"),
        mother=r.get("mother"),
        schooling_class=r.get("schooling_class"),
        mobile_number=r.get("mobile_number"),
        address=r.get("address"),
        paid=bool(r.get("paid")),
        tutionfee_paid=Decimal(fee) if fee is not None else None,
        fcc_class=r.get("fcc_class"),
        skills=r.get("skills"),
        admission_date=r.get("admission_date"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_fcc_id(self, fcc_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_STUDENT_COLUMNS} FROM student_admissions WHERE fcc_id=%s", (fcc_id,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_STUDENT_COLUMNS} FROM student_admissions ORDER BY admission_date DESC, id DESC")
            return [_to_student(r) for r in fetchall(cur)]

    def create(self, student: NewStudent) -> Student:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 FROM student_admissions WHERE fcc_id=%s", (student.fcc_id,))
            if fetchone(cur):
                raise ValidationError(f"Student {student.fcc_id} already exists")

            cur.execute(
                """
                INSERT INTO student_admissions
                    (fcc_id, name, father, mother, schooling_class, mobile_number, address,
                     paid, tutionfee_paid, fcc_class, skills, admission_date)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,COALESCE(%s, NOW()))
                """,
                (
                    student.fcc_id,
                    student.name,
                    student.father,
                    student.mother,
                    student.schooling_class,
                    student.mobile_number,
                    student.address,
                    int(student.paid),
                    student.tutionfee_paid,
                    student.fcc_class,
                    student.skills,
                    student.admission_date,
                ),
            )
            cur.execute(f"SELECT {_STUDENT_COLUMNS} FROM student_admissions WHERE id=%s", (cur.lastrowid,))
            return _to_student(fetchone(cur))

    def update_profile(self, fcc_id: str, patch: StudentPatch) -> Student:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id FROM student_admissions WHERE fcc_id=%s FOR UPDATE", (fcc_id,))
            if not fetchone(cur):
                raise NotFoundError(f"Student {fcc_id} not found")

            assignments = patch.student_assignments()
            if assignments:
                sets = ", ".join(f"{column}=%s" for column, _ in assignments)
                params = tuple(value for _, value in assignments) + (fcc_id,)
                cur.execute(f"UPDATE student_admissions SET {sets} WHERE fcc_id=%s", params)

            if patch.payment_status is not None:
                cur.execute(
                    "UPDATE payments SET payment_status=%s WHERE fcc_id=%s",
                    (patch.payment_status, fcc_id),
                )

            cur.execute(f"SELECT {_STUDENT_COLUMNS} FROM student_admissions WHERE fcc_id=%s", (fcc_id,))
            return _to_student(fetchone(cur))

    def list_skills(self, fcc_id: str) -> Sequence[StudentSkill]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT skill_topic, skill_level, skill_description, skill_image_url, status, skill_log
                FROM student_skills
                WHERE fcc_id=%s
                ORDER BY id
                """,
                (fcc_id,),
            )
            return [
                StudentSkill(
                    skill_topic=r["skill_topic"],
                    skill_level=r.get("skill_level"),
                    skill_description=r.get("skill_description"),
                    skill_image_url=r.get("skill_image_url"),
                    status=r.get("status"),
                    skill_log=r.get("skill_log"),
                )
                for r in fetchall(cur)
            ]

    def get_tuition_fee_details(self, fcc_id: str) -> Optional[TuitionFeeDetails]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT total_fee, fee_paid, fee_remaining, due_date, offer_price, offer_valid_till, class
                FROM tuition_fee_details
                WHERE fcc_id=%s
                """,
                (fcc_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return TuitionFeeDetails(
                total_fee=Decimal(r["total_fee"]),
                fee_paid=Decimal(r["fee_paid"]),
                fee_remaining=Decimal(r["fee_remaining"]),
                due_date=r.get("due_date"),
                offer_price=Decimal(r["offer_price"]) if r.get("offer_price") is not None else None,
                offer_valid_till=r.get("offer_valid_till"),
                fee_class=r.get("class"),
            )
