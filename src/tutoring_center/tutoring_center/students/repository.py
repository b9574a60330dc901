from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewStudent, Student, StudentPatch, StudentSkill, TuitionFeeDetails


class StudentRepository(Protocol):
    def get_by_fcc_id(self, fcc_id: str) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def create(self, student: NewStudent) -> Student:
        raise NotImplementedError

    def update_profile(self, fcc_id: str, patch: StudentPatch) -> Student:
        """Apply the patch (and the payment status, if any) in one transaction.

        Raises NotFoundError when no admission exists; nothing is written then.
        """

        raise NotImplementedError

    def list_skills(self, fcc_id: str) -> Sequence[StudentSkill]:
        raise NotImplementedError

    def get_tuition_fee_details(self, fcc_id: str) -> Optional[TuitionFeeDetails]:
        raise NotImplementedError
