from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Cadet, FamilyContact, MedicalRecord, NewCadet


class CadetRepository(Protocol):
    def create(self, cadet: NewCadet, *, age: Optional[int], platoon: Optional[str]) -> int:
        """Insert a cadet; raises DuplicateKeyError on a taken application number."""

        raise NotImplementedError

    def get_by_id(self, cadet_id: int) -> Optional[Cadet]:
        raise NotImplementedError

    def get_by_application_number(self, application_number: str) -> Optional[Cadet]:
        raise NotImplementedError

    def list_all(self, *, platoon: Optional[str] = None) -> Sequence[Cadet]:
        raise NotImplementedError

    def delete(self, cadet_id: int) -> bool:
        raise NotImplementedError

    def add_family_contact(self, cadet_id: int, contact: FamilyContact) -> int:
        raise NotImplementedError

    def add_medical_record(self, cadet_id: int, record: MedicalRecord) -> int:
        raise NotImplementedError

    def get_family_contact(self, cadet_id: int) -> Optional[FamilyContact]:
        raise NotImplementedError

    def get_medical_record(self, cadet_id: int) -> Optional[MedicalRecord]:
        raise NotImplementedError
