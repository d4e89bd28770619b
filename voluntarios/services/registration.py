from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.logging import logger
from .kv_store import KeyValueStore
from .record_store import RecordStore, VolunteerRecord
from .validation import ValidationFailure, normalize_postal_code, is_valid_postal_code, validate
from .viacep import ViaCepService, viacep_service


ADDRESS_NOT_FOUND = "address not found"

MESSAGES = {
    ValidationFailure.MISSING_FIELD: "Por favor, preencha todos os campos obrigatórios",
    ValidationFailure.DUPLICATE_EMAIL: "Este e-mail já está cadastrado!",
    ValidationFailure.INVALID_POSTAL_CODE: "CEP inválido. Deve conter 8 dígitos",
    ADDRESS_NOT_FOUND: "CEP não encontrado ou erro na consulta",
}

STATUS_CODES = {
    ValidationFailure.MISSING_FIELD: 400,
    ValidationFailure.DUPLICATE_EMAIL: 409,
    ValidationFailure.INVALID_POSTAL_CODE: 400,
    ADDRESS_NOT_FOUND: 404,
}


class RegistrationError(Exception):
    def __init__(self, reason: str):
        self.reason = reason
        self.message = MESSAGES[reason]
        self.status_code = STATUS_CODES[reason]
        super().__init__(self.message)

    def to_detail(self) -> dict:
        return {"reason": str(getattr(self.reason, "value", self.reason)), "message": self.message}


class RegistrationService:
    def __init__(self, db: Session, lookup: Optional[ViaCepService] = None):
        self.db = db
        self.store = RecordStore(KeyValueStore(db))
        self.lookup = lookup or viacep_service

    def submit(self, name: str, email: str, postal_code: str, address: str = "") -> VolunteerRecord:
        """Validate, enrich the address when missing and persist a new volunteer."""
        name = (name or "").strip()
        email = (email or "").strip()
        manual_address = (address or "").strip()

        failure = validate(name, email, postal_code, self.store)
        if failure is not None:
            logger.info(f"[registration] rejected email='{email}' reason='{failure.value}'")
            raise RegistrationError(failure)

        full_address = manual_address or self.lookup.resolve_address(normalize_postal_code(postal_code))
        if not full_address:
            logger.info(f"[registration] rejected email='{email}' reason='{ADDRESS_NOT_FOUND}'")
            raise RegistrationError(ADDRESS_NOT_FOUND)

        record = VolunteerRecord.create(name=name, email=email, address=full_address)
        self.store.append(record)
        logger.info(f"[registration] created id={record.id} manual_address={bool(manual_address)}")
        return record

    def lookup_address(self, postal_code: str) -> Optional[str]:
        """Prefill used when the CEP field loses focus; skips incomplete CEPs."""
        if not is_valid_postal_code(postal_code):
            return None
        return self.lookup.resolve_address(normalize_postal_code(postal_code))

    def list_volunteers(self, query: str = "") -> List[Tuple[int, VolunteerRecord]]:
        """Records matching the filter, paired with their position in the full list."""
        needle = (query or "").strip().lower()
        result = []
        for position, record in enumerate(self.store.load_all()):
            haystacks = (record.name, record.email, record.address or "")
            if not needle or any(needle in value.lower() for value in haystacks):
                result.append((position, record))
        return result

    def remove_at(self, index: int) -> Optional[VolunteerRecord]:
        return self.store.remove_at(index)

    def remove_by_id(self, record_id: str) -> Optional[VolunteerRecord]:
        return self.store.remove_by_id(record_id)

    def clear_all(self) -> None:
        self.store.clear_all()
