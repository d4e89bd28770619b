import pytest

from voluntarios.services.record_store import VolunteerRecord
from voluntarios.services.registration import (
    ADDRESS_NOT_FOUND,
    RegistrationError,
    RegistrationService,
)
from voluntarios.services.validation import ValidationFailure


@pytest.fixture
def registration(db, lookups):
    return RegistrationService(db)


def test_submit_resolves_address_from_cep(registration, lookups):
    record = registration.submit("Ana", "ana@x.com", "01001-000", "")
    assert record.address == "Praça da Sé, Sé, São Paulo - SP"
    assert [r.email for r in registration.store.load_all()] == ["ana@x.com"]
    assert lookups[1] == ["01001000"]


def test_submit_trims_fields(registration):
    record = registration.submit("  Ana  ", "  ana@x.com ", "01001-000", "  Rua B, 10  ")
    assert (record.name, record.email, record.address) == ("Ana", "ana@x.com", "Rua B, 10")


def test_manual_address_skips_lookup(registration, lookups):
    record = registration.submit("Ana", "ana@x.com", "99999-999", "Rua das Flores, 12")
    assert record.address == "Rua das Flores, 12"
    assert lookups[1] == []


def test_duplicate_email_leaves_collection_unchanged(registration):
    registration.submit("Ana", "ana@x.com", "01001-000")
    with pytest.raises(RegistrationError) as exc:
        registration.submit("Outra Ana", "ANA@x.com", "20040-020", "Rua C")
    assert exc.value.reason == ValidationFailure.DUPLICATE_EMAIL
    assert exc.value.status_code == 409
    assert len(registration.store.load_all()) == 1


def test_invalid_cep_is_rejected_before_lookup(registration, lookups):
    with pytest.raises(RegistrationError) as exc:
        registration.submit("Ana", "ana@x.com", "0100-100")
    assert exc.value.reason == ValidationFailure.INVALID_POSTAL_CODE
    assert exc.value.message == "CEP inválido. Deve conter 8 dígitos"
    assert lookups[1] == []


def test_missing_field(registration):
    with pytest.raises(RegistrationError) as exc:
        registration.submit("Ana", "", "01001-000")
    assert exc.value.to_detail() == {
        "reason": "missing required field",
        "message": "Por favor, preencha todos os campos obrigatórios",
    }


def test_lookup_failure_persists_nothing(registration):
    with pytest.raises(RegistrationError) as exc:
        registration.submit("Ana", "ana@x.com", "99999-999")
    assert exc.value.reason == ADDRESS_NOT_FOUND
    assert exc.value.status_code == 404
    assert registration.store.load_all() == []


def test_lookup_address_only_for_complete_cep(registration, lookups):
    assert registration.lookup_address("0100") is None
    assert lookups[1] == []
    assert registration.lookup_address("01001-000") == "Praça da Sé, Sé, São Paulo - SP"


def test_list_volunteers_filter_keeps_full_positions(registration):
    registration.store.save_all([
        VolunteerRecord.create(name="Ana", email="ana@x.com", address="Praça da Sé, Sé, São Paulo - SP"),
        VolunteerRecord.create(name="Bruno", email="bruno@y.com", address="Rua A, Centro, Natal - RN"),
        VolunteerRecord.create(name="Carla", email="carla@x.com", address="Rua B, Boa Viagem, Recife - PE"),
    ])

    assert [p for p, _ in registration.list_volunteers()] == [0, 1, 2]
    assert [(p, r.name) for p, r in registration.list_volunteers("NATAL")] == [(1, "Bruno")]
    assert [(p, r.name) for p, r in registration.list_volunteers("@x.com")] == [(0, "Ana"), (2, "Carla")]
    assert [(p, r.name) for p, r in registration.list_volunteers("carl")] == [(2, "Carla")]
    assert registration.list_volunteers("ninguém") == []


def test_remove_and_clear(registration):
    first = registration.submit("Ana", "ana@x.com", "01001-000")
    registration.submit("Bruno", "bruno@x.com", "01001-000", "Rua A")
    registration.submit("Carla", "carla@x.com", "01001-000", "Rua B")

    assert registration.remove_at(1).name == "Bruno"
    assert registration.remove_by_id(first.id).name == "Ana"
    assert [r.name for r in registration.store.load_all()] == ["Carla"]

    registration.clear_all()
    assert registration.store.load_all() == []
