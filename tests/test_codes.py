"""Tests für die Code-Generierung"""
from iliri.services import code_service
from iliri.services.code_service import generate_code, generate_unique_code, CODE_ALPHABET


def test_generate_code_format():
    code = generate_code(8)
    assert len(code) == 8
    assert all(c in CODE_ALPHABET for c in code)


def test_unique_code_not_in_existing():
    existing = {generate_code(8) for _ in range(200)}
    for _ in range(50):
        assert generate_unique_code(existing) not in existing


def test_fallback_suffix_after_max_attempts(monkeypatch):
    """Wenn jeder Kandidat kollidiert, wird ein Zähler angehängt"""
    monkeypatch.setattr(code_service, "generate_code", lambda length=8: "AAAAAAAA")

    assert generate_unique_code(["AAAAAAAA"], max_attempts=5) == "AAAAAAAA-1"
    assert generate_unique_code(["AAAAAAAA", "AAAAAAAA-1", "AAAAAAAA-2"], max_attempts=5) == "AAAAAAAA-3"


def test_first_free_candidate_is_used(monkeypatch):
    candidates = iter(["TAKEN001", "TAKEN002", "FREE0001"])
    monkeypatch.setattr(code_service, "generate_code", lambda length=8: next(candidates))

    assert generate_unique_code(["TAKEN001", "TAKEN002"]) == "FREE0001"
