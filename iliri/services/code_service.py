import logging
import secrets
import string
from typing import Iterable

logger = logging.getLogger("iliri.codes")

CODE_ALPHABET = string.digits + string.ascii_uppercase


def generate_code(length: int = 8) -> str:
    """Zufälliger Code aus Ziffern und Großbuchstaben (Basis 36)"""
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def generate_unique_code(existing_codes: Iterable[str], length: int = 8, max_attempts: int = 100) -> str:
    """
    Erzeugt einen Code, der noch nicht in existing_codes vorkommt.

    Nach max_attempts Kollisionen wird an den letzten Kandidaten ein Zähler
    gehängt (CODE-1, CODE-2, ...), damit die Schleife garantiert terminiert.
    """
    taken = set(existing_codes)
    code = generate_code(length)
    for _ in range(max_attempts):
        if code not in taken:
            return code
        code = generate_code(length)

    logger.warning(f"Keine freien Codes nach {max_attempts} Versuchen, verwende Zähler-Suffix")
    counter = 1
    while f"{code}-{counter}" in taken:
        counter += 1
    return f"{code}-{counter}"
