"""Gemeinsame Validierung für Lieferanten und Kunden"""
import re
from typing import Optional

TELEPHONE_PATTERN = re.compile(r'^[\d\s+\-]+$')


def validate_telephone(v: Optional[str]) -> Optional[str]:
    if v is None or not v.strip():
        return None
    if not TELEPHONE_PATTERN.match(v):
        raise ValueError('Telefon darf nur Ziffern, +, Leerzeichen oder Bindestriche enthalten')
    return v


def validate_name(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError('Name ist erforderlich')
    return v
