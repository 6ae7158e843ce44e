from pydantic import BaseModel, field_validator
from uuid import UUID
from typing import Optional

from iliri.schemas.contact import validate_telephone, validate_name


class SupplierCreate(BaseModel):
    name: str
    code: Optional[str] = None
    telephone: Optional[str] = None
    active: bool = True

    check_name = field_validator('name')(validate_name)
    check_telephone = field_validator('telephone')(validate_telephone)


class SupplierUpdate(BaseModel):
    name: Optional[str] = None
    telephone: Optional[str] = None
    active: Optional[bool] = None

    check_name = field_validator('name')(validate_name)
    check_telephone = field_validator('telephone')(validate_telephone)


class SupplierResponse(BaseModel):
    id: UUID
    name: str
    code: str
    telephone: Optional[str]
    active: bool

    model_config = {"from_attributes": True}
