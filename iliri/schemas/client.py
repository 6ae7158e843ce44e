from pydantic import BaseModel, field_validator
from uuid import UUID
from typing import Optional

from iliri.schemas.contact import validate_telephone, validate_name


class ClientCreate(BaseModel):
    name: str
    code: Optional[str] = None
    telephone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    active: bool = True

    check_name = field_validator('name')(validate_name)
    check_telephone = field_validator('telephone')(validate_telephone)


class ClientUpdate(BaseModel):
    name: Optional[str] = None
    telephone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    active: Optional[bool] = None

    check_name = field_validator('name')(validate_name)
    check_telephone = field_validator('telephone')(validate_telephone)


class ClientResponse(BaseModel):
    id: UUID
    name: str
    code: str
    telephone: Optional[str]
    email: Optional[str]
    address: Optional[str]
    active: bool

    model_config = {"from_attributes": True}
