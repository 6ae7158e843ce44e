import re
from typing import Optional, Literal

from pydantic import BaseModel, Field, field_validator

MIN_PASSWORD_LENGTH = 8
NAME_PATTERN = re.compile(r'^[a-zA-Z0-9._\s]+$')


class LoginRequest(BaseModel):
    name: str
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    remember_me: bool = False

    @field_validator('name')
    @classmethod
    def name_format(cls, v):
        v = v.strip()
        if len(v) < 2 or len(v) > 64:
            raise ValueError('Name muss zwischen 2 und 64 Zeichen lang sein')
        if not NAME_PATTERN.match(v):
            raise ValueError('Name darf nur Buchstaben, Ziffern, Leerzeichen, Punkte und Unterstriche enthalten')
        return v


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    theme: Literal["light", "dark"]

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    theme: Optional[Literal["light", "dark"]] = None
