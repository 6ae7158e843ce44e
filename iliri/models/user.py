from typing import Literal

from pydantic import BaseModel


class User(BaseModel):
    id: str
    name: str
    email: str
    theme: Literal["light", "dark"] = "light"
