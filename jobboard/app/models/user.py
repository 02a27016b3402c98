from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class User(BaseModel):
    """A record of the ``users`` collection. ``password`` only ever holds a bcrypt hash."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: str
    username: str
    name: str | None = None
    email: str
    password: str
    role: Literal["admin", "user"] = "user"
    phone: str = ""
    skills: list[str] = Field(default_factory=list)
    experience: str = ""
    created_at: str

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)

    def public(self) -> dict:
        return {"username": self.username, "role": self.role}
