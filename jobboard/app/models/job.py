from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

JOB_STATUSES = ("active", "inactive")


class Job(BaseModel):
    """A record of the ``jobs`` collection, camelCase on disk and on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: str
    title: str
    company: str
    location: str = ""
    salary: str = ""
    type: str = ""
    experience: str = ""
    description: str
    requirements: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    apply_link: str = ""
    posted_by: str
    status: Literal["active", "inactive"] = "active"
    applicants: int = Field(default=0, ge=0)
    created_at: str

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)
