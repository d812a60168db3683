"""Job requirements consumed read-only by the matching core."""

from pydantic import BaseModel, ConfigDict, Field


class JobRequirement(BaseModel):
    """A job posting as seen by the matching core.

    Accepts the job-board storage shape (``skills``, ``details``) as well as
    the field names.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    required_skills: list[str] = Field(default_factory=list, alias="skills")
    domain: str = Field(default="", alias="details")
