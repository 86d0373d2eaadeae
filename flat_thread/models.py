from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class User(BaseModel):
    """Author of a comment."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    picture: str = ""


class Comment(BaseModel):
    """A comment as supplied by the comment store."""

    model_config = ConfigDict(extra="ignore")

    id: str
    pid: Optional[str] = None
    time: Optional[str] = None
    hidden: bool = False
    user: User
    text: str = ""

    @field_validator("pid", mode="before")
    @classmethod
    def _empty_pid_is_top_level(cls, value):
        # remark42 sends "" as the parent of top-level comments
        if value == "":
            return None
        return value


class MentionTarget(BaseModel):
    """The author a flattened reply was directed at."""

    model_config = ConfigDict(frozen=True)

    author_name: str
    author_id: str
    author_picture: str = ""
