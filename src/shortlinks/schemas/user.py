from pydantic import BaseModel

from src.shortlinks.schemas.common import UTCDateTime


class Credentials(BaseModel):
    # Empty defaults so a missing field reaches the core as MissingField
    email: str = ""
    password: str = ""


class Account(BaseModel):
    id: str
    email: str
    created_at: UTCDateTime

    class Config:
        from_attributes = True
