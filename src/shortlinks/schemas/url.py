from pydantic import BaseModel

from src.shortlinks.schemas.common import UTCDateTime


class URLCreate(BaseModel):
    destination: str


class URLUpdate(BaseModel):
    destination: str


class VisitEvent(BaseModel):
    visitor_id: str
    visited_at: UTCDateTime

    class Config:
        from_attributes = True


class URL(BaseModel):
    short_code: str
    destination: str
    owner_id: str
    created_at: UTCDateTime
    total_visits: int
    unique_visitor_ids: set[str]

    @classmethod
    def from_model(cls, url) -> "URL":
        return cls(
            short_code=url.short_code,
            destination=url.destination,
            owner_id=url.owner_id,
            created_at=url.created_at,
            total_visits=url.total_visits,
            unique_visitor_ids={v.visitor_id for v in url.unique_visitors},
        )


class URLDetail(URL):
    history: list[VisitEvent]
