from datetime import datetime
from typing import Optional

from pydantic import AliasGenerator, BaseModel, field_serializer
from pydantic.alias_generators import to_camel

from waitlist_api.platform.utils.dates import utc_isoformat


class WaitlistIn(BaseModel):
    email: str


class WaitlistCheckIn(BaseModel):
    email: str


class WaitlistOut(BaseModel):
    id: str
    email: str

    class Config:
        from_attributes = True


class WaitlistEntryOut(BaseModel):
    id: str
    email: str
    created_at: datetime
    source: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    class Config:
        from_attributes = True
        alias_generator = AliasGenerator(serialization_alias=to_camel)

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return utc_isoformat(value)


class WaitlistStats(BaseModel):
    total_count: int
    timestamp: datetime

    class Config:
        alias_generator = AliasGenerator(serialization_alias=to_camel)

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: datetime) -> str:
        return utc_isoformat(value)
