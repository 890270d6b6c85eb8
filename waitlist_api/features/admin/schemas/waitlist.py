from enum import Enum
from math import ceil
from typing import List

from pydantic import AliasGenerator, BaseModel
from pydantic.alias_generators import to_camel

from waitlist_api.features.waitlist.schemas.waitlist import WaitlistEntryOut


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str | None) -> "SortOrder":
        # Anything other than "asc" sorts newest/largest first.
        return cls.ASC if value == cls.ASC.value else cls.DESC


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_count: int
    has_next_page: bool
    has_prev_page: bool
    limit: int

    class Config:
        alias_generator = AliasGenerator(serialization_alias=to_camel)

    @classmethod
    def build(cls, page: int, limit: int, total_count: int) -> "Pagination":
        total_pages = ceil(total_count / limit)
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_count=total_count,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
            limit=limit,
        )


class WaitlistPage(BaseModel):
    entries: List[WaitlistEntryOut]
    pagination: Pagination
