from sqlalchemy import Column, String, Text

from waitlist_api.platform.db.base import BaseModel


class WaitlistEntry(BaseModel):
    __tablename__ = "waitlist_entries"
    # The unique index is what keeps concurrent signups for one address down to a single row.
    email = Column(String(255), nullable=False, unique=True, index=True)
    source = Column(String(50), nullable=False)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<WaitlistEntry(email='{self.email}', source='{self.source}')>"
