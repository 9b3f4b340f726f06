from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Text

from db import Base, BigIntPK


class ContactMessage(Base):
    """
    A message left through the contact form on the home page.

    Rows are write-once; the dashboard only ever reads them.
    """

    __tablename__ = "contact_messages"

    id = Column(BigIntPK, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<ContactMessage id={self.id} email={self.email!r}>"
