from sqlalchemy import Column, DateTime, Index, Integer, String, Text
from sqlalchemy.sql import func
from snaplink_app.database.connection import Base


class Link(Base):
    """
    A short code mapped to its redirect target.

    `code`, `long_url` and `created_at` never change after insertion.
    The only mutation is the click counter, bumped on every redirect.
    """
    __tablename__ = "links"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # unique=True creates the unique index on code
    code = Column(String(8), unique=True, nullable=False)
    long_url = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    total_clicks = Column(Integer, nullable=False, default=0, server_default="0")
    last_clicked = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Link code={self.code!r} clicks={self.total_clicks}>"


# Dashboard lists newest first
Index("idx_links_created_at", Link.created_at.desc())
