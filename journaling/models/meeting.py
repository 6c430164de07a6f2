"""Meeting 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Float, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from journaling.database import Base


class Meeting(Base):
    __tablename__ = "meetings"

    meeting_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    location = Column(String(255))
    start_time = Column(DateTime)
    duration = Column(Float)  # hours
    state = Column(String(20), default="open")  # open/closed
    agenda = Column(Text)
    author_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    lock_version = Column(Integer, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    author = relationship("User")
    journals = relationship(
        "Journal",
        primaryjoin="and_(Meeting.meeting_id == foreign(Journal.journable_id), "
        "Journal.journable_type == 'Meeting')",
        order_by="Journal.version",
        viewonly=True,
    )

    __mapper_args__ = {"version_id_col": lock_version}
