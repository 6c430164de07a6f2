"""Attachment 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from journaling.database import Base


class Attachment(Base):
    __tablename__ = "attachments"

    attachment_id = Column(Integer, primary_key=True, autoincrement=True)
    container_type = Column(String(50), nullable=False)  # WorkPackage/Meeting
    container_id = Column(Integer, nullable=False)
    filename = Column(String(255), nullable=False)
    disk_filename = Column(String(500))
    filesize = Column(Integer, default=0)
    content_type = Column(String(100))
    author_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    author = relationship("User", back_populates="attachments")

    __table_args__ = (
        Index("idx_attachment_container", "container_type", "container_id"),
    )
