"""WorkPackage 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Float, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from journaling.database import Base


class WorkPackage(Base):
    __tablename__ = "work_packages"

    work_package_id = Column(Integer, primary_key=True, autoincrement=True)
    subject = Column(String(255), nullable=False)
    description = Column(Text)
    status = Column(String(20), default="new")        # new/in_progress/closed/rejected
    priority = Column(String(10), default="normal")   # low/normal/high/immediate
    author_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    assigned_to_id = Column(Integer, ForeignKey("users.user_id"), nullable=True)
    start_date = Column(Date)
    due_date = Column(Date)
    done_ratio = Column(Integer, default=0)
    estimated_hours = Column(Float)
    lock_version = Column(Integer, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    author = relationship("User", foreign_keys=[author_id])
    assignee = relationship("User", foreign_keys=[assigned_to_id])
    journals = relationship(
        "Journal",
        primaryjoin="and_(WorkPackage.work_package_id == foreign(Journal.journable_id), "
        "Journal.journable_type == 'WorkPackage')",
        order_by="Journal.version",
        viewonly=True,
    )
    custom_values = relationship(
        "CustomValue",
        primaryjoin="and_(WorkPackage.work_package_id == foreign(CustomValue.customized_id), "
        "CustomValue.customized_type == 'WorkPackage')",
        viewonly=True,
    )
    attachments = relationship(
        "Attachment",
        primaryjoin="and_(WorkPackage.work_package_id == foreign(Attachment.container_id), "
        "Attachment.container_type == 'WorkPackage')",
        viewonly=True,
    )

    __mapper_args__ = {"version_id_col": lock_version}

    __table_args__ = (
        Index("idx_work_package_assigned", "assigned_to_id"),
        Index("idx_work_package_status", "status"),
    )
