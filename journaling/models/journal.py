"""변경 이력(Journal)과 스냅샷 테이블의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Float, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from journaling.database import Base


class Journal(Base):
    __tablename__ = "journals"

    journal_id = Column(Integer, primary_key=True, autoincrement=True)
    journable_type = Column(String(50), nullable=False)  # WorkPackage/Meeting
    journable_id = Column(Integer, nullable=False)
    version = Column(Integer, nullable=False)
    activity_type = Column(String(50))
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    notes = Column(Text, default="")
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
    # 타입별 스냅샷 테이블(work_package_journals 등)의 행을 가리킨다.
    data_type = Column(String(50), nullable=False)
    data_id = Column(Integer, nullable=False)

    user = relationship("User", back_populates="journals")
    customizable_journals = relationship(
        "CustomizableJournal", back_populates="journal", cascade="all, delete-orphan"
    )
    attachable_journals = relationship(
        "AttachableJournal", back_populates="journal", cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint("journable_type", "journable_id", "version", name="uq_journal_journable_version"),
        Index("idx_journal_journable", "journable_type", "journable_id", "version"),
        Index("idx_journal_user", "user_id", "created_at"),
    )


class CustomizableJournal(Base):
    __tablename__ = "customizable_journals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    journal_id = Column(Integer, ForeignKey("journals.journal_id", ondelete="CASCADE"), nullable=False)
    custom_field_id = Column(Integer, ForeignKey("custom_fields.custom_field_id"), nullable=False)
    value = Column(Text)

    journal = relationship("Journal", back_populates="customizable_journals")

    __table_args__ = (
        Index("idx_customizable_journal", "journal_id", "custom_field_id"),
    )


class AttachableJournal(Base):
    __tablename__ = "attachable_journals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    journal_id = Column(Integer, ForeignKey("journals.journal_id", ondelete="CASCADE"), nullable=False)
    # 첨부가 삭제되어도 이력은 남아야 하므로 FK를 두지 않는다.
    attachment_id = Column(Integer, nullable=False)
    filename = Column(String(255), nullable=False)

    journal = relationship("Journal", back_populates="attachable_journals")

    __table_args__ = (
        Index("idx_attachable_journal", "journal_id", "attachment_id"),
    )


class WorkPackageJournal(Base):
    __tablename__ = "work_package_journals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    subject = Column(String(255))
    description = Column(Text)
    status = Column(String(20))
    priority = Column(String(10))
    author_id = Column(Integer)
    assigned_to_id = Column(Integer)
    start_date = Column(Date)
    due_date = Column(Date)
    done_ratio = Column(Integer)
    estimated_hours = Column(Float)


class MeetingJournal(Base):
    __tablename__ = "meeting_journals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255))
    location = Column(String(255))
    start_time = Column(DateTime)
    duration = Column(Float)
    state = Column(String(20))
    agenda = Column(Text)
    author_id = Column(Integer)
