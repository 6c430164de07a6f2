"""사용자 정의 필드(CustomField)와 필드 값(CustomValue)의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from journaling.database import Base


class CustomField(Base):
    __tablename__ = "custom_fields"

    custom_field_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    field_format = Column(String(20), nullable=False, default="string")  # string/text/int/date/list
    is_multi_value = Column(Boolean, default=False)
    created_at = Column(DateTime, server_default=func.now())

    values = relationship("CustomValue", back_populates="custom_field", cascade="all, delete-orphan")


class CustomValue(Base):
    __tablename__ = "custom_values"

    custom_value_id = Column(Integer, primary_key=True, autoincrement=True)
    customized_type = Column(String(50), nullable=False)  # WorkPackage/Meeting
    customized_id = Column(Integer, nullable=False)
    custom_field_id = Column(Integer, ForeignKey("custom_fields.custom_field_id"), nullable=False)
    value = Column(Text)

    custom_field = relationship("CustomField", back_populates="values")

    __table_args__ = (
        Index("idx_custom_value_customized", "customized_type", "customized_id", "custom_field_id"),
    )
