from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Text, func, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from safaraya.db.base import Base


class Registration(Base):
    __tablename__ = "registration"
    __table_args__ = (
        CheckConstraint("applicant_count >= 1", name="ck_registration_applicant_count"),
    )

    registration_id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    full_name = Column(Text, nullable=False)
    job_title = Column(Text, nullable=True)
    address_full = Column(Text, nullable=True)
    whatsapp_number = Column(Text, nullable=False)
    note = Column(Text, nullable=True)
    applicant_count = Column(Integer, nullable=False, server_default=text("1"))
    visa_type = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    files = relationship("FileUpload", back_populates="registration")
