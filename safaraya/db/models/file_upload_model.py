from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, LargeBinary, Text, func, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from safaraya.db.base import Base


class FileUpload(Base):
    __tablename__ = "file_upload"

    file_id = Column(UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()"))
    registration_id = Column(
        UUID(as_uuid=True),
        ForeignKey("registration.registration_id"),
        nullable=False,
        index=True,
    )
    file_type = Column(Text, nullable=False)
    filename = Column(Text, nullable=False)
    file = Column(LargeBinary, nullable=False)
    file_size = Column(BigInteger, nullable=False, doc="Length of file in bytes")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    registration = relationship("Registration", back_populates="files")
