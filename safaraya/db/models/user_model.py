from sqlalchemy import BigInteger, Column, DateTime, Integer, LargeBinary, Text, func

from safaraya.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=True)
    age = Column(Integer, nullable=True)
    cv_file = Column(LargeBinary, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, name={self.name})>"
