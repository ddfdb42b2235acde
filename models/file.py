from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, BigInteger, func
from sqlalchemy.orm import relationship
from config.database import Base


class PhysicalFile(Base):
    """Stored content, keyed by hash and shared between uploads of identical files."""
    __tablename__ = "physical_files"

    hash = Column(String(64), primary_key=True)
    size_bytes = Column(BigInteger, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user_files = relationship("UserFile", back_populates="physical_file")


class UserFile(Base):
    """A user's named reference to a physical file."""
    __tablename__ = "user_files"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    filename = Column(String, nullable=False, index=True)
    mime_type = Column(String, nullable=False)
    physical_file_hash = Column(String(64), ForeignKey("physical_files.hash"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    physical_file = relationship("PhysicalFile", back_populates="user_files")
