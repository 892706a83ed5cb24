"""
User model
"""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

from app.database import Base


class User(Base):
    """
    Dashboard user.

    Users are issued by the authentication collaborator; this backend only
    looks them up to attribute products and import batches.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True)
    username = Column(String(100), nullable=True)
    password_hash = Column(String(255), nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    # Relationships
    products = relationship("Product", back_populates="owner")
    import_batches = relationship("ImportBatch", back_populates="user")
