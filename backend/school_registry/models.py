from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from school_registry.database import Base


class School(Base):
    __tablename__ = "schools"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column("school_name", Text, nullable=False)
    email = Column(Text, nullable=False)
    phone = Column(Text, nullable=False)
    address = Column(Text, nullable=False)
    city = Column(Text, nullable=False, index=True)
    state = Column(Text, nullable=False, index=True)
    pincode = Column(String(6), nullable=False)
    image_path = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
