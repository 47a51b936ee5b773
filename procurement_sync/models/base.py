from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import declarative_base
from datetime import datetime
import uuid

# Create a declarative base which all models will inherit from
Base = declarative_base()


def generate_uuid() -> str:
    return str(uuid.uuid4())


# Define a BaseModel with common columns to keep the code DRY (Don't Repeat Yourself)
# This is an abstract class; it won't be created as a table itself.
class BaseModel(Base):
    __abstract__ = True
    id = Column(String(36), primary_key=True, default=generate_uuid)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
