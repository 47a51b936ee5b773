"""
Base Pydantic Schemas
========================

Provides base classes and common functionality for all schemas using Pydantic V2.
"""

from pydantic import BaseModel, ConfigDict, model_validator
from datetime import datetime
from typing import Optional, Any


class BaseSchema(BaseModel):
    """Base schema dengan common fields dan methods, versi Pydantic V2."""

    id: Optional[str] = None
    created_at: Optional[datetime] = None

    # orm_mode diganti jadi from_attributes
    model_config = ConfigDict(
        from_attributes=True,
        extra='ignore',
    )

    @model_validator(mode='before')
    @classmethod
    def strip_whitespace(cls, data: Any) -> Any:
        """Strip whitespace dari string fields sebelum validasi."""
        if isinstance(data, dict):
            for key, value in data.items():
                if isinstance(value, str):
                    data[key] = value.strip()
        return data

