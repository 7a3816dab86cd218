"""
Input validation schemas using Pydantic for the HTTP layer.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date as _date


class BirthDateInput(BaseModel):
    """Schema for the onboarding form."""
    birth_date: _date

    @field_validator('birth_date')
    @classmethod
    def must_be_past(cls, v):
        """Birth date must lie strictly before today."""
        if v >= _date.today():
            raise ValueError('Please enter a past date.')
        return v


class NavigateInput(BaseModel):
    """Schema for year navigation."""
    year: int = Field(..., ge=1, le=9999)


class MemoryInput(BaseModel):
    """Schema for adding or editing a memory/goal."""
    text: str = Field(..., max_length=10000)
    date: _date
    title: Optional[str] = Field(None, max_length=200)
    image_data: Optional[str] = None

    @field_validator('text')
    @classmethod
    def validate_text(cls, v):
        """Reject blank entries."""
        if not v or not v.strip():
            raise ValueError('Please enter a memory or goal.')
        return v.strip()

    @field_validator('title')
    @classmethod
    def strip_title(cls, v):
        """Blank titles are stored as no title."""
        if v is None:
            return None
        return v.strip() or None
