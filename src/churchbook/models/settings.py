"""Organization-level settings."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field, SQLModel


class AppSettings(SQLModel):
    """Display and contact settings for the organization."""

    church_name: str = Field(default="Ecclesia Church", max_length=128)
    currency: str = Field(default="INR", max_length=3, description="ISO-4217 currency code")
    currency_symbol: str = Field(default="₹", max_length=4)
    dark_mode: bool = Field(default=False)
    administrator_name: str = Field(default="Rev. Pastor", max_length=128)
    email: str = Field(default="admin@church.org", max_length=255)
    logo_url: Optional[str] = Field(default=None)
