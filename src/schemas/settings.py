"""Store settings schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SettingsData(BaseModel):
    """Storefront settings."""

    model_config = ConfigDict(from_attributes=True)

    logo_url: str | None = None
    line_of_the_month: str | None = None


class SettingsUpdate(BaseModel):
    """Partial settings update. Only provided keys change."""

    logo_url: str | None = Field(None, max_length=1000)
    line_of_the_month: str | None = Field(None, max_length=255)

    @field_validator("line_of_the_month")
    @classmethod
    def blank_line_disables(cls, v: str | None) -> str | None:
        """A blank manufacturer clears the line of the month."""
        return (v or "").strip() or None


class LineOfTheMonthUpdate(BaseModel):
    """Set or clear the promoted manufacturer."""

    manufacturer: str | None = Field(None, max_length=255)
