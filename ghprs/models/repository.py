"""Organization repository model."""

from pydantic import BaseModel, ConfigDict

UNKNOWN_LANGUAGE = "Unknown"


class Repository(BaseModel):
    """Repository of an organization, as returned by the listing."""

    model_config = ConfigDict(frozen=True)

    name: str
    language: str | None = None

    @property
    def display_language(self) -> str:
        """Primary language, or "Unknown" when GitHub has none."""
        return self.language or UNKNOWN_LANGUAGE
