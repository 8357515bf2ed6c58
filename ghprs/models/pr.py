"""Pull request model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PR(BaseModel):
    """Pull request.

    ``mergeable`` is None until GitHub has computed it; list endpoints never
    return it, so it is only meaningful on a detail fetch.
    """

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    mergeable: bool | None = None
    updated_at: datetime
