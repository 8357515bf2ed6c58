"""One page of a paginated listing."""

from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """A bounded batch of listing results and whether another page follows."""

    model_config = ConfigDict(frozen=True)

    items: List[T] = Field(default_factory=list)
    has_next: bool = False
