from typing import Optional, List, Generic, TypeVar
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


# Base for every request/response body: camelCase on the wire, snake_case in Python.
# Input accepts either spelling.
class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Paginated response wrapper: used by all list endpoints
class PaginatedResponse(CamelModel, Generic[T]):
    data: List[T]
    total: int
    page: int
    limit: int
    total_pages: int


# Error responses
class ErrorResponse(BaseModel):
    error: str
    message: str


class MessageResponse(BaseModel):
    message: str
    id: Optional[str] = None
