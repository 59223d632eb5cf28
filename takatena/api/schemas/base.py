from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON bodies use camelCase keys; Python code uses field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(CamelModel):
    message: str


class ErrorResponse(CamelModel):
    error: str


class FieldErrorResponse(CamelModel):
    field: str
    message: str
    code: str


class ValidationErrorResponse(CamelModel):
    error: str = "Validation failed"
    details: list[FieldErrorResponse]
