from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# camelCase on the wire, snake_case in Python
class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Error responses
class ErrorResponse(CamelModel):
    success: Optional[bool] = None
    error: str


# Generic acknowledgement for state changes
class ActionResponse(CamelModel):
    success: bool = True
    message: str


def id_to_str(v):
    # Center ids may arrive as numbers from older clients
    if v is None or v == "":
        return None
    return str(v)
