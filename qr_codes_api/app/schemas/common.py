"""
Base model shared by all request and response schemas.

API payloads use camelCase keys (``contentValue``, ``isFavorite``)
while the Python attributes and database columns are snake_case.
``ApiModel`` maps between the two with an alias generator and accepts
either spelling on input.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base class for schemas exchanged with API clients."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class InputModel(ApiModel):
    """Base class for request bodies.

    Optional fields may be omitted but not sent as ``null``: omission
    means "leave unchanged" on updates and there is no way to clear a
    field once set.  Defaults are not validated, so the check below only
    fires for values the client actually supplied.
    """

    @field_validator("*", mode="before")
    @classmethod
    def reject_explicit_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("may be omitted but must not be null")
        return value
