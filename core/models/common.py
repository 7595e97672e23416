# =============================================================================
# core/models/common.py - Shared Schemas
# =============================================================================
# Building blocks shared by the project and team schemas:
# - CamelModel: snake_case in Python, camelCase on the wire
# - NonEmptyStr / blank-to-None handling for form input
# - Reorder, success and upload payloads
# =============================================================================

from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel


# A required text field: surrounding whitespace is stripped, empty is rejected
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def blank_to_none(value: Any) -> Any:
    """Admin forms submit "" for untouched optional fields; store NULL instead."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class CamelModel(BaseModel):
    """
    Base model for wire payloads.

    Fields are declared in snake_case and exposed as camelCase
    (start_year <-> startYear). Either spelling is accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ReorderRequest(BaseModel):
    """
    Full permutation of a collection, in the new display order.

    Example:
        {"ids": ["c-id", "a-id", "b-id"]}

    The admin panel's older payload keys (projectIds / memberIds) are
    accepted as well.
    """

    ids: list[str] = Field(
        ...,
        validation_alias=AliasChoices("ids", "projectIds", "memberIds"),
        description="Every id of the collection exactly once, first = order 0"
    )


class SuccessResponse(BaseModel):
    """Returned by delete and reorder endpoints."""
    success: bool = True


class UploadResponse(BaseModel):
    """Public URL and storage location of an uploaded image."""
    url: str = Field(..., description="Publicly retrievable URL")
    path: str = Field(..., description="Path within the bucket, e.g. projects/1700000000000-ab12.png")
    bucket: str = Field(..., description="Bucket the file was stored in")


class DeleteUploadRequest(BaseModel):
    """
    Identifies an uploaded image to remove.

    The bucket is resolved from `folder` the same way uploads are routed
    when it isn't given explicitly.
    """
    path: NonEmptyStr
    bucket: str | None = None
    folder: str | None = None
