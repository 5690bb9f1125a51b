"""Pydantic schemas for the category editor form."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from backoffice.utils.slug_generator import RESERVED_SLUGS, SLUG_PATTERN


class CategorySchema(BaseModel):
    """Shape of a submitted category record."""

    model_config = ConfigDict(str_strip_whitespace=True, extra='ignore')

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    slug: str = Field(default="", max_length=255, description="URL-safe name")
    label: Optional[str] = Field(default="", max_length=255)
    description: Optional[str] = Field(default="")
    parent_id: Optional[int] = Field(default=None, description="Parent category id")
    tools: List[int] = Field(default_factory=list, description="Associated tool ids")

    @field_validator('slug')
    @classmethod
    def validate_slug(cls, value: str) -> str:
        if value and not SLUG_PATTERN.match(value):
            raise ValueError(
                "Slug may only contain lowercase letters, numbers and single hyphens"
            )
        if value in RESERVED_SLUGS:
            raise ValueError(f'Slug "{value}" is reserved')
        return value

    @field_validator('parent_id', mode='before')
    @classmethod
    def empty_parent_to_none(cls, value):
        # "Clear" on the parent selector submits an empty string
        if value == "":
            return None
        return value

    @field_validator('label', 'description', mode='before')
    @classmethod
    def none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator('tools', mode='before')
    @classmethod
    def none_tools_to_list(cls, value):
        return [] if value is None else value

    @field_validator('tools')
    @classmethod
    def dedupe_tools(cls, value: List[int]) -> List[int]:
        return list(dict.fromkeys(value))


class ComputedFieldsRequest(BaseModel):
    """Request body for previewing derived slug and label."""

    name: str = Field(default="")
    category_slug: Optional[str] = Field(default=None, description="Slug of the record being edited")


def format_validation_errors(error: ValidationError) -> dict:
    """Map a pydantic ValidationError to ``{field: message}`` (first message per field)."""
    errors = {}
    for item in error.errors():
        field = str(item['loc'][0]) if item.get('loc') else '__root__'
        message = item.get('msg', 'Invalid value')
        # pydantic prefixes custom ValueError messages
        if message.startswith('Value error, '):
            message = message[len('Value error, '):]
        errors.setdefault(field, message)
    return errors
