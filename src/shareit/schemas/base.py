"""Shared schema configuration.

All request and response bodies use camelCase field names on the wire while
keeping snake_case attribute names in Python.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema that reads and writes camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def clean_text(value: str, field_name: str) -> str:
    """Collapse runs of whitespace and reject blank text.

    Raises:
        ValueError: If the text is empty or whitespace only
    """
    if not value or value.isspace():
        raise ValueError(f"{field_name} cannot be empty or whitespace only")
    return " ".join(value.split())
