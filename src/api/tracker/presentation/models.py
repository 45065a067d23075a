"""Shared base model for Tracker API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exchanging field names as camelCase on the wire.

    Fields may still be populated by their Python names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
