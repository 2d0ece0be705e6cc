"""Shared pydantic base for medinsight value objects.

Fields use snake_case in Python and camelCase on the wire, so existing
dashboard consumers keep reading ``detectedKeywords``, ``healthScore`` etc.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Immutable model serialized with camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_json_dict(self) -> dict:
        """Dump with wire aliases, as the HTTP layer returns it."""
        return self.model_dump(mode="json", by_alias=True)
