"""
Base Models for Practice Data

Practice catalogs and performance documents are exchanged with web and
mobile clients as camelCase JSON. These base classes keep Python field names
in snake_case while reading and writing the camelCase wire names.

Usage:
    class PracticeItem(FrozenWireModel):
        macedonian_alternates: list[str] = []

    item = PracticeItem.model_validate({"macedonianAlternates": ["здраво"]})
    item.model_dump(by_alias=True)  # {"macedonianAlternates": [...]}

Architecture:
    JSON (camelCase) → WireModel (snake_case attributes) → Service
    Service → WireModel.model_dump(by_alias=True) → JSON (camelCase)
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """
    Base model for data shared with other clients.

    Features:
        - alias_generator=to_camel: Reads and writes camelCase keys
        - populate_by_name=True: Python callers may use snake_case names
        - extra="ignore": Unknown keys from newer clients are dropped
        - validate_default=True: Validates default values
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        validate_default=True,
    )


class FrozenWireModel(WireModel):
    """
    Immutable variant of WireModel.

    Used for values that never change once created, such as catalog items
    and recorded attempts.
    """

    model_config = ConfigDict(frozen=True)
