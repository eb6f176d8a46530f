"""Base model class for all tablecmd models with serialization support."""

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class TableCmdBaseModel(BaseModel):
    """Base model for all tablecmd models with built-in serialization.

    Provides common functionality for all tablecmd models including:
    - Serialization to dictionary via to_dict()
    - Consistent configuration
    - Proper handling of nested models

    Models are immutable; derived copies are made with ``model_copy``.
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        use_enum_values=False,
        frozen=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to dictionary for serialization.

        Recursively converts nested models and enums to plain values.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        data = self.model_dump(by_alias=False, exclude_none=True)

        def convert_nested(obj):
            if isinstance(obj, TableCmdBaseModel):
                return obj.to_dict()
            elif isinstance(obj, dict):
                return {k: convert_nested(v) for k, v in obj.items()}
            elif isinstance(obj, (list, tuple)):
                return [convert_nested(item) for item in obj]
            elif isinstance(obj, Enum):
                return obj.value
            return obj

        return convert_nested(data)
