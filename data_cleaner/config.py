"""
Cleaning configuration.

The shell supplies a fresh CleaningConfig for every cleaning run. Keys are
accepted in the UI's camelCase or in snake_case.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class FillStrategy(str, Enum):
    """What to do with missing cells after duplicate removal."""
    KEEP = "keep"
    REMOVE = "remove"
    MEAN = "mean"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: Any) -> "FillStrategy":
        """Map an option literal to a strategy; unknown literals mean KEEP."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            logger.debug("Unrecognised fill strategy %r, treating as 'keep'", value)
            return cls.KEEP


_KEY_ALIASES = {
    "removeDuplicates": "remove_duplicates",
    "fillMissingValues": "fill_missing_values",
    "customFillValue": "custom_fill_value",
    "trimWhitespace": "trim_whitespace",
    "removeEmptyRows": "remove_empty_rows",
}


@dataclass(frozen=True)
class CleaningConfig:
    """Options for one cleaning run. Defaults match the upload form."""
    remove_duplicates: bool = True
    fill_missing_values: FillStrategy = FillStrategy.REMOVE
    custom_fill_value: str = ""
    trim_whitespace: bool = True
    remove_empty_rows: bool = True

    def __post_init__(self):
        object.__setattr__(
            self, "fill_missing_values", FillStrategy.parse(self.fill_missing_values)
        )
        if self.custom_fill_value is None:
            object.__setattr__(self, "custom_fill_value", "")

    @classmethod
    def disabled(cls) -> "CleaningConfig":
        """Config with every step switched off."""
        return cls(
            remove_duplicates=False,
            fill_missing_values=FillStrategy.KEEP,
            trim_whitespace=False,
            remove_empty_rows=False,
        )

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CleaningConfig":
        """Create from a dictionary (form payload or CLI); unknown keys are ignored."""
        if not data:
            return cls()
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key, key)
            if name in cls.__dataclass_fields__:
                kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "removeDuplicates": self.remove_duplicates,
            "fillMissingValues": self.fill_missing_values.value,
            "customFillValue": self.custom_fill_value,
            "trimWhitespace": self.trim_whitespace,
            "removeEmptyRows": self.remove_empty_rows,
        }
