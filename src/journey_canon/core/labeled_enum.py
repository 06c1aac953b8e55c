"""Base class for labeled enumerations with values and human-readable labels.

This module provides the LabeledEnum base class for creating enumerations
that store both integer values and descriptive labels. The labels double as
message templates for codebooks whose entries are reported to end users.
"""

from enum import Enum
from typing import Optional


class LabeledEnum(Enum):
    """Base class for enumerations with values and labels.

    Each enum member is defined as a tuple of (value, label):
        MEMBER_NAME = (1, "Descriptive Label")

    The enum provides:
    - value: The integer value
    - label: The human-readable label
    - code: The member name in CamelCase, stable for machine consumers

    Class Methods:
    - from_code(code): Look up an enum member by its CamelCase code

    Example:
        class Edge(LabeledEnum):
            START = (1, "Start")
            END = (2, "End")

        member = Edge.START
        print(member.value)  # 1
        print(member.label)  # "Start"
        print(member.code)  # "Start"

        found = Edge.from_code("End")  # Returns Edge.END
    """

    def __new__(cls, value: int, label: str) -> "LabeledEnum":
        """Create a new enum member with value and label.

        Args:
            value: The integer value for the enum member
            label: The human-readable label for the enum member
        """
        obj = object.__new__(cls)
        obj._value_ = value
        obj._label_ = label
        return obj

    @property
    def label(self) -> str:
        """Get the human-readable label for this enum member."""
        return self._label_

    @property
    def code(self) -> str:
        """Get the CamelCase code for this enum member (MISSING_DRIVER -> MissingDriver)."""
        return "".join(part.capitalize() for part in self.name.split("_"))

    @classmethod
    def from_code(cls, code: str) -> Optional["LabeledEnum"]:
        """Look up an enum member by its CamelCase code."""
        for member in cls:
            if member.code == code:
                return member
        return None
