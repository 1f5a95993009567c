"""Report kind discriminator."""

from enum import Enum


class ReportType(Enum):
    """Kinds of report in the module/class/method/project tree."""

    CLASS = "Class"
    CLASS_METHOD = "Class Method"
    MODULE_METHOD = "Module Method"
    MODULE = "Module"
    NESTED_METHOD = "Nested Method"
    PROJECT = "Project"

    @property
    def description(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "ReportType":
        """Look a member up by name, as stored in serialized reports."""
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"Unknown report type: {name!r}") from None
