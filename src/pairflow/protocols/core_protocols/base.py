from typing import Protocol, runtime_checkable


@runtime_checkable
class Labelable(Protocol):
    """
    Protocol for objects that can have a human-readable label.

    Labels give meaningful names to streams and operators, which makes log
    records and reprs of longer pipelines easier to follow. When no label is
    assigned explicitly, objects fall back to a computed label or their class
    name.
    """

    @property
    def label(self) -> str:
        """
        Return the human-readable label for this object.

        Returns:
            str: The assigned label, a computed label, or the class name
        """
        ...

    @label.setter
    def label(self, label: str | None) -> None:
        """
        Set the label for this object.

        Args:
            label: New label, or None to fall back to the computed label
        """
        ...
