from typing import List, Dict, Any, Optional, Union


NO_PREDECESSOR_TOKEN = "none"


class CPMError(Exception):
    """Base class for errors raised by the CPM engine."""

    pass


class ValidationError(CPMError):
    """Exception raised when an activity fails input validation."""

    pass


def parse_predecessors(text: Optional[str]) -> List[str]:
    """
    Normalize free-text predecessor input into a list of activity names.

    The text is split on commas and each item is trimmed. Empty items are
    dropped. Empty text, or the literal token "none" in any case, means the
    activity has no predecessors. Repeated names are kept once, in order of
    first appearance.

    Args:
        text: Raw predecessor text, e.g. "A, B" or "None"

    Returns:
        List of predecessor names (possibly empty)
    """
    if text is None:
        return []

    if not isinstance(text, str):
        raise ValidationError("Predecessor text must be a string")

    stripped = text.strip()
    if not stripped or stripped.lower() == NO_PREDECESSOR_TOKEN:
        return []

    names = []
    for item in stripped.split(","):
        item = item.strip()
        if not item or item.lower() == NO_PREDECESSOR_TOKEN:
            continue
        if item not in names:
            names.append(item)
    return names


def parse_duration(value: Union[int, float, str]) -> int:
    """
    Convert an elapsed-time value into a positive whole number of days.

    Args:
        value: An int, an integral float, or a string holding a positive integer

    Returns:
        The duration in days

    Raises:
        ValidationError: If the value is not a positive integer
    """
    if isinstance(value, bool):
        raise ValidationError("Duration must be a positive integer number of days")

    if isinstance(value, str):
        text = value.strip()
        try:
            days = int(text)
        except ValueError:
            raise ValidationError(
                f"Duration must be a positive integer number of days, got {value!r}"
            )
    elif isinstance(value, int):
        days = value
    elif isinstance(value, float) and value.is_integer():
        days = int(value)
    else:
        raise ValidationError(
            f"Duration must be a positive integer number of days, got {value!r}"
        )

    if days <= 0:
        raise ValidationError(
            f"Duration must be a positive integer number of days, got {value!r}"
        )
    return days


class Activity:
    """
    Represents a named unit of work with a duration and zero or more predecessors.

    The name is the natural key of an activity. The raw predecessor text is kept
    verbatim next to its normalized list so it can be shown back to the user.
    """

    def __init__(
        self,
        name: str,
        duration: Union[int, float, str],
        predecessor_text: Optional[str] = "",
    ):
        """
        Initialize a new Activity.

        Args:
            name: Unique name of the activity
            duration: Elapsed time in days (positive integer, or a string holding one)
            predecessor_text: Comma-separated predecessor names, "None" or empty

        Raises:
            ValidationError: If any input validation fails
        """
        # Validate name
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Activity name must be a non-empty string")
        self.name = name.strip()

        # Names must be expressible in predecessor text
        if "," in self.name:
            raise ValidationError(f"Activity name {self.name!r} cannot contain a comma")
        if self.name.lower() == NO_PREDECESSOR_TOKEN:
            raise ValidationError(
                f"Activity name {self.name!r} is reserved for 'no predecessors'"
            )

        self.duration = parse_duration(duration)

        self.predecessor_text = predecessor_text if predecessor_text else ""
        self.predecessors = parse_predecessors(self.predecessor_text)

    @property
    def id(self) -> str:
        """Activities are keyed by name."""
        return self.name

    def has_predecessors(self) -> bool:
        return bool(self.predecessors)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert activity to a dictionary representation.

        Returns:
            dict: Dictionary representation of the activity
        """
        return {
            "name": self.name,
            "duration": self.duration,
            "predecessor_text": self.predecessor_text,
            "predecessors": self.predecessors.copy(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Activity":
        """
        Create an activity from a dictionary representation.

        Args:
            data: Dictionary with "name", "duration" and optionally "predecessor_text"

        Returns:
            Activity: New activity instance
        """
        predecessor_text = data.get("predecessor_text")
        if predecessor_text is None and data.get("predecessors"):
            predecessor_text = ",".join(data["predecessors"])
        return cls(
            name=data["name"],
            duration=data["duration"],
            predecessor_text=predecessor_text or "",
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Activity):
            return NotImplemented
        return (
            self.name == other.name
            and self.duration == other.duration
            and self.predecessors == other.predecessors
        )

    def __hash__(self):
        return hash((self.name, self.duration, tuple(self.predecessors)))

    def __repr__(self) -> str:
        preds = ", ".join(self.predecessors) if self.predecessors else "None"
        return f"Activity(name={self.name}, duration={self.duration}, predecessors=[{preds}])"
