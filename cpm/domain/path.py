from typing import List, Dict, Any

from cpm.domain.activity import CPMError


PATH_TYPES = ("critical", "other")


class PathError(CPMError):
    """Exception raised for errors in the Path class."""

    pass


class Path:
    """
    Represents one root-to-leaf path through the dependency graph.

    A path is either critical (its total duration equals the longest
    duration found in the project) or other.
    """

    def __init__(self, activities: List[str], duration: int, type: str = "other"):
        """
        Initialize a new Path.

        Args:
            activities: Ordered activity names from a root to a leaf
            duration: Sum of the activity durations along the path
            type: Path type ("critical" or "other")

        Raises:
            PathError: If any input validation fails
        """
        if not activities:
            raise PathError("A path must contain at least one activity")
        self.activities = list(activities)

        if not isinstance(duration, int) or isinstance(duration, bool) or duration < 0:
            raise PathError("Path duration must be a non-negative integer")
        self.duration = duration

        if type not in PATH_TYPES:
            raise PathError("Path type must be either 'critical' or 'other'")
        self.type = type

    @property
    def start(self) -> str:
        return self.activities[0]

    @property
    def end(self) -> str:
        return self.activities[-1]

    def is_critical(self) -> bool:
        return self.type == "critical"

    def edges(self) -> List[tuple]:
        """Consecutive (predecessor, successor) pairs along the path."""
        return list(zip(self.activities, self.activities[1:]))

    def __len__(self) -> int:
        return len(self.activities)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return (
            self.activities == other.activities
            and self.duration == other.duration
            and self.type == other.type
        )

    def __hash__(self):
        return hash((tuple(self.activities), self.duration, self.type))

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert path to a dictionary representation.

        Returns:
            dict: {"path": [...], "duration": n}
        """
        return {"path": self.activities.copy(), "duration": self.duration}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], type: str = "other") -> "Path":
        return cls(data["path"], data["duration"], type=type)

    def __repr__(self) -> str:
        activities_str = " -> ".join(self.activities)
        return f"Path(type={self.type}, duration={self.duration}, activities=[{activities_str}])"
