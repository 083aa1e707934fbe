import logging
from typing import List, Dict, Optional, Iterator, Union

from cpm.domain.activity import Activity, ValidationError

logger = logging.getLogger(__name__)


class ActivityRegistry:
    """
    Ordered collection of declared activities.

    Activities are only ever appended. Iteration order is declaration order,
    which the insertion-order scheduler and the report rely on. A name index
    maps each activity name to the position of its first declaration.
    """

    def __init__(self, allow_duplicate_names: bool = False):
        """
        Initialize an empty registry.

        Args:
            allow_duplicate_names: Keep later activities that reuse a name as
                distinct entries instead of rejecting them. The name keeps
                resolving to the first declaration.
        """
        self.allow_duplicate_names = allow_duplicate_names
        self._activities: List[Activity] = []
        self._index: Dict[str, int] = {}

    def add_activity(
        self,
        name: str,
        predecessor_text: Optional[str],
        duration: Union[int, str],
    ) -> Activity:
        """
        Validate and append a new activity.

        Args:
            name: Activity name
            predecessor_text: Raw predecessor text ("", "None" or "A,B")
            duration: Elapsed time in days

        Returns:
            Activity: The appended activity

        Raises:
            ValidationError: If the input is invalid; the registry is unchanged
        """
        activity = Activity(name, duration, predecessor_text)
        return self.add(activity)

    def add(self, activity: Activity) -> Activity:
        """Append an already constructed activity."""
        if not isinstance(activity, Activity):
            raise ValidationError("Only Activity instances can be registered")

        if activity.name in self._index:
            if not self.allow_duplicate_names:
                raise ValidationError(f"Activity {activity.name} is already declared")
            logger.warning(
                "Activity %s is declared more than once; later declarations are "
                "kept but the name resolves to the first one",
                activity.name,
            )
        else:
            self._index[activity.name] = len(self._activities)

        self._activities.append(activity)
        return activity

    def get(self, name: str) -> Optional[Activity]:
        """Return the first activity declared under name, or None."""
        position = self._index.get(name)
        if position is None:
            return None
        return self._activities[position]

    def index_of(self, name: str) -> Optional[int]:
        return self._index.get(name)

    def names(self) -> List[str]:
        """Distinct activity names in declaration order."""
        return [activity.name for activity in self.unique_activities()]

    @property
    def activities(self) -> List[Activity]:
        """All entries, duplicates included, in declaration order."""
        return self._activities.copy()

    def unique_activities(self) -> List[Activity]:
        """The first declaration of each name, in declaration order."""
        return [
            activity
            for position, activity in enumerate(self._activities)
            if self._index[activity.name] == position
        ]

    def duplicates(self) -> List[Activity]:
        """Entries shadowed by an earlier declaration of the same name."""
        return [
            activity
            for position, activity in enumerate(self._activities)
            if self._index[activity.name] != position
        ]

    def __contains__(self, name) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[Activity]:
        return iter(self._activities)

    def __len__(self) -> int:
        return len(self._activities)

    def __repr__(self) -> str:
        names = ", ".join(activity.name for activity in self._activities)
        return f"ActivityRegistry(activities=[{names}])"
