import logging
from datetime import datetime, timedelta

from cpm.utils.graph import build_dependency_graph

logger = logging.getLogger(__name__)

# Day 0 of every schedule unless the caller supplies its own epoch
DEFAULT_EPOCH = datetime(2024, 1, 1)

SCHEDULING_ORDERS = ("topological", "insertion")


class ActivitySchedule:
    """Start and end of one activity, as day offsets and as dates."""

    def __init__(self, name, duration, start_day, epoch=DEFAULT_EPOCH):
        self.name = name
        self.duration = duration
        self.start_day = start_day
        self.end_day = start_day + duration
        self.start_date = epoch + timedelta(days=self.start_day)
        self.end_date = epoch + timedelta(days=self.end_day)

    def to_dict(self):
        return {
            "name": self.name,
            "duration": self.duration,
            "start_day": self.start_day,
            "end_day": self.end_day,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
        }

    def __eq__(self, other):
        if not isinstance(other, ActivitySchedule):
            return NotImplemented
        return (
            self.name == other.name
            and self.duration == other.duration
            and self.start_date == other.start_date
            and self.end_date == other.end_date
        )

    def __repr__(self):
        return (
            f"ActivitySchedule(name={self.name}, start_day={self.start_day}, "
            f"end_day={self.end_day})"
        )


def schedule_activities(activities, graph=None, epoch=DEFAULT_EPOCH, order="topological"):
    """
    Assign a start and end to each activity from its predecessors' end dates.

    An activity with no resolvable predecessor starts at the epoch. Any other
    activity starts when the latest of its predecessors ends.

    With order="topological" activities are processed in dependency order, so
    every declared predecessor is taken into account. With order="insertion"
    activities are processed in declaration order in a single pass, and a
    predecessor declared after its dependent contributes nothing.

    Args:
        activities: Ordered sequence of Activity objects with unique names
        graph: Optional DependencyGraph (built if needed)
        epoch: Datetime of day 0
        order: "topological" or "insertion"

    Returns:
        dict: Activity name -> ActivitySchedule, in declaration order
    """
    if order not in SCHEDULING_ORDERS:
        raise ValueError(
            f"Invalid scheduling order: {order}. Must be one of {list(SCHEDULING_ORDERS)}"
        )

    by_name = {}
    for activity in activities:
        by_name.setdefault(activity.name, activity)

    if order == "topological":
        if graph is None:
            graph = build_dependency_graph(by_name.values())
        sequence = [by_name[name] for name in graph.topological_order()]
    else:
        sequence = list(by_name.values())

    scheduled = {}
    for activity in sequence:
        # Find maximum end of predecessors scheduled so far
        latest_end = 0
        for pred_name in activity.predecessors:
            pred = scheduled.get(pred_name)
            if pred is None:
                if order == "insertion" and pred_name in by_name:
                    logger.debug(
                        "Activity %s is scheduled before its predecessor %s",
                        activity.name,
                        pred_name,
                    )
                continue
            if pred.end_day > latest_end:
                latest_end = pred.end_day

        scheduled[activity.name] = ActivitySchedule(
            activity.name, activity.duration, latest_end, epoch
        )

    return {name: scheduled[name] for name in by_name}
