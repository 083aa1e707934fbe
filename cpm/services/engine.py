import logging
import math

from cpm.domain.registry import ActivityRegistry
from cpm.domain.activity import CPMError
from cpm.utils.graph import build_dependency_graph, UNRESOLVED_POLICIES
from cpm.services.scheduler import (
    schedule_activities,
    DEFAULT_EPOCH,
    SCHEDULING_ORDERS,
)
from cpm.services.critical_path import analyze_paths, DEFAULT_MAX_PATHS

logger = logging.getLogger(__name__)

# Minimum width of the Gantt day grid
MIN_CHART_DAYS = 20


class CPMEngine:
    def __init__(
        self,
        epoch=DEFAULT_EPOCH,
        scheduling_order="topological",
        unresolved_predecessors="ignore",
        allow_duplicate_names=False,
        max_paths=DEFAULT_MAX_PATHS,
        max_depth=None,
    ):
        if scheduling_order not in SCHEDULING_ORDERS:
            raise ValueError(
                f"Invalid scheduling order: {scheduling_order}. "
                f"Must be one of {list(SCHEDULING_ORDERS)}"
            )
        if unresolved_predecessors not in UNRESOLVED_POLICIES:
            raise ValueError(
                f"Invalid unresolved predecessor policy: {unresolved_predecessors}. "
                f"Must be one of {list(UNRESOLVED_POLICIES)}"
            )
        if max_paths is not None and max_paths < 1:
            raise ValueError("max_paths must be a positive integer or None")
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be a positive integer or None")

        self.epoch = epoch
        self.scheduling_order = scheduling_order
        self.unresolved_predecessors = unresolved_predecessors
        self.max_paths = max_paths
        self.max_depth = max_depth

        self.registry = ActivityRegistry(allow_duplicate_names=allow_duplicate_names)

        # Derived state, rebuilt by recompute()
        self.graph = None
        self.schedule = {}
        self.analysis = None
        self.error = None

    @property
    def activities(self):
        return self.registry.activities

    def add_activity(self, name, predecessor_text, duration):
        """
        Add an activity and recompute the schedule and path analysis.

        Raises:
            ValidationError: If the activity is invalid; nothing is changed
        """
        self.registry.add_activity(name, predecessor_text, duration)
        self.recompute()
        return self

    def set_epoch(self, epoch):
        """Set the date of day 0"""
        self.epoch = epoch
        self.recompute()
        return self

    def recompute(self):
        """
        Rebuild the dependency graph, the schedule and the path analysis.

        Errors that make the analysis impossible (a cycle, a rejected
        unresolved predecessor, too many paths) are logged and kept in
        self.error; the derived state is then empty.
        """
        self.graph = None
        self.schedule = {}
        self.analysis = None
        self.error = None

        activities = self.registry.unique_activities()
        if not activities:
            return self

        try:
            graph = build_dependency_graph(
                activities, unresolved=self.unresolved_predecessors
            )
            schedule = schedule_activities(
                activities, graph, epoch=self.epoch, order=self.scheduling_order
            )
            analysis = analyze_paths(
                activities,
                graph.forward_edges,
                graph.roots,
                max_paths=self.max_paths,
                max_depth=self.max_depth,
            )
        except CPMError as e:
            logger.error("Schedule could not be computed: %s", e)
            self.error = e
            return self

        self.graph = graph
        self.schedule = schedule
        self.analysis = analysis

        logger.debug(
            "Recomputed %d activities, project duration %d days",
            len(activities),
            self.project_duration(),
        )
        return self

    def has_error(self):
        return self.error is not None

    def get_schedule(self, name):
        return self.schedule.get(name)

    def project_duration(self):
        """Latest end day over all scheduled activities."""
        if not self.schedule:
            return 0
        return max(entry.end_day for entry in self.schedule.values())

    def project_end_date(self):
        if not self.schedule:
            return self.epoch
        return max(entry.end_date for entry in self.schedule.values())

    def max_days(self):
        """Width of the day grid used to draw the schedule."""
        span = (self.project_end_date() - self.epoch).total_seconds() / 86400
        return max(MIN_CHART_DAYS, math.ceil(span))

    def is_critical(self, name):
        return self.analysis is not None and self.analysis.is_critical(name)

    def generate_report(self):
        """
        Generate a text report of the schedule and the critical path analysis.

        Returns:
            str: A formatted string with the report
        """
        report = []
        report.append("CPM Project Schedule Report")
        report.append("===========================")
        report.append(f"Project Start Date: {self.epoch.strftime('%Y-%m-%d')}")

        if not len(self.registry):
            report.append("\nNo activities declared.")
            return "\n".join(report)

        if self.error is not None:
            report.append(f"\nError: {self.error}")

        report.append("\nActivities:")
        report.append(
            f"  {'Activity':<16}{'Predecessor':<16}{'ET':>4}{'Start':>7}{'End':>7}"
            f"  {'Start Date':<12}{'End Date':<12}"
        )
        for activity in self.registry:
            predecessors = ",".join(activity.predecessors) or "None"
            entry = self.schedule.get(activity.name)
            if entry is None or self.registry.get(activity.name) is not activity:
                report.append(
                    f"  {activity.name:<16}{predecessors:<16}{activity.duration:>4}"
                    f"{'-':>7}{'-':>7}"
                )
                continue
            marker = " *" if self.is_critical(activity.name) else ""
            report.append(
                f"  {activity.name:<16}{predecessors:<16}{activity.duration:>4}"
                f"{entry.start_day:>7}{entry.end_day:>7}"
                f"  {entry.start_date.strftime('%Y-%m-%d'):<12}"
                f"{entry.end_date.strftime('%Y-%m-%d'):<12}{marker}"
            )

        if self.schedule:
            report.append(
                f"\nProject End Date: {self.project_end_date().strftime('%Y-%m-%d')}"
            )
            report.append(f"Project Duration: {self.project_duration()} days")

        if self.graph is not None and self.graph.unresolved:
            report.append("\nUnresolved Predecessors:")
            for name, missing in self.graph.unresolved:
                report.append(f"  {name} depends on unknown activity {missing}")

        if self.analysis is not None:
            report.append(f"\nCritical Paths ({self.analysis.max_duration} days):")
            for path in self.analysis.critical_paths:
                report.append(f"  {' -> '.join(path.activities)}")

            report.append("\nOther Paths:")
            if not self.analysis.other_paths:
                report.append("  (none)")
            for path in self.analysis.other_paths:
                report.append(
                    f"  {' -> '.join(path.activities)} ({path.duration} days)"
                )

        return "\n".join(report)

    def to_dict(self):
        """Serializable snapshot of the registry and every derived result."""
        return {
            "epoch": self.epoch.isoformat(),
            "activities": [activity.to_dict() for activity in self.registry],
            "schedule": [entry.to_dict() for entry in self.schedule.values()],
            "analysis": self.analysis.to_dict() if self.analysis else None,
            "maxDays": self.max_days(),
            "error": str(self.error) if self.error else None,
        }
