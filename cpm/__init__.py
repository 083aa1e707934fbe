"""
CPM Gantt Engine
================

A minimal Critical Path Method engine: declare activities with durations and
predecessors, then read back a day-by-day schedule and the critical path(s).

Available modules:
- domain.activity: Activity and input parsing
- domain.registry: ordered activity registry
- domain.path: enumerated root-to-leaf paths
- utils.graph: dependency graph construction and cycle detection
- services.scheduler: start/end date derivation
- services.critical_path: path enumeration and critical path analysis
- services.engine: the engine tying the pieces together
- visualization: Gantt chart and network diagram rendering
"""

from cpm.domain.activity import (
    Activity,
    CPMError,
    ValidationError,
    parse_duration,
    parse_predecessors,
)
from cpm.domain.registry import ActivityRegistry
from cpm.domain.path import Path
from cpm.utils.graph import (
    DependencyGraph,
    build_dependency_graph,
    CyclicDependencyError,
    UnresolvedPredecessorError,
)
from cpm.services.scheduler import ActivitySchedule, schedule_activities, DEFAULT_EPOCH
from cpm.services.critical_path import PathAnalysis, PathLimitError, analyze_paths
from cpm.services.engine import CPMEngine

__all__ = [
    "Activity",
    "CPMError",
    "ValidationError",
    "parse_duration",
    "parse_predecessors",
    "ActivityRegistry",
    "Path",
    "DependencyGraph",
    "build_dependency_graph",
    "CyclicDependencyError",
    "UnresolvedPredecessorError",
    "ActivitySchedule",
    "schedule_activities",
    "DEFAULT_EPOCH",
    "PathAnalysis",
    "PathLimitError",
    "analyze_paths",
    "CPMEngine",
]
