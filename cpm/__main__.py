"""
CPM Gantt Engine
================

Compute a schedule and its critical path(s) from the command line.
"""

import argparse
import logging
import sys

from .domain.activity import ValidationError
from .services.engine import CPMEngine
from .services.critical_path import DEFAULT_MAX_PATHS
from .examples.simple_project import create_sample_project
from .visualization.gantt import create_gantt_chart, create_text_gantt
from .visualization.network import create_network_diagram


def parse_activity(value):
    """Split a NAME:PREDECESSORS:ET argument into its three fields."""
    parts = value.rsplit(":", 2)
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(
            f"Activity must look like NAME:PREDECESSORS:ET, got {value!r}"
        )
    return tuple(parts)


def positive_int(value):
    """argparse type for limits that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got {value!r}")
    return number


def build_parser():
    parser = argparse.ArgumentParser(description="Critical Path Method scheduler")
    parser.add_argument(
        "--example", action="store_true", help="Run the example project"
    )
    parser.add_argument(
        "--activity",
        "-a",
        action="append",
        type=parse_activity,
        default=[],
        metavar="NAME:PREDECESSORS:ET",
        help="Declare an activity, e.g. C:A,B:2 or A:None:5 (repeatable)",
    )
    parser.add_argument(
        "--order",
        choices=["topological", "insertion"],
        default="topological",
        help="Order in which activities are scheduled",
    )
    parser.add_argument(
        "--unresolved",
        choices=["ignore", "warn", "reject"],
        default="ignore",
        help="What to do with predecessors that name no declared activity",
    )
    parser.add_argument(
        "--allow-duplicates",
        action="store_true",
        help="Keep activities that reuse an existing name",
    )
    parser.add_argument(
        "--max-paths",
        type=positive_int,
        default=DEFAULT_MAX_PATHS,
        help="Maximum number of paths to enumerate",
    )
    parser.add_argument(
        "--max-depth",
        type=positive_int,
        default=None,
        help="Maximum number of activities on one path",
    )
    parser.add_argument("--gantt", type=str, help="Save a Gantt chart to this file")
    parser.add_argument(
        "--network", type=str, help="Save a network diagram to this file"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.example:
        print("Running example project...")
        engine = create_sample_project(args.gantt)
        if args.gantt:
            print(f"Gantt chart saved to {args.gantt}")
        if args.network:
            create_network_diagram(engine, args.network, show=False)
            print(f"Network diagram saved to {args.network}")
        return 0

    if not args.activity:
        parser.print_help()
        return 1

    engine = CPMEngine(
        scheduling_order=args.order,
        unresolved_predecessors=args.unresolved,
        allow_duplicate_names=args.allow_duplicates,
        max_paths=args.max_paths,
        max_depth=args.max_depth,
    )

    for name, predecessors, duration in args.activity:
        try:
            engine.add_activity(name, predecessors, duration)
        except ValidationError as e:
            print(f"Invalid activity {name!r}: {e}", file=sys.stderr)
            return 1

    print(engine.generate_report())
    if engine.has_error():
        return 1

    print()
    print(create_text_gantt(engine))

    if args.gantt:
        create_gantt_chart(engine, args.gantt, show=False)
        print(f"Gantt chart saved to {args.gantt}")
    if args.network:
        create_network_diagram(engine, args.network, show=False)
        print(f"Network diagram saved to {args.network}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
