import matplotlib.pyplot as plt
from matplotlib.patches import Patch


def _rows(engine):
    """Scheduled activities in declaration order."""
    rows = []
    for name, entry in engine.schedule.items():
        rows.append((name, entry, engine.is_critical(name)))
    return rows


def create_gantt_chart(engine, filename=None, show=True):
    """
    Create a Gantt chart of the computed schedule.

    One bar is drawn per activity, in declaration order from top to bottom.
    Activities on a critical path are drawn in red.

    Args:
        engine: The CPMEngine instance
        filename: Optional filename to save the chart
        show: Whether to display the chart (default: True)

    Returns:
        The matplotlib figure
    """
    rows = _rows(engine)
    max_days = engine.max_days()

    fig, ax_gantt = plt.subplots(figsize=(14, max(3, 0.5 * len(rows) + 2)))

    for i, (name, entry, critical) in enumerate(rows):
        color = "red" if critical else "blue"
        ax_gantt.barh(
            i,
            entry.duration,
            left=entry.start_day,
            color=color,
            alpha=0.6,
            edgecolor="black",
        )

        # Add duration label
        ax_gantt.text(
            entry.start_day + entry.duration / 2,
            i,
            f"{entry.duration}d",
            ha="center",
            va="center",
            color="black",
            fontsize=8,
        )

    # Set up the axes
    ax_gantt.set_yticks(range(len(rows)))
    ax_gantt.set_yticklabels([name for name, _, _ in rows])
    ax_gantt.invert_yaxis()
    ax_gantt.set_xlim(0, max_days)
    ax_gantt.set_xticks(range(0, max_days + 1, max(1, max_days // 20)))

    title = "Project Schedule"
    if engine.analysis is not None:
        title += f" (Critical Path: {engine.analysis.max_duration} days)"
    ax_gantt.set_title(title)
    ax_gantt.set_xlabel(f"Days from {engine.epoch.strftime('%Y-%m-%d')}")
    ax_gantt.grid(axis="x", alpha=0.3)

    legend_elements = [
        Patch(facecolor="red", alpha=0.6, label="Critical Activity"),
        Patch(facecolor="blue", alpha=0.6, label="Other Activity"),
    ]
    ax_gantt.legend(handles=legend_elements, loc="upper right")

    plt.tight_layout()

    if filename:
        plt.savefig(filename, dpi=300, bbox_inches="tight")

    if show:
        plt.show()

    return fig


def create_text_gantt(engine, bar="#", empty="."):
    """
    Render the schedule as a fixed-width day grid.

    Each row holds the activity name, its duration, and one cell per day of
    the chart; cells covered by the activity hold the bar character.

    Args:
        engine: The CPMEngine instance
        bar: Character for days the activity is running
        empty: Character for the other days

    Returns:
        str: The rendered grid, or an empty string when nothing is scheduled
    """
    rows = _rows(engine)
    if not rows:
        return ""

    max_days = engine.max_days()
    name_width = max(len("Activity"), max(len(name) for name, _, _ in rows))

    header = f"{'Activity':<{name_width}} {'Dur':>3} "
    header += "".join(str((day + 1) % 10) for day in range(max_days))
    lines = [header]

    for name, entry, critical in rows:
        cells = "".join(
            bar if entry.start_day <= day < entry.end_day else empty
            for day in range(max_days)
        )
        marker = " *" if critical else ""
        lines.append(f"{name:<{name_width}} {entry.duration:>3} {cells}{marker}")

    return "\n".join(lines)
