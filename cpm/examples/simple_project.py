from datetime import datetime
from cpm.services.engine import CPMEngine
from cpm.visualization.gantt import create_gantt_chart, create_text_gantt


def create_sample_project(filename=None, show=False):
    # Activity, predecessors, elapsed time in days
    activities = [
        ("A", "None", 4),
        ("B", "None", 3),
        ("C", "A", 5),
        ("D", "A,B", 2),
        ("E", "C,D", 6),
        ("F", "D", 3),
        ("G", "E,F", 2),
    ]

    engine = CPMEngine(epoch=datetime(2024, 1, 1))
    for name, predecessors, duration in activities:
        engine.add_activity(name, predecessors, duration)

    if filename:
        create_gantt_chart(engine, filename, show=show)

    # Print report
    print(engine.generate_report())
    print()
    print(create_text_gantt(engine))

    return engine


if __name__ == "__main__":
    create_sample_project()
