"""Example: run both schedule generators without Flask or MySQL."""

from datetime import date

from src.compliance_portal.compliance_portal.scheduling.generator import generate_future_schedule
from src.compliance_portal.compliance_portal.scheduling.training_calendar import generate_training_calendar


def main():
    rows = generate_future_schedule(
        ["Fire Safety", "POSH Awareness"],
        holidays=["2026-01-26", "15/08/2026"],
        count_per_title=4,
        seed_prefix="client1",
        from_date=date(2025, 12, 1),
    )
    for row in rows:
        print(row.scheduled_label, row.title)

    calendar = generate_training_calendar("future", training_names=["First Aid"], committee_names=["Safety Committee"])
    for row in calendar.rows:
        print(row.date_label, row.type.value, row.name)


if __name__ == "__main__":
    main()
