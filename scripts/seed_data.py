"""
Seed Data Generator — fills a database with believable sample data.

Run: python scripts/seed_data.py [days] [--db PATH]
"""

import argparse
import random
import sys
from datetime import date, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from productivity_hub.data.context import AppContext
from productivity_hub.data.models import TaskCategory, TaskPriority


PROJECTS_TASKS = {
    "Website relaunch": ["Draft landing copy", "Review analytics report", "Fix nav on mobile"],
    "Quarterly report": ["Collect numbers from finance", "Write report summary", "Send report to team"],
    "Home": ["Buy milk", "Book dentist", "Renew car insurance"],
}

HABITS = ["Read 20 pages", "Walk 30 min", "No phone before 9"]

NOTES = [
    ("Report notes", "- [ ] Check Q3 revenue table\n- [ ] Ask Dana for churn numbers\nTODO: chart colors"),
    ("Groceries", "* eggs\n* spinach\n* coffee"),
    ("Ideas", "Weekly review on Fridays. Keep it to 15 minutes."),
]


def seed(days: int = 30, db_path: Path = None) -> None:
    ctx = AppContext.open(db_path)
    today = date.today()

    # ── Projects & Tasks ────────────────────────────────────────────────
    categories = [TaskCategory.WORK, TaskCategory.WORK, TaskCategory.PERSONAL, TaskCategory.URGENT]
    priorities = list(TaskPriority)
    task_count = 0
    for name, texts in PROJECTS_TASKS.items():
        project = ctx.projects.add(name)
        for text in texts:
            due = today + timedelta(days=random.randint(-3, 10)) if random.random() < 0.6 else None
            task = ctx.tasks.add(
                text,
                project_id=project.id,
                due_date=due.isoformat() if due else None,
                category=TaskCategory.PERSONAL if name == "Home" else random.choice(categories),
                priority=random.choice(priorities),
            )
            if random.random() < 0.4:
                ctx.tasks.toggle(task.id)
            task_count += 1

    # ── Notes in folders ────────────────────────────────────────────────
    work = ctx.folders.add("Work")
    ctx.folders.add("Personal")
    for title, content in NOTES:
        ctx.notes.add(title, content, folder_id=work.id if title == "Report notes" else None)

    # ── Habits: mostly-kept with the odd gap ────────────────────────────
    for name in HABITS:
        habit = ctx.habits.add(name)
        for offset in range(days, -1, -1):
            if random.random() < 0.75:
                ctx.habits.toggle(habit.id, (today - timedelta(days=offset)).isoformat())

    # ── Pomodoro sessions ───────────────────────────────────────────────
    sessions = 0
    for offset in range(days, -1, -1):
        day = (today - timedelta(days=offset)).isoformat()
        for _ in range(random.randint(0, 6)):
            ctx.pomodoro.log(day, random.choice([25, 25, 25, 50]))
            sessions += 1

    # ── Calendar ────────────────────────────────────────────────────────
    for offset, title in ((1, "Team sync"), (4, "Dentist"), (9, "Report deadline")):
        ctx.calendar.add(title, (today + timedelta(days=offset)).isoformat())

    ctx.close()
    print(f"Seeded {task_count} tasks, {len(HABITS)} habits and {sessions} pomodoros.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed sample data")
    parser.add_argument("days", nargs="?", type=int, default=30)
    parser.add_argument("--db", type=Path)
    args = parser.parse_args()
    seed(args.days, args.db)


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this script does:
#   Generates sample data so the dashboard, calendar and habit grid have
#   something to show on first launch.
#
# Key points:
#   - Goes through AppContext and the repositories, the same path the UI
#     uses, so every record is written in the real storage format.
#   - Habit days are toggled one by one, which also exercises the streak
#     recomputation.
