"""
Seed a sample course so the API has something to serve.

Usage:
    python scripts/seed_content.py            # uses DATABASE_URL
    python scripts/seed_content.py --stages 6
    python scripts/seed_content.py --reset    # wipes all tables first

Creates the "python-basics" course with N stages, one quiz per stage (all
using the Python Variables question set). Re-running is a no-op.
"""

import argparse
import sys
from pathlib import Path
from uuid import uuid4

project_root = Path(__file__).resolve().parent.parent
for p in (project_root, project_root / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from api.config import SessionLocal, create_db, reset_db  # noqa: E402
from api.models.models import Course, LearningStage, Quiz  # noqa: E402
from learning.samples import PYTHON_VARIABLES_QUIZ  # noqa: E402

SLUG = "python-basics"


def seed(stages: int, reset: bool = False) -> None:
    if reset:
        reset_db()
    else:
        create_db()
    db = SessionLocal()
    try:
        if db.query(Course).filter(Course.slug == SLUG).first():
            print(f"course '{SLUG}' already exists, skipping")
            return
        course_id = str(uuid4())
        db.add(
            Course(
                id=course_id,
                slug=SLUG,
                name="Python Basics",
                description="Variables, types and the first steps in Python.",
                difficulty="Beginner",
                duration="2h",
                stages_count=stages,
            )
        )
        for idx in range(1, stages + 1):
            db.add(LearningStage(id=str(uuid4()), course_id=course_id, order_index=idx, name=f"Lesson {idx}"))
            db.add(
                Quiz(
                    id=str(uuid4()),
                    course_id=course_id,
                    order_index=idx,
                    name=f"{PYTHON_VARIABLES_QUIZ['title']} {idx}",
                    description=PYTHON_VARIABLES_QUIZ["description"],
                    questions=PYTHON_VARIABLES_QUIZ["questions"],
                    passing_score=PYTHON_VARIABLES_QUIZ["passingScore"],
                    time_limit=PYTHON_VARIABLES_QUIZ["timeLimit"],
                )
            )
        db.commit()
        print(f"seeded course '{SLUG}' with {stages} stages")
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--stages", type=int, default=6)
    parser.add_argument("--reset", action="store_true", help="drop and recreate every table first")
    args = parser.parse_args()
    seed(args.stages, reset=args.reset)
