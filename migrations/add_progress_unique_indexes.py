"""
Migration: enforce one progress row per (user, quiz) and per (user, stage).

Databases created before the unique constraints existed may already hold
duplicates from double submits. Those are collapsed first:
- user_quiz_progress: keep the newest row, with attempts summed and the best
  score over all duplicates.
- user_learning_stage_progress: keep the earliest completion.
Then unique indexes are created (IF NOT EXISTS, so re-running is safe).
"""

import sqlite3
import os


def _table_exists(cursor, name: str) -> bool:
    cursor.execute("SELECT name FROM sqlite_master WHERE type='table' AND name=?", (name,))
    return cursor.fetchone() is not None


def run_migration():
    db_path = os.getenv("DATABASE_URL", "sqlite:///./learning.db").replace("sqlite:///", "")
    conn = None
    try:
        conn = sqlite3.connect(db_path)
        cursor = conn.cursor()

        if _table_exists(cursor, "user_quiz_progress"):
            cursor.execute(
                """
                UPDATE user_quiz_progress
                SET attempts_count = (
                        SELECT SUM(d.attempts_count) FROM user_quiz_progress d
                        WHERE d.user_id = user_quiz_progress.user_id AND d.quiz_id = user_quiz_progress.quiz_id),
                    best_score = (
                        SELECT MAX(d.best_score) FROM user_quiz_progress d
                        WHERE d.user_id = user_quiz_progress.user_id AND d.quiz_id = user_quiz_progress.quiz_id)
                WHERE rowid IN (
                    SELECT MAX(rowid) FROM user_quiz_progress GROUP BY user_id, quiz_id HAVING COUNT(*) > 1)
                """
            )
            cursor.execute(
                """
                DELETE FROM user_quiz_progress
                WHERE rowid NOT IN (SELECT MAX(rowid) FROM user_quiz_progress GROUP BY user_id, quiz_id)
                """
            )
            print(f"user_quiz_progress: removed {cursor.rowcount} duplicate rows")
            cursor.execute(
                "CREATE UNIQUE INDEX IF NOT EXISTS uq_user_quiz_progress ON user_quiz_progress (user_id, quiz_id)"
            )
        else:
            print("user_quiz_progress table not found. Skipping.")

        if _table_exists(cursor, "user_learning_stage_progress"):
            cursor.execute(
                """
                DELETE FROM user_learning_stage_progress
                WHERE rowid NOT IN (
                    SELECT MIN(rowid) FROM user_learning_stage_progress GROUP BY user_id, learning_stage_id)
                """
            )
            print(f"user_learning_stage_progress: removed {cursor.rowcount} duplicate rows")
            cursor.execute(
                "CREATE UNIQUE INDEX IF NOT EXISTS uq_user_stage_progress "
                "ON user_learning_stage_progress (user_id, learning_stage_id)"
            )
        else:
            print("user_learning_stage_progress table not found. Skipping.")

        conn.commit()
        print("Migration add_progress_unique_indexes completed")

    except sqlite3.Error as e:
        print(f"Error during migration: {e}")
        if conn:
            conn.rollback()
    finally:
        if conn:
            conn.close()


if __name__ == "__main__":
    run_migration()
