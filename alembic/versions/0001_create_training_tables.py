"""Create training tables and change notifications

Revision ID: 0001_create_training_tables
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0001_create_training_tables"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TABLES = ("cycles", "workouts", "day_entries", "series_sets")


def upgrade() -> None:
    """Create the four per-user collections and their NOTIFY triggers."""
    op.execute("""
        CREATE TABLE cycles (
            id VARCHAR(255) PRIMARY KEY,
            user_id VARCHAR(255) NOT NULL,
            name VARCHAR(255) NOT NULL,
            start_date DATE NOT NULL,
            end_date DATE NOT NULL
        )
    """)

    # No foreign keys: referential integrity is kept by cascading deletes.
    op.execute("""
        CREATE TABLE workouts (
            id VARCHAR(255) PRIMARY KEY,
            user_id VARCHAR(255) NOT NULL,
            cycle_id VARCHAR(255) NOT NULL,
            name VARCHAR(255) NOT NULL,
            type VARCHAR(10) NOT NULL CHECK (type IN ('track', 'gym'))
        )
    """)

    op.execute("""
        CREATE TABLE day_entries (
            id VARCHAR(255) PRIMARY KEY,
            user_id VARCHAR(255) NOT NULL,
            workout_id VARCHAR(255) NOT NULL,
            date DATE NOT NULL,
            notes TEXT NOT NULL DEFAULT ''
        )
    """)

    # Track columns (run_time..is_last) and gym columns (reps, weight) are
    # NULL for the other variant.
    op.execute("""
        CREATE TABLE series_sets (
            id VARCHAR(255) PRIMARY KEY,
            user_id VARCHAR(255) NOT NULL,
            day_entry_id VARCHAR(255) NOT NULL,
            "index" INT NOT NULL,
            type VARCHAR(10) NOT NULL CHECK (type IN ('track', 'gym')),
            run_time FLOAT,
            distance_meters FLOAT,
            recovery_seconds INT,
            is_last BOOLEAN,
            reps TEXT,
            weight TEXT,
            CHECK (NOT COALESCE(is_last, FALSE) OR recovery_seconds IS NULL)
        )
    """)

    op.execute("CREATE INDEX idx_cycles_user ON cycles (user_id)")
    op.execute("CREATE INDEX idx_workouts_user_cycle ON workouts (user_id, cycle_id)")
    op.execute(
        "CREATE INDEX idx_day_entries_user_workout ON day_entries (user_id, workout_id)"
    )
    op.execute(
        "CREATE INDEX idx_series_sets_user_day_entry "
        "ON series_sets (user_id, day_entry_id)"
    )

    # Every change notifies the table's channel with the owning user's id.
    op.execute("""
        CREATE FUNCTION notify_collection_change() RETURNS trigger AS $$
        BEGIN
            IF TG_OP = 'DELETE' THEN
                PERFORM pg_notify(TG_TABLE_NAME, OLD.user_id);
            ELSE
                PERFORM pg_notify(TG_TABLE_NAME, NEW.user_id);
            END IF;
            RETURN NULL;
        END;
        $$ LANGUAGE plpgsql
    """)
    for table in TABLES:
        op.execute(f"""
            CREATE TRIGGER {table}_notify
            AFTER INSERT OR UPDATE OR DELETE ON {table}
            FOR EACH ROW EXECUTE FUNCTION notify_collection_change()
        """)


def downgrade() -> None:
    """Drop the training tables and the notify function."""
    for table in reversed(TABLES):
        op.execute(f"DROP TABLE IF EXISTS {table}")
    op.execute("DROP FUNCTION IF EXISTS notify_collection_change()")
