"""Initial schema: workouts, exercises, sets, plans, machine defaults, user settings.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Enum columns are VARCHAR holding member names (native_enum=False)
GRIP = ("PRONATED", "SUPINATED", "NEUTRAL", "MIXED")
UNIT = ("KG", "LBS")
FORMULA = ("BRZYCKI", "EPLEY")


def upgrade() -> None:
    op.create_table(
        "workouts",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("date", sa.String(length=10), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("plan_id", sa.String(length=64), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_workouts_date"), "workouts", ["date"], unique=False)
    op.create_index("ix_workouts_start_time", "workouts", ["start_time"], unique=False)

    op.create_table(
        "workout_exercises",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("workout_id", sa.String(length=64), nullable=False),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.Column("machine_id", sa.String(length=100), nullable=False),
        sa.Column("machine_name", sa.String(length=255), nullable=False),
        sa.Column("attachment_id", sa.String(length=100), nullable=True),
        sa.Column("grip", sa.Enum(*GRIP, name="griptype", native_enum=False), nullable=True),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.ForeignKeyConstraint(["workout_id"], ["workouts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_workout_exercises_workout_id", "workout_exercises", ["workout_id"], unique=False)
    op.create_index("ix_workout_exercises_machine_id", "workout_exercises", ["machine_id"], unique=False)

    op.create_table(
        "workout_sets",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("exercise_id", sa.String(length=64), nullable=False),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("reps", sa.Integer(), nullable=False),
        sa.Column("weight_unit", sa.Enum(*UNIT, name="weightunit", native_enum=False), nullable=False),
        sa.Column("rest_period", sa.Integer(), nullable=False),
        sa.Column("rpe", sa.Float(), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["exercise_id"], ["workout_exercises.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_workout_sets_exercise_id", "workout_sets", ["exercise_id"], unique=False)

    op.create_table(
        "plans",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_plans_name"), "plans", ["name"], unique=False)

    op.create_table(
        "plan_exercises",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("plan_id", sa.String(length=64), nullable=False),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.Column("machine_id", sa.String(length=100), nullable=False),
        sa.Column("label", sa.String(length=255), nullable=False),
        sa.Column("attachment_id", sa.String(length=100), nullable=True),
        sa.Column("grip", sa.Enum(*GRIP, name="griptype", native_enum=False), nullable=True),
        sa.ForeignKeyConstraint(["plan_id"], ["plans.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_plan_exercises_plan_id"), "plan_exercises", ["plan_id"], unique=False)

    op.create_table(
        "machine_defaults",
        sa.Column("machine_id", sa.String(length=100), nullable=False),
        sa.Column("last_weight", sa.Float(), nullable=True),
        sa.Column("last_weight_unit", sa.Enum(*UNIT, name="weightunit", native_enum=False), nullable=True),
        sa.Column("last_reps", sa.Integer(), nullable=True),
        sa.Column("last_attachment_id", sa.String(length=100), nullable=True),
        sa.Column("last_grip", sa.Enum(*GRIP, name="griptype", native_enum=False), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("machine_id"),
    )

    op.create_table(
        "user_settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("default_weight_unit", sa.Enum(*UNIT, name="weightunit", native_enum=False), nullable=True),
        sa.Column("default_rest_period", sa.Integer(), nullable=True),
        sa.Column("e1rm_formula", sa.Enum(*FORMULA, name="e1rmformula", native_enum=False), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("user_settings")
    op.drop_table("machine_defaults")
    op.drop_index(op.f("ix_plan_exercises_plan_id"), table_name="plan_exercises")
    op.drop_table("plan_exercises")
    op.drop_index(op.f("ix_plans_name"), table_name="plans")
    op.drop_table("plans")
    op.drop_index("ix_workout_sets_exercise_id", table_name="workout_sets")
    op.drop_table("workout_sets")
    op.drop_index("ix_workout_exercises_machine_id", table_name="workout_exercises")
    op.drop_index("ix_workout_exercises_workout_id", table_name="workout_exercises")
    op.drop_table("workout_exercises")
    op.drop_index("ix_workouts_start_time", table_name="workouts")
    op.drop_index(op.f("ix_workouts_date"), table_name="workouts")
    op.drop_table("workouts")
