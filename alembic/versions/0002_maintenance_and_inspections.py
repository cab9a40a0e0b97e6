"""maintenance tasks and road inspections

Revision ID: 0002_maintenance_inspections
Revises: 0001_initial_schema
Create Date: 2026-10-19

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0002_maintenance_inspections"
down_revision: Union[str, None] = "0001_initial_schema"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "maintenance_tasks",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("organization_id", sa.Uuid(),
                  sa.ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("asset_id", sa.String(), nullable=False),
        sa.Column("asset_name", sa.String(), nullable=False),
        sa.Column("contractor", sa.String(), nullable=False),
        sa.Column("priority", sa.String(20), nullable=False, server_default="medium"),
        sa.Column("status", sa.String(20), nullable=False, server_default="scheduled"),
        sa.Column("scheduled_date", sa.Date(), nullable=False),
        sa.Column("estimated_duration", sa.Integer(), nullable=True),
        sa.Column("estimated_cost", sa.Integer(), nullable=True),
        sa.Column("actual_cost", sa.Integer(), nullable=True),
        sa.Column("progress", sa.Integer(), server_default="0"),
        sa.Column("materials", sa.JSON(), nullable=True),
        sa.Column("weather_sensitive", sa.Boolean(), server_default=sa.false()),
        sa.Column("assigned_crew", sa.String(), nullable=True),
        sa.Column("pci_score", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_maintenance_tasks_id", "maintenance_tasks", ["id"])
    op.create_index("ix_maintenance_tasks_organization_id", "maintenance_tasks", ["organization_id"])
    op.create_index("ix_maintenance_tasks_status", "maintenance_tasks", ["status"])

    op.create_table(
        "road_inspections",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("organization_id", sa.Uuid(),
                  sa.ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False),
        sa.Column("road_id", sa.String(), nullable=False),
        sa.Column("road_name", sa.String(), nullable=False),
        sa.Column("location", sa.String(500), nullable=False),
        sa.Column("coordinates", sa.JSON(), nullable=False),
        sa.Column("inspector", sa.String(), nullable=False),
        sa.Column("inspection_date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("priority", sa.String(20), nullable=False),
        sa.Column("pci_score", sa.Integer(), nullable=True),
        sa.Column("surface_type", sa.String(100), nullable=True),
        sa.Column("distress_types", sa.JSON(), nullable=True),
        sa.Column("photos", sa.Integer(), server_default="0"),
        sa.Column("weather_conditions", sa.String(), nullable=True),
        sa.Column("traffic_volume", sa.String(100), nullable=True),
        sa.Column("findings", sa.Text(), nullable=True),
        sa.Column("recommendations", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_road_inspections_id", "road_inspections", ["id"])
    op.create_index("ix_road_inspections_organization_id", "road_inspections", ["organization_id"])
    op.create_index("ix_road_inspections_inspection_date", "road_inspections", ["inspection_date"])


def downgrade() -> None:
    op.drop_table("road_inspections")
    op.drop_table("maintenance_tasks")
