"""Create siswas table

Revision ID: 0001_create_siswas
Revises:
Create Date: 2026-10-19 00:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = "0001_create_siswas"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "siswas",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("nis", sa.String(length=255), nullable=False),
        sa.Column("nama", sa.String(length=255), nullable=False),
        sa.Column("rombel", sa.String(length=255), nullable=False),
        sa.Column("rayon", sa.String(length=255), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("medsos", sa.String(length=255), nullable=True),
        sa.Column("portofolio", sa.String(length=255), nullable=True),
        sa.Column("certifikat", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_siswas_nis", "siswas", ["nis"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_siswas_nis", table_name="siswas")
    op.drop_table("siswas")
