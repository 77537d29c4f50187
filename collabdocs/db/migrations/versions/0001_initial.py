"""initial schema: documents, shares, versions, templates

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

share_permission = sa.Enum("READ", "WRITE", "ADMIN", name="share_permission")


def _base_columns():
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "documents",
        *_base_columns(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("owner", sa.String(100), nullable=False),
    )
    op.create_index("ix_documents_uuid", "documents", ["uuid"], unique=True)
    op.create_index("ix_documents_owner", "documents", ["owner"])

    op.create_table(
        "document_shares",
        *_base_columns(),
        sa.Column("document_id", sa.Uuid(), sa.ForeignKey("documents.uuid", ondelete="CASCADE"), nullable=False),
        sa.Column("shared_with_user", sa.String(100), nullable=False),
        sa.Column("permission", share_permission, nullable=False),
        sa.Column("shared_by_user", sa.String(100), nullable=False),
        sa.Column("shared_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("document_id", "shared_with_user", name="uq_document_shares_document_user"),
    )
    op.create_index("ix_document_shares_uuid", "document_shares", ["uuid"], unique=True)
    op.create_index("ix_document_shares_document_id", "document_shares", ["document_id"])
    op.create_index("ix_document_shares_shared_with_user", "document_shares", ["shared_with_user"])

    op.create_table(
        "document_versions",
        *_base_columns(),
        sa.Column("document_id", sa.Uuid(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("edited_by", sa.String(100), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_document_versions_uuid", "document_versions", ["uuid"], unique=True)
    op.create_index("ix_document_versions_document_id", "document_versions", ["document_id"])
    op.create_index("ix_document_versions_edited_by", "document_versions", ["edited_by"])
    op.create_index("ix_document_versions_timestamp", "document_versions", ["timestamp"])

    op.create_table(
        "document_templates",
        *_base_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("created_by", sa.String(100), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_document_templates_uuid", "document_templates", ["uuid"], unique=True)
    op.create_index("ix_document_templates_category", "document_templates", ["category"])
    op.create_index("ix_document_templates_created_by", "document_templates", ["created_by"])


def downgrade() -> None:
    op.drop_table("document_templates")
    op.drop_table("document_versions")
    op.drop_table("document_shares")
    op.drop_table("documents")
    share_permission.drop(op.get_bind(), checkfirst=True)
