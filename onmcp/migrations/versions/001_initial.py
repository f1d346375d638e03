"""Initial console schema.

Revision ID: 001_initial
Revises:
Create Date: 2026-02-18

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Synced CRM locations
    op.create_table(
        "crm_locations",
        sa.Column("id", postgresql.UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True),
        sa.Column("location_id", sa.String(100), nullable=False, unique=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("address", sa.String(255)),
        sa.Column("city", sa.String(100)),
        sa.Column("state", sa.String(100)),
        sa.Column("country", sa.String(50)),
        sa.Column("postal_code", sa.String(20)),
        sa.Column("phone", sa.String(50)),
        sa.Column("email", sa.String(255)),
        sa.Column("website", sa.String(500)),
        sa.Column("timezone", sa.String(50)),
        sa.Column("logo_url", sa.String(1000)),
        sa.Column("crm_metadata", postgresql.JSONB),
        sa.Column("last_sync_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_crm_locations_location_id", "crm_locations", ["location_id"])
    op.create_index("ix_crm_locations_name", "crm_locations", ["name"])

    # Agency config (single row, id = 1)
    op.create_table(
        "crm_agency_config",
        sa.Column("id", sa.Integer, primary_key=True, server_default="1"),
        sa.Column("agency_name", sa.String(200), nullable=False),
        sa.Column("agency_id", sa.String(100)),
        sa.Column("api_base_url", sa.String(500), nullable=False),
        sa.Column("api_version", sa.String(50), nullable=False),
        sa.Column("status", sa.String(20), server_default="active"),
        sa.Column("last_sync_at", sa.DateTime(timezone=True)),
        sa.Column("locations_count", sa.Integer, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("id = 1", name="ck_agency_config_singleton"),
    )

    # Sync audit trail
    op.create_table(
        "crm_sync_log",
        sa.Column("id", postgresql.UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True),
        sa.Column("sync_type", sa.String(20), server_default="full"),
        sa.Column("status", sa.String(20), server_default="running"),
        sa.Column("locations_synced", sa.Integer, server_default="0"),
        sa.Column("locations_added", sa.Integer, server_default="0"),
        sa.Column("locations_updated", sa.Integer, server_default="0"),
        sa.Column("duration_ms", sa.Integer),
        sa.Column("error_message", sa.Text),
        sa.Column("started_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("completed_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_crm_sync_log_started_at", "crm_sync_log", ["started_at"])

    # MCP server registry
    op.create_table(
        "mcp_servers",
        sa.Column("server_key", sa.String(50), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(255), server_default=""),
        sa.Column("endpoint_url", sa.String(500), nullable=False),
        sa.Column("transport", sa.String(20), server_default="http"),
        sa.Column("auth_type", sa.String(20), server_default="none"),
        sa.Column("online", sa.Boolean, server_default="false"),
        sa.Column("last_health_check", sa.DateTime(timezone=True)),
        sa.Column("last_health_response", postgresql.JSONB),
        sa.Column("version", sa.String(50)),
        sa.Column("tools_count", sa.Integer, server_default="0"),
        sa.Column("services_count", sa.Integer, server_default="0"),
        sa.Column("status", sa.String(20), server_default="configured"),
        sa.Column("error_message", sa.Text),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # MCP tool execution log
    op.create_table(
        "mcp_execution_log",
        sa.Column("id", postgresql.UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), primary_key=True),
        sa.Column("server_key", sa.String(50), nullable=False),
        sa.Column("tool_name", sa.String(200), nullable=False),
        sa.Column("input", postgresql.JSONB),
        sa.Column("output", postgresql.JSONB),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("duration_ms", sa.Integer, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_mcp_execution_log_server_key", "mcp_execution_log", ["server_key"])


def downgrade() -> None:
    op.drop_table("mcp_execution_log")
    op.drop_table("mcp_servers")
    op.drop_table("crm_sync_log")
    op.drop_table("crm_agency_config")
    op.drop_table("crm_locations")
