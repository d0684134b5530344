"""Create usuarios table (hotel user administration).

Revision ID: 001_usuarios
Revises:
Create Date: 2026-10-16

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001_usuarios"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None


def upgrade() -> None:
    op.create_table(
        "usuarios",
        sa.Column(
            "id_usuario",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("nome", sa.String(100), nullable=False),
        sa.Column("email", sa.String(254), nullable=False),
        sa.Column("cpf", sa.String(11), nullable=False),
        sa.Column("telefone", sa.String(15), nullable=False),
        sa.Column("endereco", sa.String(200), nullable=False),
        sa.Column("senha", sa.Text, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "active",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("true"),
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deleted_by", postgresql.UUID(as_uuid=True), nullable=True),
    )

    # Unicidad sobre TODAS las filas (activas o no).
    op.create_index(
        "uq_usuarios_email_lower",
        "usuarios",
        [sa.text("lower(email)")],
        unique=True,
    )
    op.create_index("uq_usuarios_cpf", "usuarios", ["cpf"], unique=True)

    op.create_check_constraint(
        "ck_usuarios_soft_delete",
        "usuarios",
        "(active AND deleted_at IS NULL AND deleted_by IS NULL)"
        " OR (NOT active AND deleted_at IS NOT NULL AND deleted_by IS NOT NULL)",
    )
    op.create_check_constraint(
        "ck_usuarios_cpf_digits",
        "usuarios",
        "cpf ~ '^[0-9]{11}$'",
    )

    op.create_index(
        "ix_usuarios_active_created_at",
        "usuarios",
        ["active", sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("ix_usuarios_active_created_at", table_name="usuarios")
    op.drop_constraint("ck_usuarios_cpf_digits", "usuarios", type_="check")
    op.drop_constraint("ck_usuarios_soft_delete", "usuarios", type_="check")
    op.drop_index("uq_usuarios_cpf", table_name="usuarios")
    op.drop_index("uq_usuarios_email_lower", table_name="usuarios")
    op.drop_table("usuarios")
