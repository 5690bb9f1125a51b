"""Create categories, tools and category_tools tables

Revision ID: 4f2a9c1d7b3e
Revises:
Create Date: 2026-02-01 10:12:41.218305

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4f2a9c1d7b3e'
down_revision = None
branch_labels = None
depends_on = None

tool_status = sa.Enum('Draft', 'Scheduled', 'Published', name='tool_status')


def upgrade():
    op.create_table('tools',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('slug', sa.String(length=255), nullable=False),
    sa.Column('website_url', sa.String(length=512), nullable=True),
    sa.Column('tagline', sa.String(length=255), nullable=True),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('status', tool_status, nullable=False, server_default='Draft'),
    sa.Column('is_featured', sa.Boolean(), nullable=False, server_default=sa.false()),
    sa.Column('published_at', sa.DateTime(), nullable=True),
    sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.func.current_timestamp()),
    sa.Column('updated_at', sa.DateTime(), nullable=True, server_default=sa.func.current_timestamp()),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_tools_name'), 'tools', ['name'], unique=False)
    op.create_index(op.f('ix_tools_slug'), 'tools', ['slug'], unique=True)
    op.create_index(op.f('ix_tools_status'), 'tools', ['status'], unique=False)

    op.create_table('categories',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('slug', sa.String(length=255), nullable=False),
    sa.Column('full_path', sa.String(length=1024), nullable=False, server_default=''),
    sa.Column('label', sa.String(length=255), nullable=True),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('parent_id', sa.Integer(), nullable=True),
    sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.func.current_timestamp()),
    sa.Column('updated_at', sa.DateTime(), nullable=True, server_default=sa.func.current_timestamp()),
    sa.ForeignKeyConstraint(['parent_id'], ['categories.id'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('full_path')
    )
    op.create_index(op.f('ix_categories_name'), 'categories', ['name'], unique=False)
    op.create_index(op.f('ix_categories_slug'), 'categories', ['slug'], unique=True)
    op.create_index(op.f('ix_categories_parent_id'), 'categories', ['parent_id'], unique=False)

    op.create_table('category_tools',
    sa.Column('category_id', sa.Integer(), nullable=False),
    sa.Column('tool_id', sa.Integer(), nullable=False),
    sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['tool_id'], ['tools.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('category_id', 'tool_id')
    )
    op.create_index(op.f('ix_category_tools_tool_id'), 'category_tools', ['tool_id'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_category_tools_tool_id'), table_name='category_tools')
    op.drop_table('category_tools')

    op.drop_index(op.f('ix_categories_parent_id'), table_name='categories')
    op.drop_index(op.f('ix_categories_slug'), table_name='categories')
    op.drop_index(op.f('ix_categories_name'), table_name='categories')
    op.drop_table('categories')

    op.drop_index(op.f('ix_tools_status'), table_name='tools')
    op.drop_index(op.f('ix_tools_slug'), table_name='tools')
    op.drop_index(op.f('ix_tools_name'), table_name='tools')
    op.drop_table('tools')
    tool_status.drop(op.get_bind(), checkfirst=True)
