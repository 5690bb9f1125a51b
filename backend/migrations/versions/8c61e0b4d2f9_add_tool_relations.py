"""Add licenses, alternatives, topics, stacks, reports and likes

Revision ID: 8c61e0b4d2f9
Revises: 4f2a9c1d7b3e
Create Date: 2026-02-03 16:45:09.512877

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '8c61e0b4d2f9'
down_revision = '4f2a9c1d7b3e'
branch_labels = None
depends_on = None

stack_type = sa.Enum('Tool', 'SaaS', 'Cloud', 'ETL', 'Analytics', 'Language', 'DB', 'CI', 'Framework',
                     'Hosting', 'API', 'Storage', 'Monitoring', 'Messaging', 'App', 'Network', name='stack_type')
report_type = sa.Enum('BrokenLink', 'WrongCategory', 'WrongAlternative', 'Outdated', 'Other', name='report_type')


def upgrade():
    op.create_table('licenses',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('slug', sa.String(length=255), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.func.current_timestamp()),
    sa.Column('updated_at', sa.DateTime(), nullable=True, server_default=sa.func.current_timestamp()),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('name')
    )
    op.create_index(op.f('ix_licenses_slug'), 'licenses', ['slug'], unique=True)

    # 工具所属许可证，删除许可证时置空
    with op.batch_alter_table('tools', schema=None) as batch_op:
        batch_op.add_column(sa.Column('license_id', sa.Integer(), nullable=True))
        batch_op.create_index(batch_op.f('ix_tools_license_id'), ['license_id'], unique=False)
        batch_op.create_foreign_key('fk_tools_license_id_licenses', 'licenses', ['license_id'], ['id'],
                                    ondelete='SET NULL')

    op.create_table('alternatives',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('slug', sa.String(length=255), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('website_url', sa.String(length=512), nullable=False),
    sa.Column('favicon_url', sa.String(length=512), nullable=True),
    sa.Column('discount_code', sa.String(length=255), nullable=True),
    sa.Column('discount_amount', sa.String(length=255), nullable=True),
    sa.Column('pageviews', sa.Integer(), nullable=True, server_default='0'),
    sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.func.current_timestamp()),
    sa.Column('updated_at', sa.DateTime(), nullable=True, server_default=sa.func.current_timestamp()),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('website_url')
    )
    op.create_index(op.f('ix_alternatives_slug'), 'alternatives', ['slug'], unique=True)

    op.create_table('alternative_tools',
    sa.Column('alternative_id', sa.Integer(), nullable=False),
    sa.Column('tool_id', sa.Integer(), nullable=False),
    sa.ForeignKeyConstraint(['alternative_id'], ['alternatives.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['tool_id'], ['tools.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('alternative_id', 'tool_id')
    )
    op.create_index(op.f('ix_alternative_tools_tool_id'), 'alternative_tools', ['tool_id'], unique=False)

    op.create_table('topics',
    sa.Column('slug', sa.String(length=255), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.func.current_timestamp()),
    sa.Column('updated_at', sa.DateTime(), nullable=True, server_default=sa.func.current_timestamp()),
    sa.PrimaryKeyConstraint('slug')
    )

    op.create_table('tool_topics',
    sa.Column('tool_id', sa.Integer(), nullable=False),
    sa.Column('topic_slug', sa.String(length=255), nullable=False),
    sa.ForeignKeyConstraint(['tool_id'], ['tools.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['topic_slug'], ['topics.slug'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('tool_id', 'topic_slug')
    )
    op.create_index(op.f('ix_tool_topics_topic_slug'), 'tool_topics', ['topic_slug'], unique=False)

    op.create_table('stacks',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('slug', sa.String(length=255), nullable=False),
    sa.Column('type', stack_type, nullable=False, server_default='Language'),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('website', sa.String(length=512), nullable=True),
    sa.Column('favicon_url', sa.String(length=512), nullable=True),
    sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.func.current_timestamp()),
    sa.Column('updated_at', sa.DateTime(), nullable=True, server_default=sa.func.current_timestamp()),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_stacks_slug'), 'stacks', ['slug'], unique=True)

    op.create_table('stack_tools',
    sa.Column('stack_id', sa.Integer(), nullable=False),
    sa.Column('tool_id', sa.Integer(), nullable=False),
    sa.ForeignKeyConstraint(['stack_id'], ['stacks.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['tool_id'], ['tools.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('stack_id', 'tool_id')
    )
    op.create_index(op.f('ix_stack_tools_tool_id'), 'stack_tools', ['tool_id'], unique=False)

    op.create_table('reports',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('type', report_type, nullable=False),
    sa.Column('message', sa.Text(), nullable=True),
    sa.Column('user_id', sa.String(length=255), nullable=True),
    sa.Column('tool_id', sa.Integer(), nullable=True),
    sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.func.current_timestamp()),
    sa.Column('updated_at', sa.DateTime(), nullable=True, server_default=sa.func.current_timestamp()),
    sa.ForeignKeyConstraint(['tool_id'], ['tools.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_reports_user_id'), 'reports', ['user_id'], unique=False)
    op.create_index(op.f('ix_reports_tool_id'), 'reports', ['tool_id'], unique=False)

    op.create_table('likes',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('user_id', sa.String(length=255), nullable=False),
    sa.Column('tool_id', sa.Integer(), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.func.current_timestamp()),
    sa.ForeignKeyConstraint(['tool_id'], ['tools.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('user_id', 'tool_id', name='uq_likes_user_tool')
    )
    op.create_index(op.f('ix_likes_user_id'), 'likes', ['user_id'], unique=False)
    op.create_index(op.f('ix_likes_tool_id'), 'likes', ['tool_id'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_likes_tool_id'), table_name='likes')
    op.drop_index(op.f('ix_likes_user_id'), table_name='likes')
    op.drop_table('likes')

    op.drop_index(op.f('ix_reports_tool_id'), table_name='reports')
    op.drop_index(op.f('ix_reports_user_id'), table_name='reports')
    op.drop_table('reports')
    report_type.drop(op.get_bind(), checkfirst=True)

    op.drop_index(op.f('ix_stack_tools_tool_id'), table_name='stack_tools')
    op.drop_table('stack_tools')
    op.drop_index(op.f('ix_stacks_slug'), table_name='stacks')
    op.drop_table('stacks')
    stack_type.drop(op.get_bind(), checkfirst=True)

    op.drop_index(op.f('ix_tool_topics_topic_slug'), table_name='tool_topics')
    op.drop_table('tool_topics')
    op.drop_table('topics')

    op.drop_index(op.f('ix_alternative_tools_tool_id'), table_name='alternative_tools')
    op.drop_table('alternative_tools')
    op.drop_index(op.f('ix_alternatives_slug'), table_name='alternatives')
    op.drop_table('alternatives')

    with op.batch_alter_table('tools', schema=None) as batch_op:
        batch_op.drop_constraint('fk_tools_license_id_licenses', type_='foreignkey')
        batch_op.drop_index(batch_op.f('ix_tools_license_id'))
        batch_op.drop_column('license_id')

    op.drop_index(op.f('ix_licenses_slug'), table_name='licenses')
    op.drop_table('licenses')
