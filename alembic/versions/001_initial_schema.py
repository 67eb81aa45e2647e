"""initial_schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=False)
    op.create_index('uq_users_username_lower', 'users', [sa.text('lower(username)')], unique=True)

    # Create profiles table
    op.create_table(
        'profiles',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=True),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('avatar', sa.String(1000), nullable=True),
        sa.Column('cover_photo', sa.String(1000), nullable=True),
        sa.Column('theme', sa.String(50), nullable=False),
        sa.Column('primary_color', sa.String(50), nullable=False),
        sa.Column('background_color', sa.String(200), nullable=False),
        sa.Column('background_type', sa.String(20), nullable=False),
        sa.Column('background_image', sa.String(1000), nullable=True),
        sa.Column('background_video', sa.String(1000), nullable=True),
        sa.Column('custom_css', sa.Text(), nullable=True),
        sa.Column('layout', sa.String(20), nullable=False),
        sa.Column('font_family', sa.String(100), nullable=False),
        sa.Column('button_style', sa.String(20), nullable=False),
        sa.Column('seo_title', sa.String(200), nullable=True),
        sa.Column('seo_description', sa.String(500), nullable=True),
        sa.Column('og_image', sa.String(1000), nullable=True),
        sa.Column('template_html', sa.Text(), nullable=True),
        sa.Column('use_custom_template', sa.Boolean(), nullable=False),
        sa.Column('views', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
    )
    op.create_index(op.f('ix_profiles_id'), 'profiles', ['id'], unique=False)
    op.create_index(op.f('ix_profiles_user_id'), 'profiles', ['user_id'], unique=False)
    op.create_index(op.f('ix_profiles_username'), 'profiles', ['username'], unique=False)
    op.create_index('uq_profiles_username_lower', 'profiles', [sa.text('lower(username)')], unique=True)

    # Create link_groups table
    op.create_table(
        'link_groups',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('profile_id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_link_groups_id'), 'link_groups', ['id'], unique=False)
    op.create_index(op.f('ix_link_groups_profile_id'), 'link_groups', ['profile_id'], unique=False)

    # Create social_links table
    op.create_table(
        'social_links',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('profile_id', sa.String(36), nullable=False),
        sa.Column('group_id', sa.String(36), nullable=True),
        sa.Column('platform', sa.String(50), nullable=False),
        sa.Column('url', sa.String(2000), nullable=False),
        sa.Column('custom_title', sa.String(200), nullable=True),
        sa.Column('badge', sa.String(20), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('clicks', sa.Integer(), nullable=False),
        sa.Column('is_scheduled', sa.Boolean(), nullable=False),
        sa.Column('schedule_start', sa.DateTime(timezone=True), nullable=True),
        sa.Column('schedule_end', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['group_id'], ['link_groups.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_social_links_id'), 'social_links', ['id'], unique=False)
    op.create_index(op.f('ix_social_links_profile_id'), 'social_links', ['profile_id'], unique=False)

    # Create content_blocks table
    op.create_table(
        'content_blocks',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('profile_id', sa.String(36), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('title', sa.String(200), nullable=True),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('media_url', sa.String(2000), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('is_visible', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_content_blocks_id'), 'content_blocks', ['id'], unique=False)
    op.create_index(op.f('ix_content_blocks_profile_id'), 'content_blocks', ['profile_id'], unique=False)

    # Create form_submissions table
    op.create_table(
        'form_submissions',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('profile_id', sa.String(36), nullable=False),
        sa.Column('block_id', sa.String(36), nullable=True),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('user_agent', sa.String(500), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_form_submissions_id'), 'form_submissions', ['id'], unique=False)
    op.create_index(op.f('ix_form_submissions_profile_id'), 'form_submissions', ['profile_id'], unique=False)

    # Create analytics tables
    op.create_table(
        'link_clicks',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('link_id', sa.String(36), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('user_agent', sa.String(500), nullable=True),
        sa.Column('referrer', sa.String(2000), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['link_id'], ['social_links.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_link_clicks_id'), 'link_clicks', ['id'], unique=False)
    op.create_index(op.f('ix_link_clicks_link_id'), 'link_clicks', ['link_id'], unique=False)
    op.create_index(op.f('ix_link_clicks_timestamp'), 'link_clicks', ['timestamp'], unique=False)

    op.create_table(
        'profile_views',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('profile_id', sa.String(36), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('user_agent', sa.String(500), nullable=True),
        sa.Column('referrer', sa.String(2000), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_profile_views_id'), 'profile_views', ['id'], unique=False)
    op.create_index(op.f('ix_profile_views_profile_id'), 'profile_views', ['profile_id'], unique=False)
    op.create_index(op.f('ix_profile_views_timestamp'), 'profile_views', ['timestamp'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        'profile_views',
        'link_clicks',
        'form_submissions',
        'content_blocks',
        'social_links',
        'link_groups',
        'profiles',
        'users',
    ):
        op.drop_table(table)
