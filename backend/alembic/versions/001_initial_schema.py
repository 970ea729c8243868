"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUM_VALUES = {
    'album_type': ('EP', 'LP', 'SP', 'Compilation'),
    'album_status': ('In Development', 'Released', 'Removed'),
    'visibility_level': ('Public', 'VIP', 'Admin'),
    'standalone_visibility': ('Public', 'Private', 'Unlisted'),
    'track_status': ('WIP', 'RELEASED', 'SHELVED', 'B-SIDE'),
    'production_stage': (
        'CONCEPTION', 'DEMO', 'IN SESSION', 'OUT SESSION', 'IN MIX', 'OUT MIX',
        'IN MASTERING', 'OUT MASTERING', 'RELEASED', 'REMOVED', 'SHELVED',
    ),
    'app_role': ('admin', 'user'),
}


def _enum(name):
    # Several tables share a type; on PostgreSQL the types are created once in upgrade()
    values = ENUM_VALUES[name]
    return sa.Enum(*values, name=name).with_variant(
        postgresql.ENUM(*values, name=name, create_type=False), 'postgresql'
    )


album_type = _enum('album_type')
album_status = _enum('album_status')
visibility_level = _enum('visibility_level')
standalone_visibility = _enum('standalone_visibility')
track_status = _enum('track_status')
production_stage = _enum('production_stage')
app_role = _enum('app_role')

def _track_columns():
    """Columns shared by album tracks and standalone tracks."""
    return [
        sa.Column('track_name', sa.String(200), nullable=False),
        sa.Column('duration', sa.String(50), nullable=False),
        sa.Column('track_status', track_status, nullable=False),
        sa.Column('stage_of_production', production_stage, nullable=False),
        sa.Column('stage_date', sa.Date(), server_default=sa.func.current_date()),
        sa.Column('allow_stream', sa.Boolean()),
        sa.Column('stream_embed', sa.Text()),
        sa.Column('isrc', sa.String(20)),
        sa.Column('purchase_link', sa.String(500)),
        sa.Column('commentary', sa.Text()),
        sa.Column('artists', sa.JSON()),
        sa.Column('composers', sa.JSON()),
        sa.Column('key_contributors', sa.JSON()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        for name, values in ENUM_VALUES.items():
            postgresql.ENUM(*values, name=name).create(bind, checkfirst=True)

    # Users and roles
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(50), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'user_roles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('role', app_role, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'role', name='uq_user_role')
    )
    op.create_index('ix_user_roles_id', 'user_roles', ['id'])
    op.create_index('ix_user_roles_user_id', 'user_roles', ['user_id'])

    # Albums
    op.create_table(
        'albums',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('album_name', sa.String(200), nullable=False),
        sa.Column('album_artist', sa.String(200), nullable=False),
        sa.Column('catalog_number', sa.String(50), nullable=False),
        sa.Column('album_type', album_type, nullable=False),
        sa.Column('status', album_status, nullable=False),
        sa.Column('visibility', visibility_level, nullable=False),
        sa.Column('artwork_front', sa.String(500), nullable=False),
        sa.Column('artwork_back', sa.String(500)),
        sa.Column('artwork_sleeve', sa.String(500)),
        sa.Column('artwork_sticker', sa.String(500)),
        sa.Column('artwork_fullcover', sa.String(500)),
        sa.Column('artwork_fullinner', sa.String(500)),
        sa.Column('release_date', sa.Date()),
        sa.Column('removal_date', sa.Date()),
        sa.Column('vinyl_cd_release_date', sa.Date()),
        sa.Column('album_duration', sa.String(50)),
        sa.Column('upc', sa.String(20)),
        sa.Column('label', sa.String(200)),
        sa.Column('distributor', sa.String(200)),
        sa.Column('commentary', sa.Text()),
        sa.Column('producers', sa.JSON()),
        sa.Column('engineers', sa.JSON()),
        sa.Column('mastering', sa.JSON()),
        sa.Column('key_contributors', sa.JSON()),
        sa.Column('streaming_links', sa.JSON()),
        sa.Column('purchase_links', sa.JSON()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True)),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_albums_id', 'albums', ['id'])
    op.create_index('ix_albums_album_name', 'albums', ['album_name'])
    op.create_index('ix_albums_album_artist', 'albums', ['album_artist'])
    op.create_index('ix_albums_catalog_number', 'albums', ['catalog_number'], unique=True)
    op.create_index('ix_albums_visibility', 'albums', ['visibility'])
    op.create_index('ix_albums_release_date', 'albums', ['release_date'])

    # Album tracks
    op.create_table(
        'tracks',
        sa.Column('track_id', sa.Integer(), nullable=False),
        sa.Column('album_id', sa.Integer(), nullable=False),
        sa.Column('track_number', sa.Integer(), nullable=False),
        sa.Column('visibility', visibility_level, nullable=False),
        *_track_columns(),
        sa.PrimaryKeyConstraint('track_id'),
        sa.ForeignKeyConstraint(['album_id'], ['albums.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('album_id', 'track_number', name='uq_track_album_position')
    )
    op.create_index('ix_tracks_track_id', 'tracks', ['track_id'])
    op.create_index('ix_tracks_album_id', 'tracks', ['album_id'])
    op.create_index('ix_tracks_track_name', 'tracks', ['track_name'])
    op.create_index('ix_tracks_isrc', 'tracks', ['isrc'])

    # Standalone tracks and notes
    op.create_table(
        'standalone_tracks',
        sa.Column('track_id', sa.Integer(), nullable=False),
        sa.Column('album_artist', sa.String(200)),
        sa.Column('visibility', standalone_visibility, nullable=False),
        *_track_columns(),
        sa.PrimaryKeyConstraint('track_id')
    )
    op.create_index('ix_standalone_tracks_track_id', 'standalone_tracks', ['track_id'])
    op.create_index('ix_standalone_tracks_track_name', 'standalone_tracks', ['track_name'])
    op.create_index('ix_standalone_tracks_isrc', 'standalone_tracks', ['isrc'])
    op.create_index('ix_standalone_tracks_created_at', 'standalone_tracks', ['created_at'])

    op.create_table(
        'standalone_track_notes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('track_id', sa.Integer(), nullable=False),
        sa.Column('note_content', sa.Text(), nullable=False),
        sa.Column('user_initials', sa.String(10), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['track_id'], ['standalone_tracks.track_id'], ondelete='CASCADE')
    )
    op.create_index('ix_standalone_track_notes_id', 'standalone_track_notes', ['id'])
    op.create_index('ix_standalone_track_notes_track_id', 'standalone_track_notes', ['track_id'])
    op.create_index('ix_standalone_track_notes_created_at', 'standalone_track_notes', ['created_at'])


def downgrade() -> None:
    op.drop_table('standalone_track_notes')
    op.drop_table('standalone_tracks')
    op.drop_table('tracks')
    op.drop_table('albums')
    op.drop_table('user_roles')
    op.drop_table('users')

    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        for name in reversed(list(ENUM_VALUES)):
            postgresql.ENUM(name=name).drop(bind, checkfirst=True)
