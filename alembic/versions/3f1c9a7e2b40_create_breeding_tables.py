"""Create animals and breeding tables

Revision ID: 3f1c9a7e2b40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7e2b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

OPEN_PREGNANCY = "pregnancy_status IN ('suspected', 'confirmed')"


def upgrade() -> None:
    """Create animals, breeding_records, breeding_events, pregnancy_records and settings."""

    # --- animals ---
    op.create_table(
        'animals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('tag', sa.String(length=128), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('sex', sa.String(length=6), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('birth_weight', sa.DECIMAL(precision=8, scale=2), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('source', sa.String(length=16), nullable=True),
        sa.Column('dam_id', sa.Uuid(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('production_status', sa.String(length=16), nullable=True),
        sa.Column('service_date', sa.Date(), nullable=True),
        sa.Column('expected_calving_date', sa.Date(), nullable=True),
        sa.Column('days_in_milk', sa.Integer(), nullable=True),
        sa.Column('lactation_number', sa.Integer(), server_default='0', nullable=False),
        sa.Column('current_daily_production', sa.DECIMAL(precision=8, scale=2), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.ForeignKeyConstraint(['dam_id'], ['animals.id'], name='fk_animals_dam_id_animals'),
        sa.PrimaryKeyConstraint('id', name='pk_animals'),
        sa.UniqueConstraint('farm_id', 'tag', name='ux_animals_farm_tag'),
    )
    op.create_index('ix_animals_farm_id', 'animals', ['farm_id'], unique=False)
    op.create_index('ix_animals_production_status', 'animals', ['production_status'], unique=False)

    # --- breeding_records ---
    op.create_table(
        'breeding_records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('breeding_date', sa.Date(), nullable=False),
        sa.Column('breeding_method', sa.String(length=32), nullable=False),
        sa.Column('sire_tag', sa.String(length=128), nullable=True),
        sa.Column('sire_breed', sa.String(length=128), nullable=True),
        sa.Column('technician', sa.String(length=255), nullable=True),
        sa.Column('cost', sa.DECIMAL(precision=10, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('pregnancy_status', sa.String(length=16), nullable=False),
        sa.Column('auto_generated', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('breeding_event_id', sa.Uuid(), nullable=True),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(
            ['animal_id'], ['animals.id'], name='fk_breeding_records_animal_id_animals'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_breeding_records'),
    )
    op.create_index('ix_breeding_records_farm_id', 'breeding_records', ['farm_id'], unique=False)
    op.create_index(
        'ix_breeding_records_farm_animal_date',
        'breeding_records',
        ['farm_id', 'animal_id', 'breeding_date'],
        unique=False,
    )

    # --- breeding_events ---
    op.create_table(
        'breeding_events',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('event_type', sa.String(length=32), nullable=False),
        sa.Column('event_date', sa.Date(), nullable=False),
        sa.Column('data', sa.JSON(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(
            ['animal_id'], ['animals.id'], name='fk_breeding_events_animal_id_animals'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_breeding_events'),
    )
    op.create_index('ix_breeding_events_farm_id', 'breeding_events', ['farm_id'], unique=False)
    op.create_index(
        'ix_breeding_events_farm_animal_date',
        'breeding_events',
        ['farm_id', 'animal_id', 'event_date'],
        unique=False,
    )
    op.create_index(
        'ix_breeding_events_farm_type', 'breeding_events', ['farm_id', 'event_type'], unique=False
    )

    # --- pregnancy_records ---
    op.create_table(
        'pregnancy_records',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('breeding_record_id', sa.Uuid(), nullable=False),
        sa.Column('pregnancy_status', sa.String(length=16), nullable=False),
        sa.Column('expected_calving_date', sa.Date(), nullable=True),
        sa.Column('actual_calving_date', sa.Date(), nullable=True),
        sa.Column('gestation_length', sa.Integer(), nullable=True),
        sa.Column('confirmed_date', sa.Date(), nullable=True),
        sa.Column('confirmation_method', sa.String(length=64), nullable=True),
        sa.Column('veterinarian', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.ForeignKeyConstraint(
            ['animal_id'], ['animals.id'], name='fk_pregnancy_records_animal_id_animals'
        ),
        sa.ForeignKeyConstraint(
            ['breeding_record_id'],
            ['breeding_records.id'],
            name='fk_pregnancy_records_breeding_record_id_breeding_records',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_pregnancy_records'),
        sa.UniqueConstraint('breeding_record_id', name='uq_pregnancy_records_breeding_record_id'),
    )
    op.create_index(
        'ix_pregnancy_records_farm_animal', 'pregnancy_records', ['farm_id', 'animal_id'],
        unique=False,
    )
    op.create_index(
        'ux_pregnancy_records_open_per_animal',
        'pregnancy_records',
        ['farm_id', 'animal_id'],
        unique=True,
        postgresql_where=sa.text(OPEN_PREGNANCY),
        sqlite_where=sa.text(OPEN_PREGNANCY),
    )

    # --- farm_breeding_settings ---
    op.create_table(
        'farm_breeding_settings',
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('default_gestation', sa.Integer(), server_default='280', nullable=False),
        sa.Column('days_pregnant_at_dryoff', sa.Integer(), server_default='220', nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('farm_id', name='pk_farm_breeding_settings'),
    )


def downgrade() -> None:
    """Drop breeding tables."""
    op.drop_table('farm_breeding_settings')
    op.drop_index('ux_pregnancy_records_open_per_animal', table_name='pregnancy_records')
    op.drop_index('ix_pregnancy_records_farm_animal', table_name='pregnancy_records')
    op.drop_table('pregnancy_records')
    op.drop_index('ix_breeding_events_farm_type', table_name='breeding_events')
    op.drop_index('ix_breeding_events_farm_animal_date', table_name='breeding_events')
    op.drop_index('ix_breeding_events_farm_id', table_name='breeding_events')
    op.drop_table('breeding_events')
    op.drop_index('ix_breeding_records_farm_animal_date', table_name='breeding_records')
    op.drop_index('ix_breeding_records_farm_id', table_name='breeding_records')
    op.drop_table('breeding_records')
    op.drop_index('ix_animals_production_status', table_name='animals')
    op.drop_index('ix_animals_farm_id', table_name='animals')
    op.drop_table('animals')
