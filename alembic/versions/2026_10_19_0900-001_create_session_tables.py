"""Create training, session, target and completion tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _drill_config_columns() -> list[sa.Column]:
    """Columns shared by drill_templates and training_drills."""
    return [
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('drill_goal', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('target_type', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('distance_m', sa.Float(), nullable=False),
        sa.Column('rounds_per_shooter', sa.Integer(), nullable=False),
        sa.Column('strings_count', sa.Integer(), nullable=True),
        sa.Column('target_count', sa.Integer(), nullable=True),
        sa.Column('time_limit_seconds', sa.Float(), nullable=True),
        sa.Column('par_time_seconds', sa.Float(), nullable=True),
        sa.Column('min_accuracy_percent', sa.Float(), nullable=True),
        sa.Column('scoring_mode', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=True),
        sa.Column('points_per_hit', sa.Float(), nullable=True),
        sa.Column('penalty_per_miss', sa.Float(), nullable=True),
        sa.Column('position', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('weapon_category', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('difficulty', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=True),
        sa.Column('instructions', sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=True),
        sa.Column('safety_notes', sqlmodel.sql.sqltypes.AutoString(length=2000), nullable=True),
    ]


def upgrade() -> None:
    """Create all session tables."""
    op.create_table('trainings', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('team_id', sa.Integer(), nullable=True),
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('status', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('scheduled_at', sa.DateTime(), nullable=True),
        sa.Column('deadline_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_trainings_team_id'), 'trainings', ['team_id'])
    op.create_index(op.f('ix_trainings_status'), 'trainings', ['status'])

    op.create_table('drill_templates', sa.Column('id', sa.Integer(), nullable=False),
        *_drill_config_columns(),
        sa.Column('team_id', sa.Integer(), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_drill_templates_team_id'), 'drill_templates', ['team_id'])
    op.create_index(op.f('ix_drill_templates_created_by'), 'drill_templates', ['created_by'])

    op.create_table('training_drills', sa.Column('id', sa.Integer(), nullable=False),
        *_drill_config_columns(),
        sa.Column('training_id', sa.Integer(), nullable=False),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['training_id'], ['trainings.id']),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_training_drills_training_id'), 'training_drills', ['training_id'])

    op.create_table('sessions', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('team_id', sa.Integer(), nullable=True),
        sa.Column('training_id', sa.Integer(), nullable=True),
        sa.Column('drill_id', sa.Integer(), nullable=True),
        sa.Column('drill_template_id', sa.Integer(), nullable=True),
        sa.Column('custom_drill_config', sa.JSON(), nullable=True),
        sa.Column('session_mode', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column('status', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('started_at', sa.DateTime(), nullable=False),
        sa.Column('ended_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['training_id'], ['trainings.id']),
        sa.ForeignKeyConstraint(['drill_id'], ['training_drills.id']),
        sa.ForeignKeyConstraint(['drill_template_id'], ['drill_templates.id']),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_sessions_user_id'), 'sessions', ['user_id'])
    op.create_index(op.f('ix_sessions_team_id'), 'sessions', ['team_id'])
    op.create_index(op.f('ix_sessions_training_id'), 'sessions', ['training_id'])
    op.create_index(op.f('ix_sessions_status'), 'sessions', ['status'])
    # At most one active session per user
    op.create_index('uq_sessions_one_active_per_user', 'sessions', ['user_id'], unique=True,
                    postgresql_where=sa.text("status = 'active'"), sqlite_where=sa.text("status = 'active'"))

    op.create_table('session_targets', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('target_type', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('sequence_in_session', sa.Integer(), nullable=False),
        sa.Column('distance_m', sa.Float(), nullable=True),
        sa.Column('lane_number', sa.Integer(), nullable=True),
        sa.Column('planned_shots', sa.Integer(), nullable=True),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column('target_data', sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(['session_id'], ['sessions.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('session_id', 'sequence_in_session', name='uq_session_targets_session_sequence'))
    op.create_index(op.f('ix_session_targets_session_id'), 'session_targets', ['session_id'])

    op.create_table('paper_target_results', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('session_target_id', sa.Integer(), nullable=False),
        sa.Column('paper_type', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('bullets_fired', sa.Integer(), nullable=False),
        sa.Column('hits_total', sa.Integer(), nullable=True),
        sa.Column('hits_inside_scoring', sa.Integer(), nullable=True),
        sa.Column('dispersion_cm', sa.Float(), nullable=True),
        sa.Column('offset_right_cm', sa.Float(), nullable=True),
        sa.Column('offset_up_cm', sa.Float(), nullable=True),
        sa.Column('input_method', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False,
                  server_default='manual'),
        sa.Column('scanned_image_url', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.ForeignKeyConstraint(['session_target_id'], ['session_targets.id']),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_paper_target_results_session_target_id'), 'paper_target_results',
                    ['session_target_id'], unique=True)

    op.create_table('tactical_target_results', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('session_target_id', sa.Integer(), nullable=False),
        sa.Column('bullets_fired', sa.Integer(), nullable=False),
        sa.Column('hits', sa.Integer(), nullable=False),
        sa.Column('is_stage_cleared', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('time_seconds', sa.Float(), nullable=True),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.ForeignKeyConstraint(['session_target_id'], ['session_targets.id']),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_tactical_target_results_session_target_id'), 'tactical_target_results',
                    ['session_target_id'], unique=True)

    op.create_table('drill_completions', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('training_id', sa.Integer(), nullable=False),
        sa.Column('drill_id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=False),
        sa.Column('shots_fired', sa.Integer(), nullable=False),
        sa.Column('hits', sa.Integer(), nullable=False),
        sa.Column('accuracy_pct', sa.Float(), nullable=False),
        sa.Column('time_seconds', sa.Float(), nullable=True),
        sa.Column('stats_snapshot', sa.JSON(), nullable=False),
        sa.ForeignKeyConstraint(['training_id'], ['trainings.id']),
        sa.ForeignKeyConstraint(['drill_id'], ['training_drills.id']),
        sa.ForeignKeyConstraint(['session_id'], ['sessions.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('session_id'))
    op.create_index(op.f('ix_drill_completions_user_id'), 'drill_completions', ['user_id'])
    op.create_index(op.f('ix_drill_completions_training_id'), 'drill_completions', ['training_id'])
    op.create_index(op.f('ix_drill_completions_drill_id'), 'drill_completions', ['drill_id'])


def downgrade() -> None:
    """Drop all session tables."""
    op.drop_table('drill_completions')
    op.drop_table('tactical_target_results')
    op.drop_table('paper_target_results')
    op.drop_table('session_targets')
    op.drop_index('uq_sessions_one_active_per_user', table_name='sessions')
    op.drop_table('sessions')
    op.drop_table('training_drills')
    op.drop_table('drill_templates')
    op.drop_table('trainings')
