"""initial schema

Revision ID: 3f9c2a7d1b04
Revises:
Create Date: 2026-10-19 13:20:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '3f9c2a7d1b04'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ---------- ENUM DEFINITIONS ----------
    languagetype = sa.Enum('en', 'hi', name='languagetype')
    issuecategory = sa.Enum('waste', 'roads', 'streetlights', 'water', 'other', name='issuecategory')
    issuestatus = sa.Enum('submitted', 'acknowledged', 'in_progress', 'resolved', name='issuestatus')
    alertseverity = sa.Enum('low', 'medium', 'high', 'critical', name='alertseverity')
    eventtype = sa.Enum('camp', 'community_event', 'meetup', name='eventtype')
    approvalrequesttype = sa.Enum(
        'donation_certificate', 'volunteer_certificate', 'event_stall', 'event_organizer',
        name='approvalrequesttype'
    )
    approvalstatus = sa.Enum('pending', 'approved', 'rejected', name='approvalstatus')

    # ---------- USERS ----------
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('password_hash', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('full_name', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('phone', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('language', languagetype, nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'admin_users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )

    # ---------- ISSUES ----------
    op.create_table(
        'issues',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('user_email', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('user_phone', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('category', issuecategory, nullable=False),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('address', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('photo_url', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('before_photo_url', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('after_photo_url', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('status', issuestatus, nullable=False),
        sa.Column('resolved_at', sa.DateTime(), nullable=True),
        sa.Column('upvotes', sa.Integer(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_issues_created_at'), 'issues', ['created_at'])
    op.create_index(op.f('ix_issues_user_id'), 'issues', ['user_id'])
    op.create_index(op.f('ix_issues_category'), 'issues', ['category'])
    op.create_index(op.f('ix_issues_status'), 'issues', ['status'])

    op.create_table(
        'issue_upvotes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('issue_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['issue_id'], ['issues.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('issue_id', 'user_id', name='uq_issue_user_upvote'),
    )
    op.create_index(op.f('ix_issue_upvotes_issue_id'), 'issue_upvotes', ['issue_id'])
    op.create_index(op.f('ix_issue_upvotes_user_id'), 'issue_upvotes', ['user_id'])

    op.create_table(
        'feedback',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('issue_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.ForeignKeyConstraint(['issue_id'], ['issues.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_feedback_issue_id'), 'feedback', ['issue_id'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('title_en', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('title_hi', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('message_en', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('message_hi', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('issue_id', sa.Uuid(), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['issue_id'], ['issues.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_notifications_user_id'), 'notifications', ['user_id'])
    op.create_index(op.f('ix_notifications_issue_id'), 'notifications', ['issue_id'])

    # ---------- COMMUNITY ----------
    op.create_table(
        'donations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        sa.Column('donor_name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('donor_email', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('donor_phone', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('purpose', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('is_anonymous', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_donations_created_at'), 'donations', ['created_at'])
    op.create_index(op.f('ix_donations_user_id'), 'donations', ['user_id'])

    op.create_table(
        'volunteers',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('full_name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('phone', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('skills', sa.JSON(), nullable=True),
        sa.Column('availability', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index(op.f('ix_volunteers_is_active'), 'volunteers', ['is_active'])

    op.create_table(
        'local_stalls',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('category', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('address', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('phone', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('discount_info', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('discount_percentage', sa.Integer(), nullable=True),
        sa.Column('photo_url', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_local_stalls_is_active'), 'local_stalls', ['is_active'])

    op.create_table(
        'emergency_alerts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        sa.Column('title_en', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('title_hi', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('message_en', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('message_hi', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('severity', alertseverity, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('expires_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_emergency_alerts_severity'), 'emergency_alerts', ['severity'])
    op.create_index(op.f('ix_emergency_alerts_is_active'), 'emergency_alerts', ['is_active'])

    op.create_table(
        'community_events',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        sa.Column('title_en', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('title_hi', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('description_en', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('description_hi', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('event_type', eventtype, nullable=False),
        sa.Column('location', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=True),
        sa.Column('photo_url', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('max_participants', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_community_events_event_type'), 'community_events', ['event_type'])
    op.create_index(op.f('ix_community_events_start_date'), 'community_events', ['start_date'])
    op.create_index(op.f('ix_community_events_is_active'), 'community_events', ['is_active'])

    op.create_table(
        'event_registrations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('registered_at', sa.DateTime(), nullable=False),
        sa.Column('event_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['event_id'], ['community_events.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('event_id', 'user_id', name='uq_event_user_registration'),
    )
    op.create_index(op.f('ix_event_registrations_event_id'), 'event_registrations', ['event_id'])
    op.create_index(op.f('ix_event_registrations_user_id'), 'event_registrations', ['user_id'])

    # ---------- APPROVALS ----------
    op.create_table(
        'approval_requests',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('request_type', approvalrequesttype, nullable=False),
        sa.Column('status', approvalstatus, nullable=False),
        sa.Column('reference_id', sa.Uuid(), nullable=True),
        sa.Column('event_id', sa.Uuid(), nullable=True),
        sa.Column('stall_description', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('proposed_event_title', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('proposed_event_description', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('proposed_event_date', sa.DateTime(), nullable=True),
        sa.Column('proposed_event_location', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('admin_notes', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('reviewed_by', sa.Uuid(), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('certificate_number', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('certificate_generated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['event_id'], ['community_events.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['reviewed_by'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('certificate_number'),
        sa.UniqueConstraint('user_id', 'request_type', 'reference_id', name='uq_user_request_reference'),
    )
    op.create_index(op.f('ix_approval_requests_user_id'), 'approval_requests', ['user_id'])
    op.create_index(op.f('ix_approval_requests_request_type'), 'approval_requests', ['request_type'])
    op.create_index(op.f('ix_approval_requests_status'), 'approval_requests', ['status'])


def downgrade() -> None:
    for table in (
        'approval_requests',
        'event_registrations',
        'community_events',
        'emergency_alerts',
        'local_stalls',
        'volunteers',
        'donations',
        'notifications',
        'feedback',
        'issue_upvotes',
        'issues',
        'admin_users',
        'users',
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for name in (
        'approvalstatus', 'approvalrequesttype', 'eventtype', 'alertseverity',
        'issuestatus', 'issuecategory', 'languagetype',
    ):
        sa.Enum(name=name).drop(bind, checkfirst=True)
