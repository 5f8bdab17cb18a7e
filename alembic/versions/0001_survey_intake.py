from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = '0001_survey_intake'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'surveys',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('start_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column('end_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='draft'),
        sa.CheckConstraint("status IN ('draft', 'open', 'closed')", name='ck_surveys_status'),
    )
    op.create_index('ix_surveys_code', 'surveys', ['code'], unique=True)

    op.create_table(
        'departments',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(200), nullable=False, unique=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('sort_order', sa.Integer, nullable=False, server_default='0'),
    )

    op.create_table(
        'questions',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('question_code', sa.String(20), nullable=False),
        sa.Column('scale', sa.String(1), nullable=False),
        sa.Column('question_text', sa.Text(), nullable=False),
        sa.Column('display_order', sa.Integer, nullable=False),
        sa.Column('is_reverse', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
    )
    op.create_index('ix_questions_question_code', 'questions', ['question_code'], unique=True)
    op.create_index('ix_questions_scale', 'questions', ['scale'])

    op.create_table(
        'employees',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('employee_code', sa.String(20), nullable=False),
        sa.Column('department_id', sa.Integer, sa.ForeignKey('departments.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('gender', sa.String(20), nullable=True),
        sa.Column('age_band', sa.String(20), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    )
    op.create_index('ix_employees_employee_code', 'employees', ['employee_code'], unique=True)
    op.create_index('ix_employees_department_id', 'employees', ['department_id'])

    op.create_table(
        'responses',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('survey_id', sa.Integer, sa.ForeignKey('surveys.id', ondelete='CASCADE'), nullable=False),
        sa.Column('employee_id', sa.Integer, sa.ForeignKey('employees.id', ondelete='CASCADE'), nullable=False),
        sa.Column('submitted_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    )
    # un envío por empleado y encuesta: es el control de concurrencia del submit
    op.create_unique_constraint('uq_response_survey_employee', 'responses', ['survey_id', 'employee_id'])
    op.create_index('ix_responses_survey_id', 'responses', ['survey_id'])
    op.create_index('ix_responses_employee_id', 'responses', ['employee_id'])

    op.create_table(
        'response_items',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('response_id', sa.Integer, sa.ForeignKey('responses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('question_id', sa.Integer, sa.ForeignKey('questions.id'), nullable=False),
        sa.Column('raw_score', sa.SmallInteger(), nullable=False),
        sa.Column('scored_score', sa.SmallInteger(), nullable=False),
        sa.CheckConstraint('raw_score BETWEEN 1 AND 6', name='ck_response_items_raw_score'),
        sa.CheckConstraint('scored_score BETWEEN 1 AND 6', name='ck_response_items_scored_score'),
    )
    op.create_unique_constraint('uq_response_item_question', 'response_items', ['response_id', 'question_id'])
    op.create_index('ix_response_items_response_id', 'response_items', ['response_id'])
    op.create_index('ix_response_items_question_id', 'response_items', ['question_id'])

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('actor', sa.String(20), nullable=True),
        sa.Column('action', sa.String(100), nullable=False),
        sa.Column('payload', postgresql.JSONB(), nullable=True),
        sa.Column('ip', sa.String(64), nullable=True),
        sa.Column('ua', sa.Text(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    )
    op.create_index('ix_audit_logs_actor', 'audit_logs', ['actor'])

def downgrade():
    op.drop_index('ix_audit_logs_actor', table_name='audit_logs')
    op.drop_table('audit_logs')
    op.drop_table('response_items')
    op.drop_table('responses')
    op.drop_table('employees')
    op.drop_table('questions')
    op.drop_table('departments')
    op.drop_table('surveys')
