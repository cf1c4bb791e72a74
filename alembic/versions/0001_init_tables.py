from alembic import op
import sqlalchemy as sa

revision = "0001_init_tables"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'departments',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('budget', sa.Numeric(10, 2), nullable=True),
        sa.Column('createdAt', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updatedAt', sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        'employees',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('firstName', sa.String(50), nullable=False),
        sa.Column('lastName', sa.String(50), nullable=False),
        sa.Column('email', sa.String(100), nullable=False, unique=True),
        sa.Column('position', sa.String(100), nullable=False),
        sa.Column('salary', sa.Numeric(10, 2), nullable=True),
        sa.Column('hireDate', sa.Date(), nullable=False),
        sa.Column(
            'departmentId',
            sa.Integer,
            sa.ForeignKey('departments.id', ondelete='RESTRICT', onupdate='CASCADE'),
            nullable=False,
        ),
        sa.Column('createdAt', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updatedAt', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_employees_departmentId', 'employees', ['departmentId'])


def downgrade():
    op.drop_index('ix_employees_departmentId', table_name='employees')
    op.drop_table('employees')
    op.drop_table('departments')
