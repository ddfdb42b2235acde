"""create_user_files_and_physical_files

Revision ID: 3f1a9c2d7e10
Revises: 
Create Date: 2025-08-02 11:40:12.518330

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2d7e10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        'physical_files',
        sa.Column('hash', sa.String(length=64), primary_key=True),
        sa.Column('size_bytes', sa.BigInteger(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    )
    op.create_table(
        'user_files',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('filename', sa.String(), nullable=False),
        sa.Column('mime_type', sa.String(), nullable=False),
        sa.Column('physical_file_hash', sa.String(length=64), sa.ForeignKey('physical_files.hash'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(op.f('ix_user_files_id'), 'user_files', ['id'])
    op.create_index(op.f('ix_user_files_user_id'), 'user_files', ['user_id'])
    op.create_index(op.f('ix_user_files_filename'), 'user_files', ['filename'])
    op.create_index(op.f('ix_user_files_created_at'), 'user_files', ['created_at'])

def downgrade():
    op.drop_index(op.f('ix_user_files_created_at'), table_name='user_files')
    op.drop_index(op.f('ix_user_files_filename'), table_name='user_files')
    op.drop_index(op.f('ix_user_files_user_id'), table_name='user_files')
    op.drop_index(op.f('ix_user_files_id'), table_name='user_files')
    op.drop_table('user_files')
    op.drop_table('physical_files')
