"""initial catalog, leads and content tables

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-19 10:12:41.532907

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'plans',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('slug', sa.String(length=50), nullable=False,
                  comment='starter, professional, premium'),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('tagline', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True, comment='One bullet per line'),
        sa.Column('base_price_cents', sa.Integer(), nullable=False, comment='Price in cents (EUR)'),
        sa.Column('is_highlighted', sa.Boolean(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('base_price_cents >= 0', name=op.f('ck_plans_base_price_non_negative')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_plans')),
        sa.UniqueConstraint('slug', name=op.f('uq_plans_slug')),
    )
    op.create_index(op.f('ix_plans_id'), 'plans', ['id'], unique=False)

    op.create_table(
        'option_groups',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('group_type', sa.String(length=20), nullable=False,
                  comment='quantity|switch|addon'),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("group_type IN ('quantity', 'switch', 'addon')",
                           name=op.f('ck_option_groups_group_type_known')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_option_groups')),
    )
    op.create_index(op.f('ix_option_groups_id'), 'option_groups', ['id'], unique=False)

    op.create_table(
        'options',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('group_id', sa.UUID(), nullable=False),
        sa.Column('label', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('unit_price_cents', sa.Integer(), nullable=False, comment='Price in cents (EUR)'),
        sa.Column('min_qty', sa.Integer(), nullable=False),
        sa.Column('max_qty', sa.Integer(), nullable=False),
        sa.Column('default_qty', sa.Integer(), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('unit_price_cents >= 0', name=op.f('ck_options_unit_price_non_negative')),
        sa.CheckConstraint('min_qty >= 0 AND min_qty <= default_qty AND default_qty <= max_qty',
                           name=op.f('ck_options_quantity_bounds')),
        sa.ForeignKeyConstraint(['group_id'], ['option_groups.id'],
                                name=op.f('fk_options_group_id_option_groups'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_options')),
    )
    op.create_index(op.f('ix_options_id'), 'options', ['id'], unique=False)
    op.create_index(op.f('ix_options_group_id'), 'options', ['group_id'], unique=False)

    op.create_table(
        'feature_groups',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('tooltip_enabled', sa.Boolean(), nullable=False),
        sa.Column('tooltip_text', sa.Text(), nullable=True),
        sa.Column('tooltip_link', sa.String(length=500), nullable=True),
        sa.Column('tooltip_image', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_feature_groups')),
    )
    op.create_index(op.f('ix_feature_groups_id'), 'feature_groups', ['id'], unique=False)

    op.create_table(
        'features',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('group_id', sa.UUID(), nullable=False),
        sa.Column('label', sa.String(length=255), nullable=False),
        sa.Column('value_type', sa.String(length=20), nullable=False, comment='boolean|text'),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('tooltip_enabled', sa.Boolean(), nullable=False),
        sa.Column('tooltip_text', sa.Text(), nullable=True),
        sa.Column('tooltip_link', sa.String(length=500), nullable=True),
        sa.Column('tooltip_image', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['group_id'], ['feature_groups.id'],
                                name=op.f('fk_features_group_id_feature_groups'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_features')),
    )
    op.create_index(op.f('ix_features_id'), 'features', ['id'], unique=False)
    op.create_index(op.f('ix_features_group_id'), 'features', ['group_id'], unique=False)

    op.create_table(
        'plan_features',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('feature_id', sa.UUID(), nullable=False),
        sa.Column('plan_id', sa.UUID(), nullable=False),
        sa.Column('value_boolean', sa.Boolean(), nullable=True),
        sa.Column('value_text', sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(['feature_id'], ['features.id'],
                                name=op.f('fk_plan_features_feature_id_features'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['plan_id'], ['plans.id'],
                                name=op.f('fk_plan_features_plan_id_plans'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_plan_features')),
        sa.UniqueConstraint('feature_id', 'plan_id', name='uq_plan_features_feature_plan'),
    )
    op.create_index(op.f('ix_plan_features_id'), 'plan_features', ['id'], unique=False)
    op.create_index(op.f('ix_plan_features_feature_id'), 'plan_features', ['feature_id'], unique=False)
    op.create_index(op.f('ix_plan_features_plan_id'), 'plan_features', ['plan_id'], unique=False)

    op.create_table(
        'leads',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('city', sa.String(length=255), nullable=True),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('plan_id', sa.UUID(), nullable=True),
        sa.Column('plan_name', sa.String(length=100), nullable=True),
        sa.Column('selected_options', postgresql.JSONB(astext_type=sa.Text()), nullable=False,
                  comment='[{"option_id", "label", "quantity", "unit_price_cents", "total_price_cents"}]'),
        sa.Column('total_price_cents', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['plan_id'], ['plans.id'],
                                name=op.f('fk_leads_plan_id_plans'), ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_leads')),
    )
    op.create_index(op.f('ix_leads_id'), 'leads', ['id'], unique=False)
    op.create_index(op.f('ix_leads_email'), 'leads', ['email'], unique=False)
    op.create_index(op.f('ix_leads_plan_id'), 'leads', ['plan_id'], unique=False)
    op.create_index(op.f('ix_leads_created_at'), 'leads', ['created_at'], unique=False)

    op.create_table(
        'email_logs',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('recipient_email', sa.String(length=255), nullable=False),
        sa.Column('lead_id', sa.UUID(), nullable=True),
        sa.Column('email_type', sa.String(length=50), nullable=False,
                  comment='lead_confirmation|lead_notification'),
        sa.Column('subject', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False,
                  comment='sent|failed|skipped'),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['lead_id'], ['leads.id'],
                                name=op.f('fk_email_logs_lead_id_leads'), ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_email_logs')),
    )
    op.create_index(op.f('ix_email_logs_id'), 'email_logs', ['id'], unique=False)
    op.create_index(op.f('ix_email_logs_recipient_email'), 'email_logs', ['recipient_email'], unique=False)
    op.create_index(op.f('ix_email_logs_lead_id'), 'email_logs', ['lead_id'], unique=False)
    op.create_index(op.f('ix_email_logs_email_type'), 'email_logs', ['email_type'], unique=False)
    op.create_index(op.f('ix_email_logs_status'), 'email_logs', ['status'], unique=False)
    op.create_index(op.f('ix_email_logs_created_at'), 'email_logs', ['created_at'], unique=False)

    op.create_table(
        'site_content',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('key', sa.String(length=50), nullable=False,
                  comment='header|hero|contact|footer|thankYou'),
        sa.Column('heading', sa.String(length=255), nullable=True),
        sa.Column('body', sa.Text(), nullable=True),
        sa.Column('cta_label', sa.String(length=100), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_site_content')),
    )
    op.create_index(op.f('ix_site_content_id'), 'site_content', ['id'], unique=False)
    op.create_index(op.f('ix_site_content_key'), 'site_content', ['key'], unique=True)

    op.create_table(
        'seo_settings',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('meta_title', sa.String(length=255), nullable=True),
        sa.Column('meta_description', sa.Text(), nullable=True),
        sa.Column('meta_keywords', sa.Text(), nullable=True),
        sa.Column('og_title', sa.String(length=255), nullable=True),
        sa.Column('og_description', sa.Text(), nullable=True),
        sa.Column('og_image', sa.String(length=500), nullable=True),
        sa.Column('google_analytics_id', sa.String(length=50), nullable=True),
        sa.Column('google_analytics_script', sa.Text(), nullable=True),
        sa.Column('custom_head_code', sa.Text(), nullable=True),
        sa.Column('robots_txt', sa.Text(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_seo_settings')),
    )
    op.create_index(op.f('ix_seo_settings_id'), 'seo_settings', ['id'], unique=False)

    op.create_table(
        'footer_links',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('label', sa.String(length=255), nullable=False),
        sa.Column('url', sa.String(length=500), nullable=False),
        sa.Column('open_in_new_tab', sa.Boolean(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_footer_links')),
    )
    op.create_index(op.f('ix_footer_links_id'), 'footer_links', ['id'], unique=False)

    op.create_table(
        'custom_pages',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('is_html', sa.Boolean(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_custom_pages')),
    )
    op.create_index(op.f('ix_custom_pages_id'), 'custom_pages', ['id'], unique=False)
    op.create_index(op.f('ix_custom_pages_slug'), 'custom_pages', ['slug'], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_custom_pages_slug'), table_name='custom_pages')
    op.drop_index(op.f('ix_custom_pages_id'), table_name='custom_pages')
    op.drop_table('custom_pages')
    op.drop_index(op.f('ix_footer_links_id'), table_name='footer_links')
    op.drop_table('footer_links')
    op.drop_index(op.f('ix_seo_settings_id'), table_name='seo_settings')
    op.drop_table('seo_settings')
    op.drop_index(op.f('ix_site_content_key'), table_name='site_content')
    op.drop_index(op.f('ix_site_content_id'), table_name='site_content')
    op.drop_table('site_content')
    op.drop_index(op.f('ix_email_logs_created_at'), table_name='email_logs')
    op.drop_index(op.f('ix_email_logs_status'), table_name='email_logs')
    op.drop_index(op.f('ix_email_logs_email_type'), table_name='email_logs')
    op.drop_index(op.f('ix_email_logs_lead_id'), table_name='email_logs')
    op.drop_index(op.f('ix_email_logs_recipient_email'), table_name='email_logs')
    op.drop_index(op.f('ix_email_logs_id'), table_name='email_logs')
    op.drop_table('email_logs')
    op.drop_index(op.f('ix_leads_created_at'), table_name='leads')
    op.drop_index(op.f('ix_leads_plan_id'), table_name='leads')
    op.drop_index(op.f('ix_leads_email'), table_name='leads')
    op.drop_index(op.f('ix_leads_id'), table_name='leads')
    op.drop_table('leads')
    op.drop_index(op.f('ix_plan_features_plan_id'), table_name='plan_features')
    op.drop_index(op.f('ix_plan_features_feature_id'), table_name='plan_features')
    op.drop_index(op.f('ix_plan_features_id'), table_name='plan_features')
    op.drop_table('plan_features')
    op.drop_index(op.f('ix_features_group_id'), table_name='features')
    op.drop_index(op.f('ix_features_id'), table_name='features')
    op.drop_table('features')
    op.drop_index(op.f('ix_feature_groups_id'), table_name='feature_groups')
    op.drop_table('feature_groups')
    op.drop_index(op.f('ix_options_group_id'), table_name='options')
    op.drop_index(op.f('ix_options_id'), table_name='options')
    op.drop_table('options')
    op.drop_index(op.f('ix_option_groups_id'), table_name='option_groups')
    op.drop_table('option_groups')
    op.drop_index(op.f('ix_plans_id'), table_name='plans')
    op.drop_table('plans')
