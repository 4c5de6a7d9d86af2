"""
Initial migration for Trackman models.
"""

from decimal import Decimal
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


STATUS_CHOICES = [
    ('RECEIVED', 'Recebido'),
    ('IN_ANALYSIS', 'Em Análise'),
    ('APPROVED', 'Aprovado'),
    ('REJECTED', 'Rejeitado'),
    ('IN_STORAGE', 'Em Armazenamento'),
    ('IN_PREPARATION', 'Em Preparação'),
    ('IN_SHIPPING', 'Em Expedição'),
    ('DELIVERED', 'Entregue'),
    ('IN_RETURN', 'Em Devolução'),
    ('ELIMINATED', 'Eliminado'),
    ('CANCELLED', 'Cancelado'),
]


class Migration(migrations.Migration):
    """Create Trackman models: Company, Product, Movement, AuditLog."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Company',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=150, verbose_name='Nome')),
                ('is_active', models.BooleanField(default=True, verbose_name='Ativa')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Empresa',
                'verbose_name_plural': 'Empresas',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('internal_code', models.CharField(max_length=50, verbose_name='Código Interno')),
                ('description', models.CharField(max_length=255, verbose_name='Descrição')),
                ('quantity', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12, verbose_name='Quantidade')),
                ('unit', models.CharField(help_text='Ex: un, kg, cx, palete', max_length=20, verbose_name='Unidade')),
                ('current_location', models.CharField(blank=True, max_length=150, verbose_name='Localização Atual')),
                ('observations', models.TextField(blank=True, verbose_name='Observações')),
                ('status', models.CharField(choices=STATUS_CHOICES, db_index=True, default='RECEIVED', max_length=20, verbose_name='Status')),
                ('last_moved_at', models.DateTimeField(blank=True, null=True, verbose_name='Última Movimentação')),
                ('shipped_at', models.DateTimeField(blank=True, help_text='Preenchido ao entregar ou eliminar o produto', null=True, verbose_name='Expedido em')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='products', to='trackman.company', verbose_name='Empresa')),
            ],
            options={
                'verbose_name': 'Produto',
                'verbose_name_plural': 'Produtos',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['company', 'status'], name='trackman_prod_company_status')],
                'constraints': [models.UniqueConstraint(fields=('company', 'internal_code'), name='trackman_product_unique_code_per_company')],
            },
        ),
        migrations.CreateModel(
            name='Movement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('previous_status', models.CharField(blank=True, choices=STATUS_CHOICES, max_length=20, null=True, verbose_name='Status Anterior')),
                ('new_status', models.CharField(choices=STATUS_CHOICES, max_length=20, verbose_name='Novo Status')),
                ('quantity', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12, verbose_name='Quantidade')),
                ('location', models.CharField(blank=True, max_length=150, verbose_name='Localização')),
                ('reason', models.CharField(help_text='Obrigatório. Ex: "Produto danificado"', max_length=255, verbose_name='Motivo')),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data/Hora')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='movements', to='trackman.product', verbose_name='Produto')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Movimento',
                'verbose_name_plural': 'Movimentos',
                'ordering': ['-created_at', '-pk'],
                'indexes': [models.Index(fields=['product', 'created_at'], name='trackman_move_product_created')],
            },
        ),
        migrations.CreateModel(
            name='AuditLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(choices=[('CREATE', 'Criação'), ('UPDATE', 'Atualização'), ('DELETE', 'Eliminação'), ('STATUS_CHANGE', 'Mudança de status')], db_index=True, max_length=20, verbose_name='Ação')),
                ('entity', models.CharField(help_text='Ex: Product', max_length=50, verbose_name='Entidade')),
                ('entity_id', models.CharField(max_length=64, verbose_name='ID da Entidade')),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data/Hora')),
                ('company', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='audit_logs', to='trackman.company', verbose_name='Empresa')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Usuário')),
            ],
            options={
                'verbose_name': 'Registo de Auditoria',
                'verbose_name_plural': 'Registos de Auditoria',
                'ordering': ['-created_at', '-pk'],
                'indexes': [models.Index(fields=['entity', 'entity_id'], name='trackman_audit_entity')],
            },
        ),
    ]
