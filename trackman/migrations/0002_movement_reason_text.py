"""
Movement.reason holds free text of any length.
"""

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('trackman', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='movement',
            name='reason',
            field=models.TextField(help_text='Obrigatório. Ex: "Produto danificado"', verbose_name='Motivo'),
        ),
    ]
