import uuid
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('customers', '0001_initial'),
        ('orders', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='LedgerEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('order_amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('loyalty_points', models.PositiveIntegerField(default=0)),
                ('applied_at', models.DateTimeField(auto_now_add=True)),
                ('reversed_at', models.DateTimeField(blank=True, null=True)),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='ledger_entries', to='customers.customer')),
                ('order', models.OneToOneField(on_delete=django.db.models.deletion.PROTECT, related_name='ledger_entry', to='orders.order')),
            ],
            options={
                'db_table': 'ledger_entries',
                'ordering': ['-applied_at'],
                'verbose_name_plural': 'ledger entries',
            },
        ),
    ]
