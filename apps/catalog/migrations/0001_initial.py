import uuid
import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Country',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('code', models.CharField(max_length=2, unique=True)),
                ('name', models.CharField(max_length=100)),
                ('flag', models.CharField(max_length=16)),
            ],
            options={
                'db_table': 'countries',
                'ordering': ['name'],
                'verbose_name_plural': 'countries',
            },
        ),
        migrations.CreateModel(
            name='FlowerType',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('category', models.CharField(choices=[('single', 'Single stem'), ('spray', 'Spray')], default='single', max_length=20)),
            ],
            options={
                'db_table': 'flower_types',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Plantation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('country', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='plantations', to='catalog.country')),
            ],
            options={
                'db_table': 'plantations',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(db_index=True, max_length=200)),
                ('variety', models.CharField(max_length=200)),
                ('flower_class', models.CharField(max_length=50)),
                ('height_cm', models.PositiveIntegerField()),
                ('color', models.CharField(max_length=50)),
                ('price_usd', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('price_uah', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('pack_size', models.PositiveIntegerField(default=25)),
                ('status', models.CharField(choices=[('available', 'Available'), ('preorder', 'Pre-order'), ('expected', 'Expected')], default='available', max_length=20)),
                ('expected_date', models.DateField(blank=True, null=True)),
                ('is_promo', models.BooleanField(default=False)),
                ('catalog_type', models.CharField(choices=[('preorder', 'Pre-order catalog'), ('instock', 'In stock')], default='preorder', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('country', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='products', to='catalog.country')),
                ('flower_type', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='products', to='catalog.flowertype')),
                ('plantation', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='products', to='catalog.plantation')),
            ],
            options={
                'db_table': 'products',
                'ordering': ['name', 'variety'],
                'indexes': [
                    models.Index(fields=['catalog_type', 'status'], name='products_catalog_status_idx'),
                    models.Index(fields=['created_at'], name='products_created_at_idx'),
                ],
            },
        ),
    ]
