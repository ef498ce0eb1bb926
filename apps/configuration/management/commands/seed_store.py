"""
Management command to seed a fresh installation.

Usage:
    python manage.py seed_store
    python manage.py seed_store --overwrite-settings

This creates:
- Default store settings (exchange rate, minimum order, loyalty, discounts)
- Six origin countries (Kenya, Ecuador, Colombia, Italy, Netherlands, Chile)
- Basic flower types
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.catalog.services import seed_countries, seed_flower_types
from apps.configuration.services import seed_default_settings


class Command(BaseCommand):
    help = 'Seed default store settings and catalog reference data'

    def add_arguments(self, parser):
        parser.add_argument(
            '--overwrite-settings',
            action='store_true',
            help='Reset existing store settings to their default values',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write('Seeding store...')

        settings_count = seed_default_settings(overwrite=options['overwrite_settings'])
        self.stdout.write(f'  Settings written: {settings_count}')

        countries_count = seed_countries()
        self.stdout.write(f'  Countries created: {countries_count}')

        types_count = seed_flower_types()
        self.stdout.write(f'  Flower types created: {types_count}')

        self.stdout.write(self.style.SUCCESS('Store seeded.'))
