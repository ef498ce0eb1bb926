"""
Validate store settings at deploy time.

Usage:
    python manage.py check_store_config

Exits with a non-zero status when a required setting is missing or malformed.
"""

from django.core.management.base import BaseCommand, CommandError

from apps.common.exceptions import ConfigurationError
from apps.configuration.store_config import load_store_config


class Command(BaseCommand):
    help = 'Load and validate the typed store configuration'

    def handle(self, *args, **options):
        try:
            config = load_store_config()
        except ConfigurationError as e:
            raise CommandError(str(e))

        for field, value in vars(config).items():
            self.stdout.write(f'  {field} = {value}')
        self.stdout.write(self.style.SUCCESS('Store configuration is valid.'))
