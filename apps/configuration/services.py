"""
Read/write access to the flat settings table.

The settlement engine reads settings only through
``store_config.load_store_config``; these helpers back the admin form and
management commands.
"""

import logging

from django.db import transaction

from apps.common.exceptions import ValidationError
from apps.common.storage import storage_guard
from .models import Setting
from .store_config import SPECS_BY_KEY

logger = logging.getLogger(__name__)


def get_setting(key, default=None):
    """Return the raw string value for ``key`` or ``default`` when absent."""
    value = Setting.objects.filter(key=key).values_list('value', flat=True).first()
    return default if value is None else value


def list_settings():
    """Return all settings ordered by key."""
    return list(Setting.objects.all())


@storage_guard
@transaction.atomic
def update_settings_bulk(pairs):
    """
    Upsert several settings in one transaction.

    Known store keys are parsed before anything is written, so a single bad
    value rejects the whole batch.

    Args:
        pairs: Iterable of ``{'key': str, 'value': str}`` dicts, optionally
            with ``description``.

    Returns:
        list[Setting]: The saved settings, in input order.

    Raises:
        ValidationError: If a key is blank or a known key has a value that
            does not parse or is out of range.
    """
    pairs = list(pairs)
    errors = []
    for pair in pairs:
        key = (pair.get('key') or '').strip()
        value = pair.get('value')
        if not key:
            errors.append("key: must not be blank")
            continue
        if value is None:
            errors.append(f"{key}: value is required")
            continue
        spec = SPECS_BY_KEY.get(key)
        if spec is not None:
            try:
                spec.coerce(str(value))
            except ValueError as exc:
                errors.append(f"{key}: {exc}")

    if errors:
        raise ValidationError("Invalid settings: " + "; ".join(errors))

    saved = []
    for pair in pairs:
        key = pair['key'].strip()
        defaults = {'value': str(pair['value']).strip()}
        if pair.get('description') is not None:
            defaults['description'] = pair['description']
        setting, _ = Setting.objects.update_or_create(key=key, defaults=defaults)
        saved.append(setting)

    logger.info("Updated %d setting(s): %s", len(saved), ", ".join(s.key for s in saved))
    return saved


def seed_default_settings(overwrite=False):
    """
    Insert default values for every store setting.

    Existing rows are kept unless ``overwrite`` is set.

    Returns:
        int: Number of rows created or overwritten.
    """
    written = 0
    for key, spec in SPECS_BY_KEY.items():
        defaults = {'value': spec.default, 'description': spec.description}
        if overwrite:
            Setting.objects.update_or_create(key=key, defaults=defaults)
            written += 1
        else:
            _, created = Setting.objects.get_or_create(key=key, defaults=defaults)
            written += int(created)
    return written
