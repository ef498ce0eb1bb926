"""Reference data every fresh installation starts with."""

from ..models import Country, FlowerType, FlowerCategory

DEFAULT_COUNTRIES = [
    ('KE', 'Kenya'),
    ('EC', 'Ecuador'),
    ('CO', 'Colombia'),
    ('IT', 'Italy'),
    ('NL', 'Netherlands'),
    ('CL', 'Chile'),
]

DEFAULT_FLOWER_TYPES = [
    ('Троянда', FlowerCategory.SINGLE),
    ('Кущова троянда', FlowerCategory.SPRAY),
    ('Хризантема', FlowerCategory.SPRAY),
    ('Гербера', FlowerCategory.SINGLE),
    ('Тюльпан', FlowerCategory.SINGLE),
    ('Еустома', FlowerCategory.SINGLE),
    ('Гортензія', FlowerCategory.SINGLE),
]


def seed_countries() -> int:
    """Create the origin countries that are missing. Returns how many were created."""
    created_count = 0
    for code, name in DEFAULT_COUNTRIES:
        # ISO code doubles as the flag; the UI renders it as an icon
        _, created = Country.objects.get_or_create(code=code, defaults={'name': name, 'flag': code})
        created_count += int(created)
    return created_count


def seed_flower_types() -> int:
    created_count = 0
    for name, category in DEFAULT_FLOWER_TYPES:
        _, created = FlowerType.objects.get_or_create(name=name, defaults={'category': category})
        created_count += int(created)
    return created_count
