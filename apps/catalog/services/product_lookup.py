"""Read-only product lookups used by order settlement."""

from uuid import UUID

from ..models import Product
from .exceptions import ProductNotFoundError


def _as_uuid(value):
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


def get_product(*, product_id) -> Product:
    """
    Fetch a single product.

    Raises:
        ProductNotFoundError: If product doesn't exist or the id is malformed
    """
    pk = _as_uuid(product_id)
    if pk is None:
        raise ProductNotFoundError(f"Product {product_id} not found")
    try:
        return Product.objects.select_related('country').get(id=pk)
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product {product_id} not found")


def get_products_by_ids(product_ids) -> dict:
    """
    Resolve many product ids in one query.

    Args:
        product_ids: Iterable of product ids (UUIDs or strings, duplicates allowed)

    Returns:
        Mapping of ``str(product_id)`` as given to Product for every id that
        exists. Missing or malformed ids are absent; the caller decides how
        to report them.
    """
    wanted = {}
    for pid in product_ids:
        pk = _as_uuid(pid)
        if pk is not None:
            wanted[str(pid)] = pk

    products = {p.id: p for p in Product.objects.filter(id__in=set(wanted.values()))}
    return {key: products[pk] for key, pk in wanted.items() if pk in products}
