from __future__ import annotations
import logging
import re
import time
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from models.product import Product, ProductImage
from models.zone import Delimitation

logger = logging.getLogger(__name__)

IdFactory = Callable[[ProductImage, int], str]

_DIGITS = re.compile(r"\D")


def zone_key(zone: Delimitation) -> str:
    return zone.name or f"zone_{zone.id}"


def id_ordinal(zone: Delimitation) -> int:
    """Recency rank: explicit `created_seq`, else the digits found in the id."""
    if zone.created_seq is not None:
        return zone.created_seq
    digits = _DIGITS.sub("", zone.id)
    return int(digits) if digits else 0


def timestamp_ids(prefix: str = "product_delim") -> IdFactory:
    stamp = int(time.time() * 1000)

    def factory(image: ProductImage, index: int) -> str:
        return f"{prefix}_{stamp}_{index}"

    return factory


def build_canonical_zones(
    existing: Iterable[Delimitation], incoming: Iterable[Delimitation]
) -> List[Delimitation]:
    """Deduplicate by name (or id) and collapse to the last resolved zone.

    On a key collision the zone with the larger ordinal is kept (ties keep
    the zone seen first), but the key still counts as resolved at that
    point. Incoming zones resolve after existing ones, in the order given,
    so the last incoming key is the one that survives.
    """
    resolved: Dict[str, Tuple[int, Delimitation]] = {}
    for step, zone in enumerate([*existing, *incoming]):
        key = zone_key(zone)
        current = resolved.get(key)
        if current is None or id_ordinal(zone) > id_ordinal(current[1]):
            resolved[key] = (step, zone)
        else:
            resolved[key] = (step, current[1])

    if len(resolved) <= 1:
        return [z for _, z in resolved.values()]

    _, newest = max(resolved.values(), key=lambda item: item[0])
    logger.info(
        "collapsing %d canonical zones to %r", len(resolved), zone_key(newest)
    )
    return [newest]


def synchronize_product(
    product: Product,
    incoming: Sequence[Delimitation] = (),
    id_factory: Optional[IdFactory] = None,
) -> Product:
    """Overwrite every image of every color with the same canonical zone set."""
    existing = [z for image in product.iter_images() for z in image.delimitations]
    canonical = build_canonical_zones(existing, incoming)

    stamp = int(time.time() * 1000)
    synced = product.model_copy(deep=True)
    for image in synced.iter_images():
        zones = []
        for index, zone in enumerate(canonical):
            update = {"name": zone.name or f"Zone {index + 1}"}
            if id_factory is not None:
                update["id"] = id_factory(image, index)
                # generated ids carry extra digits; pin recency explicitly
                if zone.created_seq is None:
                    update["created_seq"] = stamp
            zones.append(zone.model_copy(update=update, deep=True))
        image.delimitations = zones

    image_count = sum(1 for _ in synced.iter_images())
    logger.info(
        "synchronized %d zone(s) onto %d image(s) of product %s",
        len(canonical), image_count, product.id,
    )
    return synced


def duplicate_zones(
    product: Product,
    source_image_id: str,
    zone_ids: Optional[Sequence[str]] = None,
    id_factory: Optional[IdFactory] = None,
) -> Product:
    source = product.find_image(source_image_id)
    if source is None:
        raise LookupError(f"image {source_image_id} not found in product")

    selected = list(source.delimitations)
    if zone_ids is not None:
        # selection order decides which zone survives the collapse
        by_id = {z.id: z for z in source.delimitations}
        selected = [by_id[str(z)] for z in zone_ids if str(z) in by_id]
    return synchronize_product(product, selected, id_factory)
