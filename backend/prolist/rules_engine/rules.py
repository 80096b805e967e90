"""
Document requirement rules.

Maps a shipment (route, incoterm, mode, product HS codes) to the set of
compliance documents it must carry. Pure: no DB, no settings lookup, no
logging. The same shipment and catalogue always give the same result.

Rules:
- COO when the destination is an EU member state
- PHYTO when any item's product has an agricultural HS chapter
- INSURANCE when the incoterm makes the seller insure the cargo (CIF, CIP)
- CUSTOMS_EXPORT_DECLARATION for sea or air cargo bound for a listed
  declaration destination
"""

import re
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from prolist.models.document import DocumentKey
from prolist.rules_engine.hs import hs_chapter
from prolist.schemas.document import RequirementSet
from prolist.schemas.shipment import Incoterm, Product, Shipment, TransportMode

EU_COUNTRIES = frozenset({
    "FR", "DE", "ES", "IT", "NL", "BE", "AT", "PT", "GR", "IE", "FI", "SE", "DK", "LU",
    "CY", "MT", "SI", "SK", "EE", "LV", "LT", "PL", "CZ", "HU", "RO", "BG", "HR",
})

AGRICULTURAL_HS_CHAPTERS = frozenset({"07", "08", "09", "10", "11", "12", "18"})

INSURED_INCOTERMS = frozenset({Incoterm.CIF, Incoterm.CIP})

DECLARATION_MODES = frozenset({TransportMode.SEA, TransportMode.AIR})

DEFAULT_DECLARATION_DESTINATIONS = frozenset({"UK", "GB", "US", "CA", "CN"})

_DESTINATION = re.compile(r"(?:→|->)\s*([A-Z]{2})")
_ORIGIN = re.compile(r"^\s*([A-Z]{2})\s*(?:→|->)")


class RuleSet(BaseModel):
    """Tables the evaluator classifies against."""

    model_config = ConfigDict(frozen=True)

    eu_countries: frozenset[str] = EU_COUNTRIES
    agricultural_hs_chapters: frozenset[str] = AGRICULTURAL_HS_CHAPTERS
    insured_incoterms: frozenset[Incoterm] = INSURED_INCOTERMS
    declaration_modes: frozenset[TransportMode] = DECLARATION_MODES
    declaration_destinations: frozenset[str] = DEFAULT_DECLARATION_DESTINATIONS


DEFAULT_RULES = RuleSet()


def parse_destination(route: str | None) -> str:
    """Extract the destination country from a route like "CM → FR"."""
    if not route:
        return ""
    match = _DESTINATION.search(route)
    return match.group(1) if match else ""


def parse_origin(route: str | None) -> str:
    if not route:
        return ""
    match = _ORIGIN.search(route)
    return match.group(1) if match else ""


def agricultural_products(
    shipment: Shipment,
    products: Iterable[Product],
    rules: RuleSet = DEFAULT_RULES,
) -> list[Product]:
    """Products on the shipment whose HS chapter is agricultural.

    Items referencing a product missing from the catalogue are skipped.
    """
    catalogue = {p.id: p for p in products}
    found: dict[str, Product] = {}
    for item in shipment.items:
        product = catalogue.get(item.product_id)
        if product is None:
            continue
        if hs_chapter(product.hs_code) in rules.agricultural_hs_chapters:
            found.setdefault(product.id, product)
    return list(found.values())


def evaluate(
    shipment: Shipment,
    products: Iterable[Product],
    rules: RuleSet = DEFAULT_RULES,
) -> RequirementSet:
    """Evaluate which compliance documents the shipment requires."""
    required: set[DocumentKey] = set()
    reasons: dict[DocumentKey, str] = {}

    destination = parse_destination(shipment.route)

    if destination in rules.eu_countries:
        required.add(DocumentKey.COO)
        reasons[DocumentKey.COO] = (
            f"Certificate of Origin required for EU destination ({destination})"
        )

    agri = agricultural_products(shipment, products, rules)
    if agri:
        required.add(DocumentKey.PHYTO)
        names = ", ".join(p.name for p in agri)
        reasons[DocumentKey.PHYTO] = (
            f"Phytosanitary certificate required for agricultural products ({names})"
        )

    if shipment.incoterm in rules.insured_incoterms:
        required.add(DocumentKey.INSURANCE)
        reasons[DocumentKey.INSURANCE] = (
            f"Insurance certificate required for {shipment.incoterm.value} terms"
        )

    if (
        shipment.mode in rules.declaration_modes
        and destination in rules.declaration_destinations
    ):
        required.add(DocumentKey.CUSTOMS_EXPORT_DECLARATION)
        reasons[DocumentKey.CUSTOMS_EXPORT_DECLARATION] = (
            f"Customs export declaration required for {shipment.mode.value} freight to {destination}"
        )

    return RequirementSet(required=frozenset(required), reasons=reasons)
