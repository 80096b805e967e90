"""Demo shipments, products and buyers for a fresh database."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from prolist.models.shipment import Party, Product, Shipment, ShipmentItem

logger = logging.getLogger("prolist.seeds")

DEMO_PRODUCTS = [
    {"id": "p_1", "name": "Cocoa 25kg", "hs_code": "180100", "unit_price_fcfa": 85000, "weight_kg": 25},
    {"id": "p_2", "name": "Coffee 60kg", "hs_code": "090111", "unit_price_fcfa": 105000, "weight_kg": 60},
    {"id": "p_3", "name": "Timber 1m³", "hs_code": "440710", "unit_price_fcfa": 200000, "weight_kg": 800},
]

DEMO_PARTIES = [
    {"id": "partner_1", "name": "EuroFoods SARL", "country": "FR", "type": "buyer",
     "address": "12 Rue de la République, 69002 Lyon, France"},
    {"id": "partner_2", "name": "Nordic Trade AB", "country": "SE", "type": "buyer",
     "address": "Storgatan 15, 111 51 Stockholm, Sweden"},
    {"id": "partner_3", "name": "Mediterraneo SpA", "country": "IT", "type": "buyer",
     "address": "Via Roma 42, 20121 Milano, Italy"},
    {"id": "partner_4", "name": "Atlantic Imports Ltd", "country": "UK", "type": "buyer",
     "address": "25 King Street, London SW1Y 6QX, United Kingdom"},
    {"id": "partner_5", "name": "German Trading GmbH", "country": "DE", "type": "buyer",
     "address": "Hauptstraße 123, 10115 Berlin, Germany"},
]

DEMO_SHIPMENTS = [
    {
        "id": "s_5001", "reference": "PL-2025-EX-0001", "buyer": "EuroFoods SARL",
        "incoterm": "FOB", "mode": "SEA", "route": "CM → FR", "value_fcfa": 54000000,
        "status": "draft",
        "items": [("item_1", "p_1", 200), ("item_2", "p_2", 100)],
    },
    {
        "id": "s_5002", "reference": "PL-2025-EX-0002", "buyer": "Nordic Trade AB",
        "incoterm": "CIP", "mode": "AIR", "route": "CM → SE", "value_fcfa": 18500000,
        "status": "submitted",
        "items": [("item_3", "p_2", 50)],
    },
    {
        "id": "s_5003", "reference": "PL-2025-EX-0003", "buyer": "Mediterraneo SpA",
        "incoterm": "CIF", "mode": "SEA", "route": "CM → IT", "value_fcfa": 33300000,
        "status": "cleared",
        "items": [("item_4", "p_3", 25)],
    },
    {
        "id": "s_5004", "reference": "PL-2025-EX-0004", "buyer": "Atlantic Imports Ltd",
        "incoterm": "FOB", "mode": "SEA", "route": "CM → UK", "value_fcfa": 28700000,
        "status": "submitted",
        "items": [("item_5", "p_1", 150)],
    },
    {
        "id": "s_5005", "reference": "PL-2025-EX-0005", "buyer": "German Trading GmbH",
        "incoterm": "CIP", "mode": "AIR", "route": "CM → DE", "value_fcfa": 42000000,
        "status": "draft",
        "items": [("item_6", "p_2", 80), ("item_7", "p_3", 30)],
    },
]


async def seed_demo_data(db: AsyncSession) -> int:
    """Insert the demo catalogue and shipments unless shipments already exist.

    Returns the number of shipments inserted.
    """
    existing = await db.execute(select(Shipment).limit(1))
    if existing.scalar_one_or_none() is not None:
        logger.info("Demo data already seeded, skipping")
        return 0

    for data in DEMO_PRODUCTS:
        db.add(Product(**data))
    for data in DEMO_PARTIES:
        db.add(Party(**data))

    for data in DEMO_SHIPMENTS:
        fields = {k: v for k, v in data.items() if k != "items"}
        shipment = Shipment(**fields)
        shipment.items = [
            ShipmentItem(id=item_id, product_id=product_id, quantity=quantity, position=i)
            for i, (item_id, product_id, quantity) in enumerate(data["items"])
        ]
        db.add(shipment)

    await db.flush()
    logger.info("Seeded %d demo shipments", len(DEMO_SHIPMENTS))
    return len(DEMO_SHIPMENTS)
