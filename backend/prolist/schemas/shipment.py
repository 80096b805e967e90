"""Read-side schemas for shipments and the catalogue entities they reference."""

import enum

from pydantic import BaseModel, Field


class TransportMode(str, enum.Enum):
    SEA = "SEA"
    AIR = "AIR"
    ROAD = "ROAD"


class Incoterm(str, enum.Enum):
    FOB = "FOB"
    CIF = "CIF"
    CIP = "CIP"


class ShipmentItem(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    product_id: str
    quantity: int = Field(..., ge=0)


class Shipment(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    reference: str
    buyer: str
    incoterm: Incoterm
    mode: TransportMode
    route: str
    value_fcfa: float = 0.0
    status: str = "draft"
    items: list[ShipmentItem] = Field(default_factory=list)


class Product(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    name: str
    hs_code: str
    unit_price_fcfa: float
    weight_kg: float | None = None


class Party(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    name: str
    country: str
    type: str = "buyer"
    address: str | None = None


class Company(BaseModel):
    name: str
    address: str
    tin: str
