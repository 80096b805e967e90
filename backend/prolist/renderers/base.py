from datetime import date as date_type
from typing import Protocol

from pydantic import BaseModel, Field

from prolist.models.document import DocumentKey
from prolist.schemas.shipment import Company, Party, Product, Shipment


class RenderLine(BaseModel):
    product: Product
    quantity: int

    @property
    def line_value(self) -> float:
        return self.product.unit_price_fcfa * self.quantity

    @property
    def line_weight(self) -> float:
        return (self.product.weight_kg or 0) * self.quantity


class DocumentTotals(BaseModel):
    value: float = 0.0
    weight: float = 0.0
    items: int = 0


class RenderContext(BaseModel):
    """Everything a renderer needs to lay out a commercial document."""

    doc_key: DocumentKey
    shipment: Shipment
    company: Company
    buyer: Party
    lines: list[RenderLine] = Field(default_factory=list)
    totals: DocumentTotals
    number: str
    date: date_type
    signature_name: str | None = None


class RenderedDocument(BaseModel):
    content: bytes
    file_name: str


class DocumentRenderer(Protocol):
    async def render(self, context: RenderContext) -> RenderedDocument: ...


def compute_totals(lines: list[RenderLine]) -> DocumentTotals:
    totals = DocumentTotals()
    for line in lines:
        totals.value += line.line_value
        totals.weight += line.line_weight
        totals.items += 1
    return totals
