"""Plain-text renderer for the documents the system generates itself.

Stands in for the PDF renderer: same inputs, a UTF-8 text file out.
"""

from prolist.document_lifecycle.metadata import document_label
from prolist.exceptions import UnsupportedDocumentKey
from prolist.models.document import DocumentKey
from prolist.renderers.base import RenderContext, RenderedDocument
from prolist.rules_engine.hs import abbreviate_hs


def format_fcfa(amount: float) -> str:
    return f"{round(amount):,} FCFA".replace(",", " ")


class PlainTextRenderer:
    async def render(self, context: RenderContext) -> RenderedDocument:
        if context.doc_key == DocumentKey.INVOICE:
            body = self._invoice(context)
            file_name = f"invoice-{context.number}.txt"
        elif context.doc_key == DocumentKey.PACKING_LIST:
            body = self._packing_list(context)
            file_name = f"packing-list-{context.number}.txt"
        else:
            raise UnsupportedDocumentKey(context.doc_key.value)

        return RenderedDocument(
            content=body.encode("utf-8"),
            file_name=file_name,
        )

    def _header(self, context: RenderContext) -> list[str]:
        shipment = context.shipment
        lines = [
            document_label(context.doc_key).upper(),
            f"No. {context.number}    Date: {context.date.isoformat()}",
            "",
            f"Exporter: {context.company.name}",
            f"          {context.company.address}",
            f"          TIN {context.company.tin}",
            f"Buyer:    {context.buyer.name} ({context.buyer.country})",
        ]
        if context.buyer.address:
            lines.append(f"          {context.buyer.address}")
        lines += [
            "",
            f"Shipment: {shipment.reference}  {shipment.route}  "
            f"{shipment.mode.value}  {shipment.incoterm.value}",
            "",
        ]
        return lines

    def _footer(self, context: RenderContext) -> list[str]:
        lines = [""]
        if context.signature_name:
            lines.append(f"Signed: {context.signature_name}")
        return lines

    def _invoice(self, context: RenderContext) -> str:
        lines = self._header(context)
        lines.append(f"{'Product':<24}{'HS code':<12}{'Qty':>8}{'Unit price':>18}{'Amount':>20}")
        for line in context.lines:
            lines.append(
                f"{line.product.name:<24}{abbreviate_hs(line.product.hs_code):<12}"
                f"{line.quantity:>8}{format_fcfa(line.product.unit_price_fcfa):>18}"
                f"{format_fcfa(line.line_value):>20}"
            )
        lines += ["", f"Total: {format_fcfa(context.totals.value)}"]
        return "\n".join(lines + self._footer(context)) + "\n"

    def _packing_list(self, context: RenderContext) -> str:
        lines = self._header(context)
        lines.append(f"{'Product':<24}{'HS code':<12}{'Qty':>8}{'Unit kg':>10}{'Total kg':>12}")
        for line in context.lines:
            unit_weight = line.product.weight_kg or 0
            lines.append(
                f"{line.product.name:<24}{abbreviate_hs(line.product.hs_code):<12}"
                f"{line.quantity:>8}{unit_weight:>10g}{line.line_weight:>12g}"
            )
        lines += [
            "",
            f"Lines: {context.totals.items}",
            f"Gross weight: {context.totals.weight:g} kg",
        ]
        return "\n".join(lines + self._footer(context)) + "\n"
