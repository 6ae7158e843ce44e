"""
PDF-Generierung für Verkäufe und Einkäufe.

Ersetzt den Browser-Druck der Listen durch druckfertige Belege.
"""
from io import BytesIO
from datetime import datetime

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, HRFlowable
from reportlab.lib.enums import TA_CENTER, TA_RIGHT

from iliri.config import settings
from iliri.models import Sale, Purchase, Payment


# ============ STYLES ============

GREY = colors.HexColor('#666666')

# Name -> (Basis-Style, Attribute)
LEDGER_STYLES = {
    'DocTitle': ('Heading1', dict(fontSize=16, spaceAfter=4*mm)),
    'Sender': ('Normal', dict(fontSize=8, textColor=GREY)),
    'Recipient': ('Normal', dict(fontSize=11, leading=14)),
    'Total': ('Normal', dict(fontSize=10, leading=14, alignment=TA_RIGHT)),
    'Footer': ('Normal', dict(fontSize=8, textColor=GREY, alignment=TA_CENTER)),
}


def get_custom_styles():
    styles = getSampleStyleSheet()
    for name, (parent, attrs) in LEDGER_STYLES.items():
        styles.add(ParagraphStyle(name=name, parent=styles[parent], **attrs))
    return styles


# ============ HILFSFUNKTIONEN ============

def format_date(d: datetime) -> str:
    return d.strftime("%d/%m/%Y")


def format_amount(value: float) -> str:
    return f"{value:.2f}"


def _meta_table(rows: list[list[str]]) -> Table:
    table = Table(rows, colWidths=[35*mm, 60*mm])
    table.setStyle(TableStyle([
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('TEXTCOLOR', (0, 0), (0, -1), GREY),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 2),
    ]))
    return table


def _items_table(rows: list[list[str]]) -> Table:
    table = Table(rows, colWidths=[25*mm, 60*mm, 20*mm, 30*mm, 30*mm])
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#f5f5f5')),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('ALIGN', (2, 0), (-1, -1), 'RIGHT'),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('LINEBELOW', (0, 0), (-1, 0), 1, colors.HexColor('#cccccc')),
        ('LINEBELOW', (0, 1), (-1, -2), 0.5, colors.HexColor('#eeeeee')),
        ('LINEBELOW', (0, -1), (-1, -1), 1, colors.HexColor('#cccccc')),
    ]))
    return table


def _build(title: str, recipient: str, meta: list[list[str]], rows: list[list[str]], totals: list[str]) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=20*mm,
        leftMargin=20*mm,
        topMargin=20*mm,
        bottomMargin=20*mm,
        title=title,
    )
    styles = get_custom_styles()
    story = []

    # ---- HEADER ----
    sender_line = " · ".join(p for p in [settings.company_name, settings.company_address, settings.company_city] if p)
    story.append(Paragraph(sender_line, styles['Sender']))
    story.append(Spacer(1, 8*mm))
    story.append(Paragraph(recipient, styles['Recipient']))
    story.append(Spacer(1, 10*mm))

    # ---- TITEL + META ----
    story.append(Paragraph(title, styles['DocTitle']))
    story.append(_meta_table(meta))
    story.append(Spacer(1, 8*mm))
    story.append(HRFlowable(width="100%", thickness=0.5, color=colors.HexColor('#cccccc')))
    story.append(Spacer(1, 5*mm))

    # ---- POSITIONEN ----
    story.append(_items_table(rows))
    story.append(Spacer(1, 5*mm))
    for line in totals:
        story.append(Paragraph(line, styles['Total']))

    # ---- FOOTER ----
    story.append(Spacer(1, 15*mm))
    story.append(HRFlowable(width="100%", thickness=0.5, color=colors.HexColor('#cccccc')))
    story.append(Spacer(1, 3*mm))
    footer_text = " · ".join(p for p in [settings.company_name, settings.company_phone, settings.company_email] if p)
    story.append(Paragraph(footer_text, styles['Footer']))

    doc.build(story)
    return buffer.getvalue()


# ============ PDF GENERIERUNG ============

def generate_sale_pdf(sale: Sale, payments: list[Payment]) -> bytes:
    """
    Beleg für einen Verkauf.

    Args:
        sale: Der Verkauf mit seinen Positionen (Snapshots)
        payments: Zahlungen aus dem Journal, neueste zuerst

    Returns:
        PDF als bytes
    """
    recipient = f"<b>{sale.client_name}</b>"
    if sale.client_reference:
        recipient += f"<br/>{sale.client_reference}"

    meta = [
        ["Verkauf Nr.:", str(sale.number)],
        ["Datum:", format_date(sale.date)],
        ["Benutzer:", sale.username],
        ["Status:", sale.status.value],
    ]

    rows = [["Code", "Artikel", "Menge", "Preis", "Summe"]]
    for item in sale.items:
        rows.append([
            item.article_code,
            item.article_name,
            format_amount(item.quantity),
            f"{format_amount(item.unit_price)} ({item.price_type.value})",
            format_amount(item.total),
        ])

    paid = sum(p.amount for p in payments)
    totals = [
        f"<b>Gesamt: {format_amount(sale.total)}</b>",
        f"Bezahlt: {format_amount(paid)}",
        f"Offen: {format_amount(max(0, sale.total - paid))}",
    ]
    return _build("Verkauf", recipient, meta, rows, totals)


def generate_purchase_pdf(purchase: Purchase) -> bytes:
    """Beleg für einen Einkauf."""
    meta = [
        ["Einkauf Nr.:", str(purchase.number)],
        ["Datum:", format_date(purchase.date)],
        ["Benutzer:", purchase.username],
    ]

    rows = [["Code", "Artikel", "Menge", "Einstand", "Summe"]]
    for item in purchase.items:
        rows.append([
            item.article_code,
            item.article_name,
            format_amount(item.quantity),
            format_amount(item.unit_cost),
            format_amount(item.total),
        ])

    totals = [f"<b>Gesamt: {format_amount(purchase.total)}</b>"]
    return _build("Einkauf", f"<b>{purchase.supplier_name}</b>", meta, rows, totals)
