import io
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from mealplan.domain.ShoppingList import ShoppingList
from mealplan.utilities.formatting import format_quantity


def generate_pdf_for_shopping_list(shopping_list: ShoppingList) -> bytes:
    """Printable shopping list: one table per category, purchased items ticked."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    progress = shopping_list.progress()
    elements = [
        Paragraph("Shopping List", styles["Title"]),
        Paragraph(f"{progress['purchased']} of {progress['total']} items purchased", styles["Normal"]),
        Spacer(1, 16),
    ]

    for category, items in shopping_list.grouped_by_category().items():
        # Paragraph text is parsed as markup
        elements.append(Paragraph(escape(category or "Other"), styles["Heading2"]))
        data = [["", "Item", "Quantity", "From"]]
        for item in items:
            data.append([
                "x" if item.is_purchased else "",
                item.name,
                format_quantity(item.quantity, item.unit),
                ", ".join(item.recipes),
            ])
        table = Table(data, repeatRows=1, colWidths=[20, 180, 100, 250])
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#EA580C")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, 0), 11),
            ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ]))
        elements.append(table)
        elements.append(Spacer(1, 12))

    if not shopping_list.get_items():
        elements.append(Paragraph("Your shopping list is empty.", styles["Normal"]))

    doc.build(elements)
    return buf.getvalue()
