from __future__ import annotations

import html
import io
from datetime import datetime

from reportlab.graphics.charts.barcharts import VerticalBarChart
from reportlab.graphics.shapes import Drawing
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from bizmetrics.config.settings import settings
from bizmetrics.formatting.formatters import parse_value
from bizmetrics.reports.monthly import MonthlyReport

PAGE_MARGIN = 30
HEADER_BG = colors.HexColor("#F5F5F5")
POSITIVE = "#15803d"
NEGATIVE = "#b91c1c"
NEUTRAL = "#6b7280"

TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
    ("FONTSIZE", (0, 0), (-1, -1), 9),
    ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
])


def _change_color(change: str) -> str:
    if change.startswith("+"):
        return POSITIVE
    if change.startswith("-"):
        return NEGATIVE
    return NEUTRAL


def _revenue_chart(report: MonthlyReport, width: float) -> Drawing:
    drawing = Drawing(width, 200)
    chart = VerticalBarChart()
    chart.x, chart.y = 40, 30
    chart.width, chart.height = width - 60, 150
    chart.data = [[parse_value(p.revenue) for p in report.products]]
    chart.categoryAxis.categoryNames = [p.name for p in report.products]
    chart.valueAxis.valueMin = 0
    chart.valueAxis.labelTextFormat = lambda v: f"${v / 1000:,.0f}k"
    chart.bars[0].fillColor = colors.HexColor("#3b82f6")
    drawing.add(chart)
    return drawing


def render_report_pdf(report: MonthlyReport) -> bytes:
    """Render the monthly report as an A4 PDF and return the bytes."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=PAGE_MARGIN,
        rightMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN,
        bottomMargin=PAGE_MARGIN + 20,
        title=f"Monthly Performance Report - {report.month} {report.year}",
    )
    width = doc.width

    styles = getSampleStyleSheet()
    title_style = styles["Title"]
    heading_style = styles["Heading2"]
    body_style = ParagraphStyle("Body", parent=styles["BodyText"], leading=15)
    caption_style = ParagraphStyle(
        "Caption", parent=styles["BodyText"], fontSize=8, textColor=colors.grey, alignment=1
    )

    def para(text: str, style=body_style) -> Paragraph:
        return Paragraph(html.escape(text), style)

    story = [
        para("Monthly Performance Report", title_style),
        para(f"{report.month} {report.year} - {settings.COMPANY_NAME}", styles["Heading3"]),
        Spacer(1, 12),
    ]

    if report.include_executive_summary:
        story += [para("Executive Summary", heading_style), para(report.executive_summary), Spacer(1, 12)]

    story.append(para("Key Performance Metrics", heading_style))
    rows = [["Metric", "Value", "Change"]]
    for m in report.metrics:
        change = Paragraph(
            f'<font color="{_change_color(m.change)}">{html.escape(m.change)}</font>', body_style
        )
        rows.append([para(m.name), para(m.value), change])
    metrics_table = Table(rows, colWidths=[width * 0.45, width * 0.3, width * 0.25], hAlign="LEFT")
    metrics_table.setStyle(TABLE_STYLE)
    story += [metrics_table, Spacer(1, 12)]

    if report.include_graphs:
        story.append(para("Performance Graphs", heading_style))
        # VerticalBarChart needs at least one positive bar to scale its axis
        if any(parse_value(p.revenue) > 0 for p in report.products):
            story += [_revenue_chart(report, width), para("Revenue by product", caption_style)]
        else:
            story.append(para("No product revenue to chart for this period."))
        story.append(Spacer(1, 12))

    if report.include_raw_data:
        story.append(para("Product Performance", heading_style))
        rows = [["Product", "Revenue", "Units", "Avg. Price"]]
        rows += [[para(p.name), p.revenue, p.units, p.avg_price] for p in report.products]
        products_table = Table(rows, colWidths=[width * 0.34] + [width * 0.22] * 3, hAlign="LEFT")
        products_table.setStyle(TABLE_STYLE)
        story.append(products_table)

    generated = datetime.now().strftime("%B %d, %Y")

    def footer(canvas, _doc) -> None:
        canvas.saveState()
        canvas.setFont("Helvetica", 8)
        canvas.setFillColor(colors.grey)
        canvas.drawCentredString(
            A4[0] / 2,
            PAGE_MARGIN,
            f"{settings.COMPANY_NAME} - Confidential - Generated on {generated} - Page {canvas.getPageNumber()}",
        )
        canvas.restoreState()

    doc.build(story, onFirstPage=footer, onLaterPages=footer)
    return buffer.getvalue()
