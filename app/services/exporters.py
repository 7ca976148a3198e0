"""Report exporters: render a bill report to PDF, XLSX or PNG bytes."""

import io
from abc import ABC, abstractmethod

import pandas as pd
from PIL import Image, ImageDraw, ImageFont
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.models.enums import ExportFormat
from app.schemas.bill import BillReport
from app.services.formatting import (
    NOT_AVAILABLE,
    format_date,
    format_money,
    format_percentage,
    format_unit_price,
    format_units,
)

HEADER_RGB = (59, 130, 246)
TABLE_COLUMNS = [
    "Tenant",
    "Used (kWh)",
    "Unaccounted (kWh)",
    "Final Units (kWh)",
    "Share (%)",
    "Bill Amount",
]


def summary_lines(report: BillReport) -> list[tuple[str, str]]:
    """Header metadata as (label, value) pairs."""
    calc = report.calculation
    symbol = report.currency_symbol
    return [
        ("Total Units Purchased", f"{format_units(calc.parameters.total_units)} kWh"),
        ("Total Amount", format_money(calc.parameters.total_amount, symbol)),
        ("Unit Price", format_unit_price(calc.unit_price, symbol)),
        ("Unaccounted Units", f"{format_units(calc.unaccounted)} kWh"),
        ("Generated on", format_date(report.generated_at)),
    ]


def table_rows(report: BillReport) -> list[list[str]]:
    """Tenant rows followed by the TOTAL row, formatted for display."""
    calc = report.calculation
    symbol = report.currency_symbol
    rows = [
        [
            r.name,
            format_units(r.used),
            format_units(r.bonus),
            format_units(r.final_units),
            format_percentage(r.percentage),
            format_money(r.bill, symbol),
        ]
        for r in calc.results
    ]
    rows.append(
        [
            "TOTAL",
            format_units(calc.total_used),
            format_units(calc.unaccounted),
            format_units(calc.total_final_units),
            format_percentage(calc.total_percentage),
            format_money(calc.total_billed, symbol),
        ]
    )
    return rows


class Exporter(ABC):
    """Renders a finished report to one file format."""

    format: ExportFormat
    media_type: str

    @property
    def extension(self) -> str:
        return self.format.value

    @abstractmethod
    def render(self, report: BillReport) -> bytes:
        """Render the report to file contents."""


class PdfExporter(Exporter):
    """A4 report with a summary block and a grid table."""

    format = ExportFormat.PDF
    media_type = "application/pdf"

    def render(self, report: BillReport) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            title=report.title,
            leftMargin=14 * mm,
            rightMargin=14 * mm,
        )
        styles = getSampleStyleSheet()

        story = [Paragraph(report.title, styles["Title"]), Spacer(1, 4 * mm)]
        for label, value in summary_lines(report):
            story.append(Paragraph(f"{label}: {value}", styles["Normal"]))
        story.append(Spacer(1, 8 * mm))

        table = Table([TABLE_COLUMNS, *table_rows(report)], repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                    ("BACKGROUND", (0, 0), (-1, 0), colors.Color(*(c / 255 for c in HEADER_RGB))),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                    ("BACKGROUND", (0, -1), (-1, -1), colors.HexColor("#dbeafe")),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                ]
            )
        )
        story.append(table)

        doc.build(story)
        return buffer.getvalue()


class ExcelExporter(Exporter):
    """Single-sheet workbook with the summary and the breakdown table."""

    format = ExportFormat.XLSX
    media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    sheet_name = "Bill Split"

    def render(self, report: BillReport) -> bytes:
        calc = report.calculation
        symbol = report.currency_symbol
        unit_price = float(calc.unit_price) if calc.unit_price is not None else NOT_AVAILABLE

        # Numbers stay numeric so the sheet can be recalculated
        rows: list[list] = [
            [report.title],
            [""],
            ["Summary Information"],
            ["Total Units Purchased (kWh)", float(calc.parameters.total_units)],
            [f"Total Amount ({symbol})", float(calc.parameters.total_amount)],
            [f"Unit Price ({symbol}/kWh)", unit_price],
            ["Unaccounted Units (kWh)", float(calc.unaccounted)],
            ["Generation Date", format_date(report.generated_at)],
            [""],
            ["Detailed Breakdown"],
            [*TABLE_COLUMNS[:-1], f"Bill Amount ({symbol})"],
        ]
        for r in calc.results:
            rows.append(
                [
                    r.name,
                    float(r.used),
                    float(r.bonus),
                    float(r.final_units),
                    float(r.percentage),
                    float(r.bill),
                ]
            )
        rows.append(
            [
                "TOTAL",
                float(calc.total_used),
                float(calc.unaccounted),
                float(calc.total_final_units),
                float(calc.total_percentage),
                float(calc.total_billed),
            ]
        )

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="xlsxwriter") as writer:
            pd.DataFrame(rows).to_excel(
                writer, sheet_name=self.sheet_name, header=False, index=False
            )
            worksheet = writer.sheets[self.sheet_name]
            worksheet.set_column(0, 0, 30)
            worksheet.set_column(1, len(TABLE_COLUMNS) - 1, 18)
        return buffer.getvalue()


class PngExporter(Exporter):
    """Image snapshot of the results table."""

    format = ExportFormat.PNG
    media_type = "image/png"

    scale = 2
    font_size = 14
    padding = 12
    row_height = 36
    header_color = HEADER_RGB
    stripe_color = (249, 250, 251)
    total_color = (219, 234, 254)
    border_color = (209, 213, 219)
    text_color = (17, 24, 39)

    def _font(self) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
        return ImageFont.load_default(size=self.font_size * self.scale)

    def render(self, report: BillReport) -> bytes:
        s = self.scale
        font = self._font()
        pad = self.padding * s
        row_h = self.row_height * s

        header = TABLE_COLUMNS
        rows = table_rows(report)
        summary = [f"{label}: {value}" for label, value in summary_lines(report)]

        measure = ImageDraw.Draw(Image.new("RGB", (1, 1)))
        widths = [
            int(max(measure.textlength(row[i], font=font) for row in [header, *rows])) + 2 * pad
            for i in range(len(header))
        ]
        table_w = sum(widths)
        width = max(
            table_w,
            int(max(measure.textlength(line, font=font) for line in [report.title, *summary])),
        ) + 2 * pad
        height = row_h * (2 + len(rows) + len(summary)) + 3 * pad

        image = Image.new("RGB", (width, height), "white")
        draw = ImageDraw.Draw(image)

        y = pad
        draw.text((pad, y), report.title, fill=self.text_color, font=font)
        y += row_h

        for index, cells in enumerate([header, *rows]):
            is_header = index == 0
            is_total = index == len(rows)
            if is_header:
                fill = self.header_color
            elif is_total:
                fill = self.total_color
            elif index % 2 == 1:
                fill = self.stripe_color
            else:
                fill = (255, 255, 255)

            x = pad
            for cell, col_w in zip(cells, widths):
                draw.rectangle(
                    [x, y, x + col_w, y + row_h], fill=fill, outline=self.border_color, width=s
                )
                draw.text(
                    (x + pad, y + (row_h - self.font_size * s) // 2),
                    cell,
                    fill="white" if is_header else self.text_color,
                    font=font,
                )
                x += col_w
            y += row_h

        y += pad
        for line in summary:
            draw.text((pad, y), line, fill=self.text_color, font=font)
            y += row_h

        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()


EXPORTERS: dict[ExportFormat, Exporter] = {
    exporter.format: exporter for exporter in (PdfExporter(), ExcelExporter(), PngExporter())
}


def get_exporter(export_format: ExportFormat) -> Exporter:
    """Get the exporter for a format."""
    return EXPORTERS[export_format]
