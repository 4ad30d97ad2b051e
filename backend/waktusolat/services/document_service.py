# waktusolat/services/document_service.py
"""
Printable monthly schedule ("jadual waktu solat").

`assemble_schedule_document` builds the localized table data from a
resolved month; `render_schedule_pdf` lays it out with reportlab. Unlike the
v2 JSON surface, the heading always names the normalized month and year.
"""
import io
from dataclasses import dataclass
from typing import List, Optional, Tuple

from flask import current_app
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..errors import ScheduleNotFoundError
from ..utils.time_utils import format_date_numeric, month_abbr, month_name_ms
from .gazetteer import ZoneGazetteer
from .schedule_service import resolve_month_schedule

COLUMNS = ('Tarikh', 'Subuh', 'Syuruk', 'Zohor', 'Asar', 'Maghrib', 'Isyak')
_ROW_FIELDS = ('fajr', 'syuruk', 'dhuhr', 'asr', 'maghrib', 'isha')


@dataclass(frozen=True)
class ScheduleDocument:
    title: str
    branding: str
    zone_code: str
    zone_label: str
    heading: str
    year: int
    month: int
    columns: Tuple[str, ...]
    rows: List[Tuple[str, ...]]

    @property
    def filename(self) -> str:
        return f"jadual_solat_{self.zone_code}_{self.year}_{self.month:02d}.pdf"


def assemble_schedule_document(gazetteer: ZoneGazetteer, zone_code: str,
                               year: Optional[int] = None, month: Optional[int] = None) -> ScheduleDocument:
    """
    Builds the dataset for one zone's printable month.

    Raises:
        ScheduleNotFoundError: if the month has no data, or the zone has
            data but is missing from the gazetteer.
    """
    schedule = resolve_month_schedule(zone_code, year, month)
    period = schedule.period

    zone = gazetteer.get(zone_code)
    if zone is None:
        current_app.logger.warning(f"Zone '{zone_code}' has stored data but is not in the gazetteer.")
        raise ScheduleNotFoundError(zone_code, period.year, month_abbr(period.month))

    rows = []
    for record in schedule.records:
        times = [getattr(record, name).strftime("%H:%M") for name in _ROW_FIELDS]
        rows.append((format_date_numeric(record.date), *times))

    return ScheduleDocument(
        title=current_app.config['JADUAL_TITLE'],
        branding=current_app.config['JADUAL_BRANDING'],
        zone_code=zone.code,
        zone_label=zone.district_label,
        heading=f"{month_name_ms(period.month)} {period.year}",
        year=period.year,
        month=period.month,
        columns=COLUMNS,
        rows=rows,
    )


def render_schedule_pdf(document: ScheduleDocument) -> bytes:
    """Lays out a ScheduleDocument as a single A4 PDF and returns its bytes."""
    buffer = io.BytesIO()
    pdf = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        title=f"{document.title} {document.zone_code} {document.heading}",
        leftMargin=36, rightMargin=36, topMargin=36, bottomMargin=48,
        invariant=True,  # byte-identical output for identical input
    )
    styles = getSampleStyleSheet()

    story = [
        Paragraph(document.title, styles['Title']),
        Paragraph(document.heading, styles['Heading2']),
        Paragraph(f"Zon: {document.zone_code}", styles['Normal']),
        Paragraph(document.zone_label, styles['Normal']),
        Spacer(1, 10),
    ]

    table = Table([list(document.columns)] + [list(row) for row in document.rows], repeatRows=1)
    table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#1f6f50')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('ALIGN', (1, 0), (-1, -1), 'CENTER'),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#eef5f1')]),
        ('GRID', (0, 0), (-1, -1), 0.25, colors.grey),
        ('TOPPADDING', (0, 0), (-1, -1), 2),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 2),
    ]))
    story.append(table)

    def _draw_footer(canvas, doc):
        canvas.saveState()
        canvas.setFont('Helvetica', 8)
        canvas.drawString(doc.leftMargin, 24, document.branding)
        canvas.drawRightString(A4[0] - doc.rightMargin, 24, f"{document.zone_code} | {document.heading}")
        canvas.restoreState()

    pdf.build(story, onFirstPage=_draw_footer, onLaterPages=_draw_footer)
    return buffer.getvalue()
