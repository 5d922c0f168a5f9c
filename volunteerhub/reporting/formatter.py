"""Render report rows as CSV or PDF files.

CSV output starts with the bare header line, then one fully quoted record per
row. PDFs are built with ReportLab platypus.
"""

import csv
import io
import logging
from datetime import datetime
from typing import List, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from volunteerhub.models.constants import (
    CSV_CONTENT_TYPE,
    EVENT_ASSIGNMENTS_COLUMNS,
    EVENT_ASSIGNMENTS_REPORT_NAME,
    PDF_CONTENT_TYPE,
    REQUIRED_SKILLS_SEPARATOR,
    VOLUNTEER_ACTIVITY_COLUMNS,
    VOLUNTEER_ACTIVITY_REPORT_NAME,
)
from volunteerhub.models.dates import ensure_utc, to_iso_utc, utc_now
from volunteerhub.models.dtos import EventAssignmentGroup, FileReportResult, VolunteerActivityRow
from volunteerhub.models.enums import ReportFileFormat

logger = logging.getLogger(__name__)

_FILE_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"
_PDF_DATE_FORMAT = "%Y-%m-%d %H:%M"

_TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1e40af")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, -1), 9),
    ("ALIGN", (-1, 0), (-1, -1), "RIGHT"),
    ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f3f4f6")]),
])


def build_file_name(report_name: str, fmt: ReportFileFormat, now: Optional[datetime] = None) -> str:
    stamp = ensure_utc(now or utc_now()).strftime(_FILE_TIMESTAMP_FORMAT)
    return f"{report_name}-{stamp}.{ReportFileFormat(fmt).value}"


def _csv_bytes(header: Sequence[str], rows: List[List[str]]) -> bytes:
    buffer = io.StringIO()
    buffer.write(",".join(header) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def _pdf_date(value: datetime) -> str:
    return ensure_utc(value).strftime(_PDF_DATE_FORMAT)


class ReportFormatter:
    """Formats volunteer-activity and event-assignment reports."""

    def __init__(self):
        self._styles = getSampleStyleSheet()
        self._styles.add(ParagraphStyle(
            'ReportTitle',
            parent=self._styles['Title'],
            fontSize=18,
            alignment=TA_CENTER,
            spaceAfter=12,
        ))
        self._styles.add(ParagraphStyle(
            'EventHeading',
            parent=self._styles['Heading2'],
            fontSize=13,
            spaceBefore=12,
            spaceAfter=4,
        ))
        self._styles.add(ParagraphStyle(
            'EventMeta',
            parent=self._styles['Normal'],
            fontSize=9,
            textColor=colors.HexColor("#4b5563"),
            spaceAfter=4,
        ))
        self._styles.add(ParagraphStyle(
            'Footer',
            parent=self._styles['Normal'],
            fontSize=8,
            textColor=colors.gray,
            spaceBefore=12,
        ))

    # -- volunteer activity -------------------------------------------------

    def volunteer_activity(
        self,
        rows: List[VolunteerActivityRow],
        fmt: ReportFileFormat,
        now: Optional[datetime] = None,
    ) -> FileReportResult:
        now = now or utc_now()
        fmt = ReportFileFormat(fmt)
        if fmt == ReportFileFormat.PDF:
            content, content_type = self._volunteer_activity_pdf(rows, now), PDF_CONTENT_TYPE
        else:
            content, content_type = self._volunteer_activity_csv(rows), CSV_CONTENT_TYPE
        logger.info(f"Rendered volunteer activity report ({fmt.value}) with {len(rows)} row(s)")
        return FileReportResult(
            file_name=build_file_name(VOLUNTEER_ACTIVITY_REPORT_NAME, fmt, now),
            content_type=content_type,
            content=content,
        )

    def _volunteer_activity_csv(self, rows: List[VolunteerActivityRow]) -> bytes:
        return _csv_bytes(VOLUNTEER_ACTIVITY_COLUMNS, [
            [
                r.user_id,
                r.full_name,
                r.email,
                r.event_id,
                r.event_name,
                to_iso_utc(r.event_date_utc),
                str(r.duration_minutes),
            ]
            for r in rows
        ])

    def _volunteer_activity_pdf(self, rows: List[VolunteerActivityRow], now: datetime) -> bytes:
        story = [Paragraph("Volunteer Activity Report", self._styles['ReportTitle'])]

        data = [["Volunteer", "Email", "Event", "Date (UTC)", "Minutes"]]
        for r in rows:
            data.append([
                self._cell(r.full_name),
                self._cell(r.email),
                self._cell(r.event_name),
                _pdf_date(r.event_date_utc),
                str(r.duration_minutes),
            ])
        story.append(self._table(data, [1.4, 1.8, 1.9, 1.2, 0.7]))
        story.append(self._footer(now))
        return self._build(story)

    # -- event assignments --------------------------------------------------

    def event_assignments(
        self,
        groups: List[EventAssignmentGroup],
        fmt: ReportFileFormat,
        now: Optional[datetime] = None,
    ) -> FileReportResult:
        now = now or utc_now()
        fmt = ReportFileFormat(fmt)
        if fmt == ReportFileFormat.PDF:
            content, content_type = self._event_assignments_pdf(groups, now), PDF_CONTENT_TYPE
        else:
            content, content_type = self._event_assignments_csv(groups), CSV_CONTENT_TYPE
        logger.info(f"Rendered event assignments report ({fmt.value}) with {len(groups)} event(s)")
        return FileReportResult(
            file_name=build_file_name(EVENT_ASSIGNMENTS_REPORT_NAME, fmt, now),
            content_type=content_type,
            content=content,
        )

    def _event_assignments_csv(self, groups: List[EventAssignmentGroup]) -> bytes:
        rows = []
        for group in groups:
            event_fields = [
                group.event_id,
                group.event_name,
                to_iso_utc(group.event_date_utc),
                group.location,
                group.urgency,
                REQUIRED_SKILLS_SEPARATOR.join(group.required_skills),
            ]
            if not group.volunteers:
                rows.append(event_fields + ["", "", "", "", ""])
                continue
            for v in group.volunteers:
                rows.append(event_fields + [
                    v.user_id,
                    v.full_name,
                    v.email,
                    to_iso_utc(v.participation_date_utc),
                    str(v.duration_minutes),
                ])
        return _csv_bytes(EVENT_ASSIGNMENTS_COLUMNS, rows)

    def _event_assignments_pdf(self, groups: List[EventAssignmentGroup], now: datetime) -> bytes:
        story = [Paragraph("Event Assignments Report", self._styles['ReportTitle'])]

        for group in groups:
            story.append(Paragraph(escape(group.event_name), self._styles['EventHeading']))
            meta = f"{_pdf_date(group.event_date_utc)} UTC | {group.location} | {group.urgency}"
            story.append(Paragraph(escape(meta), self._styles['EventMeta']))
            if group.required_skills:
                skills = ", ".join(group.required_skills)
                story.append(Paragraph(escape(f"Skills: {skills}"), self._styles['EventMeta']))

            if not group.volunteers:
                story.append(Paragraph("No volunteers assigned.", self._styles['Normal']))
            else:
                data = [["Volunteer", "Email", "Date (UTC)", "Minutes"]]
                for v in group.volunteers:
                    data.append([
                        self._cell(v.full_name),
                        self._cell(v.email),
                        _pdf_date(v.participation_date_utc),
                        str(v.duration_minutes),
                    ])
                story.append(self._table(data, [1.8, 2.4, 1.4, 0.8]))
            story.append(Spacer(1, 0.15 * inch))

        story.append(self._footer(now))
        return self._build(story)

    # -- helpers ------------------------------------------------------------

    def _cell(self, text: str) -> Paragraph:
        return Paragraph(escape(text or ""), self._styles['Normal'])

    def _table(self, data: list, widths_inch: List[float]) -> Table:
        table = Table(data, colWidths=[w * inch for w in widths_inch], repeatRows=1)
        table.setStyle(_TABLE_STYLE)
        return table

    def _footer(self, now: datetime) -> Paragraph:
        return Paragraph(f"Generated at: {to_iso_utc(now)}", self._styles['Footer'])

    def _build(self, story: list) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=0.6 * inch,
            rightMargin=0.6 * inch,
            topMargin=0.6 * inch,
            bottomMargin=0.6 * inch,
        )
        doc.build(story)
        return buffer.getvalue()
