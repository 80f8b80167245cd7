"""
PDF Report Generator using ReportLab
"""

from reportlab.lib.pagesizes import letter
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.enums import TA_CENTER
from datetime import datetime
from io import BytesIO
from xml.sax.saxutils import escape

from deploy_models import RecordKind
from report_renderer import SUMMARY_LABELS, build_error_list, component_type_of, format_error
from result_extractor import extract_records, extract_summary

HEADER_BG = colors.HexColor('#667eea')
ERROR_BG = colors.HexColor('#dc3545')
OUTCOME_COLORS = {
    'Deployed': colors.HexColor('#198754'),
    'Failed': colors.HexColor('#dc3545'),
}


def _grid_style(header_bg):
    return TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), header_bg),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f8f9fa')]),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
    ])


def component_rows(successes, failures):
    """(type, name, outcome) for every typed component, ordered by type then name"""
    rows = []
    for outcome, records in (('Deployed', successes), ('Failed', failures)):
        for component in records:
            component_type = component_type_of(component)
            if component_type:
                rows.append((component_type, str(component.get('fullName')), outcome))
    return sorted(rows)


def generate_pdf_report(deploy_result, deployment_id, summary_only=False):
    """Generate PDF for one deploy result"""

    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=letter,
                            rightMargin=72, leftMargin=72,
                            topMargin=72, bottomMargin=18)

    story = []
    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        'CustomTitle',
        parent=styles['Heading1'],
        fontSize=20,
        textColor=HEADER_BG,
        spaceAfter=24,
        alignment=TA_CENTER
    )

    heading_style = ParagraphStyle(
        'CustomHeading',
        parent=styles['Heading2'],
        fontSize=14,
        textColor=colors.HexColor('#333333'),
        spaceAfter=12,
        spaceBefore=12
    )

    story.append(Paragraph(f"Deployment Result for Id {escape(str(deployment_id))}", title_style))
    story.append(Paragraph(f"Generated: {datetime.now().strftime('%B %d, %Y at %I:%M %p')}", styles['Normal']))
    story.append(Spacer(1, 0.2*inch))

    # Summary
    summary = extract_summary(deploy_result)
    summary_data = [[f"{label}:", str(getattr(summary, attr))] for label, attr in SUMMARY_LABELS]
    summary_table = Table(summary_data, colWidths=[2.5*inch, 3.5*inch])
    summary_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, -1), colors.HexColor('#f8f9fa')),
        ('TEXTCOLOR', (0, 0), (-1, -1), colors.black),
        ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 10),
        ('LEFTPADDING', (0, 0), (-1, -1), 12),
        ('RIGHTPADDING', (0, 0), (-1, -1), 12),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
    ]))
    story.append(Paragraph("Deployment Summary", heading_style))
    story.append(summary_table)
    story.append(Spacer(1, 0.3*inch))

    successes = extract_records(deploy_result, RecordKind.SUCCESS)
    failures = extract_records(deploy_result, RecordKind.FAILURE)
    rows = component_rows(successes, failures)

    if rows:
        if summary_only:
            counts = {}
            for component_type, _, _ in rows:
                counts[component_type] = counts.get(component_type, 0) + 1
            story.append(Paragraph("Components Summary", heading_style))
            data = [['Type', 'Components']] + [[t, str(n)] for t, n in sorted(counts.items())]
            table = Table(data, colWidths=[4*inch, 2*inch])
            table.setStyle(_grid_style(HEADER_BG))
        else:
            story.append(Paragraph("Components", heading_style))
            data = [['Type', 'Component', 'Outcome']] + [list(r) for r in rows]
            table = Table(data, colWidths=[1.8*inch, 3.2*inch, 1*inch], repeatRows=1)
            style = _grid_style(HEADER_BG)
            for idx, (_, _, outcome) in enumerate(rows, start=1):
                style.add('TEXTCOLOR', (2, idx), (2, idx), OUTCOME_COLORS[outcome])
            table.setStyle(style)
        story.append(table)
        story.append(Spacer(1, 0.3*inch))

    errors = build_error_list(failures)
    if errors:
        story.append(Paragraph("Errors", heading_style))
        cell_style = styles['BodyText']
        data = [['#', 'Error']]
        for idx, entry in enumerate(errors, start=1):
            data.append([str(idx), Paragraph(escape(format_error(entry)), cell_style)])
        table = Table(data, colWidths=[0.4*inch, 5.6*inch], repeatRows=1)
        table.setStyle(_grid_style(ERROR_BG))
        story.append(table)

    doc.build(story)
    buffer.seek(0)
    return buffer
