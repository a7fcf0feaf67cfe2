import io
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib import colors
from xml.sax.saxutils import escape
from core.types import ReportData

HEADER = ["Test", "Category", "Result", "Status"]


def build_pdf(report: ReportData, rows: list[list[str]]) -> bytes:
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, title="STI Test Summary")
    styles = getSampleStyleSheet()
    story = []

    story.append(Paragraph("<b>STI Test Summary</b>", styles["Title"]))
    pinfo = (
        f"<b>Patient:</b> {escape(report.patient_name or '—')} &nbsp;&nbsp; "
        f"<b>Collected:</b> {escape(report.collection_date or '—')} &nbsp;&nbsp; "
        f"<b>Lab:</b> {escape(report.lab_name or '—')}"
    )
    story.append(Paragraph(pinfo, styles["Normal"]))
    story.append(Spacer(1, 8))

    if rows:
        tbl = Table(
            [HEADER] + rows,
            hAlign='LEFT',
            colWidths=[170, 80, 140, 100]
        )
        tbl.setStyle(TableStyle([
            ('BACKGROUND', (0,0), (-1,0), colors.HexColor('#eeeeee')),
            ('GRID', (0,0), (-1,-1), 0.25, colors.grey),
            ('FONTNAME', (0,0), (-1,0), 'Helvetica-Bold'),
            ('ROWBACKGROUNDS', (0,1), (-1,-1), [colors.white, colors.HexColor('#fafafa')]),
        ]))
        story.append(tbl)
    else:
        story.append(Paragraph("No test results.", styles["Normal"]))

    story.append(Spacer(1, 10))
    story.append(Paragraph(
        "<b>Disclaimer:</b> Summary of uploaded lab results for sharing; not medical advice.",
        styles['Italic']
    ))

    doc.build(story)
    return buf.getvalue()
