# biography_publisher.py - PDF & DOCX rendering of biography markup
import io
import logging
import re
from collections import namedtuple

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt
from fpdf import FPDF
from fpdf.enums import XPos, YPos

from biography_model import DEFAULT_FONT, display_title
from config import DEFAULT_FILENAME, EXPORT_CONFIG, MEDIA_TYPES
from exceptions import ValidationError
from image_handler import ImageHandler
from markup_tokenizer import TokenKind, tokenize
from story_composer import story_text

logger = logging.getLogger(__name__)

ExportArtifact = namedtuple("ExportArtifact", ["filename", "media_type", "content"])

# PDF core fonts only cover latin-1; customization fonts map onto a core family
PDF_FONTS = {
    "Inter": "Helvetica",
    "Playfair Display": "Times",
    "Merriweather": "Times",
    "Roboto Serif": "Times"
}

TYPOGRAPHY = str.maketrans({
    "‘": "'", "’": "'", "“": '"', "”": '"',
    "–": "-", "—": "-", "…": "...", " ": " "
})

# Anything outside the XML 1.0 character range, lone surrogates included
_NON_XML_CHARS = re.compile(r"[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")
_UNSAFE_FILENAME_CHARS = re.compile(r"[\s/\\]+")


def pdf_safe(text):
    return text.translate(TYPOGRAPHY).encode("latin-1", "replace").decode("latin-1")


def xml_safe(text):
    return _NON_XML_CHARS.sub("", text)


# ============================================================================
# PDF GENERATION (paginated)
# ============================================================================
class PDF(FPDF):
    def __init__(self, book_title, body_font):
        super().__init__(format=EXPORT_CONFIG["page_format"])
        self.book_title = pdf_safe(book_title)
        self.body_font = body_font
        margin = EXPORT_CONFIG["margin_mm"]
        self.set_margins(margin, margin, margin)
        self.set_auto_page_break(True, margin=margin + 5)

    def header(self):
        if self.page_no() > 1:
            self.set_font(self.body_font, 'I', 8)
            self.cell(0, 10, self.book_title, align='L', new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            self.ln(4)

    def footer(self):
        self.set_y(-15)
        self.set_font(self.body_font, 'I', 8)
        self.cell(0, 10, f'Page {self.page_no()}', align='C')

    def write_block(self, text, style='', size=12, height=6, align='L'):
        self.set_font(self.body_font, style, size)
        self.multi_cell(0, height, pdf_safe(text), align=align, new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def build_pdf(tokens, title, font=DEFAULT_FONT, cover_image=None):
    """Lay out tokens on pages; FPDF breaks pages as the content flows."""
    pdf = PDF(title, PDF_FONTS.get(font, "Helvetica"))
    pdf.set_title(pdf_safe(title))
    pdf.set_creator("Biography Publisher")

    if cover_image:
        pdf.add_page()
        pdf.image(io.BytesIO(cover_image), x=pdf.l_margin, y=pdf.t_margin,
                  w=pdf.epw, h=pdf.eph, keep_aspect_ratio=True)

    pdf.add_page()
    pdf.set_text_color(0, 0, 0)
    pdf.write_block(title, style='B', size=20, height=10, align='C')
    pdf.ln(6)

    for token in tokens:
        if token.kind is TokenKind.HEADING1:
            pdf.ln(4)
            pdf.write_block(token.text, style='B', size=22, height=11)
        elif token.kind is TokenKind.HEADING2:
            pdf.ln(3)
            pdf.write_block(token.text, style='B', size=16, height=8)
        elif token.kind is TokenKind.HEADING3:
            pdf.ln(2)
            pdf.write_block(token.text, style='B', size=14, height=7)
        elif token.kind is TokenKind.QUOTE:
            pdf.ln(3)
            pdf.set_text_color(102, 102, 102)
            pdf.write_block(token.text, style='I', align='C')
            pdf.set_text_color(0, 0, 0)
        elif token.kind is TokenKind.BLANK:
            pdf.ln(6)
        else:
            pdf.write_block(token.text)
    return pdf


def render_pdf(tokens, title, font=DEFAULT_FONT, cover_image=None):
    return bytes(build_pdf(tokens, title, font, cover_image).output())


# ============================================================================
# DOCX GENERATION (continuous flow)
# ============================================================================
def _spaced(paragraph):
    paragraph.paragraph_format.space_after = Pt(EXPORT_CONFIG["paragraph_spacing_pt"])
    return paragraph


def build_docx(tokens, title, font=DEFAULT_FONT, cover_image=None):
    doc = Document()
    doc.styles['Normal'].font.name = font
    doc.core_properties.title = xml_safe(title)

    if cover_image:
        doc.add_picture(io.BytesIO(cover_image), width=Inches(6))
        doc.add_page_break()

    heading = doc.add_heading(xml_safe(title), 0)
    heading.alignment = WD_ALIGN_PARAGRAPH.CENTER

    levels = {TokenKind.HEADING1: 1, TokenKind.HEADING2: 2, TokenKind.HEADING3: 3}
    for token in tokens:
        text = xml_safe(token.text)
        if token.kind in levels:
            doc.add_heading(text, levels[token.kind])
        elif token.kind is TokenKind.QUOTE:
            p = _spaced(doc.add_paragraph())
            p.add_run(text).italic = True
        elif token.kind is TokenKind.BLANK:
            _spaced(doc.add_paragraph(""))
        else:
            _spaced(doc.add_paragraph(text))
    return doc


def render_docx(tokens, title, font=DEFAULT_FONT, cover_image=None):
    docx_bytes = io.BytesIO()
    build_docx(tokens, title, font, cover_image).save(docx_bytes)
    return docx_bytes.getvalue()


RENDERERS = {
    "pdf": render_pdf,
    "docx": render_docx
}


# ============================================================================
# EXPORT
# ============================================================================
def export_filename(title, extension):
    base = _UNSAFE_FILENAME_CHARS.sub("_", (title or "").strip()).lower()
    return f"{base or DEFAULT_FILENAME}.{extension}"


def export_biography(biography, fmt, story=None, title=None, image_handler=None):
    """Render a biography to a complete document.

    The draft wins over the structured sections, and a non-empty ``story``
    wins over both. The biography itself is never modified.
    """
    if not isinstance(fmt, str) or fmt.lower() not in RENDERERS:
        raise ValidationError(f"Unsupported export format. Expected one of: {', '.join(RENDERERS)}",
                              field="format", value=fmt)
    fmt = fmt.lower()

    book_title = display_title(biography, title)
    tokens = tokenize(story_text(biography, story))
    handler = image_handler or ImageHandler()
    cover = handler.load_cover(biography["customization"]["coverImage"])

    content = RENDERERS[fmt](tokens, book_title, font=biography["customization"]["font"], cover_image=cover)
    filename = export_filename(book_title, fmt)
    logger.info("Exported %s (%d bytes, %d tokens)", filename, len(content), len(tokens))
    return ExportArtifact(filename=filename, media_type=MEDIA_TYPES[fmt], content=content)
