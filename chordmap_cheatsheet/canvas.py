"""
Drawing back-ends for chordmap pages.

Both canvases take coordinates in drawing units (1/100 mm) with the origin
at the top-left corner of the page.
"""

# Standard Library
import os
from typing import BinaryIO, TextIO
from xml.sax.saxutils import escape, quoteattr

# PIP3 modules
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfbase.ttfonts
import reportlab.pdfgen.canvas

# local repo modules
import chordmap_cheatsheet as chs
import chordmap_cheatsheet.config


Style = chs.config.Style

DEFAULT_FONT_REGULAR = chs.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = chs.config.DEFAULT_FONT_BOLD
TTF_FONT_REGULAR = chs.config.TTF_FONT_REGULAR
TTF_FONT_BOLD = chs.config.TTF_FONT_BOLD
TTF_FONT_DIRS = chs.config.TTF_FONT_DIRS
mm_to_units = chs.config.mm_to_units
units_to_points = chs.config.units_to_points

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
# share of the font size between the middle of a glyph and its baseline
MIDDLE_BASELINE_SHIFT = 0.35


#============================================
def format_number(value: float) -> str:
	"""
	Format a coordinate for SVG output.

	Args:
		value: Number.

	Returns:
		Integer text when whole, else two decimals.
	"""
	if float(value).is_integer():
		return str(int(value))
	return f"{value:.2f}"


#============================================
def parse_hex_color(value: str | None) -> tuple[float, float, float]:
	"""
	Parse a hex color string into RGB floats.

	Args:
		value: Color string like "#AABBCC".

	Returns:
		Tuple of (r, g, b) in 0.0-1.0 range.
	"""
	if not value or not value.startswith("#") or len(value) != 7:
		return (0.0, 0.0, 0.0)
	red = int(value[1:3], 16) / 255.0
	green = int(value[3:5], 16) / 255.0
	blue = int(value[5:7], 16) / 255.0
	return (red, green, blue)


#============================================
def register_ttf_font(font_name: str, font_dirs: tuple[str, ...] = TTF_FONT_DIRS) -> bool:
	"""
	Register a TrueType font with ReportLab from the first folder holding it.

	Args:
		font_name: Font name, also the file stem of the .ttf file.
		font_dirs: Folders searched in order.

	Returns:
		True when the font is registered.
	"""
	if font_name in reportlab.pdfbase.pdfmetrics.getRegisteredFontNames():
		return True
	for font_dir in font_dirs:
		path = os.path.join(font_dir, f"{font_name}.ttf")
		if not os.path.isfile(path):
			continue
		reportlab.pdfbase.pdfmetrics.registerFont(reportlab.pdfbase.ttfonts.TTFont(font_name, path))
		return True
	return False


#============================================
def resolve_pdf_fonts(font_dirs: tuple[str, ...] = TTF_FONT_DIRS) -> tuple[str, str]:
	"""
	Pick the regular and bold PDF fonts.

	DejaVu Sans is used when installed, since the standard Type 1 fonts have
	no glyphs for legends such as the backspace or space symbols.

	Args:
		font_dirs: Folders searched for the TrueType files.

	Returns:
		Tuple of (regular, bold) font names.
	"""
	regular = DEFAULT_FONT_REGULAR
	bold = DEFAULT_FONT_BOLD
	if register_ttf_font(TTF_FONT_REGULAR, font_dirs):
		regular = TTF_FONT_REGULAR
		bold = TTF_FONT_BOLD if register_ttf_font(TTF_FONT_BOLD, font_dirs) else TTF_FONT_REGULAR
	return (regular, bold)


class SvgCanvas:
	"""
	Write one standalone SVG document to a text stream.
	"""

	def __init__(self, handle: TextIO) -> None:
		self.handle = handle
		self.open_groups = 0

	#============================================
	def _write(self, markup: str) -> None:
		self.handle.write(markup + "\n")

	#============================================
	def start_document(self, width_mm: int, height_mm: int) -> None:
		"""
		Write the document header.

		Args:
			width_mm: Page width in millimetres.
			height_mm: Page height in millimetres.
		"""
		view_width = mm_to_units(width_mm)
		view_height = mm_to_units(height_mm)
		self._write('<?xml version="1.0" encoding="UTF-8"?>')
		self._write(
			f'<svg width="{width_mm}mm" height="{height_mm}mm" '
			f'viewBox="0 0 {view_width} {view_height}" xmlns="{SVG_NAMESPACE}">'
		)

	#============================================
	def set_title(self, text: str) -> None:
		self._write(f"<title>{escape(text)}</title>")

	#============================================
	def begin_group(self, metadata: str) -> None:
		self.open_groups += 1
		self._write("<g>")
		self._write(f"<title>{escape(metadata)}</title>")

	#============================================
	def end_group(self) -> None:
		if self.open_groups == 0:
			raise RuntimeError("end_group called without an open group")
		self.open_groups -= 1
		self._write("</g>")

	#============================================
	def rounded_rect(self, x: float, y: float, width: float, height: float, radius: float, style: Style) -> None:
		self._write(
			f'<rect x="{format_number(x)}" y="{format_number(y)}" '
			f'width="{format_number(width)}" height="{format_number(height)}" '
			f'rx="{format_number(radius)}" ry="{format_number(radius)}" '
			f"style={quoteattr(style.to_css())}/>"
		)

	#============================================
	def text(self, x: float, y: float, content: str, style: Style) -> None:
		self._write(
			f'<text x="{format_number(x)}" y="{format_number(y)}" '
			f"style={quoteattr(style.to_css())}>{escape(content)}</text>"
		)

	#============================================
	def line(self, x0: float, y0: float, x1: float, y1: float, style: Style) -> None:
		self._write(
			f'<line x1="{format_number(x0)}" y1="{format_number(y0)}" '
			f'x2="{format_number(x1)}" y2="{format_number(y1)}" '
			f"style={quoteattr(style.to_css())}/>"
		)

	#============================================
	def circle(self, cx: float, cy: float, radius: float, style: Style) -> None:
		self._write(
			f'<circle cx="{format_number(cx)}" cy="{format_number(cy)}" '
			f'r="{format_number(radius)}" style={quoteattr(style.to_css())}/>'
		)

	#============================================
	def end_document(self) -> None:
		while self.open_groups > 0:
			self.end_group()
		self._write("</svg>")
		self.handle.flush()


class PdfCanvas:
	"""
	Draw one single-page PDF document with ReportLab.
	"""

	def __init__(self, handle: BinaryIO) -> None:
		self.handle = handle
		self.pdf: reportlab.pdfgen.canvas.Canvas | None = None
		self.page_height = 0
		self.font_regular, self.font_bold = resolve_pdf_fonts()

	#============================================
	def _canvas(self) -> reportlab.pdfgen.canvas.Canvas:
		if self.pdf is None:
			raise RuntimeError("PDF document has not been started")
		return self.pdf

	#============================================
	def _y(self, value: float) -> float:
		return units_to_points(self.page_height - value)

	#============================================
	def _apply_style(self, style: Style) -> tuple[int, int]:
		"""
		Push stroke and fill settings onto the PDF canvas.

		Args:
			style: Presentation style.

		Returns:
			Tuple of (stroke, fill) flags for ReportLab drawing calls.
		"""
		pdf = self._canvas()
		stroke = 0
		fill = 0
		if style.stroke and style.stroke_width > 0 and style.stroke_opacity > 0:
			color = parse_hex_color(style.stroke)
			pdf.setStrokeColorRGB(color[0], color[1], color[2])
			pdf.setStrokeAlpha(style.stroke_opacity)
			pdf.setLineWidth(units_to_points(style.stroke_width))
			stroke = 1
		if style.fill and style.fill_opacity > 0:
			color = parse_hex_color(style.fill)
			pdf.setFillColorRGB(color[0], color[1], color[2])
			pdf.setFillAlpha(style.fill_opacity)
			fill = 1
		return (stroke, fill)

	#============================================
	def start_document(self, width_mm: int, height_mm: int) -> None:
		self.page_height = mm_to_units(height_mm)
		page_size = (
			units_to_points(mm_to_units(width_mm)),
			units_to_points(self.page_height),
		)
		self.pdf = reportlab.pdfgen.canvas.Canvas(self.handle, pagesize=page_size)

	#============================================
	def set_title(self, text: str) -> None:
		self._canvas().setTitle(text)

	#============================================
	def begin_group(self, metadata: str) -> None:
		# PDF has no group element, keep graphics state changes local instead
		self._canvas().saveState()

	#============================================
	def end_group(self) -> None:
		self._canvas().restoreState()

	#============================================
	def rounded_rect(self, x: float, y: float, width: float, height: float, radius: float, style: Style) -> None:
		stroke, fill = self._apply_style(style)
		self._canvas().roundRect(
			units_to_points(x),
			self._y(y + height),
			units_to_points(width),
			units_to_points(height),
			units_to_points(radius),
			stroke=stroke,
			fill=fill,
		)

	#============================================
	def text(self, x: float, y: float, content: str, style: Style) -> None:
		"""
		Draw a single line of text.

		Args:
			x: Anchor x position.
			y: Baseline y position, or glyph middle for middle baselines.
			content: Text content.
			style: Presentation style.
		"""
		pdf = self._canvas()
		stroke, fill = self._apply_style(style)
		font_name = self.font_bold if style.bold else self.font_regular
		font_size = units_to_points(style.font_size)
		width = pdf.stringWidth(content, font_name, font_size)
		text_x = units_to_points(x)
		if style.anchor == "middle":
			text_x -= width / 2.0
		elif style.anchor == "end":
			text_x -= width
		baseline = y
		if style.baseline == "middle":
			baseline += style.font_size * MIDDLE_BASELINE_SHIFT
		if stroke and fill:
			render_mode = 2
		elif stroke:
			render_mode = 1
		elif fill:
			render_mode = 0
		else:
			render_mode = 3
		text_object = pdf.beginText(text_x, self._y(baseline))
		text_object.setFont(font_name, font_size)
		text_object.setTextRenderMode(render_mode)
		text_object.textOut(content)
		pdf.drawText(text_object)

	#============================================
	def line(self, x0: float, y0: float, x1: float, y1: float, style: Style) -> None:
		self._apply_style(style)
		self._canvas().line(units_to_points(x0), self._y(y0), units_to_points(x1), self._y(y1))

	#============================================
	def circle(self, cx: float, cy: float, radius: float, style: Style) -> None:
		stroke, fill = self._apply_style(style)
		self._canvas().circle(
			units_to_points(cx),
			self._y(cy),
			units_to_points(radius),
			stroke=stroke,
			fill=fill,
		)

	#============================================
	def end_document(self) -> None:
		pdf = self._canvas()
		pdf.showPage()
		pdf.save()
		self.pdf = None


Canvas = SvgCanvas | PdfCanvas


#============================================
def build_canvas(output_format: str, handle: TextIO | BinaryIO) -> Canvas:
	"""
	Create the canvas for an output format.

	Args:
		output_format: "svg" or "pdf".
		handle: Open text stream for SVG, binary stream for PDF.

	Returns:
		Canvas instance.
	"""
	if output_format == "svg":
		return SvgCanvas(handle)
	if output_format == "pdf":
		return PdfCanvas(handle)
	raise ValueError(f"unsupported output format '{output_format}'")
