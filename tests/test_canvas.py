# Standard Library
import io

# PIP3 modules
import defusedxml.ElementTree
import pypdf
import pytest

import chordmap_cheatsheet.canvas
import chordmap_cheatsheet.config


Style = chordmap_cheatsheet.config.Style
SVG_NS = "{http://www.w3.org/2000/svg}"


#============================================
def _draw_sample(canvas) -> None:
	"""
	Draw one of each primitive inside a group.
	"""
	canvas.start_document(100, 120)
	canvas.set_title("Sample <page>")
	canvas.begin_group("0200 000")
	canvas.rounded_rect(1200, 1200, 450, 450, 60, chordmap_cheatsheet.config.RELEASED_STYLE)
	canvas.circle(3000, 3000, 260, chordmap_cheatsheet.config.BADGE_STYLE)
	canvas.line(1200, 4000, 8000, 4000, chordmap_cheatsheet.config.RULE_STYLE)
	canvas.text(1500, 5000, "Fish & Chips", chordmap_cheatsheet.config.LEGEND_STYLE)
	canvas.end_group()
	canvas.text(8800, 1200, "Title", chordmap_cheatsheet.config.TITLE_STYLE)
	canvas.end_document()


#============================================
def test_format_number() -> None:
	assert chordmap_cheatsheet.canvas.format_number(1200) == "1200"
	assert chordmap_cheatsheet.canvas.format_number(30.0) == "30"
	assert chordmap_cheatsheet.canvas.format_number(12.5) == "12.50"


#============================================
def test_parse_hex_color() -> None:
	assert chordmap_cheatsheet.canvas.parse_hex_color("#ff0000") == (1.0, 0.0, 0.0)
	assert chordmap_cheatsheet.canvas.parse_hex_color(None) == (0.0, 0.0, 0.0)
	assert chordmap_cheatsheet.canvas.parse_hex_color("red") == (0.0, 0.0, 0.0)


#============================================
def test_style_css() -> None:
	style = Style(stroke="#8b0000", fill="#ffffff", stroke_width=30, stroke_opacity=0.4)
	assert style.to_css() == "stroke:#8b0000;fill:#ffffff;stroke-width:30;stroke-opacity:0.4"
	text_css = chordmap_cheatsheet.config.LEGEND_STYLE.to_css()
	assert "text-anchor:middle" in text_css
	assert "dominant-baseline:middle" in text_css
	assert "stroke:none" in text_css


#============================================
def test_svg_document_structure() -> None:
	handle = io.StringIO()
	_draw_sample(chordmap_cheatsheet.canvas.SvgCanvas(handle))
	root = defusedxml.ElementTree.fromstring(handle.getvalue().encode("utf-8"))
	assert root.tag == f"{SVG_NS}svg"
	assert root.get("width") == "100mm"
	assert root.get("height") == "120mm"
	assert root.get("viewBox") == "0 0 10000 12000"
	assert root.find(f"{SVG_NS}title").text == "Sample <page>"
	group = root.find(f"{SVG_NS}g")
	assert group.find(f"{SVG_NS}title").text == "0200 000"
	assert group.find(f"{SVG_NS}rect").get("rx") == "60"
	assert group.find(f"{SVG_NS}circle").get("r") == "260"
	assert group.find(f"{SVG_NS}text").text == "Fish & Chips"
	assert root.findall(f"{SVG_NS}text")[0].text == "Title"


#============================================
def test_svg_end_document_closes_open_groups() -> None:
	handle = io.StringIO()
	canvas = chordmap_cheatsheet.canvas.SvgCanvas(handle)
	canvas.start_document(100, 100)
	canvas.begin_group("outer")
	canvas.begin_group("inner")
	canvas.end_document()
	root = defusedxml.ElementTree.fromstring(handle.getvalue().encode("utf-8"))
	outer = root.find(f"{SVG_NS}g")
	assert outer.find(f"{SVG_NS}g") is not None


#============================================
def test_svg_end_group_without_group() -> None:
	canvas = chordmap_cheatsheet.canvas.SvgCanvas(io.StringIO())
	canvas.start_document(100, 100)
	with pytest.raises(RuntimeError):
		canvas.end_group()


#============================================
def test_pdf_document() -> None:
	handle = io.BytesIO()
	_draw_sample(chordmap_cheatsheet.canvas.PdfCanvas(handle))
	reader = pypdf.PdfReader(io.BytesIO(handle.getvalue()))
	assert len(reader.pages) == 1
	assert reader.metadata.title == "Sample <page>"
	page = reader.pages[0]
	assert float(page.mediabox.height) == pytest.approx(120 / 25.4 * 72.0, abs=0.01)
	assert "Fish & Chips" in page.extract_text()


#============================================
def test_pdf_glyph_legends_use_unicode_font() -> None:
	regular, bold = chordmap_cheatsheet.canvas.resolve_pdf_fonts()
	if regular == chordmap_cheatsheet.config.DEFAULT_FONT_REGULAR:
		pytest.skip("DejaVu Sans is not installed")
	assert regular == chordmap_cheatsheet.config.TTF_FONT_REGULAR
	assert bold in (chordmap_cheatsheet.config.TTF_FONT_BOLD, chordmap_cheatsheet.config.TTF_FONT_REGULAR)
	handle = io.BytesIO()
	canvas = chordmap_cheatsheet.canvas.PdfCanvas(handle)
	canvas.start_document(100, 120)
	canvas.text(1500, 2000, "⌫", chordmap_cheatsheet.config.LEGEND_STYLE)
	canvas.text(1500, 4000, "␣ △ ▽ ◁ ▷", chordmap_cheatsheet.config.LEGEND_STYLE)
	canvas.end_document()
	text = pypdf.PdfReader(io.BytesIO(handle.getvalue())).pages[0].extract_text()
	assert "⌫" in text
	assert "␣" in text
	assert "▷" in text


#============================================
def test_missing_ttf_font_is_not_registered(tmp_path) -> None:
	registered = chordmap_cheatsheet.canvas.register_ttf_font("NoSuchChordmapFont", (str(tmp_path),))
	assert registered is False


#============================================
def test_build_canvas_rejects_unknown_format() -> None:
	with pytest.raises(ValueError):
		chordmap_cheatsheet.canvas.build_canvas("png", io.BytesIO())
