# Standard Library
import math

# PIP3 modules
import defusedxml.ElementTree
import pytest

import chordmap_cheatsheet.chord
import chordmap_cheatsheet.config
import chordmap_cheatsheet.layout

from conftest import build_render_config


Chord = chordmap_cheatsheet.chord.Chord
ChordPad = chordmap_cheatsheet.chord.ChordPad
SectionHeader = chordmap_cheatsheet.chord.SectionHeader
PageBreak = chordmap_cheatsheet.chord.PageBreak
LayoutEngine = chordmap_cheatsheet.layout.LayoutEngine

PAGE_MARGIN = chordmap_cheatsheet.config.PAGE_MARGIN
PAD_SIZE = chordmap_cheatsheet.config.PAD_SIZE
PAD_SEP = chordmap_cheatsheet.config.PAD_SEP
HEADER_GAP = chordmap_cheatsheet.config.HEADER_GAP
SVG_NS = "{http://www.w3.org/2000/svg}"


#============================================
def _pads(count: int) -> list[ChordPad]:
	return [
		ChordPad(chord=Chord.from_presses([(1 + index % 3, index % 4)]), section="finger", legend=f"pad{index}")
		for index in range(count)
	]


#============================================
def _run(config, items) -> chordmap_cheatsheet.config.LayoutResult:
	engine = LayoutEngine(config)
	engine.start()
	for item in items:
		engine.place(item)
	return engine.finish()


#============================================
def _pad_placements(result) -> list:
	return [placement for placement in result.placements if placement.kind == "pad"]


#============================================
@pytest.mark.parametrize("count", [1, 4, 5, 8, 9])
def test_page_count_for_one_row_pages(tmp_path, count: int) -> None:
	"""
	A 130x60 mm page holds one row of four pads.
	"""
	config = build_render_config(str(tmp_path / "sheet.svg"), page_width=130, page_height=60)
	result = _run(config, _pads(count))
	assert result.columns_per_page == 4
	assert result.pages == math.ceil(count / 4)
	assert result.pad_count == count
	assert len(result.filenames) == result.pages


#============================================
def test_overflow_pad_starts_next_page_top_left(tmp_path) -> None:
	config = build_render_config(str(tmp_path / "sheet.svg"), page_width=130, page_height=60)
	result = _run(config, _pads(5))
	pads = _pad_placements(result)
	assert [placement.page for placement in pads] == [1, 1, 1, 1, 2]
	assert [placement.column for placement in pads[:4]] == [0, 1, 2, 3]
	last = pads[4]
	assert (last.column, last.row) == (0, 0)
	assert last.x == PAGE_MARGIN
	assert last.y == pads[0].y


#============================================
def test_pads_keep_submission_order(tmp_path) -> None:
	config = build_render_config(str(tmp_path / "sheet.svg"))
	items = _pads(10)
	result = _run(config, items)
	assert [placement.text for placement in _pad_placements(result)] == [pad.legend for pad in items]


#============================================
def test_header_starts_new_row(tmp_path) -> None:
	config = build_render_config(str(tmp_path / "sheet.svg"))
	items = _pads(3) + [SectionHeader("Modifiers")] + _pads(2)
	result = _run(config, items)
	assert result.columns_per_page == 7
	assert result.pages == 1
	pads = _pad_placements(result)
	assert [(placement.column, placement.row) for placement in pads] == [
		(0, 0), (1, 0), (2, 0), (0, 1), (1, 1),
	]
	header = [placement for placement in result.placements if placement.kind == "header"][0]
	assert header.row == 1
	assert header.y == pads[3].y - HEADER_GAP
	# a partial row reserves one extra pad pitch for the header
	assert pads[3].y - pads[0].y == 2 * (PAD_SIZE + PAD_SEP) + PAD_SEP


#============================================
def test_header_on_row_boundary_keeps_row(tmp_path) -> None:
	config = build_render_config(str(tmp_path / "sheet.svg"), page_width=130)
	items = [SectionHeader("Simple Chords")] + _pads(4) + [SectionHeader("Modifiers")] + _pads(1)
	result = _run(config, items)
	pads = _pad_placements(result)
	assert (pads[0].column, pads[0].row) == (0, 0)
	assert pads[0].y == PAGE_MARGIN + PAGE_MARGIN + PAD_SEP
	assert (pads[4].column, pads[4].row) == (0, 1)
	assert pads[4].y - pads[0].y == PAD_SIZE + PAD_SEP + PAD_SEP


#============================================
def test_page_break_switches_page(tmp_path) -> None:
	config = build_render_config(str(tmp_path / "sheet.svg"))
	items = _pads(2) + [PageBreak(), SectionHeader("Unused Chords")] + _pads(1)
	result = _run(config, items)
	assert result.pages == 2
	pads = _pad_placements(result)
	assert [placement.page for placement in pads] == [1, 1, 2]
	assert (pads[2].column, pads[2].row) == (0, 0)


#============================================
def test_header_that_does_not_fit_moves_to_next_page(tmp_path) -> None:
	# 80 mm holds one pad row, but not a header plus another row
	config = build_render_config(str(tmp_path / "sheet.svg"), page_width=130, page_height=80)
	items = _pads(1) + [SectionHeader("Modifiers")] + _pads(1)
	result = _run(config, items)
	assert result.pages == 2
	header = [placement for placement in result.placements if placement.kind == "header"][0]
	assert header.page == 2
	pads = _pad_placements(result)
	assert pads[1].page == 2
	assert (pads[1].column, pads[1].row) == (0, 0)


#============================================
def test_consecutive_headers_stay_on_page(tmp_path) -> None:
	"""
	Stacked headers push each other down and must not run off the page.
	"""
	page_height = 100
	config = build_render_config(str(tmp_path / "sheet.svg"), page_width=130, page_height=page_height)
	items = _pads(1) + [SectionHeader(f"Section {index}") for index in range(12)]
	result = _run(config, items)
	headers = [placement for placement in result.placements if placement.kind == "header"]
	assert len(headers) == 12
	assert result.pages > 2
	for header in headers:
		# the row a header opens ends above the bottom margin
		assert header.y + HEADER_GAP + PAD_SIZE + PAGE_MARGIN <= page_height * 100
	# the first header does not fit below the pad row
	assert headers[0].page == 2
	assert [header.page for header in headers].count(2) == 7


#============================================
def test_pages_are_written_as_numbered_svg_files(tmp_path) -> None:
	config = build_render_config(str(tmp_path / "sheet.svg"), page_width=130, page_height=60)
	result = _run(config, _pads(6))
	assert result.filenames == [str(tmp_path / "sheet1.svg"), str(tmp_path / "sheet2.svg")]
	for page_number, filename in enumerate(result.filenames, start=1):
		root = defusedxml.ElementTree.parse(filename).getroot()
		assert root.tag == f"{SVG_NS}svg"
		assert root.get("viewBox") == "0 0 13000 6000"
		assert root.find(f"{SVG_NS}title").text == f"test chordmap (p. {page_number})"
	first = defusedxml.ElementTree.parse(result.filenames[0]).getroot()
	assert len(first.findall(f"{SVG_NS}g")) == 4


#============================================
def test_unknown_item_is_rejected(tmp_path) -> None:
	config = build_render_config(str(tmp_path / "sheet.svg"))
	engine = LayoutEngine(config)
	engine.start()
	with pytest.raises(TypeError):
		engine.place("not an item")
	engine.abort()


#============================================
def test_place_before_start_is_rejected(tmp_path) -> None:
	config = build_render_config(str(tmp_path / "sheet.svg"))
	engine = LayoutEngine(config)
	with pytest.raises(RuntimeError):
		engine.place(_pads(1)[0])
	assert not (tmp_path / "sheet1.svg").exists()


#============================================
def test_header_alignment_with_four_columns(tmp_path) -> None:
	config = build_render_config(str(tmp_path / "sheet.svg"), page_width=130)
	items = _pads(3) + [SectionHeader("Modifiers")] + _pads(2)
	result = _run(config, items)
	assert result.columns_per_page == 4
	pads = _pad_placements(result)
	assert [(placement.column, placement.row) for placement in pads] == [
		(0, 0), (1, 0), (2, 0), (0, 1), (1, 1),
	]
	assert {placement.page for placement in pads} == {1}
