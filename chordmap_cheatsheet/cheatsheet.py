"""
Assemble the draw-item sequence of the full cheat sheet.
"""

# Standard Library
import dataclasses
from typing import Iterator

# local repo modules
import chordmap_cheatsheet as chs
import chordmap_cheatsheet.chord
import chordmap_cheatsheet.config
import chordmap_cheatsheet.sorting


Chord = chs.chord.Chord
ChordPad = chs.chord.ChordPad
SectionHeader = chs.chord.SectionHeader
PageBreak = chs.chord.PageBreak
DrawItem = chs.chord.DrawItem
translate_legends = chs.sorting.translate_legends
sort_chord_pads = chs.sorting.sort_chord_pads
special_key_name = chs.sorting.special_key_name

SECTION_THUMB = chs.config.SECTION_THUMB
SECTION_FINGER = chs.config.SECTION_FINGER
SECTION_FN = chs.config.SECTION_FN
COLOR_RED = chs.config.COLOR_RED
COLOR_GREEN = chs.config.COLOR_GREEN
COLOR_GREY = chs.config.COLOR_GREY
PAD_HEADER_STYLE = chs.config.PAD_HEADER_STYLE

SIMPLE_CHORDS_TITLE = "Simple Chords"
MODIFIERS_TITLE = "Modifiers"
UNUSED_CHORDS_TITLE = "Unused Chords"
CUSTOMIZATION_TITLE = "Customization"
MODIFIERS_LEGEND = "modifiers"
EMPTY_LEGEND = "no"
EMPTY_LABEL = "[empty]"

NBSP = "\u00a0"
EASE_HEADER = NBSP * 3 + "ease"
CENTERED_RED = dataclasses.replace(PAD_HEADER_STYLE, anchor="middle", fill=COLOR_RED)
CENTERED_GREEN = dataclasses.replace(PAD_HEADER_STYLE, anchor="middle", fill=COLOR_GREEN)
CENTERED_BLACK = dataclasses.replace(PAD_HEADER_STYLE, anchor="middle")
LEFT_GREY = dataclasses.replace(PAD_HEADER_STYLE, fill=COLOR_GREY)

LEGEND_PADS = (
	ChordPad(chord=Chord(), section=SECTION_FINGER, legend="red 1", suppress_quality=True),
	ChordPad(
		chord=Chord(),
		section=SECTION_FINGER,
		legend="red 2",
		suppress_quality=True,
		header="swappable",
		header_style=CENTERED_RED,
	),
	ChordPad(chord=Chord(), section=SECTION_FN, legend="green 1", suppress_quality=True),
	ChordPad(
		chord=Chord(),
		section=SECTION_FN,
		legend="green 2",
		suppress_quality=True,
		header="swappable",
		header_style=CENTERED_GREEN,
	),
	ChordPad(chord=Chord(), section=SECTION_FINGER, legend="red 1", suppress_quality=True),
	ChordPad(
		chord=Chord(),
		section=SECTION_FN,
		legend="green 2",
		suppress_quality=True,
		header="unswappable",
		header_style=CENTERED_BLACK,
	),
	ChordPad(
		chord=Chord(),
		section=SECTION_THUMB,
		legend="grey",
		suppress_quality=True,
		header=NBSP + "immutable",
		header_style=LEFT_GREY,
	),
	ChordPad(
		chord=Chord.from_rows([[], [], [False, True]]),
		section=SECTION_FINGER,
		legend="excellent",
		header=EASE_HEADER,
		header_style=PAD_HEADER_STYLE,
	),
	ChordPad(
		chord=Chord.from_rows([[], [], [True], [False, True, True, True]]),
		section=SECTION_FINGER,
		legend="fair",
		header=EASE_HEADER,
		header_style=PAD_HEADER_STYLE,
	),
	ChordPad(
		chord=Chord.from_rows([[], [False, False, True], [True], [False, True, False, True]]),
		section=SECTION_FINGER,
		legend="poor",
		header=EASE_HEADER,
		header_style=PAD_HEADER_STYLE,
	),
)


#============================================
def prepare_chord_pads(pads: list[ChordPad]) -> list[ChordPad]:
	"""
	Translate key names and sort pads for display.

	Args:
		pads: Pads in input order.

	Returns:
		Display-ordered pads.
	"""
	return sort_chord_pads(translate_legends(pads))


#============================================
def build_draw_items(pads: list[ChordPad]) -> Iterator[DrawItem]:
	"""
	Yield the cheat sheet's draw items in display order.

	Args:
		pads: Display-ordered pads from prepare_chord_pads().

	Yields:
		Section headers, chord pads and page breaks.
	"""
	yield SectionHeader(SIMPLE_CHORDS_TITLE)
	for pad in pads:
		name = special_key_name(pad.legend)
		if name is not None:
			yield dataclasses.replace(pad, legend=name)
		elif pad.legend_is_char:
			yield pad

	yield SectionHeader(MODIFIERS_TITLE)
	for pad in pads:
		if pad.legend == MODIFIERS_LEGEND:
			yield pad

	yield PageBreak()
	yield SectionHeader(UNUSED_CHORDS_TITLE)
	for pad in pads:
		if pad.legend == EMPTY_LEGEND and not pad.chord.is_empty():
			yield dataclasses.replace(pad, legend=EMPTY_LABEL)

	yield SectionHeader(CUSTOMIZATION_TITLE)
	yield from LEGEND_PADS
