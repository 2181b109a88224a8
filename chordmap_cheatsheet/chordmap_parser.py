"""
Chordmap listing parsing.

The firmware prints its chord table as fixed-column text. Record lines start
with "*"; the line length and column 2 tell finger, thumb and function
records apart.
"""

# Standard Library
import sys
from typing import Iterable, TextIO

# local repo modules
import chordmap_cheatsheet as chs
import chordmap_cheatsheet.chord
import chordmap_cheatsheet.config


Chord = chs.chord.Chord
ChordPad = chs.chord.ChordPad

SECTION_THUMB = chs.config.SECTION_THUMB
SECTION_FINGER = chs.config.SECTION_FINGER
SECTION_FN = chs.config.SECTION_FN
STDIN_SOURCE = chs.config.STDIN_SOURCE

FINGER_RECORD_MIN_LENGTH = 38
FN_RECORD_MIN_LENGTH = 26
THUMB_RECORD_MIN_LENGTH = 24
WIDE_THUMB_KEY = (4, 1)
FN_THUMB_KEYS = {"0": (4, 0), "1": (4, 2)}
MODIFIER_LETTERS = (
	("a", "Alt"),
	("s", "Shift"),
	("g", "GUI"),
	("c", "Ctrl"),
)
DURATIONS = {"1": "(sticky)", "t": "(toggle)"}
EMPTY_LEGEND = "no"
SHIFT_LEGEND = "Left Shift"
DUMMY_LEGEND = "DUMMY"


#============================================
def parse_row_digits(digits: str) -> list[tuple[int, int]]:
	"""
	Turn a run of row digits into pressed (row, column) cells.

	Args:
		digits: One character per key column.

	Returns:
		Pressed cells. Row 0 and non-digits press the unused row 0.
	"""
	presses: list[tuple[int, int]] = []
	for col, digit in enumerate(digits):
		row = int(digit) if digit.isdigit() else 0
		if row > 4:
			row = 0
		presses.append((row, col))
	return presses


#============================================
def parse_finger_legend(line: str, glyph_col: int, text_start: int, text_end: int | None, flags: str) -> tuple[str, bool]:
	"""
	Read the legend of one layer of a finger record.

	Args:
		line: Record line.
		glyph_col: Column holding a single-glyph legend.
		text_start: First column of the text legend.
		text_end: End column of the text legend, or None for end of line.
		flags: Modifier flag columns of this layer.

	Returns:
		Tuple of (legend, legend_is_char).
	"""
	if line[glyph_col] != " ":
		return (line[glyph_col], True)
	legend = line[text_start:text_end].rstrip(" ")
	if legend == EMPTY_LEGEND and "s" in flags:
		legend = SHIFT_LEGEND
	return (legend, False)


#============================================
def parse_finger_record(line: str) -> list[ChordPad]:
	"""
	Parse a finger record into its lower and upper layer pads.

	Args:
		line: Record line.

	Returns:
		Two chord pads.
	"""
	chord = Chord.from_presses(parse_row_digits(line[2:6]))
	lower_legend, lower_is_char = parse_finger_legend(line, 16, 18, 27, line[7:11])
	upper_legend, upper_is_char = parse_finger_legend(line, 37, 39, None, line[28:32])
	lower = ChordPad(
		chord=chord,
		section=SECTION_FINGER,
		legend=lower_legend,
		legend_is_char=lower_is_char,
	)
	upper = ChordPad(
		chord=chord.with_press(*WIDE_THUMB_KEY),
		section=SECTION_FINGER,
		legend=upper_legend,
		legend_is_char=upper_is_char,
	)
	return [lower, upper]


#============================================
def parse_thumb_record(line: str) -> ChordPad:
	chord = Chord.from_presses(parse_row_digits(line[3:6]))
	legend = line[24:].rstrip(" ")
	if not legend:
		legend = DUMMY_LEGEND
	return ChordPad(chord=chord, section=SECTION_THUMB, legend=legend)


#============================================
def parse_modifiers(left_flags: str, right_flags: str) -> tuple[str, ...]:
	"""
	Decode modifier flag columns.

	Args:
		left_flags: Left-hand modifier letters.
		right_flags: Right-hand modifier letters.

	Returns:
		Modifier names, left side first.
	"""
	modifiers: list[str] = []
	for side, flags in (("L", left_flags), ("R", right_flags)):
		for letter, name in MODIFIER_LETTERS:
			if letter in flags:
				modifiers.append(f"{side} {name}")
	return tuple(modifiers)


#============================================
def parse_fn_record(line: str) -> ChordPad:
	"""
	Parse a function-layer record.

	Args:
		line: Record line.

	Returns:
		Chord pad in the fn section.
	"""
	presses = parse_row_digits(line[4:8])
	thumb_key = FN_THUMB_KEYS.get(line[2])
	if thumb_key is not None:
		presses.append(thumb_key)
	return ChordPad(
		chord=Chord.from_presses(presses),
		section=SECTION_FN,
		legend=line[26:].rstrip(" "),
		modifiers=parse_modifiers(line[9:13], line[14:18]),
		modifier_duration=DURATIONS.get(line[19], ""),
	)


#============================================
def parse_chordmap_lines(lines: Iterable[str]) -> list[ChordPad]:
	"""
	Parse chordmap listing lines into chord pads.

	Args:
		lines: Text lines, with or without line endings.

	Returns:
		Chord pads in input order.
	"""
	pads: list[ChordPad] = []
	for raw_line in lines:
		line = raw_line.rstrip("\r\n")
		if not line.startswith("*"):
			continue
		if len(line) >= FINGER_RECORD_MIN_LENGTH:
			pads.extend(parse_finger_record(line))
		elif len(line) >= THUMB_RECORD_MIN_LENGTH and line[2] == " ":
			pads.append(parse_thumb_record(line))
		elif len(line) >= FN_RECORD_MIN_LENGTH:
			pads.append(parse_fn_record(line))
	return pads


#============================================
def read_chordmap(input_path: str, stdin: TextIO | None = None) -> list[ChordPad]:
	"""
	Read chord pads from a file or standard input.

	Args:
		input_path: Input path, or "-" for standard input.
		stdin: Stream used for "-", defaults to sys.stdin.

	Returns:
		Chord pads in input order.
	"""
	if input_path == STDIN_SOURCE:
		return parse_chordmap_lines(stdin or sys.stdin)
	with open(input_path, "r", encoding="utf-8") as handle:
		return parse_chordmap_lines(handle)
