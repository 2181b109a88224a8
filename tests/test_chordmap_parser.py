# Standard Library
import io

import chordmap_cheatsheet.chordmap_parser

from conftest import finger_line, fn_line, thumb_line


parse_chordmap_lines = chordmap_cheatsheet.chordmap_parser.parse_chordmap_lines


#============================================
def test_finger_record_yields_two_layers() -> None:
	line = finger_line("0200", lower_glyph="e", upper_glyph="E")
	assert len(line) >= 38
	pads = parse_chordmap_lines([line])
	assert len(pads) == 2
	lower, upper = pads
	assert (lower.legend, lower.legend_is_char) == ("e", True)
	assert (upper.legend, upper.legend_is_char) == ("E", True)
	assert lower.section == "finger"
	assert lower.chord.finger_profile() == (0, 2, 0, 0)
	assert lower.chord.thumb_profile() == (0, 0, 0, 0)
	# the upper layer adds the wide thumb key
	assert upper.chord.thumb_profile() == (0, 4, 0, 0)
	assert upper.chord.finger_profile() == (0, 2, 0, 0)


#============================================
def test_finger_record_text_legends() -> None:
	line = finger_line("1100", lower_text="pgup", upper_text="volup   ")
	lower, upper = parse_chordmap_lines([line + "\n"])
	assert (lower.legend, lower.legend_is_char) == ("pgup", False)
	assert (upper.legend, upper.legend_is_char) == ("volup", False)


#============================================
def test_empty_legend_with_shift_flag_is_left_shift() -> None:
	line = finger_line("0030", lower_text="no", lower_flags=" s  ")
	lower, upper = parse_chordmap_lines([line])
	assert lower.legend == "Left Shift"
	assert upper.legend == ""


#============================================
def test_invalid_row_digits_press_unused_row() -> None:
	line = finger_line("9x20", lower_glyph="q")
	lower, _upper = parse_chordmap_lines([line])
	assert lower.chord.finger_profile() == (0, 0, 2, 0)


#============================================
def test_thumb_record() -> None:
	pads = parse_chordmap_lines([thumb_line("404", "space  ")])
	assert len(pads) == 1
	pad = pads[0]
	assert pad.section == "thumb"
	assert pad.legend == "space"
	assert pad.chord.thumb_profile() == (4, 0, 4, 0)
	assert pad.chord.finger_profile() == (0, 0, 0, 0)


#============================================
def test_thumb_record_without_legend_is_dummy() -> None:
	pads = parse_chordmap_lines([thumb_line("040", "")])
	assert pads[0].legend == "DUMMY"


#============================================
def test_fn_record_modifiers_and_duration() -> None:
	line = fn_line("0", "0200", "sc  ", "a   ", "1", "modifiers")
	pads = parse_chordmap_lines([line])
	assert len(pads) == 1
	pad = pads[0]
	assert pad.section == "fn"
	assert pad.legend == "modifiers"
	assert pad.modifiers == ("L Shift", "L Ctrl", "R Alt")
	assert pad.modifier_duration == "(sticky)"
	assert pad.chord.finger_profile() == (0, 2, 0, 0)
	assert pad.chord.thumb_profile() == (4, 0, 0, 0)


#============================================
def test_fn_record_second_thumb_key_and_toggle() -> None:
	line = fn_line("1", "1000", "    ", "g   ", "t", "modifiers")
	pad = parse_chordmap_lines([line])[0]
	assert pad.modifiers == ("R GUI",)
	assert pad.modifier_duration == "(toggle)"
	assert pad.chord.thumb_profile() == (0, 0, 4, 0)


#============================================
def test_non_record_lines_are_ignored() -> None:
	lines = ["chordmap listing", "", "# comment", "*short"]
	assert parse_chordmap_lines(lines) == []


#============================================
def test_read_chordmap_from_file_and_stdin(tmp_path) -> None:
	text = finger_line("0200", lower_glyph="e", upper_glyph="E") + "\n" + thumb_line("404", "space") + "\n"
	path = tmp_path / "chordmap.txt"
	path.write_text(text, encoding="utf-8")
	from_file = chordmap_cheatsheet.chordmap_parser.read_chordmap(str(path))
	from_stdin = chordmap_cheatsheet.chordmap_parser.read_chordmap("-", stdin=io.StringIO(text))
	assert len(from_file) == 3
	assert from_file == from_stdin
