"""
Legend translation and ordering of chord pads.
"""

# Standard Library
import dataclasses
import unicodedata

# local repo modules
import chordmap_cheatsheet as chs
import chordmap_cheatsheet.chord


ChordPad = chs.chord.ChordPad

CATEGORY_DIGIT = 0
CATEGORY_LETTER = 1
CATEGORY_PUNCTUATION = 2
CATEGORY_SYMBOL = 3
CATEGORY_OTHER = 4

TRANSLATABLE_NAMES = {
	"bspace": "⌫",
	"down": "▽",
	"left": "◁",
	"right": "▷",
	"space": "␣",
	"up": "△",
}

SPECIAL_KEYS = {
	"Left Shift": "Left Shift",
	"again": "Again",
	"appl": "Appl",
	"capslock": "Caps Lock",
	"copy": "Copy",
	"copz": "Copy",
	"cut": "Cut",
	"delete": "Delete",
	"end": "End",
	"enter": "Enter",
	"escape": "Escape",
	"find": "Find",
	"help": "Help",
	"home": "Home",
	"insert": "Insert",
	"kp aster": "Keypad *",
	"kp comma": "Keypad Comma",
	"kp dot": "Keypad Dot",
	"kp enter": "Keypad Enter",
	"kp equal": "Keypad =",
	"kp minus": "Keypad -",
	"kp plus": "Keypad +",
	"kp slash": "Keypad /",
	"macro lr": "macro layer",
	"mouse lr": "mouse layer",
	"mute": "Mute",
	"nav lr": "navigation layer",
	"numlock": "Num Lock",
	"numpad lr": "number pad layer",
	"paste": "Paste",
	"pause": "Pause",
	"pgdown": "Page Down",
	"pgup": "Page Up",
	"power": "Power",
	"prnt chds": "type chordmap",
	"pscreen": "Print Screen",
	"rec macro": "start macro record",
	"reset kbd": "keyboard reset",
	"scrolllck": "Scroll Lock",
	"stop": "Stop",
	"swap chds": "start chord swap",
	"sysreq": "SysReq",
	"szsreq": "SysReq",
	"tab": "Tab",
	"voldown": "Volume Down",
	"volup": "Volume Up",
}
SPECIAL_KEYS.update({f"f{number}": f"F{number}" for number in range(1, 25)})
SPECIAL_KEYS.update({f"int{number}": f"Intl {number}" for number in range(1, 10)})
SPECIAL_KEYS.update({f"lang{number}": f"Lang {number}" for number in range(1, 10)})
SPECIAL_KEYS.update({f"kp {number}": f"Keypad {number}" for number in range(10)})
SPECIAL_KEYS.update({f"macro {number}": f"store/play macro {number}" for number in range(8)})


#============================================
def translate_legends(pads: list[ChordPad]) -> list[ChordPad]:
	"""
	Replace translatable key names by their glyphs.

	Args:
		pads: Parsed chord pads.

	Returns:
		New list with translated pads flagged as single glyphs.
	"""
	translated: list[ChordPad] = []
	for pad in pads:
		glyph = TRANSLATABLE_NAMES.get(pad.legend)
		if glyph is None:
			translated.append(pad)
			continue
		translated.append(dataclasses.replace(pad, legend=glyph, legend_is_char=True))
	return translated


#============================================
def special_key_name(legend: str) -> str | None:
	return SPECIAL_KEYS.get(legend)


#============================================
def legend_category(legend: str) -> int:
	"""
	Classify a legend by its first character.

	Args:
		legend: Legend text.

	Returns:
		Category rank: digit, letter, punctuation, symbol, other.
	"""
	if not legend:
		return CATEGORY_OTHER
	first = legend[0]
	category = unicodedata.category(first)
	if category == "Nd":
		return CATEGORY_DIGIT
	if category.startswith("L"):
		return CATEGORY_LETTER
	if category.startswith("P"):
		return CATEGORY_PUNCTUATION
	if category.startswith("S"):
		return CATEGORY_SYMBOL
	return CATEGORY_OTHER


#============================================
def sort_chord_pads(pads: list[ChordPad]) -> list[ChordPad]:
	"""
	Order pads for display.

	Three stable passes: alphabetical, then by legend category, then single
	glyphs before longer legends. The last pass has the highest priority.

	Args:
		pads: Chord pads.

	Returns:
		Sorted copy of the pads.
	"""
	ordered = sorted(pads, key=lambda pad: pad.legend.lower())
	ordered = sorted(ordered, key=lambda pad: legend_category(pad.legend))
	ordered = sorted(ordered, key=lambda pad: not pad.legend_is_char)
	return ordered
