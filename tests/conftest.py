"""
Pytest configuration for local imports and shared test helpers.
"""

# Standard Library
import os
import sys

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()
import chordmap_cheatsheet.config


#============================================
def build_render_config(
	output_path: str,
	page_width: int = chordmap_cheatsheet.config.DEFAULT_PAGE_WIDTH,
	page_height: int = chordmap_cheatsheet.config.DEFAULT_PAGE_HEIGHT,
	output_format: str | None = None,
) -> chordmap_cheatsheet.config.RenderConfig:
	"""
	Build a RenderConfig for tests.

	Args:
		output_path: Output target.
		page_width: Page width in mm.
		page_height: Page height in mm.
		output_format: Format, taken from the suffix when None.

	Returns:
		RenderConfig.
	"""
	return chordmap_cheatsheet.config.RenderConfig(
		output_path=output_path,
		output_format=chordmap_cheatsheet.config.detect_output_format(output_path, output_format),
		page_width=page_width,
		page_height=page_height,
		title="test chordmap",
	)


#============================================
def _place(chars: list[str], start: int, text: str) -> None:
	for offset, char in enumerate(text):
		chars[start + offset] = char


#============================================
def finger_line(
	digits: str,
	lower_glyph: str = " ",
	lower_text: str = "",
	upper_glyph: str = " ",
	upper_text: str = "",
	lower_flags: str = "    ",
) -> str:
	"""
	Build a fixed-column finger record.

	Args:
		digits: Four row digits.
		lower_glyph: Single-glyph legend of the lower layer.
		lower_text: Text legend of the lower layer.
		upper_glyph: Single-glyph legend of the upper layer.
		upper_text: Text legend of the upper layer.
		lower_flags: Modifier flags of the lower layer.

	Returns:
		Record line.
	"""
	chars = ["*"] + [" "] * 38
	_place(chars, 2, digits)
	_place(chars, 7, lower_flags)
	_place(chars, 16, lower_glyph)
	_place(chars, 18, lower_text)
	_place(chars, 37, upper_glyph)
	return "".join(chars) + upper_text


#============================================
def thumb_line(digits: str, legend: str) -> str:
	return "*  " + digits + " " * 18 + legend


#============================================
def fn_line(thumb: str, digits: str, left: str, right: str, duration: str, legend: str) -> str:
	"""
	Build a fixed-column function-layer record.
	"""
	chars = ["*"] + [" "] * 25
	_place(chars, 2, thumb)
	_place(chars, 4, digits)
	_place(chars, 9, left)
	_place(chars, 14, right)
	_place(chars, 19, duration)
	return "".join(chars) + legend
