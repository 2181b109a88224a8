"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses
import pathlib


# drawing units are 1/100 mm
UNITS_PER_MM = 100
POINTS_PER_INCH = 72.0
MM_PER_INCH = 25.4

KEY_SIZE = 450
KEY_SEP = 60
KEY_RADIUS = 60
PAD_SIZE = KEY_SIZE * 4 + KEY_SEP * 3
PAGE_MARGIN = 1200
PAD_SEP = 600
FRAME_THICKNESS = 120
FRAME_SIZE = PAD_SIZE + FRAME_THICKNESS + 2 * KEY_SEP
HEADER_GAP = PAD_SEP + FRAME_THICKNESS + KEY_SEP
BADGE_RADIUS = 260
TITLE_SIZE = 300

DEFAULT_PAGE_WIDTH = 200
DEFAULT_PAGE_HEIGHT = 290
DEFAULT_OUTPUT = "chordmap.svg"
DEFAULT_INPUT = "chordmap.txt"
DEFAULT_TITLE = "NaN-15 chordmap"
STDOUT_TARGET = "-"
STDIN_SOURCE = "-"
OUTPUT_FORMATS = ("svg", "pdf")

SECTION_THUMB = "thumb"
SECTION_FINGER = "finger"
SECTION_FN = "fn"

COLOR_RED = "#8b0000"
COLOR_GREEN = "#006400"
COLOR_GREY = "#2f4f4f"
COLOR_BLACK = "#000000"
COLOR_WHITE = "#ffffff"
SECTION_COLORS = {
	SECTION_FINGER: COLOR_RED,
	SECTION_FN: COLOR_GREEN,
	SECTION_THUMB: COLOR_GREY,
}

SVG_FONT_FAMILY = "'DejaVu Sans'"
DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"
# TrueType faces embedded in PDF output when found, they cover the glyph legends
TTF_FONT_REGULAR = "DejaVuSans"
TTF_FONT_BOLD = "DejaVuSans-Bold"
TTF_FONT_DIRS = (
	"/usr/share/fonts/truetype/dejavu",
	"/usr/share/fonts/dejavu",
	"/usr/share/fonts/TTF",
	"/usr/local/share/fonts",
	"/Library/Fonts",
	"C:/Windows/Fonts",
)

PROGRESS_BAR_WIDTH = 20
PROGRESS_UPDATE_EVERY = 10


@dataclasses.dataclass(frozen=True)
class Style:
	stroke: str | None = None
	fill: str | None = None
	stroke_width: float = 0.0
	stroke_opacity: float = 1.0
	fill_opacity: float = 1.0
	font_size: float = 0.0
	bold: bool = False
	anchor: str = "start"
	baseline: str = "auto"

	#============================================
	def to_css(self) -> str:
		"""
		Render the style as an inline SVG style attribute value.

		Returns:
			CSS declaration string.
		"""
		parts: list[str] = []
		parts.append(f"stroke:{self.stroke or 'none'}")
		parts.append(f"fill:{self.fill or 'none'}")
		if self.stroke and self.stroke_width > 0:
			parts.append(f"stroke-width:{self.stroke_width:g}")
		if self.stroke_opacity < 1.0:
			parts.append(f"stroke-opacity:{self.stroke_opacity:g}")
		if self.fill_opacity < 1.0:
			parts.append(f"fill-opacity:{self.fill_opacity:g}")
		if self.font_size > 0:
			parts.append(f"font-family:{SVG_FONT_FAMILY}")
			parts.append(f"font-size:{self.font_size:g}px")
			if self.bold:
				parts.append("font-weight:bold")
			parts.append(f"text-anchor:{self.anchor}")
			if self.baseline != "auto":
				parts.append(f"dominant-baseline:{self.baseline}")
		return ";".join(parts)


FRAME_STYLE = Style(fill=COLOR_WHITE, stroke_opacity=0.2, stroke_width=FRAME_THICKNESS)
RELEASED_STYLE = Style(fill=COLOR_WHITE, stroke_width=50, stroke_opacity=0.2)
PRESSED_STYLE = Style(stroke_width=30, fill_opacity=0.2, stroke_opacity=0.4)
LEGEND_STYLE = Style(
	fill=COLOR_BLACK,
	fill_opacity=0.5,
	font_size=KEY_SIZE,
	anchor="middle",
	baseline="middle",
)
GLYPH_STYLE = Style(
	stroke=COLOR_BLACK,
	stroke_width=KEY_SEP / 2,
	stroke_opacity=0.5,
	fill=COLOR_BLACK,
	fill_opacity=0.0,
	font_size=PAD_SIZE - KEY_SIZE,
	bold=True,
	anchor="middle",
)
QUALITY_STYLE = Style(font_size=400, anchor="middle", baseline="middle")
BADGE_STYLE = Style(fill=COLOR_WHITE, stroke_width=30, stroke_opacity=0.6)
HEADER_STYLE = Style(fill=COLOR_BLACK, font_size=KEY_SIZE, baseline="text-bottom")
RULE_STYLE = Style(stroke=COLOR_BLACK, stroke_width=20, stroke_opacity=0.3)
TITLE_STYLE = Style(fill=COLOR_BLACK, fill_opacity=0.6, font_size=TITLE_SIZE, anchor="end")
PAD_HEADER_STYLE = Style(fill=COLOR_BLACK, font_size=400, bold=True, baseline="text-bottom")


@dataclasses.dataclass
class RenderConfig:
	output_path: str
	output_format: str
	page_width: int
	page_height: int
	title: str


@dataclasses.dataclass
class Placement:
	page: int
	kind: str
	text: str
	column: int
	row: int
	x: int
	y: int


@dataclasses.dataclass
class LayoutResult:
	pages: int
	pad_count: int
	columns_per_page: int
	filenames: list[str]
	placements: list[Placement]


#============================================
def mm_to_units(value: float) -> int:
	"""
	Convert millimetres to drawing units.

	Args:
		value: Millimetre value.

	Returns:
		Drawing units (1/100 mm).
	"""
	return int(round(value * UNITS_PER_MM))


#============================================
def units_to_points(value: float) -> float:
	"""
	Convert drawing units to PDF points.

	Args:
		value: Drawing units (1/100 mm).

	Returns:
		Points value.
	"""
	return value / UNITS_PER_MM / MM_PER_INCH * POINTS_PER_INCH


#============================================
def compute_columns_per_page(page_width: int) -> int:
	"""
	Compute how many pads fit side by side on a page.

	Args:
		page_width: Page width in millimetres.

	Returns:
		Number of pad columns.
	"""
	usable = mm_to_units(page_width) - 2 * PAGE_MARGIN + PAD_SEP
	return usable // (PAD_SIZE + PAD_SEP)


#============================================
def minimum_page_height() -> int:
	"""
	Smallest page height, in drawing units, that holds one pad row.

	Returns:
		Height in drawing units.
	"""
	# one pad row below the top margin and its initial offset, above the bottom margin
	return 3 * PAGE_MARGIN + PAD_SIZE


#============================================
def detect_output_format(output_path: str, requested: str | None) -> str:
	"""
	Resolve the output format from the target name and an explicit request.

	Args:
		output_path: Output target, or the stdout sentinel.
		requested: Format requested on the command line, or None.

	Returns:
		Output format name.
	"""
	if output_path == STDOUT_TARGET:
		return (requested or "svg").lower()
	suffix = pathlib.PurePath(output_path).suffix.lower().lstrip(".")
	if requested is None:
		return suffix
	return requested.lower()


#============================================
def validate_render_config(config: RenderConfig) -> None:
	"""
	Check a render configuration before any output is opened.

	Args:
		config: Render configuration.

	Raises:
		ValueError: If the configuration cannot produce output.
	"""
	if config.page_width <= 0 or config.page_height <= 0:
		raise ValueError(
			f"page size must be positive, got {config.page_width}x{config.page_height} mm"
		)
	if compute_columns_per_page(config.page_width) < 1:
		raise ValueError(f"page width {config.page_width} mm is too narrow for one chord pad")
	if mm_to_units(config.page_height) < minimum_page_height():
		raise ValueError(f"page height {config.page_height} mm is too short for one chord pad")
	suffix = None
	if config.output_path != STDOUT_TARGET:
		path = pathlib.PurePath(config.output_path)
		if not path.name or not path.stem:
			raise ValueError(f"output filename '{config.output_path}' is empty")
		suffix = path.suffix.lower().lstrip(".")
		if not suffix:
			raise ValueError(f"output filename '{config.output_path}' has no file suffix")
	if config.output_format not in OUTPUT_FORMATS:
		supported = ", ".join(OUTPUT_FORMATS)
		raise ValueError(f"unsupported output format '{config.output_format}', use one of: {supported}")
	if suffix is not None and suffix != config.output_format:
		raise ValueError(
			f"output filename '{config.output_path}' does not match format '{config.output_format}'"
		)
