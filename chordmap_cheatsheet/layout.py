"""
Layout and pagination of chord pads.

The engine tiles pads left to right, top to bottom, and opens a new page
whenever the next pad would run past the bottom margin. It is the only
code that touches the open output surface.
"""

# Standard Library
import dataclasses

# local repo modules
import chordmap_cheatsheet as chs
import chordmap_cheatsheet.chord
import chordmap_cheatsheet.config
import chordmap_cheatsheet.ergonomics
import chordmap_cheatsheet.surface


Chord = chs.chord.Chord
ChordPad = chs.chord.ChordPad
SectionHeader = chs.chord.SectionHeader
PageBreak = chs.chord.PageBreak
DrawItem = chs.chord.DrawItem
RenderConfig = chs.config.RenderConfig
LayoutResult = chs.config.LayoutResult
Placement = chs.config.Placement
SurfaceSequence = chs.surface.SurfaceSequence
OutputSurface = chs.surface.OutputSurface
chord_quality = chs.ergonomics.chord_quality

KEY_SIZE = chs.config.KEY_SIZE
KEY_SEP = chs.config.KEY_SEP
KEY_RADIUS = chs.config.KEY_RADIUS
PAD_SIZE = chs.config.PAD_SIZE
PAD_SEP = chs.config.PAD_SEP
PAGE_MARGIN = chs.config.PAGE_MARGIN
FRAME_THICKNESS = chs.config.FRAME_THICKNESS
FRAME_SIZE = chs.config.FRAME_SIZE
HEADER_GAP = chs.config.HEADER_GAP
BADGE_RADIUS = chs.config.BADGE_RADIUS
SECTION_COLORS = chs.config.SECTION_COLORS
FRAME_STYLE = chs.config.FRAME_STYLE
RELEASED_STYLE = chs.config.RELEASED_STYLE
PRESSED_STYLE = chs.config.PRESSED_STYLE
LEGEND_STYLE = chs.config.LEGEND_STYLE
GLYPH_STYLE = chs.config.GLYPH_STYLE
QUALITY_STYLE = chs.config.QUALITY_STYLE
BADGE_STYLE = chs.config.BADGE_STYLE
HEADER_STYLE = chs.config.HEADER_STYLE
RULE_STYLE = chs.config.RULE_STYLE
TITLE_STYLE = chs.config.TITLE_STYLE
PAD_HEADER_STYLE = chs.config.PAD_HEADER_STYLE
mm_to_units = chs.config.mm_to_units
compute_columns_per_page = chs.config.compute_columns_per_page
validate_render_config = chs.config.validate_render_config

STATE_IDLE = "idle"
STATE_PLACING = "placing"
STATE_DRAINING = "draining"
STATE_CLOSED = "closed"

KEY_PITCH = KEY_SIZE + KEY_SEP
PAD_PITCH = PAD_SIZE + PAD_SEP
KEY_ROWS = 4
KEY_COLUMNS = 4
THUMB_KEY_ROW = 3
WIDE_KEY_COLUMN = 1
MAX_LEGEND_LINES = 3
RULE_DROP = 2 * KEY_SEP


@dataclasses.dataclass
class LayoutCursor:
	pad_index: int = 0
	vertical_offset: int = PAGE_MARGIN
	page_number: int = 1
	items_on_page: int = 0


#============================================
def capitalize_words(text: str) -> str:
	"""
	Upper-case the first letter of each space-separated word.

	Args:
		text: Input text.

	Returns:
		Text with the rest of each word left as is.
	"""
	return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


#============================================
def stacked_offsets(count: int) -> list[int]:
	"""
	Vertical offsets that center a stack of text lines on the pad middle.

	Args:
		count: Number of lines.

	Returns:
		Offset per line, in drawing units.
	"""
	return [KEY_SIZE // 2 * (2 * index - count + 1) for index in range(count)]


class LayoutEngine:
	"""
	Place draw items on a sequence of fixed-size pages.

	Call start(), then place() once per item in stream order, then finish().
	"""

	def __init__(self, config: RenderConfig, surfaces: SurfaceSequence | None = None) -> None:
		validate_render_config(config)
		self.config = config
		self.surfaces = surfaces if surfaces is not None else SurfaceSequence(config)
		self.columns_per_page = compute_columns_per_page(config.page_width)
		self.page_width = mm_to_units(config.page_width)
		self.page_height = mm_to_units(config.page_height)
		self.content_width = self.columns_per_page * PAD_PITCH - PAD_SEP
		self.cursor = LayoutCursor()
		self.surface: OutputSurface | None = None
		self.state = STATE_IDLE
		self.pages = 0
		self.pad_count = 0
		self.placements: list[Placement] = []

	#============================================
	def _require_state(self, state: str) -> None:
		if self.state != state:
			raise RuntimeError(f"layout engine is {self.state}, expected {state}")

	#============================================
	def _open_page(self, page_number: int) -> None:
		self.surface = self.surfaces.open(page_number)
		self.cursor = LayoutCursor(page_number=page_number)
		self.pages += 1
		self.surface.canvas.text(
			self.page_width - PAGE_MARGIN,
			PAGE_MARGIN,
			f"{self.config.title} (p. {page_number})",
			TITLE_STYLE,
		)

	#============================================
	def start(self) -> None:
		"""
		Open the first page.
		"""
		self._require_state(STATE_IDLE)
		self._open_page(1)
		self.state = STATE_PLACING

	#============================================
	def switch_page(self) -> None:
		"""
		Finalize the current page and continue on a fresh one.
		"""
		if self.surface is not None:
			surface = self.surface
			self.surface = None
			self.surfaces.close(surface)
		self._open_page(self.cursor.page_number + 1)

	#============================================
	def place(self, item: DrawItem) -> None:
		"""
		Place one draw item, switching pages when it does not fit.

		Args:
			item: Chord pad, section header or page break.
		"""
		self._require_state(STATE_PLACING)
		if isinstance(item, ChordPad):
			if not self._draw_pad(item, force=False):
				self.switch_page()
				self._draw_pad(item, force=True)
		elif isinstance(item, SectionHeader):
			if self.cursor.items_on_page > 0 and not self._header_fits():
				self.switch_page()
			self._draw_header(item)
		elif isinstance(item, PageBreak):
			self.switch_page()
		else:
			raise TypeError(f"unsupported draw item {type(item).__name__}")

	#============================================
	def finish(self) -> LayoutResult:
		"""
		Finalize the last page and report what was drawn.

		Returns:
			LayoutResult.
		"""
		self._require_state(STATE_PLACING)
		self.state = STATE_DRAINING
		if self.surface is not None:
			surface = self.surface
			self.surface = None
			self.surfaces.close(surface)
		self.surfaces.finish()
		self.state = STATE_CLOSED
		return self.result()

	#============================================
	def abort(self) -> None:
		"""
		Release the open page after a fatal error.
		"""
		if self.surface is not None:
			self.surface.discard()
			self.surface = None
		self.state = STATE_CLOSED

	#============================================
	def result(self) -> LayoutResult:
		return LayoutResult(
			pages=self.pages,
			pad_count=self.pad_count,
			columns_per_page=self.columns_per_page,
			filenames=list(self.surfaces.filenames),
			placements=list(self.placements),
		)

	#============================================
	def _header_advance(self) -> tuple[int, int]:
		"""
		Cursor position a section header would move to.

		Returns:
			Tuple of (pad_index, vertical_offset) after the header.
		"""
		cursor = self.cursor
		columns = self.columns_per_page
		offset = cursor.vertical_offset + PAD_SEP
		remainder = (columns - cursor.pad_index % columns) % columns
		if remainder > 0:
			offset += PAD_SIZE + PAD_SEP
		return (cursor.pad_index + remainder, offset)

	#============================================
	def _header_fits(self) -> bool:
		"""
		Check that a header and the pad row it opens fit on the page.

		Returns:
			True when the opened row ends above the bottom margin.
		"""
		pad_index, offset = self._header_advance()
		row = pad_index // self.columns_per_page
		next_top = PAGE_MARGIN + row * PAD_PITCH + offset
		return next_top + PAD_SIZE + PAGE_MARGIN <= self.page_height

	#============================================
	def _draw_header(self, header: SectionHeader) -> None:
		"""
		Start a new pad row and draw a section title above it.

		Args:
			header: Section header item.
		"""
		cursor = self.cursor
		cursor.pad_index, cursor.vertical_offset = self._header_advance()
		row = cursor.pad_index // self.columns_per_page
		next_top = PAGE_MARGIN + row * PAD_PITCH + cursor.vertical_offset
		baseline = next_top - HEADER_GAP
		canvas = self.surface.canvas
		canvas.text(PAGE_MARGIN, baseline, header.text, HEADER_STYLE)
		canvas.line(
			PAGE_MARGIN,
			baseline + RULE_DROP,
			PAGE_MARGIN + self.content_width,
			baseline + RULE_DROP,
			RULE_STYLE,
		)
		cursor.items_on_page += 1
		self.placements.append(
			Placement(
				page=cursor.page_number,
				kind="header",
				text=header.text,
				column=0,
				row=row,
				x=PAGE_MARGIN,
				y=baseline,
			)
		)

	#============================================
	def _draw_pad(self, pad: ChordPad, force: bool) -> bool:
		"""
		Draw a chord pad at the next grid cell.

		Args:
			pad: Chord pad.
			force: Draw even when the pad runs past the bottom margin.

		Returns:
			False when the pad does not fit and nothing was drawn.
		"""
		cursor = self.cursor
		column = cursor.pad_index % self.columns_per_page
		row = cursor.pad_index // self.columns_per_page
		x = PAGE_MARGIN + column * PAD_PITCH
		y = PAGE_MARGIN + row * PAD_PITCH + cursor.vertical_offset
		if not force and y + PAD_SIZE + PAGE_MARGIN > self.page_height:
			return False

		canvas = self.surface.canvas
		color = SECTION_COLORS[pad.section]
		canvas.begin_group(pad.chord.profile_label())
		frame_offset = FRAME_THICKNESS // 2 + KEY_SEP
		canvas.rounded_rect(
			x - frame_offset,
			y - frame_offset,
			FRAME_SIZE,
			FRAME_SIZE,
			KEY_RADIUS,
			dataclasses.replace(FRAME_STYLE, stroke=color),
		)
		self._draw_keys(pad.chord, x, y, color)
		if not pad.suppress_quality:
			badge_x = x + PAD_SIZE + KEY_SEP
			badge_y = y + PAD_SIZE + KEY_SEP
			canvas.circle(badge_x, badge_y, BADGE_RADIUS, dataclasses.replace(BADGE_STYLE, stroke=color))
			canvas.text(
				badge_x,
				badge_y,
				str(chord_quality(pad.chord)),
				dataclasses.replace(QUALITY_STYLE, fill=color),
			)
		self._draw_legend(pad, x, y)
		if pad.header:
			canvas.text(x - PAD_SEP // 2, y + PAD_SIZE, pad.header, pad.header_style or PAD_HEADER_STYLE)
		canvas.end_group()

		cursor.pad_index += 1
		cursor.items_on_page += 1
		self.pad_count += 1
		self.placements.append(
			Placement(
				page=cursor.page_number,
				kind="pad",
				text=pad.legend,
				column=column,
				row=row,
				x=x,
				y=y,
			)
		)
		return True

	#============================================
	def _draw_keys(self, chord: Chord, x: int, y: int, color: str) -> None:
		"""
		Draw the key grid of a pad.

		The thumb row has three keys: the middle one is double width and
		covers grid positions 1 and 2.

		Args:
			chord: Chord to show.
			x: Pad left edge.
			y: Pad top edge.
			color: Section color.
		"""
		canvas = self.surface.canvas
		pressed_style = dataclasses.replace(PRESSED_STYLE, stroke=color, fill=color)
		released_style = dataclasses.replace(RELEASED_STYLE, stroke=color)
		for key_row in range(KEY_ROWS):
			position = 0
			for col in range(KEY_COLUMNS):
				if position >= KEY_COLUMNS:
					break
				width = KEY_SIZE
				span = 1
				if key_row == THUMB_KEY_ROW and col == WIDE_KEY_COLUMN:
					width = 2 * KEY_SIZE + KEY_SEP
					span = 2
				style = pressed_style if chord.pressed(key_row + 1, col) else released_style
				canvas.rounded_rect(
					x + position * KEY_PITCH,
					y + key_row * KEY_PITCH,
					width,
					KEY_SIZE,
					KEY_RADIUS,
					style,
				)
				position += span

	#============================================
	def _draw_legend(self, pad: ChordPad, x: int, y: int) -> None:
		canvas = self.surface.canvas
		center_x = x + PAD_SIZE // 2
		if pad.legend_is_char:
			canvas.text(center_x, y + PAD_SIZE * 3 // 4, pad.legend, GLYPH_STYLE)
			return
		if pad.modifiers:
			lines = [capitalize_words(modifier) for modifier in pad.modifiers]
			if pad.modifier_duration:
				lines.append(pad.modifier_duration)
		elif pad.legend:
			lines = pad.legend.split(" ", MAX_LEGEND_LINES - 1)
		else:
			return
		for line, offset in zip(lines, stacked_offsets(len(lines))):
			canvas.text(center_x, y + PAD_SIZE // 2 + offset, line, LEGEND_STYLE)
