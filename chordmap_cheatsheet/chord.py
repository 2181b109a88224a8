"""
Chord press matrices and the draw items built from them.
"""

# Standard Library
import dataclasses
from typing import Iterable

# local repo modules
import chordmap_cheatsheet as chs
import chordmap_cheatsheet.config


Style = chs.config.Style

MATRIX_ROWS = 5
MATRIX_COLUMNS = 4
FINGER_ROWS = (1, 2, 3)
THUMB_ROW = 4


@dataclasses.dataclass(frozen=True)
class Chord:
	"""
	A 5x4 press matrix.

	Row 0 is unused, rows 1-3 are finger keys and row 4 holds the thumb keys.
	"""

	cells: tuple[tuple[bool, ...], ...] = tuple(
		(False,) * MATRIX_COLUMNS for _ in range(MATRIX_ROWS)
	)

	#============================================
	@classmethod
	def from_rows(cls, rows: Iterable[Iterable[bool]]) -> "Chord":
		"""
		Build a chord from a possibly short list of rows.

		Missing rows and columns are released.

		Args:
			rows: Row-major press flags.

		Returns:
			Chord instance.
		"""
		cells: list[tuple[bool, ...]] = []
		given = [list(row) for row in rows]
		if len(given) > MATRIX_ROWS:
			raise ValueError(f"chord has {len(given)} rows, expected at most {MATRIX_ROWS}")
		for row_index in range(MATRIX_ROWS):
			values = given[row_index] if row_index < len(given) else []
			if len(values) > MATRIX_COLUMNS:
				raise ValueError(f"chord row {row_index} has {len(values)} columns")
			padded = [bool(value) for value in values]
			padded += [False] * (MATRIX_COLUMNS - len(padded))
			cells.append(tuple(padded))
		return cls(cells=tuple(cells))

	#============================================
	@classmethod
	def from_presses(cls, presses: Iterable[tuple[int, int]]) -> "Chord":
		"""
		Build a chord from (row, column) press coordinates.

		Args:
			presses: Pressed cells.

		Returns:
			Chord instance.
		"""
		grid = [[False] * MATRIX_COLUMNS for _ in range(MATRIX_ROWS)]
		for row, col in presses:
			grid[row][col] = True
		return cls.from_rows(grid)

	#============================================
	def pressed(self, row: int, col: int) -> bool:
		return self.cells[row][col]

	#============================================
	def with_press(self, row: int, col: int) -> "Chord":
		"""
		Return a copy of the chord with one more cell pressed.

		Args:
			row: Matrix row.
			col: Matrix column.

		Returns:
			New chord.
		"""
		grid = [list(values) for values in self.cells]
		grid[row][col] = True
		return Chord.from_rows(grid)

	#============================================
	def finger_profile(self) -> tuple[int, ...]:
		"""
		Pressed finger row per column, 0 where the column is idle.

		Returns:
			Four 1-based row numbers.
		"""
		profile = [0] * MATRIX_COLUMNS
		for row in FINGER_ROWS:
			for col in range(MATRIX_COLUMNS):
				if self.cells[row][col]:
					profile[col] = row
		return tuple(profile)

	#============================================
	def thumb_profile(self) -> tuple[int, ...]:
		"""
		Thumb row per column, 4 where pressed and 0 otherwise.

		Returns:
			Four row numbers.
		"""
		return tuple(
			THUMB_ROW if self.cells[THUMB_ROW][col] else 0
			for col in range(MATRIX_COLUMNS)
		)

	#============================================
	def is_empty(self) -> bool:
		return not any(self.finger_profile()) and not any(self.thumb_profile())

	#============================================
	def profile_label(self) -> str:
		"""
		Digits of the finger and thumb profiles, as in "0200 000".

		Returns:
			Label string.
		"""
		fingers = "".join(str(value) for value in self.finger_profile())
		# the wide thumb key covers two positions, so three thumb columns exist
		thumbs = "".join(str(value) for value in self.thumb_profile()[:3])
		return f"{fingers} {thumbs}"


@dataclasses.dataclass(frozen=True)
class ChordPad:
	chord: Chord
	section: str
	legend: str = ""
	legend_is_char: bool = False
	modifiers: tuple[str, ...] = ()
	modifier_duration: str = ""
	header: str = ""
	header_style: Style | None = None
	suppress_quality: bool = False


@dataclasses.dataclass(frozen=True)
class SectionHeader:
	text: str


@dataclasses.dataclass(frozen=True)
class PageBreak:
	pass


DrawItem = ChordPad | SectionHeader | PageBreak
