"""
Chord ease-of-use scoring.

The score is a display heuristic. Lower is easier. Chords are sorted into
tiers by the shape of the pressed finger keys (single row, one monotone row
change, zigzag, straight diagonal, three rows, steep steps) and the tier
base is adjusted by column count, row choice and bottom-row corners before
being scaled to a short range.
"""

# Standard Library
import dataclasses

# local repo modules
import chordmap_cheatsheet as chs
import chordmap_cheatsheet.chord


Chord = chs.chord.Chord

TIER_SINGLE_ROW = 0
TIER_ADJACENT_ROWS = 6
TIER_ZIGZAG = 8
TIER_THREE_ROWS = 14
TIER_DIAGONAL = 15
TIER_STEEP = 16
CORNER_BONUS = 2
SCALE_NUMERATOR = 9
SCALE_DENOMINATOR = 22


@dataclasses.dataclass(frozen=True)
class Step:
	step: int
	col_span: int


#============================================
def compute_steps(profile: tuple[int, ...]) -> list[Step]:
	"""
	Compute the row changes between consecutive pressed columns.

	Each pressed column except the last one contributes the row difference
	to the next pressed column to its right.

	Args:
		profile: Finger profile, one row number per column.

	Returns:
		Steps in column order.
	"""
	steps: list[Step] = []
	for start in range(len(profile) - 1):
		if profile[start] == 0:
			continue
		for end in range(start + 1, len(profile)):
			if profile[end] != 0:
				steps.append(Step(step=profile[end] - profile[start], col_span=end - start))
				break
	return steps


#============================================
def row_bounds(profile: tuple[int, ...]) -> tuple[int | None, int | None, int]:
	"""
	Find the lowest and highest pressed rows and the pressed column count.

	Args:
		profile: Finger profile.

	Returns:
		Tuple of (min_row, max_row, n_cols). Rows are None when idle.
	"""
	rows = [value for value in profile if value != 0]
	if not rows:
		return (None, None, 0)
	return (min(rows), max(rows), len(rows))


#============================================
def max_slope(steps: list[Step]) -> int:
	slopes = [abs(step.step) // step.col_span for step in steps]
	return max(slopes, default=0)


#============================================
def row_quality(row: int | None) -> int:
	"""
	Penalty for the row a flat chord sits on.

	Args:
		row: 1-based finger row, or None.

	Returns:
		0 for the home row, 1 for the top row, 2 for the bottom row.
	"""
	if row == 1:
		return 1
	if row == 3:
		return 2
	return 0


#============================================
def corner_bonus(profile: tuple[int, ...]) -> int:
	if profile[0] == 3 or profile[-1] == 3:
		return CORNER_BONUS
	return 0


#============================================
def tier_score(chord: Chord) -> int:
	"""
	Compute the unscaled tier score of a chord.

	Args:
		chord: Chord to score.

	Returns:
		Tier base plus adjustments.
	"""
	profile = chord.finger_profile()
	steps = compute_steps(profile)
	magnitudes = [abs(step.step) for step in steps]
	max_step = max(magnitudes, default=0)
	min_step = min(magnitudes, default=0)
	sum_abs = sum(magnitudes)
	min_row, max_row, n_cols = row_bounds(profile)

	if max_step == 0:
		return TIER_SINGLE_ROW + n_cols + row_quality(min_row)
	if sum_abs == 1:
		return TIER_ADJACENT_ROWS + n_cols + row_quality(min_row)
	if max_row - min_row <= 1 and max_step == 1:
		return TIER_ZIGZAG + n_cols + row_quality(min_row)
	if sum_abs == 2 and min_step == 1 and max_step == 1:
		return TIER_DIAGONAL
	if max_slope(steps) <= 1:
		return TIER_THREE_ROWS + n_cols + corner_bonus(profile)
	return TIER_STEEP + n_cols + corner_bonus(profile)


#============================================
def chord_quality(chord: Chord) -> int:
	"""
	Score how easy a chord is to press.

	Args:
		chord: Chord to score.

	Returns:
		Non-negative score, lower is easier.
	"""
	return tier_score(chord) * SCALE_NUMERATOR // SCALE_DENOMINATOR
