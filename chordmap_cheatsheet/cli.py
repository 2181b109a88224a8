"""
CLI entry points for chordmap cheat sheet rendering.
"""

# Standard Library
import argparse
import dataclasses
import json
import pathlib
import sys
import time

# local repo modules
import chordmap_cheatsheet as chs
import chordmap_cheatsheet.cheatsheet
import chordmap_cheatsheet.chordmap_parser
import chordmap_cheatsheet.config
import chordmap_cheatsheet.layout
import chordmap_cheatsheet.stream


RenderConfig = chs.config.RenderConfig
LayoutResult = chs.config.LayoutResult
LayoutEngine = chs.layout.LayoutEngine

DEFAULT_OUTPUT = chs.config.DEFAULT_OUTPUT
DEFAULT_INPUT = chs.config.DEFAULT_INPUT
DEFAULT_PAGE_WIDTH = chs.config.DEFAULT_PAGE_WIDTH
DEFAULT_PAGE_HEIGHT = chs.config.DEFAULT_PAGE_HEIGHT
DEFAULT_TITLE = chs.config.DEFAULT_TITLE
OUTPUT_FORMATS = chs.config.OUTPUT_FORMATS
PROGRESS_BAR_WIDTH = chs.config.PROGRESS_BAR_WIDTH
PROGRESS_UPDATE_EVERY = chs.config.PROGRESS_UPDATE_EVERY


#============================================
def log(message: str, end: str = "\n") -> None:
	"""
	Print a status message.

	Status goes to stderr because stdout may carry the rendered document.

	Args:
		message: Message text.
		end: Line terminator.
	"""
	print(message, end=end, file=sys.stderr)


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	log(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


#============================================
def build_config(args: argparse.Namespace) -> RenderConfig:
	"""
	Build render config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		RenderConfig.
	"""
	output_format = chs.config.detect_output_format(args.output_path, args.output_format)
	config = RenderConfig(
		output_path=args.output_path,
		output_format=output_format,
		page_width=args.page_width,
		page_height=args.page_height,
		title=args.title,
	)
	return config


#============================================
def build_parser() -> argparse.ArgumentParser:
	"""
	Build the command line parser.

	Returns:
		ArgumentParser.
	"""
	parser = argparse.ArgumentParser(description="Render a chordmap listing as a printable cheat sheet.")

	io_group = parser.add_argument_group("Input and output")
	io_group.add_argument("-i", "--input", dest="input_path", default=DEFAULT_INPUT, help="Chordmap listing, '-' for stdin.")
	output_help = (
		"Output file of the first page, '-' for stdout. On stdout SVG pages are written back to back as "
		"separate documents, PDF pages are merged into one document."
	)
	io_group.add_argument("-o", "--output", dest="output_path", default=DEFAULT_OUTPUT, help=output_help)
	io_group.add_argument("-f", "--format", dest="output_format", choices=OUTPUT_FORMATS, default=None, help="Output format, taken from the output suffix when omitted.")
	io_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")

	page_group = parser.add_argument_group("Page")
	page_group.add_argument("-W", "--width", dest="page_width", type=int, default=DEFAULT_PAGE_WIDTH, help="Page width in mm.")
	page_group.add_argument("-H", "--height", dest="page_height", type=int, default=DEFAULT_PAGE_HEIGHT, help="Page height in mm.")
	page_group.add_argument("-t", "--title", dest="title", default=DEFAULT_TITLE, help="Document title.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-q", "--quiet", dest="quiet", action="store_true", help="Suppress status output.")
	behavior_group.add_argument("-v", "--verbose", dest="quiet", action="store_false", help="Print status output.")

	parser.set_defaults(quiet=False)
	return parser


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Arguments, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = build_parser()
	args = parser.parse_args(argv)
	try:
		chs.config.validate_render_config(build_config(args))
	except ValueError as error:
		parser.error(str(error))
	return args


#============================================
def write_manifest(manifest_path: pathlib.Path, input_path: str, result: LayoutResult, config: RenderConfig) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		input_path: Chordmap listing path.
		result: Layout result.
		config: Render configuration.
	"""
	data = {
		"input": input_path,
		"pages": result.pages,
		"pad_count": result.pad_count,
		"columns_per_page": result.columns_per_page,
		"files": result.filenames,
		"placements": [dataclasses.asdict(placement) for placement in result.placements],
		"layout": {
			"output": config.output_path,
			"format": config.output_format,
			"page_width": config.page_width,
			"page_height": config.page_height,
			"title": config.title,
		},
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)


#============================================
def run_pipeline(args: argparse.Namespace) -> LayoutResult:
	"""
	Run the full pipeline from chordmap listing to rendered pages.

	Args:
		args: Parsed argparse namespace.

	Returns:
		LayoutResult.
	"""
	config = build_config(args)
	verbose = not args.quiet
	if verbose:
		log("Chordmap cheat sheet")
		log(f"Input: {args.input_path}")
		log(f"Output: {config.output_path} ({config.output_format})")
		log(f"Page size: {config.page_width}x{config.page_height} mm")

	start_time = time.perf_counter()
	pads = chs.chordmap_parser.read_chordmap(args.input_path)
	pads = chs.cheatsheet.prepare_chord_pads(pads)
	items = list(chs.cheatsheet.build_draw_items(pads))
	parse_end = time.perf_counter()
	if verbose:
		log(f"Chord records read: {len(pads)}")
		log(f"Draw items: {len(items)}")

	total = len(items)

	def report(count: int) -> None:
		if count % PROGRESS_UPDATE_EVERY == 0 or count == total:
			print_progress("Items", count, total)

	engine = LayoutEngine(config)
	result = chs.stream.render_draw_items(engine, items, on_item=report if verbose else None)
	render_end = time.perf_counter()

	if verbose:
		if total > 0:
			log("")
		log(f"Pages written: {result.pages}")
		log(f"Pads drawn: {result.pad_count}")
		for filename in result.filenames:
			log(f"  {filename}")
	if args.manifest_path:
		write_manifest(pathlib.Path(args.manifest_path), args.input_path, result, config)
		if verbose:
			log(f"Manifest written: {args.manifest_path}")
	if verbose:
		log(
			"Timing: parse={:.2f}s render={:.2f}s".format(
				parse_end - start_time,
				render_end - parse_end,
			)
		)
	return result


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	run_pipeline(args)
