"""
Output surfaces: one open page document at a time.
"""

# Standard Library
import io
import pathlib
import re
import sys
from typing import BinaryIO, TextIO

# PIP3 modules
import pypdf

# local repo modules
import chordmap_cheatsheet as chs
import chordmap_cheatsheet.canvas
import chordmap_cheatsheet.config


RenderConfig = chs.config.RenderConfig
Canvas = chs.canvas.Canvas
build_canvas = chs.canvas.build_canvas

STDOUT_TARGET = chs.config.STDOUT_TARGET

NUMBER_PATTERN = re.compile(r"[0-9]+")


#============================================
def first_filename(target: str) -> str:
	"""
	File name of the first page.

	Args:
		target: Output target from the configuration.

	Returns:
		The target itself when it holds a number, else the target with "1"
		inserted before its suffix.
	"""
	path = pathlib.Path(target)
	if NUMBER_PATTERN.search(path.stem):
		return target
	return str(path.with_name(f"{path.stem}1{path.suffix}"))


#============================================
def next_filename(previous: str) -> str:
	"""
	File name of the page after the given one.

	The first run of digits in the file name is incremented, keeping its
	zero-padding width.

	Args:
		previous: File name of the previous page.

	Returns:
		Next file name.
	"""
	path = pathlib.Path(previous)
	match = NUMBER_PATTERN.search(path.stem)
	if match is None:
		return first_filename(previous)
	digits = match.group(0)
	number = str(int(digits) + 1).zfill(len(digits))
	stem = path.stem[:match.start()] + number + path.stem[match.end():]
	return str(path.with_name(stem + path.suffix))


class OutputSurface:
	"""
	One page: an output handle and the canvas drawing on it.
	"""

	def __init__(self, canvas: Canvas, handle: TextIO | BinaryIO, path: str, owns_handle: bool) -> None:
		self.canvas = canvas
		self.handle = handle
		self.path = path
		self.owns_handle = owns_handle
		self.closed = False

	#============================================
	def close(self) -> None:
		"""
		Finalize the document and release the handle if this surface owns it.
		"""
		if self.closed:
			return
		self.closed = True
		try:
			self.canvas.end_document()
		finally:
			if self.owns_handle:
				self.handle.close()

	#============================================
	def discard(self) -> None:
		"""
		Release the handle without finalizing the document.
		"""
		if self.closed:
			return
		self.closed = True
		if self.owns_handle:
			self.handle.close()


class SurfaceSequence:
	"""
	Open page surfaces in order for one output target.

	File targets get one file per page. The stdout target keeps the stream
	open: SVG pages are written back to back, PDF pages are merged into one
	document when the sequence finishes.
	"""

	def __init__(
		self,
		config: RenderConfig,
		stdout: TextIO | None = None,
		binary_stdout: BinaryIO | None = None,
	) -> None:
		self.config = config
		self.stdout = stdout
		self.binary_stdout = binary_stdout
		self.filenames: list[str] = []
		self.pdf_writer: pypdf.PdfWriter | None = None
		self.to_stdout = config.output_path == STDOUT_TARGET

	#============================================
	def _page_path(self) -> str:
		if not self.filenames:
			return first_filename(self.config.output_path)
		return next_filename(self.filenames[-1])

	#============================================
	def open(self, page_number: int) -> OutputSurface:
		"""
		Open the surface for a page and start its document.

		Args:
			page_number: 1-based page number.

		Returns:
			Open output surface.

		Raises:
			OSError: If the page file cannot be created.
		"""
		output_format = self.config.output_format
		if self.to_stdout:
			path = STDOUT_TARGET
			owns_handle = False
			if output_format == "pdf":
				handle = io.BytesIO()
			else:
				handle = self.stdout or sys.stdout
		else:
			path = self._page_path()
			owns_handle = True
			if output_format == "pdf":
				handle = open(path, "wb")
			else:
				handle = open(path, "w", encoding="utf-8")
			self.filenames.append(path)
		canvas = build_canvas(output_format, handle)
		surface = OutputSurface(canvas, handle, path, owns_handle)
		try:
			canvas.start_document(self.config.page_width, self.config.page_height)
			canvas.set_title(f"{self.config.title} (p. {page_number})")
		except Exception:
			surface.discard()
			raise
		return surface

	#============================================
	def close(self, surface: OutputSurface) -> None:
		"""
		Finalize a page surface.

		Args:
			surface: Surface returned by open().
		"""
		surface.close()
		if self.to_stdout and isinstance(surface.handle, io.BytesIO):
			if self.pdf_writer is None:
				self.pdf_writer = pypdf.PdfWriter()
			reader = pypdf.PdfReader(io.BytesIO(surface.handle.getvalue()))
			for page in reader.pages:
				self.pdf_writer.add_page(page)

	#============================================
	def finish(self) -> None:
		"""
		Flush anything held back until the end of the run.
		"""
		if self.pdf_writer is None:
			return
		stream = self.binary_stdout or sys.stdout.buffer
		self.pdf_writer.write(stream)
		stream.flush()
		self.pdf_writer = None
