"""
Hand-off of draw items from the producer to the layout engine.

The engine runs on its own thread and owns the output surface. send()
blocks until the engine has finished the item, so at most one item is in
flight and drawing happens in submission order.
"""

# Standard Library
import queue
import threading
from typing import Callable, Iterable

# local repo modules
import chordmap_cheatsheet as chs
import chordmap_cheatsheet.chord
import chordmap_cheatsheet.config
import chordmap_cheatsheet.layout


DrawItem = chs.chord.DrawItem
LayoutResult = chs.config.LayoutResult
LayoutEngine = chs.layout.LayoutEngine

_END_OF_STREAM = object()
_ABORT_STREAM = object()


class DrawItemStream:
	"""
	One-producer, one-consumer rendezvous in front of a LayoutEngine.
	"""

	def __init__(self, engine: LayoutEngine) -> None:
		self.engine = engine
		self._items: queue.Queue = queue.Queue(maxsize=1)
		self._error: BaseException | None = None
		self._result: LayoutResult | None = None
		self._done = threading.Event()
		self._closed = False
		self._thread = threading.Thread(target=self._consume, name="layout-engine", daemon=True)
		self._thread.start()

	#============================================
	def __enter__(self) -> "DrawItemStream":
		return self

	#============================================
	def __exit__(self, exc_type, exc_value, traceback) -> None:
		if self._closed:
			return
		if exc_type is None:
			self.close()
			return
		self._closed = True
		self._items.put(_ABORT_STREAM)
		self._done.wait()

	#============================================
	def _consume(self) -> None:
		"""
		Engine thread: open the first page, then place items until the end
		marker arrives.
		"""
		aborted = False
		try:
			self.engine.start()
		except BaseException as error:
			self._error = error
		while True:
			item = self._items.get()
			try:
				if item is _ABORT_STREAM:
					aborted = True
					break
				if item is _END_OF_STREAM:
					if self._error is None:
						self._result = self.engine.finish()
					break
				if self._error is None:
					self.engine.place(item)
			except BaseException as error:
				self._error = error
			finally:
				self._items.task_done()
		if aborted or self._error is not None:
			self.engine.abort()
		self._done.set()

	#============================================
	def _raise_error(self) -> None:
		if self._error is not None:
			raise self._error

	#============================================
	def send(self, item: DrawItem) -> None:
		"""
		Hand one item to the engine and wait until it is placed.

		Args:
			item: Draw item.

		Raises:
			RuntimeError: If the stream is already closed.
		"""
		if self._closed:
			raise RuntimeError("draw item stream is closed")
		self._raise_error()
		self._items.put(item)
		self._items.join()
		self._raise_error()

	#============================================
	def close(self) -> LayoutResult:
		"""
		End the stream and wait for the engine to finalize the last page.

		Returns:
			LayoutResult from the engine.
		"""
		if self._closed:
			raise RuntimeError("draw item stream is already closed")
		self._closed = True
		self._items.put(_END_OF_STREAM)
		self._done.wait()
		self._thread.join()
		self._raise_error()
		return self._result


#============================================
def render_draw_items(
	engine: LayoutEngine,
	items: Iterable[DrawItem],
	on_item: Callable[[int], None] | None = None,
) -> LayoutResult:
	"""
	Feed draw items through a stream into the engine.

	Args:
		engine: Layout engine, not yet started.
		items: Draw items in display order.
		on_item: Called with the running item count after each placement.

	Returns:
		LayoutResult.
	"""
	with DrawItemStream(engine) as stream:
		for count, item in enumerate(items, start=1):
			stream.send(item)
			if on_item is not None:
				on_item(count)
		return stream.close()
