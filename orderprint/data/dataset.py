from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

from orderprint.data.repo import count_details, get_sale_order, list_detail_records, order_record

logger = logging.getLogger(__name__)


class PagedDataset(Protocol):
	"""Host paging capability: records loaded so far, more pages, load the next one."""

	@property
	def records(self) -> Sequence[Mapping[str, Any]]: ...

	@property
	def has_next_page(self) -> bool: ...

	async def load_next_page(self) -> None: ...


class ListDataset:
	"""In-memory dataset that hands out a fixed list one page at a time."""

	def __init__(self, source: Sequence[Mapping[str, Any]], page_size: int = 50, preload: bool = True):
		self._source = list(source)
		self._page_size = max(1, page_size)
		self._loaded: List[Mapping[str, Any]] = []
		if preload:
			self._take_page()

	@property
	def records(self) -> Sequence[Mapping[str, Any]]:
		return self._loaded

	@property
	def has_next_page(self) -> bool:
		return len(self._loaded) < len(self._source)

	async def load_next_page(self) -> None:
		self._take_page()

	def reset(self) -> None:
		"""Drop everything loaded so far, as the host does when the data is re-bound."""
		self._loaded = []

	def _take_page(self) -> None:
		start = len(self._loaded)
		self._loaded.extend(self._source[start:start + self._page_size])


class SqlLineDataset:
	"""Line records of one stored order, paged out of the local SQLite store."""

	def __init__(self, order_id: int, page_size: int = 50):
		self.order_id = order_id
		self._page_size = max(1, page_size)
		self._total = count_details(order_id)
		self._loaded: List[Dict[str, Any]] = []

	@property
	def records(self) -> Sequence[Mapping[str, Any]]:
		return self._loaded

	@property
	def has_next_page(self) -> bool:
		return len(self._loaded) < self._total

	async def load_next_page(self) -> None:
		# SQLite reads run off the event loop thread
		page = await asyncio.to_thread(list_detail_records, self.order_id, len(self._loaded), self._page_size)
		logger.debug("Loaded %s detail records for order %s", len(page), self.order_id)
		self._loaded.extend(page)


def order_records(number: str) -> List[Dict[str, Any]]:
	"""Header dataset for a stored order: one record, or empty when not found."""
	order = get_sale_order(number)
	return [order_record(order)] if order is not None else []


def line_dataset_for(number: str, page_size: int = 50) -> Optional[SqlLineDataset]:
	order = get_sale_order(number)
	if order is None or order.id is None:
		return None
	return SqlLineDataset(order.id, page_size=page_size)
