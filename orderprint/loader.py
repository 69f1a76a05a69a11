from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, List, Mapping, Optional

from orderprint.data.dataset import PagedDataset

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 5
RETRY_DELAY = 0.5
RESET_THRESHOLD = 1


class LoadState(Enum):
	IDLE = "idle"
	LOADING = "loading"
	COMPLETE = "complete"
	ABORTED = "aborted"


class LoadStatus(Enum):
	OK = "ok"
	# Header dataset was empty; nothing to compute
	NO_DATA = "no_data"
	# Stopped early (attempt ceiling or failed page); records are what was loaded so far
	PARTIAL = "partial"
	# A newer session started; the result must not be rendered
	SUPERSEDED = "superseded"


class SessionCounter:
	"""Monotonic session ids; only the latest session may complete."""

	def __init__(self) -> None:
		self._current = 0

	@property
	def current(self) -> int:
		return self._current

	def start(self) -> "SessionToken":
		self._current += 1
		return SessionToken(self._current, self)


@dataclass(frozen=True)
class SessionToken:
	session_id: int
	counter: SessionCounter = field(repr=False, compare=False)

	@property
	def cancelled(self) -> bool:
		return self.counter.current != self.session_id


@dataclass
class LoadProgress:
	"""Survives across sessions: whether the dataset was fully loaded, and for which target."""

	fully_loaded: bool = False
	target: Optional[int] = None
	state: LoadState = LoadState.IDLE

	def reset(self) -> None:
		self.fully_loaded = False
		self.target = None
		self.state = LoadState.IDLE


@dataclass
class LoadResult:
	status: LoadStatus
	records: List[Mapping[str, Any]] = field(default_factory=list)
	attempts: int = 0
	state: LoadState = LoadState.COMPLETE

	@property
	def renderable(self) -> bool:
		return self.status in (LoadStatus.OK, LoadStatus.PARTIAL)


async def load_all_records(
	dataset: PagedDataset,
	target: int,
	token: SessionToken,
	progress: Optional[LoadProgress] = None,
	*,
	max_attempts: int = MAX_ATTEMPTS,
	delay: float = RETRY_DELAY,
	reset_threshold: int = RESET_THRESHOLD,
	sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> LoadResult:
	"""Request pages until `target` records are loaded.

	Stops when the target is reached, the dataset has no next page, or
	`max_attempts` pages were requested. A failing page fetch ends the loop
	with what was loaded so far. The token is checked on entry, after every
	delay and after every fetch; once it is cancelled the session is dropped
	silently with status SUPERSEDED and `progress` is left to the session
	that superseded it.
	"""
	progress = progress if progress is not None else LoadProgress()

	def _aborted(attempts: int) -> LoadResult:
		logger.debug("Session %s superseded after %s attempt(s)", token.session_id, attempts)
		return LoadResult(LoadStatus.SUPERSEDED, attempts=attempts, state=LoadState.ABORTED)

	if token.cancelled:
		return _aborted(0)

	if progress.fully_loaded and progress.target == target:
		progress.state = LoadState.COMPLETE
		return LoadResult(LoadStatus.OK, list(dataset.records))

	progress.state = LoadState.LOADING
	status = LoadStatus.OK
	attempts = 0
	previous = len(dataset.records)

	while True:
		if token.cancelled:
			return _aborted(attempts)
		count = len(dataset.records)
		if count >= target or not dataset.has_next_page:
			break
		if attempts >= max_attempts:
			logger.info("Gave up after %s attempts with %s/%s records", attempts, count, target)
			status = LoadStatus.PARTIAL
			break

		if attempts:
			await sleep(delay)
			if token.cancelled:
				return _aborted(attempts)

		attempts += 1
		try:
			await dataset.load_next_page()
		except Exception:
			logger.warning("Loading page %s failed; continuing with %s records", attempts, count, exc_info=True)
			status = LoadStatus.PARTIAL
			break

		if token.cancelled:
			return _aborted(attempts)
		loaded = len(dataset.records)
		if loaded < previous and loaded <= reset_threshold:
			# Shared dataset was reset under us by a newer session
			logger.debug("Record count dropped from %s to %s", previous, loaded)
			return _aborted(attempts)
		logger.debug("Session %s page %s: %s records", token.session_id, attempts, loaded)
		previous = loaded

	if token.cancelled:
		return _aborted(attempts)
	progress.state = LoadState.COMPLETE
	progress.fully_loaded = status is LoadStatus.OK
	progress.target = target
	return LoadResult(status, list(dataset.records), attempts)
