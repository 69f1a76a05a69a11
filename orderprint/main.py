from __future__ import annotations

import argparse
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Sequence

from orderprint.core.settings import Settings, load_settings, resolve_target
from orderprint.data import db
from orderprint.data.dataset import PagedDataset, line_dataset_for, order_records
from orderprint.data.models import OrderHeader, OrderLine
from orderprint.loader import LoadProgress, LoadStatus, SessionCounter, load_all_records
from orderprint.view import InvoiceView, build_invoice_view

logger = logging.getLogger(__name__)


@dataclass
class PrintResult:
	status: LoadStatus
	view: Optional[InvoiceView] = None
	header: Optional[OrderHeader] = None
	lines: List[OrderLine] = field(default_factory=list)
	attempts: int = 0


class PrintFormController:
	"""Render-update entry point: one call per host data/parameter change.

	Every call starts a new session. Older calls still waiting on pages see
	their session superseded and return without a view.
	"""

	def __init__(self, settings: Optional[Settings] = None, sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep):
		self.settings = settings or Settings()
		self._sessions = SessionCounter()
		self._progress = LoadProgress()
		self._order_id: Optional[str] = None
		self._sleep = sleep

	@property
	def progress(self) -> LoadProgress:
		return self._progress

	async def update_view(
		self,
		order_dataset: Sequence[Mapping[str, Any]],
		line_dataset: PagedDataset,
		max_records: Optional[int] = None,
		today: Optional[datetime] = None,
	) -> PrintResult:
		token = self._sessions.start()
		if not order_dataset:
			logger.info("Session %s: no order data", token.session_id)
			return PrintResult(LoadStatus.NO_DATA)

		header = OrderHeader.from_record(order_dataset[0])
		if header.order_id != self._order_id:
			self._progress.reset()
			self._order_id = header.order_id

		target = resolve_target(self.settings.max_records if max_records is None else max_records)
		logger.info("Session %s: loading up to %s lines for %s", token.session_id, target, header.name or header.order_id)
		loaded = await load_all_records(
			line_dataset,
			target,
			token,
			self._progress,
			max_attempts=self.settings.max_attempts,
			delay=self.settings.retry_delay,
			reset_threshold=self.settings.reset_threshold,
			sleep=self._sleep,
		)
		if not loaded.renderable:
			return PrintResult(loaded.status, attempts=loaded.attempts)

		lines = [OrderLine.from_record(r, self.settings.default_unit) for r in loaded.records]
		view = build_invoice_view(header, lines, self.settings, today)
		logger.info("Session %s: %s lines, total %s (%s)", token.session_id, len(lines), view.grand_total, loaded.status.value)
		return PrintResult(loaded.status, view, header, lines, loaded.attempts)


def _print_view(view: InvoiceView) -> None:
	print(f"Order: {view.order_name}  ({view.created_on})")
	print(f"Customer: {view.customer_name}")
	if view.trade_name:
		print(f"Trade name: {view.trade_name}")
	for row in view.rows:
		print(
			f"{row.index:>3}. {row.product_name}  {row.quantity} {row.unit} x {row.unit_price}"
			f"  -{row.discount1} -{row.discount2}  = {row.line_total}"
		)
	print(f"Subtotal: {view.subtotal}")
	print(f"VAT: {view.vat_total}")
	print(f"Total: {view.grand_total}")
	if view.payment_term:
		print(f"Payment: {view.payment_term}")
	if view.bank_transfer:
		print(view.bank_transfer)


def main(argv: Optional[Sequence[str]] = None) -> int:
	parser = argparse.ArgumentParser(description="Compute the printable totals of a stored sale order.")
	parser.add_argument("number", help="sale order number")
	parser.add_argument("--max-records", type=int, default=None, help="lines to force-load (0 = 1000)")
	parser.add_argument("--settings", default=None, help="path to settings.json")
	parser.add_argument("--db", default=None, help="path to the SQLite order store")
	parser.add_argument("-v", "--verbose", action="store_true")
	args = parser.parse_args(argv)

	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.INFO,
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)

	settings = load_settings(args.settings)
	db.configure(args.db)
	db.create_db_and_tables()

	records = order_records(args.number)
	lines = line_dataset_for(args.number, page_size=settings.page_size)
	if not records or lines is None:
		logger.error("Sale order not found: %s", args.number)
		return 1

	result = asyncio.run(PrintFormController(settings).update_view(records, lines, args.max_records))
	if result.view is None:
		logger.error("Nothing to print (%s)", result.status.value)
		return 1
	if result.status is LoadStatus.PARTIAL:
		logger.warning("Not every line could be loaded; totals cover %s lines", len(result.lines))
	_print_view(result.view)
	return 0


if __name__ == "__main__":
	raise SystemExit(main())
