from __future__ import annotations

from pathlib import Path
from typing import Generator, Optional, Union
from contextlib import contextmanager

from sqlmodel import SQLModel, Session, create_engine

from orderprint.core.paths import db_path

_ENGINE = None


def configure(path: Optional[Union[str, Path]] = None, echo: bool = False):
	"""(Re)bind the module engine to a SQLite file; default is the user data dir."""
	global _ENGINE
	p = Path(path) if path is not None else db_path()
	p.parent.mkdir(parents=True, exist_ok=True)
	if _ENGINE is not None:
		_ENGINE.dispose()
	# Use posix path for SQLAlchemy URL compatibility on Windows
	_ENGINE = create_engine(f"sqlite:///{p.as_posix()}", echo=echo, connect_args={"check_same_thread": False})
	return _ENGINE


def get_engine(echo: bool = False):
	"""Return the singleton SQLAlchemy engine, creating it on first use."""
	if _ENGINE is None:
		return configure(echo=echo)
	return _ENGINE


def create_db_and_tables(echo: bool = False) -> None:
	"""Create the SQLite database file and all SQLModel tables."""
	# Ensure models are imported so metadata has all tables
	import orderprint.data.models  # noqa: F401

	SQLModel.metadata.create_all(get_engine(echo=echo))


def get_session(echo: bool = False) -> Session:
	"""New Session; expire_on_commit=False keeps attribute values on detached instances."""
	return Session(get_engine(echo=echo), expire_on_commit=False)


@contextmanager
def session_scope(echo: bool = False) -> Generator[Session, None, None]:
	"""Commit on success, roll back on error.

	Usage:
		with session_scope() as s:
			... use s ...
	"""
	session = get_session(echo=echo)
	try:
		yield session
		session.commit()
	except Exception:
		session.rollback()
		raise
	finally:
		session.close()
