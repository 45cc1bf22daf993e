"""Session store: session id -> accumulated engine records.

The engine functions never touch a store; the routers read and write through
one of these. ``update`` is the only write path that must be serialized per
session, and each implementation does that itself.
"""
from __future__ import annotations
import threading
from datetime import datetime
from typing import Callable, Dict, Optional, Protocol

from sqlalchemy.orm import Session as DbSession, sessionmaker

from .models import StrategySession
from .schemas import Session

SessionMutator = Callable[[Session], None]


class SessionStore(Protocol):
	def get(self, session_id: str) -> Optional[Session]: ...

	def put(self, session: Session) -> Session: ...

	def update(self, session_id: str, mutate: SessionMutator) -> Session: ...


class InMemorySessionStore:
	def __init__(self) -> None:
		self._sessions: Dict[str, Session] = {}
		self._lock = threading.Lock()

	def get(self, session_id: str) -> Optional[Session]:
		session = self._sessions.get(session_id)
		return session.model_copy(deep=True) if session else None

	def put(self, session: Session) -> Session:
		with self._lock:
			self._sessions[session.session_id] = session.model_copy(deep=True)
		return session

	def update(self, session_id: str, mutate: SessionMutator) -> Session:
		with self._lock:
			current = self._sessions.get(session_id)
			session = current.model_copy(deep=True) if current else Session(session_id=session_id)
			mutate(session)
			session.updated_at = datetime.utcnow()
			self._sessions[session_id] = session
			return session.model_copy(deep=True)

	def __len__(self) -> int:
		return len(self._sessions)


class SqlSessionStore:
	def __init__(self, session_factory: sessionmaker) -> None:
		self._session_factory = session_factory
		self._lock = threading.Lock()

	def _load(self, db: DbSession, session_id: str) -> Optional[Session]:
		row = db.get(StrategySession, session_id)
		if row is None:
			return None
		return Session.model_validate_json(row.payload_json)

	def get(self, session_id: str) -> Optional[Session]:
		db = self._session_factory()
		try:
			return self._load(db, session_id)
		finally:
			db.close()

	def _save(self, db: DbSession, session: Session) -> None:
		row = db.get(StrategySession, session.session_id)
		if row is None:
			row = StrategySession(session_id=session.session_id, created_at=session.created_at)
		row.payload_json = session.model_dump_json()
		row.updated_at = session.updated_at
		db.add(row)

	def put(self, session: Session) -> Session:
		db = self._session_factory()
		try:
			self._save(db, session)
			db.commit()
		except Exception:
			db.rollback()
			raise
		finally:
			db.close()
		return session

	def update(self, session_id: str, mutate: SessionMutator) -> Session:
		# One writer at a time inside this process; cross-process writers
		# for the same session id must be serialized by the caller.
		with self._lock:
			db = self._session_factory()
			try:
				session = self._load(db, session_id) or Session(session_id=session_id)
				mutate(session)
				session.updated_at = datetime.utcnow()
				self._save(db, session)
				db.commit()
				return session
			except Exception:
				db.rollback()
				raise
			finally:
				db.close()
