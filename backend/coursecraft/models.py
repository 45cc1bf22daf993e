from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text

from .db import Base


class StrategySession(Base):
	"""One engine session; the whole ``schemas.Session`` is stored as JSON."""

	__tablename__ = "strategy_sessions"

	session_id = Column(String(64), primary_key=True)
	payload_json = Column(Text, nullable=False)
	created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
	updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
