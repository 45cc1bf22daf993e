from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.orm import Session

from .models import StrategySession


def purge_stale_sessions(db: Session, *, days: int = 7, now: Optional[datetime] = None) -> int:
	"""Delete sessions untouched for ``days``; returns the number removed."""
	cutoff = (now or datetime.utcnow()) - timedelta(days=days)
	result = db.execute(delete(StrategySession).where(StrategySession.updated_at < cutoff))
	db.commit()
	return result.rowcount or 0
