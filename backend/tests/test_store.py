from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.coursecraft.cleanup import purge_stale_sessions
from backend.coursecraft.db import Base
from backend.coursecraft.schemas import Session
from backend.coursecraft.store import InMemorySessionStore, SqlSessionStore
from backend.coursecraft.synthesizer import synthesize_strategies


@pytest.fixture
def session_factory():
	engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
	Base.metadata.create_all(bind=engine)
	yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
	engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request, session_factory):
	if request.param == "memory":
		return InMemorySessionStore()
	return SqlSessionStore(session_factory)


def test_update_creates_then_accumulates(store, clinical_unit, clinical_analysis, onboarding_response):
	assert store.get("abc") is None

	store.update("abc", lambda s: s.contents.append(clinical_unit))
	store.update("abc", lambda s: setattr(s, "analysis", clinical_analysis))
	store.update("abc", lambda s: s.sme_responses.append(onboarding_response))

	session = store.get("abc")
	assert session.contents == [clinical_unit]
	assert session.analysis == clinical_analysis
	assert session.sme_responses == [onboarding_response]


def test_bundle_survives_storage(store, clinical_analysis):
	bundle = synthesize_strategies(clinical_analysis.domain_classification, clinical_analysis.quality_assessment)
	store.put(Session(session_id="xyz", analysis=clinical_analysis, strategy_bundle=bundle))
	assert store.get("xyz").strategy_bundle == bundle


def test_returned_sessions_are_copies(store, onboarding_response):
	store.put(Session(session_id="copy"))
	loaded = store.get("copy")
	loaded.sme_responses.append(onboarding_response)
	assert store.get("copy").sme_responses == []


def test_memory_store_len():
	store = InMemorySessionStore()
	store.update("a", lambda s: None)
	store.update("b", lambda s: None)
	assert len(store) == 2


def test_purge_removes_only_stale_rows(session_factory):
	store = SqlSessionStore(session_factory)
	stale = datetime.utcnow() - timedelta(days=10)
	store.put(Session(session_id="old", created_at=stale, updated_at=stale))
	store.update("fresh", lambda s: None)

	db = session_factory()
	try:
		assert purge_stale_sessions(db, days=7) == 1
		assert purge_stale_sessions(db, days=7, now=datetime.utcnow() + timedelta(days=8)) == 1
	finally:
		db.close()
	assert store.get("old") is None
	assert store.get("fresh") is None
