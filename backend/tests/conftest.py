import pytest

from backend.coursecraft.analysis import analyze_content
from backend.coursecraft.schemas import ContentUnit, SMEResponse
from backend.coursecraft.settings import settings


CLINICAL_TEXT = (
	"Patient intake procedure. Nurses record clinical history and treatment plans for each patient. "
	"Explain the triage steps to new staff."
)


@pytest.fixture(autouse=True)
def _no_external_generator(monkeypatch):
	monkeypatch.setattr(settings, "gemini_api_key", None)
	monkeypatch.setattr(settings, "openrouter_api_key", None)


@pytest.fixture
def clinical_unit():
	return ContentUnit(text=CLINICAL_TEXT, file_names=["intake.txt"], byte_size=len(CLINICAL_TEXT), extracted=True)


@pytest.fixture
def clinical_analysis(clinical_unit):
	return analyze_content([clinical_unit])


@pytest.fixture
def onboarding_response():
	return SMEResponse(
		question="What is the biggest pain point for your team?",
		answer="Onboarding new nurses takes too long",
	)
