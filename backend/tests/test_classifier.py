from backend.coursecraft.classifier import classify_domain, complexity_for_audience, estimate_complexity, score_domains
from backend.coursecraft.schemas import DEFAULT_DOMAIN, Complexity, Domain


def test_healthcare_text():
	profile = classify_domain("The patient received clinical treatment after diagnosis.")
	assert profile.primary_domain == Domain.HEALTHCARE
	assert profile.confidence == 89
	assert profile.suitability_score == 91
	assert profile.complexity == Complexity.BEGINNER
	assert profile.content_type == "Healthcare & Medical Training Material"


def test_tie_goes_to_first_declared_domain():
	scores = score_domains("patient marketing")
	assert scores[Domain.HEALTHCARE] == scores[Domain.BUSINESS] == 1
	assert classify_domain("patient marketing").primary_domain == Domain.HEALTHCARE


def test_no_keywords_uses_default():
	profile = classify_domain("")
	assert profile.primary_domain == DEFAULT_DOMAIN
	assert profile.confidence == 85
	assert profile.suitability_score == 87


def test_scores_stay_bounded():
	text = "software programming code development technical system api database " * 3
	profile = classify_domain(text)
	assert profile.primary_domain == Domain.TECHNOLOGY
	assert 85 <= profile.confidence <= 94
	assert 87 <= profile.suitability_score <= 94


def test_complexity_bands():
	assert estimate_complexity("x" * 2000) == Complexity.BEGINNER
	assert estimate_complexity("x" * 2001) == Complexity.INTERMEDIATE
	assert estimate_complexity("x" * 5000) == Complexity.INTERMEDIATE
	assert estimate_complexity("x" * 5001) == Complexity.ADVANCED


def test_complexity_for_audience():
	assert complexity_for_audience("Novice nurses") == Complexity.BEGINNER
	assert complexity_for_audience("Advanced practitioners") == Complexity.ADVANCED
	assert complexity_for_audience("intermediate") == Complexity.INTERMEDIATE
	assert complexity_for_audience("all staff") is None
	assert complexity_for_audience(None) is None
