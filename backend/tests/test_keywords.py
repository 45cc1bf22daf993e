from backend.coursecraft.keywords import extract_keywords


def test_short_and_stop_words_dropped():
	assert extract_keywords("Onboarding new nurses takes too long") == ["onboarding", "nurses", "takes", "long"]
	assert extract_keywords("there their which while") == []


def test_limit_and_first_occurrence_order():
	words = extract_keywords("alpha bravo charlie delta echoes foxtrot")
	assert words == ["alpha", "bravo", "charlie", "delta", "echoes"]
	assert extract_keywords("alpha bravo charlie", limit=2) == ["alpha", "bravo"]


def test_punctuation_and_case_collapse_duplicates():
	assert extract_keywords("Safety, safety! SAFETY training.") == ["safety", "training"]


def test_empty_input():
	assert extract_keywords("") == []
	assert extract_keywords(None) == []
