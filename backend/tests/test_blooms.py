from backend.coursecraft.blooms import OBJECTIVE_TEMPLATES, assess_blooms


def test_levels_detected_and_missing_reported():
	result = assess_blooms("Define the terms. Explain the steps. Design a new workflow.")
	assert result.current_levels == ["Remember", "Understand", "Create"]
	assert result.recommendations.missing_levels == ["Apply", "Analyze", "Evaluate"]
	assert result.recommendations.overrepresented_levels == []
	assert result.recommendations.learning_objective_suggestions == [
		OBJECTIVE_TEMPLATES["apply"],
		OBJECTIVE_TEMPLATES["analyze"],
		OBJECTIVE_TEMPLATES["evaluate"],
	]
	assert result.level_analysis["remember"].examples == ["Define the terms."]


def test_overrepresented_level():
	result = assess_blooms("List the items. List the tools. Explain.")
	assert result.level_analysis["remember"].percentage == 67
	assert result.recommendations.overrepresented_levels == ["Remember"]


def test_empty_text():
	result = assess_blooms("")
	assert result.current_levels == []
	assert len(result.recommendations.missing_levels) == 6
	assert all(level.percentage == 0 for level in result.level_analysis.values())
