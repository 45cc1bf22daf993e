from __future__ import annotations
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Domain(str, Enum):
	# Declaration order is the classifier's tie-break order
	TECHNOLOGY = "Technology & IT"
	HEALTHCARE = "Healthcare & Medical"
	BUSINESS = "Business & Management"
	EDUCATION = "Education & Academic"
	COMPLIANCE = "Compliance & Regulatory"
	MANUFACTURING = "Manufacturing & Operations"


DEFAULT_DOMAIN = Domain.TECHNOLOGY


class Complexity(str, Enum):
	BEGINNER = "Beginner"
	INTERMEDIATE = "Intermediate"
	ADVANCED = "Advanced"


class Severity(str, Enum):
	LOW = "Low"
	MEDIUM = "Medium"
	HIGH = "High"


class BundleSource(str, Enum):
	SYNTHESIZED = "Synthesized"
	PARSED = "Parsed"
	PARSED_FALLBACK = "ParsedFallback"


class ContentUnit(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: str = Field(default_factory=lambda: uuid.uuid4().hex)
	text: str = ""
	file_names: List[str] = Field(default_factory=list)
	byte_size: int = 0
	extracted: bool = False
	extraction_method: str = "unknown"

	@property
	def preview(self) -> str:
		if not self.text:
			return "No content extracted"
		return self.text[:300] + ("..." if len(self.text) > 300 else "")


class DomainProfile(BaseModel):
	primary_domain: Domain = DEFAULT_DOMAIN
	confidence: int = Field(default=85, ge=0, le=100)
	complexity: Complexity = Complexity.INTERMEDIATE
	suitability_score: int = Field(default=87, ge=0, le=100)
	content_type: str = "Professional Training"


class QualityProfile(BaseModel):
	"""Content quality on four axes; ``overall`` is derived from them when omitted."""

	overall: int = Field(default=0, ge=0, le=100)
	clarity: int = Field(default=0, ge=0, le=100)
	completeness: int = Field(default=0, ge=0, le=100)
	engagement: int = Field(default=0, ge=0, le=100)
	currency: int = Field(default=0, ge=0, le=100)

	@model_validator(mode="before")
	@classmethod
	def _derive_overall(cls, data: Any) -> Any:
		if isinstance(data, dict) and data.get("overall") is None:
			axes = [data.get(k) or 0 for k in ("clarity", "completeness", "engagement", "currency")]
			data = {**data, "overall": mean_score(axes)}
		return data

	@classmethod
	def from_axes(cls, clarity: int, completeness: int, engagement: int, currency: int) -> "QualityProfile":
		return cls(clarity=clarity, completeness=completeness, engagement=engagement, currency=currency)


def mean_score(values: List[int]) -> int:
	if not values:
		return 0
	return int(round(sum(values) / len(values)))


class Gap(BaseModel):
	type: str
	severity: Severity = Severity.MEDIUM
	impact: str = ""
	category: str = "General"
	description: str = ""
	recommendation: str = ""


class SMEResponse(BaseModel):
	question: str
	answer: str
	category: Optional[str] = None


class Strategy(BaseModel):
	id: str
	name: str
	type: str
	description: str
	implementation_weeks: str
	benefits: List[str] = Field(default_factory=list)
	ideal_for: List[str] = Field(default_factory=list)
	expert_rationale: str = ""
	suitability: int = Field(ge=0, le=100)
	personalization_flags: Dict[str, Any] = Field(default_factory=dict)
	full_content: Optional[str] = None


class StrategyBundle(BaseModel):
	strategies: List[Strategy] = Field(min_length=1, max_length=6)
	executive_summary: str
	implementation_roadmap: str
	source: BundleSource
	full_response: str = ""


class SuitabilityAssessment(BaseModel):
	score: int = Field(default=87, ge=0, le=100)
	level: str = "Excellent"
	recommendation: str = ""


class BloomLevelAnalysis(BaseModel):
	present: bool = False
	percentage: int = Field(default=0, ge=0, le=100)
	examples: List[str] = Field(default_factory=list)
	action_verbs: List[str] = Field(default_factory=list)


class BloomsRecommendations(BaseModel):
	missing_levels: List[str] = Field(default_factory=list)
	overrepresented_levels: List[str] = Field(default_factory=list)
	suggested_balance: str = ""
	learning_objective_suggestions: List[str] = Field(default_factory=list)


class BloomsTaxonomy(BaseModel):
	current_levels: List[str] = Field(default_factory=list)
	level_analysis: Dict[str, BloomLevelAnalysis] = Field(default_factory=dict)
	recommendations: BloomsRecommendations = Field(default_factory=BloomsRecommendations)


class Justification(BaseModel):
	line1: str = ""
	line2: str = ""


class ExpertSuggestions(BaseModel):
	interactive_suggestions: List[str] = Field(default_factory=list)
	key_recommendation: str = ""


class AnalysisMetadata(BaseModel):
	source: str = "heuristic"
	model: Optional[str] = None
	analyzed_at: datetime = Field(default_factory=datetime.utcnow)
	content_length: int = 0
	files_analyzed: int = 0


class ContentAnalysis(BaseModel):
	domain_classification: DomainProfile = Field(default_factory=DomainProfile)
	suitability_assessment: SuitabilityAssessment = Field(default_factory=SuitabilityAssessment)
	quality_assessment: QualityProfile = Field(default_factory=QualityProfile)
	identified_gaps: List[Gap] = Field(default_factory=list)
	blooms_taxonomy: BloomsTaxonomy = Field(default_factory=BloomsTaxonomy)
	justification: Justification = Field(default_factory=Justification)
	expert_suggestions: ExpertSuggestions = Field(default_factory=ExpertSuggestions)
	sme_questions: List[str] = Field(default_factory=list)
	metadata: AnalysisMetadata = Field(default_factory=AnalysisMetadata)


class PreSMEContext(BaseModel):
	learning_objective: Optional[str] = None
	audience_level: Optional[str] = None
	course_type: Optional[str] = None
	course_duration: Optional[str] = None
	prerequisites: Optional[str] = None
	instructional_framework: str = "recommend"


class Session(BaseModel):
	session_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
	contents: List[ContentUnit] = Field(default_factory=list)
	analysis: Optional[ContentAnalysis] = None
	sme_responses: List[SMEResponse] = Field(default_factory=list)
	pre_sme_context: Optional[PreSMEContext] = None
	strategy_bundle: Optional[StrategyBundle] = None
	created_at: datetime = Field(default_factory=datetime.utcnow)
	updated_at: datetime = Field(default_factory=datetime.utcnow)
