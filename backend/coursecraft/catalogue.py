"""Shared domain table.

One entry per domain: the classifier keywords, the synthesizer's domain
strategy template and the expertise text rendered into the generator's system
prompt. Keeping them together stops the local templates and the prompt from
drifting apart.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .schemas import Domain


@dataclass(frozen=True)
class StrategyTemplate:
	name: str
	type: str
	description: str
	implementation_weeks: str
	benefits: Tuple[str, ...]
	ideal_for: Tuple[str, ...]
	expert_rationale: str
	suitability: int


@dataclass(frozen=True)
class DomainEntry:
	domain: Domain
	keywords: Tuple[str, ...]
	expertise: str
	analysis_focus: str
	sectors: Tuple[str, ...] = field(default_factory=tuple)
	template: Optional[StrategyTemplate] = None


BUSINESS_TEMPLATE = StrategyTemplate(
	name="Strategic Business Decision Simulator",
	type="business_simulation",
	description=(
		"Executive-level business simulation covering strategic planning, financial analysis, market response, "
		"and team management. Includes real-world case studies and competitive scenarios."
	),
	implementation_weeks="5-7 weeks",
	benefits=("Strategic thinking development", "Risk assessment skills", "Leadership practice", "ROI analysis experience"),
	ideal_for=("Executives", "Managers", "Team leaders", "Business analysts"),
	expert_rationale=(
		"Business leadership requires complex decision-making skills best developed through realistic scenario "
		"practice with measurable outcomes."
	),
	suitability=90,
)


DOMAIN_TABLE: Tuple[DomainEntry, ...] = (
	DomainEntry(
		domain=Domain.TECHNOLOGY,
		keywords=("software", "programming", "code", "development", "technical", "system", "api", "database"),
		expertise="Software development, coding practices, system administration, cybersecurity",
		analysis_focus="Evaluate for hands-on practice requirements, technical complexity, skill progression paths",
		sectors=("Software Development", "IT Operations", "Cybersecurity", "Data Analytics"),
		template=StrategyTemplate(
			name="Interactive Code Lab Environment",
			type="hands_on_coding",
			description=(
				"Comprehensive coding environment with real-time collaboration, automated testing, and progressive "
				"skill challenges. Includes version control integration, code review processes, and deployment simulation."
			),
			implementation_weeks="4-6 weeks",
			benefits=("Hands-on coding practice", "Real-world project simulation", "Automated feedback", "Portfolio development"),
			ideal_for=("Software developers", "IT professionals", "System administrators", "DevOps engineers"),
			expert_rationale=(
				"Technology learning requires actual coding practice with immediate feedback. This environment provides "
				"realistic development scenarios with professional tools."
			),
			suitability=92,
		),
	),
	DomainEntry(
		domain=Domain.HEALTHCARE,
		keywords=("medical", "patient", "health", "clinical", "treatment", "diagnosis", "therapy"),
		expertise="Patient safety, clinical procedures, medical compliance, emergency protocols",
		analysis_focus="Analyze for patient safety implications, clinical workflow integration, regulatory compliance needs",
		sectors=("Medical Training", "Patient Care", "Clinical Procedures", "Healthcare Compliance"),
		template=StrategyTemplate(
			name="Clinical Decision Support Simulation Platform",
			type="clinical_simulation",
			description=(
				"Advanced clinical simulation environment where healthcare professionals practice patient care decisions "
				"in realistic, high-fidelity scenarios. Includes patient monitoring, medication administration, and "
				"emergency response protocols."
			),
			implementation_weeks="6-8 weeks",
			benefits=("Risk-free clinical practice", "Real-time decision feedback", "Regulatory compliance integration", "Patient safety improvement"),
			ideal_for=("Medical professionals", "Nursing staff", "Emergency responders", "Clinical specialists"),
			expert_rationale=(
				"Healthcare training requires high-stakes decision practice in safe environments. This simulation platform "
				"allows unlimited practice of critical procedures without patient risk."
			),
			suitability=95,
		),
	),
	DomainEntry(
		domain=Domain.BUSINESS,
		keywords=("management", "strategy", "sales", "marketing", "finance", "leadership", "project"),
		expertise="Leadership development, strategic planning, team management, sales training",
		analysis_focus="Assess for ROI impact, leadership development needs, organizational change requirements",
		sectors=("Leadership Development", "Sales Training", "Project Management", "Business Strategy"),
		template=BUSINESS_TEMPLATE,
	),
	DomainEntry(
		domain=Domain.EDUCATION,
		keywords=("learning", "teaching", "curriculum", "student", "course", "education", "academic"),
		expertise="Curriculum development, pedagogical approaches, student assessment, learning outcomes",
		analysis_focus="Review alignment of objectives, activities and assessment across the curriculum",
		sectors=("K-12 Education", "Higher Education", "Adult Learning", "Special Education"),
	),
	DomainEntry(
		domain=Domain.COMPLIANCE,
		keywords=("regulation", "policy", "compliance", "legal", "audit", "risk", "safety"),
		expertise="Legal requirements, audit preparation, policy implementation, risk management",
		analysis_focus="Examine regulatory requirements, audit readiness, policy implementation challenges",
		sectors=("Legal Compliance", "Safety Training", "Quality Assurance", "Risk Management"),
		template=StrategyTemplate(
			name="Regulatory Compliance Audit Simulator",
			type="compliance_training",
			description=(
				"Interactive compliance training system with real audit scenarios, policy interpretation exercises, and "
				"violation response procedures. Includes regulatory update tracking and documentation practice."
			),
			implementation_weeks="4-5 weeks",
			benefits=("Audit readiness", "Policy compliance", "Risk mitigation", "Documentation skills"),
			ideal_for=("Compliance officers", "Legal teams", "Audit staff", "Policy administrators"),
			expert_rationale=(
				"Compliance training requires precise understanding of regulations and practical application in audit "
				"scenarios. This system provides realistic compliance challenges."
			),
			suitability=93,
		),
	),
	DomainEntry(
		domain=Domain.MANUFACTURING,
		keywords=("production", "quality", "process", "manufacturing", "equipment", "operations"),
		expertise="Safety protocols, quality control, equipment training, production processes",
		analysis_focus="Review safety protocols, quality standards, equipment-specific training needs",
		sectors=("Production Training", "Quality Control", "Safety Procedures", "Equipment Operation"),
		template=StrategyTemplate(
			name="Safety-First Production Training System",
			type="safety_simulation",
			description=(
				"Comprehensive safety training system with equipment operation simulations, hazard identification "
				"exercises, and emergency response protocols. Includes quality control checkpoints and compliance verification."
			),
			implementation_weeks="5-6 weeks",
			benefits=("Zero-accident training", "Equipment familiarity", "Quality assurance", "Compliance verification"),
			ideal_for=("Production workers", "Safety officers", "Quality inspectors", "Equipment operators"),
			expert_rationale=(
				"Manufacturing safety training must be thorough and practical, with zero tolerance for errors. Simulation "
				"provides safe learning environment for high-risk procedures."
			),
			suitability=94,
		),
	),
)


_BY_DOMAIN: Dict[Domain, DomainEntry] = {entry.domain: entry for entry in DOMAIN_TABLE}


def template_for(domain: Domain) -> StrategyTemplate:
	return _BY_DOMAIN[domain].template or BUSINESS_TEMPLATE


def available_domains() -> List[str]:
	return [entry.domain.value for entry in DOMAIN_TABLE]


COMPLEXITY_TEMPLATES: Dict[str, Dict[str, object]] = {
	"Beginner": {
		"name": "Progressive Foundation Building System",
		"description": "Step-by-step learning progression with extensive support, guided practice, and confidence building exercises.",
		"benefits": ("Gentle learning curve", "Confidence building", "Solid foundation", "Reduced overwhelm"),
		"implementation_weeks": "4-5 weeks",
	},
	"Intermediate": {
		"name": "Skill Integration & Application Platform",
		"description": "Balanced approach combining concept review with practical application and real-world problem solving.",
		"benefits": ("Skill integration", "Practical application", "Real-world relevance", "Performance improvement"),
		"implementation_weeks": "5-6 weeks",
	},
	"Advanced": {
		"name": "Expert-Level Challenge & Innovation Lab",
		"description": "Advanced challenges, complex scenarios, and innovation opportunities for expert-level practitioners.",
		"benefits": ("Expert-level challenges", "Innovation opportunities", "Leadership development", "Industry advancement"),
		"implementation_weeks": "6-8 weeks",
	},
}
