from __future__ import annotations
import logging
from typing import Awaitable, Callable, Optional, Sequence

from .errors import ExternalServiceError, MalformedInputError
from .narrative_parser import parse_narrative
from .prompts import build_system_prompt, build_user_prompt
from .schemas import ContentAnalysis, SMEResponse, StrategyBundle
from .synthesizer import synthesize_strategies

logger = logging.getLogger(__name__)

# (system_prompt, user_prompt) -> narrative text
NarrativeGenerator = Callable[[str, str], Awaitable[str]]


def synthesize_from_analysis(analysis: ContentAnalysis, sme_responses: Sequence[SMEResponse]) -> StrategyBundle:
	return synthesize_strategies(
		analysis.domain_classification,
		analysis.quality_assessment,
		analysis.identified_gaps,
		sme_responses,
	)


async def generate_strategy_bundle(
	analysis: Optional[ContentAnalysis],
	sme_responses: Optional[Sequence[SMEResponse]] = None,
	*,
	generator: Optional[NarrativeGenerator] = None,
	session_id: Optional[str] = None,
) -> StrategyBundle:
	"""Build a strategy bundle, preferring the external narrative generator.

	The generator is called at most once. An ExternalServiceError or a blank reply falls
	through to the local synthesizer; the caller always gets a bundle.
	"""
	if analysis is None:
		raise MalformedInputError("content analysis is required to generate strategies")
	sme_responses = list(sme_responses or [])
	if generator is None:
		logger.info("No narrative generator configured; synthesizing strategies locally")
		return synthesize_from_analysis(analysis, sme_responses)
	try:
		narrative = await generator(build_system_prompt(), build_user_prompt(analysis, sme_responses, session_id))
	except ExternalServiceError as exc:
		logger.warning("Narrative generator failed (%s); using local synthesizer", exc)
		return synthesize_from_analysis(analysis, sme_responses)
	if not narrative or not narrative.strip():
		logger.warning("Narrative generator returned no text; using local synthesizer")
		return synthesize_from_analysis(analysis, sme_responses)
	bundle = parse_narrative(narrative, analysis.domain_classification)
	logger.info(
		"Parsed %d strategies from narrative (source=%s)",
		len(bundle.strategies),
		bundle.source.value,
	)
	return bundle
