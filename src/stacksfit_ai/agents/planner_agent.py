# src/stacksfit_ai/agents/planner_agent.py

"""
FallbackOrchestrator - runs one generation request through the fixed stage
order primary -> secondary -> static.

Each provider stage is attempted at most once and never in parallel with the
other. A stage ends in a StageAttempt; the first successful one becomes the
result. The static stage cannot fail, so callers always get an answer.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from stacksfit_ai.agents.coach_agent import CoachAgent
from stacksfit_ai.agents.fitness_agent import FitnessAgent
from stacksfit_ai.agents.input_agent import ProfileNormalizer
from stacksfit_ai.agents.nutrition_agent import NutritionAgent
from stacksfit_ai.agents.static_plan import generate_static_plan
from stacksfit_ai.errors import AdapterUnavailable, GenerationError, ResponseUnparseable
from stacksfit_ai.llm.llm_client import ProviderAdapter
from stacksfit_ai.llm.parser import parse_plan
from stacksfit_ai.llm.prompts import Prompt
from stacksfit_ai.models import (
    GenerationKind,
    GenerationResult,
    MotivationRequest,
    NutritionRequest,
    ProgressAnalysisRequest,
    Provider,
    StageAttempt,
    WorkoutRequest,
)

logger = logging.getLogger(__name__)

STATIC_BACKEND = "static"

FALLBACK_REASONS = {
    Provider.PRIMARY: None,
    Provider.SECONDARY: "primary unavailable",
    Provider.STATIC: "primary and secondary unavailable",
}


class FallbackOrchestrator:
    """Orchestrates the provider adapters and the static generator for one plan."""

    def __init__(
        self,
        primary: ProviderAdapter,
        secondary: ProviderAdapter,
        normalizer: Optional[ProfileNormalizer] = None,
    ):
        self.primary = primary
        self.secondary = secondary
        self.normalizer = normalizer or ProfileNormalizer()
        self.fitness_agent = FitnessAgent()
        self.nutrition_agent = NutritionAgent()
        self.coach_agent = CoachAgent()

    @property
    def stages(self) -> Tuple[Tuple[Provider, ProviderAdapter], ...]:
        return ((Provider.PRIMARY, self.primary), (Provider.SECONDARY, self.secondary))

    async def generate_workout(self, request: WorkoutRequest) -> GenerationResult:
        profile = self.normalizer.normalize(request.user_profile)
        prompt = self.fitness_agent.build_prompt(request, profile)
        return await self._run(prompt, lambda: generate_static_plan(profile, GenerationKind.WORKOUT))

    async def generate_nutrition(self, request: NutritionRequest) -> GenerationResult:
        profile = self.normalizer.normalize(request.user_profile)
        prompt = self.nutrition_agent.build_prompt(request, profile)
        return await self._run(
            prompt,
            lambda: generate_static_plan(
                profile,
                GenerationKind.NUTRITION,
                request.nutrition_goals,
                request.dietary_restrictions,
            ),
        )

    async def generate_progress_analysis(self, request: ProgressAnalysisRequest) -> GenerationResult:
        profile = self.normalizer.normalize(request.user_profile)
        prompt = self.coach_agent.build_progress_prompt(request, profile)
        return await self._run(
            prompt, lambda: self.coach_agent.static_analysis(profile, request.progress_data, request.timeframe)
        )

    async def generate_motivation(self, request: MotivationRequest) -> GenerationResult:
        profile = self.normalizer.normalize(request.user_profile)
        prompt = self.coach_agent.build_motivation_prompt(request, profile)
        return await self._run(prompt, lambda: self.coach_agent.static_motivation(profile, request.progress_data))

    async def _call(self, adapter: ProviderAdapter, prompt: Prompt) -> Dict[str, Any]:
        if not adapter.is_available():
            raise AdapterUnavailable(adapter.name)
        text = await adapter.generate(prompt)
        parsed = parse_plan(text)
        if not parsed.ok:
            raise ResponseUnparseable(adapter.name, parsed.error or "unparseable")
        missing = [key for key in prompt.required_keys if key not in parsed.data]
        if missing:
            raise ResponseUnparseable(adapter.name, f"missing keys: {', '.join(missing)}")
        return parsed.data

    async def _attempt(
        self, stage: Provider, adapter: ProviderAdapter, prompt: Prompt
    ) -> Tuple[StageAttempt, Optional[Dict[str, Any]]]:
        logger.info("%s request: trying %s stage (%s)", prompt.kind.value, stage.value, adapter.name)
        try:
            data = await self._call(adapter, prompt)
        except GenerationError as e:
            logger.warning("%s stage (%s) failed: %s", stage.value, adapter.name, e)
            return StageAttempt(stage=stage, backend=adapter.name, succeeded=False, error=str(e)), None
        return StageAttempt(stage=stage, backend=adapter.name, succeeded=True), data

    async def _run(self, prompt: Prompt, static_plan: Callable[[], Dict[str, Any]]) -> GenerationResult:
        attempts: List[StageAttempt] = []
        for stage, adapter in self.stages:
            attempt, data = await self._attempt(stage, adapter, prompt)
            attempts.append(attempt)
            if attempt.succeeded:
                logger.info("%s result produced by %s stage (%s)", prompt.kind.value, stage.value, adapter.name)
                return GenerationResult(
                    plan=data,
                    provider=stage,
                    backend=adapter.name,
                    fallback_used=stage is not Provider.PRIMARY,
                    fallback_reason=FALLBACK_REASONS[stage],
                    attempts=tuple(attempts),
                )

        plan = static_plan()
        attempts.append(StageAttempt(stage=Provider.STATIC, backend=STATIC_BACKEND, succeeded=True))
        logger.info("%s result produced by static stage", prompt.kind.value)
        return GenerationResult(
            plan=plan,
            provider=Provider.STATIC,
            backend=STATIC_BACKEND,
            fallback_used=True,
            fallback_reason=FALLBACK_REASONS[Provider.STATIC],
            attempts=tuple(attempts),
        )

    def health_status(self) -> Dict[str, Any]:
        status: Dict[str, Any] = {}
        for stage, adapter in self.stages:
            status[stage.value] = {
                "backend": adapter.name,
                "available": adapter.is_available(),
                "configured": bool(adapter.configured),
            }
        status["fallbackStrategy"] = (
            f"{Provider.PRIMARY.value} ({self.primary.name}) -> "
            f"{Provider.SECONDARY.value} ({self.secondary.name}) -> {Provider.STATIC.value}"
        )
        return status
