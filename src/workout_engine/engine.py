"""WorkoutEngine — the caller-facing orchestrator for sessions and plans."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from workout_engine.catalog.tables import DEFAULT_FOCUS_TABLES, FocusTables
from workout_engine.config import DEFAULT_SETTINGS, EngineSettings
from workout_engine.exceptions import InvalidPlanInputError
from workout_engine.math.impact import calculate_workout_impact
from workout_engine.models.enums import FocusArea, Goal, IntentMode
from workout_engine.models.exercise import Exercise, ScheduledExercise
from workout_engine.models.plan import (
    GeneratedPlan,
    PlanDay,
    PlanResult,
    PlanSummary,
    TemplateResult,
    WorkoutTemplateDraft,
)
from workout_engine.models.plan_input import LayoutEntry, PlanInput
from workout_engine.models.session import SessionHistory, SessionResult
from workout_engine.planning.focus_sequence import build_focus_distribution, build_focus_sequence
from workout_engine.planning.naming import (
    build_plan_description,
    build_plan_title,
    build_rationale,
    build_session_name,
    build_template_description,
    format_focus_label,
)
from workout_engine.planning.normalizer import (
    MSG_TRAINING_DAY_REQUIRED,
    adjust_minutes_per_session,
    apply_rest_preference,
    normalize_plan_input,
    validate_plan_input,
)
from workout_engine.selection.variety_scorer import history_from_exercises
from workout_engine.session_builder.builder import SessionBuilder
from workout_engine.session_builder.merger import SessionMerger

logger = logging.getLogger(__name__)

PartialInput = Mapping[str, Any] | PlanInput | None


class WorkoutEngine:
    """Builds sessions, multi-focus sessions, weekly plans and templates.

    Every entry point accepts a partial or normalized PlanInput. Expected
    validation failures come back as error strings, never as exceptions.

    Usage:
        engine = WorkoutEngine()
        session = engine.build_session(catalog, {"intent": {"body_parts": ["legs"]}})
        result = engine.generate_plan(catalog, {"schedule": {"days_available": [0, 2, 4]}})
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        tables: FocusTables = DEFAULT_FOCUS_TABLES,
    ) -> None:
        self.settings = settings or DEFAULT_SETTINGS
        self.builder = SessionBuilder(self.settings, tables)
        self.merger = SessionMerger(self.builder)

    # -- entry points -----------------------------------------------------

    def build_session(
        self,
        catalog: Sequence[Exercise],
        partial_input: PartialInput = None,
        focus: FocusArea | None = None,
        *,
        history: SessionHistory | None = None,
        seed: str | int | None = None,
        goal: Goal | None = None,
    ) -> SessionResult | list[str]:
        """Build one session for a single focus.

        Args:
            catalog: Catalog snapshot.
            partial_input: Partial request; defaults fill the rest.
            focus: Focus area; defaults to the request's leading focus.
            history: Recent exercises to steer away from.
            seed: PRNG seed for reproducible reruns.
            goal: Goal override.

        Returns:
            The SessionResult, or validation error messages.
        """
        plan_input, errors = self._prepare(partial_input, allow_empty_equipment=True)
        if plan_input is None or errors:
            return errors
        target_focus = focus or self.default_focuses(plan_input)[0]
        return self.builder.build(
            catalog,
            target_focus,
            plan_input.time.minutes_per_session,
            plan_input,
            goal=goal,
            history=history,
            seed=seed,
        )

    def build_multi_focus_session(
        self,
        catalog: Sequence[Exercise],
        partial_input: PartialInput = None,
        focuses: Sequence[FocusArea] | None = None,
        *,
        history: SessionHistory | None = None,
        seed: str | int | None = None,
    ) -> SessionResult | list[str]:
        """Build one session spanning several focuses (all body parts by default)."""
        plan_input, errors = self._prepare(partial_input, allow_empty_equipment=True)
        if plan_input is None or errors:
            return errors
        return self.merger.build(
            catalog,
            list(focuses) if focuses else self.default_focuses(plan_input),
            plan_input.time.minutes_per_session,
            plan_input,
            history=history,
            seed=None if seed is None else str(seed),
        )

    def generate_plan(
        self,
        catalog: Sequence[Exercise],
        partial_input: PartialInput = None,
        *,
        history: SessionHistory | None = None,
    ) -> PlanResult:
        """Build a full week: one session per layout entry or available day.

        Each day sees the exercises of the days before it as history, so
        the week rotates through the catalog instead of repeating itself.
        """
        plan_input, errors = self._prepare(partial_input)
        sessions = self.sessions_per_week(plan_input) if plan_input is not None else 0
        if plan_input is not None and sessions == 0:
            errors.append(MSG_TRAINING_DAY_REQUIRED)
            logger.info("Plan input rejected: %s", MSG_TRAINING_DAY_REQUIRED)
        if plan_input is None or errors:
            return PlanResult(errors=tuple(errors))

        layout = self.weekly_layout(plan_input, sessions)
        minutes = adjust_minutes_per_session(plan_input, sessions)
        rest_preference = plan_input.preferences.rest_preference

        days: list[PlanDay] = []
        scheduled: list[ScheduledExercise] = []
        for entry in layout:
            day_history = _combine_history(history, scheduled)
            session = self.builder.build(
                catalog,
                entry.focus,
                minutes,
                plan_input,
                goal=entry.style,
                history=day_history,
                seed=f"{entry.session_index}-{entry.focus.value}-{entry.style.value}",
            )
            scheduled.extend(session.exercises)
            days.append(PlanDay(
                order=entry.session_index,
                name=build_session_name(entry.focus, session.exercises, entry.style),
                focus=entry.focus,
                style=entry.style,
                duration_minutes=minutes,
                rationale=build_rationale(entry.focus, minutes, rest_preference, entry.style),
                exercises=session.exercises,
                session=session,
            ))

        lead_focus = layout[0].focus
        goal = plan_input.goals.primary
        plan = GeneratedPlan(
            title=build_plan_title(lead_focus, goal, minutes),
            description=build_plan_description(sessions, lead_focus, [entry.style for entry in layout]),
            goal=goal,
            level=plan_input.experience_level,
            tags=(format_focus_label(lead_focus), goal.value.replace("_", " ")),
            schedule=tuple(days),
            inputs=plan_input,
            summary=PlanSummary(
                sessions_per_week=sessions,
                total_minutes=minutes * sessions,
                focus_distribution=build_focus_distribution(day.focus for day in days),
                impact=calculate_workout_impact(days),
            ),
        )
        logger.info(
            "Generated plan %r: %d sessions, %d exercises",
            plan.title, sessions, len(scheduled),
        )
        return PlanResult(plan=plan)

    def build_workout_template(self, partial_input: PartialInput = None) -> TemplateResult:
        """Describe a reusable workout without selecting exercises."""
        plan_input, errors = self._prepare(partial_input)
        if plan_input is None or errors:
            return TemplateResult(errors=tuple(errors))
        focus = self.default_focuses(plan_input)[0]
        goal = plan_input.goals.primary
        return TemplateResult(template=WorkoutTemplateDraft(
            title=build_plan_title(focus, goal, plan_input.time.minutes_per_session),
            description=build_template_description(focus, goal),
            focus=focus,
            style=goal,
            inputs=plan_input,
        ))

    # -- helpers ----------------------------------------------------------

    def default_focuses(self, plan_input: PlanInput) -> list[FocusArea]:
        """Body parts in body_part mode, else the first rotation focus."""
        intent = plan_input.intent
        if intent.mode == IntentMode.BODY_PART and intent.body_parts:
            return list(dict.fromkeys(intent.body_parts))
        return build_focus_sequence(1, plan_input.preferences, plan_input.goals) or [FocusArea.FULL_BODY]

    @staticmethod
    def sessions_per_week(plan_input: PlanInput) -> int:
        schedule = plan_input.schedule
        return len(schedule.weekly_layout) or len(schedule.days_available)

    def weekly_layout(self, plan_input: PlanInput, sessions: int) -> list[LayoutEntry]:
        """Explicit layout sorted by session index, or one derived from the request."""
        if plan_input.schedule.weekly_layout:
            return sorted(plan_input.schedule.weekly_layout, key=lambda entry: entry.session_index)

        intent = plan_input.intent
        if intent.mode == IntentMode.BODY_PART and intent.body_parts:
            parts = intent.body_parts
            focuses = [parts[index % len(parts)] for index in range(sessions)]
        else:
            focuses = build_focus_sequence(sessions, plan_input.preferences, plan_input.goals)
        style = plan_input.goals.primary
        return [
            LayoutEntry(session_index=index, style=style, focus=focus)
            for index, focus in enumerate(focuses)
        ]

    def _prepare(
        self,
        partial_input: PartialInput,
        allow_empty_equipment: bool = False,
    ) -> tuple[PlanInput | None, list[str]]:
        """Normalize, apply the rest preference and validate.

        Returns None only when the request cannot be normalized at all;
        otherwise the normalized input comes back with any violations.
        """
        try:
            plan_input = apply_rest_preference(normalize_plan_input(partial_input))
        except InvalidPlanInputError as exc:
            logger.info("Plan input rejected: %s", exc)
            return None, [str(exc)]
        errors = validate_plan_input(plan_input, allow_empty_equipment=allow_empty_equipment)
        if errors:
            logger.info("Plan input rejected: %s", "; ".join(errors))
        return plan_input, errors


def _combine_history(
    history: SessionHistory | None,
    scheduled: Sequence[ScheduledExercise],
) -> SessionHistory | None:
    if not scheduled:
        return history
    recent = history_from_exercises(scheduled)
    if history is None:
        return recent
    return SessionHistory(
        recent_exercise_names=history.recent_exercise_names + recent.recent_exercise_names,
        recent_patterns=history.recent_patterns + recent.recent_patterns,
        recent_muscles=history.recent_muscles + recent.recent_muscles,
    )
