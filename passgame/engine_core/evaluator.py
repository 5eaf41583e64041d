"""
Evaluator - Applies every rule to a candidate string.

Pure function: (rules, candidate, context, flags, now) -> EvaluationResult.
Safe to call on every keystroke; nothing is mutated.

Context-requiring rules are skipped while no context exists. They are
reported as pending: neither satisfied nor given feedback.
"""

from __future__ import annotations
from datetime import datetime
from typing import Sequence

from .rule import Rule, RuleEnv
from .state import EvaluationResult, MiniGameFlags, RuleStatus, SessionContext


def evaluate(
    rules: Sequence[Rule],
    candidate: str,
    context: SessionContext | None,
    flags: MiniGameFlags,
    now: datetime,
) -> EvaluationResult:
    """
    Evaluate all rules in id order.

    Args:
        rules: The rule catalog, ordered by rule_id
        candidate: The player's current input
        context: Session context, or None while it is unavailable
        flags: Mini-game completion flags
        now: Evaluation time, supplied by the caller

    Returns:
        EvaluationResult with satisfied ids, pending ids and near-miss feedback
    """
    env = RuleEnv(
        now=now,
        context=context,
        word_game_won=flags.word_game_won,
        wordrow_completed=flags.wordrow_completed,
    )

    satisfied: set[int] = set()
    pending: set[int] = set()
    feedback: dict[int, str] = {}

    for rule in rules:
        if rule.requires_context and context is None:
            pending.add(rule.rule_id)
            continue

        if rule.check(candidate, env):
            satisfied.add(rule.rule_id)
            continue

        message = rule.feedback(candidate, env)
        if message:
            feedback[rule.rule_id] = message

    return EvaluationResult(
        satisfied=frozenset(satisfied),
        total=len(rules),
        feedback=feedback,
        pending=frozenset(pending),
    )


def rule_status(rule_id: int, result: EvaluationResult) -> RuleStatus:
    """Status of one rule in an evaluation result."""
    if rule_id in result.satisfied:
        return RuleStatus.SATISFIED
    if rule_id in result.pending:
        return RuleStatus.PENDING
    return RuleStatus.FAILED


def validate_catalog(rules: Sequence[Rule]) -> list[str]:
    """
    Check catalog invariants.

    Returns a list of errors; empty when ids are contiguous 1..N in order.
    """
    errors: list[str] = []
    for expected, rule in enumerate(rules, start=1):
        if rule.rule_id != expected:
            errors.append(f"rule at position {expected} has id {rule.rule_id}")
        if not rule.description:
            errors.append(f"rule {rule.rule_id} has no description")
    return errors
