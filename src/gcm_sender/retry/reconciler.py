"""
Reconciliation of multicast outcomes across retry rounds.

The engine keeps one map from registration id to the latest outcome the
server reported for it. reconcile() replays the caller's original list
against that map, so every input position gets exactly one Result and
duplicated ids share the outcome recorded for them.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from gcm_sender.models.response import RecipientResult
from gcm_sender.models.results import Result


@dataclass(frozen=True)
class Reconciliation:
    """
    Final per-position outcomes and their counters.

    success + failure always equals len(results).
    """

    results: list[Result] = field(default_factory=list)
    success: int = 0
    failure: int = 0
    canonical_ids: int = 0


def reconcile(
    outcomes: Mapping[str, RecipientResult],
    registration_ids: Sequence[str],
) -> Reconciliation:
    """
    Fold recorded outcomes back into the original recipient order.

    A recipient counts as a success when its outcome has a message id, and
    additionally as a canonical id when the server returned a replacement
    registration id. Recipients with no recorded outcome get an empty
    Result and count as failures.

    Args:
        outcomes: Latest outcome per registration id, across all rounds
        registration_ids: The list the caller originally passed in

    Returns:
        Reconciliation aligned index-for-index with registration_ids
    """
    results: list[Result] = []
    success = failure = canonical_ids = 0

    for registration_id in registration_ids:
        outcome = outcomes.get(registration_id)
        if outcome is None:
            results.append(Result())
            failure += 1
            continue

        results.append(Result.from_recipient_result(outcome))
        if outcome.delivered:
            success += 1
            if outcome.canonical:
                canonical_ids += 1
        else:
            failure += 1

    return Reconciliation(
        results=results,
        success=success,
        failure=failure,
        canonical_ids=canonical_ids,
    )
