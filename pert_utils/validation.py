"""
Checks applied before the activity collection of a project changes.

Candidates are plain mappings with the raw user input::

    {"code": "B", "description": "Design", "duration": "2", "cost": "150.5", "requirements": ["A"]}

A successful check returns the normalized `Activity`; a failed one raises
`ValidationError` and nothing is changed.
"""
import logging
import math
import numbers
from dataclasses import dataclass
from enum import Enum

import networkx as nx

from pert_utils.activity import Activity
from pert_utils.analysis import build_dependency_graph

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("code", "description", "duration", "cost")


class ValidationErrorKind(Enum):
    MISSING_FIELD = "MissingField"
    INVALID_DURATION = "InvalidDuration"
    INVALID_COST = "InvalidCost"
    DUPLICATE_CODE = "DuplicateCode"
    UNKNOWN_REQUIREMENT = "UnknownRequirement"
    UNKNOWN_ACTIVITY = "UnknownActivity"
    CYCLIC_DEPENDENCY = "CyclicDependency"


class ValidationError(ValueError):
    def __init__(self, kind: ValidationErrorKind, message: str, codes=(), fields=()):
        super().__init__(message)
        self.kind = kind
        self.codes = list(codes)
        self.fields = list(fields)


@dataclass(frozen=True)
class DeleteOutcome:
    """
    Result of asking to delete an activity.

    `dependents` are the activities that still require `code`. While they
    exist and the deletion was not confirmed, `removed` stays False and the
    caller has to ask the user before deleting with confirmation.
    """
    code: str
    dependents: tuple[str, ...] = ()
    removed: bool = False

    @property
    def requires_confirmation(self) -> bool:
        return bool(self.dependents) and not self.removed

    @property
    def removed_directly(self) -> bool:
        return self.removed and not self.dependents


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_duration(value) -> int:
    """Accept a positive whole number given as int, float or string."""
    error = ValidationError(ValidationErrorKind.INVALID_DURATION,
                            f"Duration must be a positive integer, got {value!r}.")
    if isinstance(value, bool):
        raise error
    if isinstance(value, numbers.Integral):
        duration = int(value)
    elif isinstance(value, numbers.Real):
        if not float(value).is_integer():
            raise error
        duration = int(value)
    elif isinstance(value, str):
        try:
            duration = int(value.strip())
        except ValueError:
            raise error from None
    else:
        raise error

    if duration <= 0:
        raise error
    return duration


def parse_cost(value) -> float:
    """Accept a finite, non-negative number given as number or string."""
    error = ValidationError(ValidationErrorKind.INVALID_COST,
                            f"Cost must be a number greater than or equal to zero, got {value!r}.")
    if isinstance(value, bool):
        raise error
    if isinstance(value, numbers.Real):
        cost = float(value)
    elif isinstance(value, str):
        try:
            cost = float(value.strip())
        except ValueError:
            raise error from None
    else:
        raise error

    if not math.isfinite(cost) or cost < 0:
        raise error
    return cost


def normalize_requirements(requirements) -> list[str]:
    """Strip, drop blanks and duplicates, keep the first-seen order."""
    if requirements is None:
        return []
    if isinstance(requirements, str):
        requirements = requirements.split(",")

    normalized = []
    for requirement in requirements:
        requirement = str(requirement).strip()
        if requirement and requirement not in normalized:
            normalized.append(requirement)
    return normalized


def _parse_candidate(candidate):
    missing = [name for name in REQUIRED_FIELDS if _is_blank(candidate.get(name))]
    if missing:
        raise ValidationError(ValidationErrorKind.MISSING_FIELD,
                              f"Missing required field(s): {', '.join(missing)}.",
                              fields=missing)

    code = str(candidate["code"]).strip()
    description = str(candidate["description"]).strip()
    duration = parse_duration(candidate["duration"])
    cost = parse_cost(candidate["cost"])
    requirements = normalize_requirements(candidate.get("requirements"))
    return code, description, duration, cost, requirements


def _check_requirements(code, requirements, known_codes):
    unknown = [r for r in requirements if r not in known_codes and r != code]
    if unknown:
        raise ValidationError(ValidationErrorKind.UNKNOWN_REQUIREMENT,
                              f"Required activities do not exist: {', '.join(unknown)}.",
                              codes=unknown)


def _build_activity(code, description, duration, cost, requirements):
    if code in requirements:
        logger.debug("Dropping self-reference of activity %s", code)
    return Activity(code=code,
                    description=description,
                    duration=duration,
                    cost=cost,
                    requirements=tuple(r for r in requirements if r != code))


def validate_new_activity(candidate, existing) -> Activity:
    existing_codes = {activity.code for activity in existing}
    code, description, duration, cost, requirements = _parse_candidate(candidate)

    if code in existing_codes:
        raise ValidationError(ValidationErrorKind.DUPLICATE_CODE,
                              f"An activity with code {code} already exists.",
                              codes=[code])
    _check_requirements(code, requirements, existing_codes)

    return _build_activity(code, description, duration, cost, requirements)


def validate_activity_update(candidate, existing) -> Activity:
    """
    Validate new field values for an existing activity.

    The code identifies the activity and cannot change. Requirements are
    checked against the other activities, and must not make any of them
    depend on the updated activity in a loop.
    """
    existing = list(existing)
    code, description, duration, cost, requirements = _parse_candidate(candidate)

    if not any(activity.code == code for activity in existing):
        raise ValidationError(ValidationErrorKind.UNKNOWN_ACTIVITY,
                              f"There is no activity with code {code}.",
                              codes=[code])
    _check_requirements(code, requirements, {a.code for a in existing if a.code != code})

    updated = _build_activity(code, description, duration, cost, requirements)
    cycle = _cycle_through(updated, existing)
    if cycle:
        raise ValidationError(ValidationErrorKind.CYCLIC_DEPENDENCY,
                              f"Requirements of {code} would create a cycle: {' -> '.join(cycle + [code])}.",
                              codes=cycle)
    return updated


def _cycle_through(updated: Activity, existing):
    G = build_dependency_graph(updated if a.code == updated.code else a for a in existing)
    for requirement in updated.requirements:
        # requirement -> updated is an edge, so any way back closes a loop
        if nx.has_path(G, updated.code, requirement):
            return nx.shortest_path(G, updated.code, requirement)
    return None


def plan_deletion(code: str, existing) -> DeleteOutcome:
    """Read-only impact of deleting `code`: which activities still require it."""
    existing = list(existing)
    if not any(activity.code == code for activity in existing):
        raise ValidationError(ValidationErrorKind.UNKNOWN_ACTIVITY,
                              f"There is no activity with code {code}.",
                              codes=[code])
    dependents = tuple(a.code for a in existing if a.requires(code))
    return DeleteOutcome(code=code, dependents=dependents)


def apply_deletion(code: str, existing) -> list[Activity]:
    """The activities left after deleting `code`, with every reference to it removed."""
    return [a.without_requirement(code) for a in existing if a.code != code]
