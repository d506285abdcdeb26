"""Cascading error filtering for puzzle validation reports."""

from typing import Dict, List

from .models import ValidationError


# Cascade level constants
CRITICAL = 1  # Broken paths - coverage errors downstream are often spurious
HIGH = 2  # Spelling mismatches
MEDIUM = 3  # Dictionary membership
LOW = 4  # Unused letters


def filter_cascading_errors(
    errors: List[ValidationError],
    max_errors: int = 5
) -> List[ValidationError]:
    """
    Pick the errors worth showing an author first.

    Filtering rules:
    - Level 1 (CRITICAL) present -> Show Level 1 + Level 3, plus Level 2
      for words with no Level 1 error
    - Level 2 (HIGH) present -> Show Level 2 + Level 3 + Level 4
    - Otherwise -> Show all errors

    A broken path usually also leaves letters uncovered, so UNUSED_LETTER
    reports are held back until the paths are fixed. A spelling mismatch
    is only held back when its own word has a broken path. The full list
    always stays on the ValidationResult; this is for display only.

    Args:
        errors: List of validation errors to filter
        max_errors: Maximum number of errors to return (default 5)

    Returns:
        Filtered list of errors, limited to max_errors
    """
    if not errors:
        return errors

    by_level: Dict[int, List[ValidationError]] = {}
    for err in errors:
        by_level.setdefault(err.cascade_level, []).append(err)

    result: List[ValidationError] = []

    if CRITICAL in by_level:
        result = by_level[CRITICAL].copy()
        broken = {err.word for err in result}
        result.extend(
            err for err in by_level.get(HIGH, [])
            if err.word is not None and err.word not in broken
        )
        result.extend(by_level.get(MEDIUM, []))

    elif HIGH in by_level:
        result = by_level[HIGH].copy()
        result.extend(by_level.get(MEDIUM, []))
        result.extend(by_level.get(LOW, []))

    else:
        result = errors.copy()

    if len(result) > max_errors:
        kept = result[:max_errors - 1]
        num_hidden = len(result) - len(kept)
        kept.append(ValidationError(
            code="ADDITIONAL_ERRORS",
            message=f"... and {num_hidden} more error{'s' if num_hidden > 1 else ''}. Fix the above first.",
            cascade_level=result[0].cascade_level
        ))
        return kept

    return result
