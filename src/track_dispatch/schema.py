"""Input validation for activity lists and dispatcher definitions."""

from __future__ import annotations

from datetime import time, timedelta

from track_dispatch.resolution import fits_in_day


def validate_activities(activities: list[dict]) -> list[str]:
    """Validate raw activity entries. Returns list of error messages (empty = valid).

    Checks:
    - Each entry is an object with a non-empty string title
    - open_ended, when present, is a boolean
    - Fixed entries have a non-negative integer "minutes"
    """
    errors: list[str] = []

    if not isinstance(activities, list):
        return [f"activities must be a list, got {type(activities).__name__}"]

    for i, entry in enumerate(activities):
        if not isinstance(entry, dict):
            errors.append(f"Activity {i}: expected an object, got {entry!r}")
            continue

        title = entry.get("title")
        if not isinstance(title, str) or not title.strip():
            errors.append(f"Activity {i}: missing or empty 'title'")

        open_ended = entry.get("open_ended", False)
        if not isinstance(open_ended, bool):
            errors.append(f"Activity {i}: 'open_ended' must be boolean")
            continue

        if open_ended:
            continue

        minutes = entry.get("minutes")
        # bool is an int subclass
        if not isinstance(minutes, int) or isinstance(minutes, bool):
            errors.append(f"Activity {i}: 'minutes' must be an integer")
        elif minutes < 0:
            errors.append(f"Activity {i}: negative duration {minutes}")

    return errors


def validate_dispatcher(definition: dict) -> list[str]:
    """Validate a dispatcher definition. Returns list of error messages.

    Checks:
    - The definition is an object
    - "start" parses as HH:MM
    - "budget_minutes" is a non-negative integer
    - start + budget does not run past midnight
    - "activities", when present, is a valid activity list
    """
    if not isinstance(definition, dict):
        return [f"definition must be an object, got {type(definition).__name__}"]

    errors: list[str] = []

    start = None
    try:
        start = time.fromisoformat(definition["start"])
    except KeyError:
        errors.append("missing 'start'")
    except (ValueError, TypeError) as e:
        errors.append(f"invalid start time - {e}")

    budget = definition.get("budget_minutes")
    if not isinstance(budget, int) or isinstance(budget, bool):
        errors.append("'budget_minutes' must be an integer")
        budget = None
    elif budget < 0:
        errors.append(f"negative budget {budget}")
        budget = None

    if start is not None and budget is not None:
        if not fits_in_day(start, timedelta(minutes=budget)):
            errors.append(
                f"budget of {budget}min from {start:%H:%M} runs past midnight"
            )

    if "activities" in definition:
        errors.extend(validate_activities(definition["activities"]))

    return errors
