"""JSON snapshot encoding and validated merging of ProgressState.

Snapshots are merged field by field: a field that fails validation keeps
its current value and produces a warning, while the remaining fields of
the same document are still applied. Settings are validated key by key.
"""
import copy
import json
import logging
from datetime import date, datetime

from interview_tracker.catalog import problem_from_dict, problem_to_dict
from interview_tracker.models import (
    CategoryId, PlannedTopic, ProgressState, Section, Settings, StarStory, StudyDay,
)

logger = logging.getLogger(__name__)

# Older exports used these key names
LEGACY_ALIASES = {
    "completedTopics": "completedTopicIds",
    "completedLeetcode": "completedProblemIds",
    "progress": "progressByCategory",
}


class SnapshotError(ValueError):
    """Raised when a persisted or imported document cannot be used at all."""


def parse_snapshot(raw: str | bytes | dict) -> dict:
    """Decode raw snapshot input into a dict, raising SnapshotError if malformed."""
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Invalid JSON: {e}") from e
    if not isinstance(raw, dict):
        raise SnapshotError("Invalid data format")
    return raw


# -- encoding ---------------------------------------------------------------


def _date_str(value: date | None) -> str | None:
    return value.isoformat() if value else None


def state_to_dict(state: ProgressState) -> dict:
    return {
        "currentSection": state.current_section.value,
        "progressByCategory": {c.value: state.progress_by_category.get(c, 0) for c in CategoryId},
        "completedTopicIds": sorted(state.completed_topic_ids),
        "completedProblemIds": sorted(state.completed_problem_ids),
        "studyPlan": [
            {
                "date": day.date.isoformat(),
                "topics": [
                    {"id": t.id, "name": t.name, "category": t.category.value}
                    for t in day.topics
                ],
            }
            for day in state.study_plan
        ],
        "starStories": [
            {
                "id": s.id,
                "title": s.title,
                "category": s.category,
                "situation": s.situation,
                "task": s.task,
                "action": s.action,
                "result": s.result,
                "applicableQuestions": list(s.applicable_questions),
            }
            for s in state.star_stories
        ],
        "settings": {
            "darkMode": state.settings.dark_mode,
            "reminderEnabled": state.settings.reminder_enabled,
            "reminderTime": state.settings.reminder_time,
            "targetDate": _date_str(state.settings.target_date),
        },
        "leetcodeProblems": (
            None if state.leetcode_problems is None
            else [problem_to_dict(p) for p in state.leetcode_problems]
        ),
    }


def dumps(state: ProgressState, indent: int | None = None) -> str:
    return json.dumps(state_to_dict(state), indent=indent)


def loads(raw: str | bytes | dict) -> ProgressState:
    """Decode a snapshot over defaults; invalid fields fall back to defaults."""
    state, _ = merge_snapshot(ProgressState(), parse_snapshot(raw))
    return state


# -- field parsers ----------------------------------------------------------


def _string_list(value, what: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise TypeError(f"{what} must be a list of strings")
    return list(value)


def parse_date(value) -> date | None:
    if value is None or value == "":
        return None
    # YAML turns unquoted timestamps into datetimes
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise TypeError(f"expected a date string, got {type(value).__name__}")
    # Full ISO timestamps are accepted; only the calendar date is kept.
    return date.fromisoformat(value[:10])


def _parse_progress(value) -> dict[CategoryId, int]:
    if not isinstance(value, dict):
        raise TypeError("expected an object")
    progress = {c: 0 for c in CategoryId}
    for key, pct in value.items():
        if isinstance(pct, bool) or not isinstance(pct, int) or not 0 <= pct <= 100:
            raise ValueError(f"{key}: percentage must be an integer in [0, 100]")
        progress[CategoryId(key)] = pct
    return progress


def _parse_planned_topic(value) -> PlannedTopic:
    return PlannedTopic(
        id=str(value["id"]),
        name=str(value.get("name", value["id"])),
        category=CategoryId(value["category"]),
    )


def _parse_plan(value) -> list[StudyDay]:
    if not isinstance(value, list):
        raise TypeError("expected a list")
    plan = []
    for entry in value:
        if not isinstance(entry, dict):
            raise TypeError("plan entries must be objects")
        day = parse_date(entry["date"])
        if day is None:
            raise ValueError("plan entry without a date")
        topics = entry.get("topics") or []
        if not isinstance(topics, list):
            raise TypeError("plan topics must be a list")
        plan.append(StudyDay(date=day, topics=[_parse_planned_topic(t) for t in topics]))
    return plan


def _parse_story(value) -> StarStory:
    if not isinstance(value, dict):
        raise TypeError("stories must be objects")
    questions = value.get("applicableQuestions", value.get("questions", []))
    return StarStory(
        id=str(value["id"]),
        title=str(value["title"]),
        category=str(value.get("category") or ""),
        situation=str(value.get("situation") or ""),
        task=str(value.get("task") or ""),
        action=str(value.get("action") or ""),
        result=str(value.get("result") or ""),
        applicable_questions=_string_list(questions or [], "applicableQuestions"),
    )


def _parse_problem(value):
    if not isinstance(value, dict):
        raise TypeError("problems must be objects")
    return problem_from_dict(value)


def _parse_items(key: str, value, parse_item, warnings: list[str]) -> list:
    """Parse a list entry by entry, dropping bad entries with a warning each."""
    items = []
    for index, raw in enumerate(value):
        try:
            items.append(parse_item(raw))
        except (TypeError, ValueError, KeyError) as e:
            warnings.append(f"Ignoring invalid {key}[{index}]: {e}")
    return items


def _parse_bool(value) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean, got {type(value).__name__}")
    return value


def parse_time(value) -> str | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise TypeError("expected an HH:MM string")
    hours, minutes = value.split(":")[:2]
    if not (0 <= int(hours) < 24 and 0 <= int(minutes) < 60):
        raise ValueError(f"invalid time {value!r}")
    return f"{int(hours):02d}:{int(minutes):02d}"


SETTINGS_FIELDS = {
    "darkMode": ("dark_mode", _parse_bool),
    "reminderEnabled": ("reminder_enabled", _parse_bool),
    "reminderTime": ("reminder_time", parse_time),
    "targetDate": ("target_date", parse_date),
}


def merge_settings(current: Settings, value) -> tuple[Settings, list[str]]:
    if not isinstance(value, dict):
        return current, ["Ignoring invalid settings: expected an object"]
    settings = copy.copy(current)
    warnings = []
    for key, raw in value.items():
        if key not in SETTINGS_FIELDS:
            warnings.append(f"Ignoring unknown setting: {key}")
            continue
        attr, parse = SETTINGS_FIELDS[key]
        try:
            setattr(settings, attr, parse(raw))
        except (TypeError, ValueError, KeyError) as e:
            warnings.append(f"Ignoring invalid setting {key}: {e}")
    return settings, warnings


def normalize_settings(changes: dict) -> dict:
    """Validate attribute-keyed setting changes, raising on the first bad value."""
    parsers = dict(SETTINGS_FIELDS.values())
    normalized = {}
    for attr, value in changes.items():
        if attr not in parsers:
            raise TypeError(f"unknown setting {attr!r}")
        normalized[attr] = parsers[attr](value)
    return normalized


FIELDS = {
    "currentSection": ("current_section", Section),
    "progressByCategory": ("progress_by_category", _parse_progress),
    "completedTopicIds": ("completed_topic_ids", lambda v: set(_string_list(v, "completedTopicIds"))),
    "completedProblemIds": ("completed_problem_ids", lambda v: set(_string_list(v, "completedProblemIds"))),
    "studyPlan": ("study_plan", _parse_plan),
}

# List fields merged entry by entry; a null problem list means the catalog list.
ITEM_FIELDS = {
    "starStories": ("star_stories", _parse_story, False),
    "leetcodeProblems": ("leetcode_problems", _parse_problem, True),
}


def merge_snapshot(base: ProgressState, data: dict) -> tuple[ProgressState, list[str]]:
    """Merge a decoded snapshot over ``base`` and return (new_state, warnings).

    ``base`` is never modified.
    """
    state = copy.deepcopy(base)
    warnings = []
    for key, raw in data.items():
        if key in LEGACY_ALIASES:
            if LEGACY_ALIASES[key] in data:
                continue
            key = LEGACY_ALIASES[key]
        if key == "settings":
            state.settings, setting_warnings = merge_settings(state.settings, raw)
            warnings.extend(setting_warnings)
            continue
        if key in ITEM_FIELDS:
            attr, parse_item, nullable = ITEM_FIELDS[key]
            if raw is None and nullable:
                setattr(state, attr, None)
            elif not isinstance(raw, list):
                warnings.append(f"Ignoring invalid {key}: expected a list")
            else:
                setattr(state, attr, _parse_items(key, raw, parse_item, warnings))
            continue
        if key not in FIELDS:
            warnings.append(f"Ignoring unknown field: {key}")
            continue
        attr, parse = FIELDS[key]
        try:
            setattr(state, attr, parse(raw))
        except (TypeError, ValueError, KeyError) as e:
            warnings.append(f"Ignoring invalid {key}: {e}")
    for warning in warnings:
        logger.warning(warning)
    return state, warnings
