"""
PocketTasks AI - Response Normalizer

Makes the classifier's output safe to apply regardless of model misbehavior.

The echo collapse is a best-effort repair for a known failure mode (the model
repeating the prompt as several identical entries); it is pattern matching on
natural language, not a correctness guarantee.
"""

import logging
import re
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError

from pockettasks.errors import SchemaError
from pockettasks.classifier.schemas import Action, ClassificationResult, RawClassification
from pockettasks.tasks.schemas import CountSubtype

logger = logging.getLogger(__name__)


LIST_TOKENS_PATTERN = re.compile(r"\band\b|,|\bplan\b|\blist of\b", re.IGNORECASE)

DEFAULT_REASONING = {
    Action.CLEAR_ALL_TASKS: "Okay, I've processed your request to clear all tasks. Your list will be emptied.",
    Action.COMPLETE_ALL_TASKS: (
        "Okay, I've processed your request to mark all tasks as completed. "
        "Your tasks will be updated accordingly."
    ),
    Action.QUERY_TASK_COUNT: "You're asking about your task count. The application will provide this information.",
    Action.NO_ACTION_CONVERSATIONAL_REPLY: "Hi there! Tell me what you need to get done and I'll add it to your list.",
}

SINGLE_TASK_REASONING = (
    "Okay, I've added '{task}' to your list. You can get more details or a breakdown using the info button!"
)
MULTIPLE_TASKS_REASONING = "Alright, I've drafted a plan with {count} task(s) for you!"
NO_TASKS_REASONING = (
    "AI processed your request, but no specific tasks were generated or action taken. "
    "You can try rephrasing your request."
)

# Explicit sub-type words the model is asked to put in its reasoning
_SUBTYPE_WORD_PATTERN = re.compile(r"\b(total|remaining|completed)\b", re.IGNORECASE)

# Looser cues read from the user's own question
_REMAINING_CUES_PATTERN = re.compile(
    r"\b(remaining|left|pending|incomplete|undone|not done|unfinished|outstanding|open)\b", re.IGNORECASE
)
_COMPLETED_CUES_PATTERN = re.compile(r"\b(completed|complete|done|finished|checked off)\b", re.IGNORECASE)


def capitalize_first(text: str) -> str:
    """Upper-case the first character and leave the rest untouched."""
    return text[:1].upper() + text[1:]


def _fold(text: str) -> str:
    return " ".join(text.split()).casefold()


def _fold_loose(text: str) -> str:
    return " ".join(re.sub(r"[^\w\s]", " ", text).split()).casefold()


def coerce_task_list(value: Any) -> List[str]:
    """Return value as a list of strings; anything else becomes an empty list."""
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning(f"Classifier returned non-array taskList ({type(value).__name__}), using empty list")
        return []
    strings = [item for item in value if isinstance(item, str)]
    if len(strings) != len(value):
        logger.warning(f"Dropped {len(value) - len(strings)} non-string taskList entries")
    return strings


def collapse_echoed_tasks(tasks: List[str], prompt: str) -> List[str]:
    """
    Collapse a list of identical entries into a single entry.

    Entries count as identical when equal after trim and case-fold. When the
    prompt has no list-indicating tokens, punctuation differences are ignored
    as well. Lists of distinct-looking tasks are returned unchanged.
    """
    if len(tasks) < 2:
        return tasks

    folded = {_fold(t) for t in tasks}
    if len(folded) == 1 and "" not in folded:
        logger.warning(f"Classifier repeated one task {len(tasks)} times, collapsing to a single entry")
        return [tasks[0]]

    if not LIST_TOKENS_PATTERN.search(prompt or ""):
        loose = {_fold_loose(t) for t in tasks}
        if len(loose) == 1 and "" not in loose:
            logger.warning(f"Classifier echoed the prompt {len(tasks)} times, collapsing to a single entry")
            return [tasks[0]]

    return tasks


def clean_task_texts(tasks: List[str]) -> List[str]:
    """Trim, drop blanks, capitalize, and de-duplicate preserving first occurrence."""
    cleaned: List[str] = []
    seen: set[str] = set()
    for text in tasks:
        text = " ".join(text.split())
        if not text:
            continue
        key = text.casefold()
        if key in seen:
            continue
        seen.add(key)
        cleaned.append(capitalize_first(text))
    return cleaned


def default_reasoning(action: Action, task_list: List[str]) -> str:
    """Deterministic user-facing message for an action when the model gave none."""
    if action != Action.ADD_TASKS:
        return DEFAULT_REASONING[action]
    if len(task_list) == 1:
        return SINGLE_TASK_REASONING.format(task=task_list[0])
    if task_list:
        return MULTIPLE_TASKS_REASONING.format(count=len(task_list))
    return NO_TASKS_REASONING


def resolve_count_subtype(reasoning: Optional[str], prompt: str) -> CountSubtype:
    """
    Work out which count a quantity question asks about.

    The reasoning is checked first for one explicit sub-type word; when it
    names none (or several), the user's prompt decides. Defaults to total.
    """
    words = {m.lower() for m in _SUBTYPE_WORD_PATTERN.findall(reasoning or "")}
    if len(words) == 1:
        return CountSubtype(words.pop())

    if _REMAINING_CUES_PATTERN.search(prompt or ""):
        return CountSubtype.REMAINING
    if _COMPLETED_CUES_PATTERN.search(prompt or ""):
        return CountSubtype.COMPLETED
    return CountSubtype.TOTAL


def parse_action(value: Optional[str]) -> Action:
    """Map the model's action tag to an Action, defaulting to add_tasks."""
    if value is None or not str(value).strip():
        return Action.ADD_TASKS
    try:
        return Action(str(value).strip().lower())
    except ValueError as e:
        raise SchemaError(f"Unknown classifier action: {value!r}") from e


def normalize_classification(raw: Any, prompt: str) -> ClassificationResult:
    """
    Validate and repair a raw classifier answer.

    Raises:
        SchemaError: If the answer is not an object or names an unknown action
    """
    if not isinstance(raw, dict):
        raise SchemaError(f"Classifier answer must be a JSON object, got {type(raw).__name__}")
    try:
        parsed = RawClassification.model_validate(raw)
    except PydanticValidationError as e:
        raise SchemaError(f"Classifier answer has an invalid shape: {e}") from e

    action = parse_action(parsed.action)
    task_list = coerce_task_list(parsed.task_list)

    if action != Action.ADD_TASKS:
        if task_list:
            logger.warning(
                f"Classifier returned action:{action.value} but non-empty taskList. Overriding taskList to empty."
            )
        task_list = []
    else:
        task_list = clean_task_texts(collapse_echoed_tasks(task_list, prompt))

    reasoning = parsed.reasoning.strip() if isinstance(parsed.reasoning, str) else ""
    if not reasoning:
        reasoning = default_reasoning(action, task_list)

    count_subtype = None
    if action == Action.QUERY_TASK_COUNT:
        count_subtype = resolve_count_subtype(parsed.reasoning if isinstance(parsed.reasoning, str) else None, prompt)

    return ClassificationResult(
        task_list=task_list,
        reasoning=reasoning,
        action=action,
        count_subtype=count_subtype,
    )
