"""
PocketTasks AI - Response Normalizer Tests

The echo collapse is a best-effort repair; these tests pin down the clear
cases only.
"""

import pytest

from pockettasks.classifier.normalizer import (
    DEFAULT_REASONING,
    NO_TASKS_REASONING,
    capitalize_first,
    clean_task_texts,
    collapse_echoed_tasks,
    normalize_classification,
    resolve_count_subtype,
)
from pockettasks.classifier.schemas import Action, ClassificationResult
from pockettasks.errors import SchemaError
from pockettasks.tasks.schemas import CountSubtype


NON_ADD_ACTIONS = [
    "clear_all_tasks",
    "complete_all_tasks",
    "query_task_count",
    "no_action_conversational_reply",
]


class TestActionInvariant:
    """Only add_tasks may carry tasks."""

    @pytest.mark.parametrize("action", NON_ADD_ACTIONS)
    def test_non_add_action_forces_empty_task_list(self, action):
        raw = {"taskList": ["Delete all tasks", "Something else"], "action": action, "reasoning": "ok"}
        result = normalize_classification(raw, "whatever")

        assert result.action == Action(action)
        assert result.task_list == []

    def test_non_add_action_logs_warning(self, caplog):
        raw = {"taskList": ["Delete all tasks"], "action": "clear_all_tasks"}
        normalize_classification(raw, "delete all tasks")

        assert any("Overriding taskList to empty" in r.message for r in caplog.records)

    def test_result_model_rejects_tasks_for_non_add_action(self):
        with pytest.raises(ValueError):
            ClassificationResult(task_list=["x"], action=Action.CLEAR_ALL_TASKS)


class TestActionParsing:

    def test_missing_action_defaults_to_add_tasks(self):
        result = normalize_classification({"taskList": ["Buy milk"]}, "buy milk")
        assert result.action == Action.ADD_TASKS
        assert result.task_list == ["Buy milk"]

    def test_empty_action_defaults_to_add_tasks(self):
        result = normalize_classification({"taskList": ["Buy milk"], "action": ""}, "buy milk")
        assert result.action == Action.ADD_TASKS

    def test_action_is_case_insensitive(self):
        result = normalize_classification({"taskList": [], "action": "CLEAR_ALL_TASKS"}, "wipe")
        assert result.action == Action.CLEAR_ALL_TASKS

    def test_unknown_action_is_schema_error(self):
        with pytest.raises(SchemaError):
            normalize_classification({"taskList": [], "action": "launch_rockets"}, "go")

    def test_non_object_answer_is_schema_error(self):
        with pytest.raises(SchemaError):
            normalize_classification(["Buy milk"], "buy milk")

    def test_non_string_action_is_schema_error(self):
        with pytest.raises(SchemaError):
            normalize_classification({"taskList": [], "action": {"type": "add"}}, "x")


class TestTaskListCoercion:

    def test_string_task_list_becomes_empty(self):
        result = normalize_classification({"taskList": "Buy milk", "action": "add_tasks"}, "buy milk")
        assert result.task_list == []

    def test_missing_task_list_becomes_empty(self):
        result = normalize_classification({"action": "add_tasks"}, "hmm")
        assert result.task_list == []
        assert result.reasoning == NO_TASKS_REASONING

    def test_non_string_entries_are_dropped(self):
        result = normalize_classification({"taskList": ["Buy milk", 3, None, {"a": 1}]}, "buy milk")
        assert result.task_list == ["Buy milk"]

    def test_trims_drops_blanks_and_capitalizes(self):
        result = normalize_classification({"taskList": ["  buy milk ", "", "   ", "call mom"]}, "buy milk and call mom")
        assert result.task_list == ["Buy milk", "Call mom"]


class TestEchoCollapse:

    def test_identical_entries_collapse_to_one(self):
        result = normalize_classification(
            {"taskList": ["Buy milk", "buy milk ", "BUY MILK"], "action": "add_tasks"},
            "buy milk",
        )
        assert result.task_list == ["Buy milk"]

    def test_punctuation_variants_collapse_without_list_tokens(self):
        tasks = ["Buy milk.", "buy milk!", "Buy milk"]
        assert collapse_echoed_tasks(tasks, "buy milk") == ["Buy milk."]

    def test_punctuation_variants_kept_when_prompt_is_a_list(self):
        tasks = ["Buy milk.", "buy milk!"]
        assert collapse_echoed_tasks(tasks, "buy milk, buy milk again") == tasks

    def test_distinct_looking_tasks_are_not_collapsed(self):
        result = normalize_classification({"taskList": ["a", "b", "a"]}, "buy a buy b")

        assert result.action == Action.ADD_TASKS
        assert len(result.task_list) == 2
        assert "A" in result.task_list
        assert "B" in result.task_list

    def test_random_placeholder_tasks_are_kept(self):
        raw = {"taskList": ["Random Task 1", "Random Task 2", "Random Task 3"], "action": "add_tasks"}
        result = normalize_classification(raw, "give me 3 random tasks")
        assert result.task_list == ["Random Task 1", "Random Task 2", "Random Task 3"]

    def test_single_entry_is_untouched(self):
        assert collapse_echoed_tasks(["Buy milk"], "buy milk") == ["Buy milk"]


class TestCleaning:

    def test_capitalize_first_keeps_rest(self):
        assert capitalize_first("write iOS app") == "Write iOS app"
        assert capitalize_first("") == ""

    def test_dedupe_preserves_first_occurrence_order(self):
        assert clean_task_texts(["call mom", "Buy milk", "Call Mom", "walk dog"]) == [
            "Call mom",
            "Buy milk",
            "Walk dog",
        ]

    def test_inner_whitespace_is_collapsed(self):
        assert clean_task_texts(["buy   fresh\tmilk"]) == ["Buy fresh milk"]


class TestDefaultReasoning:

    @pytest.mark.parametrize("action", NON_ADD_ACTIONS)
    def test_each_non_add_action_has_canned_reasoning(self, action):
        result = normalize_classification({"taskList": [], "action": action}, "x")
        assert result.reasoning == DEFAULT_REASONING[Action(action)]

    def test_single_task_reasoning_names_the_task(self):
        result = normalize_classification({"taskList": ["buy milk"]}, "buy milk")
        assert result.reasoning == (
            "Okay, I've added 'Buy milk' to your list. You can get more details or a breakdown using the info button!"
        )

    def test_multiple_tasks_reasoning_counts_tasks(self):
        result = normalize_classification({"taskList": ["a", "b", "c"]}, "plan my week")
        assert result.reasoning == "Alright, I've drafted a plan with 3 task(s) for you!"

    def test_model_reasoning_is_kept_and_trimmed(self):
        result = normalize_classification({"taskList": ["Buy milk"], "reasoning": "  Added it!  "}, "buy milk")
        assert result.reasoning == "Added it!"

    def test_blank_model_reasoning_gets_default(self):
        result = normalize_classification({"taskList": [], "action": "clear_all_tasks", "reasoning": "  "}, "x")
        assert result.reasoning == DEFAULT_REASONING[Action.CLEAR_ALL_TASKS]


class TestCountSubtype:

    def test_reasoning_word_wins(self):
        assert resolve_count_subtype("You asked how many are remaining.", "how many tasks?") == CountSubtype.REMAINING

    def test_falls_back_to_prompt_cues(self):
        assert resolve_count_subtype(None, "how many tasks have I finished?") == CountSubtype.COMPLETED
        assert resolve_count_subtype(None, "how many tasks are left?") == CountSubtype.REMAINING

    def test_incomplete_counts_as_remaining(self):
        assert resolve_count_subtype("", "how many incomplete tasks") == CountSubtype.REMAINING

    def test_undone_counts_as_remaining(self):
        assert resolve_count_subtype(None, "how many tasks are undone") == CountSubtype.REMAINING

    def test_cues_match_whole_words_only(self):
        assert resolve_count_subtype(None, "how many tasks have I reopened") == CountSubtype.TOTAL
        assert resolve_count_subtype(None, "how many tasks are abandoned") == CountSubtype.TOTAL

    def test_several_reasoning_words_fall_back_to_prompt(self):
        reasoning = "I'll show the total, completed and remaining counts."
        assert resolve_count_subtype(reasoning, "how many tasks do I have") == CountSubtype.TOTAL

    def test_defaults_to_total(self):
        assert resolve_count_subtype(None, "how many tasks do I have") == CountSubtype.TOTAL

    def test_query_result_carries_subtype(self):
        raw = {"taskList": [], "action": "query_task_count", "reasoning": "You want your completed count."}
        result = normalize_classification(raw, "how many done")
        assert result.count_subtype == CountSubtype.COMPLETED

    def test_non_query_result_has_no_subtype(self):
        result = normalize_classification({"taskList": ["Buy milk"]}, "buy milk")
        assert result.count_subtype is None
