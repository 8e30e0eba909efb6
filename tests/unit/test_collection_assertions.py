"""Tests for fluentassert.assertions.collection."""

import random

import pytest

from fluentassert import AndConstraint, AssertionFailedError, GenericCollectionAssertions, predicate, should


def _failure_message(exc_info: pytest.ExceptionInfo[AssertionFailedError]) -> str:
    return str(exc_info.value)


class TestContain:
    def test_returns_continuation_when_item_present(self):
        assertions = should([1, 2, 3])

        result = assertions.contain(2)

        assert isinstance(result, AndConstraint)
        assert result.and_ is assertions

    def test_reports_missing_item(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            should([1, 2, 3]).contain(5)

        assert _failure_message(exc_info) == "Expected collection [1, 2, 3] to contain 5."

    def test_reports_absent_subject(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            should(None).contain(5)

        assert _failure_message(exc_info) == "Expected collection to contain 5, but found <null>."

    def test_reason_is_formatted_and_prefixed(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            should([1, 2, 3]).contain(5, "the fixture seeds {0}", "five")

        assert _failure_message(exc_info) == (
            "Expected collection [1, 2, 3] to contain 5 because the fixture seeds five."
        )

    def test_reason_already_starting_with_because_is_kept(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            should(None).contain("x", "because we need it")

        assert _failure_message(exc_info) == "Expected collection to contain 'x' because we need it, but found <null>."

    def test_passing_check_never_formats_the_reason(self):
        should([1, 2]).contain(1, "because {0} and {1}", "only-one-arg")
        should([{"a": 1}]).contain({"a": 1}, "because the payload is {a: 1} for {0}", "fixture")

    def test_reason_with_mismatched_placeholders_is_used_verbatim(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            should([1]).contain(2, "because {0} and {1}", "only-one-arg")

        assert _failure_message(exc_info) == "Expected collection [1] to contain 2 because {0} and {1}."

    def test_lambda_argument_checks_for_a_match(self):
        should([1, 2]).contain(lambda x: x > 1)

        with pytest.raises(AssertionFailedError) as exc_info:
            should([]).contain(lambda x: x > 0)

        assert _failure_message(exc_info) == "Collection [] should have an item matching x > 0."

    def test_lambda_is_a_value_when_the_collection_holds_callables(self, caplog):
        def handler():
            return 1

        fallback = lambda: 2  # noqa: E731

        should([handler, fallback]).contain(fallback)

        assert "matched as a value" in caplog.text

    def test_uses_value_equality(self):
        should([[1, 2], [3]]).contain([1, 2])
        should(["a", "b"]).contain("b")

    def test_failure_is_an_assertion_error(self):
        with pytest.raises(AssertionError):
            should([]).contain(1)

    def test_predicate_argument_checks_for_a_match(self):
        is_even = predicate(lambda x: x % 2 == 0)

        should([1, 2]).contain(is_even)

        with pytest.raises(AssertionFailedError) as exc_info:
            should([1, 3]).contain(is_even)

        assert _failure_message(exc_info) == "Collection [1, 3] should have an item matching x % 2 == 0."

    def test_does_not_mutate_subject(self):
        subject = [3, 1, 2]

        should(subject).contain(1).and_.only_contain(lambda x: x > 0).and_.not_contain_match(lambda x: x > 5)

        assert subject == [3, 1, 2]

    def test_generator_subject_is_scanned_consistently(self):
        assertions = should(x for x in range(4))

        assertions.contain(3).and_.contain(0).and_.only_contain(lambda x: x < 4)
        assert assertions.subject == (0, 1, 2, 3)

    def test_rejects_non_iterable_subject(self):
        with pytest.raises(TypeError, match="Expected an iterable subject"):
            GenericCollectionAssertions(42)


class TestContainItems:
    def test_passes_when_all_combined_items_present(self):
        result = should([1, 2, 3, 4]).contain_items([1, 2], 3, 4)

        assert isinstance(result, AndConstraint)

    def test_reports_missing_combined_items(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            should([1, 2]).contain_items([1], 5, 6)

        assert _failure_message(exc_info) == (
            "Expected collection [1, 2] to contain [1, 5, 6], but could not find [5, 6]."
        )

    def test_reports_absent_subject(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            should(None).contain_items([1], 2)

        assert _failure_message(exc_info) == "Expected collection to contain [1, 2], but found <null>."

    def test_contain_all_accepts_a_reason(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            should(["a"]).contain_all(["a", "b"], "both are required")

        assert _failure_message(exc_info) == (
            "Expected collection [\'a\'] to contain [\'a\', \'b\'] because both are required, but could not find [\'b\']."
        )


class TestContainMatch:
    def test_passes_when_an_item_matches(self):
        should([1, 2, 3]).contain_match(lambda x: x > 2)

    def test_empty_subject_fails(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            should([]).contain_match(lambda x: x > 0)

        assert _failure_message(exc_info) == "Collection [] should have an item matching x > 0."

    def test_reports_absent_subject_with_predicate_text(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            should(None).contain_match(lambda item: item.startswith("a"))

        assert _failure_message(exc_info) == (
            "Expected collection to contain item.startswith('a'), but found <null>."
        )

    def test_short_circuits_on_first_match(self):
        seen = []

        def is_two(x):
            seen.append(x)
            return x == 2

        should([1, 2, 3, 4]).contain_match(is_two)

        assert seen == [1, 2]

    def test_named_function_renders_by_name(self):
        @predicate
        def is_negative(x):
            return x < 0

        with pytest.raises(AssertionFailedError) as exc_info:
            should([1, 2]).contain_match(is_negative, "because {0} must be rejected", "debits")

        assert _failure_message(exc_info) == (
            "Collection [1, 2] should have an item matching is_negative because debits must be rejected."
        )


class TestOnlyContain:
    def test_passes_when_every_item_matches(self):
        should([2, 4, 6]).only_contain(lambda x: x % 2 == 0)

    def test_reports_exact_mismatching_items(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            should([2, 3, 6]).only_contain(lambda x: x % 2 == 0)

        assert _failure_message(exc_info) == (
            "Expected collection to contain only items matching x % 2 == 0, but [3] do(es) not match."
        )

    def test_scans_every_item(self):
        seen = []

        def is_small(x):
            seen.append(x)
            return x < 2

        with pytest.raises(AssertionFailedError) as exc_info:
            should([1, 5, 0, 7]).only_contain(is_small)

        assert seen == [1, 5, 0, 7]
        assert "[5, 7] do(es) not match" in _failure_message(exc_info)

    def test_empty_subject_passes(self):
        should([]).only_contain(lambda x: False)

    def test_reports_absent_subject(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            should(None).only_contain(lambda x: x > 0)

        assert _failure_message(exc_info) == (
            "Expected collection to contain only items matching x > 0, but found <null>."
        )


class TestNotContainMatch:
    def test_passes_when_nothing_matches(self):
        should([1, 2, 3]).not_contain_match(lambda x: x == 5)

    def test_reports_matching_item(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            should([1, 2, 3]).not_contain_match(lambda x: x == 2, "duplicates were removed")

        assert _failure_message(exc_info) == (
            "Collection [1, 2, 3] should not have any items matching x == 2 because duplicates were removed."
        )

    def test_reports_absent_subject(self):
        with pytest.raises(AssertionFailedError) as exc_info:
            should(None).not_contain_match(lambda x: x == 2)

        assert _failure_message(exc_info) == "Expected collection not to contain x == 2, but found <null>."

    def test_reports_the_failing_closure_in_a_chain(self):
        threshold = 3

        with pytest.raises(AssertionFailedError) as exc_info:
            should([5, 1]).contain_match(lambda x: x > threshold).and_.not_contain_match(lambda x: x < threshold)

        assert _failure_message(exc_info) == "Collection [5, 1] should not have any items matching x < threshold."


def _passes(check) -> bool:
    try:
        check()
    except AssertionFailedError:
        return False
    return True


def test_membership_and_predicate_properties_on_random_data():
    rng = random.Random(20240617)

    for _ in range(200):
        subject = [rng.randint(-5, 5) for _ in range(rng.randint(0, 8))]
        value = rng.randint(-5, 5)
        threshold = rng.randint(-6, 6)
        above = predicate(lambda x, t=threshold: x > t, f"x > {threshold}")

        assert _passes(lambda: should(subject).contain(value)) == (value in subject)
        assert _passes(lambda: should(subject).contain_match(above)) == any(x > threshold for x in subject)
        assert _passes(lambda: should(subject).only_contain(above)) == all(x > threshold for x in subject)

        # not_contain_match is the complement of contain_match
        assert _passes(lambda: should(subject).not_contain_match(above)) != _passes(
            lambda: should(subject).contain_match(above)
        )


def test_only_contain_reports_exactly_the_failing_items_on_random_data():
    rng = random.Random(7)

    for _ in range(50):
        subject = [rng.randint(0, 20) for _ in range(rng.randint(1, 10))]
        expected_mismatches = [x for x in subject if x % 3 != 0]

        try:
            should(subject).only_contain(predicate(lambda x: x % 3 == 0, "multiple of three"))
        except AssertionFailedError as exc:
            assert expected_mismatches
            assert str(exc).endswith(f"but {expected_mismatches} do(es) not match.")
        else:
            assert not expected_mismatches
