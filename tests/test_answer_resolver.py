from pipeline.answer_resolver import (
    METHOD_ARRAY,
    METHOD_EXPLANATION,
    METHOD_FLAGS,
    METHOD_SINGLE,
    resolve_correct_answers,
)
from pipeline.models import RawOption, RawQuestion


def _question(flags=(False, False, False, False), **kwargs):
    options = [RawOption(text=f"opt {i}", is_correct=flag) for i, flag in enumerate(flags)]
    return RawQuestion(text="Which one?", options=options, **kwargs)


def test_single_index_short_circuits_flags():
    result = resolve_correct_answers(
        _question(flags=(False, False, True, False), correct_answer=0)
    )
    assert result.indices == (0,)
    assert result.method == METHOD_SINGLE
    assert not result.is_multiple_choice
    # the conflicting flag is reported, not merged
    assert any("disagrees" in w for w in result.warnings)


def test_single_index_zero_is_an_answer():
    result = resolve_correct_answers(_question(correct_answer=0, correct_answers=[2, 3]))
    assert result.indices == (0,)


def test_index_array_deduplicated_in_order():
    result = resolve_correct_answers(_question(correct_answers=[3, 1, 3]))
    assert result.indices == (3, 1)
    assert result.method == METHOD_ARRAY
    assert result.is_multiple_choice


def test_option_flags():
    result = resolve_correct_answers(_question(flags=(False, True, True, False)))
    assert result.indices == (1, 2)
    assert result.method == METHOD_FLAGS
    assert result.warnings == []


def test_explanation_letters():
    result = resolve_correct_answers(
        _question(explanation="Correct: B. Option F. is not listed. Also D.")
    )
    assert result.indices == (1, 3)
    assert result.method == METHOD_EXPLANATION


def test_explanation_ignores_letters_inside_words():
    result = resolve_correct_answers(_question(explanation="Use AWS. Then pick C."))
    assert result.indices == (2,)


def test_out_of_range_single_index_falls_through():
    result = resolve_correct_answers(
        _question(flags=(False, True, False, False), correct_answer=9)
    )
    assert result.indices == (1,)
    assert result.method == METHOD_FLAGS
    assert any("9" in w for w in result.warnings)


def test_boolean_is_not_an_index():
    result = resolve_correct_answers(_question(correct_answer=True))
    assert result.indices == ()


def test_nothing_found():
    result = resolve_correct_answers(_question(explanation="No letters here"))
    assert result.indices == ()
    assert result.method == ""
    assert not result.has_answer
    assert "No correct answer found" in result.warnings


def test_null_single_index_uses_array():
    result = resolve_correct_answers(_question(correct_answer=None, correct_answers=[2]))
    assert result.indices == (2,)
    assert result.method == METHOD_ARRAY
