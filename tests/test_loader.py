import pytest

from pipeline.loader import (
    QuestionFileError,
    find_files,
    load_question_file,
    normalize_question,
)
from pipeline.validator import validate_question


QUESTION = {
    "id": 1,
    "question": "What is EC2?",
    "options": [{"text": "Compute"}, {"text": "Storage"}],
    "correctAnswer": 0,
}


def test_load_wrapped_shape(write_json):
    path = write_json("wrapped.json", {"questions": [QUESTION, QUESTION]})
    questions = load_question_file(path)
    assert len(questions) == 2
    assert questions[0].text == "What is EC2?"
    assert questions[0].correct_answer == 0


def test_load_bare_array_shape(write_json):
    path = write_json("bare.json", [QUESTION])
    assert [q.source_id for q in load_question_file(path)] == [1]


def test_unknown_shape(write_json):
    path = write_json("odd.json", {"items": []})
    with pytest.raises(QuestionFileError):
        load_question_file(path)


def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(QuestionFileError):
        load_question_file(path)


def test_missing_file(tmp_path):
    with pytest.raises(QuestionFileError):
        load_question_file(tmp_path / "nope.json")


def test_normalize_text_fallback_and_option_fields():
    q = normalize_question({
        "question": "",
        "text": "Fallback text",
        "explanation": "See B.",
        "options": [
            {"label": "A", "text": "one", "isCorrect": True},
            {"text": "two", "correct": True},
            {"label": "", "text": "three"},
        ],
        "correctAnswers": [0, 1],
    })
    assert q.text == "Fallback text"
    assert q.explanation == "See B."
    assert [o.label for o in q.options] == ["A", None, None]
    assert [o.is_correct for o in q.options] == [True, True, False]
    assert q.correct_answers == [0, 1]
    assert q.malformed_options == []


def test_normalize_malformed_options():
    q = normalize_question({"question": "Q", "options": [{"text": "ok"}, {"label": "B"}, "raw"]})
    assert len(q.options) == 1
    assert q.malformed_options == [1, 2]


def test_normalize_non_object_element():
    q = normalize_question("just a string")
    assert q.text == ""
    assert not validate_question(q).is_valid


def test_validation_rules():
    assert validate_question(normalize_question(QUESTION)).is_valid

    blank = normalize_question({**QUESTION, "question": "   "})
    assert not validate_question(blank).is_valid

    single = normalize_question({**QUESTION, "options": [{"text": "only"}]})
    result = validate_question(single)
    assert not result.is_valid
    assert result.details == {"options": 1}

    malformed = normalize_question({**QUESTION, "options": [{"text": "a"}, {"text": "b"}, {}]})
    assert validate_question(malformed).details == {"malformed": [2]}


def test_find_files_literal_path_returned_as_is(tmp_path):
    target = tmp_path / "missing.json"
    assert find_files(str(target)) == [target]


def test_find_files_wildcard(tmp_path):
    for name in ("aws-2.json", "aws-1.json", "gcp.json", "aws-notes.txt"):
        (tmp_path / name).write_text("[]", encoding="utf-8")

    assert [p.name for p in find_files(str(tmp_path / "aws*"))] == ["aws-1.json", "aws-2.json"]
    assert [p.name for p in find_files(str(tmp_path / "*.json"))] == [
        "aws-1.json",
        "aws-2.json",
        "gcp.json",
    ]


def test_find_files_missing_directory(tmp_path):
    assert find_files(str(tmp_path / "nowhere" / "*.json")) == []


def test_deeply_nested_json_is_a_file_error(tmp_path):
    path = tmp_path / "deep.json"
    path.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
    with pytest.raises(QuestionFileError):
        load_question_file(path)
