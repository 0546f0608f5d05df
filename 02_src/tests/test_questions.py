"""Tests for question file loading."""

import json

import pytest

from babybot.questions import QuestionFile, QuestionFileError, load_questions


def _write(tmp_path, content) -> str:
    path = tmp_path / "questions.json"
    path.write_text(content if isinstance(content, str) else json.dumps(content), encoding="utf-8")
    return str(path)


class TestLoadQuestions:
    def test_valid_file(self, tmp_path):
        path = _write(
            tmp_path,
            {"flowId": "userDetails", "questions": [{"text": "Name?"}, {"text": "Born?"}]},
        )

        questions = load_questions(path)

        assert isinstance(questions, QuestionFile)
        assert questions.flow_id == "userDetails"
        assert questions.text(0) == "Name?"
        assert questions.text(1) == "Born?"

    def test_missing_file(self, tmp_path):
        with pytest.raises(QuestionFileError, match="Cannot read"):
            load_questions(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        with pytest.raises(QuestionFileError, match="not valid JSON"):
            load_questions(_write(tmp_path, "{not json"))

    @pytest.mark.parametrize(
        "data",
        [
            {"questions": [{"text": "Name?"}]},
            {"flowId": "", "questions": [{"text": "Name?"}]},
            {"flowId": "f"},
            {"flowId": "f", "questions": []},
            {"flowId": "f", "questions": [{}]},
            {"flowId": "f", "questions": [{"text": "   "}]},
            {"flowId": "   ", "questions": [{"text": "Who?"}]},
            ["not", "an", "object"],
        ],
    )
    def test_schema_violations(self, tmp_path, data):
        with pytest.raises(QuestionFileError, match="invalid"):
            load_questions(_write(tmp_path, data))

    def test_error_is_value_error(self):
        assert issubclass(QuestionFileError, ValueError)
