"""
Tests for the text-file catalog importer
"""

import json

import pytest

from simple_quiz.core.quiz_importer import QuizImportError, load_catalog_from_file, main, parse_catalog_text


QUIZ_TEXT = """\
Q: What is 2 + 2?
A: 3
B: 4
C: 22
CORRECT: B

---

Q: Which are even?
   Pick every one that applies.
A: 2
B: 3
C: 4
CORRECT: A, C
"""


class TestParseCatalog:
    """Test parsing of quiz blocks."""

    def test_questions_are_numbered_in_file_order(self):
        catalog = parse_catalog_text(QUIZ_TEXT)

        assert list(catalog) == ["1", "2"]
        assert catalog["1"].label == "What is 2 + 2?"
        assert [option.id for option in catalog["1"].options] == ["A", "B", "C"]
        assert [option.is_correct for option in catalog["1"].options] == [False, True, False]

    def test_multiline_question_and_multiple_correct(self):
        question = parse_catalog_text(QUIZ_TEXT)["2"]

        assert question.label == "Which are even?\nPick every one that applies."
        assert [option.id for option in question.options if option.is_correct] == ["A", "C"]

    def test_question_without_correct_answer(self):
        question = parse_catalog_text("Q: Opinion?\nA: yes\nB: no\n")["1"]
        assert not any(option.is_correct for option in question.options)

    @pytest.mark.parametrize(
        "text",
        [
            "A: 1\nB: 2\n",
            "Q: Only one?\nA: 1\n",
            "Q: Unknown correct\nA: 1\nB: 2\nCORRECT: D\n",
            "Q: Duplicate\nA: 1\nA: 2\n",
            "CORRECT: A\nstray text\n",
        ],
    )
    def test_invalid_blocks(self, text):
        with pytest.raises(QuizImportError):
            parse_catalog_text(text)

    def test_empty_file_is_rejected(self, tmp_path):
        path = tmp_path / "quiz.txt"
        path.write_text("\n\n", encoding="utf-8")
        with pytest.raises(QuizImportError):
            load_catalog_from_file(path)


class TestImporterCommand:
    """Test seeding the questions collection from the command line."""

    def test_main_writes_questions_json(self, tmp_path):
        quiz_path = tmp_path / "quiz.txt"
        quiz_path.write_text(QUIZ_TEXT, encoding="utf-8")
        target = tmp_path / "db" / "questions.json"

        main([str(quiz_path), "--questions-path", str(target)])

        stored = json.loads(target.read_text(encoding="utf-8"))
        assert stored["1"]["options"][1] == {"id": "B", "label": "4", "is_correct": True}
