"""Build the question catalog from a human-friendly text file.

File format (repeat blocks separated by blank lines or '---'):

    Q: Question text. Additional lines until the next marker are treated as
       part of the question.
    A: First option text
    B: Second option text
    ...                (any number of lettered options, at least two)
    CORRECT: A         (one letter, or several separated by commas)

Example:

    Q: What is 2 + 2?
    A: 3
    B: 4
    C: 22
    CORRECT: B

Questions are numbered "1", "2", ... in file order and option ids are their
letters. The catalog is deployment-time data: run this module once to write
the questions collection before starting the service.
"""

from __future__ import annotations

import argparse
from pathlib import Path
import string

from simple_quiz.constants.storage_constants import DEFAULT_QUESTIONS_PATH
from simple_quiz.core.models import Option, Question
from simple_quiz.core.services.record_store import QuestionRepository
from simple_quiz.utils.logging_config import configure_logging

_OPTION_LETTERS = string.ascii_uppercase


class QuizImportError(Exception):
    """Raised when a quiz definition cannot be parsed."""


def load_catalog_from_file(file_path: Path) -> dict[str, Question]:
    text = file_path.read_text(encoding="utf-8")
    catalog = parse_catalog_text(text)
    if not catalog:
        raise QuizImportError("Quiz file did not contain any questions.")
    return catalog


def parse_catalog_text(text: str) -> dict[str, Question]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())

    catalog: dict[str, Question] = {}
    for block in blocks:
        if block:
            catalog[str(len(catalog) + 1)] = _parse_block(block)
    return catalog


def _parse_block(block: str) -> Question:
    question_lines: list[str] = []
    options: dict[str, str] = {}
    correct_letters: set[str] = set()
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("CORRECT:"):
            raw_value = line.split(":", 1)[1]
            correct_letters = {letter.strip().upper() for letter in raw_value.split(",") if letter.strip()}
            if not correct_letters:
                raise QuizImportError("CORRECT must name at least one option letter.")
            current_section = None
            continue

        if len(line) > 2 and line[0].upper() in _OPTION_LETTERS and line[1] == ":":
            letter = line[0].upper()
            if letter in options:
                raise QuizImportError(f"Option {letter} is defined twice.")
            options[letter] = line[2:].strip()
            current_section = letter
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section in options:
            options[current_section] = options[current_section] + f"\n{line}"
        else:
            raise QuizImportError(f"Encountered text outside of a known section: '{line}'.")

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        raise QuizImportError("Question text missing (Q: ...)")
    if len(options) < 2:
        raise QuizImportError("Each question must define at least two options.")
    if any(not text.strip() for text in options.values()):
        raise QuizImportError("Option text cannot be empty.")

    unknown = correct_letters - options.keys()
    if unknown:
        raise QuizImportError(f"CORRECT refers to undefined option(s): {', '.join(sorted(unknown))}.")

    return Question(
        label=question_text,
        options=[
            Option(id=letter, label=options[letter].strip(), is_correct=letter in correct_letters)
            for letter in sorted(options)
        ],
    )


def main(argv: list[str] | None = None) -> None:
    """Parse a quiz text file and write it as the questions collection."""
    parser = argparse.ArgumentParser(description="Seed the quiz question catalog from a text file.")
    parser.add_argument("quiz_file", type=Path, help="Path to the quiz text file")
    parser.add_argument(
        "--questions-path",
        type=Path,
        default=Path(DEFAULT_QUESTIONS_PATH),
        help=f"Destination JSON file (default: {DEFAULT_QUESTIONS_PATH})",
    )
    args = parser.parse_args(argv)

    logger = configure_logging()
    catalog = load_catalog_from_file(args.quiz_file)
    QuestionRepository(args.questions_path, logger=logger).seed_questions(catalog)
    logger.info("Wrote %d questions to %s", len(catalog), args.questions_path)


if __name__ == "__main__":
    main()
