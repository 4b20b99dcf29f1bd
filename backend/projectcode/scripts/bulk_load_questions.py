import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import TypeAdapter, ValidationError
from sqlmodel import Session

from projectcode import crud
from projectcode.core.db import engine, init_db
from projectcode.models import InterviewQuestionCreate

logger = logging.getLogger(__name__)

_questions_adapter = TypeAdapter(list[InterviewQuestionCreate])


def load_questions(path: Path) -> list[InterviewQuestionCreate]:
    """Read and validate a JSON array of interview questions."""
    return _questions_adapter.validate_python(json.loads(path.read_text(encoding="utf-8")))


def bulk_load(session: Session, path: Path) -> int:
    questions = load_questions(path)
    count = crud.bulk_create_questions(session=session, questions=questions)
    logger.info("Uploaded %s questions from %s", count, path)
    return count


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Load interview questions from a JSON file.")
    parser.add_argument(
        "file",
        nargs="?",
        default="sample-questions.json",
        help="JSON array of questions (default: sample-questions.json)",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    try:
        with Session(engine) as session:
            init_db(session)
            bulk_load(session, Path(args.file))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error("Error during bulk load: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
