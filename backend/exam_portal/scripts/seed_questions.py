"""
Exam Portal - Question Bank Seeder
Seeds the question bank with sample multiple-choice questions.

Run standalone with:
    python -m exam_portal.scripts.seed_questions
"""
import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from exam_portal.core.config import settings
from exam_portal.core.database import Database
from exam_portal.core.logging_config import configure_logging
from exam_portal.models import Question
from exam_portal.schemas.question import QuestionCreate

logger = logging.getLogger(__name__)


# Sample question bank
QUESTION_BANK = [
    {
        "question": "What is the capital of France?",
        "options": ["London", "Berlin", "Paris", "Madrid"],
        "correct_answer": 2,
        "difficulty": "easy",
        "subject": "Geography",
    },
    {
        "question": "Which planet is known as the Red Planet?",
        "options": ["Venus", "Mars", "Jupiter", "Saturn"],
        "correct_answer": 1,
        "difficulty": "easy",
        "subject": "Science",
    },
    {
        "question": "What is 2 + 2?",
        "options": ["3", "4", "5", "6"],
        "correct_answer": 1,
        "difficulty": "easy",
        "subject": "Mathematics",
    },
    {
        "question": "Who wrote 'Romeo and Juliet'?",
        "options": ["Charles Dickens", "William Shakespeare", "Jane Austen", "Mark Twain"],
        "correct_answer": 1,
        "difficulty": "medium",
        "subject": "Literature",
    },
    {
        "question": "What is the largest ocean on Earth?",
        "options": ["Atlantic Ocean", "Indian Ocean", "Arctic Ocean", "Pacific Ocean"],
        "correct_answer": 3,
        "difficulty": "easy",
        "subject": "Geography",
    },
    {
        "question": "Which programming language is known for its use in web development?",
        "options": ["Python", "JavaScript", "C++", "Java"],
        "correct_answer": 1,
        "difficulty": "medium",
        "subject": "Computer Science",
    },
    {
        "question": "What is the chemical symbol for gold?",
        "options": ["Go", "Gd", "Au", "Ag"],
        "correct_answer": 2,
        "difficulty": "medium",
        "subject": "Chemistry",
    },
    {
        "question": "In which year did World War II end?",
        "options": ["1944", "1945", "1946", "1947"],
        "correct_answer": 1,
        "difficulty": "medium",
        "subject": "History",
    },
    {
        "question": "What is the square root of 64?",
        "options": ["6", "7", "8", "9"],
        "correct_answer": 2,
        "difficulty": "easy",
        "subject": "Mathematics",
    },
    {
        "question": "Which organ in the human body produces insulin?",
        "options": ["Liver", "Kidney", "Pancreas", "Heart"],
        "correct_answer": 2,
        "difficulty": "medium",
        "subject": "Biology",
    },
    {
        "question": "What is the smallest unit of matter?",
        "options": ["Molecule", "Atom", "Electron", "Proton"],
        "correct_answer": 1,
        "difficulty": "medium",
        "subject": "Physics",
    },
    {
        "question": "Which continent is the Sahara Desert located on?",
        "options": ["Asia", "Australia", "Africa", "South America"],
        "correct_answer": 2,
        "difficulty": "easy",
        "subject": "Geography",
    },
    {
        "question": "What does 'HTML' stand for?",
        "options": [
            "High Tech Modern Language",
            "HyperText Markup Language",
            "Home Tool Markup Language",
            "Hyperlink and Text Markup Language",
        ],
        "correct_answer": 1,
        "difficulty": "medium",
        "subject": "Computer Science",
    },
    {
        "question": "Who painted the Mona Lisa?",
        "options": ["Vincent van Gogh", "Pablo Picasso", "Leonardo da Vinci", "Michelangelo"],
        "correct_answer": 2,
        "difficulty": "medium",
        "subject": "Art",
    },
    {
        "question": "What is the currency of Japan?",
        "options": ["Yuan", "Won", "Yen", "Rupiah"],
        "correct_answer": 2,
        "difficulty": "easy",
        "subject": "Economics",
    },
]


async def add_questions(session: AsyncSession, items: list[dict]) -> list[Question]:
    """Validate and insert questions. Raises pydantic.ValidationError on a bad item."""
    questions = [
        Question(**QuestionCreate.model_validate(item).model_dump(mode="json"))
        for item in items
    ]
    session.add_all(questions)
    await session.flush()
    return questions


async def seed_questions(session: AsyncSession) -> int:
    """
    Insert the sample bank if the questions table is empty.

    Returns:
        Number of questions inserted
    """
    count = await session.scalar(select(func.count(Question.id)))
    if count:
        logger.info("Question bank already seeded (%d questions found)", count)
        return 0

    questions = await add_questions(session, QUESTION_BANK)
    return len(questions)


async def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    database = Database(settings.DATABASE_URL, echo=settings.DB_ECHO)
    try:
        await database.create_all()
        async with database.session() as session:
            inserted = await seed_questions(session)
        logger.info("Question seeding complete: %d inserted", inserted)
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(main())
