"""Question Service — read-only listing of question-board entries."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from placeboard.infrastructure.database import store_errors
from placeboard.models.question import Question
from placeboard.schemas.question import QuestionResponse


async def list_questions(db: AsyncSession) -> list[QuestionResponse]:
    """All questions newest-first by id."""
    async with store_errors(db, "list questions"):
        result = await db.execute(select(Question).order_by(Question.id.desc()))
        questions = result.scalars().all()
    return [QuestionResponse.model_validate(q) for q in questions]
