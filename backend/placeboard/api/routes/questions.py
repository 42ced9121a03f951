"""Question Board — read-only listing, newest first."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from placeboard.api.dependencies import get_db
from placeboard.core.errors import DatabaseError, OperationFailedError
from placeboard.schemas.question import QuestionResponse
from placeboard.services.questions import list_questions as fetch_questions

router = APIRouter(prefix="/api/questions", tags=["questions"])


@router.get("", response_model=list[QuestionResponse])
async def list_questions(db: AsyncSession = Depends(get_db)):
    try:
        return await fetch_questions(db)
    except DatabaseError as e:
        raise OperationFailedError("Failed to load questions") from e
