from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.core.database import get_db
from app.api.dependencies import get_seed_loader
from app.api.schemas.common import MessageResponse
from app.transactions import SeedLoader, TransactionsError


router = APIRouter()
logger = structlog.get_logger("seed_api")


@router.get("/initialize-database", response_model=MessageResponse)
async def initialize_database(
    loader: SeedLoader = Depends(get_seed_loader),
    db: AsyncSession = Depends(get_db)
):
    """Load the remote transaction dataset into the store"""

    try:
        inserted = await loader.initialize(db)
    except TransactionsError as e:
        logger.error("Error initializing database", error=str(e), cause=repr(e.__cause__))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to initialize database"
        )

    logger.info("Database initialized", inserted=inserted)
    return MessageResponse(message="Database initialized successfully")
