"""FastAPI dependency injection: transaction store, OCR engine, QuarionFacade."""
from __future__ import annotations

import logging
import secrets
from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from quarion.application.slip.commands import Recognizer
from quarion.config import Settings, get_settings
from quarion.domain.finance.repositories import ITransactionRepository
from quarion.interfaces.facade import QuarionFacade

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


# ── Repositories (lazy imports to avoid circular) ────────────────────────────

@lru_cache
def get_memory_repo():
    from quarion.infrastructure.database.repositories.memory import InMemoryTransactionRepository

    logger.warning("DATABASE_URL not set: transactions are kept in memory only")
    return InMemoryTransactionRepository()


async def get_transaction_repo(
    settings: Annotated[Settings, Depends(get_settings)],
) -> AsyncGenerator[ITransactionRepository, None]:
    if not settings.uses_database:
        yield get_memory_repo()
        return

    from quarion.infrastructure.database.connection import get_db_session
    from quarion.infrastructure.database.repositories.finance import TransactionRepository

    async with get_db_session() as session:
        yield TransactionRepository(session)


@lru_cache
def get_recognizer() -> Recognizer:
    from quarion.infrastructure.ocr.processor import EasyOcrRecognizer

    settings = get_settings()
    return EasyOcrRecognizer(settings.ocr_languages, gpu=settings.ocr_gpu)


async def get_facade(
    repo: Annotated[ITransactionRepository, Depends(get_transaction_repo)],
    recognizer: Annotated[Recognizer, Depends(get_recognizer)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> QuarionFacade:
    return QuarionFacade(
        transaction_repo=repo,
        recognizer=recognizer,
        storage_path=settings.storage_path,
        max_upload_bytes=settings.max_upload_bytes,
    )


# ── Quick slip token ─────────────────────────────────────────────────────────

def require_quick_slip_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> None:
    if not settings.quick_slip_token:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Quick slip is not configured",
        )
    if credentials is None or not secrets.compare_digest(
        credentials.credentials.encode(), settings.quick_slip_token.encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid quick slip token",
            headers={"WWW-Authenticate": "Bearer"},
        )


# Type aliases for cleaner signatures
Facade = Annotated[QuarionFacade, Depends(get_facade)]
QuickSlipAuth = Depends(require_quick_slip_token)
