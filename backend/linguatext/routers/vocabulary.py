"""Vocabulary endpoints: the learner's word list and spaced-repetition reviews."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from linguatext.auth.dependencies import get_current_user
from linguatext.database import get_session
from linguatext.models.user import User
from linguatext.models.vocabulary import (
    Vocabulary,
    VocabularyCreate,
    VocabularyUpdate,
    VocabularyRead,
    ReviewRequest,
    ReviewResponse,
)
from linguatext.services.scheduler import record_review, utc_now

router = APIRouter()
logger = logging.getLogger(__name__)


async def get_owned_item(
    session: AsyncSession,
    item_id: int,
    user_id: int,
    *,
    for_update: bool = False,
) -> Vocabulary:
    """Load a vocabulary item belonging to the user or raise 404."""
    stmt = select(Vocabulary).where(Vocabulary.id == item_id, Vocabulary.user_id == user_id)
    if for_update:
        stmt = stmt.with_for_update()
    result = await session.execute(stmt)
    item = result.scalar_one_or_none()
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return item


@router.get("/vocabulary", response_model=list[VocabularyRead])
async def list_vocabulary(
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_session)],
):
    """List the user's vocabulary, newest first."""
    result = await session.execute(
        select(Vocabulary)
        .where(Vocabulary.user_id == current_user.id)
        .order_by(Vocabulary.created_at.desc(), Vocabulary.id.desc())
    )
    return result.scalars().all()


@router.get("/vocabulary/due", response_model=list[VocabularyRead])
async def list_due_vocabulary(
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_session)],
    limit: int = Query(default=20, ge=1, le=200),
):
    """Items waiting for review: never reviewed, or past their next review date."""
    now = utc_now()
    result = await session.execute(
        select(Vocabulary)
        .where(
            Vocabulary.user_id == current_user.id,
            or_(Vocabulary.next_review_at.is_(None), Vocabulary.next_review_at <= now),
        )
        # Never-reviewed items last, oldest due first
        .order_by(Vocabulary.next_review_at.is_(None), Vocabulary.next_review_at, Vocabulary.id)
        .limit(limit)
    )
    return result.scalars().all()


@router.post("/vocabulary", response_model=VocabularyRead, status_code=status.HTTP_201_CREATED)
async def create_vocabulary(
    item: VocabularyCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_session)],
):
    """Add a word with its translation; review state starts at the defaults."""
    entry = Vocabulary(user_id=current_user.id, **item.model_dump())
    session.add(entry)
    await session.commit()
    await session.refresh(entry)
    return entry


@router.patch("/vocabulary/{item_id}", response_model=VocabularyRead)
async def update_vocabulary(
    item_id: int,
    update: VocabularyUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_session)],
):
    """Edit word, translation, note or language. Review state is not editable."""
    updates = update.model_dump(exclude_unset=True)
    if not updates:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

    entry = await get_owned_item(session, item_id, current_user.id)
    for key, value in updates.items():
        setattr(entry, key, value)
    entry.updated_at = utc_now()

    session.add(entry)
    await session.commit()
    await session.refresh(entry)
    return entry


@router.delete("/vocabulary/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vocabulary(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_session)],
):
    entry = await get_owned_item(session, item_id, current_user.id)
    await session.delete(entry)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/review/{item_id}", response_model=ReviewResponse)
async def review_vocabulary(
    item_id: int,
    review: ReviewRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_session)],
):
    """
    Record a recall grade (0-5) for a vocabulary item and schedule its next review.

    The row is locked for the read-modify-write so concurrent reviews of
    the same item cannot lose an update.
    """
    entry = await get_owned_item(session, item_id, current_user.id, for_update=True)

    state = record_review(entry.review_state(), review.quality)
    entry.apply_review_state(state)
    session.add(entry)
    await session.commit()

    logger.debug(
        "Item %s reviewed with quality %s: interval %s days, repetition %s",
        item_id, review.quality, state.interval_days, state.repetition,
    )
    return ReviewResponse(
        ease_factor=state.ease_factor,
        interval_days=state.interval_days,
        repetition=state.repetition,
        next_review_at=state.next_review_at,
    )
