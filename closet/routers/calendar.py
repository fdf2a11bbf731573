import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from closet.core.exceptions import NotFoundError, ValidationError
from closet.database import get_db
from closet.models import CalendarEntry, Outfit, User
from closet.schemas import CalendarEntryUpdate, CalendarEvent
from closet.utils.auth import get_current_user
from closet.utils.outfits import load_items, outfit_color

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calendar", tags=["Calendar"])

UNKNOWN_OUTFIT_TITLE = "Unknown Outfit"
UNKNOWN_OUTFIT_COLOR = "#3174AD"


def _to_event(entry: CalendarEntry, outfit: Optional[Outfit], items_by_id) -> dict:
    if outfit is None:
        return {
            "id": entry.id,
            "date": entry.date,
            "outfit_id": entry.outfit_id,
            "title": UNKNOWN_OUTFIT_TITLE,
            "color": UNKNOWN_OUTFIT_COLOR,
            "favorite": False,
        }
    items = [items_by_id[i] for i in outfit.item_ids if i in items_by_id]
    return {
        "id": entry.id,
        "date": entry.date,
        "outfit_id": entry.outfit_id,
        "title": outfit.name,
        "color": outfit_color(outfit, items),
        "favorite": bool(outfit.favorite),
    }


@router.get("", response_model=List[CalendarEvent])
async def list_calendar_events(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    start: Optional[date] = Query(None, description="First day to include"),
    end: Optional[date] = Query(None, description="Last day to include"),
    favorites_only: bool = Query(False, description="Only days scheduled with a favorite outfit"),
):
    """
    Scheduled outfits of the caller, in date order, ready for a calendar view.
    """
    if start and end and start > end:
        raise ValidationError("start must not be after end", field="start")

    query = db.query(CalendarEntry).filter(CalendarEntry.user_id == current_user.id)
    if start:
        query = query.filter(CalendarEntry.date >= start)
    if end:
        query = query.filter(CalendarEntry.date <= end)
    entries = query.order_by(CalendarEntry.date.asc()).all()

    outfit_ids = {e.outfit_id for e in entries if e.outfit_id is not None}
    outfits = {
        o.id: o
        for o in db.query(Outfit).filter(Outfit.id.in_(outfit_ids), Outfit.user_id == current_user.id).all()
    } if outfit_ids else {}
    items_by_id = load_items(db, (i for o in outfits.values() for i in o.item_ids))

    events = [_to_event(entry, outfits.get(entry.outfit_id), items_by_id) for entry in entries]
    if favorites_only:
        events = [event for event in events if event["favorite"]]
    return events


@router.put("/{day}", response_model=CalendarEvent)
async def schedule_outfit(
    day: date,
    payload: CalendarEntryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Schedule an outfit on a day, replacing whatever was scheduled there.
    """
    outfit = db.query(Outfit).filter(Outfit.id == payload.outfit_id, Outfit.user_id == current_user.id).first()
    if not outfit:
        raise NotFoundError("Outfit", payload.outfit_id)

    entry = (
        db.query(CalendarEntry)
        .filter(CalendarEntry.user_id == current_user.id, CalendarEntry.date == day)
        .first()
    )
    if entry is None:
        entry = CalendarEntry(user_id=current_user.id, date=day, outfit_id=outfit.id)
        db.add(entry)
    else:
        entry.outfit_id = outfit.id
    db.commit()
    db.refresh(entry)
    logger.info(f"Scheduled outfit {outfit.id} on {day} for user {current_user.id}")

    return _to_event(entry, outfit, load_items(db, outfit.item_ids))


@router.delete("/entries/{entry_id}", status_code=204)
async def remove_calendar_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    entry = (
        db.query(CalendarEntry)
        .filter(CalendarEntry.id == entry_id, CalendarEntry.user_id == current_user.id)
        .first()
    )
    if not entry:
        raise NotFoundError("Calendar entry", entry_id)
    db.delete(entry)
    db.commit()
