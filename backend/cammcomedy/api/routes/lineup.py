"""
Lineup entry endpoints: payment tracking and removal.
"""

from fastapi import APIRouter, Depends, Response, status

from cammcomedy.schemas.lineup import LineupEntryResponse, PaymentUpdate
from cammcomedy.services.interfaces.store import BookingStore
from cammcomedy.services.lineup_service import remove_lineup_entry, update_payment
from cammcomedy.services.store_factory import get_store

router = APIRouter(prefix="/lineup", tags=["Lineup"])


@router.patch("/{lineup_id}", response_model=LineupEntryResponse)
async def update_payment_endpoint(
    lineup_id: int,
    payment: PaymentUpdate,
    store: BookingStore = Depends(get_store),
):
    return await update_payment(store, lineup_id, payment.fee, payment.paid)


@router.delete("/{lineup_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_lineup_entry_endpoint(lineup_id: int, store: BookingStore = Depends(get_store)):
    """Remove a booking. Remaining comic positions are left unchanged."""
    await remove_lineup_entry(store, lineup_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
