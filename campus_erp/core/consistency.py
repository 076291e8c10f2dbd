"""
State-changing operations whose correctness depends on store-level atomicity.

- apply_once: conditional put, so a (student, company) application exists at most once
- mark_fee_item_paid: per-element conditional update of the embedded Fees list
- allocate_next_room: scan-seeded room number claimed through an atomic counter
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Iterable

from campus_erp import tables
from campus_erp.core import queries
from campus_erp.core.metrics import to_int
from campus_erp.database import ConditionFailed, DocumentStore
from campus_erp.errors import Conflict, NotFound

logger = logging.getLogger(__name__)

APPLICATION_INITIAL_STATUS = "Applied"
FEE_PAID = "Paid"
FEE_UNPAID = "Unpaid"
ROOM_COUNTER_FIELD = "LastRoomNo"


def apply_once(store: DocumentStore, student_id: str, company_id: str, course_id: str) -> Dict[str, Any]:
    """
    Record a placement application unless one already exists for the
    (student, company) pair.

    Raises:
        Conflict: the student already applied to this company; nothing is written
    """
    item = {
        "StudentID": student_id,
        "CompanyID": company_id,
        "CourseID": course_id,
        "AppliedOn": date.today().isoformat(),
        "Status": APPLICATION_INITIAL_STATUS,
    }
    try:
        store.put(tables.PLACEMENT_APPLICATIONS, item, if_absent=True)
    except ConditionFailed:
        raise Conflict("Already applied to this company")
    logger.info(f"Placement application saved: {student_id} -> {company_id}")
    return item


def mark_fee_item_paid(store: DocumentStore, student_id: str, item_name: str) -> None:
    """
    Mark one hostel fee line item as Paid.

    Only the matching list element is written, guarded by its item name, so
    concurrent payments of different items never overwrite each other. Marking
    an already paid item, or an item the list does not contain, succeeds
    without writing.

    Raises:
        NotFound: no HostelFee document for the student
        Conflict: the list changed under us (item moved); the caller may retry
    """
    record = queries.get_by_key(store, tables.HOSTEL_FEE, tables.HOSTEL_FEE.key(student_id))
    if record is None:
        raise NotFound("No record found")

    fees = record.get("Fees") or []
    index = next((i for i, fee in enumerate(fees) if fee.get("Item") == item_name), None)
    if index is None:
        logger.warning(f"Hostel fee item {item_name!r} not in the fee list of {student_id}, nothing to update")
        return
    if fees[index].get("Status") == FEE_PAID:
        logger.info(f"Hostel fee item {item_name!r} for {student_id} already paid")
        return

    try:
        store.set_list_item_field(
            tables.HOSTEL_FEE,
            tables.HOSTEL_FEE.key(student_id),
            list_field="Fees",
            index=index,
            field="Status",
            value=FEE_PAID,
            expected={"Item": item_name},
        )
    except ConditionFailed:
        raise Conflict("Fee list changed while updating, please retry")
    logger.info(f"Hostel fee item {item_name!r} for {student_id} marked paid")


def next_room_number(assignments: Iterable[Dict[str, Any]]) -> int:
    """Highest RoomNo plus one; non-numeric room numbers count as 0."""
    return max((to_int(a.get("RoomNo")) for a in assignments), default=0) + 1


def allocate_next_room(store: DocumentStore, hostel_id: str) -> int:
    """
    Room number for the next student assigned to `hostel_id`.

    The scan over current assignments gives the candidate; the Hostel
    document's LastRoomNo counter makes the claim atomic, so two concurrent
    allocations never return the same number. A hostel without a metadata
    document gets the scan candidate unclaimed, and no Hostel document is
    created for it.
    """
    assignments = queries.scan_with_filter(store, tables.HOSTEL_ASSIGNED, HostelID=hostel_id)
    candidate = next_room_number(assignments)
    try:
        room = store.claim_counter(tables.HOSTEL, tables.HOSTEL.key(hostel_id), ROOM_COUNTER_FIELD, candidate)
    except ConditionFailed:
        logger.warning(f"Hostel {hostel_id} has no metadata document, room {candidate} allocated without a counter claim")
        return candidate
    if room != candidate:
        logger.warning(f"Room {candidate} in {hostel_id} already claimed, allocated {room} instead")
    return room
