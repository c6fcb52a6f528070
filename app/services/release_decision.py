"""ICS-212 출동 가능 판정 — HOLD / RELEASE.

Release decision for a vehicle safety inspection. A pure function with no
I/O: ``hold`` when any safety-critical item failed, otherwise ``release``.
Called on every path that changes item statuses (live preview, form
submission, admin edit) and never cached between edits.
"""

from typing import Iterable

from app.schemas.vehicle_inspection import InspectionItem, ReleaseDecision


def failed_safety_items(items: Iterable[InspectionItem]) -> list[int]:
    return [i.item_number for i in items if i.is_safety_item and i.status == "fail"]


def compute_release_decision(items: Iterable[InspectionItem]) -> ReleaseDecision:
    if any(i.is_safety_item and i.status == "fail" for i in items):
        return "hold"
    return "release"
