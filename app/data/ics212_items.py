"""ICS-212 표준 점검 항목 — 17개 고정 순서 목록.

Canonical ICS-212 checklist. The item set is configuration; the release
decision logic only reads ``is_safety_item`` and ``status``.
"""

from app.schemas.vehicle_inspection import InspectionItem

_SEE_BACK = "See back*"

ICS212_ITEMS: list[dict] = [
    {"item_number": 1, "description": "Gauges and lights", "is_safety_item": True, "reference": _SEE_BACK},
    {"item_number": 2, "description": "Seat belts", "is_safety_item": True, "reference": _SEE_BACK},
    {"item_number": 3, "description": "Glass and mirrors", "is_safety_item": True, "reference": _SEE_BACK},
    {"item_number": 4, "description": "Wipers and horn", "is_safety_item": True, "reference": _SEE_BACK},
    {"item_number": 5, "description": "Engine compartment", "is_safety_item": True, "reference": _SEE_BACK},
    {"item_number": 6, "description": "Fuel System", "is_safety_item": True, "reference": _SEE_BACK},
    {"item_number": 7, "description": "Steering", "is_safety_item": True, "reference": _SEE_BACK},
    {"item_number": 8, "description": "Brakes", "is_safety_item": True, "reference": _SEE_BACK},
    {"item_number": 9, "description": "Drive line U-joints", "is_safety_item": False, "reference": "Check play"},
    {"item_number": 10, "description": "Springs and shocks", "is_safety_item": True, "reference": _SEE_BACK},
    {"item_number": 11, "description": "Exhaust system", "is_safety_item": True, "reference": _SEE_BACK},
    {"item_number": 12, "description": "Frame", "is_safety_item": True, "reference": _SEE_BACK},
    {"item_number": 13, "description": "Tire and wheels", "is_safety_item": True, "reference": _SEE_BACK},
    {"item_number": 14, "description": "Coupling devices / Emergency exit (buses)", "is_safety_item": False},
    {"item_number": 15, "description": "Pump operation", "is_safety_item": False},
    {"item_number": 16, "description": "Damage on incident", "is_safety_item": False},
    {"item_number": 17, "description": "Other", "is_safety_item": False},
]

ICS212_ITEM_COUNT: int = len(ICS212_ITEMS)


def default_inspection_items() -> list[InspectionItem]:
    """새 양식용 항목 목록 — 모두 "n/a" 상태로 시작."""
    return [InspectionItem(status="n/a", **item) for item in ICS212_ITEMS]

_ITEMS_BY_NUMBER: dict[int, dict] = {item["item_number"]: item for item in ICS212_ITEMS}


def apply_checklist(items: list[InspectionItem]) -> list[InspectionItem]:
    """표준 항목 정의 적용 — 클라이언트에서는 status와 comments만 받음.

    Description, safety flag and reference come from the checklist by
    item number; items outside the checklist are returned unchanged.
    """
    return [
        InspectionItem(**_ITEMS_BY_NUMBER[item.item_number], status=item.status, comments=item.comments)
        if item.item_number in _ITEMS_BY_NUMBER
        else item
        for item in items
    ]
