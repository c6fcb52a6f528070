"""결함 이슈 제목 인코딩/디코딩 유틸리티.

Defect title codec. The tracker title is both the human-readable summary
and the round-trippable identity key of a defect:

    "[{apparatus}] {compartment}: {item} - {Missing|Damaged}"

Decoding is case-sensitive pattern matching, so the status capitalization
is part of the format. Compartment or item names containing ": " or " - "
produce an ambiguous parse; such titles still decode but may split in the
wrong place.

Inspection log titles use a second format:

    "[{apparatus}] Daily Inspection - {date}"
"""

import re

from app.schemas.defect import DecodedDefectTitle, DefectIdentity, DefectStatus

# 결함 제목 패턴 — [차량] 구획: 품목 - 상태
DEFECT_TITLE_PATTERN: re.Pattern[str] = re.compile(
    r"\[(.+)\]\s+(.+):\s+(.+?)\s+-\s+(Missing|Damaged)"
)

# 점검 로그 제목 패턴 — [차량] Daily Inspection
LOG_TITLE_PATTERN: re.Pattern[str] = re.compile(r"\[(.+)\]\s+Daily Inspection")

_STATUS_TITLES: dict[str, str] = {"missing": "Missing", "damaged": "Damaged"}


def encode_title(identity: DefectIdentity, status: DefectStatus) -> str:
    """결함 식별자와 상태를 이슈 제목으로 인코딩합니다.

    Example:
        encode_title(DefectIdentity(apparatus="Engine 1", compartment="Cab",
                                    item="Flashlight"), "missing")
        # "[Engine 1] Cab: Flashlight - Missing"
    """
    return (
        f"[{identity.apparatus}] {identity.compartment}: "
        f"{identity.item} - {_STATUS_TITLES[status]}"
    )


def decode_title(title: str) -> DecodedDefectTitle | None:
    """이슈 제목을 결함 식별자로 디코딩합니다.

    Returns None for titles that do not follow the defect format. Callers
    treat those issues as foreign entries and skip them.
    """
    match = DEFECT_TITLE_PATTERN.search(title)
    if match is None:
        return None
    apparatus, compartment, item, status = match.groups()
    return DecodedDefectTitle(
        apparatus=apparatus,
        compartment=compartment,
        item=item,
        status=status.lower(),
    )


def defect_key(compartment: str, item: str) -> str:
    return f"{compartment}:{item}"


def encode_log_title(apparatus: str, date: str) -> str:
    return f"[{apparatus}] Daily Inspection - {date}"


def decode_log_apparatus(title: str) -> str | None:
    """점검 로그 제목에서 차량 이름을 추출합니다 (None if not a log title)."""
    match = LOG_TITLE_PATTERN.search(title)
    return match.group(1) if match else None
