"""결함 제목 코덱 테스트.

Defect title codec tests — encoding, decoding, foreign titles and the
inspection log title format.
"""

from app.schemas.defect import DefectIdentity
from app.utils.defect_title import (
    decode_log_apparatus,
    decode_title,
    defect_key,
    encode_log_title,
    encode_title,
)


class TestEncodeTitle:

    def test_missing(self):
        identity = DefectIdentity(apparatus="Engine 1", compartment="Cab", item="Flashlight")
        assert encode_title(identity, "missing") == "[Engine 1] Cab: Flashlight - Missing"

    def test_damaged(self):
        identity = DefectIdentity(apparatus="Rescue 11", compartment="Driver Side", item="Halligan Bar")
        assert encode_title(identity, "damaged") == "[Rescue 11] Driver Side: Halligan Bar - Damaged"


class TestDecodeTitle:

    def test_round_trip(self):
        identity = DefectIdentity(apparatus="Ladder 3", compartment="Rear Compartment", item="SCBA Bottle")
        for status in ("missing", "damaged"):
            decoded = decode_title(encode_title(identity, status))
            assert decoded is not None
            assert decoded.apparatus == identity.apparatus
            assert decoded.compartment == identity.compartment
            assert decoded.item == identity.item
            assert decoded.status == status

    def test_key_matches_defect_key(self):
        decoded = decode_title("[Engine 2] Cab: Radio - Damaged")
        assert decoded.key == defect_key("Cab", "Radio") == "Cab:Radio"

    def test_foreign_title_returns_none(self):
        assert decode_title("Update README") is None
        assert decode_title("[Engine 1] Daily Inspection - 2026-10-19") is None

    def test_status_is_case_sensitive(self):
        assert decode_title("[Engine 1] Cab: Flashlight - missing") is None

    def test_unknown_status_returns_none(self):
        assert decode_title("[Engine 1] Cab: Flashlight - Broken") is None


class TestLogTitle:

    def test_encode(self):
        assert encode_log_title("Engine 1", "2026-10-19") == "[Engine 1] Daily Inspection - 2026-10-19"

    def test_decode_apparatus(self):
        assert decode_log_apparatus("[Rope Inventory] Daily Inspection - 10/19/2026") == "Rope Inventory"

    def test_decode_non_log(self):
        assert decode_log_apparatus("[Engine 1] Cab: Flashlight - Missing") is None
