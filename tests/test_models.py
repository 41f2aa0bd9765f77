import pytest

from bssidlister.errors import DecodeError
from bssidlister.models import AccessPoint, Radio, WlanEntry, parse_inventory

from conftest import SAMPLE_INVENTORY


def test_parse_sample_inventory():
    aps = parse_inventory(SAMPLE_INVENTORY)

    assert aps == [
        AccessPoint(
            serial_number="AP1",
            can_edit=True,
            can_delete=True,
            proxied="Local",
            radios=(Radio(radio_index=0, wlan=(WlanEntry("AA:BB:CC:00:11:22", "Corp"),)),),
        )
    ]


def test_missing_fields_decode_to_zero_values():
    aps = parse_inventory([{}, {"radios": [{}, {"wlan": [{}]}]}])

    assert aps[0] == AccessPoint()
    assert aps[1].serial_number == ""
    assert aps[1].radios[0] == Radio(radio_index=0, wlan=())
    assert aps[1].radios[1].wlan == (WlanEntry(bssid="", ssid=""),)


def test_null_fields_are_treated_as_absent():
    aps = parse_inventory([{"serialNumber": None, "canEdit": None, "radios": None}])

    assert aps == [AccessPoint()]


def test_null_top_level_is_empty_inventory():
    assert parse_inventory(None) == []


def test_unknown_fields_are_ignored():
    aps = parse_inventory([{"serialNumber": "AP9", "hardwareType": "AP3935i", "radios": []}])

    assert aps[0].serial_number == "AP9"


def test_order_is_preserved():
    data = [
        {"serialNumber": "B", "radios": [{"radioIndex": 2}, {"radioIndex": 1}]},
        {"serialNumber": "A"},
    ]

    aps = parse_inventory(data)

    assert [ap.serial_number for ap in aps] == ["B", "A"]
    assert [r.radio_index for r in aps[0].radios] == [2, 1]


def test_tree_is_immutable():
    ap = parse_inventory(SAMPLE_INVENTORY)[0]

    with pytest.raises(AttributeError):
        ap.serial_number = "other"
    assert isinstance(ap.radios, tuple)


@pytest.mark.parametrize(
    "data",
    [
        {"serialNumber": "AP1"},
        ["AP1"],
        [{"serialNumber": 42}],
        [{"canEdit": "yes"}],
        [{"radios": {"radioIndex": 0}}],
        [{"radios": [{"radioIndex": "0"}]}],
        [{"radios": [{"radioIndex": True}]}],
        [{"radios": [{"radioIndex": 1.5}]}],
        [{"radios": [{"wlan": [{"ssid": ["Corp"]}]}]}],
    ],
)
def test_type_mismatch_raises_decode_error(data):
    with pytest.raises(DecodeError):
        parse_inventory(data)


def test_decode_error_names_the_location():
    with pytest.raises(DecodeError, match=r"aps\[0\]\.radios\[1\]\.wlan\[0\]\.bssid"):
        parse_inventory([{"radios": [{}, {"wlan": [{"bssid": 1}]}]}])
