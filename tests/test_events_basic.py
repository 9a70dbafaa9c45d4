from dataclasses import asdict

import pytest

from immolog.buffers import ByteBuf, DecodeError
from immolog.events_basic import (
    Evt0001,
    Evt0003,
    Evt0004,
    Evt0005,
    Evt0006,
    Evt0007,
    Evt0008,
    Evt0009,
    Evt000A,
    Evt000B,
    Evt000C,
    Evt000D,
    Evt000E,
    Evt000F,
    Evt0010,
    Evt0011,
    Evt0800,
    Evt0801,
    Evt0802,
    Evt0803,
    UnknownFixedEvent,
    UnknownVariableEvent,
)

SAMPLES = [
    Evt0001(tbox_sys_tim=1_700_000_000),
    Evt0003(relwakeup_tim=123456),
    Evt0004(gnss_alt=12.5, longitude=121.473701, gps_sts=2),
    Evt0004(gnss_alt=-12.3, longitude=-73.985428, gps_sts=1),
    Evt0005(latitude=31.230416, veh_typ=1, gnss_direction=123.45),
    Evt0005(latitude=-33.868820, veh_typ=3, gnss_direction=0.5),
    Evt0006(hdop=1.5, vdop=2.5),
    Evt0007(acce_x=0.5, acce_y=-0.25, acce_z=1.0),
    Evt0008(cell_mcc=460, cell_mnc=1, millisecond=999, spistatus=1),
    Evt0009(cell_lac=4660, cell_id=0x0ABCDEF1),
    Evt000A(cell_signal_strength=-85, cell_rat=5, cell_rat_add=3, cell_chan_id=300, gnss_sats=12),
    Evt000B(modem_states=3, i_network_sts=1, i_network_sts_err_code=0xBEEF),
    Evt000C(potcl_ver=2, potcl_secy_ver=1, calendar_year=2024, calendar_day=17, calendar_month=6),
    Evt000D(cell_frequency=1_850_000),
    Evt000E(
        bms_chrg_sts=3,
        bms_pack_soc_bkup=50.0,
        bms_pack_soc_v_bkup=1,
        bms_ofbd_chrg_sp_rsn=7,
        bms_wrls_chrg_sp_rsn=9,
    ),
    Evt000F(tm_actu_toq_hi_pre=10.0, tm_invtr_crnt_hi_pre=-25.0),
    Evt0010(
        sam_actu_toq_hi_pre=10.0,
        sam_invtr_crnt_hi_pre=-25.0,
        sam_invtr_ov_tem_alrm=1,
        sam_ov_crnt_alrm=0,
        sam_ov_spd_alrm=1,
        sam_str_ov_tem_alrm=0,
        tm_invtr_ov_tem_alrm=1,
        tm_ov_crnt_alrm=1,
        tm_ov_spd_alrm=0,
        tm_str_ov_tem_alrm=1,
        usg_md=9,
        usg_md_v=1,
    ),
    Evt0011(veh_md=5, veh_md_v=1),
    Evt0800(
        sys_pwr_md=2,
        sys_pwr_md_v=1,
        sys_vol_v=1,
        tr_shft_lvr_pos=4,
        sys_vol=13.5,
        tr_shft_lvr_pos_v=1,
    ),
    Evt0801(brk_pdl_pos=39.2157),
    Evt0802(veh_spd_avg_drvn=60.5, veh_spd_avg_drvn_v=1),
    Evt0803(veh_odo=123456, veh_odo_v=1, brk_pdl_pos_v=1),
]

IDS = [f"{type(s).__name__}-{i}" for i, s in enumerate(SAMPLES)]


def _encode(event):
    buf = ByteBuf()
    event.write(buf)
    return buf.to_bytes()


@pytest.mark.parametrize("sample", SAMPLES, ids=IDS)
def test_fixed_events_are_eight_bytes(sample):
    assert len(_encode(sample)) == 8


@pytest.mark.parametrize("sample", SAMPLES, ids=IDS)
def test_encoding_starts_with_event_id(sample):
    encoded = _encode(sample)
    assert encoded[:2] == sample.evt_id.to_bytes(2, "big")


@pytest.mark.parametrize("sample", SAMPLES, ids=IDS)
def test_round_trip(sample):
    buf = ByteBuf(_encode(sample))
    decoded = type(sample).read(buf)
    assert asdict(decoded) == pytest.approx(asdict(sample))
    assert not buf.readable()


@pytest.mark.parametrize("sample", SAMPLES, ids=IDS)
def test_reencoding_is_stable(sample):
    first = _encode(sample)
    second = _encode(type(sample).read(ByteBuf(first)))
    assert second == first


@pytest.mark.parametrize("sample", SAMPLES, ids=IDS)
def test_read_leaves_following_bytes(sample):
    trailer = b"\xde\xad"
    buf = ByteBuf(_encode(sample) + trailer)
    type(sample).read(buf)
    assert buf.to_bytes() == trailer


@pytest.mark.parametrize("sample", SAMPLES, ids=IDS)
def test_truncated_input_raises(sample):
    encoded = _encode(sample)
    with pytest.raises(DecodeError):
        type(sample).read(ByteBuf(encoded[:-1]))


def test_evt0001_wire_bytes():
    encoded = _encode(Evt0001(tbox_sys_tim=0x010203040506))
    assert encoded == b"\x00\x01\x01\x02\x03\x04\x05\x06"


def test_evt0004_offset_applied_to_zero_raw():
    event = Evt0004.read(ByteBuf(b"\x00\x04" + bytes(6)))
    assert event.gnss_alt == pytest.approx(-500)
    assert event.longitude == 0
    assert event.gps_sts == 0


def test_evt0007_signed_axes():
    event = Evt0007.read(ByteBuf(b"\x00\x07\xff\xfc\xff\xfc\xff\xfc"))
    assert event.acce_x == -0.0009765625
    assert event.acce_y == event.acce_x
    assert event.acce_z == event.acce_x


def test_evt000c_year_base():
    event = Evt000C.read(ByteBuf(b"\x00\x0c" + bytes(6)))
    assert event.calendar_year == 2000


def test_evt0004_negative_longitude_keeps_sign():
    decoded = Evt0004.read(ByteBuf(_encode(Evt0004(longitude=-1.5))))
    assert decoded.longitude == pytest.approx(-1.5)


def test_unknown_fixed_round_trip():
    event = UnknownFixedEvent(evt_id=0x0123, data=b"abcdef")
    buf = ByteBuf(_encode(event))
    assert UnknownFixedEvent.read(buf) == event
    assert not buf.readable()


def test_unknown_fixed_rejects_wrong_length():
    with pytest.raises(ValueError):
        UnknownFixedEvent(evt_id=0x0123, data=b"abc")


def test_unknown_variable_reads_declared_length():
    buf = ByteBuf(b"\xd1\x23\x00\x03\xaa\xbb\xcc\x01\x02")
    event = UnknownVariableEvent.read(buf)
    assert event.evt_id == 0xD123
    assert event.evt_len == 3
    assert event.data == b"\xaa\xbb\xcc"
    assert buf.to_bytes() == b"\x01\x02"


def test_unknown_variable_round_trip():
    event = UnknownVariableEvent(evt_id=0xD0FE, evt_len=4, data=b"wxyz")
    assert UnknownVariableEvent.read(ByteBuf(_encode(event))) == event


def test_unknown_variable_truncated_body_raises():
    with pytest.raises(DecodeError):
        UnknownVariableEvent.read(ByteBuf(b"\xd1\x23\x00\x05\xaa"))