"""Length-prefixed events for identity, cell lists, connectivity and the CRC trailer."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field, fields
from typing import Any, Iterator

from .buffers import BitReader, BitWriter, ByteBuf

__all__ = [
    "EvtD00A",
    "EvtD00B",
    "EvtD00C",
    "EvtD00D",
    "EvtD00E",
    "EvtD018",
    "EvtD01A",
    "EvtD01B",
    "EvtD01C",
    "EvtD01D",
    "EvtD01F",
    "EvtFFFF",
]


@contextmanager
def _reading_body(buf: ByteBuf) -> Iterator[tuple[int, int]]:
    """Read id and length, then skip what the body leaves of the length."""
    evt_id = buf.read_uint(2)
    evt_len = buf.read_uint(2)
    start = buf.reader_index
    yield evt_id, evt_len
    consumed = buf.reader_index - start
    if evt_len > consumed:
        buf.skip(evt_len - consumed)


@contextmanager
def _writing_body(buf: ByteBuf, evt_id: int, evt_len: int) -> Iterator[None]:
    """Write id and length, then zero-pad the body up to the length."""
    buf.write_uint(evt_id, 2)
    buf.write_uint(evt_len, 2)
    start = buf.writer_index
    yield
    written = buf.writer_index - start
    if evt_len > written:
        buf.write_zero(evt_len - written)


# (name, size in bytes, is text)
_ByteLayout = tuple[tuple[str, int, bool], ...]


def _read_bytes_record(buf: ByteBuf, layout: _ByteLayout) -> dict[str, Any]:
    with _reading_body(buf) as (evt_id, evt_len):
        values: dict[str, Any] = {"evt_id": evt_id, "evt_len": evt_len}
        for name, size, text in layout:
            values[name] = buf.read_string(size) if text else buf.read_uint(size)
    return values


def _write_bytes_record(event: Any, buf: ByteBuf, layout: _ByteLayout) -> None:
    with _writing_body(buf, event.evt_id, event.evt_len):
        for name, size, text in layout:
            value = getattr(event, name)
            if text:
                buf.write_string(value)
            else:
                buf.write_uint(value, size)


def _body_size(layout: _ByteLayout) -> int:
    return sum(size for _, size, _ in layout)


def _checked_pairs(count: int, values: list[Any], flags: list[int], what: str) -> Iterator[tuple[Any, int]]:
    if len(values) < count or len(flags) < count:
        raise ValueError(
            f"{what}: count is {count} but {len(values)} values "
            f"and {len(flags)} validity flags are given"
        )
    return zip(values[:count], flags[:count])


_D00A_LAYOUT: _ByteLayout = (
    ("vin", 17, True),
    ("iamsn", 16, True),
    ("esim_iccid", 20, True),
    ("esim_id", 32, True),
)


@dataclass
class EvtD00A:
    """Vehicle and module identity: VIN, module serial and eSIM ids.

    Strings are written as given; the length field pads the body.
    """

    evt_id: int = 0xD00A
    evt_len: int = _body_size(_D00A_LAYOUT)
    vin: str = ""
    iamsn: str = ""
    esim_iccid: str = ""
    esim_id: str = ""

    @classmethod
    def read(cls, buf: ByteBuf) -> "EvtD00A":
        return cls(**_read_bytes_record(buf, _D00A_LAYOUT))

    def write(self, buf: ByteBuf) -> None:
        _write_bytes_record(self, buf, _D00A_LAYOUT)


@dataclass
class EvtD00B:
    """Cell voltages, each packed with a validity bit into 16 bits."""

    evt_id: int = 0xD00B
    evt_len: int = 0
    bms_cell_vol_sum_num: int = 0
    bms_cell_vol: list[float] = field(default_factory=list)
    bms_cell_vol_v: list[int] = field(default_factory=list)

    @classmethod
    def read(cls, buf: ByteBuf) -> "EvtD00B":
        with _reading_body(buf) as (evt_id, evt_len):
            count = buf.read_uint(1)
            vols: list[float] = []
            valid: list[int] = []
            for _ in range(count):
                packed = buf.read_uint(2)
                vols.append((packed >> 3) * 0.001)
                valid.append((packed >> 2) & 0x01)
        return cls(evt_id, evt_len, count, vols, valid)

    def write(self, buf: ByteBuf) -> None:
        with _writing_body(buf, self.evt_id, self.evt_len):
            count = self.bms_cell_vol_sum_num
            buf.write_uint(count, 1)
            for vol, valid in _checked_pairs(count, self.bms_cell_vol, self.bms_cell_vol_v, "cell voltages"):
                raw = int(vol * 1000) & 0xFFFF
                buf.write_uint((raw << 3) | ((valid & 0xFFFF) << 2), 2)


def _read_temperatures(buf: ByteBuf) -> tuple[int, int, int, list[int], list[int]]:
    with _reading_body(buf) as (evt_id, evt_len):
        count = buf.read_uint(1)
        temps: list[int] = []
        valid: list[int] = []
        for _ in range(count):
            packed = buf.read_int(2)
            temps.append((packed >> 8) - 40)
            valid.append((packed >> 7) & 1)
    return evt_id, evt_len, count, temps, valid


def _write_temperatures(
    buf: ByteBuf, evt_id: int, evt_len: int, count: int, temps: list[int], valid: list[int]
) -> None:
    with _writing_body(buf, evt_id, evt_len):
        buf.write_uint(count, 1)
        for tem, flag in _checked_pairs(count, temps, valid, "temperatures"):
            buf.write_int(((tem + 40) << 8) | ((flag << 7) & 0xFF), 2)


@dataclass
class EvtD00C:
    """Cell temperatures, each a signed byte offset by 40 plus a validity bit."""

    evt_id: int = 0xD00C
    evt_len: int = 0
    bms_cell_tem_sum_num: int = 0
    bms_cell_tem: list[int] = field(default_factory=list)
    bms_cell_tem_v: list[int] = field(default_factory=list)

    @classmethod
    def read(cls, buf: ByteBuf) -> "EvtD00C":
        return cls(*_read_temperatures(buf))

    def write(self, buf: ByteBuf) -> None:
        _write_temperatures(
            buf,
            self.evt_id,
            self.evt_len,
            self.bms_cell_tem_sum_num,
            self.bms_cell_tem,
            self.bms_cell_tem_v,
        )


@dataclass
class EvtD00D:
    """Busbar temperatures, packed like the cell temperatures."""

    evt_id: int = 0xD00D
    evt_len: int = 0
    bms_busbar_tem_sum_num: int = 0
    bms_busbar_tem: list[int] = field(default_factory=list)
    bms_busbar_tem_v: list[int] = field(default_factory=list)

    @classmethod
    def read(cls, buf: ByteBuf) -> "EvtD00D":
        return cls(*_read_temperatures(buf))

    def write(self, buf: ByteBuf) -> None:
        _write_temperatures(
            buf,
            self.evt_id,
            self.evt_len,
            self.bms_busbar_tem_sum_num,
            self.bms_busbar_tem,
            self.bms_busbar_tem_v,
        )


@dataclass
class EvtD00E:
    """Battery pack code as raw ASCII bytes."""

    evt_id: int = 0xD00E
    evt_len: int = 0
    bms_rpt_bat_code_num: int = 0
    bms_rpt_bat_code_asc: bytes = b""

    def __post_init__(self) -> None:
        self.bms_rpt_bat_code_asc = bytes(self.bms_rpt_bat_code_asc)

    @classmethod
    def read(cls, buf: ByteBuf) -> "EvtD00E":
        with _reading_body(buf) as (evt_id, evt_len):
            count = buf.read_uint(1)
            code = buf.read_bytes(count)
        return cls(evt_id, evt_len, count, code)

    def write(self, buf: ByteBuf) -> None:
        with _writing_body(buf, self.evt_id, self.evt_len):
            buf.write_uint(self.bms_rpt_bat_code_num, 1)
            buf.write_bytes(self.bms_rpt_bat_code_asc)


@dataclass
class EvtD018:
    """Connection states, dead-reckoning position, GNSS time and satellites.

    Coordinates are truncated toward zero when encoded.
    """

    evt_id: int = 0xD018
    evt_len: int = 20
    apn1_conn_sts: int = 0
    apn2_conn_sts: int = 0
    mqtt_conn_fail_rsn: int = 0
    e_call_sts: int = 0
    loc_dr_sts: int = 0
    longitude_dr: float = 0.0
    latitude_dr: float = 0.0
    loc_gnns1_sts: int = 0
    tbox_gps_time: int = 0
    loc_gnns2_sts: int = 0
    loc_rtk_sts: int = 0
    loc_gnns1_sat_num: int = 0
    loc_gnns2_sat_num: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "EvtD018":
        with _reading_body(buf) as (evt_id, evt_len):
            with BitReader(buf) as bits:
                return cls(
                    evt_id=evt_id,
                    evt_len=evt_len,
                    apn1_conn_sts=bits.read(1),
                    apn2_conn_sts=bits.read(1),
                    mqtt_conn_fail_rsn=bits.read(2),
                    e_call_sts=bits.read(4),
                    loc_dr_sts=bits.read(4),
                    longitude_dr=bits.read(29, unsigned=False) * 0.000001,
                    latitude_dr=bits.read(28, unsigned=False) * 0.000001,
                    loc_gnns1_sts=bits.read(4),
                    tbox_gps_time=bits.read(48),
                    loc_gnns2_sts=bits.read(4),
                    loc_rtk_sts=bits.read(14),
                    loc_gnns1_sat_num=bits.read(8),
                    loc_gnns2_sat_num=bits.read(8),
                )

    def write(self, buf: ByteBuf) -> None:
        with _writing_body(buf, self.evt_id, self.evt_len):
            with BitWriter(buf) as bits:
                bits.write(self.apn1_conn_sts, 1)
                bits.write(self.apn2_conn_sts, 1)
                bits.write(self.mqtt_conn_fail_rsn, 2)
                bits.write(self.e_call_sts, 4)
                bits.write(self.loc_dr_sts, 4)
                bits.write(int(self.longitude_dr * 1000000), 29, unsigned=False)
                bits.write(int(self.latitude_dr * 1000000), 28, unsigned=False)
                bits.write(self.loc_gnns1_sts, 4)
                bits.write(self.tbox_gps_time, 48)
                bits.write(self.loc_gnns2_sts, 4)
                bits.write(self.loc_rtk_sts, 14)
                bits.write(self.loc_gnns1_sat_num, 8)
                bits.write(self.loc_gnns2_sat_num, 8)


_D01A_LAYOUT: _ByteLayout = (
    ("i_ecu_sts", 2, False),
    ("i_iam_inter_sts", 1, False),
    ("i_mpu_ip_table_rule_sts", 1, False),
    ("i_modem_ip_table_rule_sts", 1, False),
    ("i_arp_rule_sts", 1, False),
    ("i_icc2_phy_sgmii_sts", 2, False),
    ("i_mpu_rgmii_sts", 2, False),
    ("i_modem_rgmii_sts", 2, False),
    ("i_switch_sgmii_sts", 2, False),
    ("i_usb_conn_sts", 1, False),
    ("i_ipa_sts", 1, False),
    ("i_ap_sts", 1, False),
    ("networkbackupinfo", 28, True),
)


@dataclass
class EvtD01A:
    """Internal link and firewall rule states of the telematics module."""

    evt_id: int = 0xD01A
    evt_len: int = _body_size(_D01A_LAYOUT)
    i_ecu_sts: int = 0
    i_iam_inter_sts: int = 0
    i_mpu_ip_table_rule_sts: int = 0
    i_modem_ip_table_rule_sts: int = 0
    i_arp_rule_sts: int = 0
    i_icc2_phy_sgmii_sts: int = 0
    i_mpu_rgmii_sts: int = 0
    i_modem_rgmii_sts: int = 0
    i_switch_sgmii_sts: int = 0
    i_usb_conn_sts: int = 0
    i_ipa_sts: int = 0
    i_ap_sts: int = 0
    networkbackupinfo: str = ""

    @classmethod
    def read(cls, buf: ByteBuf) -> "EvtD01A":
        return cls(**_read_bytes_record(buf, _D01A_LAYOUT))

    def write(self, buf: ByteBuf) -> None:
        _write_bytes_record(self, buf, _D01A_LAYOUT)


_D01B_LAYOUT: _ByteLayout = (
    ("wan_status", 1, False),
    ("channel_type1", 1, False),
    ("channel_states1", 1, False),
    ("ip_address1", 18, True),
    ("channel_type2", 1, False),
    ("channel_states2", 1, False),
    ("ip_address2", 18, True),
    ("channel_type3", 1, False),
    ("channel_states3", 1, False),
    ("ip_address3", 18, True),
    ("channel_type4", 1, False),
    ("channel_states4", 1, False),
)


@dataclass
class EvtD01B:
    """WAN status and the first data channels with their addresses."""

    evt_id: int = 0xD01B
    evt_len: int = _body_size(_D01B_LAYOUT)
    wan_status: int = 0
    channel_type1: int = 0
    channel_states1: int = 0
    ip_address1: str = ""
    channel_type2: int = 0
    channel_states2: int = 0
    ip_address2: str = ""
    channel_type3: int = 0
    channel_states3: int = 0
    ip_address3: str = ""
    channel_type4: int = 0
    channel_states4: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "EvtD01B":
        return cls(**_read_bytes_record(buf, _D01B_LAYOUT))

    def write(self, buf: ByteBuf) -> None:
        _write_bytes_record(self, buf, _D01B_LAYOUT)


_D01C_LAYOUT: _ByteLayout = (
    ("ip_address4", 18, True),
    ("cur_imsi", 17, True),
    ("net_type", 1, False),
    ("rssi", 2, False),
    ("rsrp", 2, False),
    ("rscp", 2, False),
    ("sinr", 2, False),
    ("ecio", 2, False),
)


@dataclass
class EvtD01C:
    """Fourth channel address, subscriber identity and radio quality."""

    evt_id: int = 0xD01C
    evt_len: int = _body_size(_D01C_LAYOUT)
    ip_address4: str = ""
    cur_imsi: str = ""
    net_type: int = 0
    rssi: int = 0
    rsrp: int = 0
    rscp: int = 0
    sinr: int = 0
    ecio: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "EvtD01C":
        return cls(**_read_bytes_record(buf, _D01C_LAYOUT))

    def write(self, buf: ByteBuf) -> None:
        _write_bytes_record(self, buf, _D01C_LAYOUT)


_D01D_LAYOUT: _ByteLayout = (
    ("cell_lac5g", 4, False),
    ("cell_id5g", 8, False),
)


@dataclass
class EvtD01D:
    """5G location area code and cell id."""

    evt_id: int = 0xD01D
    evt_len: int = _body_size(_D01D_LAYOUT)
    cell_lac5g: int = 0
    cell_id5g: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "EvtD01D":
        return cls(**_read_bytes_record(buf, _D01D_LAYOUT))

    def write(self, buf: ByteBuf) -> None:
        _write_bytes_record(self, buf, _D01D_LAYOUT)


@dataclass
class EvtD01F:
    """Network recovery reason, action, count, result and times."""

    evt_id: int = 0xD01F
    evt_len: int = 16
    net_recv_rsn: int = 0
    net_recv_actn: int = 0
    net_recv_actn_timstmp: int = 0
    net_recv_actn_cnt: int = 0
    net_recv_actn_rst: int = 0
    net_recv_time: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "EvtD01F":
        with _reading_body(buf) as (evt_id, evt_len):
            rsn = buf.read_uint(1)
            actn = buf.read_uint(1)
            bits = BitReader(buf)
            timstmp = bits.read(48)
            bits.finish()
            cnt = buf.read_uint(1)
            rst = buf.read_uint(1)
            recv_time = bits.read(48)
            bits.finish()
        return cls(evt_id, evt_len, rsn, actn, timstmp, cnt, rst, recv_time)

    def write(self, buf: ByteBuf) -> None:
        with _writing_body(buf, self.evt_id, self.evt_len):
            buf.write_uint(self.net_recv_rsn, 1)
            buf.write_uint(self.net_recv_actn, 1)
            bits = BitWriter(buf)
            bits.write(self.net_recv_actn_timstmp, 48)
            bits.finish()
            buf.write_uint(self.net_recv_actn_cnt, 1)
            buf.write_uint(self.net_recv_actn_rst, 1)
            bits.write(self.net_recv_time, 48)
            bits.finish()


@dataclass
class EvtFFFF:
    """Packet trailer holding a 48-bit checksum field."""

    evt_id: int = 0xFFFF
    crc32: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "EvtFFFF":
        evt_id = buf.read_uint(2)
        with BitReader(buf) as bits:
            crc = bits.read(48)
        return cls(evt_id, crc)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        with BitWriter(buf) as bits:
            bits.write(self.crc32, 48)


def _field_names(cls: type) -> list[str]:
    return [f.name for f in fields(cls)]