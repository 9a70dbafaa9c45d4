"""Fixed-size events of the log format and the two kinds of unknown event."""

from __future__ import annotations

from dataclasses import dataclass, field

from .buffers import BitReader, BitWriter, ByteBuf, round_half_away

__all__ = [
    "Evt0001",
    "Evt0003",
    "Evt0004",
    "Evt0005",
    "Evt0006",
    "Evt0007",
    "Evt0008",
    "Evt0009",
    "Evt000A",
    "Evt000B",
    "Evt000C",
    "Evt000D",
    "Evt000E",
    "Evt000F",
    "Evt0010",
    "Evt0011",
    "Evt0800",
    "Evt0801",
    "Evt0802",
    "Evt0803",
    "UnknownFixedEvent",
    "UnknownVariableEvent",
]

_UNKNOWN_FIXED_SIZE = 6


@dataclass
class Evt0001:
    """TBOX system time."""

    evt_id: int = 0x0001
    tbox_sys_tim: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt0001":
        evt_id = buf.read_uint(2)
        with BitReader(buf) as bits:
            tim = bits.read(48)
        return cls(evt_id=evt_id, tbox_sys_tim=tim)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        with BitWriter(buf) as bits:
            bits.write(self.tbox_sys_tim, 48)


@dataclass
class Evt0003:
    """Relative wake-up time."""

    evt_id: int = 0x0003
    relwakeup_tim: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt0003":
        evt_id = buf.read_uint(2)
        with BitReader(buf) as bits:
            tim = bits.read(48)
        return cls(evt_id=evt_id, relwakeup_tim=tim)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        with BitWriter(buf) as bits:
            bits.write(self.relwakeup_tim, 48)


@dataclass
class Evt0004:
    """GNSS altitude, longitude and fix status."""

    evt_id: int = 0x0004
    gnss_alt: float = 0.0
    longitude: float = 0.0
    gps_sts: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt0004":
        evt_id = buf.read_uint(2)
        gnss_alt = buf.read_uint(2) * 0.1 - 500
        with BitReader(buf) as bits:
            longitude = bits.read(29, unsigned=False) * 0.000001
            gps_sts = bits.read(2)
        return cls(evt_id=evt_id, gnss_alt=gnss_alt, longitude=longitude, gps_sts=gps_sts)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        buf.write_uint(round_half_away((self.gnss_alt + 500) / 0.1), 2)
        with BitWriter(buf) as bits:
            bits.write(round_half_away(self.longitude / 0.000001), 29, unsigned=False)
            bits.write(self.gps_sts, 2)


@dataclass
class Evt0005:
    """Latitude, vehicle type and GNSS heading."""

    evt_id: int = 0x0005
    latitude: float = 0.0
    veh_typ: int = 0
    gnss_direction: float = 0.0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt0005":
        evt_id = buf.read_uint(2)
        with BitReader(buf) as bits:
            latitude = bits.read(28, unsigned=False) * 0.000001
            bits.skip(2)
            veh_typ = bits.read(2)
        gnss_direction = buf.read_uint(2) * 0.01
        return cls(
            evt_id=evt_id,
            latitude=latitude,
            veh_typ=veh_typ,
            gnss_direction=gnss_direction,
        )

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        with BitWriter(buf) as bits:
            bits.write(round_half_away(self.latitude / 0.000001), 28, unsigned=False)
            bits.skip(2)
            bits.write(self.veh_typ, 2)
        buf.write_uint(round_half_away(self.gnss_direction / 0.01), 2)


@dataclass
class Evt0006:
    """Horizontal and vertical dilution of precision."""

    evt_id: int = 0x0006
    hdop: float = 0.0
    vdop: float = 0.0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt0006":
        evt_id = buf.read_uint(2)
        with BitReader(buf) as bits:
            hdop = bits.read(24) * 0.1
            vdop = bits.read(24) * 0.1
        return cls(evt_id=evt_id, hdop=hdop, vdop=vdop)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        with BitWriter(buf) as bits:
            bits.write(round_half_away(self.hdop / 0.1), 24)
            bits.write(round_half_away(self.vdop / 0.1), 24)


@dataclass
class Evt0007:
    """Three-axis acceleration, each axis in its own 16-bit slot."""

    evt_id: int = 0x0007
    acce_x: float = 0.0
    acce_y: float = 0.0
    acce_z: float = 0.0

    _SCALE = 0.0009765625

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt0007":
        evt_id = buf.read_uint(2)
        bits = BitReader(buf)
        axes = []
        for _ in range(3):
            axes.append(bits.read(14, unsigned=False) * cls._SCALE)
            bits.finish()
        return cls(evt_id, *axes)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        bits = BitWriter(buf)
        for axis in (self.acce_x, self.acce_y, self.acce_z):
            bits.write(round_half_away(axis / self._SCALE), 14, unsigned=False)
            bits.finish()


@dataclass
class Evt0008:
    """Cell country and network codes, millisecond and SPI status."""

    evt_id: int = 0x0008
    cell_mcc: int = 0
    cell_mnc: int = 0
    millisecond: int = 0
    spistatus: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt0008":
        evt_id = buf.read_uint(2)
        cell_mcc = buf.read_uint(2)
        cell_mnc = buf.read_uint(2)
        with BitReader(buf) as bits:
            millisecond = bits.read(10)
            spistatus = bits.read(1)
        return cls(evt_id, cell_mcc, cell_mnc, millisecond, spistatus)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        buf.write_uint(self.cell_mcc, 2)
        buf.write_uint(self.cell_mnc, 2)
        with BitWriter(buf) as bits:
            bits.write(self.millisecond, 10)
            bits.write(self.spistatus, 1)


@dataclass
class Evt0009:
    """Cell location area code and cell id."""

    evt_id: int = 0x0009
    cell_lac: int = 0
    cell_id: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt0009":
        evt_id = buf.read_uint(2)
        cell_lac = buf.read_uint(2)
        cell_id = buf.read_uint(4)
        return cls(evt_id, cell_lac, cell_id)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        buf.write_uint(self.cell_lac, 2)
        buf.write_uint(self.cell_id, 4)


@dataclass
class Evt000A:
    """Cell signal strength, radio technology, channel and satellites."""

    evt_id: int = 0x000A
    cell_signal_strength: int = 0
    cell_rat: int = 0
    cell_rat_add: int = 0
    cell_chan_id: int = 0
    gnss_sats: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt000A":
        evt_id = buf.read_uint(2)
        strength = buf.read_int(1)
        with BitReader(buf) as bits:
            cell_rat = bits.read(3)
            cell_rat_add = bits.read(3)
            cell_chan_id = bits.read(9)
            gnss_sats = bits.read(8)
        buf.skip(2)
        return cls(evt_id, strength, cell_rat, cell_rat_add, cell_chan_id, gnss_sats)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        buf.write_int(self.cell_signal_strength, 1)
        with BitWriter(buf) as bits:
            bits.write(self.cell_rat, 3)
            bits.write(self.cell_rat_add, 3)
            bits.write(self.cell_chan_id, 9)
            bits.write(self.gnss_sats, 8)
        buf.write_zero(2)


@dataclass
class Evt000B:
    """Modem state and network status with its error code."""

    evt_id: int = 0x000B
    modem_states: int = 0
    i_network_sts: int = 0
    i_network_sts_err_code: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt000B":
        evt_id = buf.read_uint(2)
        modem_states = buf.read_uint(1)
        with BitReader(buf) as bits:
            network_sts = bits.read(1)
            err_code = bits.read(16)
        buf.skip(2)
        return cls(evt_id, modem_states, network_sts, err_code)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        buf.write_uint(self.modem_states, 1)
        with BitWriter(buf) as bits:
            bits.write(self.i_network_sts, 1)
            bits.write(self.i_network_sts_err_code, 16)
        buf.write_zero(2)


@dataclass
class Evt000C:
    """Protocol versions and calendar date."""

    evt_id: int = 0x000C
    potcl_ver: int = 0
    potcl_secy_ver: int = 0
    calendar_year: int = 0
    calendar_day: int = 0
    calendar_month: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt000C":
        evt_id = buf.read_uint(2)
        bits = BitReader(buf)
        potcl_ver = bits.read(4)
        potcl_secy_ver = bits.read(4)
        bits.finish()
        calendar_year = buf.read_uint(1) + 2000
        calendar_day = bits.read(5)
        calendar_month = bits.read(4)
        bits.finish()
        buf.skip(2)
        return cls(evt_id, potcl_ver, potcl_secy_ver, calendar_year, calendar_day, calendar_month)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        bits = BitWriter(buf)
        bits.write(self.potcl_ver, 4)
        bits.write(self.potcl_secy_ver, 4)
        bits.finish()
        buf.write_uint(self.calendar_year - 2000, 1)
        bits.write(self.calendar_day, 5)
        bits.write(self.calendar_month, 4)
        bits.finish()
        buf.write_zero(2)


@dataclass
class Evt000D:
    """Cell frequency."""

    evt_id: int = 0x000D
    cell_frequency: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt000D":
        evt_id = buf.read_uint(2)
        cell_frequency = buf.read_uint(4)
        buf.skip(2)
        return cls(evt_id, cell_frequency)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        buf.write_uint(self.cell_frequency, 4)
        buf.write_zero(2)


@dataclass
class Evt000E:
    """Battery charge status, backup state of charge and charge stop reasons."""

    evt_id: int = 0x000E
    bms_chrg_sts: int = 0
    bms_pack_soc_bkup: float = 0.0
    bms_pack_soc_v_bkup: int = 0
    bms_ofbd_chrg_sp_rsn: int = 0
    bms_wrls_chrg_sp_rsn: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt000E":
        evt_id = buf.read_uint(2)
        with BitReader(buf) as bits:
            chrg_sts = bits.read(5)
            soc_bkup = bits.read(10) * 0.1
            soc_v_bkup = bits.read(1)
        ofbd = buf.read_uint(1)
        wrls = buf.read_uint(1)
        buf.skip(2)
        return cls(evt_id, chrg_sts, soc_bkup, soc_v_bkup, ofbd, wrls)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        with BitWriter(buf) as bits:
            bits.write(self.bms_chrg_sts, 5)
            bits.write(int(self.bms_pack_soc_bkup * 10), 10)
            bits.write(self.bms_pack_soc_v_bkup, 1)
        buf.write_uint(self.bms_ofbd_chrg_sp_rsn, 1)
        buf.write_uint(self.bms_wrls_chrg_sp_rsn, 1)
        buf.write_zero(2)


@dataclass
class Evt000F:
    """High-precision traction motor torque and inverter current."""

    evt_id: int = 0x000F
    tm_actu_toq_hi_pre: float = 0.0
    tm_invtr_crnt_hi_pre: float = 0.0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt000F":
        evt_id = buf.read_uint(2)
        toq = buf.read_uint(2) * 0.1 - 2000
        with BitReader(buf) as bits:
            crnt = bits.read(15) * 0.1 - 1000
        buf.skip(2)
        return cls(evt_id, toq, crnt)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        buf.write_uint(int(self.tm_actu_toq_hi_pre * 10 + 20000), 2)
        with BitWriter(buf) as bits:
            bits.write(int(self.tm_invtr_crnt_hi_pre * 10 + 10000), 15)
        buf.write_zero(2)


@dataclass
class Evt0010:
    """Starter-alternator torque and current, motor alarms and usage mode."""

    evt_id: int = 0x0010
    sam_actu_toq_hi_pre: float = 0.0
    sam_invtr_crnt_hi_pre: float = 0.0
    sam_invtr_ov_tem_alrm: int = 0
    sam_ov_crnt_alrm: int = 0
    sam_ov_spd_alrm: int = 0
    sam_str_ov_tem_alrm: int = 0
    tm_invtr_ov_tem_alrm: int = 0
    tm_ov_crnt_alrm: int = 0
    tm_ov_spd_alrm: int = 0
    tm_str_ov_tem_alrm: int = 0
    usg_md: int = 0
    usg_md_v: int = 0

    _FLAGS = (
        "sam_invtr_ov_tem_alrm",
        "sam_ov_crnt_alrm",
        "sam_ov_spd_alrm",
        "sam_str_ov_tem_alrm",
        "tm_invtr_ov_tem_alrm",
        "tm_ov_crnt_alrm",
        "tm_ov_spd_alrm",
        "tm_str_ov_tem_alrm",
    )

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt0010":
        evt_id = buf.read_uint(2)
        toq = buf.read_uint(2) * 0.1 - 2000
        with BitReader(buf) as bits:
            crnt = bits.read(15) * 0.1 - 1000
            flags = {name: bits.read(1) for name in cls._FLAGS}
            usg_md = bits.read(4)
            usg_md_v = bits.read(1)
        return cls(
            evt_id=evt_id,
            sam_actu_toq_hi_pre=toq,
            sam_invtr_crnt_hi_pre=crnt,
            usg_md=usg_md,
            usg_md_v=usg_md_v,
            **flags,
        )

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        buf.write_uint(int(self.sam_actu_toq_hi_pre * 10 + 20000), 2)
        with BitWriter(buf) as bits:
            bits.write(int(self.sam_invtr_crnt_hi_pre * 10 + 10000), 15)
            for name in self._FLAGS:
                bits.write(getattr(self, name), 1)
            bits.write(self.usg_md, 4)
            bits.write(self.usg_md_v, 1)


@dataclass
class Evt0011:
    """Vehicle mode."""

    evt_id: int = 0x0011
    veh_md: int = 0
    veh_md_v: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt0011":
        evt_id = buf.read_uint(2)
        with BitReader(buf) as bits:
            veh_md = bits.read(4)
            veh_md_v = bits.read(1)
        buf.skip(5)
        return cls(evt_id, veh_md, veh_md_v)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        with BitWriter(buf) as bits:
            bits.write(self.veh_md, 4)
            bits.write(self.veh_md_v, 1)
        buf.write_zero(5)


@dataclass
class Evt0800:
    """System power mode, supply voltage and shift lever position."""

    evt_id: int = 0x0800
    sys_pwr_md: int = 0
    sys_pwr_md_v: int = 0
    sys_vol_v: int = 0
    tr_shft_lvr_pos: int = 0
    sys_vol: float = 0.0
    tr_shft_lvr_pos_v: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt0800":
        evt_id = buf.read_uint(2)
        bits = BitReader(buf)
        sys_pwr_md = bits.read(2)
        sys_pwr_md_v = bits.read(1)
        sys_vol_v = bits.read(1)
        tr_shft_lvr_pos = bits.read(4)
        bits.finish()
        sys_vol = buf.read_uint(1) * 0.1 + 3
        buf.skip(3)
        tr_shft_lvr_pos_v = bits.read(1)
        bits.finish()
        return cls(
            evt_id,
            sys_pwr_md,
            sys_pwr_md_v,
            sys_vol_v,
            tr_shft_lvr_pos,
            sys_vol,
            tr_shft_lvr_pos_v,
        )

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        bits = BitWriter(buf)
        bits.write(self.sys_pwr_md, 2)
        bits.write(self.sys_pwr_md_v, 1)
        bits.write(self.sys_vol_v, 1)
        bits.write(self.tr_shft_lvr_pos, 4)
        bits.finish()
        buf.write_uint(round_half_away((self.sys_vol - 3) / 0.1), 1)
        buf.write_zero(3)
        bits.write(self.tr_shft_lvr_pos_v, 1)
        bits.finish()


@dataclass
class Evt0801:
    """Brake pedal position."""

    evt_id: int = 0x0801
    brk_pdl_pos: float = 0.0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt0801":
        evt_id = buf.read_uint(2)
        buf.skip(5)
        with BitReader(buf) as bits:
            pos = bits.read(8) * 0.392157
        return cls(evt_id, pos)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        buf.write_zero(5)
        with BitWriter(buf) as bits:
            bits.write(round_half_away(self.brk_pdl_pos / 0.392157), 8)


@dataclass
class Evt0802:
    """Average driven wheel speed."""

    evt_id: int = 0x0802
    veh_spd_avg_drvn: float = 0.0
    veh_spd_avg_drvn_v: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt0802":
        evt_id = buf.read_uint(2)
        with BitReader(buf) as bits:
            speed = bits.read(15) * 0.015625
            valid = bits.read(1)
        buf.skip(4)
        return cls(evt_id, speed, valid)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        with BitWriter(buf) as bits:
            bits.write(round_half_away(self.veh_spd_avg_drvn / 0.015625), 15)
            bits.write(self.veh_spd_avg_drvn_v, 1)
        buf.write_zero(4)


@dataclass
class Evt0803:
    """Odometer and brake pedal position validity."""

    evt_id: int = 0x0803
    veh_odo: int = 0
    veh_odo_v: int = 0
    brk_pdl_pos_v: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "Evt0803":
        evt_id = buf.read_uint(2)
        with BitReader(buf) as bits:
            veh_odo = bits.read(24)
            veh_odo_v = bits.read(1)
            brk_pdl_pos_v = bits.read(1)
        buf.skip(2)
        return cls(evt_id, veh_odo, veh_odo_v, brk_pdl_pos_v)

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        with BitWriter(buf) as bits:
            bits.write(self.veh_odo, 24)
            bits.write(self.veh_odo_v, 1)
            bits.write(self.brk_pdl_pos_v, 1)
        buf.write_zero(2)


@dataclass
class UnknownFixedEvent:
    """An unrecognised event with a six-byte body."""

    evt_id: int
    data: bytes = field(default=bytes(_UNKNOWN_FIXED_SIZE))

    def __post_init__(self) -> None:
        self.data = bytes(self.data)
        if len(self.data) != _UNKNOWN_FIXED_SIZE:
            raise ValueError(
                f"unknown fixed event body must be {_UNKNOWN_FIXED_SIZE} bytes, "
                f"got {len(self.data)}"
            )

    @classmethod
    def read(cls, buf: ByteBuf) -> "UnknownFixedEvent":
        evt_id = buf.read_uint(2)
        return cls(evt_id, buf.read_bytes(_UNKNOWN_FIXED_SIZE))

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        buf.write_bytes(self.data)


@dataclass
class UnknownVariableEvent:
    """An unrecognised event whose body length follows its id."""

    evt_id: int
    evt_len: int = 0
    data: bytes = b""

    def __post_init__(self) -> None:
        self.data = bytes(self.data)

    @classmethod
    def read(cls, buf: ByteBuf) -> "UnknownVariableEvent":
        evt_id = buf.read_uint(2)
        evt_len = buf.read_uint(2)
        return cls(evt_id, evt_len, buf.read_bytes(evt_len))

    def write(self, buf: ByteBuf) -> None:
        buf.write_uint(self.evt_id, 2)
        buf.write_uint(self.evt_len, 2)
        buf.write_bytes(self.data)