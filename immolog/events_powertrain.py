"""Length-prefixed bit-packed events: powertrain, battery and energy state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .buffers import BitReader, BitWriter, ByteBuf, round_half_away

__all__ = ["EvtD006", "EvtD009", "EvtD00F", "EvtD019"]


class _Kind(Enum):
    INT = "int"  # integer physical value, integer division on encode
    ROUND = "round"  # scaled float, rounded half away from zero on encode
    TRUNC = "trunc"  # scaled float, truncated toward zero on encode


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


@dataclass(frozen=True)
class _Field:
    """One bit field: physical value = raw * scale + offset."""

    name: str | None
    bits: int
    kind: _Kind = _Kind.INT
    scale: float = 1
    offset: float = 0

    def decode(self, raw: int) -> Any:
        if self.kind is _Kind.INT:
            return int(raw * self.scale + self.offset)
        return raw * self.scale + self.offset

    def encode(self, value: Any) -> int:
        if self.kind is _Kind.INT:
            return _trunc_div(int(value) - int(self.offset), int(self.scale))
        scaled = (value - self.offset) / self.scale
        if self.kind is _Kind.ROUND:
            return round_half_away(scaled)
        return int(scaled)


def _u(name: str, bits: int) -> _Field:
    return _Field(name, bits)


def _i(name: str, bits: int, offset: int, factor: int = 1) -> _Field:
    return _Field(name, bits, _Kind.INT, factor, offset)


def _f(name: str, bits: int, scale: float, offset: float = 0) -> _Field:
    return _Field(name, bits, _Kind.ROUND, scale, offset)


def _t(name: str, bits: int, scale: float, offset: float = 0) -> _Field:
    return _Field(name, bits, _Kind.TRUNC, scale, offset)


def _pad(bits: int) -> _Field:
    return _Field(None, bits)


def _read_record(buf: ByteBuf, layout: tuple[_Field, ...]) -> dict[str, Any]:
    """Read id, length and bit fields, then skip whatever the length leaves."""
    evt_id = buf.read_uint(2)
    evt_len = buf.read_uint(2)
    start = buf.reader_index
    values: dict[str, Any] = {"evt_id": evt_id, "evt_len": evt_len}
    with BitReader(buf) as bits:
        for spec in layout:
            raw = bits.read(spec.bits)
            if spec.name is not None:
                values[spec.name] = spec.decode(raw)
    consumed = buf.reader_index - start
    if evt_len > consumed:
        buf.skip(evt_len - consumed)
    return values


def _write_record(event: Any, buf: ByteBuf, layout: tuple[_Field, ...]) -> None:
    """Write id, length and bit fields, then zero-pad up to the length."""
    buf.write_uint(event.evt_id, 2)
    buf.write_uint(event.evt_len, 2)
    start = buf.writer_index
    with BitWriter(buf) as bits:
        for spec in layout:
            if spec.name is None:
                bits.skip(spec.bits)
            else:
                bits.write(spec.encode(getattr(event, spec.name)), spec.bits)
    written = buf.writer_index - start
    if event.evt_len > written:
        buf.write_zero(event.evt_len - written)


_D006_LAYOUT = (
    _u("ept_rdy", 1),
    _u("bms_bsc_sta", 5),
    _f("bms_pack_crnt", 16, 0.05, -1000),
    _u("bms_pack_crnt_v", 1),
    _f("bms_pack_soc", 10, 0.1),
    _u("bms_pack_soc_v", 1),
    _f("bms_pack_soc_dsp", 10, 0.1),
    _u("bms_pack_soc_dsp_v", 1),
    _u("elec_veh_sys_md", 4),
    _f("bms_pack_vol", 12, 0.25),
    _u("bms_pack_vol_v", 1),
    _u("hvdcdc_sta", 3),
    _f("ept_tr_inpt_shaft_toq", 12, 0.5, -848),
    _u("ept_tr_inpt_shaft_toq_v", 1),
    _i("ept_tr_otpt_shaft_toq", 12, -3392, 2),
    _u("ept_tr_otpt_shaft_toq_v", 1),
    _u("ept_brk_pdl_dscrt_inpt_sts", 1),
    _u("ept_brk_pdl_dscrt_inpt_sts_v", 1),
    _u("brk_sys_brk_lghts_reqd", 1),
    _u("epb_sys_brk_lghts_reqd", 1),
    _u("epb_sys_brk_lghts_reqd_a", 1),
    _f("bms_pt_isltn_rstc", 14, 0.5),
    _f("ept_accel_actu_pos", 8, 0.392157),
    _u("ept_accel_actu_pos_v", 1),
    _u("tm_invtr_crnt_v", 1),
    _i("tm_invtr_crnt", 11, -1024),
    _u("isg_invtr_crnt_v", 1),
    _i("isg_invtr_crnt", 11, -1024),
    _i("sam_invtr_crnt", 11, -1024),
    _u("sam_invtr_crnt_v", 1),
    _u("tm_sta", 4),
    _u("isg_sta", 4),
    _u("sam_sta", 4),
    _i("tm_invtr_tem", 8, -40),
    _i("isg_invtr_tem", 8, -40),
    _i("sam_invtr_tem", 8, -40),
    _i("tm_spd", 16, -32768),
    _u("tm_spd_v", 1),
    _i("isg_spd", 16, -32768),
    _u("isg_spd_v", 1),
    _u("sam_spd_v", 1),
    _i("sam_spd", 16, -32768),
    _f("tm_actu_toq", 11, 0.5, -512),
    _u("tm_actu_toq_v", 1),
    _f("isg_actu_toq", 11, 0.5, -512),
    _u("isg_actu_toq_v", 1),
    _u("sam_actu_toq_v", 1),
    _f("sam_actu_toq", 11, 0.5, -512),
    _i("tm_sttr_tem", 8, -40),
    _i("isg_sttr_tem", 8, -40),
    _i("sam_sttr_tem", 8, -40),
    _u("hvdcdc_hv_side_vol", 10),
    _u("hvdcdc_hv_side_vol_v", 1),
    _f("avg_fuel_csump", 8, 0.1),
    _u("tm_invtr_vol_v", 1),
    _u("tm_invtr_vol", 10),
    _u("isg_invtr_vol_v", 1),
    _u("isg_invtr_vol", 10),
    _u("sam_invtr_vol_v", 1),
    _u("sam_invtr_vol", 10),
    _u("bms_cell_max_tem_indx", 8),
    _f("bms_cell_max_tem", 8, 0.5, -40),
    _u("bms_cell_max_tem_v", 1),
    _u("bms_cell_min_tem_indx", 8),
    _f("bms_cell_min_tem", 8, 0.5, -40),
    _u("bms_cell_min_tem_v", 1),
    _u("bms_cell_max_vol_indx", 8),
    _f("bms_cell_max_vol", 13, 0.001),
    _u("bms_cell_max_vol_v", 1),
    _u("bms_cell_min_vol_indx", 8),
    _f("bms_cell_min_vol", 13, 0.001),
    _u("bms_cell_min_vol_v", 1),
    _u("bms_pt_isltn_rstc_v", 1),
    _i("hvdcdc_tem", 8, -40),
    _u("brk_flud_lvl_low", 1),
    _u("brk_sys_red_brk_tllt_req", 1),
    _u("absf", 1),
    _u("vse_sts", 3),
    _u("ibstr_wrnng_io", 1),
    _u("bms_hvil_clsd", 1),
    _f("ept_tr_otpt_shaft_tot_toq", 12, 0.5, -848),
    _u("ept_tr_otpt_shaft_tot_toq_v", 1),
    _u("brk_flud_lvl_low_v", 1),
    _f("en_spd", 16, 0.25),
    _u("en_spd_sts", 2),
    _i("fuel_csump", 12, 0, 16),
    _u("en_run_a", 1),
    _u("avg_fuel_csump_v", 1),
)


@dataclass
class EvtD006:
    """Powertrain, battery pack, motor and brake state."""

    evt_id: int = 0xD006
    evt_len: int = 0
    ept_rdy: int = 0
    bms_bsc_sta: int = 0
    bms_pack_crnt: float = 0.0
    bms_pack_crnt_v: int = 0
    bms_pack_soc: float = 0.0
    bms_pack_soc_v: int = 0
    bms_pack_soc_dsp: float = 0.0
    bms_pack_soc_dsp_v: int = 0
    elec_veh_sys_md: int = 0
    bms_pack_vol: float = 0.0
    bms_pack_vol_v: int = 0
    hvdcdc_sta: int = 0
    ept_tr_inpt_shaft_toq: float = 0.0
    ept_tr_inpt_shaft_toq_v: int = 0
    ept_tr_otpt_shaft_toq: int = 0
    ept_tr_otpt_shaft_toq_v: int = 0
    ept_brk_pdl_dscrt_inpt_sts: int = 0
    ept_brk_pdl_dscrt_inpt_sts_v: int = 0
    brk_sys_brk_lghts_reqd: int = 0
    epb_sys_brk_lghts_reqd: int = 0
    epb_sys_brk_lghts_reqd_a: int = 0
    bms_pt_isltn_rstc: float = 0.0
    ept_accel_actu_pos: float = 0.0
    ept_accel_actu_pos_v: int = 0
    tm_invtr_crnt_v: int = 0
    tm_invtr_crnt: int = 0
    isg_invtr_crnt_v: int = 0
    isg_invtr_crnt: int = 0
    sam_invtr_crnt: int = 0
    sam_invtr_crnt_v: int = 0
    tm_sta: int = 0
    isg_sta: int = 0
    sam_sta: int = 0
    tm_invtr_tem: int = 0
    isg_invtr_tem: int = 0
    sam_invtr_tem: int = 0
    tm_spd: int = 0
    tm_spd_v: int = 0
    isg_spd: int = 0
    isg_spd_v: int = 0
    sam_spd_v: int = 0
    sam_spd: int = 0
    tm_actu_toq: float = 0.0
    tm_actu_toq_v: int = 0
    isg_actu_toq: float = 0.0
    isg_actu_toq_v: int = 0
    sam_actu_toq_v: int = 0
    sam_actu_toq: float = 0.0
    tm_sttr_tem: int = 0
    isg_sttr_tem: int = 0
    sam_sttr_tem: int = 0
    hvdcdc_hv_side_vol: int = 0
    hvdcdc_hv_side_vol_v: int = 0
    avg_fuel_csump: float = 0.0
    tm_invtr_vol_v: int = 0
    tm_invtr_vol: int = 0
    isg_invtr_vol_v: int = 0
    isg_invtr_vol: int = 0
    sam_invtr_vol_v: int = 0
    sam_invtr_vol: int = 0
    bms_cell_max_tem_indx: int = 0
    bms_cell_max_tem: float = 0.0
    bms_cell_max_tem_v: int = 0
    bms_cell_min_tem_indx: int = 0
    bms_cell_min_tem: float = 0.0
    bms_cell_min_tem_v: int = 0
    bms_cell_max_vol_indx: int = 0
    bms_cell_max_vol: float = 0.0
    bms_cell_max_vol_v: int = 0
    bms_cell_min_vol_indx: int = 0
    bms_cell_min_vol: float = 0.0
    bms_cell_min_vol_v: int = 0
    bms_pt_isltn_rstc_v: int = 0
    hvdcdc_tem: int = 0
    brk_flud_lvl_low: int = 0
    brk_sys_red_brk_tllt_req: int = 0
    absf: int = 0
    vse_sts: int = 0
    ibstr_wrnng_io: int = 0
    bms_hvil_clsd: int = 0
    ept_tr_otpt_shaft_tot_toq: float = 0.0
    ept_tr_otpt_shaft_tot_toq_v: int = 0
    brk_flud_lvl_low_v: int = 0
    en_spd: float = 0.0
    en_spd_sts: int = 0
    fuel_csump: int = 0
    en_run_a: int = 0
    avg_fuel_csump_v: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "EvtD006":
        return cls(**_read_record(buf, _D006_LAYOUT))

    def write(self, buf: ByteBuf) -> None:
        _write_record(self, buf, _D006_LAYOUT)


_D009_ALARMS = (
    "bms_tem_over_dif_alrm",
    "bms_over_tem_alrm",
    "bms_over_pack_vol_alrm",
    "bms_under_pack_vol_alrm",
    "bms_hvil_alrm",
    "bms_over_cell_vol_alrm",
    "bms_under_cell_vol_alrm",
    "bms_low_soc_alrm",
    "bms_jumpng_soc_alrm",
    "bms_hi_soc_alrm",
    "bms_pack_vol_msmch_alrm",
    "bms_poor_cell_cnstncy_alrm",
    "bms_cell_over_chrgd_alrm",
    "bms_low_pt_isltn_rstc_alrm",
)

_D009_MOTOR_ALARMS = (
    "tm_str_ov_temp_alrm",
    "tm_invtr_ov_temp_alrm",
    "isc_str_ov_temp_alrm",
    "isc_invtr_ov_temp_alrm",
    "sam_str_ov_temp_alrm",
    "sam_invtr_ov_temp_alrm",
    "ept_hvdcdc_md_req",
)

_D009_LAYOUT = (
    _u("bms_cmu_flt", 2),
    _u("bms_cell_volt_flt", 2),
    _u("bms_pack_tem_flt", 2),
    _u("bms_pack_volt_flt", 2),
    _u("bms_wrnng_info", 6),
    _u("bms_wrnng_info_pv", 6),
    _u("bms_wrnng_info_rc", 4),
    _u("bms_pre_thrm_flt_ind", 1),
    _pad(5),
    _u("bms_keep_sys_awk_scene", 4),
    *(_u(name, 3) for name in _D009_ALARMS),
    _i("tm_rtr_tem", 8, -40),
    *(_u(name, 3) for name in _D009_MOTOR_ALARMS),
    _u("vcu_secy_wrnng_info", 6),
    _u("vcu_secy_wrnng_info_pv", 6),
    _u("vcu_secy_wrnng_info_rc", 4),
    _u("vcu_secy_wrnng_info_crc", 8),
    _u("bms_onbd_chrg_sp_rsn", 8),
)


@dataclass
class EvtD009:
    """Battery faults and alarms, motor over-temperature alarms, VCU warnings."""

    evt_id: int = 0xD009
    evt_len: int = 0
    bms_cmu_flt: int = 0
    bms_cell_volt_flt: int = 0
    bms_pack_tem_flt: int = 0
    bms_pack_volt_flt: int = 0
    bms_wrnng_info: int = 0
    bms_wrnng_info_pv: int = 0
    bms_wrnng_info_rc: int = 0
    bms_pre_thrm_flt_ind: int = 0
    bms_keep_sys_awk_scene: int = 0
    bms_tem_over_dif_alrm: int = 0
    bms_over_tem_alrm: int = 0
    bms_over_pack_vol_alrm: int = 0
    bms_under_pack_vol_alrm: int = 0
    bms_hvil_alrm: int = 0
    bms_over_cell_vol_alrm: int = 0
    bms_under_cell_vol_alrm: int = 0
    bms_low_soc_alrm: int = 0
    bms_jumpng_soc_alrm: int = 0
    bms_hi_soc_alrm: int = 0
    bms_pack_vol_msmch_alrm: int = 0
    bms_poor_cell_cnstncy_alrm: int = 0
    bms_cell_over_chrgd_alrm: int = 0
    bms_low_pt_isltn_rstc_alrm: int = 0
    tm_rtr_tem: int = 0
    tm_str_ov_temp_alrm: int = 0
    tm_invtr_ov_temp_alrm: int = 0
    isc_str_ov_temp_alrm: int = 0
    isc_invtr_ov_temp_alrm: int = 0
    sam_str_ov_temp_alrm: int = 0
    sam_invtr_ov_temp_alrm: int = 0
    ept_hvdcdc_md_req: int = 0
    vcu_secy_wrnng_info: int = 0
    vcu_secy_wrnng_info_pv: int = 0
    vcu_secy_wrnng_info_rc: int = 0
    vcu_secy_wrnng_info_crc: int = 0
    bms_onbd_chrg_sp_rsn: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "EvtD009":
        return cls(**_read_record(buf, _D009_LAYOUT))

    def write(self, buf: ByteBuf) -> None:
        _write_record(self, buf, _D009_LAYOUT)


_D00F_LAYOUT = (
    _u("bms_wrnng_info_crc", 8),
    _f("bms_busbar_temp_max", 8, 0.5, -40),
    _u("bms_pre_thrm_flt_ind_bkup", 1),
    _u("bms_wrnng_info_rc_bkup", 4),
    _u("bms_bat_prs_flt", 3),
    _u("bms_wrnng_info_bkup", 6),
    _u("bms_bat_prs_alrm", 1),
    _u("bms_bat_prs_alrm_v", 1),
    _u("bms_bat_prs_snsr_v", 1),
    _f("bms_bat_prs_snsr_val_bkup", 15, 0.05),
    _u("bms_bat_prs_snsr_v_bkup", 1),
    _f("bms_bat_prs_snsr_val", 15, 0.05),
    _f("bms_clnt_pump_pwm_req", 8, 0.4),
    _u("bms_pump_pwr_on_req", 1),
    _u("bms_bat_prs_alrm_v_bkup", 1),
    _u("bms_bat_prs_alrm_bkup", 1),
    _u("bms_wrnng_info_crc_bkup", 4),
    _u("vcu_bat_prs_alrm", 1),
    _f("otsd_air_tem_cr_val", 8, 0.5, -40),
    _u("vcu_bat_prs_alrm_v", 1),
    _u("otsd_air_tem_cr_val_v", 1),
)


@dataclass
class EvtD00F:
    """Battery pressure and busbar temperature, pump request, outside air."""

    evt_id: int = 0xD00F
    evt_len: int = 0
    bms_wrnng_info_crc: int = 0
    bms_busbar_temp_max: float = 0.0
    bms_pre_thrm_flt_ind_bkup: int = 0
    bms_wrnng_info_rc_bkup: int = 0
    bms_bat_prs_flt: int = 0
    bms_wrnng_info_bkup: int = 0
    bms_bat_prs_alrm: int = 0
    bms_bat_prs_alrm_v: int = 0
    bms_bat_prs_snsr_v: int = 0
    bms_bat_prs_snsr_val_bkup: float = 0.0
    bms_bat_prs_snsr_v_bkup: int = 0
    bms_bat_prs_snsr_val: float = 0.0
    bms_clnt_pump_pwm_req: float = 0.0
    bms_pump_pwr_on_req: int = 0
    bms_bat_prs_alrm_v_bkup: int = 0
    bms_bat_prs_alrm_bkup: int = 0
    bms_wrnng_info_crc_bkup: int = 0
    vcu_bat_prs_alrm: int = 0
    otsd_air_tem_cr_val: float = 0.0
    vcu_bat_prs_alrm_v: int = 0
    otsd_air_tem_cr_val_v: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "EvtD00F":
        return cls(**_read_record(buf, _D00F_LAYOUT))

    def write(self, buf: ByteBuf) -> None:
        _write_record(self, buf, _D00F_LAYOUT)


_D019_LAYOUT = (
    _u("bcm_avlbly", 1),
    _u("ccu_avlbly", 1),
    _u("enrg_spl_req_ept_rdy", 1),
    _t("hvdcdc_lv_side_vol", 8, 0.125),
    _t("bat_crnt", 16, 0.03125, -1024),
    _t("bat_soc", 8, 0.4),
    _u("bat_soc_sts", 2),
    _t("bat_vol", 14, 0.00097656, 3),
    _u("enrg_spl_req", 1),
    _u("enrg_spl_req_scene", 64),
    _u("veh_enrg_rdy_lvl", 3),
    _u("veh_enrg_rdy_lvl_v", 1),
    _u("hv_estb_cond", 2),
)


@dataclass
class EvtD019:
    """Low-voltage battery, energy supply request and readiness level.

    Scaled values are truncated toward zero when encoded.
    """

    evt_id: int = 0xD019
    evt_len: int = 0
    bcm_avlbly: int = 0
    ccu_avlbly: int = 0
    enrg_spl_req_ept_rdy: int = 0
    hvdcdc_lv_side_vol: float = 0.0
    bat_crnt: float = 0.0
    bat_soc: float = 0.0
    bat_soc_sts: int = 0
    bat_vol: float = 0.0
    enrg_spl_req: int = 0
    enrg_spl_req_scene: int = 0
    veh_enrg_rdy_lvl: int = 0
    veh_enrg_rdy_lvl_v: int = 0
    hv_estb_cond: int = 0

    @classmethod
    def read(cls, buf: ByteBuf) -> "EvtD019":
        return cls(**_read_record(buf, _D019_LAYOUT))

    def write(self, buf: ByteBuf) -> None:
        _write_record(self, buf, _D019_LAYOUT)