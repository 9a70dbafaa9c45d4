import dataclasses

import pytest

from immolog.buffers import ByteBuf, DecodeError
from immolog.events_powertrain import EvtD006, EvtD009, EvtD00F, EvtD019


def encode(event):
    buf = ByteBuf()
    event.write(buf)
    return buf.to_bytes()


def natural_size(event):
    """Body size when no length padding is requested."""
    return len(encode(dataclasses.replace(event, evt_len=0))) - 4


def roundtrip(event):
    return type(event).read(ByteBuf(encode(event)))


def zero_record(evt_id, body_len):
    return evt_id.to_bytes(2, "big") + body_len.to_bytes(2, "big") + bytes(body_len)


def sample_d006():
    event = EvtD006(
        ept_rdy=1,
        bms_bsc_sta=3,
        bms_pack_crnt=12.5,
        bms_pack_soc=55.3,
        elec_veh_sys_md=7,
        bms_pack_vol=401.25,
        ept_tr_otpt_shaft_toq=100,
        tm_invtr_crnt=-300,
        tm_invtr_tem=55,
        tm_spd=-1200,
        sam_spd=4000,
        tm_actu_toq=-20.5,
        hvdcdc_hv_side_vol=390,
        avg_fuel_csump=6.4,
        bms_cell_max_tem=31.5,
        bms_cell_max_vol=3.456,
        bms_cell_min_vol=3.201,
        hvdcdc_tem=-10,
        vse_sts=5,
        en_spd=800.25,
        en_spd_sts=2,
        fuel_csump=320,
        avg_fuel_csump_v=1,
    )
    return dataclasses.replace(event, evt_len=natural_size(event))


def test_d006_zero_body_applies_offsets():
    data = zero_record(0xD006, 64)
    buf = ByteBuf(data)
    event = EvtD006.read(buf)
    assert buf.reader_index == len(data)
    assert event.evt_id == 0xD006
    assert event.evt_len == 64
    assert event.bms_pack_crnt == pytest.approx(-1000)
    assert event.ept_tr_inpt_shaft_toq == pytest.approx(-848)
    assert event.ept_tr_otpt_shaft_toq == -3392
    assert event.tm_invtr_crnt == -1024
    assert event.tm_spd == -32768
    assert event.tm_actu_toq == pytest.approx(-512)
    assert event.tm_invtr_tem == -40
    assert event.bms_cell_max_tem == pytest.approx(-40)
    assert event.fuel_csump == 0


def test_d006_first_bit_is_ept_rdy():
    data = bytearray(zero_record(0xD006, 64))
    data[4] = 0x80
    event = EvtD006.read(ByteBuf(bytes(data)))
    assert event.ept_rdy == 1
    assert event.bms_bsc_sta == 0


def test_d006_roundtrip():
    event = sample_d006()
    back = roundtrip(event)
    assert dataclasses.asdict(back) == pytest.approx(dataclasses.asdict(event), abs=1e-3)


def test_d006_bytes_are_stable():
    data = encode(sample_d006())
    assert encode(EvtD006.read(ByteBuf(data))) == data


def test_d006_pads_to_declared_length():
    event = sample_d006()
    size = event.evt_len
    padded = dataclasses.replace(event, evt_len=size + 5)
    data = encode(padded)
    assert len(data) == 4 + size + 5
    assert data[-5:] == bytes(5)
    buf = ByteBuf(data + b"\x01\x02")
    back = EvtD006.read(buf)
    assert buf.reader_index == len(data)
    assert back.en_spd == pytest.approx(event.en_spd)


def test_d006_short_length_reads_all_fields():
    event = dataclasses.replace(sample_d006(), evt_len=0)
    data = encode(event)
    buf = ByteBuf(data)
    back = EvtD006.read(buf)
    assert not buf.readable()
    assert back.evt_len == 0
    assert back.tm_spd == event.tm_spd


def test_d006_truncated_input_raises():
    data = encode(sample_d006())
    with pytest.raises(DecodeError):
        EvtD006.read(ByteBuf(data[:10]))


def test_d006_integer_fields_divide_on_encode():
    event = dataclasses.replace(sample_d006(), fuel_csump=335, ept_tr_otpt_shaft_toq=101)
    back = roundtrip(event)
    assert back.fuel_csump == 320
    assert back.ept_tr_otpt_shaft_toq == 100


def test_d009_zero_body_rotor_temperature_offset():
    event = EvtD009.read(ByteBuf(zero_record(0xD009, 32)))
    assert event.tm_rtr_tem == -40
    assert event.bms_onbd_chrg_sp_rsn == 0


def test_d009_roundtrip():
    event = EvtD009(
        bms_cmu_flt=2,
        bms_cell_volt_flt=1,
        bms_pack_tem_flt=3,
        bms_wrnng_info=45,
        bms_wrnng_info_pv=12,
        bms_wrnng_info_rc=9,
        bms_pre_thrm_flt_ind=1,
        bms_keep_sys_awk_scene=6,
        bms_over_tem_alrm=4,
        bms_low_pt_isltn_rstc_alrm=7,
        tm_rtr_tem=85,
        ept_hvdcdc_md_req=5,
        vcu_secy_wrnng_info=33,
        vcu_secy_wrnng_info_crc=200,
        bms_onbd_chrg_sp_rsn=17,
    )
    event = dataclasses.replace(event, evt_len=natural_size(event) + 2)
    data = encode(event)
    assert len(data) == 4 + event.evt_len
    assert EvtD009.read(ByteBuf(data)) == event


def test_d00f_leading_bytes_and_offsets():
    body = bytearray(24)
    body[0] = 7
    data = (0xD00F).to_bytes(2, "big") + len(body).to_bytes(2, "big") + bytes(body)
    event = EvtD00F.read(ByteBuf(data))
    assert event.bms_wrnng_info_crc == 7
    assert event.bms_busbar_temp_max == pytest.approx(-40)
    assert event.otsd_air_tem_cr_val == pytest.approx(-40)


def test_d00f_roundtrip():
    event = EvtD00F(
        bms_wrnng_info_crc=0xAB,
        bms_busbar_temp_max=25.5,
        bms_wrnng_info_rc_bkup=11,
        bms_bat_prs_flt=6,
        bms_wrnng_info_bkup=40,
        bms_bat_prs_snsr_val_bkup=101.35,
        bms_bat_prs_snsr_val=99.95,
        bms_clnt_pump_pwm_req=60.0,
        bms_pump_pwr_on_req=1,
        bms_wrnng_info_crc_bkup=13,
        otsd_air_tem_cr_val=-12.5,
        otsd_air_tem_cr_val_v=1,
    )
    event = dataclasses.replace(event, evt_len=natural_size(event))
    back = roundtrip(event)
    assert dataclasses.asdict(back) == pytest.approx(dataclasses.asdict(event), abs=1e-6)


def test_d019_roundtrip_exact_values():
    event = EvtD019(
        bcm_avlbly=1,
        enrg_spl_req_ept_rdy=1,
        hvdcdc_lv_side_vol=13.5,
        bat_crnt=-12.5,
        bat_soc=0.0,
        bat_soc_sts=2,
        bat_vol=3.0,
        enrg_spl_req=1,
        enrg_spl_req_scene=2**64 - 1,
        veh_enrg_rdy_lvl=5,
        veh_enrg_rdy_lvl_v=1,
        hv_estb_cond=3,
    )
    event = dataclasses.replace(event, evt_len=natural_size(event))
    assert roundtrip(event) == event


def test_d019_scaled_values_truncate():
    event = EvtD019(hvdcdc_lv_side_vol=0.1, bat_vol=3.0, bat_crnt=-1024.0)
    back = roundtrip(event)
    assert back.hvdcdc_lv_side_vol == 0.0
    assert back.bat_crnt == -1024.0


def test_d019_padding_skipped_on_read():
    event = EvtD019(enrg_spl_req_scene=12345)
    event = dataclasses.replace(event, evt_len=natural_size(event) + 3)
    data = encode(event)
    buf = ByteBuf(data + b"\xff")
    back = EvtD019.read(buf)
    assert back.enrg_spl_req_scene == 12345
    assert buf.reader_index == len(data)