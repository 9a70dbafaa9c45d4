# immolog

Reading and writing the events of a telematics box log.

Every event starts with a big-endian 16-bit event id. Fixed-size events
carry bit-packed signals in a short body; length-prefixed events follow the
id with a 16-bit body length and carry larger groups such as powertrain and
battery state, cell voltage lists and network status. Physical values are
stored as raw integers with a scale and an offset; the event classes turn
them into floats and integers on reading and back into raw fields on
writing.

No dependencies beyond the standard library.

## Modules

- `immolog.buffers` — `ByteBuf`, `BitReader`, `BitWriter`, `DecodeError`
  and `round_half_away`.
- `immolog.events_basic` — fixed-size events `Evt0001`, `Evt0003`–`Evt0011`,
  `Evt0800`–`Evt0803`, plus `UnknownFixedEvent` (id and a six-byte body) and
  `UnknownVariableEvent` (id, length and that many bytes).
- `immolog.events_powertrain` — `EvtD006` (powertrain, battery pack, motors,
  brakes), `EvtD009` (battery faults and alarms), `EvtD00F` (battery
  pressure, busbar temperature, outside air) and `EvtD019` (low-voltage
  battery and energy readiness).
- `immolog.events_status` — `EvtD00A` (VIN, module serial, eSIM ids),
  `EvtD00B` (cell voltages), `EvtD00C` and `EvtD00D` (cell and busbar
  temperatures), `EvtD00E` (battery pack code), `EvtD018` (dead-reckoning
  position and GNSS state), `EvtD01A`–`EvtD01D` (link, channel and radio
  status), `EvtD01F` (network recovery) and `EvtFFFF` (48-bit checksum
  trailer).

Every event class is a dataclass with a `read(buf)` class method and a
`write(buf)` method.

## Reading and writing an event

```python
from immolog.buffers import ByteBuf
from immolog.events_basic import Evt0001

out = ByteBuf()
Evt0001(tbox_sys_tim=1700000000).write(out)
data = out.to_bytes()                 # 2-byte id followed by a 48-bit time

evt = Evt0001.read(ByteBuf(data))
assert evt.tbox_sys_tim == 1700000000
```

A reader can look at the next id before choosing a class:

```python
from immolog.buffers import ByteBuf
from immolog.events_powertrain import EvtD006
from immolog.events_status import EvtFFFF

buf = ByteBuf(raw_bytes)
if buf.peek_uint16() == 0xD006:
    evt = EvtD006.read(buf)
```

For length-prefixed events, `evt_len` governs the body: on reading, bytes
left over after the known fields are skipped; on writing, the body is
padded with zero bytes up to `evt_len`. Fixed-width text fields are read
with their padding bytes kept and written as given, so the length field
supplies the padding.

Reading past the end of the data raises `immolog.buffers.DecodeError`, a
subclass of `ValueError`.

## Low-level buffers

`ByteBuf` holds a growable byte array with a reader position
(`reader_index`) and a writer position (`writer_index`). It reads and
writes big-endian integers of any byte width (`read_uint`, `read_int`,
`write_uint`, `write_int`; written values are truncated to the field
width), raw bytes, UTF-8 strings of a fixed byte count, skips and zero
padding. `to_bytes()` returns the bytes not yet read.

`BitReader` and `BitWriter` read and write MSB-first bit fields that may
cross byte boundaries, signed or unsigned. Both can be used as context
managers; leaving the block calls `finish()`, which drops the rest of the
current byte when reading and flushes a partly filled byte, zero-padded,
when writing.

`round_half_away` rounds halves away from zero and raises `ValueError` for
NaN and infinities.

## What it does not do

The package encodes and decodes single events. It does not split a byte
stream into packets, dispatch on event ids, or handle the diagnostic
trouble-code events (`0xD008`, `0xD010`–`0xD017`, `0xD020`), and it does not
build compressed upload files. Those steps are left to the caller, using
`ByteBuf.peek_uint16` and the event classes above.