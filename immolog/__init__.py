"""Byte and bit buffers and event codecs for telematics box event logs."""

__version__ = "0.1.0"
__all__ = ["buffers", "events_basic", "events_powertrain", "events_status"]