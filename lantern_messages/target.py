"""
The ``target`` in the frame address says which device a message is for.

It is 8 bytes on the wire. ``AllDevices`` is all zeros and goes with
``tagged=True``. A ``Device`` is the 6 byte serial of the device followed by two
zero bytes and goes with ``tagged=False``.
"""
from lantern_protocol.errors import BadConversion

import binascii
import attrs

TARGET_SIZE = 8
SERIAL_SIZE = 6


@attrs.define(frozen=True)
class AllDevices:
    tagged = True

    def __repr__(self):
        return "<AllDevices>"


def as_bytes(value):
    if isinstance(value, bytearray):
        return bytes(value)
    return value


def check_serial(instance, attribute, value):
    if not isinstance(value, bytes):
        raise BadConversion("Serial must be bytes", got=type(value))
    if len(value) != SERIAL_SIZE:
        raise BadConversion("Serial must be 6 bytes", got=len(value))
    if not any(value):
        raise BadConversion("Serial can't be all zeros, use AllDevices instead")


@attrs.define(frozen=True)
class Device:
    serial: bytes = attrs.field(converter=as_bytes, validator=check_serial)

    tagged = False

    @classmethod
    def from_hex(kls, serial):
        """Create a Device from a serial like ``d073d5001337``"""
        if not isinstance(serial, str):
            raise BadConversion("Serial must be a hex string", got=type(serial))
        try:
            return kls(binascii.unhexlify(serial.replace(":", "")))
        except (binascii.Error, ValueError) as error:
            raise BadConversion("Serial must be a hex string", got=serial, error=error)

    @property
    def hex(self):
        return binascii.hexlify(self.serial).decode()

    def __repr__(self):
        return f"<Device {self.hex}>"


def target_to_bytes(target):
    if isinstance(target, AllDevices):
        return b"\x00" * TARGET_SIZE
    if isinstance(target, Device):
        return target.serial + b"\x00" * (TARGET_SIZE - SERIAL_SIZE)
    raise BadConversion("Target must be AllDevices or a Device", got=type(target))


def target_from_bytes(bts):
    # The last two bytes are never looked at
    serial = bts[:SERIAL_SIZE]
    if not any(serial):
        return AllDevices()
    return Device(serial)
