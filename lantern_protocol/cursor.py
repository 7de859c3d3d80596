"""
Sequential reading and writing of little endian fields.

Both ends of this work in bits rather than bytes so that fields smaller than a
byte can sit next to each other. For example the frame header holds a 12 bit
protocol followed by three flags in the same two bytes.

.. autoclass:: lantern_protocol.cursor.Writer

.. autoclass:: lantern_protocol.cursor.Reader
"""
from lantern_protocol.errors import BadConversion, TruncatedInput

from bitarray.util import zeros
from bitarray import bitarray
import struct

# Built once at import time and only read after that
packers = {
    fmt: struct.Struct(fmt)
    for fmt in ("<b", "<B", "<?", "<h", "<H", "<i", "<I", "<q", "<Q", "<f")
}


def bits_from(bts):
    """Turn bytes into a little endian bitarray"""
    b = bitarray(endian="little")
    b.frombytes(bytes(bts))
    return b


class Writer:
    """
    Accumulate fields into a buffer

    Values are written in the order they are given and the result is returned
    as bytes with ``tobytes``.
    """

    def __init__(self):
        self.bits = bitarray(endian="little")

    @property
    def size_bits(self):
        return len(self.bits)

    def write(self, fmt, val, size_bits=None, **extra_info):
        """
        Write ``val`` using the ``struct`` format ``fmt``.

        If ``size_bits`` is smaller than the format then only that many of the
        low bits are written and the rest must be zero.
        """
        try:
            b = bits_from(packers[fmt].pack(val))
        except (struct.error, TypeError, OverflowError) as error:
            raise BadConversion("Failed to pack field", val=val, fmt=fmt, error=error, **extra_info)

        if size_bits is not None and size_bits < len(b):
            if b[size_bits:].any():
                raise BadConversion(
                    "Value is too large for the field", val=val, size_bits=size_bits, **extra_info
                )
            b = b[:size_bits]

        self.bits.extend(b)

    def write_bool(self, val, **extra_info):
        if val not in (True, False):
            raise BadConversion("Trying to convert a non boolean into 1 bit", val=val, **extra_info)
        self.bits.append(bool(val))

    def write_bytes(self, val, size_bits, **extra_info):
        """Write ``val`` and pad with zeros until ``size_bits`` have been written"""
        if not isinstance(val, (bytes, bytearray)):
            raise BadConversion("Expected bytes", got=type(val), **extra_info)

        if len(val) * 8 > size_bits:
            raise BadConversion(
                "Value is too long for the field",
                got_bytes=len(val),
                want_bytes=size_bits // 8,
                **extra_info
            )

        self.bits.extend(bits_from(val))
        self.write_zeros(size_bits - len(val) * 8)

    def write_zeros(self, size_bits):
        if size_bits > 0:
            self.bits.extend(zeros(size_bits, endian="little"))

    def tobytes(self):
        return self.bits.tobytes()


class Reader:
    """
    Walk through a buffer, consuming fields from the front

    Every read complains with ``TruncatedInput`` if there isn't enough left.
    """

    def __init__(self, bts):
        self.bits = bts if isinstance(bts, bitarray) else bits_from(bts)
        self.index = 0

    @property
    def remaining(self):
        """The number of bits left to read"""
        return len(self.bits) - self.index

    def take(self, size_bits, **extra_info):
        if size_bits > self.remaining:
            raise TruncatedInput(
                "Ran out of bytes", want_bits=size_bits, have_bits=self.remaining, **extra_info
            )
        val = self.bits[self.index : self.index + size_bits]
        self.index += size_bits
        return val

    def read(self, fmt, size_bits=None, **extra_info):
        pk = packers[fmt]
        full = pk.size * 8
        if size_bits is None:
            size_bits = full

        val = self.take(size_bits, **extra_info)
        if size_bits < full:
            val.extend(zeros(full - size_bits, endian="little"))

        return pk.unpack(val.tobytes())[0]

    def read_bool(self, **extra_info):
        return bool(self.take(1, **extra_info)[0])

    def read_bytes(self, size_bits, **extra_info):
        return self.take(size_bits, **extra_info).tobytes()

    def skip(self, size_bits, **extra_info):
        self.take(size_bits, **extra_info)
