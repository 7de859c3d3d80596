"""
Here we create classes that represent the individual fields in the LIFX packets

Each field is a ``Type`` that knows the ``struct`` format and number of bits it
takes up on the wire, along with options for what the value looks like in
python land.

.. code-block:: python

    from lantern_protocol.types import Type as T

    fields = [
          ("level", T.Uint16)
        , ("waveform", T.Uint8.enum(enums.Waveform))
        , ("label", T.String(32 * 8))
        , ("reserved6", T.Reserved(16))
        ]
"""
from lantern_protocol.errors import ProgrammerError

from delfick_project.norms import sb
import enum
import struct


class Type:
    """
    A specification of how to pack and unpack bits from/to a packet

    struct_format
        Either a ``struct`` format specifier, ``None`` or ``bool``.

        ``bool`` represents a single bit indicating 0 or 1

        ``None`` represents treating the field as just bytes

    conversion
        The python type the value should take

    .. note:: Calling an instance allows us to set ``size_bits`` which is an integer
      representing the number of ``bits`` this field should use.
    """

    size_bits = NotImplemented
    _enum = sb.NotSpecified
    _default = sb.NotSpecified
    _transform = sb.NotSpecified
    _unpack_transform = sb.NotSpecified

    _counted = False
    _multiple = False
    _multiple_kls = None

    def __init__(self, struct_format, conversion):
        self.conversion = conversion
        self.struct_format = struct_format

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.size_bits}>"

    def __call__(self, size_bits):
        """
        Return us a new instance with a different size_bits

        This is a shortcut for calling ``self.S(<size_bits>)``
        """
        return self.S(size_bits)

    def S(self, size_bits):
        """Return a new instance with a different size_bits"""
        result = self.__class__(self.struct_format, self.conversion)
        result.size_bits = size_bits
        result._enum = self._enum
        result._default = self._default
        result._counted = self._counted
        result._multiple = self._multiple
        result._transform = self._transform
        result._multiple_kls = self._multiple_kls
        result._unpack_transform = self._unpack_transform
        return result

    @classmethod
    def t(kls, name, struct_format, conversion):
        """Create a new type"""
        return type(name, (kls,), {})(struct_format, conversion)

    @classmethod
    def install(kls, *types):
        """Create many types at the same time! and put them onto the Type class"""
        for name, size, fmt, conversion in types:
            if size is not None:
                setattr(kls, name, kls.t(name, fmt, conversion)(size))
            else:
                setattr(kls, name, kls.t(name, fmt, conversion))

    @property
    def is_reserved(self):
        return self.__class__.__name__ == "Reserved"

    def enum(self, enum):
        """
        Values are turned into members of this enum where possible

        Values the enum doesn't know about are left as integers so that they
        survive being unpacked and packed again.
        """
        if self.conversion is not int:
            raise ProgrammerError("Only integer fields can be an enum\tgot={0}".format(self.conversion))
        res = self.S(self.size_bits)
        res._enum = enum
        return res

    def default(self, value):
        """Set a default value for this field"""
        res = self.S(self.size_bits)
        res._default = value
        return res

    def transform(self, pack_func, unpack_func):
        """Set a ``pack_func`` and ``unpack_func`` for converting between wire and python values"""
        for f in (pack_func, unpack_func):
            if not callable(f):
                raise ProgrammerError("Sorry, transform can only be given two callables")

        res = self.S(self.size_bits)
        res._transform = pack_func
        res._unpack_transform = unpack_func
        return res

    def multiple(self, multiple, kls=None):
        """This field is ``multiple`` of this type one after the other"""
        res = self.S(self.size_bits)
        res._multiple = multiple
        res._multiple_kls = kls
        return res

    def counted(self, maximum, kls=None):
        """
        This field is a single byte count followed by that many of this type.

        The count may be no more than ``maximum``.
        """
        res = self.S(self.size_bits)
        res._counted = maximum
        res._multiple_kls = kls
        return res

    @property
    def item_size_bits(self):
        if self._multiple_kls is not None:
            return self._multiple_kls.Meta.size_bits
        return self.size_bits

    @property
    def fixed_size_bits(self):
        """The number of bits this field takes up, or None if that depends on the value"""
        if self._counted:
            return None
        if self._multiple:
            return self.item_size_bits * self._multiple
        return self.size_bits

    def default_value(self):
        if self._default is not sb.NotSpecified:
            return self._default() if callable(self._default) else self._default

        if self._counted:
            return ()

        if self._multiple:
            if self._multiple_kls is not None:
                return tuple(self._multiple_kls() for _ in range(self._multiple))
            return tuple(self.single_default() for _ in range(self._multiple))

        return self.single_default()

    def single_default(self):
        if self.conversion is bool:
            return False
        elif self.conversion is float:
            return 0.0
        elif self.conversion is bytes:
            return b"\x00" * (self.size_bits // 8)
        elif self.conversion is str:
            return ""
        elif self._enum is not sb.NotSpecified:
            return self.to_enum(0)
        return 0

    def convert(self, val):
        """Normalise a value given when a packet is created"""
        if self._transform is not sb.NotSpecified:
            return val

        if self._counted or self._multiple:
            if isinstance(val, (list, tuple)):
                return tuple(self.convert_single(v) for v in val)
            return val

        return self.convert_single(val)

    def convert_single(self, val):
        kls = self._multiple_kls
        if kls is not None:
            if isinstance(val, dict):
                return kls(**val)
            return val

        if self._enum is not sb.NotSpecified:
            return self.to_enum(val)

        if self.conversion is float:
            return as_single_precision(val)

        if self.conversion is bytes and isinstance(val, (bytes, bytearray)):
            val = bytes(val)
            want = self.size_bits // 8
            if len(val) < want:
                val = val + b"\x00" * (want - len(val))
            return val

        if self.conversion is bool and val in (0, 1):
            return bool(val)

        return val

    def to_enum(self, val):
        if isinstance(val, enum.Enum) or type(val) is not int:
            return val
        try:
            return self._enum(val)
        except ValueError:
            return val

    def from_enum(self, val):
        if isinstance(val, enum.Enum):
            return val.value
        return val

    def do_transform(self, value):
        if self._transform is sb.NotSpecified:
            return value
        return self._transform(value)

    def untransform(self, value):
        if self._unpack_transform is sb.NotSpecified:
            return value
        return self._unpack_transform(value)


def as_single_precision(val):
    """
    Floats are only 32 bits on the wire, so we store them as what they will be
    when unpacked again.
    """
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        return val
    try:
        return struct.unpack("<f", struct.pack("<f", val))[0]
    except (struct.error, OverflowError):
        return val


Type.install(
    ("Bool", 1, bool, bool),
    ("Int8", 8, "<b", int),
    ("Uint8", 8, "<B", int),
    ("BoolInt", 8, "<?", bool),
    ("Int16", 16, "<h", int),
    ("Uint16", 16, "<H", int),
    ("Int32", 32, "<i", int),
    ("Uint32", 32, "<I", int),
    ("Int64", 64, "<q", int),
    ("Uint64", 64, "<Q", int),
    ("Float", 32, "<f", float),
    ("Bytes", None, None, bytes),
    ("String", None, None, str),
    ("Reserved", None, None, bytes),
)
