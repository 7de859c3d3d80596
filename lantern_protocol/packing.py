"""
Conversion between packets and bytes

Fields are written and read in the order they are declared. Reserved fields
are written as zeros and skipped over when reading.

.. autofunction:: lantern_protocol.packing.pack

.. autofunction:: lantern_protocol.packing.unpack
"""
from lantern_protocol.errors import (
    BadConversion,
    InvalidZoneCount,
    MalformedPayload,
    TruncatedInput,
)
from lantern_protocol.cursor import Writer, Reader, packers


def is_packet_kls(typ):
    return isinstance(typ, type) and hasattr(typ, "Meta") and hasattr(typ.Meta, "field_types")


def pack(pkt):
    """Return the bytes for this packet"""
    writer = Writer()
    PacketPacking.pack_into(writer, pkt)
    return writer.tobytes()


def unpack(kls, bts):
    """
    Return an instance of ``kls`` from ``bts``

    The bytes must be exactly the size of the packet. Anything else is a
    ``MalformedPayload``. Lists that say they have too many items are an
    ``InvalidZoneCount``.
    """
    reader = Reader(bts)

    size_bits = kls.Meta.size_bits
    if size_bits is not None and reader.remaining != size_bits:
        raise MalformedPayload(
            "Wrong number of bytes", kls=kls.__name__, want=size_bits // 8, got=len(bts)
        )

    try:
        pkt = PacketPacking.unpack_from(kls, reader)
    except TruncatedInput as error:
        raise MalformedPayload("Not enough bytes", kls=kls.__name__, got=len(bts), error=error)

    if reader.remaining:
        raise MalformedPayload(
            "Too many bytes", kls=kls.__name__, got=len(bts), extra=reader.remaining // 8
        )

    return pkt


class FieldPacking:
    """Pack and unpack the value for one field"""

    @classmethod
    def pack(kls, writer, name, typ, val):
        val = typ.do_transform(val)

        if typ._counted:
            items = kls.sequence(name, typ, val)
            if len(items) > typ._counted:
                raise InvalidZoneCount(
                    "Too many items", field=name, got=len(items), maximum=typ._counted
                )
            writer.write("<B", len(items), field=name)
            for item in items:
                kls.pack_single(writer, name, typ, item)

        elif typ._multiple:
            items = kls.sequence(name, typ, val)
            if len(items) != typ._multiple:
                raise BadConversion(
                    "Expected a different number of items",
                    field=name,
                    want=typ._multiple,
                    got=len(items),
                )
            for item in items:
                kls.pack_single(writer, name, typ, item)

        else:
            kls.pack_single(writer, name, typ, val)

    @classmethod
    def sequence(kls, name, typ, val):
        if not isinstance(val, (list, tuple)):
            raise BadConversion("Expected a list of values", field=name, got=type(val))
        return val

    @classmethod
    def pack_single(kls, writer, name, typ, val):
        if typ._multiple_kls is not None:
            if not isinstance(val, typ._multiple_kls):
                raise BadConversion(
                    "Expected a packet", field=name, want=typ._multiple_kls.__name__, got=type(val)
                )
            PacketPacking.pack_into(writer, val)
            return

        fmt = typ.struct_format

        if fmt is bool:
            writer.write_bool(val, field=name)

        elif typ.conversion is str:
            if not isinstance(val, str):
                raise BadConversion("Expected a string", field=name, got=type(val))
            # Strings end at the first null when they are unpacked
            if "\x00" in val:
                raise BadConversion("Strings can't contain a null character", field=name, got=val)
            try:
                encoded = val.encode("utf-8", errors="surrogateescape")
            except UnicodeEncodeError as error:
                raise BadConversion("Failed to encode string", field=name, got=val, error=error)
            writer.write_bytes(encoded, typ.size_bits, field=name)

        elif fmt is None:
            writer.write_bytes(val, typ.size_bits, field=name)

        else:
            val = typ.from_enum(val)
            if typ.conversion is int and (isinstance(val, bool) or not isinstance(val, int)):
                raise BadConversion("Expected an integer", field=name, got=type(val))
            if typ.conversion is bool and val not in (True, False):
                raise BadConversion("Expected a boolean", field=name, got=val)

            size_bits = typ.size_bits
            if size_bits == packers[fmt].size * 8:
                size_bits = None
            writer.write(fmt, val, size_bits=size_bits, field=name)

    @classmethod
    def unpack(kls, reader, name, typ):
        if typ._counted:
            count = reader.read("<B", field=name)
            if count > typ._counted:
                raise InvalidZoneCount(
                    "Too many items", field=name, got=count, maximum=typ._counted
                )
            val = tuple(kls.unpack_single(reader, name, typ) for _ in range(count))

        elif typ._multiple:
            val = tuple(kls.unpack_single(reader, name, typ) for _ in range(typ._multiple))

        else:
            val = kls.unpack_single(reader, name, typ)

        return typ.untransform(val)

    @classmethod
    def unpack_single(kls, reader, name, typ):
        if typ._multiple_kls is not None:
            return PacketPacking.unpack_from(typ._multiple_kls, reader)

        fmt = typ.struct_format

        if fmt is bool:
            return reader.read_bool(field=name)

        elif typ.conversion is str:
            raw = reader.read_bytes(typ.size_bits, field=name)
            return raw.split(b"\x00", 1)[0].decode("utf-8", errors="surrogateescape")

        elif fmt is None:
            return reader.read_bytes(typ.size_bits, field=name)

        return reader.read(fmt, size_bits=typ.size_bits, field=name)


class PacketPacking:
    """Pack and unpack all the fields on a packet"""

    @classmethod
    def pack_into(kls, writer, pkt):
        for name, typ in pkt.Meta.fields:
            if is_packet_kls(typ):
                val = getattr(pkt, name)
                if not isinstance(val, typ):
                    raise BadConversion(
                        "Expected a packet", field=name, want=typ.__name__, got=type(val)
                    )
                kls.pack_into(writer, val)
            elif typ.is_reserved:
                writer.write_zeros(typ.size_bits)
            else:
                FieldPacking.pack(writer, name, typ, getattr(pkt, name))

    @classmethod
    def unpack_from(kls, pkt_kls, reader):
        values = {}
        for name, typ in pkt_kls.Meta.fields:
            if is_packet_kls(typ):
                values[name] = kls.unpack_from(typ, reader)
            elif typ.is_reserved:
                reader.skip(typ.size_bits, field=name)
            else:
                values[name] = FieldPacking.unpack(reader, name, typ)
        return pkt_kls(**values)
