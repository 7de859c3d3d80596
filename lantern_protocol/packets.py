"""
Packets are frozen value objects built from a list of ``fields``

.. code-block:: python

    from lantern_protocol.packets import PacketSpec
    from lantern_protocol.types import Type as T

    class Thing(PacketSpec):
        fields = [
              ("one", T.Uint16)
            , ("reserved1", T.Reserved(8))
            , ("two", T.Bool)
            ]

    thing = Thing(one=1, two=True)
    assert Thing.unpack(thing.pack()) == thing

Reserved fields take up space on the wire but are never exposed as attributes.
Every other field becomes a keyword only attribute with a default.

The classes themselves are made by ``attrs`` so they are immutable, comparable
and hashable. Use ``clone`` to get a copy with different values.
"""
from lantern_protocol.packing import is_packet_kls
from lantern_protocol.errors import ProgrammerError
from lantern_protocol import packing

import attrs


class PacketMeta:
    """
    Meta information for a packet
    """

    belongs_to = NotImplemented

    def __init__(self, classname, baseclasses, attributes):
        self.belongs_to_name = classname

        fields = attributes.get("fields")
        if fields is None:
            for kls in baseclasses:
                if hasattr(kls, "Meta") and hasattr(kls.Meta, "original_fields"):
                    fields = kls.Meta.original_fields

        if fields is None:
            msg = "PacketSpec expects a fields attribute on the class or a PacketSpec parent"
            raise ProgrammerError(f"{msg}\tcreating={classname}")

        if type(fields) is dict:
            msg = "PacketSpec expects fields to be a list of tuples, not a dictionary"
            raise ProgrammerError(f"{msg}\tcreating={classname}")

        self.original_fields = fields
        self.fields = list(fields)
        self.field_types = dict(self.fields)
        self.all_names = [
            name for name, typ in self.fields if is_packet_kls(typ) or not typ.is_reserved
        ]

        names = [name for name, _ in self.fields]
        duplicated = sorted(set(name for name in names if names.count(name) > 1))
        if duplicated:
            raise ProgrammerError("Duplicated names!\t{0}".format(duplicated))

    def __repr__(self):
        return f"<type {self.belongs_to_name}.Meta>"

    @property
    def size_bits(self):
        """The number of bits in this packet, or None if it changes with the values"""
        total = 0
        for _, typ in self.fields:
            if is_packet_kls(typ):
                size = typ.Meta.size_bits
            else:
                size = typ.fixed_size_bits
            if size is None:
                return None
            total += size
        return total

    def attribute_for(self, name, typ):
        if is_packet_kls(typ):

            def convert(val):
                if isinstance(val, dict):
                    return typ(**val)
                return val

            return attrs.field(default=attrs.Factory(typ), converter=convert)

        return attrs.field(default=attrs.Factory(typ.default_value), converter=typ.convert)


class PacketSpecMixin:
    """
    Functionality for our packet.
    """

    def pack(self):
        """Return the bytes that represent this packet"""
        return packing.pack(self)

    @classmethod
    def unpack(kls, bts):
        """Return an instance of this packet from these bytes"""
        return packing.unpack(kls, bts)

    def pack_into(self, writer):
        """Add this packet to a ``lantern_protocol.cursor.Writer``"""
        packing.PacketPacking.pack_into(writer, self)

    @classmethod
    def unpack_from(kls, reader):
        """Take this packet from the front of a ``lantern_protocol.cursor.Reader``"""
        return packing.PacketPacking.unpack_from(kls, reader)

    def clone(self, **overrides):
        """Create a copy of this packet with some values changed"""
        return attrs.evolve(self, **overrides)

    def as_dict(self):
        """Return this packet as a normal python dictionary"""
        dct = {}
        for name in self.Meta.all_names:
            val = getattr(self, name)
            if isinstance(val, PacketSpecMixin):
                val = val.as_dict()
            elif isinstance(val, tuple):
                val = [v.as_dict() if isinstance(v, PacketSpecMixin) else v for v in val]
            dct[name] = val
        return dct


class PacketSpecMeta(type):
    """
    Turn a class with ``fields`` into a frozen attrs class with a ``Meta``

    We complain if a field would override an attribute already on the class.
    """

    def __new__(metaname, classname, baseclasses, attributes):
        Meta = attributes["Meta"] = PacketMeta(classname, baseclasses, attributes)
        kls = type.__new__(metaname, classname, baseclasses, attributes)
        Meta.belongs_to = kls

        already_attributes = []
        for field in Meta.all_names:
            if hasattr(kls, field):
                already_attributes.append(field)

        if already_attributes:
            raise ProgrammerError(
                "Can't override attributes with fields\talready_attributes={0}".format(
                    sorted(already_attributes)
                )
            )

        these = {
            name: Meta.attribute_for(name, typ)
            for name, typ in Meta.fields
            if name in Meta.all_names
        }

        return attrs.define(kls, these=these, frozen=True, slots=False, kw_only=True)


PacketSpec = type.__new__(PacketSpecMeta, "PacketSpec", (PacketSpecMixin,), {})
