from lantern_protocol.errors import (
    BadConversion,
    InvalidZoneCount,
    MalformedPayload,
    ProgrammerError,
)
from lantern_protocol.cursor import Writer, Reader
from lantern_protocol.packets import PacketSpec
from lantern_protocol.types import Type as T

from delfick_project.errors_pytest import assertRaises
from enum import Enum
import attrs
import pytest


class Colour(Enum):
    RED = 0
    GREEN = 1


# fmt: off

class Inner(PacketSpec):
    fields = [
          ("one", T.Uint8)
        , ("two", T.Uint8.default(3))
        ]

class Thing(PacketSpec):
    fields = [
          ("flag", T.Bool)
        , ("small", T.Uint8.S(7))
        , ("reserved1", T.Reserved(8))
        , ("label", T.String(4 * 8))
        , ("inner", Inner)
        , ("many", T.Uint16.multiple(2))
        ]

class Listy(PacketSpec):
    fields = [
          ("prefix", T.Uint16)
        , ("items", T.Bytes(16).counted(3, kls=Inner))
        ]

class Coloured(PacketSpec):
    fields = [
          ("colour", T.Uint8.enum(Colour))
        , ("ratio", T.Float)
        , ("skew", T.Int16)
        ]

# fmt: on


@pytest.fixture()
def thing():
    return Thing(flag=True, small=5, label="ab", inner={"one": 1}, many=[1, 2])


@pytest.fixture()
def thing_bytes():
    return b"\x0b\x00ab\x00\x00\x01\x03\x01\x00\x02\x00"


class TestPacketMeta:
    def test_it_knows_the_names_of_the_fields(self):
        assert Thing.Meta.all_names == ["flag", "small", "label", "inner", "many"]
        assert [name for name, _ in Thing.Meta.fields] == [
            "flag",
            "small",
            "reserved1",
            "label",
            "inner",
            "many",
        ]

    def test_it_knows_the_size_of_the_packet(self):
        assert Inner.Meta.size_bits == 16
        assert Thing.Meta.size_bits == 96

    def test_it_has_no_size_if_a_field_is_counted(self):
        assert Listy.Meta.size_bits is None

    def test_it_complains_about_duplicated_names(self):
        with assertRaises(ProgrammerError, r"Duplicated names!\t\['one'\]"):

            class Bad(PacketSpec):
                fields = [("one", T.Uint8), ("one", T.Uint16)]

    def test_it_complains_if_fields_is_a_dictionary(self):
        with assertRaises(ProgrammerError, "expects fields to be a list of tuples"):

            class Bad(PacketSpec):
                fields = {"one": T.Uint8}

    def test_it_complains_if_there_are_no_fields(self):
        with assertRaises(ProgrammerError, "expects a fields attribute"):

            class Bad(PacketSpec):
                pass

    def test_it_complains_if_a_field_would_override_an_attribute(self):
        with assertRaises(ProgrammerError, "Can't override attributes with fields"):

            class Bad(PacketSpec):
                fields = [("pack", T.Uint8)]

    def test_it_inherits_fields_from_a_parent(self):
        class Child(Inner):
            pass

        assert Child.Meta.all_names == ["one", "two"]
        assert Child(one=2).pack() == b"\x02\x03"


class TestPacketSpec:
    def test_it_has_defaults(self):
        thing = Thing()
        assert thing.flag is False
        assert thing.small == 0
        assert thing.label == ""
        assert thing.inner == Inner(one=0, two=3)
        assert thing.many == (0, 0)

    def test_it_doesnt_expose_reserved_fields(self, thing):
        assert not hasattr(thing, "reserved1")
        with pytest.raises(TypeError):
            Thing(reserved1=b"\x00")

    def test_it_only_takes_keyword_arguments(self):
        with pytest.raises(TypeError):
            Inner(1, 2)

    def test_it_is_frozen(self, thing):
        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            thing.flag = False

    def test_it_is_comparable_and_hashable(self, thing):
        other = Thing(flag=True, small=5, label="ab", inner=Inner(one=1), many=(1, 2))
        assert thing == other
        assert hash(thing) == hash(other)
        assert thing != thing.clone(small=6)

    def test_it_can_be_cloned(self, thing):
        clone = thing.clone(label="cd")
        assert clone.label == "cd"
        assert clone.inner == thing.inner
        assert thing.label == "ab"

    def test_it_can_be_a_dictionary(self, thing):
        assert thing.as_dict() == {
            "flag": True,
            "small": 5,
            "label": "ab",
            "inner": {"one": 1, "two": 3},
            "many": [1, 2],
        }
        assert Listy(items=[Inner(one=1)]).as_dict() == {
            "prefix": 0,
            "items": [{"one": 1, "two": 3}],
        }


class TestPacking:
    def test_it_packs_fields_in_order(self, thing, thing_bytes):
        assert thing.pack() == thing_bytes

    def test_it_unpacks(self, thing, thing_bytes):
        assert Thing.unpack(thing_bytes) == thing

    def test_it_ignores_reserved_bits_when_unpacking(self, thing, thing_bytes):
        bts = bytearray(thing_bytes)
        bts[1] = 0xFF
        assert Thing.unpack(bytes(bts)) == thing

    def test_it_can_pack_into_and_unpack_from_a_cursor(self, thing, thing_bytes):
        writer = Writer()
        writer.write("<B", 9)
        thing.pack_into(writer)
        assert writer.tobytes() == b"\x09" + thing_bytes

        reader = Reader(b"\x09" + thing_bytes)
        reader.skip(8)
        assert Thing.unpack_from(reader) == thing
        assert reader.remaining == 0

    def test_it_complains_if_the_payload_is_the_wrong_size(self, thing_bytes):
        for bts in (thing_bytes[:-1], thing_bytes + b"\x00", b""):
            with assertRaises(MalformedPayload, "Wrong number of bytes", want=12, got=len(bts)):
                Thing.unpack(bts)

    def test_it_complains_about_values_that_dont_fit(self):
        with assertRaises(BadConversion, "Value is too large for the field", field="small"):
            Thing(small=128).pack()

        with assertRaises(BadConversion, "Failed to pack field", field="one"):
            Inner(one=256).pack()

        with assertRaises(BadConversion, "Failed to pack field", field="one"):
            Inner(one=-1).pack()

    def test_it_complains_about_values_of_the_wrong_type(self):
        with assertRaises(BadConversion, "Expected an integer", field="one"):
            Inner(one="1").pack()

        with assertRaises(BadConversion, "Expected an integer", field="one"):
            Inner(one=True).pack()

        with assertRaises(BadConversion, "Expected a string", field="label"):
            Thing(label=b"ab").pack()

        with assertRaises(BadConversion, "Expected a packet", field="inner"):
            Thing(inner=1).pack()

    def test_it_complains_if_a_string_is_too_long(self):
        assert Thing(label="abcd").pack()[2:6] == b"abcd"
        with assertRaises(BadConversion, "Value is too long for the field", field="label"):
            Thing(label="abcde").pack()

        # Four bytes of utf-8 but only one character
        assert Thing(label="\U0001F600").pack()[2:6] == "\U0001F600".encode()
        with assertRaises(BadConversion, "Value is too long for the field", field="label"):
            Thing(label="a\U0001F600").pack()

    def test_it_stops_strings_at_the_first_null(self, thing_bytes):
        bts = bytearray(thing_bytes)
        bts[2:6] = b"a\x00bc"
        assert Thing.unpack(bytes(bts)).label == "a"

    def test_it_keeps_invalid_utf8(self, thing_bytes):
        bts = bytearray(thing_bytes)
        bts[2:6] = b"\xffa\x00\x00"
        thing = Thing.unpack(bytes(bts))
        assert thing.label == "\udcffa"
        assert thing.pack() == bytes(bts)

    def test_it_complains_about_nulls_in_strings(self):
        for label in ("a\x00b", "ab\x00"):
            with assertRaises(BadConversion, "Strings can't contain a null character", field="label"):
                Thing(label=label).pack()

    def test_it_complains_about_strings_that_cant_be_encoded(self):
        with assertRaises(BadConversion, "Failed to encode string", field="label"):
            Thing(label="\ud800").pack()

    def test_it_complains_if_multiple_has_the_wrong_number_of_items(self):
        with assertRaises(BadConversion, "Expected a different number of items", want=2, got=3):
            Thing(many=[1, 2, 3]).pack()

        with assertRaises(BadConversion, "Expected a list of values", field="many"):
            Thing(many=1).pack()


class TestEnumsAndNumbers:
    def test_it_round_trips_known_and_unknown_enum_values(self):
        for colour in (Colour.RED, Colour.GREEN, 7):
            pkt = Coloured(colour=colour)
            unpacked = Coloured.unpack(pkt.pack())
            assert unpacked == pkt
            assert unpacked.colour == colour

        assert Coloured.unpack(b"\x01" + b"\x00" * 6).colour is Colour.GREEN

    def test_it_round_trips_floats(self):
        pkt = Coloured(ratio=0.1)
        assert Coloured.unpack(pkt.pack()).ratio == pkt.ratio

    def test_it_has_signed_integers(self):
        pkt = Coloured(skew=-32768)
        assert pkt.pack()[-2:] == b"\x00\x80"
        assert Coloured.unpack(pkt.pack()).skew == -32768


class TestCounted:
    def test_it_packs_a_count_and_the_items(self):
        pkt = Listy(prefix=1, items=[Inner(one=1), {"one": 2, "two": 4}])
        assert pkt.items == (Inner(one=1), Inner(one=2, two=4))
        assert pkt.pack() == b"\x01\x00\x02\x01\x03\x02\x04"
        assert Listy.unpack(pkt.pack()) == pkt

    def test_it_can_have_no_items(self):
        assert Listy().pack() == b"\x00\x00\x00"
        assert Listy.unpack(b"\x00\x00\x00") == Listy()

    def test_it_can_have_the_maximum_number_of_items(self):
        pkt = Listy(items=[Inner(one=i) for i in range(3)])
        assert Listy.unpack(pkt.pack()) == pkt

    def test_it_complains_about_too_many_items_when_packing(self):
        with assertRaises(InvalidZoneCount, "Too many items", got=4, maximum=3, field="items"):
            Listy(items=[Inner()] * 4).pack()

    def test_it_complains_about_too_many_items_when_unpacking(self):
        bts = b"\x00\x00\x04" + b"\x01\x03" * 4
        with assertRaises(InvalidZoneCount, "Too many items", got=4, maximum=3, field="items"):
            Listy.unpack(bts)

    def test_it_complains_if_the_count_doesnt_match_the_items(self):
        with assertRaises(MalformedPayload, "Not enough bytes"):
            Listy.unpack(b"\x00\x00\x02\x01\x03")

        with assertRaises(MalformedPayload, "Too many bytes", extra=2):
            Listy.unpack(b"\x00\x00\x01\x01\x03\x01\x03")

        with assertRaises(MalformedPayload, "Not enough bytes"):
            Listy.unpack(b"\x00")

    def test_it_complains_about_items_that_arent_packets(self):
        with assertRaises(BadConversion, "Expected a packet", field="items"):
            Listy(items=[1]).pack()
