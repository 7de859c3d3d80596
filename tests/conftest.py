from lantern_protocol.types import as_single_precision
from lantern_protocol.packing import is_packet_kls

from delfick_project.norms import sb
import random
import string
import pytest


class Filler:
    """Make packets full of random values that fit their fields"""

    def __init__(self, seed):
        self.random = random.Random(seed)

    def packet(self, kls):
        values = {}
        for name, typ in kls.Meta.fields:
            if name in kls.Meta.all_names:
                values[name] = self.value(typ)
        return kls(**values)

    def value(self, typ):
        if is_packet_kls(typ):
            return self.packet(typ)
        if typ._counted:
            return tuple(self.item(typ) for _ in range(self.random.randint(0, typ._counted)))
        if typ._multiple:
            return tuple(self.item(typ) for _ in range(typ._multiple))
        return self.item(typ)

    def item(self, typ):
        r = self.random

        if typ._multiple_kls is not None:
            return self.packet(typ._multiple_kls)

        if typ._enum is not sb.NotSpecified:
            if r.random() < 0.2:
                return r.randrange(0, 2 ** typ.size_bits)
            return r.choice(list(typ._enum))

        if typ.conversion is bool:
            return r.choice([True, False])

        if typ.conversion is str:
            length = r.randint(0, typ.size_bits // 8)
            return "".join(r.choice(string.ascii_letters) for _ in range(length))

        if typ.conversion is bytes:
            return bytes(r.randrange(256) for _ in range(typ.size_bits // 8))

        if typ.conversion is float:
            return as_single_precision(r.uniform(-1000, 1000))

        if typ.struct_format in ("<b", "<h", "<i", "<q"):
            half = 2 ** (typ.size_bits - 1)
            return r.randint(-half, half - 1)

        return r.randrange(0, 2 ** typ.size_bits)


@pytest.fixture()
def filler():
    return Filler(seed=1024)
