"""
Options for the headers that go in front of a message.

.. code-block:: python

    from lantern_messages.options import build_options_spec
    from lantern_messages import DeviceMessages, encode_with

    from delfick_project.norms import Meta

    options = build_options_spec().normalise(
        Meta.empty(), {"target": "d073d5001337", "ack_required": True, "sequence": 3}
    )
    bts = encode_with(DeviceMessages.GetPower(), options)

A missing or null target means the message is for all devices.
"""
from lantern_messages.target import AllDevices, Device

from lantern_protocol.errors import BadConversion

from delfick_project.norms import dictobj, sb, BadSpecValue


class target_spec(sb.Spec):
    def normalise_empty(self, meta):
        return AllDevices()

    def normalise_filled(self, meta, val):
        if val is None:
            return AllDevices()

        if isinstance(val, (AllDevices, Device)):
            return val

        val = sb.string_spec().normalise(meta, val)

        if len(val) != 12:
            raise BadSpecValue(
                "serials must be 12 characters long, like d073d5001337", got=val, meta=meta
            )

        try:
            return Device.from_hex(val)
        except BadConversion as error:
            raise BadSpecValue("serials must be valid hex", error=error, got=val, meta=meta)


class bounded_integer_spec(sb.Spec):
    def setup(self, maximum):
        self.maximum = maximum

    def normalise_filled(self, meta, val):
        val = sb.integer_spec().normalise(meta, val)
        if val < 0 or val > self.maximum:
            raise BadSpecValue(
                "Number is out of range", got=val, minimum=0, maximum=self.maximum, meta=meta
            )
        return val


class BuildOptions(dictobj.Spec):
    """
    The values for the frame header and frame address of a message.

    ``tagged`` is worked out from the target when it's left as null.
    """

    target = dictobj.Field(target_spec, help="A hex serial, or null for all devices")

    tagged = dictobj.NullableField(sb.boolean, help="Override the tagged flag")

    ack_required = dictobj.Field(
        sb.boolean, default=False, help="Ask the device to send back an Acknowledgement"
    )

    res_required = dictobj.Field(
        sb.boolean, default=False, help="Ask the device to send back a State message"
    )

    source = dictobj.Field(
        lambda: bounded_integer_spec(0xFFFFFFFF),
        default=0,
        help="Passed back in replies so they can be matched with this message",
    )

    sequence = dictobj.Field(
        lambda: bounded_integer_spec(0xFF),
        default=0,
        help="Passed back in replies so they can be matched with this message",
    )

    def as_kwargs(self):
        return {
            "target": self.target,
            "tagged": self.tagged,
            "ack_required": self.ack_required,
            "res_required": self.res_required,
            "source": self.source,
            "sequence": self.sequence,
        }


def build_options_spec():
    """Return a spec for normalising a dictionary into ``BuildOptions``"""
    return BuildOptions.FieldSpec()
