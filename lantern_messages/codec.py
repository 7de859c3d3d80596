"""
Turning messages into bytes for the network and bytes from the network into
messages.

.. code-block:: python

    from lantern_messages import DeviceMessages, Device, encode, decode

    bts = encode(DeviceMessages.SetPower(level=65535), target=Device.from_hex("d073d5001337"))
    raw, message = decode(bts)

    assert message == DeviceMessages.SetPower(level=65535)
    assert raw.target == Device.from_hex("d073d5001337")

Every error raised here is a ``lantern_protocol.errors.LanternError``.
"""
from lantern_messages.messages import by_type
from lantern_messages.target import AllDevices
from lantern_messages.frame import RawMessage

from lantern_protocol.messages import pack_payload, unpack_payload

from delfick_project.logging import lc
import logging

log = logging.getLogger("lantern_messages.codec")


def encode_payload(message):
    """Return ``(pkt_type, payload bytes)`` for this message"""
    return pack_payload(message)


def decode_payload(pkt_type, payload):
    """Return the message for this ``pkt_type`` from these payload bytes"""
    return unpack_payload(by_type, pkt_type, bytes(payload))


def encode(
    message,
    target=AllDevices(),
    tagged=None,
    res_required=False,
    ack_required=False,
    source=0,
    sequence=0,
):
    """
    Return the bytes for this message with the headers in front of it.

    When ``tagged`` is None it is worked out from the ``target``.
    """
    pkt_type, payload = encode_payload(message)
    raw = RawMessage.create(
        pkt_type,
        payload,
        target=target,
        tagged=tagged,
        res_required=res_required,
        ack_required=ack_required,
        source=source,
        sequence=sequence,
    )
    return raw.pack()


def encode_with(message, options):
    """Encode this message using a ``lantern_messages.options.BuildOptions``"""
    return encode(message, **options.as_kwargs())


def decode(bts):
    """Return ``(RawMessage, message)`` from these bytes"""
    raw = RawMessage.unpack(bts)
    message = decode_payload(raw.pkt_type, raw.payload)
    log.debug(
        lc(
            "Decoded packet",
            pkt=type(message).__name__,
            source=raw.source,
            sequence=raw.sequence,
            target=raw.target,
        )
    )
    return raw, message
