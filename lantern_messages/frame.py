"""
The three headers at the start of every packet and ``RawMessage`` which puts
them together with the payload.

.. code-block:: text

    0-1   size
    2-3   protocol (12 bits) | addressable | tagged | origin (2 bits)
    4-7   source
    8-15  target
    16-21 reserved
    22    res_required | ack_required | reserved (6 bits)
    23    sequence
    24-31 reserved
    32-33 pkt_type
    34-35 reserved
    36..  payload
"""
from lantern_messages.target import AllDevices, Device, target_to_bytes, target_from_bytes

from lantern_protocol.errors import (
    InvalidProtocol,
    TruncatedInput,
    TrailingBytes,
    PayloadTooLarge,
    BadConversion,
)
from lantern_protocol.cursor import Writer, Reader
from lantern_protocol.packets import PacketSpec
from lantern_protocol.messages import T

import attrs

PROTOCOL = 1024
HEADER_SIZE = 36
MAX_SIZE = 0xFFFF

# fmt: off

class FrameHeader(PacketSpec):
    fields = [
          ("size", T.Uint16.default(HEADER_SIZE))
        , ("protocol", T.Uint16.S(12).default(PROTOCOL))
        , ("addressable", T.Bool.default(True))
        , ("tagged", T.Bool)
        , ("origin", T.Uint8.S(2))
        , ("source", T.Uint32)
        ]

    @classmethod
    def unpack_from(kls, reader):
        header = super().unpack_from(reader)
        if header.protocol != PROTOCOL:
            raise InvalidProtocol(want=PROTOCOL, got=header.protocol)
        return header

class FrameAddress(PacketSpec):
    fields = [
          ("target", T.Bytes(64).transform(target_to_bytes, target_from_bytes).default(AllDevices))
        , ("reserved2", T.Reserved(48))
        , ("res_required", T.Bool)
        , ("ack_required", T.Bool)
        , ("reserved3", T.Reserved(6))
        , ("sequence", T.Uint8)
        ]

class ProtocolHeader(PacketSpec):
    fields = [
          ("reserved4", T.Reserved(64))
        , ("pkt_type", T.Uint16)
        , ("reserved5", T.Reserved(16))
        ]

# fmt: on


@attrs.define(frozen=True)
class RawMessage:
    """
    A packet with the headers decoded and the payload left as bytes

    Use ``create`` to make one so that the size in the frame header matches the
    payload.
    """

    frame_header: FrameHeader
    frame_address: FrameAddress
    protocol_header: ProtocolHeader
    payload: bytes = b""

    @classmethod
    def create(
        kls,
        pkt_type,
        payload=b"",
        *,
        target=AllDevices(),
        tagged=None,
        res_required=False,
        ack_required=False,
        source=0,
        sequence=0,
    ):
        if not isinstance(target, (AllDevices, Device)):
            raise BadConversion("Target must be AllDevices or a Device", got=type(target))

        size = HEADER_SIZE + len(payload)
        if size > MAX_SIZE:
            raise PayloadTooLarge(size=size, maximum=MAX_SIZE, pkt_type=pkt_type)

        if tagged is None:
            tagged = target.tagged

        return kls(
            frame_header=FrameHeader(size=size, tagged=tagged, source=source),
            frame_address=FrameAddress(
                target=target,
                res_required=res_required,
                ack_required=ack_required,
                sequence=sequence,
            ),
            protocol_header=ProtocolHeader(pkt_type=pkt_type),
            payload=bytes(payload),
        )

    @property
    def pkt_type(self):
        return self.protocol_header.pkt_type

    @property
    def target(self):
        return self.frame_address.target

    @property
    def tagged(self):
        return self.frame_header.tagged

    @property
    def source(self):
        return self.frame_header.source

    @property
    def sequence(self):
        return self.frame_address.sequence

    def pack(self):
        size = HEADER_SIZE + len(self.payload)
        if self.frame_header.size != size:
            raise BadConversion(
                "Size in the frame header doesn't match the payload",
                size=self.frame_header.size,
                want=size,
            )

        if self.frame_header.origin != 0:
            raise BadConversion("Origin must be 0", got=self.frame_header.origin)

        writer = Writer()
        self.frame_header.pack_into(writer)
        self.frame_address.pack_into(writer)
        self.protocol_header.pack_into(writer)
        return writer.tobytes() + self.payload

    @classmethod
    def unpack(kls, bts):
        bts = bytes(bts)
        if len(bts) < HEADER_SIZE:
            raise TruncatedInput(
                "Packet is smaller than the headers", need_atleast=HEADER_SIZE, got=len(bts)
            )

        reader = Reader(bts[:HEADER_SIZE])
        frame_header = FrameHeader.unpack_from(reader)
        frame_address = FrameAddress.unpack_from(reader)
        protocol_header = ProtocolHeader.unpack_from(reader)

        size = frame_header.size
        if len(bts) < size:
            raise TruncatedInput("Packet is smaller than its size", size=size, got=len(bts))
        if len(bts) > size:
            raise TrailingBytes(size=size, got=len(bts))

        return kls(
            frame_header=frame_header,
            frame_address=frame_address,
            protocol_header=protocol_header,
            payload=bts[HEADER_SIZE:],
        )
