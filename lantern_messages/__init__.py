"""
This module contains the definition of the LIFX binary protocol messages.

This includes the headers that are common to all messages and the functions
for turning messages into bytes and back again.
"""

# Get the headers
from lantern_messages.frame import FrameHeader, FrameAddress, ProtocolHeader, RawMessage

# Get the messages
from lantern_messages.messages import *  # noqa
from lantern_messages.messages import by_type
from lantern_messages import messages

# Make the enums available straight from lantern_messages
from lantern_messages.enums import *  # noqa
from lantern_messages import enums

from lantern_messages.codec import encode, decode, encode_payload, decode_payload, encode_with
from lantern_messages.options import BuildOptions, build_options_spec
from lantern_messages.target import AllDevices, Device
from lantern_messages.fields import HSBK

from lantern_protocol.messages import Messages
from enum import Enum


def make_all_list():
    lst = [
        "by_type",
        "messages",
        "enums",
        "FrameHeader",
        "FrameAddress",
        "ProtocolHeader",
        "RawMessage",
        "encode",
        "decode",
        "encode_payload",
        "decode_payload",
        "encode_with",
        "BuildOptions",
        "build_options_spec",
        "AllDevices",
        "Device",
        "HSBK",
    ]

    for thing in dir(messages):
        val = getattr(messages, thing)
        if isinstance(val, type) and issubclass(val, Messages) and val is not Messages:
            lst.append(thing)

    for thing in dir(enums):
        val = getattr(enums, thing)
        if isinstance(val, type) and issubclass(val, Enum) and val is not Enum:
            lst.append(thing)

    return lst


__all__ = make_all_list()
