"""
The messages system is essentially a collection system for all the payloads.

We create collections of messages by defining them as properties on a subclass
of ``lantern_protocol.messages.Messages``.

.. code-block:: python

    from lantern_protocol.messages import T, Messages, msg

    class MyMessages(Messages):
        GetThing = msg(10)

        StateThing = msg(11
            , ("level", T.Uint16)
            )

        SetThing = StateThing.using(12)

    assert MyMessages.by_type[11] is MyMessages.StateThing

``by_type`` is a read only mapping and ``dispatch_table`` joins many
collections together, complaining if two messages share a ``pkt_type``.
"""
from lantern_protocol.errors import UnknownMessageType, ProgrammerError
from lantern_protocol.packets import PacketSpec
from lantern_protocol.types import Type

from delfick_project.logging import lc
from types import MappingProxyType
import logging

log = logging.getLogger("lantern_protocol.messages")

T = Type


class Payload(PacketSpec):
    """
    The base of every message.

    Each message class has a ``message_type`` which is the ``pkt_type`` that
    goes into the protocol header.
    """

    message_type = 0
    fields = []

    @property
    def pkt_type(self):
        return self.message_type

    @classmethod
    def message(kls, message_type, *payload_fields):
        """
        This is to be used in conjunction with ``lantern_protocol.messages.Messages``

        It returns a function that when given a name will return a new class
        representing the message you are creating.

        Use ``.using(other_message_type)`` on the result to make another message
        with the same fields but a different ``pkt_type``.
        """

        def maker(name):
            return type(name, (kls,), {"fields": list(payload_fields), "message_type": message_type})

        maker._lantern_message = True
        maker.using = lambda mt: kls.message(mt, *payload_fields)
        return maker


# Helper for creating messages
msg = Payload.message


class MessagesMeta(type):
    """
    This metaclass puts ``by_type`` on the created class.

    This is a read only mapping of {pkt_type: kls} for each message defined on
    the class.
    """

    def __new__(metaname, classname, baseclasses, attrs):
        by_type = {}
        for attr, val in list(attrs.items()):
            if getattr(val, "_lantern_message", False):
                m = attrs[attr] = val(attr)
            elif isinstance(val, type) and issubclass(val, Payload):
                m = val
            else:
                continue

            if m.message_type in by_type:
                raise ProgrammerError(
                    "Two messages have the same pkt_type\tpkt_type={0}\tmessages={1}".format(
                        m.message_type, sorted([by_type[m.message_type].__name__, attr])
                    )
                )
            by_type[m.message_type] = m

        attrs["by_type"] = MappingProxyType(by_type)
        return type.__new__(metaname, classname, baseclasses, attrs)


class Messages(metaclass=MessagesMeta):
    pass


def dispatch_table(*collections):
    """Return a read only mapping of {pkt_type: kls} for all these collections"""
    by_type = {}
    for collection in collections:
        for pkt_type, kls in collection.by_type.items():
            if pkt_type in by_type:
                raise ProgrammerError(
                    "Two messages have the same pkt_type\tpkt_type={0}\tmessages={1}".format(
                        pkt_type, sorted([by_type[pkt_type].__name__, kls.__name__])
                    )
                )
            by_type[pkt_type] = kls
    return MappingProxyType(by_type)


def pack_payload(message):
    """Return ``(pkt_type, payload bytes)`` for this message"""
    if not isinstance(message, Payload):
        raise ProgrammerError("Can only pack messages\tgot={0}".format(type(message)))
    return message.message_type, message.pack()


def unpack_payload(by_type, pkt_type, payload):
    """Find the message for this ``pkt_type`` in ``by_type`` and unpack ``payload`` with it"""
    kls = by_type.get(pkt_type)
    if kls is None:
        log.debug(lc("Unknown message type", pkt_type=pkt_type, payload_size=len(payload)))
        raise UnknownMessageType(pkt_type=pkt_type)
    return kls.unpack(payload)
