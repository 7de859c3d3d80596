"""
Here we have the core logic for packing and unpacking binary protocol messages.

Reading and writing bits
------------------------

.. automodule:: lantern_protocol.cursor

Packets
-------

.. automodule:: lantern_protocol.packets

Defining Messages
-----------------

.. automodule:: lantern_protocol.messages

Types for message fields
------------------------

.. automodule:: lantern_protocol.types
"""

VERSION = "0.1.0"
