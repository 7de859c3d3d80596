from delfick_project.errors import DelfickError, ProgrammerError
from delfick_project.norms import BadSpecValue


class LanternError(DelfickError):
    pass


# Explicitly make these errors in this context
BadSpecValue = BadSpecValue
ProgrammerError = ProgrammerError


class BadConversion(LanternError):
    desc = "Bad conversion"


class TruncatedInput(LanternError):
    desc = "Not enough bytes"


class TrailingBytes(LanternError):
    desc = "Found bytes after the end of the packet"


class InvalidProtocol(LanternError):
    desc = "Unsupported protocol"


class UnknownMessageType(LanternError):
    desc = "Unknown message type"


class MalformedPayload(LanternError):
    desc = "Payload doesn't match its message type"


class PayloadTooLarge(LanternError):
    desc = "Payload too large"


class InvalidZoneCount(LanternError):
    desc = "Invalid number of zones"
