from lantern_messages import enums

from lantern_protocol.packets import PacketSpec
from lantern_protocol.messages import T

# The largest number of zones a device will put in one message
MAX_ZONES = 82

# fmt: off

hsbk = [
      ("hue", T.Uint16)
    , ("saturation", T.Uint16)
    , ("brightness", T.Uint16)
    , ("kelvin", T.Uint16.default(3500))
    ]

class HSBK(PacketSpec):
    fields = hsbk

host_info = [
      ("signal", T.Float)
    , ("tx", T.Uint32)
    , ("rx", T.Uint32)
    , ("reserved6", T.Reserved(16))
    ]

firmware = [
      ("build", T.Uint64)
    , ("reserved6", T.Reserved(64))
    , ("version_minor", T.Uint16)
    , ("version_major", T.Uint16)
    ]

label = T.String(32 * 8)

waveform = [
      ("reserved6", T.Reserved(8))
    , ("transient", T.BoolInt.default(False))
    , ("color", HSBK)
    , ("period", T.Uint32)
    , ("cycles", T.Float)
    , ("skew_ratio", T.Int16)
    , ("waveform", T.Uint8.enum(enums.Waveform).default(enums.Waveform.SAW))
    ]

waveform_optional = waveform + [
      ("set_hue", T.BoolInt.default(False))
    , ("set_saturation", T.BoolInt.default(False))
    , ("set_brightness", T.BoolInt.default(False))
    , ("set_kelvin", T.BoolInt.default(False))
    ]

multi_zone_effect_settings = [
      ("instanceid", T.Uint32)
    , ("type", T.Uint8.enum(enums.MultiZoneEffectType).default(enums.MultiZoneEffectType.OFF))
    , ("reserved6", T.Reserved(16))
    , ("speed", T.Uint32)
    , ("duration", T.Uint64)
    , ("reserved7", T.Reserved(32))
    , ("reserved8", T.Reserved(32))
    , ("parameters", T.Bytes(32 * 8))
    ]

zones = T.Bytes(64).counted(MAX_ZONES, kls=HSBK)

# fmt: on
