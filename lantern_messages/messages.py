from lantern_messages import enums, fields

from lantern_protocol.messages import T, Messages, msg, dispatch_table

# fmt: off

########################
###   CORE
########################

class CoreMessages(Messages):
    Acknowledgement = msg(45)

########################
###   DISCOVERY
########################

class DiscoveryMessages(Messages):
    GetService = msg(2)

    StateService = msg(3
        , ("service", T.Uint8.enum(enums.Services).default(enums.Services.UDP))
        , ("port", T.Uint32)
        )

########################
###   DEVICE
########################

class DeviceMessages(Messages):
    GetHostInfo = msg(12)

    StateHostInfo = msg(13
        , *fields.host_info
        )

    GetHostFirmware = msg(14)

    StateHostFirmware = msg(15
        , *fields.firmware
        )

    GetWifiInfo = msg(16)

    StateWifiInfo = StateHostInfo.using(17)

    GetWifiFirmware = msg(18)

    StateWifiFirmware = StateHostFirmware.using(19)

    GetPower = msg(20)

    SetPower = msg(21
        , ("level", T.Uint16)
        )

    StatePower = SetPower.using(22)

    GetLabel = msg(23)

    SetLabel = msg(24
        , ("label", fields.label)
        )

    StateLabel = SetLabel.using(25)

    GetVersion = msg(32)

    StateVersion = msg(33
        , ("vendor", T.Uint32)
        , ("product", T.Uint32)
        , ("version", T.Uint32)
        )

    GetInfo = msg(34)

    StateInfo = msg(35
        , ("time", T.Uint64)
        , ("uptime", T.Uint64)
        , ("downtime", T.Uint64)
        )

    GetLocation = msg(48)

    SetLocation = msg(49
        , ("location", T.Bytes(16 * 8))
        , ("label", fields.label)
        , ("updated_at", T.Uint64)
        )

    StateLocation = SetLocation.using(50)

    GetGroup = msg(51)

    SetGroup = msg(52
        , ("group", T.Bytes(16 * 8))
        , ("label", fields.label)
        , ("updated_at", T.Uint64)
        )

    StateGroup = SetGroup.using(53)

    EchoRequest = msg(58
        , ("echoing", T.Bytes(64 * 8))
        )

    EchoResponse = EchoRequest.using(59)

########################
###   LIGHT
########################

class LightMessages(Messages):
    GetColor = msg(101)

    SetColor = msg(102
        , ("reserved6", T.Reserved(8))
        , ("color", fields.HSBK)
        , ("duration", T.Uint32)
        )

    SetWaveform = msg(103
        , *fields.waveform
        )

    LightState = msg(107
        , ("color", fields.HSBK)
        , ("reserved6", T.Reserved(16))
        , ("power", T.Uint16)
        , ("label", fields.label)
        , ("reserved7", T.Reserved(64))
        )

    GetLightPower = msg(116)

    SetLightPower = msg(117
        , ("level", T.Uint16)
        , ("duration", T.Uint32)
        )

    StateLightPower = msg(118
        , ("level", T.Uint16)
        )

    SetWaveformOptional = msg(119
        , *fields.waveform_optional
        )

    GetInfrared = msg(120)

    StateInfrared = msg(121
        , ("brightness", T.Uint16)
        )

    SetInfrared = StateInfrared.using(122)

    GetHevCycle = msg(142)

    SetHevCycle = msg(143
        , ("enable", T.BoolInt)
        , ("duration_s", T.Uint32)
        )

    StateHevCycle = msg(144
        , ("duration_s", T.Uint32)
        , ("remaining_s", T.Uint32)
        , ("last_power", T.BoolInt)
        )

    GetHevCycleConfiguration = msg(145)

    SetHevCycleConfiguration = msg(146
        , ("indication", T.BoolInt)
        , ("duration_s", T.Uint32)
        )

    StateHevCycleConfiguration = SetHevCycleConfiguration.using(147)

    GetLastHevCycleResult = msg(148)

    StateLastHevCycleResult = msg(149
        , ("result", T.Uint8.enum(enums.LightLastHevCycleResult).default(enums.LightLastHevCycleResult.NONE))
        )

########################
###   MULTI_ZONE
########################

class MultiZoneMessages(Messages):
    SetColorZones = msg(501
        , ("start_index", T.Uint8)
        , ("end_index", T.Uint8)
        , ("color", fields.HSBK)
        , ("duration", T.Uint32)
        , ("apply", T.Uint8.enum(enums.MultiZoneApplicationRequest).default(enums.MultiZoneApplicationRequest.APPLY))
        )

    GetColorZones = msg(502
        , ("start_index", T.Uint8)
        , ("end_index", T.Uint8)
        )

    StateZone = msg(503
        , ("zones_count", T.Uint8)
        , ("zone_index", T.Uint8)
        , ("color", fields.HSBK)
        )

    StateMultiZone = msg(506
        , ("zones_count", T.Uint8)
        , ("zone_index", T.Uint8)
        , ("colors", T.Bytes(64).multiple(8, kls=fields.HSBK))
        )

    GetMultiZoneEffect = msg(507)

    SetMultiZoneEffect = msg(508
        , *fields.multi_zone_effect_settings
        )

    StateMultiZoneEffect = SetMultiZoneEffect.using(509)

    SetExtendedColorZones = msg(510
        , ("duration", T.Uint32)
        , ("apply", T.Uint8.enum(enums.MultiZoneExtendedApplicationRequest).default(enums.MultiZoneExtendedApplicationRequest.APPLY))
        , ("zone_index", T.Uint16)
        , ("colors", fields.zones)
        )

    GetExtendedColorZones = msg(511)

    StateExtendedColorZones = msg(512
        , ("zones_count", T.Uint16)
        , ("zone_index", T.Uint16)
        , ("colors", fields.zones)
        )

########################
###   RELAY
########################

class RelayMessages(Messages):
    GetRPower = msg(816
        , ("relay_index", T.Uint8)
        )

    SetRPower = msg(817
        , ("relay_index", T.Uint8)
        , ("level", T.Uint16)
        )

    StateRPower = SetRPower.using(818)

# fmt: on

__all__ = [
    "CoreMessages",
    "DiscoveryMessages",
    "DeviceMessages",
    "LightMessages",
    "MultiZoneMessages",
    "RelayMessages",
]

by_type = dispatch_table(
    CoreMessages,
    DiscoveryMessages,
    DeviceMessages,
    LightMessages,
    MultiZoneMessages,
    RelayMessages,
)
