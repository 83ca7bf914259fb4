# Model package init
from .models import (  # noqa: F401 re-export
    CORE_TABLES,
    BaseSpot,
    Cave,
    Creature,
    CreatureSpawn,
    CreatureStat,
    DataSyncLog,
    Map,
    MapLocation,
    MapRegion,
    MapRoute,
    Obelisk,
    PopulationJob,
    Resource,
    SupplyDrop,
    SystemConfig,
    SystemStatus,
    TamingData,
    TamingFood,
    UserLocation,
    WikiUpdateLog,
)

__all__ = [
    "CORE_TABLES",
    "BaseSpot",
    "Cave",
    "Creature",
    "CreatureSpawn",
    "CreatureStat",
    "DataSyncLog",
    "Map",
    "MapLocation",
    "MapRegion",
    "MapRoute",
    "Obelisk",
    "PopulationJob",
    "Resource",
    "SupplyDrop",
    "SystemConfig",
    "SystemStatus",
    "TamingData",
    "TamingFood",
    "UserLocation",
    "WikiUpdateLog",
]
