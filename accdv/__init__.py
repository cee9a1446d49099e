"""Terra Invicta acceleration / delta-v calculator package."""

from .catalog import (
    Catalog,
    CatalogLoader,
    CatalogLoadError,
    TEMPLATE_FILES,
)

from .components import (
    # Exceptions
    DataIntegrityError,
    UnknownComponentError,
    # Records
    Component,
    Cooling,
    Drive,
    PowerPlant,
    Radiator,
    ShipArmor,
    ShipHull,
    UtilityModule,
)

from .config import LoaderConfig

from .drives import family_key, group_drive_families

from .evaluator import (
    ConfigurationOptions,
    ConfigurationResult,
    DrivePerformance,
    EvaluatedPairing,
)

from .power import (
    DriveDerivedValues,
    DrivePowerPlantPairing,
    derive_drive_values,
    select_best_power_plants,
)

from .session import (
    DataSession,
    get_data_for_options,
    load_data_from_version,
    load_data_from_version_async,
)

from .structure import ArmorThickness, HullAreas, StructuralMass

__all__ = [
    # Catalog module
    "Catalog",
    "CatalogLoader",
    "CatalogLoadError",
    "TEMPLATE_FILES",
    # Components module - Exceptions
    "DataIntegrityError",
    "UnknownComponentError",
    # Components module - Records
    "Component",
    "Cooling",
    "Drive",
    "PowerPlant",
    "Radiator",
    "ShipArmor",
    "ShipHull",
    "UtilityModule",
    # Config module
    "LoaderConfig",
    # Drives module
    "family_key",
    "group_drive_families",
    # Evaluator module
    "ConfigurationOptions",
    "ConfigurationResult",
    "DrivePerformance",
    "EvaluatedPairing",
    # Power module
    "DriveDerivedValues",
    "DrivePowerPlantPairing",
    "derive_drive_values",
    "select_best_power_plants",
    # Session module
    "DataSession",
    "get_data_for_options",
    "load_data_from_version",
    "load_data_from_version_async",
    # Structure module
    "ArmorThickness",
    "HullAreas",
    "StructuralMass",
]
