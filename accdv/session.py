"""
Data sessions: one loaded data version and everything derived from it.

A DataSession is built once per data version by ``load_data_from_version``
and passed into every ``get_data_for_options`` call. Loading a new version
builds a new session; nothing is merged into an old one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, TypeVar

from .catalog import Catalog, CatalogLoader
from .components import (
    Component,
    PowerPlant,
    Radiator,
    ShipArmor,
    ShipHull,
    UnknownComponentError,
    UtilityModule,
)
from .drives import group_drive_families
from .evaluator import ConfigurationOptions, ConfigurationResult, EvaluationContext, evaluate_pairings
from .modules import selectable_hydrogen_modules, selectable_spikers
from .power import DrivePowerPlantPairing, pair_drive_families, select_best_power_plants
from .structure import (
    HullAreas,
    compute_armor_coefficients,
    compute_hull_areas,
    compute_structural_mass,
)

C = TypeVar("C", bound=Component)


def _lookup(table: Dict[str, C], kind: str, data_name: str) -> C:
    try:
        return table[data_name]
    except KeyError:
        raise UnknownComponentError(kind, data_name) from None


@dataclass(frozen=True)
class DataSession:
    """
    A loaded data version with its preprocessed dictionaries.

    Attributes:
        catalog: Raw component tables.
        best_power_plants: Most efficient power plant per class.
        pairings: Drive families paired with their required-class plant.
        power_plants: Every power plant, by identifier.
        radiators: Selectable radiators, by identifier.
        hydrogen_modules: Selectable hydrogen modules, by identifier.
        spikers: Selectable thrust spikers, by identifier.
        hulls: Selectable hulls, by identifier.
        armors: Selectable armor materials, by identifier.
        hull_areas: Effective armor areas per selectable hull.
        armor_coefficients: Mass-per-area per selectable armor.
    """
    catalog: Catalog
    best_power_plants: Dict[str, PowerPlant] = field(default_factory=dict, hash=False)
    pairings: List[DrivePowerPlantPairing] = field(default_factory=list, hash=False)
    power_plants: Dict[str, PowerPlant] = field(default_factory=dict, hash=False)
    radiators: Dict[str, Radiator] = field(default_factory=dict, hash=False)
    hydrogen_modules: Dict[str, UtilityModule] = field(default_factory=dict, hash=False)
    spikers: Dict[str, UtilityModule] = field(default_factory=dict, hash=False)
    hulls: Dict[str, ShipHull] = field(default_factory=dict, hash=False)
    armors: Dict[str, ShipArmor] = field(default_factory=dict, hash=False)
    hull_areas: Dict[str, HullAreas] = field(default_factory=dict, hash=False)
    armor_coefficients: Dict[str, float] = field(default_factory=dict, hash=False)

    @property
    def version(self) -> str:
        return self.catalog.version

    @classmethod
    def from_catalog(cls, catalog: Catalog, verbose: bool = False) -> DataSession:
        """
        Preprocess a catalog.

        Raises:
            DataIntegrityError: If any drive or armor record is malformed.
        """
        best_power_plants = select_best_power_plants(catalog.power_plants)
        families = group_drive_families(catalog.drives)
        pairings = pair_drive_families(families, best_power_plants)

        session = cls(
            catalog=catalog,
            best_power_plants=best_power_plants,
            pairings=pairings,
            power_plants={p.data_name: p for p in catalog.power_plants},
            radiators={r.data_name: r for r in catalog.radiators if r.is_selectable},
            hydrogen_modules=selectable_hydrogen_modules(catalog.utility_modules),
            spikers=selectable_spikers(catalog.utility_modules),
            hulls={h.data_name: h for h in catalog.hulls if h.is_selectable},
            armors={a.data_name: a for a in catalog.armors if a.is_selectable},
            hull_areas=compute_hull_areas(catalog.hulls),
            armor_coefficients=compute_armor_coefficients(catalog.armors),
        )

        if verbose:
            reactorless = sum(1 for p in pairings if p.reactorless)
            print(f"[PREPROCESS] {catalog.version}: {len(families)} drive families "
                  f"({reactorless} reactorless), {len(best_power_plants)} power plant classes")
        return session

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def power_plant(self, data_name: str) -> PowerPlant:
        return _lookup(self.power_plants, "power plant", data_name)

    def radiator(self, data_name: str) -> Radiator:
        return _lookup(self.radiators, "radiator", data_name)

    def hydrogen_module(self, data_name: str) -> UtilityModule:
        return _lookup(self.hydrogen_modules, "hydrogen module", data_name)

    def spiker(self, data_name: str) -> UtilityModule:
        return _lookup(self.spikers, "spiker", data_name)

    def hull(self, data_name: str) -> ShipHull:
        return _lookup(self.hulls, "hull", data_name)

    def armor(self, data_name: str) -> ShipArmor:
        return _lookup(self.armors, "armor", data_name)

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def resolve(self, options: ConfigurationOptions) -> EvaluationContext:
        """
        Look up every component an options object names.

        Raises:
            UnknownComponentError: If any identifier is not in this session.
        """
        hull = self.hull(options.hull) if options.hull is not None else None
        armor = self.armor(options.armor) if options.armor is not None else None

        structure = compute_structural_mass(
            hull=hull,
            hull_areas=self.hull_areas[hull.data_name] if hull is not None else None,
            armor_coefficient=(
                self.armor_coefficients[armor.data_name] if armor is not None else None
            ),
            thickness=options.armor_thickness,
            num_fuel_tanks=options.num_fuel_tanks,
        )

        def optional(lookup, data_name: Optional[str]):
            return lookup(data_name) if data_name is not None else None

        return EvaluationContext(
            radiator=self.radiator(options.radiator),
            structure=structure,
            payload=options.payload,
            num_fuel_tanks=options.num_fuel_tanks,
            default_power_plant=optional(self.power_plant, options.default_power_plant),
            hydrogen=optional(self.hydrogen_module, options.hydrogen),
            spiker=optional(self.spiker, options.spiker),
        )

    def evaluate(self, options: ConfigurationOptions) -> ConfigurationResult:
        """Evaluate a configuration against this session."""
        return evaluate_pairings(self.pairings, self.resolve(options))


# =============================================================================
# PUBLIC API
# =============================================================================

def load_data_from_version(
    version: str,
    loader: Optional[CatalogLoader] = None,
    verbose: bool = False,
) -> DataSession:
    """
    Fetch and preprocess every catalog for a data version.

    Args:
        version: Data version identifier.
        loader: Catalog loader (defaults to one configured from the environment).
        verbose: If True, print progress while loading and preprocessing.

    Returns:
        A new DataSession; previously returned sessions are unaffected.

    Raises:
        CatalogLoadError: If any table cannot be fetched.
        DataIntegrityError: If preprocessing hits a malformed record.
    """
    loader = loader or CatalogLoader(verbose=verbose)
    return DataSession.from_catalog(loader.load(version), verbose=verbose)


async def load_data_from_version_async(
    version: str,
    loader: Optional[CatalogLoader] = None,
    verbose: bool = False,
) -> DataSession:
    """Async variant of load_data_from_version(); tables are fetched concurrently."""
    loader = loader or CatalogLoader(verbose=verbose)
    return DataSession.from_catalog(await loader.load_async(version), verbose=verbose)


def get_data_for_options(session: DataSession, options: ConfigurationOptions) -> ConfigurationResult:
    """
    Evaluate a configuration against a loaded session.

    Raises:
        UnknownComponentError: If the options name an unknown component.
    """
    return session.evaluate(options)
