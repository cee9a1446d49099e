"""
Component catalog loading.

Fetches the six Terra Invicta template tables for a data version, either
over HTTP with httpx or from a local directory laid out as
``versions/<version>/<template>.json``, and parses them into immutable
component records.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import httpx

from .components import Drive, PowerPlant, Radiator, ShipArmor, ShipHull, UtilityModule
from .config import LoaderConfig


# =============================================================================
# TEMPLATE FILES
# =============================================================================

DRIVE_TEMPLATE = "TIDriveTemplate.json"
POWER_PLANT_TEMPLATE = "TIPowerPlantTemplate.json"
RADIATOR_TEMPLATE = "TIRadiatorTemplate.json"
UTILITY_MODULE_TEMPLATE = "TIUtilityModuleTemplate.json"
HULL_TEMPLATE = "TIShipHullTemplate.json"
ARMOR_TEMPLATE = "TIShipArmorTemplate.json"

TEMPLATE_FILES: Tuple[str, ...] = (
    DRIVE_TEMPLATE,
    POWER_PLANT_TEMPLATE,
    RADIATOR_TEMPLATE,
    UTILITY_MODULE_TEMPLATE,
    HULL_TEMPLATE,
    ARMOR_TEMPLATE,
)


class CatalogLoadError(RuntimeError):
    """A template table could not be fetched or decoded."""


# =============================================================================
# CATALOG
# =============================================================================

@dataclass(frozen=True)
class Catalog:
    """All component tables for one data version, in source order."""
    version: str
    drives: Tuple[Drive, ...] = ()
    power_plants: Tuple[PowerPlant, ...] = ()
    radiators: Tuple[Radiator, ...] = ()
    utility_modules: Tuple[UtilityModule, ...] = ()
    hulls: Tuple[ShipHull, ...] = ()
    armors: Tuple[ShipArmor, ...] = ()

    @classmethod
    def from_tables(cls, version: str, tables: Dict[str, List[dict]]) -> Catalog:
        """
        Parse raw template tables into a catalog.

        Args:
            version: Data version identifier.
            tables: Raw records keyed by template file name. Missing tables
                are treated as empty.

        Raises:
            DataIntegrityError: If any record is malformed.
        """
        def parse(filename, record_type):
            return tuple(record_type.from_template(item) for item in tables.get(filename, []))

        return cls(
            version=version,
            drives=parse(DRIVE_TEMPLATE, Drive),
            power_plants=parse(POWER_PLANT_TEMPLATE, PowerPlant),
            radiators=parse(RADIATOR_TEMPLATE, Radiator),
            utility_modules=parse(UTILITY_MODULE_TEMPLATE, UtilityModule),
            hulls=parse(HULL_TEMPLATE, ShipHull),
            armors=parse(ARMOR_TEMPLATE, ShipArmor),
        )


def _check_table(filename: str, data: Any) -> List[dict]:
    if not isinstance(data, list):
        raise CatalogLoadError(f"{filename} root is not a JSON array")
    return data


# =============================================================================
# LOADER
# =============================================================================

class CatalogLoader:
    """
    Fetches template tables for a data version.

    A local data directory, when configured, is read instead of the
    base URL.
    """

    def __init__(
        self,
        config: Optional[LoaderConfig] = None,
        client: Optional[httpx.Client] = None,
        async_client: Optional[httpx.AsyncClient] = None,
        verbose: bool = False,
    ):
        """
        Initialize the loader.

        Args:
            config: Loader settings (defaults to LoaderConfig.from_env()).
            client: HTTP client to use instead of creating one per load.
            async_client: Async HTTP client to use for load_async.
            verbose: If True, print progress while loading.
        """
        self.config = config or LoaderConfig.from_env()
        self._client = client
        self._async_client = async_client
        self.verbose = verbose

    def _log(self, message: str) -> None:
        if self.verbose:
            print(f"[CATALOG] {message}")

    def template_url(self, version: str, filename: str) -> str:
        return f"{self.config.base_url}/versions/{version}/{filename}"

    def template_path(self, version: str, filename: str) -> Path:
        return self.config.data_dir / "versions" / version / filename

    # -------------------------------------------------------------------------
    # Local directory
    # -------------------------------------------------------------------------

    def _read_file(self, version: str, filename: str) -> List[dict]:
        path = self.template_path(version, filename)
        self._log(f"Reading {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                return _check_table(filename, json.load(f))
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogLoadError(f"Failed to read {path}: {e}") from e

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------

    def _decode(self, filename: str, response: httpx.Response) -> List[dict]:
        response.raise_for_status()
        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise CatalogLoadError(f"{filename} is not valid JSON: {e}") from e
        return _check_table(filename, data)

    def _fetch(self, client: httpx.Client, version: str, filename: str) -> List[dict]:
        url = self.template_url(version, filename)
        self._log(f"Fetching {url}")
        try:
            return self._decode(filename, client.get(url))
        except httpx.HTTPError as e:
            raise CatalogLoadError(f"Failed to fetch {url}: {e}") from e

    async def _fetch_async(
        self, client: httpx.AsyncClient, version: str, filename: str
    ) -> List[dict]:
        url = self.template_url(version, filename)
        self._log(f"Fetching {url}")
        try:
            return self._decode(filename, await client.get(url))
        except httpx.HTTPError as e:
            raise CatalogLoadError(f"Failed to fetch {url}: {e}") from e

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def fetch_tables(self, version: str) -> Dict[str, List[dict]]:
        """
        Fetch the raw template tables for a version.

        Raises:
            CatalogLoadError: If any table cannot be fetched or decoded.
        """
        if self.config.data_dir is not None:
            return {name: self._read_file(version, name) for name in TEMPLATE_FILES}

        if self._client is not None:
            return {name: self._fetch(self._client, version, name) for name in TEMPLATE_FILES}

        with httpx.Client(timeout=self.config.timeout) as client:
            return {name: self._fetch(client, version, name) for name in TEMPLATE_FILES}

    async def fetch_tables_async(self, version: str) -> Dict[str, List[dict]]:
        """
        Fetch the raw template tables for a version concurrently.

        Raises:
            CatalogLoadError: If any table cannot be fetched or decoded.
        """
        if self.config.data_dir is not None:
            return self.fetch_tables(version)

        async def fetch_all(client):
            tables = await asyncio.gather(
                *(self._fetch_async(client, version, name) for name in TEMPLATE_FILES)
            )
            return dict(zip(TEMPLATE_FILES, tables))

        if self._async_client is not None:
            return await fetch_all(self._async_client)

        async with httpx.AsyncClient(timeout=self.config.timeout) as client:
            return await fetch_all(client)

    def load(self, version: str) -> Catalog:
        """Fetch and parse every component table for a version."""
        catalog = Catalog.from_tables(version, self.fetch_tables(version))
        self._log(f"Loaded version {version}: {len(catalog.drives)} drives, "
                  f"{len(catalog.power_plants)} power plants")
        return catalog

    async def load_async(self, version: str) -> Catalog:
        """Async variant of load()."""
        catalog = Catalog.from_tables(version, await self.fetch_tables_async(version))
        self._log(f"Loaded version {version}: {len(catalog.drives)} drives, "
                  f"{len(catalog.power_plants)} power plants")
        return catalog
