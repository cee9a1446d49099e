"""
Tests for catalog loading.

HTTP loading is exercised against httpx.MockTransport; directory loading
against the sample data version shipped in data/versions/sample.
"""

import asyncio
import json
from pathlib import Path

import httpx
import pytest

from accdv.catalog import (
    DRIVE_TEMPLATE,
    TEMPLATE_FILES,
    Catalog,
    CatalogLoader,
    CatalogLoadError,
)
from accdv.components import DataIntegrityError
from accdv.config import LoaderConfig

DATA_DIR = Path(__file__).parent.parent / "data"
SAMPLE_DIR = DATA_DIR / "versions" / "sample"


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def sample_tables():
    tables = {}
    for name in TEMPLATE_FILES:
        with open(SAMPLE_DIR / name, encoding="utf-8") as f:
            tables[name] = json.load(f)
    return tables


def make_handler(tables, requested=None, fail=None):
    """Serve tables at /versions/sample/<name>; fail selected names with 404."""
    def handler(request: httpx.Request) -> httpx.Response:
        if requested is not None:
            requested.append(request.url.path)
        prefix = "/versions/sample/"
        name = request.url.path[len(prefix):]
        if not request.url.path.startswith(prefix) or name not in tables or name == fail:
            return httpx.Response(404, text="not found")
        return httpx.Response(200, json=tables[name])
    return handler


@pytest.fixture
def http_config():
    return LoaderConfig(base_url="http://ti-data.test/")


# ============================================================================
# Config
# ============================================================================

class TestLoaderConfig:
    def test_strips_trailing_slash(self, http_config):
        assert http_config.base_url == "http://ti-data.test"

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ACCDV_DATA_URL", "http://example.test")
        monkeypatch.setenv("ACCDV_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("ACCDV_HTTP_TIMEOUT", "5")
        config = LoaderConfig.from_env()
        assert config.base_url == "http://example.test"
        assert config.data_dir == tmp_path
        assert config.timeout == 5.0

    def test_from_env_defaults(self, monkeypatch):
        for var in ("ACCDV_DATA_URL", "ACCDV_DATA_DIR", "ACCDV_HTTP_TIMEOUT"):
            monkeypatch.delenv(var, raising=False)
        config = LoaderConfig.from_env()
        assert config.data_dir is None
        assert config.timeout == 30.0

    def test_bad_timeout(self, monkeypatch):
        monkeypatch.setenv("ACCDV_HTTP_TIMEOUT", "soon")
        with pytest.raises(ValueError):
            LoaderConfig.from_env()


# ============================================================================
# HTTP loading
# ============================================================================

class TestHttpLoading:
    def test_fetches_every_template(self, sample_tables, http_config):
        requested = []
        client = httpx.Client(transport=httpx.MockTransport(make_handler(sample_tables, requested)))
        catalog = CatalogLoader(config=http_config, client=client).load("sample")

        assert sorted(requested) == sorted(f"/versions/sample/{n}" for n in TEMPLATE_FILES)
        assert catalog.version == "sample"
        assert len(catalog.drives) == 5
        assert len(catalog.power_plants) == 5
        assert catalog.drives[0].data_name == "TestTorchx1"

    def test_http_error(self, sample_tables, http_config):
        client = httpx.Client(transport=httpx.MockTransport(
            make_handler(sample_tables, fail=DRIVE_TEMPLATE)))
        with pytest.raises(CatalogLoadError, match=DRIVE_TEMPLATE):
            CatalogLoader(config=http_config, client=client).load("sample")

    def test_unknown_version(self, sample_tables, http_config):
        client = httpx.Client(transport=httpx.MockTransport(make_handler(sample_tables)))
        with pytest.raises(CatalogLoadError):
            CatalogLoader(config=http_config, client=client).load("9.9.9")

    def test_invalid_json(self, http_config):
        client = httpx.Client(transport=httpx.MockTransport(
            lambda request: httpx.Response(200, text="{not json")))
        with pytest.raises(CatalogLoadError, match="not valid JSON"):
            CatalogLoader(config=http_config, client=client).load("sample")

    def test_table_must_be_array(self, http_config):
        client = httpx.Client(transport=httpx.MockTransport(
            lambda request: httpx.Response(200, json={"dataName": "x"})))
        with pytest.raises(CatalogLoadError, match="not a JSON array"):
            CatalogLoader(config=http_config, client=client).load("sample")

    def test_async_load(self, sample_tables, http_config):
        requested = []
        client = httpx.AsyncClient(transport=httpx.MockTransport(make_handler(sample_tables, requested)))
        loader = CatalogLoader(config=http_config, async_client=client)

        catalog = asyncio.run(loader.load_async("sample"))

        assert len(requested) == len(TEMPLATE_FILES)
        assert [d.data_name for d in catalog.drives] == [
            "TestTorchx1", "TestTorchx2", "ChemRocketx1", "PulseDrivex1", "SaltWaterx1",
        ]

    def test_async_http_error(self, sample_tables, http_config):
        client = httpx.AsyncClient(transport=httpx.MockTransport(
            make_handler(sample_tables, fail=DRIVE_TEMPLATE)))
        loader = CatalogLoader(config=http_config, async_client=client)
        with pytest.raises(CatalogLoadError):
            asyncio.run(loader.load_async("sample"))

    def test_verbose_output(self, sample_tables, http_config, capsys):
        client = httpx.Client(transport=httpx.MockTransport(make_handler(sample_tables)))
        CatalogLoader(config=http_config, client=client, verbose=True).load("sample")
        out = capsys.readouterr().out
        assert "[CATALOG] Fetching http://ti-data.test/versions/sample/TIDriveTemplate.json" in out
        assert "[CATALOG] Loaded version sample: 5 drives, 5 power plants" in out


# ============================================================================
# Directory loading
# ============================================================================

class TestDirectoryLoading:
    def test_reads_sample_version(self):
        catalog = CatalogLoader(config=LoaderConfig(data_dir=DATA_DIR)).load("sample")
        assert len(catalog.radiators) == 2
        assert len(catalog.utility_modules) == 5
        assert catalog.hulls[0].data_name == "Corvette"
        assert catalog.armors[0].heat_of_vaporization_mj_kg == 8.0

    def test_data_dir_wins_over_url(self):
        def handler(request):
            raise AssertionError("HTTP should not be used")
        client = httpx.Client(transport=httpx.MockTransport(handler))
        loader = CatalogLoader(config=LoaderConfig(data_dir=DATA_DIR), client=client)
        assert loader.load("sample").version == "sample"

    def test_missing_version(self, tmp_path):
        with pytest.raises(CatalogLoadError):
            CatalogLoader(config=LoaderConfig(data_dir=tmp_path)).load("sample")

    def test_async_reads_directory(self):
        loader = CatalogLoader(config=LoaderConfig(data_dir=DATA_DIR))
        catalog = asyncio.run(loader.load_async("sample"))
        assert len(catalog.drives) == 5


# ============================================================================
# Parsing
# ============================================================================

class TestCatalogFromTables:
    def test_missing_tables_are_empty(self):
        catalog = Catalog.from_tables("v", {})
        assert catalog.drives == ()
        assert catalog.armors == ()

    def test_malformed_record(self, sample_tables):
        del sample_tables[DRIVE_TEMPLATE][0]["thrust_N"]
        with pytest.raises(DataIntegrityError):
            Catalog.from_tables("sample", sample_tables)
