"""
SimcData - Data Provider
Fetches the generated data dumps from the simc repository and serves
decoded tables.

Three cache layers, checked in order:
  1. in-memory: decoded tables per file type (guarded by a lock)
  2. parsed JSON: <cache_dir>/<Name>.json written after each decode
  3. raw dumps: <cache_dir>/<Key>.raw, revalidated with ETags once they
     are older than the cache TTL

If a raw dump cannot be downloaded, a stale local copy is used. With no
local copy at all, DataFetchError is raised.
"""

import json
import logging
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import requests

from config import (
    CACHE_DIR,
    CACHE_TTL,
    DEFAULT_BRANCH,
    ETAG_CACHE_FILE,
    HTTP_TIMEOUT,
    HTTP_USER_AGENT,
    SIMC_GENERATED_PATH,
    SIMC_RAW_BASE_URL,
    USE_PTR_DATA,
)
from errors import DataFetchError, UnsupportedFileType
from raw_data import dict_to_record, record_to_dict
from table_decoder import (
    CONDUIT_DATA_KEY,
    CURVE_DATA_KEY,
    GEM_DATA_KEY,
    ITEM_BONUS_KEY,
    ITEM_DATA_KEY,
    ITEM_EFFECT_KEY,
    ITEM_ENCHANT_KEY,
    RANDOM_PROP_KEY,
    RPPM_DATA_KEY,
    SCALE_DATA_KEY,
    SPELL_DATA_KEY,
    SPELL_SCALE_DATA_KEY,
    TRAIT_DATA_KEY,
    VERSION_DATA_KEY,
    RawTableDecoder,
    SimcFileType,
)

logger = logging.getLogger(__name__)


@dataclass
class FileConfiguration:
    """How one decoded table is produced and cached."""
    file_type: SimcFileType
    local_parsed_file: str                 # e.g. "SpellData.json"
    raw_files: Dict[str, str] = field(default_factory=dict)  # local key -> remote name


def default_file_configurations() -> List[FileConfiguration]:
    item_raw = {ITEM_DATA_KEY: "item_data", ITEM_EFFECT_KEY: "item_effect"}
    return [
        FileConfiguration(SimcFileType.ITEM_DATA_NEW, "ItemDataNew.json", dict(item_raw)),
        FileConfiguration(SimcFileType.ITEM_DATA_OLD, "ItemDataOld.json", dict(item_raw)),
        FileConfiguration(SimcFileType.SPELL_DATA, "SpellData.json",
                          {SPELL_DATA_KEY: "sc_spell_data"}),
        FileConfiguration(SimcFileType.ITEM_BONUS_DATA, "ItemBonusData.json",
                          {ITEM_BONUS_KEY: "item_bonus"}),
        FileConfiguration(SimcFileType.ITEM_ENCHANT_DATA, "ItemEnchantData.json",
                          {ITEM_ENCHANT_KEY: "spell_item_enchantment"}),
        FileConfiguration(SimcFileType.GEM_DATA, "GemData.json",
                          {GEM_DATA_KEY: "gem_data"}),
        FileConfiguration(SimcFileType.CURVE_POINTS, "CurvePoints.json",
                          {CURVE_DATA_KEY: "item_scaling"}),
        FileConfiguration(SimcFileType.RPPM_DATA, "RppmData.json",
                          {RPPM_DATA_KEY: "real_ppm_data"}),
        FileConfiguration(SimcFileType.CONDUIT_RANK_DATA, "ConduitRankData.json",
                          {CONDUIT_DATA_KEY: "covenant_data"}),
        FileConfiguration(SimcFileType.TRAIT_DATA, "TraitData.json",
                          {TRAIT_DATA_KEY: "trait_data"}),
        FileConfiguration(SimcFileType.RANDOM_PROP_POINTS, "RandomPropPoints.json",
                          {RANDOM_PROP_KEY: "rand_prop_points"}),
        FileConfiguration(SimcFileType.COMBAT_RATING_MULTIPLIERS, "CombatRatingMultipliers.json",
                          {SCALE_DATA_KEY: "sc_scale_data"}),
        FileConfiguration(SimcFileType.STAMINA_MULTIPLIERS, "StaminaMultipliers.json",
                          {SCALE_DATA_KEY: "sc_scale_data"}),
        FileConfiguration(SimcFileType.SPELL_SCALE_MULTIPLIERS, "SpellScalingMultipliers.json",
                          {SPELL_SCALE_DATA_KEY: "sc_scale_data"}),
        FileConfiguration(SimcFileType.GAME_DATA_VERSION, "GameDataVersion.json",
                          {VERSION_DATA_KEY: "client_data_version"}),
    ]


# ─── Parsed table (de)serialization ──────────

def _table_to_json(table) -> dict:
    if isinstance(table, np.ndarray):
        return {"kind": "matrix", "dtype": str(table.dtype), "data": table.tolist()}
    if isinstance(table, str):
        return {"kind": "text", "data": table}
    records = list(table)
    record_type = type(records[0]).__name__ if records else ""
    return {
        "kind": "records",
        "record_type": record_type,
        "data": [record_to_dict(r) for r in records],
    }


def _table_from_json(payload: dict):
    kind = payload.get("kind")
    if kind == "matrix":
        return np.array(payload["data"], dtype=payload.get("dtype", "float64"))
    if kind == "text":
        return payload.get("data", "")
    if kind == "records":
        record_type = payload.get("record_type", "")
        return [dict_to_record(record_type, d) for d in payload.get("data", [])]
    raise ValueError(f"unknown parsed table kind {kind!r}")


class DataProvider:
    """Serves decoded tables, downloading and decoding dumps on demand."""

    def __init__(
        self,
        cache_dir: Path = CACHE_DIR,
        branch: str = DEFAULT_BRANCH,
        use_ptr: bool = USE_PTR_DATA,
        cache_ttl: int = CACHE_TTL,
        http_timeout: int = HTTP_TIMEOUT,
        raw_base_url: str = SIMC_RAW_BASE_URL,
        decoder: Optional[RawTableDecoder] = None,
    ):
        self.cache_dir = Path(cache_dir)
        self.cache_ttl = cache_ttl
        self.http_timeout = http_timeout
        self.raw_base_url = raw_base_url.rstrip("/")
        self._branch = branch
        self._use_ptr = use_ptr
        self._decoder = decoder or RawTableDecoder()
        self._registry: Dict[SimcFileType, FileConfiguration] = {}
        self._tables: Dict[SimcFileType, object] = {}
        self._etags: Optional[Dict[str, dict]] = None
        self._lock = threading.Lock()

        for cfg in default_file_configurations():
            self.register(cfg)

    # ── Settings ────────────────────────────────────────────

    @property
    def branch(self) -> str:
        return self._branch

    @branch.setter
    def branch(self, value: str):
        if value == self._branch:
            return
        logger.info(f"DataProvider: branch {self._branch} -> {value}, clearing cache")
        self._branch = value
        self.clear_cache()

    @property
    def use_ptr(self) -> bool:
        return self._use_ptr

    @use_ptr.setter
    def use_ptr(self, value: bool):
        value = bool(value)
        if value == self._use_ptr:
            return
        logger.info(f"DataProvider: PTR data {'on' if value else 'off'}, clearing cache")
        self._use_ptr = value
        self.clear_cache()

    def remote_url(self, remote_name: str) -> str:
        suffix = "_ptr" if self._use_ptr else ""
        return (f"{self.raw_base_url}/{self._branch}/{SIMC_GENERATED_PATH}/"
                f"{remote_name}{suffix}.inc")

    # ── Public API ──────────────────────────────────────────

    def register(self, configuration: FileConfiguration):
        """Register (or replace) how a file type is produced."""
        self._registry[configuration.file_type] = configuration
        self._tables.pop(configuration.file_type, None)

    def get_table(self, file_type: SimcFileType):
        """Return the decoded table for `file_type`.

        Raises:
            UnsupportedFileType: the file type was never registered.
            DataFetchError: a raw dump is neither downloadable nor on disk.
        """
        with self._lock:
            if file_type in self._tables:
                return self._tables[file_type]

            configuration = self._registry.get(file_type)
            if configuration is None:
                raise UnsupportedFileType(file_type)

            table = self._load_parsed(configuration)
            if table is None:
                raw_data = {
                    key: self.get_raw_file(configuration, key)
                    for key in configuration.raw_files
                }
                table = self._decoder.decode(file_type, raw_data)
                self._save_parsed(configuration, table)

            self._tables[file_type] = table
            return table

    def clear_cache(self):
        """Drop decoded tables from memory and delete cached files on disk."""
        with self._lock:
            self._tables.clear()
            self._etags = {}
            names = {ETAG_CACHE_FILE}
            for cfg in self._registry.values():
                names.add(cfg.local_parsed_file)
                names.update(cfg.raw_files)
            removed = 0
            for name in names:
                path = self.cache_dir / name
                try:
                    if path.exists():
                        path.unlink()
                        removed += 1
                except Exception as e:
                    logger.warning(f"DataProvider: failed to delete {path}: {e}")
            logger.info(f"DataProvider: cache cleared ({removed} files removed)")

    # ── Raw files ───────────────────────────────────────────

    def get_raw_file(self, configuration: FileConfiguration, key: str) -> str:
        """Contents of one raw dump, downloading it when missing or stale."""
        path = self.cache_dir / key
        if path.exists():
            age = time.time() - path.stat().st_mtime
            if age <= self.cache_ttl:
                return path.read_text(encoding="utf-8")
            logger.debug(f"DataProvider: {key} is {age:.0f}s old, revalidating")

        url = self.remote_url(configuration.raw_files[key])
        return self._download(url, path)

    def _download(self, url: str, path: Path) -> str:
        etags = self._load_etags()
        headers = {"User-Agent": HTTP_USER_AGENT}
        known = etags.get(path.name, {}).get("etag")
        if known and path.exists():
            headers["If-None-Match"] = known

        try:
            logger.info(f"DataProvider: fetching {url}")
            resp = requests.get(url, timeout=self.http_timeout, headers=headers)
        except Exception as e:
            logger.warning(f"DataProvider: download failed for {url}: {e}")
            return self._stale_copy(path, url, str(e))

        if resp.status_code == 304 and path.exists():
            path.touch()
            etags.setdefault(path.name, {})["last_checked"] = time.time()
            self._save_etags()
            logger.debug(f"DataProvider: {path.name} not modified")
            return path.read_text(encoding="utf-8")

        if resp.status_code != 200:
            logger.warning(f"DataProvider: {url} returned HTTP {resp.status_code}")
            return self._stale_copy(path, url, f"HTTP {resp.status_code}")

        text = resp.text
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        etags[path.name] = {
            "etag": resp.headers.get("ETag", ""),
            "last_checked": time.time(),
        }
        self._save_etags()
        logger.info(f"DataProvider: saved {path.name} ({len(text)} chars)")
        return text

    @staticmethod
    def _stale_copy(path: Path, url: str, reason: str) -> str:
        if path.exists():
            logger.warning(f"DataProvider: using stale local copy of {path.name}")
            return path.read_text(encoding="utf-8")
        raise DataFetchError(url, reason)

    # ── ETag bookkeeping ────────────────────────────────────

    def _load_etags(self) -> Dict[str, dict]:
        if self._etags is not None:
            return self._etags
        self._etags = {}
        etag_file = self.cache_dir / ETAG_CACHE_FILE
        try:
            if etag_file.exists():
                with open(etag_file, "r", encoding="utf-8") as f:
                    self._etags = json.load(f)
        except Exception as e:
            logger.warning(f"DataProvider: ETag cache load failed: {e}")
        return self._etags

    def _save_etags(self):
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            with open(self.cache_dir / ETAG_CACHE_FILE, "w", encoding="utf-8") as f:
                json.dump(self._etags or {}, f, indent=2)
        except Exception as e:
            logger.warning(f"DataProvider: ETag cache save failed: {e}")

    # ── Parsed JSON ─────────────────────────────────────────

    def _load_parsed(self, configuration: FileConfiguration):
        path = self.cache_dir / configuration.local_parsed_file
        try:
            if not path.exists():
                return None

            age = time.time() - path.stat().st_mtime
            if age > self.cache_ttl:
                logger.debug(f"DataProvider: {path.name} expired, will rebuild")
                return None

            with open(path, "r", encoding="utf-8") as f:
                table = _table_from_json(json.load(f))
            logger.info(f"DataProvider: loaded {path.name} from disk cache")
            return table
        except Exception as e:
            logger.warning(f"DataProvider: parsed cache load failed for {path.name}: {e}")
            return None

    def _save_parsed(self, configuration: FileConfiguration, table):
        path = self.cache_dir / configuration.local_parsed_file
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(_table_to_json(table), f)
        except Exception as e:
            logger.warning(f"DataProvider: failed to write {path.name}: {e}")


if __name__ == "__main__":
    from config import LOG_LEVEL

    logging.basicConfig(level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
                        format="%(levelname)s: %(message)s")

    provider = DataProvider()
    version = provider.get_table(SimcFileType.GAME_DATA_VERSION)
    print(f"Client data version: {version or '(unknown)'}")
