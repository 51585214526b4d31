import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import ClientError

from . import config as cfg
from .catalog import EntityCatalog, build_catalog

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"

POOL_FACTS = "facts"
POOL_EXPLORE = "explorationSpots"

_CACHE: Dict[str, Any] = {}  # cold-start cache
_S3 = None


def _s3():
    global _S3
    if _S3 is None:
        _S3 = boto3.client("s3", region_name=cfg.AWS_REGION)
    return _S3


def _load_bundled(filename: str) -> Any:
    with open(DATA_DIR / filename, "r", encoding="utf-8") as f:
        return json.load(f)


def _load_from_s3(key: str) -> Optional[Any]:
    try:
        obj = _s3().get_object(Bucket=cfg.S3_BUCKET_DATA, Key=key)
        # Use utf-8-sig to handle potential BOM
        text = obj["Body"].read().decode("utf-8-sig")
        return json.loads(text) if text else None
    except ClientError:
        logger.exception("Failed to load s3://%s/%s, falling back to bundled data", cfg.S3_BUCKET_DATA, key)
        return None


def load_json(filename: str, s3_key: str) -> Any:
    if filename in _CACHE:
        return _CACHE[filename]
    data = None
    if cfg.FEATURE_S3_DATA and cfg.S3_BUCKET_DATA:
        data = _load_from_s3(s3_key)
        if data is not None:
            logger.info("Loaded %s from s3://%s/%s", filename, cfg.S3_BUCKET_DATA, s3_key)
    if data is None:
        data = _load_bundled(filename)
    _CACHE[filename] = data
    return data


def clear_cache() -> None:
    _CACHE.clear()


# --- Catalogs ---

def get_buildings() -> EntityCatalog:
    return build_catalog(load_json("buildings.json", cfg.S3_BUILDINGS_KEY), name="buildings")


def get_businesses() -> EntityCatalog:
    return build_catalog(load_json("businesses.json", cfg.S3_BUSINESSES_KEY), name="businesses")


# --- Content pools ---

def get_facts() -> List[str]:
    return [str(f) for f in load_json("facts.json", cfg.S3_FACTS_KEY) or []]


def get_exploration_spots() -> List[Dict[str, str]]:
    return list(load_json("explore.json", cfg.S3_EXPLORE_KEY) or [])


def get_content_pools() -> Dict[str, list]:
    return {
        POOL_FACTS: get_facts(),
        POOL_EXPLORE: get_exploration_spots(),
    }
