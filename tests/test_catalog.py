import pytest

from lambdas.owlbot import data_access as da
from lambdas.owlbot.catalog import CatalogError, build_catalog, compile_pattern


def _data(entries, groups=None):
    return {"groups": groups or {}, "entries": entries}


def test_bundled_catalogs_satisfy_contract():
    buildings = da.get_buildings()
    businesses = da.get_businesses()
    assert set(buildings.groups) == {"Anderson", "Brown Hall", "Duncan", "Lovett"}
    assert set(businesses.groups) == {"Coffee", "Pub", "Servery"}
    assert buildings.get("M.D. Anderson Hall").metadata["address"] == "https://goo.gl/maps/KYpf6JNxeSr"
    for entry in businesses:
        if not entry.is_conflict:
            assert {"location", "hours", "map"} <= set(entry.metadata)


def test_bundled_content_pools():
    pools = da.get_content_pools()
    assert len(pools[da.POOL_FACTS]) == 9
    for spot in pools[da.POOL_EXPLORE]:
        assert spot["description"] and spot["image"] and spot["map"]


def test_marker_must_precede_members():
    data = _data(
        [
            {"name": "North Hall", "pattern": "north\\shall", "metadata": {"address": "n"}},
            {"name": "Hall", "pattern": "hall", "conflict": "Hall"},
            {"name": "South Hall", "pattern": "south\\shall", "metadata": {"address": "s"}},
        ],
        groups={"Hall": ["North Hall", "South Hall"]},
    )
    with pytest.raises(CatalogError, match="before"):
        build_catalog(data)


def test_marker_requires_known_group():
    data = _data([{"name": "Hall", "pattern": "hall", "conflict": "Hall"}])
    with pytest.raises(CatalogError, match="unknown group"):
        build_catalog(data)


def test_group_needs_two_declared_members():
    one = _data(
        [
            {"name": "Hall", "pattern": "hall", "conflict": "Hall"},
            {"name": "North Hall", "pattern": "north\\shall", "metadata": {"address": "n"}},
        ],
        groups={"Hall": ["North Hall"]},
    )
    with pytest.raises(CatalogError, match="at least two"):
        build_catalog(one)
    missing = _data(
        [
            {"name": "Hall", "pattern": "hall", "conflict": "Hall"},
            {"name": "North Hall", "pattern": "north\\shall", "metadata": {"address": "n"}},
        ],
        groups={"Hall": ["North Hall", "East Hall"]},
    )
    with pytest.raises(CatalogError, match="not declared"):
        build_catalog(missing)


def test_resolved_entry_needs_metadata_and_pattern():
    with pytest.raises(CatalogError, match="no metadata"):
        build_catalog(_data([{"name": "Lab", "pattern": "lab"}]))
    with pytest.raises(CatalogError, match="no pattern"):
        build_catalog(_data([{"name": "Lab", "pattern": "", "metadata": {"address": "x"}}]))
    with pytest.raises(CatalogError, match="bad pattern"):
        build_catalog(_data([{"name": "Lab", "pattern": "lab(", "metadata": {"address": "x"}}]))


def test_uppercase_escapes_keep_their_meaning():
    assert compile_pattern(r"m\W?d\W?\sHALL").pattern == r"m\W?d\W?\sHALL"
    entry = build_catalog(
        _data([{"name": "M.D. Hall", "pattern": r"m\W?d\W?\shall", "metadata": {"address": "x"}}])
    ).get("M.D. Hall")
    assert entry.matches("m.d. hall")
    assert entry.matches("M-D- Hall")
    assert not entry.matches("mxdx hall")
