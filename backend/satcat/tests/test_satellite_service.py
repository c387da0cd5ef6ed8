"""
Tests for the satellite record service lifecycle and cache coherence
"""

import pytest

from satcat.domains.satellite.exceptions import (
    InvalidSatelliteData,
    MalformedTLE,
    SatelliteNotFound,
    StoreUnavailable,
)
from satcat.domains.satellite.models.dto import SatellitePatch, TLEEntry
from satcat.domains.satellite.services.satellite_service import SatelliteService
from satcat.domains.satellite.services.tle_service import derive_orbital_state
from conftest import (
    ISS_2019_LINE1,
    ISS_2019_LINE2,
    ISS_2020_LINE1,
    ISS_2020_LINE2,
    VANGUARD_LINE1,
    VANGUARD_LINE2,
    InMemorySatelliteRepository,
    run,
    with_mean_motion,
)


def assert_coherent(record):
    assert record.orbital_state == derive_orbital_state(
        record.tle.line_one, record.tle.line_two
    )


def test_create_round_trip(service, repository):
    """A created record reads back with the same name, TLE and derived state"""
    created = run(service.create_satellite("ISS (ZARYA)", ISS_2019_LINE1, ISS_2019_LINE2))
    fetched = run(service.get_satellite_by_id(created.id))

    assert created.id is not None
    assert fetched.name == "ISS (ZARYA)"
    assert fetched.tle.line_one == ISS_2019_LINE1
    assert fetched.tle.line_two == ISS_2019_LINE2
    assert fetched.orbital_state == derive_orbital_state(ISS_2019_LINE1, ISS_2019_LINE2)
    assert fetched.created_at is not None
    assert repository.writes == ["create"]


def test_create_rejects_malformed_tle(service, repository):
    """Malformed TLE fails before any store write"""
    run(service.create_satellite("ISS (ZARYA)", ISS_2019_LINE1, ISS_2019_LINE2))
    before = len(run(service.list_satellites()))

    with pytest.raises(MalformedTLE):
        run(service.create_satellite("junk", "garbage", "garbage"))

    assert len(run(service.list_satellites())) == before
    assert repository.writes == ["create"]


@pytest.mark.parametrize("name", ["", "   "])
def test_create_rejects_blank_name(service, repository, name):
    with pytest.raises(InvalidSatelliteData):
        run(service.create_satellite(name, ISS_2019_LINE1, ISS_2019_LINE2))

    assert repository.writes == []


def test_create_strips_name(service):
    created = run(service.create_satellite("  ISS (ZARYA) ", ISS_2019_LINE1, ISS_2019_LINE2))

    assert created.name == "ISS (ZARYA)"


def test_update_line_one_rederives_from_merged_pair(service):
    """Changing only line one re-derives from the new line one and the kept line two"""
    created = run(service.create_satellite("ISS (ZARYA)", ISS_2019_LINE1, ISS_2019_LINE2))

    updated = run(
        service.update_satellite_by_id(created.id, SatellitePatch(line_one=ISS_2020_LINE1))
    )

    assert updated.tle.line_one == ISS_2020_LINE1
    assert updated.tle.line_two == ISS_2019_LINE2
    assert updated.orbital_state == derive_orbital_state(ISS_2020_LINE1, ISS_2019_LINE2)
    assert updated.orbital_state != created.orbital_state
    assert_coherent(run(service.get_satellite_by_id(created.id)))


def test_update_both_lines(service):
    created = run(service.create_satellite("ISS (ZARYA)", ISS_2019_LINE1, ISS_2019_LINE2))

    updated = run(
        service.update_satellite_by_id(
            created.id,
            SatellitePatch(line_one=ISS_2020_LINE1, line_two=ISS_2020_LINE2),
        )
    )

    assert updated.orbital_state == derive_orbital_state(ISS_2020_LINE1, ISS_2020_LINE2)
    assert updated.created_at == created.created_at
    assert updated.updated_at >= created.updated_at


def test_update_name_only_keeps_state_without_deriving(repository):
    """A name-only patch does not call the deriver"""
    calls = []

    def counting_deriver(line_one, line_two):
        calls.append((line_one, line_two))
        return derive_orbital_state(line_one, line_two)

    service = SatelliteService(satellite_repository=repository, deriver=counting_deriver)
    created = run(service.create_satellite("ISS", ISS_2019_LINE1, ISS_2019_LINE2))

    updated = run(
        service.update_satellite_by_id(created.id, SatellitePatch(name="ISS (ZARYA)"))
    )

    assert len(calls) == 1
    assert updated.name == "ISS (ZARYA)"
    assert updated.orbital_state == created.orbital_state
    assert repository.writes == ["create", "save"]


def test_update_with_malformed_line_leaves_record_unchanged(service, repository):
    created = run(service.create_satellite("ISS (ZARYA)", ISS_2019_LINE1, ISS_2019_LINE2))

    with pytest.raises(MalformedTLE):
        run(service.update_satellite_by_id(created.id, SatellitePatch(line_two="garbage")))

    stored = run(service.get_satellite_by_id(created.id))
    assert stored == created
    assert repository.writes == ["create"]


def test_update_rejects_null_tle_line(service, repository):
    created = run(service.create_satellite("ISS (ZARYA)", ISS_2019_LINE1, ISS_2019_LINE2))

    with pytest.raises(InvalidSatelliteData):
        run(service.update_satellite_by_id(created.id, SatellitePatch(line_one=None)))

    assert repository.writes == ["create"]


def test_empty_patch_is_noop(service, repository):
    created = run(service.create_satellite("ISS (ZARYA)", ISS_2019_LINE1, ISS_2019_LINE2))

    result = run(service.update_satellite_by_id(created.id, SatellitePatch()))

    assert result == created
    assert repository.writes == ["create"]


def test_not_found_symmetry(service, repository):
    """Update and delete of an unknown id raise SatelliteNotFound without writes"""
    run(service.create_satellite("ISS (ZARYA)", ISS_2019_LINE1, ISS_2019_LINE2))

    with pytest.raises(SatelliteNotFound):
        run(service.update_satellite_by_id("missing", SatellitePatch(name="x")))
    with pytest.raises(SatelliteNotFound) as excinfo:
        run(service.delete_satellite_by_id("missing"))
    with pytest.raises(SatelliteNotFound):
        run(service.get_satellite_by_id("missing"))

    assert excinfo.value.satellite_id == "missing"
    assert repository.writes == ["create"]
    assert len(repository.records) == 1


def test_delete_returns_prior_record(service):
    created = run(service.create_satellite("VANGUARD 1", VANGUARD_LINE1, VANGUARD_LINE2))
    before = run(service.get_satellite_by_id(created.id))

    removed = run(service.delete_satellite_by_id(created.id))

    assert removed == before
    with pytest.raises(SatelliteNotFound):
        run(service.get_satellite_by_id(created.id))


def test_bulk_create_persists_coherent_records(service, repository):
    entries = [
        TLEEntry(name="ISS (ZARYA)", line_one=ISS_2019_LINE1, line_two=ISS_2019_LINE2),
        TLEEntry(name="VANGUARD 1", line_one=VANGUARD_LINE1, line_two=VANGUARD_LINE2),
    ]

    summary = run(service.bulk_create_satellites(entries))

    assert summary.created == 2
    assert len(summary.ids) == 2
    assert len(set(summary.ids)) == 2
    assert repository.writes == ["bulk_create"]

    records = run(service.list_satellites())
    assert len(records) == 2
    for record in records:
        assert_coherent(record)
    assert run(service.get_satellite_by_id(summary.ids[1])).name == "VANGUARD 1"


def test_bulk_create_is_atomic(service, repository):
    """One malformed entry rejects the whole batch"""
    entries = [
        TLEEntry(name="ISS (ZARYA)", line_one=ISS_2019_LINE1, line_two=ISS_2019_LINE2),
        TLEEntry(name="VANGUARD 1", line_one=VANGUARD_LINE1, line_two=VANGUARD_LINE2),
        TLEEntry(name="JUNK", line_one="garbage", line_two="garbage"),
    ]

    with pytest.raises(MalformedTLE) as excinfo:
        run(service.bulk_create_satellites(entries))

    assert "JUNK" in str(excinfo.value)
    assert run(service.list_satellites()) == []
    assert repository.writes == []


def test_bulk_create_rejects_blank_name(service, repository):
    entries = [
        TLEEntry(name="ISS (ZARYA)", line_one=ISS_2019_LINE1, line_two=ISS_2019_LINE2),
        TLEEntry(name=" ", line_one=VANGUARD_LINE1, line_two=VANGUARD_LINE2),
    ]

    with pytest.raises(InvalidSatelliteData):
        run(service.bulk_create_satellites(entries))

    assert repository.writes == []


def test_bulk_create_empty(service, repository):
    summary = run(service.bulk_create_satellites([]))

    assert summary.created == 0
    assert summary.ids == []
    assert repository.writes == []


class FailingRepository(InMemorySatelliteRepository):
    async def create_satellite(self, record):
        raise StoreUnavailable("database offline")


def test_store_errors_propagate():
    service = SatelliteService(satellite_repository=FailingRepository())

    with pytest.raises(StoreUnavailable):
        run(service.create_satellite("ISS (ZARYA)", ISS_2019_LINE1, ISS_2019_LINE2))


class VanishingRepository(InMemorySatelliteRepository):
    """在讀取與寫入之間記錄被刪除"""

    async def save_satellite(self, record):
        self.records.pop(record.id, None)
        return None


def test_update_of_record_deleted_mid_operation():
    repository = VanishingRepository()
    service = SatelliteService(satellite_repository=repository)
    created = run(service.create_satellite("ISS (ZARYA)", ISS_2019_LINE1, ISS_2019_LINE2))

    with pytest.raises(SatelliteNotFound) as excinfo:
        run(service.update_satellite_by_id(created.id, SatellitePatch(line_one=ISS_2020_LINE1)))

    assert excinfo.value.satellite_id == created.id
    assert "save" not in repository.writes


@pytest.mark.parametrize("name", ["", "   "])
def test_update_rejects_blank_name(service, repository, name):
    created = run(service.create_satellite("ISS (ZARYA)", ISS_2019_LINE1, ISS_2019_LINE2))

    with pytest.raises(InvalidSatelliteData):
        run(service.update_satellite_by_id(created.id, SatellitePatch(name=name)))

    assert "save" not in repository.writes
    assert run(service.get_satellite_by_id(created.id)) == created


def test_bulk_create_rejects_nan_mean_motion(service, repository):
    entries = [
        TLEEntry(name="ISS (ZARYA)", line_one=ISS_2019_LINE1, line_two=ISS_2019_LINE2),
        TLEEntry(
            name="BROKEN",
            line_one=ISS_2019_LINE1,
            line_two=with_mean_motion(ISS_2019_LINE2, " nan       "),
        ),
    ]

    with pytest.raises(MalformedTLE) as excinfo:
        run(service.bulk_create_satellites(entries))

    assert "第 1 筆條目 (BROKEN)" in str(excinfo.value)
    assert repository.writes == []
