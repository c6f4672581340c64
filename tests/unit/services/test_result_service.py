"""Tests for the result import service."""

import pytest

from mtb_fantasy.errors import RaceNotFoundError, RaceNotLockedError, ResultValidationError
from mtb_fantasy.repositories import ResultRepository
from mtb_fantasy.services import LockService, ResultImportService, SettlementService
from tests.fixtures.factories import (
    FEMALE_RESULTS,
    MALE_RESULTS,
    create_import_request,
    create_race,
    utc,
)


class TestResultImportService:
    """Tests for ResultImportService.upsert_race_results."""

    @pytest.mark.asyncio
    async def test_import_requires_lock(self, db_session, settings, test_race):
        """Results cannot arrive before the rosters are frozen."""
        service = ResultImportService(db_session, settings)

        with pytest.raises(RaceNotLockedError, match="locked"):
            await service.upsert_race_results(
                test_race.id, create_import_request("male", MALE_RESULTS)
            )

        assert await ResultRepository(db_session).get_by_race(test_race.id) == []

    @pytest.mark.asyncio
    async def test_import_unknown_race(self, db_session, settings):
        with pytest.raises(RaceNotFoundError):
            await ResultImportService(db_session, settings).upsert_race_results(
                99999, create_import_request("male", MALE_RESULTS)
            )

    @pytest.mark.asyncio
    async def test_race_final_once_required_sets_are_final(self, db_session, settings, locked_race):
        service = ResultImportService(db_session, settings)

        response = await service.upsert_race_results(
            locked_race.id, create_import_request("male", MALE_RESULTS)
        )
        assert response.updated == 4
        assert response.status == "locked"

        response = await service.upsert_race_results(
            locked_race.id, create_import_request("female", FEMALE_RESULTS)
        )
        assert response.status == "final"
        assert response.needs_resettle is False

    @pytest.mark.asyncio
    async def test_provisional_import_does_not_finalise(self, db_session, settings, locked_race):
        service = ResultImportService(db_session, settings)
        await service.upsert_race_results(
            locked_race.id, create_import_request("male", MALE_RESULTS)
        )

        response = await service.upsert_race_results(
            locked_race.id, create_import_request("female", FEMALE_RESULTS, is_final=False)
        )

        assert response.status == "locked"

    @pytest.mark.asyncio
    async def test_junior_results_do_not_gate(self, db_session, settings, locked_race):
        service = ResultImportService(db_session, settings)
        await service.upsert_race_results(
            locked_race.id, create_import_request("male", [("j1", "FIN", 1)], category="junior", is_final=False)
        )
        await service.upsert_race_results(
            locked_race.id, create_import_request("male", MALE_RESULTS)
        )

        response = await service.upsert_race_results(
            locked_race.id, create_import_request("female", FEMALE_RESULTS)
        )

        assert response.status == "final"

    @pytest.mark.asyncio
    async def test_reimport_replaces_named_rows_only(self, db_session, settings, final_race):
        service = ResultImportService(db_session, settings)

        await service.upsert_race_results(
            final_race.id, create_import_request("male", [("m2", "FIN", 2)])
        )

        results = {r.uci_id: r for r in await ResultRepository(db_session).get_by_race(final_race.id)}
        assert len(results) == 7
        assert results["m2"].position == 2
        assert results["m1"].position == 1

    @pytest.mark.asyncio
    async def test_duplicate_rider_in_batch(self, db_session, settings, locked_race):
        service = ResultImportService(db_session, settings)

        with pytest.raises(ResultValidationError):
            await service.upsert_race_results(
                locked_race.id,
                create_import_request("male", [("m1", "FIN", 1), ("m1", "FIN", 2)]),
            )

    @pytest.mark.asyncio
    async def test_content_hash_is_stable(self, db_session, settings, locked_race):
        service = ResultImportService(db_session, settings)

        first = await service.upsert_race_results(
            locked_race.id, create_import_request("male", MALE_RESULTS)
        )
        second = await service.upsert_race_results(
            locked_race.id, create_import_request("male", list(reversed(MALE_RESULTS)))
        )

        assert first.content_hash == second.content_hash

    @pytest.mark.asyncio
    async def test_changed_results_flag_resettle(self, db_session, settings, final_race):
        """A correction after settlement marks the race for resettlement."""
        await SettlementService(db_session, settings).settle_race(final_race.id)
        service = ResultImportService(db_session, settings)

        unchanged = await service.upsert_race_results(
            final_race.id, create_import_request("male", MALE_RESULTS)
        )
        assert unchanged.needs_resettle is False

        changed = await service.upsert_race_results(
            final_race.id, create_import_request("male", [("m2", "FIN", 2)])
        )
        assert changed.needs_resettle is True
        assert changed.status == "settled"

    @pytest.mark.asyncio
    async def test_batch_takes_race_discipline(self, db_session, settings, test_season, test_team):
        """A batch without a discipline counts toward the race's own result sets."""
        race = create_race(test_season.id, name="Val di Sole XCO", discipline="XCO", lock_at=utc(2024, 5, 2))
        db_session.add(race)
        await db_session.flush()
        await LockService(db_session, settings).lock_race(race.id)
        service = ResultImportService(db_session, settings)

        await service.upsert_race_results(race.id, create_import_request("male", MALE_RESULTS))
        response = await service.upsert_race_results(
            race.id, create_import_request("female", FEMALE_RESULTS)
        )

        assert response.status == "final"
        imports = await ResultRepository(db_session).get_imports(race.id)
        assert {row.discipline for row in imports} == {"XCO"}
        settled = await SettlementService(db_session, settings).settle_race(race.id)
        assert settled.updated_scores == 1

    @pytest.mark.asyncio
    async def test_batch_for_other_discipline_rejected(self, db_session, settings, locked_race):
        service = ResultImportService(db_session, settings)

        with pytest.raises(ResultValidationError, match="XCO"):
            await service.upsert_race_results(
                locked_race.id, create_import_request("male", MALE_RESULTS, discipline="cross-country")
            )

        assert await ResultRepository(db_session).get_by_race(locked_race.id) == []

    @pytest.mark.asyncio
    async def test_final_results_after_forced_settle_flag_resettle(
        self, db_session, settings, locked_race, test_riders
    ):
        """Prices move once the provisional rows behind a forced settle become final."""
        service = ResultImportService(db_session, settings)
        for gender, rows in (("male", MALE_RESULTS), ("female", FEMALE_RESULTS)):
            await service.upsert_race_results(
                locked_race.id, create_import_request(gender, rows, is_final=False)
            )
        settlement = SettlementService(db_session, settings)
        await settlement.settle_race(locked_race.id, force=True)
        assert test_riders["m1"].cost == 100_000

        await service.upsert_race_results(locked_race.id, create_import_request("male", MALE_RESULTS))
        response = await service.upsert_race_results(
            locked_race.id, create_import_request("female", FEMALE_RESULTS)
        )

        assert response.status == "settled"
        assert response.needs_resettle is True

        settled = await settlement.settle_race(locked_race.id)
        assert settled.updated_scores == 0
        assert settled.cost_updates == 7
        assert test_riders["m1"].cost == 110_000
        assert locked_race.needs_resettle is False
