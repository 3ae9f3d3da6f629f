"""Tests for production workflows."""

import pytest

from scriptboard.analysis.base import BaseSceneAnalysisAdapter
from scriptboard.analysis.models import SceneWithAnalysis
from scriptboard.api import ProductionService
from scriptboard.board.models import SCHEDULED, SHOT, UNSCHEDULED, Complexity, SceneAnalysis
from scriptboard.exceptions import ConfigurationError, ScriptParseError, StoreError
from scriptboard.store import MemorySceneStore

PROJECT = "pilot"


class StubAnalyzer(BaseSceneAnalysisAdapter):
    """Analyzer returning canned results."""

    def __init__(self, analysis=None, scenes=None, parse_error=None):
        self.analysis = analysis
        self.scenes = scenes or []
        self.parse_error = parse_error
        self.bodies: list[str] = []
        self.max_chars: list[int] = []

    async def analyze(self, body):
        self.bodies.append(body)
        return self.analysis.model_copy() if self.analysis else None

    async def parse_with_analysis(self, script_text, max_chars):
        self.max_chars.append(max_chars)
        if self.parse_error:
            raise self.parse_error
        return self.scenes


class BatchFailingStore(MemorySceneStore):
    """Store rejecting every write."""

    async def create_many(self, project_id, drafts):
        raise StoreError(message="quota exceeded")

    async def update(self, project_id, scene_id, fields):
        raise StoreError(message="quota exceeded")


def night_analysis(**overrides) -> SceneAnalysis:
    """Analysis of a night scene."""
    data = {
        "title": "Chase",
        "summary": "John runs.",
        "cast": ["JOHN"],
        "complexity": "High",
        "time_of_day": "🌙",
    }
    data.update(overrides)
    return SceneAnalysis.model_validate(data)


@pytest.fixture
def store():
    """In-memory store."""
    return MemorySceneStore()


@pytest.fixture
def alerts():
    """Collected alert messages."""
    return []


class TestImportScript:
    """Test deterministic intake."""

    @pytest.mark.asyncio
    async def test_scenes_stored_unscheduled(self, store, settings, coffee_shop_script):
        """Test every segmented scene is stored unscheduled in order."""
        service = ProductionService(store, settings=settings)

        result = await service.import_script(PROJECT, coffee_shop_script)

        assert result.success
        assert result.scene_count == 2
        scenes = await store.list_scenes(PROJECT)
        assert [s.id for s in scenes] == result.scene_ids
        assert [s.slugline for s in scenes] == ["INT. COFFEE SHOP - DAY", "EXT. STREET - NIGHT"]
        assert {s.status for s in scenes} == {UNSCHEDULED}

    @pytest.mark.asyncio
    async def test_no_scenes_found(self, store, settings):
        """Test prose without headings is a successful empty import."""
        service = ProductionService(store, settings=settings)

        result = await service.import_script(PROJECT, "Just some prose.")

        assert result.success
        assert result.scene_ids == []
        assert await store.list_scenes(PROJECT) == []

    @pytest.mark.asyncio
    async def test_store_failure_alerts(self, settings, alerts, coffee_shop_script):
        """Test a failed batch write is reported."""
        service = ProductionService(BatchFailingStore(), settings=settings, on_alert=alerts.append)

        result = await service.import_script(PROJECT, coffee_shop_script)

        assert not result.success
        assert result.error == "Script import failed: quota exceeded"
        assert alerts == [result.error]


class TestParseWithAI:
    """Test AI intake."""

    @pytest.mark.asyncio
    async def test_batch_written_unscheduled(self, store, settings):
        """Test parsed scenes are stored with their analysis."""
        analyzer = StubAnalyzer(
            scenes=[
                SceneWithAnalysis(
                    scene_number="1", slugline="EXT. ROAD - NIGHT", analysis=night_analysis()
                ),
                SceneWithAnalysis(scene_number="2", slugline="INT. CAR - NIGHT"),
            ]
        )
        service = ProductionService(store, analyzer=analyzer, settings=settings)

        result = await service.parse_with_ai(PROJECT, "script")

        assert result.scene_count == 2
        first, second = await store.list_scenes(PROJECT)
        assert first.status == second.status == UNSCHEDULED
        assert first.analysis.complexity is Complexity.HIGH
        assert first.characters == ["JOHN"]
        assert first.time_of_day.value == "🌙"
        assert second.analysis is None
        assert analyzer.max_chars == [settings.analysis_max_chars]

    @pytest.mark.asyncio
    async def test_parse_error_propagates(self, store, settings):
        """Test nothing is stored when the parse fails."""
        analyzer = StubAnalyzer(parse_error=ScriptParseError(message="AI script parsing failed: x"))
        service = ProductionService(store, analyzer=analyzer, settings=settings)

        with pytest.raises(ScriptParseError):
            await service.parse_with_ai(PROJECT, "script")

        assert await store.list_scenes(PROJECT) == []

    @pytest.mark.asyncio
    async def test_requires_analyzer(self, store, settings):
        """Test AI intake without an analyzer is a configuration error."""
        service = ProductionService(store, settings=settings)

        with pytest.raises(ConfigurationError):
            await service.parse_with_ai(PROJECT, "script")

    @pytest.mark.asyncio
    async def test_empty_parse(self, store, settings):
        """Test a parse with no scenes stores nothing."""
        service = ProductionService(store, analyzer=StubAnalyzer(), settings=settings)

        result = await service.parse_with_ai(PROJECT, "script")

        assert result.success
        assert result.scene_count == 0


class TestAnalyzeScene:
    """Test per-scene analysis."""

    @pytest.mark.asyncio
    async def test_analysis_stored(self, store, settings):
        """Test the analysis and its time of day are written."""
        scene_id = await store.create(PROJECT, {"body": "John runs."})
        analyzer = StubAnalyzer(analysis=night_analysis())
        service = ProductionService(store, analyzer=analyzer, settings=settings)

        result = await service.analyze_scene(PROJECT, scene_id)

        assert result.success
        scene = await store.get(PROJECT, scene_id)
        assert scene.analysis.title == "Chase"
        assert scene.time_of_day.value == "🌙"
        assert analyzer.bodies == ["John runs."]

    @pytest.mark.asyncio
    async def test_no_analysis_leaves_scene(self, store, settings, alerts):
        """Test a failed analysis changes nothing and raises no alert."""
        scene_id = await store.create(PROJECT, {"body": "John runs."})
        service = ProductionService(
            store, analyzer=StubAnalyzer(), settings=settings, on_alert=alerts.append
        )

        result = await service.analyze_scene(PROJECT, scene_id)

        assert not result.success
        assert result.error == "No analysis produced"
        assert (await store.get(PROJECT, scene_id)).analysis is None
        assert alerts == []

    @pytest.mark.asyncio
    async def test_missing_scene(self, store, settings, alerts):
        """Test analysing an unknown scene is reported."""
        service = ProductionService(
            store, analyzer=StubAnalyzer(), settings=settings, on_alert=alerts.append
        )

        result = await service.analyze_scene(PROJECT, "missing")

        assert not result.success
        assert len(alerts) == 1


class TestSaveScene:
    """Test the scene detail form."""

    @pytest.mark.asyncio
    async def test_create_from_form(self, store, settings):
        """Test saving without an id creates an unscheduled scene."""
        service = ProductionService(store, settings=settings)

        result = await service.save_scene(PROJECT, {"slugline": "INT. A - DAY", "body": "x"})

        assert result.success and result.created
        scene = await store.get(PROJECT, result.scene_id)
        assert scene.status == UNSCHEDULED

    @pytest.mark.asyncio
    async def test_create_with_date_is_scheduled(self, store, settings):
        """Test a new scene with a date starts scheduled."""
        service = ProductionService(store, settings=settings)

        result = await service.save_scene(PROJECT, {"shoot_date": "2025-06-01"})

        assert (await store.get(PROJECT, result.scene_id)).status == SCHEDULED

    @pytest.mark.asyncio
    async def test_edit_applies_transition(self, store, settings):
        """Test dating an unscheduled scene through the form schedules it."""
        scene_id = await store.create(PROJECT, {})
        service = ProductionService(store, settings=settings)

        result = await service.save_scene(PROJECT, {"shoot_date": "2025-06-01"}, scene_id)

        assert result.success and not result.created
        assert (await store.get(PROJECT, scene_id)).status == SCHEDULED

    @pytest.mark.asyncio
    async def test_create_with_echoed_status_is_scheduled(self, store, settings):
        """Test a new form sent as unscheduled with a date starts scheduled."""
        service = ProductionService(store, settings=settings)

        result = await service.save_scene(
            PROJECT,
            {"slugline": "INT. A - DAY", "shoot_date": "2025-06-01", "status": UNSCHEDULED},
        )

        assert result.created
        assert (await store.get(PROJECT, result.scene_id)).status == SCHEDULED

    @pytest.mark.asyncio
    async def test_edit_with_echoed_status_applies_transition(self, store, settings):
        """Test the form repeating the current status still schedules the scene."""
        scene_id = await store.create(PROJECT, {"status": UNSCHEDULED})
        service = ProductionService(store, settings=settings)

        result = await service.save_scene(
            PROJECT, {"shoot_date": "2025-06-01", "status": UNSCHEDULED}, scene_id
        )

        assert result.success
        assert (await store.get(PROJECT, scene_id)).status == SCHEDULED

    @pytest.mark.asyncio
    async def test_malformed_date_rejected(self, store, settings):
        """Test the form refuses dates that are not YYYY-MM-DD."""
        scene_id = await store.create(PROJECT, {})
        service = ProductionService(store, settings=settings)

        result = await service.save_scene(PROJECT, {"shoot_date": "not-a-date"}, scene_id)

        assert not result.success
        assert result.error == "Invalid shoot date: not-a-date"
        assert result.validation_errors == ["Use the YYYY-MM-DD format"]
        scene = await store.get(PROJECT, scene_id)
        assert scene.shoot_date is None
        assert scene.status == UNSCHEDULED

    @pytest.mark.asyncio
    async def test_reanalysis_with_manual_complexity(self, store, settings):
        """Test a fresh analysis takes the manual complexity."""
        scene_id = await store.create(PROJECT, {"body": "Old."})
        analyzer = StubAnalyzer(analysis=night_analysis())
        service = ProductionService(store, analyzer=analyzer, settings=settings)

        result = await service.save_scene(
            PROJECT, {"body": "New."}, scene_id, manual_complexity="low"
        )

        assert result.reanalysed
        assert analyzer.bodies == ["New."]
        scene = await store.get(PROJECT, scene_id)
        assert scene.body == "New."
        assert scene.analysis.complexity is Complexity.LOW

    @pytest.mark.asyncio
    async def test_failed_reanalysis_keeps_previous(self, store, settings):
        """Test the old analysis survives when re-analysis fails."""
        scene_id = await store.create(
            PROJECT, {"body": "Old.", "analysis": night_analysis().model_dump(mode="json")}
        )
        service = ProductionService(store, analyzer=StubAnalyzer(), settings=settings)

        result = await service.save_scene(PROJECT, {"body": "New."}, scene_id)

        assert result.success
        assert not result.reanalysed
        assert (await store.get(PROJECT, scene_id)).analysis.title == "Chase"

    @pytest.mark.asyncio
    async def test_unknown_field(self, store, settings):
        """Test unknown form fields are reported."""
        service = ProductionService(store, settings=settings)

        result = await service.save_scene(PROJECT, {"colour": "red"})

        assert not result.success
        assert "colour" in result.error
        assert result.validation_errors

    @pytest.mark.asyncio
    async def test_invalid_complexity(self, store, settings):
        """Test an unknown manual complexity is reported."""
        service = ProductionService(store, settings=settings)

        result = await service.save_scene(PROJECT, {}, manual_complexity="Extreme")

        assert not result.success
        assert result.error == "Invalid complexity: Extreme"

    @pytest.mark.asyncio
    async def test_custom_values_validated(self, store, settings):
        """Test custom values must fit their field type."""
        field = await store.create_field(
            PROJECT, "Priority", "single_select", [{"label": "High"}]
        )
        service = ProductionService(store, settings=settings)

        bad = await service.save_scene(PROJECT, {"custom_field_values": {field.id: "Low"}})
        good = await service.save_scene(PROJECT, {"custom_field_values": {field.id: "High"}})

        assert not bad.success
        assert bad.validation_errors == ["choose one of: High"]
        assert good.success
        scene = await store.get(PROJECT, good.scene_id)
        assert scene.custom_field_values == {field.id: "High"}

    @pytest.mark.asyncio
    async def test_store_failure(self, settings, alerts):
        """Test a failed write is reported with an alert."""
        store = BatchFailingStore()
        service = ProductionService(store, settings=settings, on_alert=alerts.append)

        result = await service.save_scene(PROJECT, {"body": "x"})

        assert not result.success
        assert alerts == ["Scene save failed: quota exceeded"]


class TestCustomFields:
    """Test custom field management."""

    @pytest.mark.asyncio
    async def test_create_update_list(self, store, settings):
        """Test definitions can be created and replaced."""
        service = ProductionService(store, settings=settings)

        field = await service.create_field(PROJECT, "Notes")
        await service.update_field(
            PROJECT, field.id, "Mood", "multi_select", [{"label": "Dark", "color": "black"}]
        )

        (stored,) = await service.list_fields(PROJECT)
        assert stored.name == "Mood"
        assert stored.option_labels() == ["Dark"]

    @pytest.mark.asyncio
    async def test_delete_keeps_values_unless_purged(self, store, settings):
        """Test deletion leaves values, purge removes them."""
        service = ProductionService(store, settings=settings)
        kept_field = await service.create_field(PROJECT, "Notes")
        purged_field = await service.create_field(PROJECT, "Mood")
        scene_id = await store.create(
            PROJECT, {"custom_field_values": {kept_field.id: "a", purged_field.id: "b"}}
        )

        assert await service.delete_field(PROJECT, kept_field.id) == 0
        assert await service.delete_field(PROJECT, purged_field.id, purge=True) == 1

        assert (await store.get(PROJECT, scene_id)).custom_field_values == {kept_field.id: "a"}

    @pytest.mark.asyncio
    async def test_purge_orphaned_values(self, store, settings):
        """Test values of deleted fields can be cleaned up later."""
        service = ProductionService(store, settings=settings)
        live = await service.create_field(PROJECT, "Notes")
        orphan_scene = await store.create(
            PROJECT, {"custom_field_values": {live.id: "a", "gone": "b"}}
        )
        clean_scene = await store.create(PROJECT, {"custom_field_values": {live.id: "c"}})

        changed = await service.purge_orphaned_values(PROJECT)

        assert changed == 1
        assert (await store.get(PROJECT, orphan_scene)).custom_field_values == {live.id: "a"}
        assert (await store.get(PROJECT, clean_scene)).custom_field_values == {live.id: "c"}

    @pytest.mark.asyncio
    async def test_scenes(self, store, settings):
        """Test scenes are listed in store order."""
        service = ProductionService(store, settings=settings)
        ids = [await store.create(PROJECT, {"status": SHOT}) for _ in range(2)]

        assert [s.id for s in await service.scenes(PROJECT)] == ids
