"""Tests for application wiring."""

from __future__ import annotations

import json

import pytest

from roadmap_planning.application.bootstrap import create_application
from roadmap_planning.core.config import RuleConfig, Settings
from roadmap_planning.core.errors import RoadmapValidationError
from roadmap_planning.infrastructure.repositories import (
    InMemoryRoadmapRepository,
    JsonFileRoadmapRepository,
)


class TestCreateApplication:
    def test_in_memory(self):
        app = create_application(Settings(), in_memory=True)
        assert isinstance(app.roadmap_repository, InMemoryRoadmapRepository)
        assert app.dispatcher.handler_count() == 4

    @pytest.mark.asyncio
    async def test_json_document_under_data_dir(self, tmp_path):
        settings = Settings(data_dir=str(tmp_path / "docs"))
        app = create_application(settings)
        assert isinstance(app.roadmap_repository, JsonFileRoadmapRepository)

        roadmap = await app.commands.create_roadmap("Q3 Plan", version="1.0", owner="alice")
        await app.commands.create_note(roadmap.id, "Remember", category="feature")

        document = json.loads((tmp_path / "docs" / "roadmap.json").read_text())
        assert [r["id"] for r in document["roadmaps"]] == [roadmap.id]
        assert len(document["roadmapNotes"]) == 1
        assert (await app.queries.get_roadmap(roadmap.id)).owner == "alice"

    @pytest.mark.asyncio
    async def test_rules_from_settings(self):
        app = create_application(
            Settings(rules=RuleConfig(max_timeframes=1)), in_memory=True
        )
        roadmap = await app.commands.create_roadmap("Q3 Plan", version="1.0", owner="alice")
        await app.commands.add_timeframe(roadmap.id, "Q3", 1)
        with pytest.raises(RoadmapValidationError):
            await app.commands.add_timeframe(roadmap.id, "Q4", 2)
