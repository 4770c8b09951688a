"""In-memory campaign service unit tests."""

from __future__ import annotations

import pytest

from campaign_builder.domain.exceptions import NotFoundError
from campaign_builder.infrastructure.adapters.in_memory_campaign_service import (
    InMemoryCampaignService,
)


@pytest.mark.asyncio
async def test_create_then_get_round_trips_steps() -> None:
    service = InMemoryCampaignService()
    steps = [{"type": "delay", "order": 0, "title": "Wait", "config": {"delayDays": 1}}]

    created = await service.create_campaign({"name": "Q3", "steps": steps})
    fetched = await service.get_campaign(created["id"])

    assert created["id"].startswith("camp_")
    assert fetched["name"] == "Q3"
    assert fetched["status"] == "draft"
    assert fetched["steps"][0]["type"] == "delay"
    assert fetched["steps"][0]["campaign_id"] == created["id"]


@pytest.mark.asyncio
async def test_returned_campaign_is_a_copy() -> None:
    service = InMemoryCampaignService()
    created = await service.create_campaign({"name": "Q3", "steps": []})

    created["name"] = "mutated"

    assert (await service.get_campaign(created["id"]))["name"] == "Q3"


@pytest.mark.asyncio
async def test_update_campaign_and_steps() -> None:
    service = InMemoryCampaignService()
    created = await service.create_campaign({"name": "Q3", "steps": []})

    await service.update_campaign(created["id"], {"name": "Q4"})
    stored = await service.update_campaign_steps(
        created["id"], [{"type": "email_send", "order": 0, "title": "Mail", "config": {}}]
    )

    fetched = await service.get_campaign(created["id"])
    assert fetched["name"] == "Q4"
    assert [step["type"] for step in fetched["steps"]] == ["email_send"]
    assert stored[0]["id"].startswith("step_")


@pytest.mark.asyncio
async def test_unknown_campaign_raises_not_found() -> None:
    service = InMemoryCampaignService()

    with pytest.raises(NotFoundError):
        await service.get_campaign("camp_missing")
    with pytest.raises(NotFoundError):
        await service.update_campaign_steps("camp_missing", [])
