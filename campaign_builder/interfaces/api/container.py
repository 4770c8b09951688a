"""API Container (composition root state holder).

This module only defines types/structure for objects created in the real
composition root (`campaign_builder/interfaces/api/main.py`).
"""

from __future__ import annotations

from dataclasses import dataclass

from campaign_builder.application.services.editor_session import EditorSessionRegistry
from campaign_builder.domain.ports.campaign_service import CampaignServicePort


@dataclass(frozen=True, slots=True)
class ApiContainer:
    """Typed container attached to `app.state.container`."""

    session_registry: EditorSessionRegistry
    campaign_service: CampaignServicePort
