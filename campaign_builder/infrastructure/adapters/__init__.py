from campaign_builder.infrastructure.adapters.http_campaign_service import (
    HttpCampaignServiceAdapter,
)
from campaign_builder.infrastructure.adapters.in_memory_campaign_service import (
    InMemoryCampaignService,
)

__all__ = ["HttpCampaignServiceAdapter", "InMemoryCampaignService"]
