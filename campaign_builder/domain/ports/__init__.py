from campaign_builder.domain.ports.campaign_service import CampaignServicePort

__all__ = ["CampaignServicePort"]
