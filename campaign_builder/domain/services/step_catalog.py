"""Step type catalog for the campaign editor (SoT).

Single source of truth for:
- Step palette metadata (`GET /api/step-definitions`)
- Default config seeded into freshly added nodes (`WorkflowGraph.add_node`)
- Title fallback used by the compiler

Declaration order is the curated palette order; never sort it.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from campaign_builder.domain.exceptions import NotFoundError
from campaign_builder.domain.value_objects.step_type import StepCategory, StepType

LINKEDIN_CONNECT_ADVISORY = (
    "LinkedIn limits connection-request messages to 4-5 per month for normal accounts; "
    "the message is optional."
)

# Category order the palette renders (lead generation first, sentinels never shown).
PALETTE_CATEGORIES: tuple[StepCategory, ...] = (
    StepCategory.LEADS,
    StepCategory.LINKEDIN,
    StepCategory.EMAIL,
    StepCategory.WHATSAPP,
    StepCategory.VOICE,
    StepCategory.INSTAGRAM,
    StepCategory.UTILITY,
)


@dataclass(frozen=True, slots=True)
class StepDefinition:
    type: StepType
    label: str
    icon: str
    description: str
    category: StepCategory
    default_data: Mapping[str, Any] = field(default_factory=dict)
    # Free-text config keys that accept `{{variable}}` placeholders.
    text_fields: tuple[str, ...] = ()
    advisory: str | None = None

    def new_config(self) -> dict[str, Any]:
        """Return a private deep copy of the default config."""
        return copy.deepcopy(dict(self.default_data))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": self.type.value,
            "label": self.label,
            "icon": self.icon,
            "description": self.description,
            "category": self.category.value,
            "defaultData": self.new_config(),
            "textFields": list(self.text_fields),
        }
        if self.advisory:
            payload["advisory"] = self.advisory
        return payload


def _definition(
    step_type: StepType,
    *,
    label: str,
    icon: str,
    description: str,
    category: StepCategory,
    default_data: dict[str, Any],
    text_fields: tuple[str, ...] = (),
    advisory: str | None = None,
) -> StepDefinition:
    return StepDefinition(
        type=step_type,
        label=label,
        icon=icon,
        description=description,
        category=category,
        default_data=MappingProxyType(default_data),
        text_fields=text_fields,
        advisory=advisory,
    )


def _step_definitions() -> tuple[StepDefinition, ...]:
    """Return the canonical catalog (palette order)."""

    return (
        _definition(
            StepType.LINKEDIN_VISIT,
            label="Profile Visit",
            icon="linkedin",
            description="Visit the lead's LinkedIn profile",
            category=StepCategory.LINKEDIN,
            default_data={"title": "LinkedIn Profile Visit"},
        ),
        _definition(
            StepType.LINKEDIN_FOLLOW,
            label="Follow",
            icon="linkedin",
            description="Follow the lead on LinkedIn",
            category=StepCategory.LINKEDIN,
            default_data={"title": "LinkedIn Follow"},
        ),
        _definition(
            StepType.LINKEDIN_CONNECT,
            label="Connection Request",
            icon="linkedin",
            description="Send a connection request with message",
            category=StepCategory.LINKEDIN,
            default_data={
                "title": "LinkedIn Connection Request",
                "message": "Hi {{first_name}}, I'd like to connect.",
            },
            text_fields=("message",),
            advisory=LINKEDIN_CONNECT_ADVISORY,
        ),
        _definition(
            StepType.LINKEDIN_MESSAGE,
            label="LinkedIn Message",
            icon="linkedin",
            description="Send a message (only if connected)",
            category=StepCategory.LINKEDIN,
            default_data={"title": "LinkedIn Message", "message": "Hi {{first_name}},..."},
            text_fields=("message",),
        ),
        _definition(
            StepType.LINKEDIN_SCRAPE_PROFILE,
            label="Scrape Profile",
            icon="linkedin",
            description="Scrape LinkedIn profile data",
            category=StepCategory.LINKEDIN,
            default_data={
                "title": "Scrape LinkedIn Profile",
                "linkedinScrapeFields": ["name", "title", "company", "location"],
            },
        ),
        _definition(
            StepType.LINKEDIN_COMPANY_SEARCH,
            label="Company Search",
            icon="linkedin",
            description="Search for company on LinkedIn",
            category=StepCategory.LINKEDIN,
            default_data={
                "title": "LinkedIn Company Search",
                "linkedinCompanyName": "{{company_name}}",
            },
            text_fields=("linkedinCompanyName",),
        ),
        _definition(
            StepType.LINKEDIN_EMPLOYEE_LIST,
            label="Get Employee List",
            icon="linkedin",
            description="Get list of employees from company",
            category=StepCategory.LINKEDIN,
            default_data={"title": "Get Employee List", "linkedinCompanyUrl": ""},
        ),
        _definition(
            StepType.LINKEDIN_AUTOPOST,
            label="Auto Post",
            icon="linkedin",
            description="Automatically post content to LinkedIn",
            category=StepCategory.LINKEDIN,
            default_data={
                "title": "LinkedIn Auto Post",
                "linkedinPostContent": "",
                "linkedinPostImageUrl": "",
            },
            text_fields=("linkedinPostContent",),
        ),
        _definition(
            StepType.LINKEDIN_COMMENT_REPLY,
            label="Reply to Comment",
            icon="linkedin",
            description="Automatically reply to comments on posts",
            category=StepCategory.LINKEDIN,
            default_data={
                "title": "Reply to LinkedIn Comment",
                "linkedinCommentText": "Thanks for your comment!",
            },
            text_fields=("linkedinCommentText",),
        ),
        _definition(
            StepType.EMAIL_SEND,
            label="Send Email",
            icon="email",
            description="Send an email to the lead",
            category=StepCategory.EMAIL,
            default_data={
                "title": "Send Email",
                "subject": "Re: {{company_name}}",
                "body": "Hi {{first_name}},...",
            },
            text_fields=("subject", "body"),
        ),
        _definition(
            StepType.EMAIL_FOLLOWUP,
            label="Email Follow-up",
            icon="email",
            description="Send a follow-up email",
            category=StepCategory.EMAIL,
            default_data={
                "title": "Email Follow-up",
                "subject": "Re: {{company_name}}",
                "body": "Hi {{first_name}},...",
            },
            text_fields=("subject", "body"),
        ),
        _definition(
            StepType.WHATSAPP_SEND,
            label="Send WhatsApp",
            icon="whatsapp",
            description="Send a WhatsApp message",
            category=StepCategory.WHATSAPP,
            default_data={
                "title": "Send WhatsApp",
                "whatsappMessage": "Hi {{first_name}},...",
                "whatsappTemplate": "",
            },
            text_fields=("whatsappMessage",),
        ),
        _definition(
            StepType.VOICE_AGENT_CALL,
            label="Voice Agent Call",
            icon="voice",
            description="Make a call using voice agent",
            category=StepCategory.VOICE,
            default_data={
                "title": "Voice Agent Call",
                "voiceAgentId": "",
                "voiceTemplate": "",
                "voiceContext": "",
            },
            text_fields=("voiceContext",),
        ),
        _definition(
            StepType.INSTAGRAM_FOLLOW,
            label="Follow",
            icon="instagram",
            description="Follow the lead on Instagram",
            category=StepCategory.INSTAGRAM,
            default_data={
                "title": "Instagram Follow",
                "instagramUsername": "{{instagram_username}}",
            },
            text_fields=("instagramUsername",),
        ),
        _definition(
            StepType.INSTAGRAM_LIKE,
            label="Like Post",
            icon="instagram",
            description="Like a specific Instagram post",
            category=StepCategory.INSTAGRAM,
            default_data={"title": "Instagram Like", "instagramPostUrl": ""},
        ),
        _definition(
            StepType.INSTAGRAM_DM,
            label="Send DM",
            icon="instagram",
            description="Send a direct message on Instagram",
            category=StepCategory.INSTAGRAM,
            default_data={
                "title": "Instagram DM",
                "instagramUsername": "{{instagram_username}}",
                "instagramDmMessage": "Hi {{first_name}},...",
            },
            text_fields=("instagramUsername", "instagramDmMessage"),
        ),
        _definition(
            StepType.INSTAGRAM_AUTOPOST,
            label="Auto Post",
            icon="instagram",
            description="Automatically post content to Instagram",
            category=StepCategory.INSTAGRAM,
            default_data={
                "title": "Instagram Auto Post",
                "instagramPostCaption": "",
                "instagramPostImageUrl": "",
                "instagramAutopostSchedule": "daily",
            },
            text_fields=("instagramPostCaption",),
        ),
        _definition(
            StepType.INSTAGRAM_COMMENT_REPLY,
            label="Reply to Comment",
            icon="instagram",
            description="Automatically reply to comments on posts",
            category=StepCategory.INSTAGRAM,
            default_data={
                "title": "Reply to Instagram Comment",
                "instagramCommentText": "Thanks for your comment!",
            },
            text_fields=("instagramCommentText",),
        ),
        _definition(
            StepType.INSTAGRAM_STORY_VIEW,
            label="View Story",
            icon="instagram",
            description="View Instagram story",
            category=StepCategory.INSTAGRAM,
            default_data={
                "title": "View Instagram Story",
                "instagramUsername": "{{instagram_username}}",
            },
            text_fields=("instagramUsername",),
        ),
        _definition(
            StepType.DELAY,
            label="Delay",
            icon="delay",
            description="Wait for specified time",
            category=StepCategory.UTILITY,
            # All-zero on purpose: the operator must pick a duration before saving.
            default_data={"title": "Delay", "delayDays": 0, "delayHours": 0, "delayMinutes": 0},
        ),
        _definition(
            StepType.LEAD_GENERATION,
            label="Lead Generation",
            icon="leads",
            description="Generate leads from data source",
            category=StepCategory.LEADS,
            default_data={
                "title": "Lead Generation",
                "leadGenerationQuery": "",
                "leadGenerationLimit": 50,
            },
            text_fields=("leadGenerationQuery",),
        ),
        _definition(
            StepType.CONDITION,
            label="Condition",
            icon="condition",
            description="Check condition (if connected/replied)",
            category=StepCategory.UTILITY,
            default_data={"title": "Condition", "conditionType": "connected"},
        ),
        _definition(
            StepType.START,
            label="Start",
            icon="start",
            description="Campaign entry point",
            category=StepCategory.START,
            default_data={"title": "Start"},
        ),
        _definition(
            StepType.END,
            label="End",
            icon="end",
            description="Campaign exit point",
            category=StepCategory.END,
            default_data={"title": "End"},
        ),
    )


_STEP_DEFINITIONS: tuple[StepDefinition, ...] = _step_definitions()
_STEP_DEFINITIONS_BY_TYPE: Mapping[StepType, StepDefinition] = MappingProxyType(
    {definition.type: definition for definition in _STEP_DEFINITIONS}
)


def get_step_definition(step_type: StepType | str) -> StepDefinition:
    """Look up a step definition.

    Raises:
        NotFoundError: the type is not registered (programming error, never swallow).
    """

    try:
        resolved = StepType(step_type)
    except ValueError as exc:
        raise NotFoundError("StepType", str(step_type)) from exc

    definition = _STEP_DEFINITIONS_BY_TYPE.get(resolved)
    if definition is None:
        raise NotFoundError("StepType", resolved.value)
    return definition


def list_step_definitions() -> tuple[StepDefinition, ...]:
    return _STEP_DEFINITIONS


def list_by_category(category: StepCategory | str) -> tuple[StepDefinition, ...]:
    resolved = StepCategory(category)
    return tuple(d for d in _STEP_DEFINITIONS if d.category == resolved)


def palette_categories() -> tuple[StepCategory, ...]:
    return PALETTE_CATEGORIES
