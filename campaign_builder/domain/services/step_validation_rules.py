"""Step validation contracts for the campaign editor (SoT).

Single source of truth for:
- Live per-node validity feedback (`compute_validity`)
- Save-time fail-closed checks (`compile_workflow`)
- Machine-consumable rule output (`GET /api/step-definitions/{type}`)

Every step type maps to an ordered list of required config fields. Two step types
cannot be expressed that way and carry a dedicated rule instead:
- delay: at least one of days / hours / minutes must be > 0, each within its bound
- linkedin_connect: message is optional (LinkedIn connection-message quota), unlike
  linkedin_message which requires the same field
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Mapping

from campaign_builder.domain.exceptions import NotFoundError
from campaign_builder.domain.value_objects.step_type import StepType

SpecialRule = Literal["delay_window"]


@dataclass(frozen=True, slots=True)
class DelayFieldBound:
    key: str
    minimum: int
    maximum: int


DELAY_FIELD_BOUNDS: tuple[DelayFieldBound, ...] = (
    DelayFieldBound(key="delayDays", minimum=0, maximum=365),
    DelayFieldBound(key="delayHours", minimum=0, maximum=23),
    DelayFieldBound(key="delayMinutes", minimum=0, maximum=59),
)


@dataclass(frozen=True, slots=True)
class StepContract:
    type: StepType
    required_fields: tuple[str, ...] = ()
    special_rule: SpecialRule | None = None
    # Fields the form shows but never requires (surfaced for documentation only).
    optional_fields: tuple[str, ...] = ()
    notes: tuple[str, ...] = ()

    @property
    def always_valid(self) -> bool:
        return not self.required_fields and self.special_rule is None


def _step_contracts() -> dict[StepType, StepContract]:
    """Return canonical step contracts keyed by step type."""

    return {
        StepType.LINKEDIN_VISIT: StepContract(type=StepType.LINKEDIN_VISIT),
        StepType.LINKEDIN_FOLLOW: StepContract(type=StepType.LINKEDIN_FOLLOW),
        StepType.LINKEDIN_CONNECT: StepContract(
            type=StepType.LINKEDIN_CONNECT,
            optional_fields=("message",),
            notes=("connection-request messages are quota limited upstream; message is optional",),
        ),
        StepType.LINKEDIN_MESSAGE: StepContract(
            type=StepType.LINKEDIN_MESSAGE,
            required_fields=("message",),
        ),
        StepType.LINKEDIN_SCRAPE_PROFILE: StepContract(
            type=StepType.LINKEDIN_SCRAPE_PROFILE,
            required_fields=("linkedinScrapeFields",),
        ),
        StepType.LINKEDIN_COMPANY_SEARCH: StepContract(
            type=StepType.LINKEDIN_COMPANY_SEARCH,
            required_fields=("linkedinCompanyName",),
        ),
        StepType.LINKEDIN_EMPLOYEE_LIST: StepContract(
            type=StepType.LINKEDIN_EMPLOYEE_LIST,
            required_fields=("linkedinCompanyUrl",),
        ),
        StepType.LINKEDIN_AUTOPOST: StepContract(
            type=StepType.LINKEDIN_AUTOPOST,
            required_fields=("linkedinPostContent",),
            optional_fields=("linkedinPostImageUrl",),
        ),
        StepType.LINKEDIN_COMMENT_REPLY: StepContract(
            type=StepType.LINKEDIN_COMMENT_REPLY,
            required_fields=("linkedinCommentText",),
        ),
        StepType.EMAIL_SEND: StepContract(
            type=StepType.EMAIL_SEND,
            required_fields=("subject", "body"),
        ),
        StepType.EMAIL_FOLLOWUP: StepContract(
            type=StepType.EMAIL_FOLLOWUP,
            required_fields=("subject", "body"),
        ),
        StepType.WHATSAPP_SEND: StepContract(
            type=StepType.WHATSAPP_SEND,
            required_fields=("whatsappMessage",),
            optional_fields=("whatsappTemplate",),
        ),
        StepType.VOICE_AGENT_CALL: StepContract(
            type=StepType.VOICE_AGENT_CALL,
            required_fields=("voiceAgentId",),
            optional_fields=("voiceTemplate", "voiceContext"),
        ),
        StepType.INSTAGRAM_FOLLOW: StepContract(
            type=StepType.INSTAGRAM_FOLLOW,
            required_fields=("instagramUsername",),
        ),
        StepType.INSTAGRAM_LIKE: StepContract(
            type=StepType.INSTAGRAM_LIKE,
            required_fields=("instagramPostUrl",),
        ),
        StepType.INSTAGRAM_DM: StepContract(
            type=StepType.INSTAGRAM_DM,
            required_fields=("instagramUsername", "instagramDmMessage"),
        ),
        StepType.INSTAGRAM_AUTOPOST: StepContract(
            type=StepType.INSTAGRAM_AUTOPOST,
            required_fields=("instagramPostCaption", "instagramPostImageUrl"),
            optional_fields=("instagramAutopostSchedule",),
        ),
        StepType.INSTAGRAM_COMMENT_REPLY: StepContract(
            type=StepType.INSTAGRAM_COMMENT_REPLY,
            required_fields=("instagramCommentText",),
        ),
        StepType.INSTAGRAM_STORY_VIEW: StepContract(
            type=StepType.INSTAGRAM_STORY_VIEW,
            required_fields=("instagramUsername",),
        ),
        StepType.LEAD_GENERATION: StepContract(
            type=StepType.LEAD_GENERATION,
            required_fields=("leadGenerationQuery", "leadGenerationLimit"),
        ),
        StepType.DELAY: StepContract(
            type=StepType.DELAY,
            special_rule="delay_window",
            notes=("at least one of delayDays / delayHours / delayMinutes must be > 0",),
        ),
        StepType.CONDITION: StepContract(
            type=StepType.CONDITION,
            required_fields=("conditionType",),
            notes=("branch evaluation happens in the execution runtime",),
        ),
        StepType.START: StepContract(type=StepType.START),
        StepType.END: StepContract(type=StepType.END),
    }


_STEP_CONTRACTS: Mapping[StepType, StepContract] = MappingProxyType(_step_contracts())


def get_step_contracts() -> Mapping[StepType, StepContract]:
    return _STEP_CONTRACTS


def get_step_contract(step_type: StepType | str) -> StepContract:
    try:
        resolved = StepType(step_type)
    except ValueError as exc:
        raise NotFoundError("StepType", str(step_type)) from exc

    contract = _STEP_CONTRACTS.get(resolved)
    if contract is None:
        raise NotFoundError("StepType", resolved.value)
    return contract


def get_required_fields(step_type: StepType | str) -> tuple[str, ...]:
    return get_step_contract(step_type).required_fields
