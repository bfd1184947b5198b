"""
Analysis result models - Pydantic models for the analysis service response.

Field aliases match the service's camelCase JSON. Every top-level field is
required: a response missing one fails validation as a whole.
"""

from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field


class KeyValueItem(BaseModel):
    """A labelled value, e.g. a key metric or an overview line."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str


class PartnerRelationship(BaseModel):
    """A party named in the contract and how it relates to the business."""

    model_config = ConfigDict(frozen=True)

    partner: str
    details: str


class Opportunity(BaseModel):
    """A business opportunity the contract opens up."""

    model_config = ConfigDict(frozen=True)

    opportunity: str
    details: str


class AnalysisResult(BaseModel):
    """
    Structured analysis of one contract.

    Immutable once constructed. Sequence order is the service's response
    order and is preserved for display.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key_metrics: Tuple[KeyValueItem, ...] = Field(..., alias="keyMetrics")
    business_overview: Tuple[KeyValueItem, ...] = Field(..., alias="businessOverview")
    must_do_tasks: Dict[str, Tuple[str, ...]] = Field(..., alias="mustDoTasks")
    partner_relationships: Tuple[PartnerRelationship, ...] = Field(..., alias="partnerRelationships")
    opportunities: Tuple[Opportunity, ...] = Field(..., alias="opportunities")
    suggestions: Tuple[str, ...] = Field(..., alias="suggestions")

    @property
    def task_count(self) -> int:
        """Total number of must-do tasks across all categories."""
        return sum(len(tasks) for tasks in self.must_do_tasks.values())

    @property
    def is_empty(self) -> bool:
        """True when the service found nothing in any section."""
        return not (
            self.key_metrics
            or self.business_overview
            or self.task_count
            or self.partner_relationships
            or self.opportunities
            or self.suggestions
        )

    def to_json_dict(self) -> Dict[str, Any]:
        """Serialize back to the service's wire shape."""
        return self.model_dump(mode="json", by_alias=True)
