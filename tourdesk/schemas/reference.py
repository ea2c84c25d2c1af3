"""Schemas for market sources and agents."""
from __future__ import annotations

import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from tourdesk.models.reference import CommissionType, SourceCategory


class MarketSourceCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    category: SourceCategory = SourceCategory.DIRECT
    is_active: bool = True


class MarketSourceUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    category: SourceCategory | None = None
    is_active: bool | None = None


class MarketSourceRead(MarketSourceCreate):
    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)


class AgentCreate(BaseModel):
    """Payload to register an agent."""

    name: str = Field(min_length=1, max_length=120)
    has_commission: bool = False
    commission_type: CommissionType = CommissionType.PERCENTAGE
    commission_value: Decimal = Field(default=Decimal("0"), ge=Decimal("0"))
    is_active: bool = True


class AgentUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    has_commission: bool | None = None
    commission_type: CommissionType | None = None
    commission_value: Decimal | None = Field(default=None, ge=Decimal("0"))
    is_active: bool | None = None


class AgentRead(AgentCreate):
    id: uuid.UUID

    model_config = ConfigDict(from_attributes=True)
