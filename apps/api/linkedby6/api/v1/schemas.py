from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class RenderNodeOut(BaseModel):
    id: str
    type: Literal["Person", "Business"]
    name: str
    phone: str | None = None


class ConnectionGraphOut(BaseModel):
    status: Literal["connected", "no_connection"]
    nodes: list[RenderNodeOut] = Field(default_factory=list)
    degrees: int | None = None
    degrees_label: str | None = None
    message: str | None = None
    used_fallback: bool = False
    compact: bool = False


class NormalizePathRequest(BaseModel):
    # Left loose: graph responses vary in shape and the pipeline tolerates that.
    path_data: dict[str, Any] | None = None
    business_name: str | None = None
    current_user_full_name: str | None = None
    current_user_phone_number: str | None = None
    compact: bool = False


class ConnectionPathResponse(BaseModel):
    business_id: str
    business_name: str | None = None
    loading: bool = False
    found: bool = False
    message: str | None = None
    graph: ConnectionGraphOut | None = None


class BusinessOut(BaseModel):
    business_id: str
    business_name: str
    industry: str | None = None
    city: str | None = None


class RecommendedBusinessOut(BusinessOut):
    connection: ConnectionPathResponse


class RecommendationRequest(BaseModel):
    business_id: str = Field(min_length=1)


class RecommendationToggleResponse(BaseModel):
    user_id: str
    business_id: str
    recommended: bool
    changed: bool
