"""Error detection, AI review, and market prediction result models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DetectionType(str, Enum):  # noqa: UP042
    TYPO = "typo"
    GRAMMAR = "grammar"
    LOGIC = "logic"
    REPETITION = "repetition"


class DetectionIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    severity: str = "info"
    position: str = ""
    original: str = ""
    suggestion: str = ""
    explanation: str = ""


class DetectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    issues: list[DetectionIssue] = Field(default_factory=list)
    summary: str = ""
    total_count: int = 0
    type_counts: dict[str, int] = Field(default_factory=dict)


class ReviewScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    dimension: str
    score: int = Field(ge=0, le=100)
    comment: str = ""


class ReviewResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    scores: list[ReviewScore] = Field(default_factory=list)
    overall_score: int = 0
    highlights: list[str] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    summary: str = ""


class MarketTrendItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    trend: str
    fit: int = 0
    analysis: str = ""


class ReaderAppealItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    dimension: str
    score: int = 0
    comment: str = ""


class MonetizationAdvice(BaseModel):
    model_config = ConfigDict(frozen=True)

    platforms: list[str] = Field(default_factory=list)
    pricing_model: str = ""
    ip_potential: int = 0
    suggestion: str = ""


class MarketPrediction(BaseModel):
    model_config = ConfigDict(frozen=True)

    market_score: int = 0
    target_audience: str = ""
    competitive_edge: str = ""
    market_trends: list[MarketTrendItem] = Field(default_factory=list)
    reader_appeal: list[ReaderAppealItem] = Field(default_factory=list)
    monetization: MonetizationAdvice = Field(default_factory=MonetizationAdvice)
    risks: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    summary: str = ""
