from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import date, datetime


class FundingRoundSchema(BaseModel):
    """A financing event, curated or extracted from news"""
    id: str
    company_name: str
    funding_amount_m: Optional[float] = None
    funding_display: str = ''
    round_type: str = 'Undisclosed'
    investors: List[str] = Field(default_factory=list)
    industry: str = 'AI'
    location: str = 'US'
    announced_date: date
    source_url: Optional[str] = None
    description: str = ''
    valuation_display: Optional[str] = None
    is_seed_data: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FundingFilters(BaseModel):
    """Schema for funding round filtering"""
    search: str = ''
    industry: str = ''
    stage: str = ''
    location: str = ''
    year: str = ''
    sort: Literal['date', 'amount', 'company'] = 'date'
    order: Literal['asc', 'desc'] = 'desc'
    limit: int = Field(200, ge=1, le=500)
    offset: int = Field(0, ge=0)


class FundingFetchResult(BaseModel):
    fetched: int = 0
    inserted: int = 0
    skipped: int = 0
    errors: int = 0


class FundingListResponse(BaseModel):
    rounds: List[FundingRoundSchema]
    total: int
