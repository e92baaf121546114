from sqlalchemy import Column, String, Date, DateTime, Text, Float, Boolean, JSON
from disruption_tracker.database import Base
from disruption_tracker.utils.timeutils import utcnow


class FundingRound(Base):
    __tablename__ = "ai_funding_rounds"

    id = Column(String, primary_key=True)
    company_name = Column(String, nullable=False)
    funding_amount_m = Column(Float, nullable=True, index=True)
    funding_display = Column(String, nullable=False, default='')
    round_type = Column(String, nullable=False, default='Undisclosed', index=True)
    investors = Column(JSON, nullable=False, default=list)
    industry = Column(String, nullable=False, default='AI', index=True)
    location = Column(String, nullable=False, default='US')
    announced_date = Column(Date, nullable=False, index=True)
    source_url = Column(Text, nullable=True)
    description = Column(Text, nullable=False, default='')
    valuation_display = Column(String, nullable=True)
    is_seed_data = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
