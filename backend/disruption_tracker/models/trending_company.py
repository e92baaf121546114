from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from disruption_tracker.database import Base
from disruption_tracker.utils.timeutils import utcnow


class TrendingCompany(Base):
    __tablename__ = "trending_companies"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String, nullable=False, unique=True)
    count = Column(Integer, nullable=False, default=1, index=True)
    sentiment = Column(String, nullable=False, default='neutral')
    last_seen = Column(DateTime, nullable=False, default=utcnow)
    expires_at = Column(DateTime, nullable=False, index=True)

    __table_args__ = (
        CheckConstraint(
            "sentiment IN ('positive', 'negative', 'neutral')",
            name='check_company_sentiment'
        ),
    )
