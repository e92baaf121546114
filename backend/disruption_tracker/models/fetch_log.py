from sqlalchemy import Column, Integer, String, DateTime, Text, CheckConstraint
from disruption_tracker.database import Base
from disruption_tracker.utils.timeutils import utcnow


class FetchLog(Base):
    __tablename__ = "fetch_logs"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    type = Column(String, nullable=False)
    status = Column(String, nullable=False)
    count = Column(Integer, nullable=False, default=0)
    error = Column(Text, nullable=True)
    duration_ms = Column(Integer, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('success', 'error', 'partial')",
            name='check_fetch_status'
        ),
    )
