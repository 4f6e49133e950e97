from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow():
    return datetime.now(timezone.utc)


class Screening(Base):
    __tablename__ = "screenings"
    id = Column(String, primary_key=True)
    prompt = Column(Text, nullable=False)
    job_title = Column(String, nullable=True)
    company_name = Column(String, nullable=True)
    job_description = Column(Text, nullable=True)
    candidate_name = Column(String, nullable=True)
    candidate_email = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
