from sqlalchemy import JSON, Column, DateTime, String, Text

from database import Base


class LoanApplication(Base):
    __tablename__ = "loan_applications"

    id = Column(String(64), primary_key=True, index=True)
    applicant_name = Column(Text, nullable=False)
    email = Column(String(320), nullable=False)
    # JSON keeps integer amounts exact (no float rounding above 2**53)
    loan_amount = Column(JSON, nullable=False)
    loan_purpose = Column(Text, nullable=False)
    # One of Pending / Approved / Rejected; the only column updated after insert
    status = Column(String(32), nullable=False, default="Pending", index=True)
    submitted_at = Column(DateTime(timezone=True), nullable=False)
