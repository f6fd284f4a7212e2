"""
Database Models using SQLAlchemy.

These define the schema of the dataset catalog: emission factor datasets and
the characterisation methods they belong to. They are NOT related to:
- API schemas (see pcf_api.schemas.api_schemas)
- The domain entities the aggregator consumes (see pcf_api.domain.entities)
"""
from sqlalchemy import Column, ForeignKey, Integer, String, Float, DateTime, Text
from sqlalchemy.orm import declarative_base, relationship
import datetime

Base = declarative_base()

class Method(Base):
    __tablename__ = "methods"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    gwp_set = Column(String, nullable=True)  # e.g. "GWP100"
    description = Column(Text, nullable=True)

    # Relationships
    datasets = relationship("Dataset", back_populates="method")

class Dataset(Base):
    __tablename__ = "datasets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    source = Column(String, nullable=True)
    year = Column(Integer, nullable=True)
    geo = Column(String, nullable=True)
    unit = Column(String, nullable=False)
    value_co2e = Column(Float, nullable=False)  # kg CO2e per one `unit`
    kind = Column(String, nullable=False, default="material")  # always stored normalized
    method_id = Column(Integer, ForeignKey("methods.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    # Relationships
    method = relationship("Method", back_populates="datasets")
