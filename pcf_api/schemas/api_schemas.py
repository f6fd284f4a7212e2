"""
API Request/Response Schemas using Pydantic.

Structure of HTTP requests and responses for the PCF API. Field aliases keep
the camelCase wire names of the web client (``valueCO2e``, ``methodId``).
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

# Dataset schemas
class DatasetCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Dataset name", min_length=1, max_length=255)
    unit: str = Field(..., description="Reference unit of the emission factor, e.g. kWh")
    value_co2e: float = Field(..., alias="valueCO2e", description="kg CO2e per one reference unit")
    source: Optional[str] = Field(None, description="Data source, e.g. UBA or ecoinvent")
    year: Optional[int] = Field(None, description="Reference year")
    geo: Optional[str] = Field(None, description="Geography, e.g. DE or EU")
    method_id: Optional[int] = Field(None, alias="methodId", description="ID of the characterisation method")
    kind: Optional[str] = Field(None, description="Free-text kind, normalized to material/energy/waste/emissions")

class DatasetUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(None, description="Dataset name", max_length=255)
    unit: Optional[str] = Field(None, description="Reference unit of the emission factor")
    value_co2e: Optional[float] = Field(None, alias="valueCO2e", description="kg CO2e per one reference unit")
    source: Optional[str] = Field(None, description="Data source")
    year: Optional[int] = Field(None, description="Reference year")
    geo: Optional[str] = Field(None, description="Geography")
    method_id: Optional[int] = Field(None, alias="methodId", description="ID of the characterisation method")
    kind: Optional[str] = Field(None, description="Free-text kind, normalized on update")

class DatasetResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int = Field(..., description="Unique identifier of the dataset")
    name: str = Field(..., description="Dataset name")
    unit: str = Field(..., description="Reference unit")
    value_co2e: float = Field(..., alias="valueCO2e", description="kg CO2e per one reference unit")
    kind: str = Field(..., description="Normalized kind")
    source: Optional[str] = Field(None, description="Data source")
    year: Optional[int] = Field(None, description="Reference year")
    geo: Optional[str] = Field(None, description="Geography")
    method_id: Optional[int] = Field(None, alias="methodId", description="ID of the characterisation method")

class DatasetDeleteResponse(BaseModel):
    ok: bool = Field(default=True, description="Whether the deletion was successful")

class MethodResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int = Field(..., description="Unique identifier of the method")
    name: str = Field(..., description="Method name")
    gwp_set: Optional[str] = Field(None, alias="gwpSet", description="GWP set, e.g. GWP100")
    description: Optional[str] = Field(None, description="Method description")

# Project schemas
class ProjectCreate(BaseModel):
    name: str = Field(..., description="Name of the project", min_length=1, max_length=255)
    description: str = Field("", description="Optional description of the project", max_length=1000)

class ProjectResponse(BaseModel):
    project_id: str = Field(..., description="Unique identifier for the created project")

class ProjectDetail(BaseModel):
    project_id: str = Field(..., description="Unique identifier for the project")
    name: str = Field(..., description="Name of the project")
    created_at: str = Field(..., description="ISO format creation timestamp")
    description: Optional[str] = Field(None, description="Project description")

class ProjectDeleteResponse(BaseModel):
    success: bool = Field(default=True, description="Whether the deletion was successful")

# Graph schemas
class GraphSnapshot(BaseModel):
    nodes: List[Dict[str, Any]] = Field(default_factory=list, description="Process nodes as stored by the graph editor")
    edges: List[Dict[str, Any]] = Field(default_factory=list, description="Directed flow edges")

class GraphResponse(BaseModel):
    project_id: str = Field(..., description="ID of the project owning the graph")
    nodes: List[Dict[str, Any]] = Field(..., description="Process nodes with migrated elementary flows")
    edges: List[Dict[str, Any]] = Field(..., description="Directed flow edges")
    updated_at: Optional[str] = Field(None, description="ISO timestamp of the last save, null if never saved")

# PCF schemas
class ComputeRequest(BaseModel):
    nodes: List[Any] = Field(default_factory=list, description="Process nodes (ignored by the edge computation)")
    edges: List[Any] = Field(default_factory=list, description="Flow edges carrying data.datasetId and data.amount")

class AggregateRequest(BaseModel):
    nodes: List[Any] = Field(default_factory=list, description="Process nodes with elementary inputs and outputs")

class Hotspot(BaseModel):
    label: str = Field(..., description="Process or dataset name")
    value: float = Field(..., description="Contribution in kg CO2e")

class ProcessEmissions(BaseModel):
    processId: str = Field(..., description="ID of the process node")
    processName: str = Field(..., description="Process title, or its ID when untitled")
    totalEmissions: float = Field(..., description="Emissions of the process in kg CO2e")

class PhaseEmissions(BaseModel):
    phase: str = Field(..., description="Lifecycle phase key")
    label: str = Field(..., description="Display label of the phase")
    value: float = Field(..., description="Emissions of the phase in kg CO2e")

class ComputeResponse(BaseModel):
    totalKgCO2e: float = Field(..., description="Total emissions rounded to 4 decimals")
    hotspots: List[Hotspot] = Field(..., description="Top edges by emissions, highest first")

class PcfResultResponse(BaseModel):
    totalKgCO2e: float = Field(..., description="Total emissions in kg CO2e (unrounded)")
    byPhase: Dict[str, float] = Field(..., description="Emissions per lifecycle phase")
    byProcess: List[ProcessEmissions] = Field(..., description="Processes with emissions, highest first")
    hotspots: List[Hotspot] = Field(..., description="Processes ranked by emissions")
    phases: List[PhaseEmissions] = Field(..., description="Phases in lifecycle order with labels")
    topProcesses: List[ProcessEmissions] = Field(..., description="Leading entries of byProcess")
    warning: Optional[str] = Field(None, description="Set when the result is incomplete")
    projectId: Optional[str] = Field(None, description="Project the result belongs to")
