"""
pcf-api Application Package

Directory Structure:
├── routers/           # FastAPI route handlers
├── schemas/           # Pydantic models for API requests/responses
│   └── api_schemas.py # HTTP request/response structures
├── domain/            # Entities, aggregation, ranking, normalization, ingestion
├── application/       # Services orchestrating catalog, graph store and aggregator
├── db/                # SQLAlchemy dataset catalog
├── graphstore/        # JSON file store for projects and graph snapshots
└── config.py          # Application configuration

Model Types Clarification:
1. **API Schemas** (pcf_api.schemas.api_schemas): Pydantic models for HTTP requests/responses
2. **DB Models** (pcf_api.db.models): SQLAlchemy tables of the dataset catalog
3. **Domain Entities** (pcf_api.domain.entities): immutable types the aggregator reads

Emission results are never stored; they are recomputed from the current graph
snapshot and catalog on every request.
"""
