"""Normalization of free-text dataset kinds."""
from __future__ import annotations

from typing import Dict, Optional

from pcf_api.domain.entities import DatasetKind

# English and German terms as entered in the dataset dialog
KIND_SYNONYMS: Dict[str, DatasetKind] = {
    "material": DatasetKind.MATERIAL,
    "materials": DatasetKind.MATERIAL,
    "materialien": DatasetKind.MATERIAL,
    "energy": DatasetKind.ENERGY,
    "energie": DatasetKind.ENERGY,
    "waste": DatasetKind.WASTE,
    "abfall": DatasetKind.WASTE,
    "emissions": DatasetKind.EMISSIONS,
    "emission": DatasetKind.EMISSIONS,
    "emissionen": DatasetKind.EMISSIONS,
}


def normalize_kind(kind: Optional[str]) -> DatasetKind:
    """
    Map a free-text kind onto one of the four canonical dataset kinds.

    Matching ignores case and surrounding whitespace. Empty or unrecognized
    values fall back to material.
    """
    if isinstance(kind, DatasetKind):
        return kind
    if not kind:
        return DatasetKind.MATERIAL
    return KIND_SYNONYMS.get(str(kind).strip().casefold(), DatasetKind.MATERIAL)
