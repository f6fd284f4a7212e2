"""Builders for domain objects and editor JSON used across tests."""
from pcf_api.domain.entities import (
    Dataset,
    ElementaryItem,
    FlowEdge,
    FlowKind,
    LifecyclePhase,
    ProcessNode,
)


def make_dataset(dataset_id, value_co2e, name=None, unit="kg"):
    return Dataset(id=dataset_id, name=name or f"Dataset {dataset_id}", unit=unit, value_co2e=value_co2e)


def make_item(amount, dataset_id=None, kind=FlowKind.MATERIAL, name="flow", unit="kg"):
    return ElementaryItem(kind=kind, name=name, amount=amount, unit=unit, dataset_id=dataset_id)


def make_node(node_id, inputs=(), outputs=(), stage=LifecyclePhase.PRODUCTION, title=None):
    return ProcessNode(id=node_id, title=title, stage=stage, inputs=tuple(inputs), outputs=tuple(outputs))


def make_edge(dataset_id, amount, source="a", target="b"):
    return FlowEdge(source=source, target=target, dataset_id=dataset_id, amount=amount)


def editor_node(node_id, title, stage, inputs=(), outputs=()):
    """Node in the JSON shape the graph editor stores."""
    return {
        "id": node_id,
        "type": "process",
        "position": {"x": 0, "y": 0},
        "data": {
            "title": title,
            "stage": stage,
            "elementary": {"inputs": list(inputs), "outputs": list(outputs)},
        },
    }


def editor_edge(source, target, dataset_id=None, amount=None):
    data = {}
    if dataset_id is not None:
        data["datasetId"] = dataset_id
    if amount is not None:
        data["amount"] = amount
    return {"id": f"{source}-{target}", "source": source, "target": target, "data": data}
