from fastapi import APIRouter
from ..calculators.operations import (
    FAMILY_CONFIG,
    OperationDescriptor,
    describe_operation,
    list_operations,
)

router = APIRouter(prefix="/operations", tags=["operations"])


@router.get("/", response_model=list[OperationDescriptor])
def list_operation_descriptors():
    return list_operations()


@router.get("/families")
def list_families():
    """Edge-finish families and how each is priced."""
    return [
        {"family": family.value, **config.model_dump(), "uses_rate_table": config.uses_rate_table}
        for family, config in FAMILY_CONFIG.items()
    ]


@router.get("/{code}", response_model=OperationDescriptor)
def get_operation(code: str):
    """Metadata for one operation code. Legacy shataf/farma codes resolve to canonical ones."""
    return describe_operation(code)
