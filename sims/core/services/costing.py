"""
Production costing rules.

Turns the structured inputs of a production run (raw materials, fixed costs,
miscellaneous costs) into itemised cost lines and derives the batch-average
cost per unit. Pure functions over core entities; no storage access.
"""

import uuid
from datetime import date

from sims.core.entities.production import (
    CostType,
    FixedCosts,
    MiscellaneousCost,
    ProductionCost,
    RawMaterialUsage,
)
from sims.core.exceptions import InvalidInputError

FALLBACK_COST_NAME = "Production cost"


def generate_batch_number(production_date: date | None = None) -> str:
    """Generate a batch label such as BATCH-20260115-1A2B3C."""
    day = (production_date or date.today()).strftime("%Y%m%d")
    return f"BATCH-{day}-{uuid.uuid4().hex[:6].upper()}"


def build_cost_lines(
    raw_materials: list[RawMaterialUsage],
    fixed_costs: FixedCosts,
    miscellaneous_costs: list[MiscellaneousCost],
) -> list[ProductionCost]:
    """Build cost lines from structured batch inputs.

    Zero-valued fixed costs are skipped; fixed cost names are capitalised
    ("labor" -> "Labor").
    """
    lines: list[ProductionCost] = []

    for usage in raw_materials:
        lines.append(
            ProductionCost(
                cost_type=CostType.RAW_MATERIAL,
                item_name=usage.material_name or f"Raw material {usage.raw_material_id}",
                quantity=usage.quantity,
                unit_cost=usage.unit_cost or 0.0,
                raw_material_id=usage.raw_material_id,
            )
        )

    for name, value in fixed_costs.items():
        if value:
            lines.append(
                ProductionCost(
                    cost_type=CostType.OVERHEAD,
                    item_name=name.capitalize(),
                    quantity=1,
                    unit_cost=value,
                )
            )

    for misc in miscellaneous_costs:
        lines.append(
            ProductionCost(
                cost_type=CostType.MISCELLANEOUS,
                item_name=misc.description,
                quantity=1,
                unit_cost=misc.amount,
            )
        )

    return lines


def fallback_cost_lines(total_cost: float | None) -> list[ProductionCost]:
    """A single overhead line carrying a caller-supplied total, if any."""
    if not total_cost:
        return []
    return [
        ProductionCost(
            cost_type=CostType.OVERHEAD,
            item_name=FALLBACK_COST_NAME,
            quantity=1,
            unit_cost=total_cost,
        )
    ]


def sum_cost_lines(lines: list[ProductionCost]) -> float:
    """Total of quantity (default 1) x unit_cost over all lines."""
    return sum(line.amount for line in lines)


def compute_cost_per_unit(total_cost: float, quantity_produced: float) -> float:
    """Batch-average cost; a non-positive quantity is rejected, never defaulted."""
    if quantity_produced is None or quantity_produced <= 0:
        raise InvalidInputError(
            field="quantity_produced",
            message="must be greater than zero",
            value=quantity_produced,
        )
    return total_cost / quantity_produced


def consumption_from_cost_lines(lines: list[ProductionCost]) -> list[RawMaterialUsage]:
    """Raw-material consumption implied by cost lines that reference a material."""
    return [
        RawMaterialUsage(
            raw_material_id=line.raw_material_id,
            quantity=line.quantity if line.quantity is not None else 1.0,
            unit_cost=line.unit_cost,
            material_name=line.item_name,
        )
        for line in lines
        if line.cost_type == CostType.RAW_MATERIAL and line.raw_material_id is not None
    ]
