"""
Планирование выгрузки по BL.
"""

from .bl_grouping import PlanningBuilder, discharge_order_key

__all__ = [
    "PlanningBuilder",
    "discharge_order_key",
]
