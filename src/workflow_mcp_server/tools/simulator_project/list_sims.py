from ..simulator_management.list_sims import tool

__all__ = ["tool"]
