from ..simulator_management.boot_sim import tool

__all__ = ["tool"]
