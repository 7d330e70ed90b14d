"""
Weekly Update Runner - Core Package
"""

from core.config import RunnerConfig, load_config
from core.gate import UpdateGate, RunRecord, GateDecision, GateState, is_due
from core.runner import UpdateRunner

__all__ = [
    "RunnerConfig",
    "load_config",
    "UpdateGate",
    "RunRecord",
    "GateDecision",
    "GateState",
    "is_due",
    "UpdateRunner",
]
