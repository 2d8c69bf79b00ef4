"""
Bots module - Automated opponent implementations.

Provides:
- MovePolicy: Interface for bot move selection
- HeuristicPolicy: Center-then-corners opponent
- RandomPolicy: Uniform random baseline
"""

from .policy import (
    MovePolicy,
    MoveDecision,
    HeuristicPolicy,
    RandomPolicy,
    POLICIES,
    create_policy,
)

__all__ = [
    "MovePolicy",
    "MoveDecision",
    "HeuristicPolicy",
    "RandomPolicy",
    "POLICIES",
    "create_policy",
]
