"""
analysis - Симметрии и канонические отпечатки состояний
"""

from .symmetry import (
    ALL_SYMMETRIES, transform, to_bits, all_state_ids,
    canonical_id, transform_board, symmetry_group
)

__all__ = [
    'ALL_SYMMETRIES',
    'transform',
    'to_bits',
    'all_state_ids',
    'canonical_id',
    'transform_board',
    'symmetry_group'
]
