"""Utility functions for partitional clustering."""

from .convergence import (
    CenterDisplacement,
    max_displacement
)

from .metrics import (
    inertia,
    contingency_matrix,
    adjusted_rand_score
)

from .validation import (
    validate_data,
    check_n_clusters,
    check_random_state,
    validate_init_centers,
    validate_init_indices
)

from .device import (
    get_default_device,
    parse_device,
    get_chunk_size
)

__all__ = [
    # Convergence criteria
    'CenterDisplacement',
    'max_displacement',

    # Metrics
    'inertia',
    'contingency_matrix',
    'adjusted_rand_score',

    # Validation
    'validate_data',
    'check_n_clusters',
    'check_random_state',
    'validate_init_centers',
    'validate_init_indices',

    # Device management
    'get_default_device',
    'parse_device',
    'get_chunk_size'
]
