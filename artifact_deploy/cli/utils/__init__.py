"""CLI utility functions"""

from .output import (
    console,
    format_deploy_result,
    format_status,
    format_verification_result,
    format_prune_result,
    print_error,
    print_warning,
    print_success,
)

__all__ = [
    # Output utilities
    'console',
    'format_deploy_result',
    'format_status',
    'format_verification_result',
    'format_prune_result',
    'print_error',
    'print_warning',
    'print_success',
]
