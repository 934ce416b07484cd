"""
shanoir-deployer - Kubernetes manifest generator for shanoir-ng instances

Builds the resources with the kubernetes client models, no templates involved.
"""

from .chart import compile_config, create_manifests
from .errors import ConfigurationError

__all__ = ['compile_config', 'create_manifests', 'ConfigurationError']
