"""Health check implementations."""

from .base_check import BaseHealthCheck
from .repository_check import RepositoryHealthCheck
from .system_check import SystemHealthCheck

__all__ = [
    'BaseHealthCheck',
    'RepositoryHealthCheck',
    'SystemHealthCheck'
]
