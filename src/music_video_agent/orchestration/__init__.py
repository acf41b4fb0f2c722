"""Orchestration service client and step event delivery"""

from .client import ApiResponse, OrchestrationClient, HttpOrchestrationClient
from .subscriber import RedisEventSubscriber

__all__ = [
    'ApiResponse',
    'OrchestrationClient',
    'HttpOrchestrationClient',
    'RedisEventSubscriber',
]
