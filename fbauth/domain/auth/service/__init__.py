"""Auth domain services."""

from .flow import FlowService

__all__ = ["FlowService"]
