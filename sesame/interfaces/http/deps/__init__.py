"""Reusable FastAPI dependencies."""

from fastapi import Depends, Request

from sesame.core.container import ApplicationContainer
from sesame.domain.access import AccessCoordinator


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def get_coordinator(container: ApplicationContainer = Depends(get_container)) -> AccessCoordinator:
    return container.coordinator


__all__ = [
    "get_container",
    "get_coordinator",
]
