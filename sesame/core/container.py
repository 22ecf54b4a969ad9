"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine

from sesame.core.config import Settings
from sesame.domain.access import AccessCoordinator
from sesame.domain.grants import GrantStore
from sesame.domain.payments import PaymentNetwork
from sesame.infrastructure.database import build_engine, build_session_factory, init_db
from sesame.infrastructure.lightning import LndRestClient


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    engine: AsyncEngine
    grants: GrantStore
    network: PaymentNetwork
    coordinator: AccessCoordinator

    @classmethod
    def from_settings(cls, settings: Settings, network: PaymentNetwork | None = None) -> "ApplicationContainer":
        engine = build_engine(settings.database)
        grants = GrantStore(build_session_factory(engine))
        network = network or LndRestClient.from_settings(settings)
        coordinator = AccessCoordinator(
            grants,
            network,
            price_tokens=settings.invoice.price_tokens,
            resubscribe_delay=settings.watcher.resubscribe_delay,
            max_failures=settings.watcher.max_failures,
        )
        return cls(
            settings=settings,
            engine=engine,
            grants=grants,
            network=network,
            coordinator=coordinator,
        )

    async def startup(self) -> None:
        """Ensure infrastructure (database schema, etc.) is initialised."""
        await init_db(self.engine)

    async def shutdown(self) -> None:
        await self.coordinator.shutdown()
        aclose = getattr(self.network, "aclose", None)
        if aclose is not None:
            await aclose()
        await self.engine.dispose()


__all__ = ["ApplicationContainer"]
