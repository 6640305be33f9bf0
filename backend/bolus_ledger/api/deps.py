from typing import AsyncIterator

from fastapi import Depends, Request

from bolus_ledger.core.settings import Settings, get_settings
from bolus_ledger.services.openfoodfacts_client import OpenFoodFactsClient
from bolus_ledger.services.session import SessionState


def get_session(request: Request) -> SessionState:
    return request.app.state.session


async def get_nutrition_resolver(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[OpenFoodFactsClient]:
    config = settings.openfoodfacts
    client = OpenFoodFactsClient(
        base_url=str(config.base_url),
        timeout_seconds=config.timeout_seconds,
        user_agent=config.user_agent,
    )
    try:
        yield client
    finally:
        await client.aclose()
