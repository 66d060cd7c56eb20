"""
Webhook endpoints for billing events.

Public endpoints (no auth required) for Creem webhooks.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from common.db.session import Database, get_database
from common.providers.rate_limiter.limiter import limiter
from packages.billing.webhooks.creem_webhook import handle_creem_webhook

router = APIRouter()


@router.post("/webhooks/creem")
@limiter.exempt
async def creem_webhook(
    request: Request, database: Database = Depends(get_database)
) -> JSONResponse:
    """
    Receive webhook events from the Creem payment platform.

    No authentication required - signature checked internally when a secret is configured.
    """
    return await handle_creem_webhook(request, database)
