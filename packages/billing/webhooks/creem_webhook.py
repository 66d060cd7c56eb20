"""
Creem webhook handler for payment events.

Handles events from the Creem payment platform:
- One-time payments: checkout.completed tops up the buyer's credits
- Subscriptions: subscription.paid starts or renews a period,
  subscription.canceled / subscription.expired update the status

The product's billing type picks the branch, the event type picks the
transition. Anything else is acknowledged without touching the database.
"""

from datetime import datetime
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from common.core.config import settings
from common.core.exceptions import ValidationError
from common.core.otel_axiom_exporter import get_logger, trace_span
from common.db.session import Database
from packages.billing.models.domain.creem_webhooks import (
    CreemEventObject,
    CreemWebhookEvent,
    DEFAULT_ONE_TIME_CREDIT,
    DEFAULT_SUBSCRIPTION_CREDIT,
)
from packages.billing.models.domain.credit_usage import (
    CreditUsageCreateModel,
    CreditUsageUpdateModel,
)
from packages.billing.models.domain.enums import (
    CreemEventType,
    PaymentStatus,
    UserSubscriptionStatus,
)
from packages.billing.models.domain.payment_history import PaymentHistoryCreateModel
from packages.billing.models.domain.user_subscription import (
    UserSubscriptionCreateModel,
    UserSubscriptionUpdateModel,
)
from packages.billing.repositories.credit_usage_repository import CreditUsageRepository
from packages.billing.repositories.payment_history_repository import (
    PaymentHistoryRepository,
)
from packages.billing.repositories.user_subscription_repository import (
    UserSubscriptionRepository,
)
from packages.billing.utils.periods import add_months, period_end_for_interval, utcnow
from packages.billing.webhooks.signature import SIGNATURE_HEADER, verify_creem_signature

logger = get_logger(__name__)

SUCCESS_BODY = {"success": True, "message": "Webhook received successfully"}
FAILURE_BODY = {"error": "Webhook processing failed"}


async def handle_creem_webhook(request: Request, database: Database) -> JSONResponse:
    """
    Handle incoming webhook from Creem.

    Every failure (bad signature, unparseable body, store error) is logged
    and answered with the same generic 500 body; Creem decides whether to
    redeliver.
    """
    event_id = None
    event_type = None
    try:
        payload_bytes = await request.body()
        verify_creem_signature(
            payload_bytes,
            request.headers.get(SIGNATURE_HEADER),
            settings.creem_webhook_secret,
        )

        event = CreemWebhookEvent.model_validate_json(payload_bytes)
        event_id, event_type = event.id, event.event_type

        logger.info(
            f"Received Creem webhook: {event.event_type}",
            extra={
                "event_id": event.id,
                "event_type": event.event_type,
                "billing_type": event.object.product.billing_type,
                "object_id": event.object.id,
            },
        )

        await process_creem_event(database, event)

        return JSONResponse(content=SUCCESS_BODY)

    except Exception as e:
        logger.error(
            f"Failed to process Creem webhook: {str(e)}",
            extra={"event_id": event_id, "event_type": event_type, "error": str(e)},
        )
        return JSONResponse(status_code=500, content=FAILURE_BODY)


@trace_span
async def process_creem_event(
    database: Database, event: CreemWebhookEvent, now: Optional[datetime] = None
) -> None:
    """
    Apply one event to local billing state.

    All writes for the event share one transaction, so an exception part-way
    through leaves no partial update behind.
    """
    now = now or utcnow()
    data = event.object

    async with database.transaction() as session:
        if not data.is_recurring:
            if event.event_type == CreemEventType.CHECKOUT_COMPLETED:
                await _handle_checkout_completed(session, data, now)
            else:
                logger.info(f"Unhandled one-time webhook type: {event.event_type}")
            return

        if event.event_type == CreemEventType.SUBSCRIPTION_PAID:
            await _handle_subscription_paid(session, data, now)
        elif event.event_type == CreemEventType.SUBSCRIPTION_CANCELED:
            await _update_subscription_status(
                session, data, UserSubscriptionStatus.CANCELLED
            )
        elif event.event_type == CreemEventType.SUBSCRIPTION_EXPIRED:
            await _update_subscription_status(
                session, data, UserSubscriptionStatus.EXPIRED
            )
        else:
            logger.info(f"Unhandled subscription webhook type: {event.event_type}")


async def _handle_checkout_completed(
    session, data: CreemEventObject, now: datetime
) -> None:
    """
    Handle checkout.completed for a one-time product.

    The buyer is identified by request_id, which we set when creating the
    checkout. Credits are added to whatever the user already has, and the
    period end only ever moves forward.
    """
    user_id = data.request_id
    if not user_id:
        raise ValidationError("Missing request_id on one-time checkout")

    metadata = data.metadata
    credit = metadata.credit_or(DEFAULT_ONE_TIME_CREDIT)
    credit_repo = CreditUsageRepository(session)
    payment_repo = PaymentHistoryRepository(session)

    new_period_end = add_months(now, 1)
    existing = await credit_repo.get_by_user_id(user_id)

    if existing and existing.period_end > new_period_end:
        new_period_end = existing.period_end

    if existing is None:
        await credit_repo.create(
            CreditUsageCreateModel(
                user_id=user_id,
                credit_used=0,
                credit_total=credit,
                period_start=now,
                period_end=new_period_end,
            )
        )
    else:
        await credit_repo.update_by_user_id(
            user_id,
            CreditUsageUpdateModel(
                credit_used=existing.credit_used,
                credit_total=existing.credit_total + credit,
                period_start=existing.period_start,
                period_end=new_period_end,
            ),
        )

    payment = await payment_repo.create(
        PaymentHistoryCreateModel(
            user_id=user_id,
            subscription_plan_id=metadata.plan_id_or_default(),
            amount=metadata.amount_or_default(),
            currency=metadata.currency,
            interval=metadata.interval_or_default(),
            status=PaymentStatus.COMPLETED,
            creem_payment_intent_id=data.id,
            creem_product_id=data.product.id,
            creem_customer_id=data.customer_id,
        )
    )

    logger.info(
        f"Checkout completed for user {user_id}: +{credit} credits",
        extra={
            "user_id": user_id,
            "credit_added": credit,
            "period_end": new_period_end.isoformat(),
            "payment_history_id": payment.id,
        },
    )


async def _handle_subscription_paid(
    session, data: CreemEventObject, now: datetime
) -> None:
    """
    Handle subscription.paid (first payment or renewal).

    The period restarts at ``now``; the subscription is created or
    overwritten, and credits are reset rather than topped up.
    """
    metadata = data.metadata
    user_id = metadata.user_id
    if not user_id:
        raise ValidationError("Missing userId in subscription metadata")

    plan_id = metadata.plan_id_or_default()
    credit = metadata.credit_or(DEFAULT_SUBSCRIPTION_CREDIT)
    period_end = period_end_for_interval(now, metadata.interval)

    subscription_repo = UserSubscriptionRepository(session)
    credit_repo = CreditUsageRepository(session)

    existing_subscriptions = await subscription_repo.get_by_user_id(user_id)

    if not existing_subscriptions:
        await subscription_repo.create(
            UserSubscriptionCreateModel(
                user_id=user_id,
                subscription_plan_id=plan_id,
                status=UserSubscriptionStatus.ACTIVE,
                current_period_start=now,
                current_period_end=period_end,
                creem_subscription_id=data.id,
                creem_customer_id=data.customer_id,
            )
        )
        logger.info(f"Created subscription for user {user_id}")
    else:
        await subscription_repo.update_by_user_id(
            user_id,
            UserSubscriptionUpdateModel(
                subscription_plan_id=plan_id,
                status=UserSubscriptionStatus.ACTIVE,
                current_period_start=now,
                current_period_end=period_end,
                creem_subscription_id=data.id,
                creem_customer_id=data.customer_id,
            ),
        )
        logger.info(f"Renewed subscription for user {user_id}")

    existing_usage = await credit_repo.get_by_user_id(user_id)
    if existing_usage is None:
        await credit_repo.create(
            CreditUsageCreateModel(
                user_id=user_id,
                credit_used=0,
                credit_total=credit,
                period_start=now,
                period_end=period_end,
            )
        )
    else:
        await credit_repo.update_by_user_id(
            user_id,
            CreditUsageUpdateModel(
                credit_used=0,
                credit_total=credit,
                period_start=now,
                period_end=period_end,
            ),
        )

    logger.info(
        f"Subscription paid for user {user_id}",
        extra={
            "user_id": user_id,
            "subscription_id": data.id,
            "plan_id": plan_id,
            "credit_total": credit,
            "period_end": period_end.isoformat(),
        },
    )


async def _update_subscription_status(
    session, data: CreemEventObject, new_status: UserSubscriptionStatus
) -> None:
    """Set the status of the subscription records linked to the Creem subscription."""
    updated = await UserSubscriptionRepository(
        session
    ).update_by_creem_subscription_id(
        data.id, UserSubscriptionUpdateModel(status=new_status)
    )

    if updated:
        logger.info(
            f"Marked subscription {data.id} as {new_status.value}",
            extra={"subscription_id": data.id, "status": new_status.value},
        )
    else:
        logger.warning(
            f"No local subscription for Creem subscription {data.id}",
            extra={"subscription_id": data.id, "status": new_status.value},
        )
