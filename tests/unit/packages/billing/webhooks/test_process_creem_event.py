import pytest
from datetime import datetime, timezone
from decimal import Decimal

from common.core.exceptions import ValidationError
from packages.billing.models.database import UserSubscriptionEntity
from packages.billing.models.domain.credit_usage import CreditUsageCreateModel
from packages.billing.models.domain.creem_webhooks import CreemWebhookEvent
from packages.billing.models.domain.enums import UserSubscriptionStatus
from packages.billing.repositories import (
    CreditUsageRepository,
    PaymentHistoryRepository,
    UserSubscriptionRepository,
)
from packages.billing.webhooks.creem_webhook import process_creem_event

NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def one_time_event(event_type="checkout.completed", request_id="user_1", **object_fields):
    obj = {
        "request_id": request_id,
        "object": "checkout",
        "id": "ch_100",
        "customer": {"id": "cust_1"},
        "product": {"id": "prod_credits", "billing_type": "one-time"},
        "status": "completed",
        "metadata": {},
    }
    obj.update(object_fields)
    return CreemWebhookEvent.model_validate(
        {"id": "evt_1", "eventType": event_type, "object": obj}
    )


def subscription_event(event_type="subscription.paid", subscription_id="sub_1", **object_fields):
    obj = {
        "object": "subscription",
        "id": subscription_id,
        "customer": {"id": "cust_1"},
        "product": {"id": "prod_pro_monthly", "billing_type": "recurring"},
        "status": "active",
        "metadata": {"userId": "user_1"},
    }
    obj.update(object_fields)
    return CreemWebhookEvent.model_validate(
        {"id": "evt_2", "eventType": event_type, "object": obj}
    )


@pytest.fixture
def read_session(test_session_factory):
    """Open a fresh session to read back what the event wrote."""
    return test_session_factory


class TestCheckoutCompleted:
    """One-time checkout.completed events."""

    async def test_creates_credit_usage_with_default_credit(self, database, read_session):
        """Test first purchase without metadata credit grants 100 credits."""
        await process_creem_event(database, one_time_event(), now=NOW)

        async with read_session() as session:
            usage = await CreditUsageRepository(session).get_by_user_id("user_1")

        assert usage.credit_used == 0
        assert usage.credit_total == 100
        assert usage.period_start == NOW
        assert usage.period_end == datetime(2025, 2, 15, 12, 0, 0, tzinfo=timezone.utc)

    async def test_records_payment(self, database, read_session):
        """Test that every checkout writes a completed payment row."""
        event = one_time_event(
            metadata={
                "credit": 50,
                "subscriptionPlanId": "4",
                "amount": "9.99",
                "currency": "EUR",
                "interval": "year",
            }
        )
        await process_creem_event(database, event, now=NOW)

        async with read_session() as session:
            payments = await PaymentHistoryRepository(session).get_by_user_id("user_1")

        assert len(payments) == 1
        payment = payments[0]
        assert payment.status == "completed"
        assert payment.subscription_plan_id == 4
        assert payment.amount == Decimal("9.99")
        assert payment.currency == "EUR"
        assert payment.interval == "year"
        assert payment.creem_payment_intent_id == "ch_100"
        assert payment.creem_product_id == "prod_credits"
        assert payment.creem_customer_id == "cust_1"
        assert payment.creem_subscription_id is None

    async def test_payment_defaults(self, database, read_session):
        """Test payment fields fall back to plan 1, amount 0 and monthly interval."""
        await process_creem_event(
            database, one_time_event(metadata=None, customer=None), now=NOW
        )

        async with read_session() as session:
            payment = (await PaymentHistoryRepository(session).get_by_user_id("user_1"))[0]

        assert payment.subscription_plan_id == 1
        assert payment.amount == Decimal("0")
        assert payment.interval == "month"
        assert payment.currency is None
        assert payment.creem_customer_id is None

    async def test_adds_to_existing_credits(
        self, database, read_session, sample_credit_usage
    ):
        """Test credits are added on top of the existing total, usage kept."""
        await process_creem_event(
            database, one_time_event(metadata={"credit": "50"}), now=NOW
        )

        async with read_session() as session:
            usage = await CreditUsageRepository(session).get_by_user_id("user_1")

        assert usage.credit_total == 150
        assert usage.credit_used == 30
        assert usage.period_start == datetime(2025, 1, 1, tzinfo=timezone.utc)
        # Existing end (Feb 1) is earlier than now + 1 month
        assert usage.period_end == datetime(2025, 2, 15, 12, 0, 0, tzinfo=timezone.utc)

    async def test_keeps_later_period_end(self, database, read_session, test_db):
        """Test that a later existing period end is never shortened."""
        later_end = datetime(2025, 6, 1, tzinfo=timezone.utc)
        await CreditUsageRepository(test_db).create(
            _usage_create("user_1", used=10, total=1000, end=later_end)
        )
        await test_db.commit()

        await process_creem_event(database, one_time_event(), now=NOW)

        async with read_session() as session:
            usage = await CreditUsageRepository(session).get_by_user_id("user_1")

        assert usage.period_end == later_end
        assert usage.credit_total == 1100
        assert usage.credit_used == 10

    async def test_period_end_clamps_to_month_end(self, database, read_session):
        """Test Jan 31 plus one month lands on the last day of February."""
        now = datetime(2025, 1, 31, 8, 30, tzinfo=timezone.utc)
        await process_creem_event(database, one_time_event(), now=now)

        async with read_session() as session:
            usage = await CreditUsageRepository(session).get_by_user_id("user_1")

        assert usage.period_end == datetime(2025, 2, 28, 8, 30, tzinfo=timezone.utc)

    async def test_missing_request_id_raises(self, database, read_session):
        """Test that a checkout without request_id fails and writes nothing."""
        with pytest.raises(ValidationError):
            await process_creem_event(
                database, one_time_event(request_id=None), now=NOW
            )

        async with read_session() as session:
            assert await PaymentHistoryRepository(session).get_by_user_id("user_1") == []

    async def test_invalid_amount_rolls_back_credit_update(
        self, database, read_session, sample_credit_usage
    ):
        """Test a failure after the credit update leaves the credit record untouched."""
        event = one_time_event(metadata={"credit": "50", "amount": "lots"})

        with pytest.raises(ValueError):
            await process_creem_event(database, event, now=NOW)

        async with read_session() as session:
            usage = await CreditUsageRepository(session).get_by_user_id("user_1")
            payments = await PaymentHistoryRepository(session).get_by_user_id("user_1")

        assert usage.credit_total == 100
        assert usage.period_end == datetime(2025, 2, 1, tzinfo=timezone.utc)
        assert payments == []

    @pytest.mark.parametrize(
        "event_type", ["subscription.paid", "subscription.canceled", "refund.created"]
    )
    async def test_other_one_time_events_ignored(self, database, read_session, event_type):
        """Test one-time products only react to checkout.completed."""
        await process_creem_event(database, one_time_event(event_type), now=NOW)

        async with read_session() as session:
            assert await CreditUsageRepository(session).get_by_user_id("user_1") is None
            assert await PaymentHistoryRepository(session).get_by_user_id("user_1") == []


class TestSubscriptionPaid:
    """Recurring subscription.paid events."""

    async def test_creates_subscription_and_credits(self, database, read_session):
        """Test first payment creates an active subscription and 1000 credits."""
        await process_creem_event(database, subscription_event(), now=NOW)

        async with read_session() as session:
            subscriptions = await UserSubscriptionRepository(session).get_by_user_id(
                "user_1"
            )
            usage = await CreditUsageRepository(session).get_by_user_id("user_1")

        assert len(subscriptions) == 1
        subscription = subscriptions[0]
        assert subscription.status == UserSubscriptionStatus.ACTIVE
        assert subscription.subscription_plan_id == 1
        assert subscription.current_period_start == NOW
        assert subscription.current_period_end == datetime(
            2025, 2, 15, 12, 0, 0, tzinfo=timezone.utc
        )
        assert subscription.creem_subscription_id == "sub_1"
        assert subscription.creem_customer_id == "cust_1"

        assert usage.credit_used == 0
        assert usage.credit_total == 1000
        assert usage.period_start == NOW
        assert usage.period_end == subscription.current_period_end

    async def test_yearly_interval(self, database, read_session):
        """Test interval=year gives a one year period."""
        event = subscription_event(
            metadata={"userId": "user_1", "interval": "year", "credit": 12000}
        )
        await process_creem_event(database, event, now=NOW)

        async with read_session() as session:
            subscription = (
                await UserSubscriptionRepository(session).get_by_user_id("user_1")
            )[0]
            usage = await CreditUsageRepository(session).get_by_user_id("user_1")

        assert subscription.current_period_end == datetime(
            2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc
        )
        assert usage.credit_total == 12000

    async def test_numeric_user_id(self, database, read_session):
        """Test a numeric userId is stored as a string."""
        await process_creem_event(
            database, subscription_event(metadata={"userId": 42}), now=NOW
        )

        async with read_session() as session:
            assert len(await UserSubscriptionRepository(session).get_by_user_id("42")) == 1

    async def test_renewal_overwrites_subscription(
        self, database, read_session, test_db, sample_subscription, sample_credit_usage
    ):
        """Test renewal overwrites the record and resets usage."""
        sample_subscription.status = UserSubscriptionStatus.CANCELLED.value
        await test_db.commit()

        event = subscription_event(
            subscription_id="sub_new",
            customer={"id": "cust_new"},
            metadata={"userId": "user_1", "subscriptionPlanId": 7, "credit": "300"},
        )
        await process_creem_event(database, event, now=NOW)

        async with read_session() as session:
            subscriptions = await UserSubscriptionRepository(session).get_by_user_id(
                "user_1"
            )
            usage = await CreditUsageRepository(session).get_by_user_id("user_1")

        assert len(subscriptions) == 1
        subscription = subscriptions[0]
        assert subscription.id == sample_subscription.id
        assert subscription.status == UserSubscriptionStatus.ACTIVE
        assert subscription.subscription_plan_id == 7
        assert subscription.creem_subscription_id == "sub_new"
        assert subscription.creem_customer_id == "cust_new"
        assert subscription.current_period_start == NOW

        assert usage.id == sample_credit_usage.id
        assert usage.credit_used == 0
        assert usage.credit_total == 300
        assert usage.period_start == NOW

    async def test_does_not_record_payment(self, database, read_session):
        """Test subscription payments do not add payment history rows."""
        await process_creem_event(database, subscription_event(), now=NOW)

        async with read_session() as session:
            assert await PaymentHistoryRepository(session).get_by_user_id("user_1") == []

    async def test_missing_user_id_raises(self, database, read_session):
        """Test that subscription.paid without metadata.userId fails."""
        with pytest.raises(ValidationError):
            await process_creem_event(
                database, subscription_event(metadata={}), now=NOW
            )

        async with read_session() as session:
            assert await CreditUsageRepository(session).get_by_user_id("user_1") is None


class TestSubscriptionStatusChanges:
    """Recurring subscription.canceled / subscription.expired events."""

    @pytest.mark.parametrize(
        "event_type,expected",
        [
            ("subscription.canceled", UserSubscriptionStatus.CANCELLED),
            ("subscription.expired", UserSubscriptionStatus.EXPIRED),
        ],
    )
    async def test_only_status_changes(
        self,
        database,
        read_session,
        sample_subscription,
        sample_credit_usage,
        sample_payment,
        event_type,
        expected,
    ):
        """Test status is the only field touched."""
        await process_creem_event(database, subscription_event(event_type), now=NOW)

        async with read_session() as session:
            subscription = await UserSubscriptionRepository(session).get(
                sample_subscription.id
            )
            usage = await CreditUsageRepository(session).get_by_user_id("user_1")
            payments = await PaymentHistoryRepository(session).get_by_user_id("user_1")

        assert subscription.status == expected
        assert subscription.subscription_plan_id == 1
        assert subscription.current_period_start == datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert subscription.current_period_end == datetime(2025, 2, 1, tzinfo=timezone.utc)

        assert usage.credit_used == 30
        assert usage.credit_total == 100
        assert [p.id for p in payments] == [sample_payment.id]

    async def test_unknown_subscription_is_noop(
        self, database, read_session, sample_subscription
    ):
        """Test cancelling an unknown Creem subscription changes nothing."""
        await process_creem_event(
            database,
            subscription_event("subscription.canceled", subscription_id="sub_other"),
            now=NOW,
        )

        async with read_session() as session:
            subscription = await UserSubscriptionRepository(session).get(
                sample_subscription.id
            )

        assert subscription.status == UserSubscriptionStatus.ACTIVE

    async def test_updates_every_record_with_subscription_id(
        self, database, read_session, test_db, sample_subscription
    ):
        """Test all local records linked to the Creem subscription are updated."""
        test_db.add(
            UserSubscriptionEntity(
                user_id="user_1",
                subscription_plan_id=1,
                status=UserSubscriptionStatus.ACTIVE.value,
                current_period_start=datetime(2024, 12, 1, tzinfo=timezone.utc),
                current_period_end=datetime(2025, 1, 1, tzinfo=timezone.utc),
                creem_subscription_id="sub_1",
            )
        )
        await test_db.commit()

        await process_creem_event(
            database, subscription_event("subscription.expired"), now=NOW
        )

        async with read_session() as session:
            subscriptions = await UserSubscriptionRepository(
                session
            ).get_by_creem_subscription_id("sub_1")

        assert len(subscriptions) == 2
        assert {s.status for s in subscriptions} == {UserSubscriptionStatus.EXPIRED}

    @pytest.mark.parametrize(
        "event_type",
        [
            "checkout.completed",
            "subscription.active",
            "subscription.update",
            "subscription.trialing",
            "something.new",
        ],
    )
    async def test_other_recurring_events_ignored(
        self, database, read_session, sample_subscription, event_type
    ):
        """Test unhandled recurring events leave the store untouched."""
        await process_creem_event(database, subscription_event(event_type), now=NOW)

        async with read_session() as session:
            subscription = await UserSubscriptionRepository(session).get(
                sample_subscription.id
            )
            usage = await CreditUsageRepository(session).get_by_user_id("user_1")

        assert subscription.status == UserSubscriptionStatus.ACTIVE
        assert subscription.current_period_end == datetime(2025, 2, 1, tzinfo=timezone.utc)
        assert usage is None


def _usage_create(user_id, used, total, end):
    return CreditUsageCreateModel(
        user_id=user_id,
        credit_used=used,
        credit_total=total,
        period_start=datetime(2025, 1, 1, tzinfo=timezone.utc),
        period_end=end,
    )
