"""
Plans API routes.

Public endpoints for looking up subscription plans.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from common.db.session import get_db
from packages.billing.models.schemas.plans import PlanResponse
from packages.billing.repositories.subscription_plan_repository import (
    SubscriptionPlanRepository,
)

router = APIRouter()


@router.get("/by-product/{product_id}", response_model=PlanResponse)
async def get_plan_by_product(product_id: str, db: AsyncSession = Depends(get_db)):
    """Get the plan sold through a Creem product."""
    plan = await SubscriptionPlanRepository(db).get_by_creem_product_id(product_id)
    if not plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Plan not found"
        )
    return PlanResponse.from_plan(plan)


@router.get("/{plan_id}", response_model=PlanResponse)
async def get_plan(plan_id: int, db: AsyncSession = Depends(get_db)):
    """
    Get a plan by id.

    This endpoint is public (no auth required) for pricing pages.
    """
    plan = await SubscriptionPlanRepository(db).get(plan_id)
    if not plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Plan not found"
        )
    return PlanResponse.from_plan(plan)
