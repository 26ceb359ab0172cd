"""
api/routes/propensity.py

POST /api/propensity — contact-propensity score for one merchant
"""

from __future__ import annotations

from fastapi import APIRouter

from ...analytics import ContactPropensityScorer
from ...models import MerchantSnapshot
from ..serializers import PropensityResponse

router = APIRouter(prefix="/propensity", tags=["propensity"])

_scorer = ContactPropensityScorer()


@router.post("", response_model=PropensityResponse)
async def score_merchant(snapshot: MerchantSnapshot) -> PropensityResponse:
    return PropensityResponse(**_scorer.score(snapshot).to_dict())
