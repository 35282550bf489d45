"""
Access Routes Module
====================

Endpoints exposing the access policy engine to the host UI.

Features:
- Evaluate a navigation against an explicit requirement
- Evaluate a navigation through the route table
- Evaluate public-only pages (login, register)
"""

from fastapi import APIRouter, Depends

from devtogether.core.logging import get_logger
from devtogether.schemas import (
    AccessEvaluationRequest,
    ErrorResponse,
    PublicEvaluationRequest,
    VerdictResponse,
)
from devtogether.services.access_policy import AccessPolicyEngine, get_access_policy

# Initialize logger
logger = get_logger(__name__)


# =====================================
# Router Setup
# =====================================

router = APIRouter(
    prefix="/access",
    tags=["Access"],
    responses={
        422: {"model": ErrorResponse, "description": "Validation error"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)


# =====================================
# Evaluation Endpoints
# =====================================

@router.post(
    "/evaluate",
    response_model=VerdictResponse,
    summary="Evaluate Route Access",
    description=(
        "Decide whether the session may view a path. Uses the given "
        "requirement, or the route table when none is given."
    ),
)
def evaluate_access(
    payload: AccessEvaluationRequest,
    engine: AccessPolicyEngine = Depends(get_access_policy),
) -> VerdictResponse:
    """
    Evaluate a navigation.

    Args:
        payload: Path, session facts and optional requirement
        engine: Access policy engine

    Returns:
        Verdict for the navigation
    """
    if payload.requirement is None:
        verdict = engine.evaluate_path(payload.session, payload.path)
    else:
        verdict = engine.evaluate(payload.requirement, payload.session, payload.path)

    return VerdictResponse.from_verdict(verdict)


@router.post(
    "/public",
    response_model=VerdictResponse,
    summary="Evaluate Public Page",
    description="Decide whether a signed-out-only page should be shown.",
)
def evaluate_public_access(
    payload: PublicEvaluationRequest,
    engine: AccessPolicyEngine = Depends(get_access_policy),
) -> VerdictResponse:
    verdict = engine.evaluate_public(payload.session, payload.default_redirect)
    return VerdictResponse.from_verdict(verdict)
