"""Agent management and decision endpoints."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from los.core.exceptions import (
    ConflictError,
    InvalidStateError,
    NotAuthorizedError,
    NotFoundError,
)
from los.deps import get_notification_dispatcher, get_session
from los.models.schemas.agent import AgentCreate, AgentResponse
from los.models.schemas.loan import AgentDecisionRequest, DecisionResponse, LoanResponse
from los.services.agent_service import AgentService
from los.services.decision_service import DecisionService
from los.services.notifications import NotificationDispatcher

logger = logging.getLogger(__name__)

router = APIRouter()


# ==================== Agent Endpoints ====================


@router.post(
    "",
    response_model=AgentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new agent",
)
async def create_agent(
    agent_data: AgentCreate,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> AgentResponse:
    """
    Create a new agent.

    Agent ID and email must be unique.
    """
    try:
        service = AgentService(db)
        agent = await service.create_agent(
            agent_id=agent_data.agent_id,
            name=agent_data.name,
            email=agent_data.email,
            phone=agent_data.phone,
            max_loan_amount=agent_data.max_loan_amount,
            specializations=agent_data.specializations,
            manager_id=agent_data.manager_id,
        )
        return AgentResponse.model_validate(agent)

    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        logger.error(f"Validation error creating agent: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception as e:
        logger.error(f"Error creating agent: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create agent",
        )


@router.get(
    "",
    response_model=list[AgentResponse],
    summary="List active agents",
)
async def list_active_agents(
    db: Annotated[AsyncSession, Depends(get_session)],
) -> list[AgentResponse]:
    """
    List all ACTIVE agents ordered by agent ID.
    """
    service = AgentService(db)
    agents = await service.get_active_agents()
    return [AgentResponse.model_validate(agent) for agent in agents]


@router.get(
    "/by-agent-id/{agent_id}",
    response_model=AgentResponse,
    summary="Get agent by agent ID",
)
async def get_agent_by_agent_id(
    agent_id: str,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> AgentResponse:
    """
    Retrieve an agent by external agent ID.
    """
    service = AgentService(db)
    agent = await service.get_agent_by_agent_id(agent_id)

    if not agent:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Agent {agent_id} not found",
        )

    return AgentResponse.model_validate(agent)


@router.get(
    "/{id}",
    response_model=AgentResponse,
    summary="Get agent by ID",
)
async def get_agent(
    id: UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> AgentResponse:
    """
    Retrieve an agent by surrogate ID.
    """
    service = AgentService(db)
    agent = await service.get_agent(id)

    if not agent:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Agent with ID {id} not found",
        )

    return AgentResponse.model_validate(agent)


@router.get(
    "/{id}/loans",
    response_model=list[LoanResponse],
    summary="List loans assigned to an agent",
)
async def get_assigned_loans(
    id: UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
) -> list[LoanResponse]:
    """
    List the loans assigned to an agent, newest first.
    """
    try:
        service = AgentService(db)
        loans = await service.get_assigned_loans(id)
        return [LoanResponse.model_validate(loan) for loan in loans]
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# ==================== Decision Endpoints ====================


@router.put(
    "/{agent_id}/loans/{loan_id}/decision",
    response_model=DecisionResponse,
    summary="Decide a loan under review",
    description="Approve or reject a loan assigned to the agent",
)
async def decide_loan(
    agent_id: UUID,
    loan_id: str,
    decision_data: AgentDecisionRequest,
    db: Annotated[AsyncSession, Depends(get_session)],
    notifier: Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)],
) -> DecisionResponse:
    """
    Apply an agent's decision to a loan.

    Only the assigned agent may decide, and only while the loan is UNDER_REVIEW.
    """
    try:
        service = DecisionService(db, notifier)
        loan = await service.apply_decision(
            agent_id=agent_id,
            loan_id=loan_id,
            decision=decision_data.decision,
            reason=decision_data.reason,
        )
        return DecisionResponse(
            loan=LoanResponse.model_validate(loan),
            message=f"Loan {loan.loan_id} {loan.status.display_name.lower()}",
        )

    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NotAuthorizedError as e:
        logger.warning(f"Rejected decision on loan {loan_id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except InvalidStateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except Exception as e:
        logger.error(f"Error deciding loan {loan_id}: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to apply decision",
        )
