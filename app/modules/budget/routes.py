from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.budget.schemas import (
    BudgetCreate, BudgetUpdate, BudgetResponse, TransactionCreate, TransactionResponse,
    BudgetOverview
)
from app.modules.budget.service import BudgetService
from app.modules.households.schemas import MembershipResponse
from app.core.dependencies import require_household_action
from supabase import Client
from typing import List

router = APIRouter(prefix="/budget", tags=["budget"])


def get_budget_service(supabase: Client = Depends(get_supabase)) -> BudgetService:
    return BudgetService(supabase)


@router.get("", response_model=BudgetOverview)
async def get_overview(
    membership: MembershipResponse = Depends(require_household_action("budgets:read")),
    service: BudgetService = Depends(get_budget_service)
):
    """Active budget, transactions and remaining balance"""
    return service.overview(membership.household_id)


@router.get("/budgets", response_model=List[BudgetResponse])
async def list_budgets(
    membership: MembershipResponse = Depends(require_household_action("budgets:read")),
    service: BudgetService = Depends(get_budget_service)
):
    """List all budget periods"""
    return service.list_budgets(membership.household_id)


@router.post("/budgets", response_model=BudgetResponse, status_code=201)
async def create_budget(
    budget_data: BudgetCreate,
    membership: MembershipResponse = Depends(require_household_action("budgets:create")),
    service: BudgetService = Depends(get_budget_service)
):
    """Set a household budget (owner only)"""
    return service.create_budget(membership.household_id, membership.user_id, budget_data)


@router.put("/budgets/{budget_id}", response_model=BudgetResponse)
async def update_budget(
    budget_id: str,
    budget_data: BudgetUpdate,
    membership: MembershipResponse = Depends(require_household_action("budgets:update")),
    service: BudgetService = Depends(get_budget_service)
):
    """Update a budget (owner only)"""
    return service.update_budget(membership.household_id, budget_id, budget_data)


@router.get("/transactions", response_model=List[TransactionResponse])
async def list_transactions(
    membership: MembershipResponse = Depends(require_household_action("transactions:read")),
    service: BudgetService = Depends(get_budget_service)
):
    return service.list_transactions(membership.household_id)


@router.post("/transactions", response_model=TransactionResponse, status_code=201)
async def add_transaction(
    tx_data: TransactionCreate,
    membership: MembershipResponse = Depends(require_household_action("transactions:create")),
    service: BudgetService = Depends(get_budget_service)
):
    """Add a bill or contribution (any member)"""
    return service.add_transaction(membership.household_id, membership.user_id, tx_data)
