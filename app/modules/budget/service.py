import logging
from datetime import date, datetime, timezone
from supabase import Client
from app.modules.budget.schemas import (
    BudgetCreate, BudgetUpdate, BudgetResponse, TransactionCreate, TransactionResponse,
    BudgetSummary, BudgetOverview
)
from typing import Any, Dict, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

BILL = "bill"
CONTRIBUTION = "contribution"
_TYPE_ALIASES = {"expense": BILL}


def normalize_transaction_type(row: Dict[str, Any]) -> Optional[str]:
    """Read a transaction's type from type or the legacy transaction_type column; expense counts as bill"""
    raw = row.get("type") or row.get("transaction_type")
    if not raw:
        return None
    raw = str(raw).strip().lower()
    return _TYPE_ALIASES.get(raw, raw)


def compute_summary(budget: Optional[BudgetResponse], transactions: List[Dict[str, Any]]) -> BudgetSummary:
    """
    remaining = total_amount - sum(bills) + sum(contributions)

    All household transactions count, whatever their date. Without an active
    budget remaining is 0.
    """
    total_bills = 0.0
    total_contributions = 0.0
    for tx in transactions:
        tx_type = normalize_transaction_type(tx)
        amount = float(tx.get("amount") or 0)
        if tx_type == BILL:
            total_bills += amount
        elif tx_type == CONTRIBUTION:
            total_contributions += amount
    remaining = budget.total_amount - total_bills + total_contributions if budget else 0.0
    return BudgetSummary(
        total_bills=round(total_bills, 2),
        total_contributions=round(total_contributions, 2),
        remaining=round(remaining, 2)
    )


class BudgetService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_budgets(self, household_id: str) -> List[BudgetResponse]:
        """List budgets, latest period first"""
        try:
            result = self.supabase.table("budgets")\
                .select("*")\
                .eq("household_id", household_id)\
                .order("start_date", desc=True)\
                .execute()
            return [BudgetResponse(**b) for b in (result.data or [])]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_active_budget(self, household_id: str, today: Optional[date] = None) -> Optional[BudgetResponse]:
        """Budget whose period contains today; the latest-starting one wins if periods overlap"""
        today = today or date.today()
        try:
            result = self.supabase.table("budgets")\
                .select("*")\
                .eq("household_id", household_id)\
                .lte("start_date", today.isoformat())\
                .gte("end_date", today.isoformat())\
                .order("start_date", desc=True)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching active budget: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            return None
        return BudgetResponse(**result.data[0])

    def _get_budget(self, household_id: str, budget_id: str) -> BudgetResponse:
        try:
            result = self.supabase.table("budgets")\
                .select("*")\
                .eq("id", budget_id)\
                .eq("household_id", household_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=404, detail="Budget not found")
        return BudgetResponse(**result.data[0])

    def create_budget(self, household_id: str, user_id: str, budget_data: BudgetCreate) -> BudgetResponse:
        """Create a budget period"""
        try:
            result = self.supabase.table("budgets").insert({
                "household_id": household_id,
                "name": budget_data.name.strip(),
                "start_date": budget_data.start_date.isoformat(),
                "end_date": budget_data.end_date.isoformat(),
                "total_amount": budget_data.total_amount,
                "created_by": user_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create budget")

            logger.info("Budget %s created for household %s", result.data[0]["id"], household_id)
            return BudgetResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating budget: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_budget(self, household_id: str, budget_id: str, budget_data: BudgetUpdate) -> BudgetResponse:
        """Update a budget period; the merged row must still be valid"""
        current = self._get_budget(household_id, budget_id)
        update_data = budget_data.model_dump(exclude_unset=True, exclude_none=True)

        name = update_data.get("name", current.name).strip()
        start_date = update_data.get("start_date", current.start_date)
        end_date = update_data.get("end_date", current.end_date)
        if not name:
            raise HTTPException(status_code=400, detail="Budget name is required")
        if end_date < start_date:
            raise HTTPException(status_code=400, detail="end_date must be on or after start_date")

        update_data["name"] = name
        update_data["start_date"] = start_date.isoformat()
        update_data["end_date"] = end_date.isoformat()
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        try:
            result = self.supabase.table("budgets")\
                .update(update_data)\
                .eq("id", budget_id)\
                .eq("household_id", household_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Budget not found")

            return BudgetResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating budget {budget_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def _transaction_rows(self, household_id: str) -> List[Dict[str, Any]]:
        try:
            result = self.supabase.table("transactions")\
                .select("*")\
                .eq("household_id", household_id)\
                .order("created_at", desc=True)\
                .execute()
            return result.data or []
        except Exception as e:
            logger.error(f"Error fetching transactions: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    @staticmethod
    def _to_transaction(row: Dict[str, Any]) -> TransactionResponse:
        data = dict(row)
        data["type"] = normalize_transaction_type(row)
        data.pop("transaction_type", None)
        return TransactionResponse(**data)

    def list_transactions(self, household_id: str) -> List[TransactionResponse]:
        """List household transactions, newest first"""
        return [self._to_transaction(row) for row in self._transaction_rows(household_id)]

    def add_transaction(self, household_id: str, user_id: str, tx_data: TransactionCreate) -> TransactionResponse:
        """Record a bill or contribution"""
        try:
            result = self.supabase.table("transactions").insert({
                "household_id": household_id,
                "type": normalize_transaction_type({"type": tx_data.type}),
                "amount": tx_data.amount,
                "description": tx_data.description,
                "created_by": user_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add transaction")

            return self._to_transaction(result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error adding transaction: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def overview(self, household_id: str, today: Optional[date] = None) -> BudgetOverview:
        """Active budget, transactions and remaining balance"""
        budget = self.get_active_budget(household_id, today)
        rows = self._transaction_rows(household_id)
        return BudgetOverview(
            active_budget=budget,
            transactions=[self._to_transaction(row) for row in rows],
            summary=compute_summary(budget, rows)
        )
