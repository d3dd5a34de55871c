from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Literal
from datetime import date, datetime


class BudgetCreate(BaseModel):
    name: str
    start_date: date
    end_date: date
    total_amount: float = Field(ge=0)

    @model_validator(mode="after")
    def check_period(self):
        if not self.name.strip():
            raise ValueError("Budget name is required")
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class BudgetUpdate(BaseModel):
    name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total_amount: Optional[float] = Field(default=None, ge=0)


class BudgetResponse(BaseModel):
    id: str
    household_id: str
    name: str
    start_date: date
    end_date: date
    total_amount: float
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TransactionCreate(BaseModel):
    type: Literal["bill", "contribution", "expense"] = "bill"  # expense is stored as bill
    amount: float = Field(gt=0)
    description: Optional[str] = None


class TransactionResponse(BaseModel):
    id: str
    household_id: str
    type: Optional[str] = None
    amount: float
    description: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BudgetSummary(BaseModel):
    total_bills: float
    total_contributions: float
    remaining: float


class BudgetOverview(BaseModel):
    active_budget: Optional[BudgetResponse] = None
    transactions: List[TransactionResponse]
    summary: BudgetSummary
