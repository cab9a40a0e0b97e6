from typing import Dict, List
from pydantic import BaseModel


class AdminStats(BaseModel):
    total_organizations: int
    total_users: int
    active_users: int
    monthly_revenue: float  # list-price MRR, dollars
    revenue_this_month: float  # completed transactions, dollars
    total_transactions: int
    plan_distribution: Dict[str, int]


class MonthlyRevenue(BaseModel):
    month: str  # YYYY-MM
    revenue: float
    transactions: int


class PlanRevenue(BaseModel):
    plan: str
    revenue: float
    transactions: int


class TopCustomer(BaseModel):
    organization_id: str
    name: str
    plan: str
    revenue: float
    transactions: int


class RevenueAnalytics(BaseModel):
    monthly_trend: List[MonthlyRevenue]
    plan_revenue: List[PlanRevenue]
    top_customers: List[TopCustomer]
