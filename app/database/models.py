from dataclasses import dataclass
from datetime import datetime


@dataclass
class EsgResponseRecord:
    """Represents a row from the esg_responses table (one per user and year)."""

    id: int
    user_id: str
    year: int
    total_electricity_consumption: float | None = None
    renewable_electricity_consumption: float | None = None
    total_fuel_consumption: float | None = None
    carbon_emissions: float | None = None
    total_employees: int | None = None
    female_employees: int | None = None
    avg_training_hours: float | None = None
    community_investment_spend: float | None = None
    independent_board_members_percent: float | None = None
    has_data_privacy_policy: bool | None = None
    total_revenue: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
