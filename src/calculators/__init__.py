from calculators.budget import split  # noqa: F401
from calculators.goals import feasibility  # noqa: F401
from calculators.investments import asset_allocation, sip, wealth_projection  # noqa: F401
from calculators.loans import debt_payoff, emi  # noqa: F401
from calculators.tax import income_tax  # noqa: F401
