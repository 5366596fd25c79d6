from __future__ import annotations

import logging

from domain.models import AdviceCategory
from domain.schemas import Profile
from finance.investments import investable_surplus
from finance.numeric import round_currency
from finance.tax import SECTION_80C_LIMIT

logger = logging.getLogger(__name__)

# Checked in order; the first category with a matching keyword wins.
CATEGORY_KEYWORDS: tuple[tuple[AdviceCategory, tuple[str, ...]], ...] = (
    (AdviceCategory.SAVINGS, ("save", "saving")),
    (AdviceCategory.INVESTMENT, ("invest", "investment", "sip")),
    (AdviceCategory.INSURANCE, ("insurance", "cover")),
    (AdviceCategory.TAX, ("tax", "deduction")),
)

EQUITY_SHARE_BY_RISK = {
    "low": "30-40%",
    "medium": "50-60%",
    "high": "70-80%",
}

LIFE_COVER_MULTIPLE = 10

DEFAULT_RESPONSE = (
    "I'm here to help with your financial planning! Based on your profile, I can provide personalized "
    "advice on budgeting, investments, tax planning, and more. What specific area would you like to discuss?"
)

MISSING_PROFILE_RESPONSE = (
    "I need a few details about your finances before I can answer that. Complete your profile with your "
    "income, expenses and goals, then ask again."
)


def _money(value: float) -> str:
    return f"₹{round_currency(value):,}"


def classify_query(text: str) -> AdviceCategory:
    lowered = text.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return AdviceCategory.DEFAULT


def _savings_advice(profile: Profile) -> str:
    return (
        f"Based on your monthly income of {_money(profile.income)}, I recommend following the 50/30/20 rule. "
        f"You should aim to save at least 20% of your income, which would be {_money(profile.income * 0.2)} "
        f"per month. Given your current expenses of {_money(profile.expenses)}, you have a surplus of "
        f"{_money(profile.income - profile.expenses)} monthly that can be allocated to savings and investments."
    )


def _investment_advice(profile: Profile) -> str:
    risk = profile.risk_tolerance
    sip = investable_surplus(profile.income, profile.expenses) * 0.7
    return (
        f"Given your {risk} risk tolerance and age of {profile.age}, I suggest a diversified portfolio. "
        f"For someone with {risk} risk appetite, consider allocating {EQUITY_SHARE_BY_RISK[risk]} to equity "
        f"mutual funds and the rest to debt instruments. Start with SIP investments of {_money(sip)} monthly "
        f"in diversified equity funds."
    )


def _insurance_advice(profile: Profile) -> str:
    return (
        f"Based on your income and {profile.dependents} dependents, you should have life insurance coverage of "
        f"{_money(profile.income * 12 * LIFE_COVER_MULTIPLE)} (10-12 times your annual income). For health "
        f"insurance, ensure you have coverage of at least ₹5-10 lakhs for yourself and family. Given your age "
        f"of {profile.age}, term insurance premiums would be quite affordable."
    )


def _tax_advice(profile: Profile) -> str:
    claimed_80c = profile.deductions.get("80C", 0.0)
    headroom = max(0.0, SECTION_80C_LIMIT - claimed_80c)
    return (
        f"Looking at your income of {_money(profile.income)} monthly, you can save significant tax by maximizing "
        f"deductions. You're currently using {_money(claimed_80c)} under 80C - you can invest up to "
        f"{_money(headroom)} more. Consider ELSS mutual funds for dual benefit of tax saving and wealth creation. "
        f"Also, ensure you're claiming HRA if you pay rent, and consider NPS for additional ₹50K deduction "
        f"under 80CCD(1B)."
    )


_TEMPLATES = {
    AdviceCategory.SAVINGS: _savings_advice,
    AdviceCategory.INVESTMENT: _investment_advice,
    AdviceCategory.INSURANCE: _insurance_advice,
    AdviceCategory.TAX: _tax_advice,
}


def generate_response(profile: Profile | None, text: str) -> str:
    """Canned advisor reply for `text`, filled in from `profile`."""
    category = classify_query(text)
    logger.info("Advisor category=%s profile=%s", category.value, profile is not None)
    if category is AdviceCategory.DEFAULT:
        return DEFAULT_RESPONSE
    if profile is None:
        return MISSING_PROFILE_RESPONSE
    return _TEMPLATES[category](profile)
