from dispatch_analytics.models.custom_models import FirmConfiguration
from dispatch_analytics.tools.firm_configuration import FirmRegistry, get_firm_registry

UNKNOWN_FIRM = "Unknown"


def normalize_firm_name(firm_name: str | None, registry: FirmRegistry | None = None) -> str:
    """
    Map a free-text firm name onto its canonical spelling.

    Canonical names map to themselves, so normalizing twice is the same as
    normalizing once. Names no rule recognises are returned unchanged.

    Params:
        firm_name: Raw firm name from a claim.
        registry: Firm registry to use. Defaults to the packaged configuration.

    Returns:
        str: Canonical firm name, the input unchanged, or "Unknown" for blank input.
    """
    if firm_name is None:
        return UNKNOWN_FIRM

    upper_name = firm_name.upper().strip()
    if not upper_name:
        return UNKNOWN_FIRM

    registry = registry or get_firm_registry()

    canonical = registry.canonical_name(upper_name)
    if canonical is not None:
        return canonical

    for rule in registry.normalization_rules:
        if rule.matches(upper_name):
            return rule.canonical_name

    return firm_name


def get_firm_configuration(
    firm_name: str | None, registry: FirmRegistry | None = None
) -> FirmConfiguration | None:
    registry = registry or get_firm_registry()
    return registry.get_firm(normalize_firm_name(firm_name, registry))


def is_recurring_firm(firm_name: str | None, registry: FirmRegistry | None = None) -> bool:
    """True for configured firms that pay on a regular schedule."""
    firm = get_firm_configuration(firm_name, registry)
    return firm is not None and firm.is_recurring


def calculate_expected_payout(
    firm_name: str | None,
    pay_amount: float | None = None,
    registry: FirmRegistry | None = None,
) -> float:
    """
    Amount expected for a claim that has not been invoiced yet.

    Uses the agreed pay when set, otherwise the firm's base fee.
    """
    if pay_amount is not None and pay_amount > 0:
        return pay_amount
    firm = get_firm_configuration(firm_name, registry)
    if firm is None:
        return 0.0
    return firm.base_fee
