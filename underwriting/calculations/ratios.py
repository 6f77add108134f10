"""Zero-guarded ratio helper used by every calculation stage."""


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning 0.0 when the denominator is not positive.

    Unit counts, areas, budgets and revenue are the only denominators in the
    engine, and none of them is meaningful at or below zero. An undefined
    ratio renders as zero rather than raising or producing NaN/Infinity.

    Args:
        numerator: Dividend.
        denominator: Divisor.

    Returns:
        numerator / denominator, or 0.0.
    """
    if denominator > 0:
        return numerator / denominator
    return 0.0
