"""Revenue share conversion: the dashboard edits percentages, storage keeps fractions."""


def percentage_to_share(percentage: float) -> float:
    if not 0 <= percentage <= 100:
        raise ValueError("Revenue share percentage must be between 0 and 100")
    return percentage / 100


def share_to_percentage(share: float) -> float:
    return round(share * 100, 1)
