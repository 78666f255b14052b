"""Weight-change projection from a sustained energy balance."""

from nutricoach.domain.energy import WeightProjection

KCAL_PER_KG_ADIPOSE = 7700
UNCERTAINTY_BAND = 0.1
WEEKS_PER_MONTH = 4.33


def project_weight_change(daily_kcal: float | None) -> WeightProjection:
    """Project weekly and monthly change for a daily deficit (<0) or surplus (>0).

    The weekly estimate carries a fixed +/-10% band for metabolic adaptation.
    A zero balance yields a neutral all-zero projection.
    """
    if not daily_kcal:
        return WeightProjection(
            weekly_min=0.0,
            weekly_max=0.0,
            weekly_avg=0.0,
            monthly_estimate=0.0,
            direction="neutral",
        )
    weekly = abs(daily_kcal) * 7 / KCAL_PER_KG_ADIPOSE
    variation = weekly * UNCERTAINTY_BAND
    return WeightProjection(
        weekly_min=max(0.0, weekly - variation),
        weekly_max=weekly + variation,
        weekly_avg=weekly,
        monthly_estimate=weekly * WEEKS_PER_MONTH,
        direction="loss" if daily_kcal < 0 else "gain",
    )
