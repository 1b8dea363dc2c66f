# ABOUTME: Cloud layer altitude correction and first-versus-last trend classification.
# ABOUTME: Turns raw Open-Meteo low/mid/high/total cloud cover into report-ready values.

from collections.abc import Sequence

from src.models import CloudLayerReading, CloudLayerSnapshot, CloudLayerTrendResult

# Percentage points of low cloud discounted per 100 m of site altitude
LOW_CLOUD_CORRECTION_PER_100M = 0.015

# Changes of this many percentage points or fewer count as stable
TREND_TOLERANCE_PCT = 5

CLOUD_HEIGHT_EXPLANATION = """\
Cloud layer heights are measured from sea level:
- Low cloud: 0-2000 m (stratocumulus, stratus, cumulus)
- Mid cloud: 2000-6000 m (altostratus, altocumulus)
- High cloud: above 6000 m (cirrus, cirrostratus, cirrocumulus)

Actual heights relative to the ground depend on the site's altitude. The higher the site,
the closer to the ground each cloud type appears."""


def normalize_cloud_layers(reading: CloudLayerReading, altitude_meters: int = 0) -> CloudLayerSnapshot:
    """Apply the site altitude correction to low cloud cover.

    A high site sits inside what sea-level observation calls low cloud, so the nominal
    figure is discounted by elevation. Mid, high, and total cover pass through unchanged.
    """
    correction = altitude_meters / 100 * LOW_CLOUD_CORRECTION_PER_100M
    return CloudLayerSnapshot(
        low_cloud_pct=max(0.0, min(100.0, reading.low_cloud - correction)),
        mid_cloud_pct=reading.mid_cloud,
        high_cloud_pct=reading.high_cloud,
        total_cloud_pct=reading.total_cloud,
        altitude_meters=altitude_meters,
    )


def _trend(first: float, last: float) -> str:
    diff = last - first
    if abs(diff) <= TREND_TOLERANCE_PCT:
        return "stable"
    return "increasing" if diff > 0 else "decreasing"


def analyze_cloud_trend(readings: Sequence[CloudLayerReading]) -> CloudLayerTrendResult:
    """Classify each layer as increasing, decreasing, or stable across an ordered series.

    Only the first and last readings are compared; intermediate readings are ignored.
    A single reading (or none) is stable for every layer.
    """
    if len(readings) < 2:
        return CloudLayerTrendResult(
            low_cloud_trend="stable",
            mid_cloud_trend="stable",
            high_cloud_trend="stable",
            total_cloud_trend="stable",
        )

    first, last = readings[0], readings[-1]
    return CloudLayerTrendResult(
        low_cloud_trend=_trend(first.low_cloud, last.low_cloud),
        mid_cloud_trend=_trend(first.mid_cloud, last.mid_cloud),
        high_cloud_trend=_trend(first.high_cloud, last.high_cloud),
        total_cloud_trend=_trend(first.total_cloud, last.total_cloud),
    )
